import json
from http import HTTPStatus

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from bloxclient.config import get_settings
from bloxclient.http_client import HttpClient


# --- Canned API responses ---

ROBLOSECURITY_VALUE = "_|WARNING:-DO-NOT-SHARE-THIS.--Sharing-this-will-allow-someone-to-log-in-as-you|_ABC123"
ROBLOSECURITY = f".ROBLOSECURITY={ROBLOSECURITY_VALUE}"
CSRF_TOKEN = "d3f4ult+csrf"

USER_API = {
    "description": "Welcome to the Roblox profile!",
    "created": "2006-02-27T21:06:40.3Z",
    "isBanned": False,
    "externalAppDisplayName": None,
    "hasVerifiedBadge": True,
    "id": 1,
    "name": "Roblox",
    "displayName": "Roblox",
}

PARTIAL_USER_API = {"id": 156, "name": "builderman", "displayName": "builderman"}

USERS_DATA_API = {
    "data": [
        {"id": 1, "name": "Roblox", "displayName": "Roblox"},
        {"id": 156, "name": "builderman", "displayName": "builderman"},
    ],
}

USERNAMES_DATA_API = {
    "data": [
        {"requestedUsername": "roblox", "hasVerifiedBadge": True, "id": 1, "name": "Roblox", "displayName": "Roblox"},
    ],
}

USERNAME_HISTORY_API = {
    "previousPageCursor": None,
    "nextPageCursor": None,
    "data": [{"name": "OldName"}, {"name": "OlderName"}],
}

INVALID_USER_ERRORS = {
    "errors": [
        {"code": 3, "message": "The user id is invalid.", "userFacingMessage": "Something went wrong"},
        {"code": 0, "message": "Secondary failure", "userFacingMessage": "Something went wrong"},
    ],
}


def make_response(status: int = 200, body=None, headers: dict | None = None) -> requests.Response:
    """Build a requests.Response without touching the network.

    body may be a JSON-serializable object, raw bytes, or None for an empty body.
    """
    resp = requests.Response()
    resp.status_code = status
    resp.reason = HTTPStatus(status).phrase
    resp.headers = CaseInsensitiveDict(headers or {})
    resp.encoding = "utf-8"
    if body is None:
        resp._content = b""
    elif isinstance(body, bytes):
        resp._content = body
    else:
        resp._content = json.dumps(body).encode()
    return resp


def sent_request(mock_send, index: int = -1) -> requests.PreparedRequest:
    """Return the PreparedRequest passed to the patched Session.send."""
    return mock_send.call_args_list[index].args[0]


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mock_send(mocker):
    """Patch requests.Session.send for every session; returns the mock."""
    return mocker.patch.object(requests.Session, "send")


@pytest.fixture
def http():
    return HttpClient(auth_host="auth.roblox.com", timeout=5)


@pytest.fixture
def authenticated_http(http, mock_send):
    mock_send.return_value = make_response(403, INVALID_USER_ERRORS, headers={"x-csrf-token": CSRF_TOKEN})
    http.authenticate(ROBLOSECURITY)
    mock_send.reset_mock(return_value=True)
    return http
