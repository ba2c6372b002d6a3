"""Roblox HTTP client: authenticated session state and request dispatch.

The session lives in an immutable SessionState snapshot. authenticate() and
deauthenticate() build a complete replacement and swap it in under a lock, so a
concurrent request sees either the old or the new configuration, never a mix of
the two. The lock is held for the swap only, not for the network round trip.

There is no retry or backoff: every failure reaches the caller as an exception
from bloxclient.exceptions.
"""

import logging
import re
import threading
from dataclasses import dataclass, field
from functools import lru_cache
from http.cookiejar import DefaultCookiePolicy
from types import MappingProxyType
from typing import Mapping, TypeVar

import requests
from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError

from bloxclient.config import get_settings
from bloxclient.exceptions import (
    ApiError,
    DecodeError,
    HttpStatusError,
    IntegrationError,
    InvalidCredentialError,
    MissingCsrfTokenError,
    NetworkError,
)
from bloxclient.models.common import ApiErrorEnvelope

logger = logging.getLogger(__name__)

T = TypeVar("T")

COOKIE_HEADER = "Cookie"
CSRF_HEADER = "X-CSRF-TOKEN"
LOGOUT_PATH = "/v2/logout"
COOKIE_DOMAIN = ".roblox.com"


class _RejectAllCookies(DefaultCookiePolicy):
    """Cookie policy for anonymous sessions: nothing is stored or sent."""

    def set_ok(self, cookie, request):
        return False

    def return_ok(self, cookie, request):
        return False


def _parse_cookie_header(value: str) -> dict[str, str]:
    cookies = {}
    for part in value.split(";"):
        match = re.match(r"([^=]+)=(.*)", part.strip())
        if match:
            cookies[match.group(1).strip()] = match.group(2).strip()
    return cookies


def _build_transport(
    headers: Mapping[str, str], persist_cookies: bool, cookie_domain: str
) -> requests.Session:
    session = requests.Session()
    session.headers.update(headers)
    if not persist_cookies:
        session.cookies.set_policy(_RejectAllCookies())
        return session

    # requests drops the Cookie header on redirect and rebuilds it from the jar
    for name, value in _parse_cookie_header(headers.get(COOKIE_HEADER, "")).items():
        session.cookies.set(name, value, domain=cookie_domain, path="/")
    return session


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


@dataclass(frozen=True)
class SessionState:
    """One coherent transport configuration. Replaced wholesale, never mutated."""

    default_headers: Mapping[str, str] = field(default_factory=dict)
    persist_cookies: bool = False
    cookie_domain: str = COOKIE_DOMAIN
    transport: requests.Session = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "default_headers", MappingProxyType(dict(self.default_headers)))
        object.__setattr__(
            self,
            "transport",
            _build_transport(self.default_headers, self.persist_cookies, self.cookie_domain),
        )

    @classmethod
    def anonymous(cls) -> "SessionState":
        return cls()

    @classmethod
    def authenticated(
        cls, cookie: str, csrf_token: str, cookie_domain: str = COOKIE_DOMAIN
    ) -> "SessionState":
        return cls(
            default_headers={COOKIE_HEADER: cookie, CSRF_HEADER: csrf_token},
            persist_cookies=True,
            cookie_domain=cookie_domain,
        )

    @property
    def is_authenticated(self) -> bool:
        return COOKIE_HEADER in self.default_headers


class HttpRequest(BaseModel):
    """A logical request. endpoint is host + path, without the scheme."""

    model_config = ConfigDict(frozen=True)

    method: str
    endpoint: str
    headers: dict[str, str] | None = None
    body: str | bytes | None = None


@lru_cache(maxsize=None)
def _adapter(response_type) -> TypeAdapter:
    return TypeAdapter(response_type)


def _decode(response_type: type[T], content: bytes) -> T:
    try:
        return _adapter(response_type).validate_json(content)
    except ValidationError as e:
        raise DecodeError(str(e)) from e


def _error_from_response(resp: requests.Response) -> IntegrationError:
    """Map a non-2xx response to ApiError (first envelope entry) or HttpStatusError."""
    try:
        envelope = ApiErrorEnvelope.model_validate_json(resp.content)
    except ValidationError:
        envelope = None

    if envelope and envelope.errors:
        first = envelope.errors[0]
        return ApiError(first.message, code=first.code, status=resp.status_code)

    status_text = f"{resp.status_code} {resp.reason or ''}".strip()
    return HttpStatusError(status_text, status=resp.status_code)


class HttpClient:
    """Shared Roblox HTTP client.

    Build one per application and pass it to every service that talks to
    Roblox. Safe to use from multiple threads.
    """

    def __init__(
        self,
        auth_host: str | None = None,
        timeout: float | None = None,
        cookie_domain: str | None = None,
    ):
        settings = get_settings()
        self.auth_host = auth_host or settings.auth_host
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self.cookie_domain = cookie_domain or settings.cookie_domain
        self._lock = threading.Lock()
        self._state = SessionState.anonymous()

    @property
    def state(self) -> SessionState:
        with self._lock:
            return self._state

    @property
    def is_authenticated(self) -> bool:
        return self.state.is_authenticated

    def _swap(self, state: SessionState) -> None:
        with self._lock:
            previous, self._state = self._state, state
        # in-flight requests on the old transport still complete
        previous.transport.close()

    def authenticate(self, raw_cookie: str) -> None:
        """Derive a CSRF token for raw_cookie and switch to an authenticated session.

        Roblox hands out a fresh x-csrf-token on POST /v2/logout even when it
        refuses the logout itself with 403, so both 2xx and 403 are accepted
        from this probe. On failure the current session is left untouched.
        """
        if not raw_cookie:
            raise InvalidCredentialError("Session cookie is empty")

        url = f"https://{self.auth_host}{LOGOUT_PATH}"
        try:
            with requests.Session() as probe:
                resp = probe.post(
                    url,
                    data="",
                    headers={COOKIE_HEADER: raw_cookie},
                    timeout=self.timeout,
                )
        except requests.RequestException as e:
            raise NetworkError(str(e)) from e

        if not _is_success(resp.status_code) and resp.status_code != 403:
            logger.warning("Session cookie rejected by logout probe (HTTP %s)", resp.status_code)
            raise InvalidCredentialError(
                f"Roblox rejected the session cookie (HTTP {resp.status_code})"
            )

        csrf_token = resp.headers.get("x-csrf-token")
        if not csrf_token:
            raise MissingCsrfTokenError("Failed to fetch X-CSRF-TOKEN from the logout probe")

        self._swap(SessionState.authenticated(raw_cookie, csrf_token, self.cookie_domain))
        logger.info("Roblox session authenticated")

    def deauthenticate(self) -> None:
        """Drop the session cookie and CSRF token. No network call."""
        self._swap(SessionState.anonymous())
        logger.info("Roblox session reset to anonymous")

    def request(self, req: HttpRequest, response_type: type[T]) -> T:
        """Send req over the current session and decode a 2xx body as response_type.

        Raises NetworkError, DecodeError, ApiError or HttpStatusError.
        Headers in req override session defaults with the same name.
        """
        state = self.state
        url = f"https://{req.endpoint}"
        logger.debug("%s %s", req.method, url)

        try:
            resp = state.transport.request(
                req.method,
                url,
                headers=req.headers,
                data=req.body or "",
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise NetworkError(str(e)) from e

        if _is_success(resp.status_code):
            return _decode(response_type, resp.content)

        error = _error_from_response(resp)
        logger.debug("%s %s failed: %s", req.method, url, error)
        raise error
