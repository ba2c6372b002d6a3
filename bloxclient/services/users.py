from urllib.parse import urlencode

from bloxclient.config import get_settings
from bloxclient.http_client import HttpClient, HttpRequest
from bloxclient.models.common import DataResponse
from bloxclient.models.users import (
    FetchManyRequest,
    FindManyRequest,
    PartialUser,
    User,
    UserId,
    UsernameHistoryEntry,
)

JSON_HEADERS = {"Content-Type": "application/json"}


class UsersService:
    """Roblox users endpoints (users.roblox.com and the legacy api.roblox.com lookup)."""

    def __init__(self, http: HttpClient, users_host: str | None = None, api_host: str | None = None):
        settings = get_settings()
        self.http = http
        self.users_host = users_host or settings.users_host
        self.api_host = api_host or settings.api_host

    def _get(self, path: str, response_type, params: dict | None = None):
        endpoint = f"{self.users_host}{path}"
        if params:
            endpoint = f"{endpoint}?{urlencode(params)}"
        return self.http.request(HttpRequest(method="GET", endpoint=endpoint), response_type)

    def fetch(self, user_id: int) -> User:
        return self._get(f"/v1/users/{user_id}", User)

    def partial(self, user_id: int) -> PartialUser:
        return self._get(f"/v1/users/{user_id}", PartialUser)

    def authenticated(self) -> PartialUser:
        """Return the user owning the current session cookie."""
        return self._get("/v1/users/authenticated", PartialUser)

    def id(self, username: str) -> int:
        endpoint = f"{self.api_host}/users/get-by-username?{urlencode({'username': username})}"
        req = HttpRequest(method="GET", endpoint=endpoint)
        return self.http.request(req, UserId).id

    def search(self, keyword: str, limit: int = 10) -> list[PartialUser]:
        res = self._get(
            "/v1/users/search",
            DataResponse[PartialUser],
            params={"keyword": keyword, "limit": limit},
        )
        return res.data

    def fetch_many(self, ids: list[int], exclude_banned: bool = False) -> dict[int, str]:
        """Map user ids to usernames. Unknown ids are absent from the result."""
        body = FetchManyRequest(user_ids=ids, exclude_banned_users=exclude_banned)
        req = HttpRequest(
            method="POST",
            endpoint=f"{self.users_host}/v1/users",
            headers=JSON_HEADERS,
            body=body.model_dump_json(by_alias=True),
        )
        res = self.http.request(req, DataResponse[PartialUser])
        return {user.id: user.username for user in res.data}

    def find_many(self, usernames: list[str], exclude_banned: bool = False) -> dict[str, int]:
        """Map usernames to user ids. Unknown usernames are absent from the result."""
        body = FindManyRequest(usernames=usernames, exclude_banned_users=exclude_banned)
        req = HttpRequest(
            method="POST",
            endpoint=f"{self.users_host}/v1/usernames/users",
            headers=JSON_HEADERS,
            body=body.model_dump_json(by_alias=True),
        )
        res = self.http.request(req, DataResponse[PartialUser])
        return {user.username: user.id for user in res.data}

    def username_history(self, user_id: int) -> list[str]:
        res = self._get(f"/v1/users/{user_id}/username-history", DataResponse[UsernameHistoryEntry])
        return [entry.name for entry in res.data]
