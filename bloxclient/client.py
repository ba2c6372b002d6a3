from bloxclient.config import Settings, get_settings
from bloxclient.http_client import HttpClient
from bloxclient.log import setup_logging
from bloxclient.services.users import UsersService

ROBLOSECURITY_COOKIE = ".ROBLOSECURITY"


def roblosecurity_cookie(value: str) -> str:
    """Turn a bare .ROBLOSECURITY value into a Cookie header value."""
    if not value or value.startswith(f"{ROBLOSECURITY_COOKIE}="):
        return value
    return f"{ROBLOSECURITY_COOKIE}={value}"


class Client:
    """Entry point: owns the shared HttpClient and the services built on it."""

    def __init__(self, http: HttpClient | None = None):
        self.http = http or HttpClient()
        self.users = UsersService(self.http)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "Client":
        """Build a client from settings, logging in when ROBLOSECURITY is set."""
        settings = settings or get_settings()
        setup_logging(settings.log_level)
        client = cls(
            HttpClient(
                auth_host=settings.auth_host,
                timeout=settings.request_timeout,
                cookie_domain=settings.cookie_domain,
            )
        )
        client.users = UsersService(
            client.http, users_host=settings.users_host, api_host=settings.api_host
        )
        if settings.roblosecurity:
            client.set_cookie(roblosecurity_cookie(settings.roblosecurity))
        return client

    def set_cookie(self, cookie: str) -> None:
        """Authenticate with a raw Cookie header value, e.g. ".ROBLOSECURITY=..."."""
        self.http.authenticate(cookie)

    def remove_cookie(self) -> None:
        self.http.deauthenticate()
