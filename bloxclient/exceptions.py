class BloxclientError(Exception):
    """Base class for every error raised by bloxclient.

    ``message`` holds the normalized, human-readable error string.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthenticationError(BloxclientError):
    """Raised when a session cookie cannot be turned into an authenticated session."""


class InvalidCredentialError(AuthenticationError):
    """Raised when Roblox rejects the session cookie during the logout probe."""


class MissingCsrfTokenError(AuthenticationError):
    """Raised when the logout probe response carries no x-csrf-token header."""


class IntegrationError(BloxclientError):
    """Raised when a dispatched Roblox API call fails."""


class NetworkError(IntegrationError):
    """Raised on transport failures (DNS, TLS, connection, timeout)."""


class DecodeError(IntegrationError):
    """Raised when a response body does not match the expected shape."""


class ApiError(IntegrationError):
    """Raised when Roblox reports a failure in its error envelope."""

    def __init__(self, message: str, code: int = 0, status: int = 0):
        super().__init__(message)
        self.code = code
        self.status = status


class HttpStatusError(IntegrationError):
    """Raised on a non-2xx status without a usable error envelope."""

    def __init__(self, message: str, status: int):
        super().__init__(message)
        self.status = status
