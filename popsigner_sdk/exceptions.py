"""
Exceptions for the POPSigner SDK.

Local validation problems raise :class:`ValidationError` before any request is
sent. Everything that happens on (or while trying to reach) the wire surfaces
as an :class:`APIError`; ``http_status`` is 0 when no HTTP response was
received.
"""
from typing import Optional


class PopSignerError(Exception):
    """Base exception for all SDK errors."""
    pass


class ValidationError(PopSignerError, ValueError):
    """Raised when an argument is rejected locally, before any network call."""
    pass


class APIError(PopSignerError):
    """
    Raised when a request fails on the transport or is rejected by the server.

    Attributes:
        code: Short machine-readable error code from the server, if any
        message: Human-readable description
        http_status: HTTP status code, or 0 for local failures
    """

    def __init__(self, message: str, code: Optional[str] = None, http_status: int = 0):
        self.message = message
        self.code = code or None
        self.http_status = http_status
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.code:
            return f"{self.code}: {self.message}"
        return self.message

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, "
            f"code={self.code!r}, http_status={self.http_status})"
        )

    @property
    def is_not_found(self) -> bool:
        return self.http_status == 404

    @property
    def is_unauthorized(self) -> bool:
        """True when the credential was rejected and should be refreshed."""
        return self.http_status == 401

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.http_status < 500

    @property
    def is_server_error(self) -> bool:
        return 500 <= self.http_status < 600


class APIConnectionError(APIError):
    """Raised when the API could not be reached (DNS, refused connection, TLS)."""

    def __init__(self, message: str, code: Optional[str] = "connection_error"):
        super().__init__(message, code=code, http_status=0)


class APITimeoutError(APIConnectionError):
    """Raised when a request exceeds the configured timeout."""

    def __init__(self, message: str):
        super().__init__(message, code="timeout")


class ResponseDecodeError(APIError):
    """Raised when a successful response body cannot be decoded into the expected type."""

    def __init__(self, message: str, http_status: int = 0):
        super().__init__(message, code="decode_error", http_status=http_status)
