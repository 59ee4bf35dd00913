"""Typed error hierarchy for configuration, transport, and protocol failures."""


class OpenJusticeError(Exception):
    """Base exception for all openjustice SDK errors."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
        method: str | None = None,
        path: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body
        self.method = method
        self.path = path


class ConfigurationError(OpenJusticeError):
    """A required setting is missing. Raised before any request is sent."""


class TransportError(OpenJusticeError):
    """Upload, send, or stream failed at the HTTP or network level."""


class AuthenticationError(TransportError):
    """401 — invalid or missing API key."""


class PermissionDeniedError(TransportError):
    """403 — API key is not allowed to use this flow or conversation."""


class NotFoundError(TransportError):
    """404 — conversation, flow, or execution does not exist."""


class RateLimitError(TransportError):
    """429 — too many requests."""


class APIError(TransportError):
    """Any other non-2xx status, or a connection/read failure (status_code=None)."""


class ProtocolParseError(OpenJusticeError):
    """A stream frame could not be decoded. Handled inside the stream consumer."""


# Map HTTP status codes to exception classes.
STATUS_MAP: dict[int, type[TransportError]] = {
    401: AuthenticationError,
    403: PermissionDeniedError,
    404: NotFoundError,
    429: RateLimitError,
}
