"""Error Hierarchy — typed, client-facing error taxonomy for the APOD proxy.

Invariants:
    - Every error has a type (ErrorType), an HTTP status and a user-facing message
    - to_error_info() produces the ErrorInfo payload of the response envelope
    - No upstream URL or API key ever appears in a user-facing message

Design Decisions:
    - Single hierarchy with ApodExplorerError base: global handler catches all
    - Errors may be returned instead of raised by pure core functions
      (validate_apod_date), the shell decides how to surface them
"""

from enum import Enum

from apod_explorer.schemas.envelope import ErrorInfo


class ErrorType(str, Enum):
    """Stable client-facing error categories."""
    VALIDATION = "VALIDATION_ERROR"
    TIMEOUT = "TIMEOUT_ERROR"
    NETWORK = "NETWORK_ERROR"
    RATE_LIMIT = "RATE_LIMIT_ERROR"
    AUTH = "AUTH_ERROR"
    NASA_SERVER = "NASA_SERVER_ERROR"
    NASA_API = "NASA_API_ERROR"
    NOT_FOUND = "NOT_FOUND_ERROR"
    INTERNAL_SERVER = "INTERNAL_SERVER_ERROR"
    UNKNOWN = "UNKNOWN_ERROR"


class ApodExplorerError(Exception):
    """Base exception for all APOD Explorer errors."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType,
        http_status: int = 500,
        field: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.http_status = http_status
        self.field = field

    def to_error_info(self) -> ErrorInfo:
        """Convert to the envelope's ErrorInfo payload."""
        return ErrorInfo(
            message=self.message,
            type=self.error_type.value,
            status=self.http_status,
            field=self.field,
        )


# ─── Request Errors (400-level) ─────────────────────────────────

class DateValidationError(ApodExplorerError):
    """Date path parameter failed format or range validation."""
    def __init__(self, message: str, field: str = "date"):
        super().__init__(message, ErrorType.VALIDATION, 400, field)


class RouteNotFoundError(ApodExplorerError):
    """No route matches the request path and method."""
    def __init__(self, path: str):
        super().__init__(f"Route {path} not found.", ErrorType.NOT_FOUND, 404)
        self.path = path


class RateLimitExceededError(ApodExplorerError):
    """Client IP exceeded its request quota for the current window."""
    def __init__(self, retry_after_seconds: int):
        super().__init__(
            "Too many requests from this IP, please try again later.",
            ErrorType.RATE_LIMIT, 429,
        )
        self.retry_after_seconds = retry_after_seconds


# ─── Server Errors (500-level) ──────────────────────────────────

class InternalServerError(ApodExplorerError):
    """Unexpected fault caught at the outermost boundary."""
    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, ErrorType.INTERNAL_SERVER, 500)
