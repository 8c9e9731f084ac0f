"""Response Envelope — the normalized {success, data|error, requestId} wrapper.

Invariants:
    - Exactly one of data/error is present, never both
    - requestId is always present and non-empty
    - success is True iff data is present
    - to_response() omits absent optional fields instead of emitting null
"""

from typing import Any

from pydantic import BaseModel, Field, model_validator


class ErrorInfo(BaseModel):
    """Client-facing error description."""
    message: str
    type: str
    status: int
    field: str | None = None
    stack: str | None = None

    def to_response(self) -> dict:
        return self.model_dump(exclude_none=True)


class ApodEnvelope(BaseModel):
    """Normalized response wrapper returned for every outcome."""
    success: bool
    data: dict[str, Any] | None = None
    error: ErrorInfo | None = None
    request_id: str = Field(min_length=1)

    @model_validator(mode="after")
    def check_single_payload(self) -> "ApodEnvelope":
        if (self.data is None) == (self.error is None):
            raise ValueError("envelope requires exactly one of data or error")
        if self.success != (self.data is not None):
            raise ValueError("success must be true iff data is present")
        return self

    @classmethod
    def ok(cls, data: dict[str, Any], request_id: str) -> "ApodEnvelope":
        return cls(success=True, data=data, request_id=request_id)

    @classmethod
    def failed(cls, error: ErrorInfo, request_id: str) -> "ApodEnvelope":
        return cls(success=False, error=error, request_id=request_id)

    def to_response(self) -> dict:
        """Serialize with the wire field names (camelCase requestId)."""
        body: dict[str, Any] = {"success": self.success}
        if self.data is not None:
            body["data"] = self.data
        else:
            body["error"] = self.error.to_response()
        body["requestId"] = self.request_id
        return body
