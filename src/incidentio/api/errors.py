"""Error taxonomy and structured API error decoding.

Four kinds of failure reach callers:
- CallerError: bad input, rejected before any request is sent
- TransportError: connection, timeout or body-read failure
- APIError: non-success response with a decodable error body
- DecodeError: a body (success or error) that is not the expected JSON shape

None of them are retried here. Retry and "treat 404 as absent" are caller policy.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class IncidentIOError(Exception):
    """Base class for incident.io client errors."""

    def __init__(self, message: str) -> None:
        """Initialize IncidentIOError with a message."""
        self.message = message
        super().__init__(message)


class CallerError(IncidentIOError, ValueError):
    """Invalid input supplied by the caller (empty id, bad enum value, wrong model)."""


class TransportError(IncidentIOError):
    """The request could not be completed (DNS, connect, timeout, body read)."""


class DecodeError(IncidentIOError):
    """A response body could not be decoded into the expected shape."""


class ErrorSource(BaseModel):
    """Which submitted attribute triggered a sub-error."""

    field: str = ""
    pointer: str = ""

    model_config = ConfigDict(frozen=True)


class ErrorDetail(BaseModel):
    """One sub-error of an API error response."""

    code: str
    message: str
    source: ErrorSource | None = None

    model_config = ConfigDict(frozen=True)


class _ErrorBody(BaseModel):
    """Wire shape of an incident.io error response."""

    type: str
    status: int | None = None
    request_id: str = ""
    errors: list[ErrorDetail] = Field(default_factory=list)


class APIError(IncidentIOError):
    """Structured error decoded from a non-success API response."""

    def __init__(
        self,
        type: str,
        status: int,
        request_id: str = "",
        errors: list[ErrorDetail] | None = None,
    ) -> None:
        self.type = type
        self.status = status
        self.request_id = request_id
        self.errors = list(errors or [])
        super().__init__(self.summary())

    def summary(self) -> str:
        """Render "type: code:message, code:message" with every sub-error in order."""
        if not self.errors:
            return self.type
        details = ", ".join(f"{e.code}:{e.message}" for e in self.errors)
        return f"{self.type}: {details}"

    def __repr__(self) -> str:
        return (
            f"APIError(type={self.type!r}, status={self.status}, "
            f"request_id={self.request_id!r}, errors={len(self.errors)})"
        )


def decode_error(body: bytes, status_code: int | None = None) -> APIError:
    """Decode a non-success response body into an APIError.

    Args:
        body: Raw response bytes.
        status_code: HTTP status of the response. Used when the body is empty
            or does not carry its own status field.

    Returns:
        The decoded APIError (returned, not raised).

    Raises:
        DecodeError: If the body is not well-formed JSON of the expected shape,
            or if neither the body nor the caller supplies a status.
    """
    if not body.strip():
        if status_code is None:
            raise DecodeError("Empty error body and no HTTP status to classify it")
        return APIError(type="", status=status_code)

    try:
        parsed = _ErrorBody.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(f"Malformed error body: {e}") from e

    status = parsed.status if parsed.status is not None else status_code
    if status is None:
        raise DecodeError("Error body carries no status")

    return APIError(
        type=parsed.type,
        status=status,
        request_id=parsed.request_id,
        errors=parsed.errors,
    )


def is_error_status(err: BaseException | None, status: int) -> bool:
    """Check whether err is an APIError associated with HTTP status `status`."""
    return isinstance(err, APIError) and err.status == status
