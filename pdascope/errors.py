"""Error and response envelopes returned by the HTTP interface."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from http import HTTPStatus
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


class ApiError(Exception):
    """An error reported to a client together with its HTTP status."""

    def __init__(self, error: str, message: str, status_code: int | HTTPStatus) -> None:
        super().__init__(message)
        self.error = error
        self.message = message
        self.status_code = int(status_code)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(error={self.error!r}, message={self.message!r}, "
            f"status_code={self.status_code})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ApiError):
            return NotImplemented
        return (self.error, self.message, self.status_code) == (
            other.error,
            other.message,
            other.status_code,
        )

    def __hash__(self) -> int:
        return hash((self.error, self.message, self.status_code))

    @property
    def status(self) -> HTTPStatus:
        """The status as an HTTPStatus, falling back to 500 for unknown codes."""
        try:
            return HTTPStatus(self.status_code)
        except ValueError:
            return HTTPStatus.INTERNAL_SERVER_ERROR

    @classmethod
    def bad_request(cls, message: str) -> ApiError:
        return cls("Bad Request", message, HTTPStatus.BAD_REQUEST)

    @classmethod
    def not_found(cls, message: str) -> ApiError:
        return cls("Not Found", message, HTTPStatus.NOT_FOUND)

    @classmethod
    def internal_server_error(cls, message: str) -> ApiError:
        return cls("Internal Server Error", message, HTTPStatus.INTERNAL_SERVER_ERROR)

    @classmethod
    def not_implemented(cls, message: str) -> ApiError:
        return cls("Not Implemented", message, HTTPStatus.NOT_IMPLEMENTED)

    @classmethod
    def unprocessable_entity(cls, message: str) -> ApiError:
        return cls("Unprocessable Entity", message, HTTPStatus.UNPROCESSABLE_ENTITY)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error,
            "message": self.message,
            "status_code": self.status_code,
        }


def _to_plain(value: Any) -> Any:
    """Turn dataclasses, enums, datetimes and containers into JSON-friendly values."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: _to_plain(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    if isinstance(value, (bytes, bytearray)):
        return list(value)
    return value


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ApiResponse(Generic[T]):
    """The envelope wrapping every successful or failed API reply."""

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    timestamp: datetime = field(default_factory=_now)

    @classmethod
    def ok(cls, data: T) -> ApiResponse[T]:
        return cls(success=True, data=data, error=None)

    @classmethod
    def failure(cls, error: str) -> ApiResponse[T]:
        return cls(success=False, data=None, error=error)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "data": _to_plain(self.data),
            "error": self.error,
            "timestamp": self.timestamp.isoformat(),
        }