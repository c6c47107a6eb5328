"""Request checks and response headers applied around every API call."""

from __future__ import annotations

from http import HTTPStatus
from typing import Mapping, Optional

MAX_PATH_LENGTH = 2048

_SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": (
        "default-src 'self'; script-src 'self' 'unsafe-inline'; style-src 'self' 'unsafe-inline'"
    ),
}


class RequestRejected(Exception):
    """A request that fails validation, with the status to answer it with."""

    def __init__(self, status: HTTPStatus, reason: str) -> None:
        super().__init__(reason)
        self.status = status
        self.reason = reason

    @property
    def status_code(self) -> int:
        return int(self.status)


def _header(headers: Mapping[str, str], name: str) -> Optional[str]:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def extract_client_ip(headers: Mapping[str, str]) -> Optional[str]:
    """Find the client's address in forwarding headers, if any is present."""
    forwarded_for = _header(headers, "X-Forwarded-For")
    if forwarded_for is not None:
        return forwarded_for.split(",", 1)[0].strip()

    real_ip = _header(headers, "X-Real-IP")
    if real_ip is not None:
        return real_ip

    forwarded = _header(headers, "Forwarded")
    if forwarded is not None:
        for part in forwarded.split(";"):
            if part.strip().startswith("for="):
                pieces = part.split("=")
                if len(pieces) > 1:
                    return pieces[1].strip().strip('"')
                break

    return None


def security_headers() -> dict[str, str]:
    """Headers added to every response to harden it in browsers."""
    return dict(_SECURITY_HEADERS)


def cors_headers(origin: Optional[str] = None) -> dict[str, str]:
    """Cross-origin headers, echoing the request's origin when one was sent."""
    return {
        "Access-Control-Allow-Origin": origin if origin is not None else "*",
        "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
        "Access-Control-Allow-Headers": "Content-Type, Authorization, X-Requested-With",
        "Access-Control-Max-Age": "86400",
    }


def validate_request(method: str, path: str, headers: Mapping[str, str]) -> None:
    """Raise RequestRejected if the request is malformed."""
    if method == "POST":
        content_type = _header(headers, "content-type")
        if content_type is None:
            raise RequestRejected(
                HTTPStatus.BAD_REQUEST, "POST request missing Content-Type header"
            )
        if not content_type.startswith("application/json"):
            raise RequestRejected(
                HTTPStatus.UNSUPPORTED_MEDIA_TYPE,
                f"POST request with unsupported Content-Type: {content_type}",
            )

    if len(path) > MAX_PATH_LENGTH:
        raise RequestRejected(HTTPStatus.REQUEST_URI_TOO_LONG, "Request URI too long")