"""Public error exports for gdrivedl."""

from __future__ import annotations

from .exceptions import (
    AmbiguousPathError,
    ApiError,
    AuthError,
    ConflictError,
    GDriveDlError,
    HttpErrorInfo,
    InvalidInputError,
    IOFailureError,
    NetworkError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    map_http_error,
)

__all__ = [
    "GDriveDlError",
    "AuthError",
    "InvalidInputError",
    "NotFoundError",
    "AmbiguousPathError",
    "IOFailureError",
    "PermissionError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "HttpErrorInfo",
    "map_http_error",
]
