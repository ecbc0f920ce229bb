"""Exception hierarchy and HTTP error mapping for gdrivedl."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class GDriveDlError(Exception):
    """
    Base exception for gdrivedl.

    Attributes:
        details: Optional structured information (e.g., HTTP status, reason).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class AuthError(GDriveDlError):
    """Raised when credential parsing or transport setup fails (or HTTP 401)."""


class InvalidInputError(GDriveDlError):
    """Raised for malformed input: folder paths, regex patterns, config, HTTP 400."""


class NotFoundError(GDriveDlError):
    """Raised when no file, folder or shared drive matches (or HTTP 404)."""


class AmbiguousPathError(NotFoundError):
    """Raised when a folder path segment cannot be resolved."""


class IOFailureError(GDriveDlError):
    """Raised when a local directory/file cannot be written or a transfer fails."""


class PermissionError(GDriveDlError):
    """Raised when access is denied (HTTP 403 non-quota)."""


class ConflictError(GDriveDlError):
    """Raised on HTTP 409/412."""


class RateLimitError(GDriveDlError):
    """Raised when rate-limited (HTTP 429)."""


class QuotaExceededError(GDriveDlError):
    """Raised when quota is exceeded (HTTP 403 with quota-related reason)."""


class NetworkError(GDriveDlError):
    """Raised when network/timeout issues prevent the request."""


class ApiError(GDriveDlError):
    """Raised for unclassified API errors (5xx, unknown 4xx, etc.)."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to gdrivedl exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "dailyLimitExceeded",
    "usageLimits",
    "storageQuotaExceeded",
)


def _is_quota_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return any(key.lower() in reason.lower() for key in _QUOTA_REASON_KEYWORDS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> GDriveDlError:
    """
    Map an HTTP error to a gdrivedl exception.

    Policy:
        - 400 -> InvalidInputError
        - 401 -> AuthError
        - 403 -> PermissionError (default), but QuotaExceededError if quota-related
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - otherwise -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return InvalidInputError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        if _is_quota_reason(info.reason):
            return QuotaExceededError(message, details=details, cause=cause)
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
