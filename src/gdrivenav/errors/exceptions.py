"""Exception hierarchy and HTTP error mapping for gdrivenav."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class GDriveNavError(Exception):
    """
    Base exception for gdrivenav.

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


class ConfigError(GDriveNavError):
    """Raised when the credential configuration is missing or corrupt."""


class InvalidStateError(GDriveNavError):
    """Raised when a session is used before it is fully initialized."""


class AuthError(GDriveNavError):
    """Raised when sign-in, token refresh, or authorization fails."""


class ProtocolError(GDriveNavError):
    """Raised when a response is malformed or carries an error object."""


class PermissionError(GDriveNavError):
    """Raised when access is denied (HTTP 403 non-quota)."""


class InvalidArgumentError(GDriveNavError):
    """Raised when request arguments are invalid (HTTP 400, etc.)."""


class NotFoundError(GDriveNavError):
    """Raised when a Drive resource is not found (HTTP 404)."""


class RateLimitError(GDriveNavError):
    """Raised when rate-limited (HTTP 429)."""


class QuotaExceededError(GDriveNavError):
    """Raised when quota is exceeded (HTTP 403 with quota-related reason)."""


class NetworkError(GDriveNavError):
    """Raised when the transport fails before a response is received."""


class ApiError(GDriveNavError):
    """Raised for unclassified API errors (5xx, unknown 4xx, etc.)."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to gdrivenav exceptions."""

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
) -> GDriveNavError:
    """
    Map an HTTP error to a gdrivenav exception.

    Policy:
        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> PermissionError, or QuotaExceededError if quota-related
        - 404 -> NotFoundError
        - 429 -> RateLimitError
        - 5xx and anything else -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        if _is_quota_reason(info.reason):
            return QuotaExceededError(message, details=details, cause=cause)
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
