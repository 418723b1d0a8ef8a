"""Public error exports for gdrivenav."""

from __future__ import annotations

from .exceptions import (
    ApiError,
    AuthError,
    ConfigError,
    GDriveNavError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidStateError,
    NetworkError,
    NotFoundError,
    PermissionError,
    ProtocolError,
    QuotaExceededError,
    RateLimitError,
    map_http_error,
)

__all__ = [
    "GDriveNavError",
    "ConfigError",
    "InvalidStateError",
    "AuthError",
    "ProtocolError",
    "PermissionError",
    "InvalidArgumentError",
    "NotFoundError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "HttpErrorInfo",
    "map_http_error",
]
