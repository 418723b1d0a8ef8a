"""gdrivenav public API."""

from __future__ import annotations

from gdrivenav.auth import ClientConfig, DeviceCode, OAuthClient, TokenState
from gdrivenav.cache import TreeCache
from gdrivenav.controller import GoogleDriveController
from gdrivenav.errors import (
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
from gdrivenav.logging_setup import setup_logging
from gdrivenav.models import Item
from gdrivenav.storage import (
    PARENT_DIRECTORY,
    GoogleDriveStorage,
    LocalStorage,
    RemoteStorage,
    Storage,
    create_storage,
)

__all__ = [
    # Storage
    "Storage",
    "RemoteStorage",
    "LocalStorage",
    "GoogleDriveStorage",
    "PARENT_DIRECTORY",
    "create_storage",
    # Building blocks
    "Item",
    "TreeCache",
    "GoogleDriveController",
    "setup_logging",
    # Auth
    "ClientConfig",
    "DeviceCode",
    "OAuthClient",
    "TokenState",
    # Errors
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
