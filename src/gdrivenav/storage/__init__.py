"""Storage abstraction for gdrivenav.

Provides a uniform navigation interface over two backends:
- LocalStorage: Local filesystem
- GoogleDriveStorage: Google Drive

Usage:
    from gdrivenav.storage import create_storage

    storage = create_storage("local:/path/to/folder")
    storage = create_storage("drive:./client_secret.json")
"""

from __future__ import annotations

from .base import PARENT_DIRECTORY, RemoteStorage, Storage
from .drive import GoogleDriveStorage
from .local import LocalStorage


def create_storage(uri: str) -> Storage:
    """Create a storage backend from a URI.

    Args:
        uri: Storage URI in one of these formats:
            - local:/path/to/root
            - drive:/path/to/client_secret.json

    Returns:
        Storage instance for the specified backend

    Raises:
        ValueError: If URI format is invalid
        GDriveNavError: If the backend fails to initialize
    """
    if uri.startswith("local:"):
        return LocalStorage(uri[6:])
    elif uri.startswith("drive:"):
        return GoogleDriveStorage.connect(uri[6:])
    else:
        raise ValueError(
            f"Invalid storage URI: {uri}. "
            "Must start with 'local:' or 'drive:'"
        )


__all__ = [
    "Storage",
    "RemoteStorage",
    "LocalStorage",
    "GoogleDriveStorage",
    "PARENT_DIRECTORY",
    "create_storage",
]
