"""Base classes for storage backends.

This module defines the navigation contract that every backend implements.
All name lookups work relative to the current cursor (the "parent" id).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Union

from gdrivenav.cache import TreeCache
from gdrivenav.models import Item

NameOrIndex = Union[str, int]

PARENT_DIRECTORY: str = ".."


class Storage(ABC):
    """Abstract base class for storage backends.

    A Storage owns a TreeCache mirroring its namespace and a cursor naming the
    current directory. Lookups are linear scans of the cache filtered by the
    cursor; they never touch the backend itself.
    """

    def __init__(self, root: str = "") -> None:
        self._root = root
        self._parent = root
        self._cache = TreeCache()

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-readable name for this storage."""

    @property
    def root(self) -> str:
        return self._root

    @property
    def cursor(self) -> str:
        """Id (or path) of the current directory."""
        return self._parent

    @property
    def cache(self) -> TreeCache:
        return self._cache

    # =========================================================================
    # Lookups (shared by every backend)
    # =========================================================================

    def list_contents(self) -> list[Item]:
        """Return the Items directly under the cursor, in cache order."""
        return self._cache.children(self._parent)

    def return_to_root(self) -> None:
        self._parent = self._root

    def directory_exists(self, name: str) -> bool:
        return self._cache.find_directory(self._parent, name) is not None

    def file_exists(self, name: str) -> bool:
        return self._cache.find_file(self._parent, name) is not None

    def get_directory_id(self, key: NameOrIndex) -> Optional[str]:
        """Resolve a directory name (under the cursor) or cache index to its id.

        Returns:
            The id, or None when nothing matches. An index is out of range when
            negative or >= the cache size; an index naming a file also fails.
        """
        if isinstance(key, int) and not isinstance(key, bool):
            item = self._cache.at(key)
            if item is None or not item.is_directory:
                return None
            return item.id

        item = self._cache.find_directory(self._parent, key)
        return item.id if item is not None else None

    def get_file_id(self, key: NameOrIndex) -> Optional[str]:
        """Resolve a file name (under the cursor) or cache index to its id."""
        if isinstance(key, int) and not isinstance(key, bool):
            item = self._cache.at(key)
            if item is None or item.is_directory:
                return None
            return item.id

        item = self._cache.find_file(self._parent, key)
        return item.id if item is not None else None

    # =========================================================================
    # Backend-specific operations
    # =========================================================================

    @abstractmethod
    def change_directory(self, name: str) -> bool:
        """Move the cursor into the directory `name`, or up one level for "..".

        Returns:
            True if the cursor moved, False if the target was not found.
        """

    @abstractmethod
    def create_directory(self, name: str) -> bool:
        """Create a directory named `name` under the cursor."""

    @abstractmethod
    def delete_directory(self, name: str) -> bool:
        """Delete the directory named `name` under the cursor."""

    @abstractmethod
    def delete_file(self, name: str) -> bool:
        """Delete the file named `name` under the cursor."""


class RemoteStorage(Storage):
    """A Storage that can also transfer files to and from the local host."""

    @abstractmethod
    def upload_file(self, path: str) -> bool:
        """Upload the local file at `path` into the cursor directory."""

    @abstractmethod
    def download_file(self, name: str, path: str) -> bool:
        """Download the file `name` (under the cursor) to the local `path`."""
