"""Local filesystem storage backend."""

from __future__ import annotations

import logging
import os
import shutil

from gdrivenav.errors import ConfigError
from gdrivenav.models import Item

from .base import PARENT_DIRECTORY, Storage

logger = logging.getLogger(__name__)


class LocalStorage(Storage):
    """Storage backend for the local filesystem.

    The cursor is an absolute directory path. Item ids are plain entry names
    and parent ids are the enumerated directory path. The cache only ever
    holds the entries of the cursor directory: it is rebuilt on every
    directory change, and mutating calls do not touch it (call reload()).
    """

    def __init__(self, root_path: str) -> None:
        """Initialize local storage.

        Raises:
            ConfigError: If root_path doesn't exist or isn't a directory.
        """
        root = os.path.abspath(root_path)
        if not os.path.exists(root):
            raise ConfigError(f"Directory does not exist: {root}")
        if not os.path.isdir(root):
            raise ConfigError(f"Not a directory: {root}")

        super().__init__(root)
        self.reload()

    @property
    def display_name(self) -> str:
        return f"{self._root} (local)"

    def _full_path(self, name: str) -> str:
        return os.path.join(self._parent, name)

    def return_to_root(self) -> None:
        super().return_to_root()
        self.reload()

    def change_directory(self, name: str) -> bool:
        previous = self._parent
        if name == PARENT_DIRECTORY:
            if self._parent == self._root:
                logger.warning("Local: already at root %s; cannot go up.", self._root)
                return False
            self._parent = os.path.dirname(self._parent)
        elif self.directory_exists(name):
            self._parent = self._full_path(name)
        else:
            logger.warning("Local: directory %r not found in %s.", name, self._parent)
            return False

        try:
            self.reload()
        except OSError as e:
            logger.error("Local: cannot enter %s: %s", self._parent, e)
            self._restore_cursor(previous)
            return False
        return True

    def _restore_cursor(self, previous: str) -> None:
        """Go back to previous, or to the root if previous is gone too."""
        for candidate in (previous, self._root):
            self._parent = candidate
            try:
                self.reload()
                return
            except OSError as e:
                logger.error("Local: cannot re-enter %s: %s", candidate, e)
        self._cache.clear()

    def create_directory(self, name: str) -> bool:
        if not _is_plain_name(name):
            logger.warning("Local: invalid directory name %r.", name)
            return False
        try:
            os.mkdir(self._full_path(name))
        except OSError as e:
            logger.error("Local: failed to create directory %r: %s", name, e)
            return False
        return True

    def delete_directory(self, name: str) -> bool:
        # Only entries listed under the cursor; never "..", "." or a path.
        if not self.directory_exists(name):
            logger.warning("Local: directory %r not found in %s.", name, self._parent)
            return False
        full_path = self._full_path(name)
        try:
            shutil.rmtree(full_path)
        except OSError as e:
            logger.error("Local: failed to delete directory %r: %s", name, e)
            return False
        return True

    def delete_file(self, name: str) -> bool:
        if not self.file_exists(name):
            logger.warning("Local: file %r not found in %s.", name, self._parent)
            return False
        try:
            os.remove(self._full_path(name))
        except OSError as e:
            logger.error("Local: failed to delete file %r: %s", name, e)
            return False
        return True

    def reload(self) -> None:
        """Discard the cache and enumerate the cursor directory again."""
        self._cache.clear()
        with os.scandir(self._parent) as entries:
            for entry in sorted(entries, key=lambda e: e.name):
                self._cache.add(Item(
                    name=entry.name,
                    id=entry.name,
                    parent_id=self._parent,
                    is_directory=entry.is_dir(),
                ))


def _is_plain_name(name: str) -> bool:
    """A single path component that stays inside its parent directory."""
    if not name or name in (".", PARENT_DIRECTORY):
        return False
    separators = [os.sep] + ([os.altsep] if os.altsep else [])
    return not any(sep in name for sep in separators)
