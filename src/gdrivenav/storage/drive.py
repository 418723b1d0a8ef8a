"""Google Drive storage backend."""

from __future__ import annotations

import logging
from typing import Callable, Optional

import requests

from gdrivenav.auth import ClientConfig, DeviceCode, OAuthClient
from gdrivenav.auth.device_flow import log_prompt
from gdrivenav.controller import GoogleDriveController
from gdrivenav.errors import GDriveNavError, InvalidStateError
from gdrivenav.models import Item

from .base import PARENT_DIRECTORY, RemoteStorage

logger = logging.getLogger(__name__)


class GoogleDriveStorage(RemoteStorage):
    """Storage backend for Google Drive.

    The cache mirrors every non-trashed item visible to the app, keyed by
    Drive ids. It is filled once by a full listing and then patched in place
    after each create, upload and delete, without re-listing.

    Every public operation returns a success flag. Drive errors are logged
    and reported as False; the cache is left untouched when an operation
    fails.
    """

    def __init__(self, controller: GoogleDriveController) -> None:
        super().__init__()
        self._controller = controller
        self._resolved = False

    @classmethod
    def connect(
        cls,
        config_path: str,
        *,
        session: Optional[requests.Session] = None,
        prompt: Callable[[DeviceCode], None] = log_prompt,
    ) -> GoogleDriveStorage:
        """Sign in, resolve the root folder, and load the full listing.

        Raises:
            ConfigError: the credential file is missing or invalid.
            AuthError: refresh or device sign-in failed.
            GDriveNavError: root resolution or the initial listing failed.
        """
        session = session if session is not None else requests.Session()
        config = ClientConfig.load(config_path)

        auth = OAuthClient(config, session, prompt=prompt)
        auth.authenticate()

        storage = cls(GoogleDriveController(auth, session))
        storage.resolve_root()
        if not storage.request_listing():
            raise InvalidStateError("Initial Drive listing failed")
        return storage

    @property
    def display_name(self) -> str:
        return "Google Drive"

    def resolve_root(self) -> None:
        """Look up the root folder id once; it becomes the root and the cursor."""
        root_id = self._controller.get_root_id()
        self._root = root_id
        self._parent = root_id
        self._resolved = True

    def request_listing(self) -> bool:
        """Clear the cache and repopulate it from a full paginated listing.

        A failing page contributes nothing; Items from earlier pages stay in
        the cache. Use cache.snapshot()/restore() around this call when the
        whole listing must succeed or fail as a unit.
        """
        if not self._resolved:
            raise InvalidStateError("Root folder is not resolved. Call resolve_root() first.")

        self._cache.clear()
        try:
            for items in self._controller.iter_listing():
                self._cache.extend(items)
        except GDriveNavError as e:
            logger.error("Drive listing failed: %s", e)
            return False

        logger.info("Drive listing loaded: %d items.", len(self._cache))
        return True

    # =========================================================================
    # Navigation
    # =========================================================================

    def change_directory(self, name: str) -> bool:
        if name == PARENT_DIRECTORY:
            current = self._cache.find_directory_by_id(self._parent)
            if current is None:
                logger.warning(
                    "Drive error changing directory: no parent above %s.", self._parent
                )
                return False
            self._parent = current.parent_id
            return True

        target = self._cache.find_directory(self._parent, name)
        if target is None:
            logger.warning(
                "Drive error changing directory: Unable to locate target directory %r.", name
            )
            return False
        self._parent = target.id
        return True

    # =========================================================================
    # Mutations
    # =========================================================================

    def create_directory(self, name: str) -> bool:
        if self.directory_exists(name):
            logger.warning("Drive: directory %r already exists in %s.", name, self._parent)
            return False

        try:
            folder_id = self._controller.create_folder(name, self._parent)
        except GDriveNavError as e:
            logger.error("Drive: failed to create directory %r: %s", name, e)
            return False

        self._cache.add(Item(
            name=name,
            id=folder_id,
            parent_id=self._parent,
            is_directory=True,
        ))
        return True

    def delete_directory(self, name: str) -> bool:
        """Delete a directory by name.

        Not recursive: what happens to a non-empty folder's children is
        decided by Drive. Only the folder entry leaves the cache.
        """
        folder_id = self.get_directory_id(name)
        if folder_id is None:
            logger.warning("Drive: directory %r not found.", name)
            return False
        return self._delete(folder_id, name)

    def delete_file(self, name: str) -> bool:
        file_id = self.get_file_id(name)
        if file_id is None:
            logger.warning("Drive: file %r not found.", name)
            return False
        return self._delete(file_id, name)

    def upload_file(self, path: str) -> bool:
        try:
            item = self._controller.upload_file(path, self._parent)
        except GDriveNavError as e:
            logger.error("Drive: failed to upload %s: %s", path, e)
            return False

        self._cache.add(item)
        return True

    def download_file(self, name: str, path: str) -> bool:
        file_id = self.get_file_id(name)
        if file_id is None:
            logger.warning("Drive: file %r not found.", name)
            return False

        try:
            self._controller.download_file(file_id, path)
        except GDriveNavError as e:
            logger.error("Drive: failed to download %r: %s", name, e)
            return False
        return True

    def _delete(self, item_id: str, name: str) -> bool:
        try:
            self._controller.delete(item_id)
        except GDriveNavError as e:
            logger.error("Drive: failed to delete %r: %s", name, e)
            return False

        self._cache.remove(item_id, self._parent)
        return True
