"""Command dispatch against the active storage."""

from __future__ import annotations

import logging
import sys
from typing import Callable, Optional, TextIO

from gdrivenav.storage import (
    PARENT_DIRECTORY,
    GoogleDriveStorage,
    LocalStorage,
    RemoteStorage,
    Storage,
)

from .reader import LineReader

logger = logging.getLogger(__name__)

DIRECTORY_KINDS: frozenset[str] = frozenset({"dir", "folder", "directory"})
FILE_KINDS: frozenset[str] = frozenset({"file"})

HELP_TEXT: str = """\
Commands (prefix each with the storage: local | drive):
  list                          list the current directory
  chdir <name|..>               enter a directory, or go up one level
  root                          return to the root directory
  mkdir <name>                  create a directory
  delete <dir|file> <name>      delete a directory or a file
  reload                        re-read the listing from the backend
  upload <path>                 upload a local file (drive only)
  download <name> <path>        download a file (drive only)
  help                          show this text"""


class CommandDispatcher:
    """Parse one command from a LineReader and run it on a Storage."""

    def __init__(self, out: Optional[TextIO] = None) -> None:
        self._out = out if out is not None else sys.stdout
        self._commands: dict[str, Callable[[Storage, LineReader], bool]] = {
            "list": self._list,
            "chdir": self._chdir,
            "root": self._root,
            "mkdir": self._mkdir,
            "delete": self._delete,
            "reload": self._reload,
            "upload": self._upload,
            "download": self._download,
            "help": self._help,
        }

    def execute(self, storage: Storage, reader: LineReader) -> bool:
        """
        Run the next command in reader against storage.

        Returns:
            True on success, False on a bad command, bad parameters, or a
            failed operation. Never raises for user errors.
        """
        command = reader.next_parameter()
        if not command:
            self._print("No command given.")
            return False

        handler = self._commands.get(command)
        if handler is None:
            self._print(f"Unknown command \"{command}\". Try \"help\".")
            return False
        return handler(storage, reader)

    # ----------------------------
    # Commands
    # ----------------------------
    def _list(self, storage: Storage, reader: LineReader) -> bool:
        for item in storage.list_contents():
            self._print(f"{item.name}:")
            self._print(f"\tID: {item.id}")
            self._print(f"\tParent: {item.parent_id}")
            self._print(f"\tDirectory: {'true' if item.is_directory else 'false'}")
        return True

    def _chdir(self, storage: Storage, reader: LineReader) -> bool:
        directory = reader.rest()
        if not directory or (
            directory != PARENT_DIRECTORY and not storage.directory_exists(directory)
        ):
            self._print(
                "Error executing command chdir: "
                "No directory passed or directory doesn't exist within current parent."
            )
            return False

        if not storage.change_directory(directory):
            self._print("Error executing command chdir: Unable to change directory.")
            return False
        return True

    def _root(self, storage: Storage, reader: LineReader) -> bool:
        storage.return_to_root()
        return True

    def _mkdir(self, storage: Storage, reader: LineReader) -> bool:
        directory = reader.rest()
        if not directory or not storage.create_directory(directory):
            self._print(
                "Error executing command mkdir: "
                "No directory passed or creating directory failed!"
            )
            return False
        return True

    def _delete(self, storage: Storage, reader: LineReader) -> bool:
        kind = reader.next_parameter()
        name = reader.rest()
        if not kind or not name:
            self._print("Error executing command delete: usage: delete <dir|file> <name>")
            return False

        if kind in DIRECTORY_KINDS:
            ok = storage.delete_directory(name)
        elif kind in FILE_KINDS:
            ok = storage.delete_file(name)
        else:
            self._print(f"Error executing command delete: unknown target type \"{kind}\".")
            return False

        if not ok:
            self._print(f"Error executing command delete: could not delete \"{name}\".")
        return ok

    def _reload(self, storage: Storage, reader: LineReader) -> bool:
        if isinstance(storage, GoogleDriveStorage):
            ok = storage.request_listing()
        elif isinstance(storage, LocalStorage):
            try:
                storage.reload()
                ok = True
            except OSError as e:
                logger.error("Local reload failed: %s", e)
                ok = False
        else:
            self._print(f"{storage.display_name} cannot reload its listing.")
            return False

        if not ok:
            self._print("Error executing command reload: listing failed.")
            return False
        return True

    def _upload(self, storage: Storage, reader: LineReader) -> bool:
        if not isinstance(storage, RemoteStorage):
            self._print(f"{storage.display_name} does not support upload.")
            return False

        path = reader.rest()
        if not path or not storage.upload_file(path):
            self._print("Error executing command upload: No path passed or upload failed!")
            return False
        return True

    def _download(self, storage: Storage, reader: LineReader) -> bool:
        if not isinstance(storage, RemoteStorage):
            self._print(f"{storage.display_name} does not support download.")
            return False

        name = reader.next_parameter()
        path = reader.rest()
        if not name or not path or not storage.download_file(name, path):
            self._print(
                "Error executing command download: "
                "usage: download <name> <path>, or download failed!"
            )
            return False
        return True

    def _help(self, storage: Storage, reader: LineReader) -> bool:
        self._print(HELP_TEXT)
        return True

    def _print(self, text: str) -> None:
        print(text, file=self._out)
