"""Typed views of Google Drive REST responses."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from gdrivenav.errors import ProtocolError
from gdrivenav.models import Item
from gdrivenav.util.http import require_field
from gdrivenav.util.mime import is_folder

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class AboutResponse:
    root_folder_id: str

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> AboutResponse:
        return cls(
            root_folder_id=require_field(
                payload, "rootFolderId", str, what="about response"
            )
        )


@dataclass(slots=True, frozen=True)
class FileResource:
    """One Drive file resource, restricted to the fields gdrivenav reads."""

    id: str
    name: str
    mime_type: str
    parents: tuple[str, ...] = ()

    @property
    def is_directory(self) -> bool:
        return is_folder(self.mime_type)

    @classmethod
    def from_listing(cls, data: Any) -> FileResource:
        """
        Parse one element of a listing's "files" array.

        mimeType, parents, id and name are all required, and parents must
        hold at least one id.
        """
        what = "listing entry"
        if not isinstance(data, dict):
            logger.error("Error processing Google Drive list: Malformed or corrupted response.")
            raise ProtocolError(f"Malformed {what}: not an object")

        mime_type = require_field(data, "mimeType", str, what=what)
        parents = require_field(data, "parents", list, what=what)
        file_id = require_field(data, "id", str, what=what)
        name = require_field(data, "name", str, what=what)

        if not parents or not isinstance(parents[0], str):
            logger.error("Error reading parents array of %s.", file_id)
            raise ProtocolError(
                f"Malformed {what}: empty parents array",
                details={"id": file_id},
            )

        return cls(id=file_id, name=name, mime_type=mime_type, parents=tuple(parents))

    @classmethod
    def from_upload(cls, data: dict[str, Any]) -> FileResource:
        """Parse the upload completion response (id, name, mimeType required)."""
        what = "upload response"
        return cls(
            id=require_field(data, "id", str, what=what),
            name=require_field(data, "name", str, what=what),
            mime_type=require_field(data, "mimeType", str, what=what),
        )

    def to_item(self, parent_id: Optional[str] = None) -> Item:
        """Build an Item; the parent defaults to the first entry of parents."""
        if parent_id is None:
            parent_id = self.parents[0] if self.parents else ""
        return Item(
            name=self.name,
            id=self.id,
            parent_id=parent_id,
            is_directory=self.is_directory,
        )


@dataclass(slots=True, frozen=True)
class FileListPage:
    files: list[FileResource]
    next_page_token: Optional[str] = None

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> FileListPage:
        raw_files = require_field(payload, "files", list, what="listing page")
        files = [FileResource.from_listing(entry) for entry in raw_files]

        token = payload.get("nextPageToken")
        return cls(
            files=files,
            next_page_token=token if isinstance(token, str) and token else None,
        )


@dataclass(slots=True, frozen=True)
class CreatedFile:
    id: str

    @classmethod
    def from_json(cls, payload: dict[str, Any]) -> CreatedFile:
        return cls(id=require_field(payload, "id", str, what="create response"))
