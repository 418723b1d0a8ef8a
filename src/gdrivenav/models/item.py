"""Data model for namespace entries."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Item:
    """
    One entry in a storage namespace.

    Notes:
        - Google Drive: id and parent_id are server-assigned and opaque.
        - Local filesystem: id == name and parent_id is the directory path.
    """

    name: str
    id: str
    parent_id: str
    is_directory: bool = False
