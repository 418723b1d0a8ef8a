"""Ordered in-memory mirror of a storage namespace."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from gdrivenav.models import Item


@dataclass(slots=True)
class TreeCache:
    """
    Flat, ordered list of Items mirroring one backend's namespace.

    Notes:
        - There is no parent -> children index. Every lookup is a linear scan
          over the whole cache filtered by parent_id, so lookups are O(n) in
          the total cache size, not in the size of one directory.
        - Lookups return the first match in cache order.
    """

    items: list[Item] = field(default_factory=list)

    @classmethod
    def from_items(cls, items: Iterable[Item]) -> TreeCache:
        return cls(items=list(items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)

    # ----------------------------
    # Query helpers
    # ----------------------------
    def at(self, index: int) -> Optional[Item]:
        """Return the Item at index, or None when index is out of range."""
        if index < 0 or index >= len(self.items):
            return None
        return self.items[index]

    def children(self, parent_id: str) -> list[Item]:
        return [item for item in self.items if item.parent_id == parent_id]

    def find_directory(self, parent_id: str, name: str) -> Optional[Item]:
        for item in self.items:
            if item.is_directory and item.parent_id == parent_id and item.name == name:
                return item
        return None

    def find_file(self, parent_id: str, name: str) -> Optional[Item]:
        for item in self.items:
            if not item.is_directory and item.parent_id == parent_id and item.name == name:
                return item
        return None

    def find_directory_by_id(self, item_id: str) -> Optional[Item]:
        for item in self.items:
            if item.is_directory and item.id == item_id:
                return item
        return None

    # ----------------------------
    # Mutation helpers
    # ----------------------------
    def add(self, item: Item) -> None:
        self.items.append(item)

    def extend(self, items: Iterable[Item]) -> None:
        self.items.extend(items)

    def remove(self, item_id: str, parent_id: str) -> Optional[Item]:
        """Remove and return the first Item with this id under parent_id."""
        for index, item in enumerate(self.items):
            if item.id == item_id and item.parent_id == parent_id:
                return self.items.pop(index)
        return None

    def clear(self) -> None:
        self.items.clear()

    # ----------------------------
    # Atomicity support
    # ----------------------------
    def snapshot(self) -> list[Item]:
        """Copy the current contents (Items are cloned, not shared)."""
        return [
            Item(
                name=item.name,
                id=item.id,
                parent_id=item.parent_id,
                is_directory=item.is_directory,
            )
            for item in self.items
        ]

    def restore(self, items: list[Item]) -> None:
        """Replace the contents with a previously taken snapshot."""
        self.items = list(items)
