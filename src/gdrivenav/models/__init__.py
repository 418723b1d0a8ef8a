"""Public model exports for gdrivenav."""

from __future__ import annotations

from .item import Item

__all__ = ["Item"]
