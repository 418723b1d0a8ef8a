"""Tree cache exports for gdrivenav."""

from __future__ import annotations

from .tree_cache import TreeCache

__all__ = ["TreeCache"]
