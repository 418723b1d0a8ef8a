"""Interactive command layer for gdrivenav."""

from __future__ import annotations

from .commands import CommandDispatcher
from .main import main
from .reader import LineReader

__all__ = ["CommandDispatcher", "LineReader", "main"]
