"""Internal controller exports for gdrivenav."""

from __future__ import annotations

from .drive_controller import GoogleDriveController

__all__ = ["GoogleDriveController"]
