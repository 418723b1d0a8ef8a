from __future__ import annotations

FOLDER_MIME: str = "application/vnd.google-apps.folder"

# Fallback for uploads whose type cannot be guessed from the file name.
DEFAULT_UPLOAD_MIME: str = "application/octet-stream"


def is_folder(mime_type: str) -> bool:
    """Exact match against the Drive folder MIME type."""
    return mime_type == FOLDER_MIME
