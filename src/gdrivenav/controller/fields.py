"""Endpoints and query parameters for the Google Drive REST API."""

from __future__ import annotations

from typing import Optional

# v3 has no way to ask for the root folder id directly; v2 "about" does.
ABOUT_URL: str = "https://www.googleapis.com/drive/v2/about"
FILES_URL: str = "https://www.googleapis.com/drive/v3/files"
UPLOAD_URL: str = "https://www.googleapis.com/upload/drive/v3/files"

ABOUT_FIELDS: str = "rootFolderId"

LIST_FIELDS: str = "nextPageToken,files(name,id,size,parents,mimeType)"
LIST_ORDER_BY: str = "name_natural"
LIST_PAGE_SIZE: int = 256
LIST_QUERY: str = "trashed=false"


def listing_params(page_token: Optional[str] = None) -> dict[str, str]:
    """Query parameters for one page of the file listing."""
    params = {
        "fields": LIST_FIELDS,
        "orderBy": LIST_ORDER_BY,
        "pageSize": str(LIST_PAGE_SIZE),
        "q": LIST_QUERY,
    }
    if page_token:
        params["pageToken"] = page_token
    return params


def file_url(file_id: str) -> str:
    return f"{FILES_URL}/{file_id}"
