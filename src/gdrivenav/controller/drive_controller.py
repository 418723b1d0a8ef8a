"""Google Drive REST controller (internal use only)."""

from __future__ import annotations

import logging
import mimetypes
import os
import time
from dataclasses import dataclass
from typing import Any, BinaryIO, Callable, Iterator, Optional, TypeVar

import requests

from gdrivenav.auth import OAuthClient
from gdrivenav.errors import (
    ApiError,
    InvalidArgumentError,
    NetworkError,
    ProtocolError,
    RateLimitError,
)
from gdrivenav.models import Item
from gdrivenav.util.http import read_json, send
from gdrivenav.util.mime import DEFAULT_UPLOAD_MIME, FOLDER_MIME

from .fields import (
    ABOUT_FIELDS,
    ABOUT_URL,
    FILES_URL,
    UPLOAD_URL,
    file_url,
    listing_params,
)
from .schemas import AboutResponse, CreatedFile, FileListPage, FileResource

logger = logging.getLogger(__name__)

T = TypeVar("T")

DOWNLOAD_CHUNK_SIZE: int = 64 * 1024


@dataclass(frozen=True)
class _RetryPolicy:
    max_retries: int = 3
    initial_delay_sec: float = 1.0


class GoogleDriveController:
    """
    Drive REST controller (internal only).

    Notes:
        - Every call first makes sure the access token is valid (refreshing
          if needed); a failed refresh aborts before any network call.
        - Methods raise gdrivenav errors; they never touch a TreeCache.
    """

    def __init__(self, auth: OAuthClient, session: requests.Session) -> None:
        self._auth = auth
        self._session = session
        self._retry_policy = _RetryPolicy()

    # ----------------------------
    # Public API
    # ----------------------------
    def get_root_id(self) -> str:
        payload = self._request_json(
            "GET",
            ABOUT_URL,
            params={"fields": ABOUT_FIELDS},
        )
        root_id = AboutResponse.from_json(payload).root_folder_id
        logger.info("Root obtained: %s", root_id)
        return root_id

    def list_page(self, page_token: Optional[str] = None) -> FileListPage:
        payload = self._request_json("GET", FILES_URL, params=listing_params(page_token))
        return FileListPage.from_json(payload)

    def iter_listing(self) -> Iterator[list[Item]]:
        """
        Yield the Items of each listing page, following nextPageToken.

        A malformed page raises before yielding anything from that page.
        """
        page_token: Optional[str] = None
        page_count = 0
        while True:
            page = self.list_page(page_token)
            page_count += 1
            logger.debug("Listing page %d: %d entries.", page_count, len(page.files))
            yield [resource.to_item() for resource in page.files]

            page_token = page.next_page_token
            if not page_token:
                break

    def create_folder(self, name: str, parent_id: str) -> str:
        body: dict[str, Any] = {"name": name, "mimeType": FOLDER_MIME}
        if parent_id:
            body["parents"] = [parent_id]

        payload = self._request_json("POST", FILES_URL, json_body=body)
        return CreatedFile.from_json(payload).id

    def delete(self, file_id: str) -> None:
        """Permanently delete a file or (non-recursively) a folder."""
        self._request_json("DELETE", file_url(file_id))

    def upload_file(self, local_path: str, parent_id: str) -> Item:
        """
        Upload via Drive's resumable protocol.

        Phase 1 POSTs the metadata and reads the session URL from the Location
        header. Phase 2 PUTs the file body to that URL (no bearer header).
        """
        if not local_path or not isinstance(local_path, str):
            raise InvalidArgumentError("local_path must be a non-empty string")

        try:
            f = open(local_path, "rb")
        except OSError as exc:
            raise InvalidArgumentError(
                "Local file is not readable",
                details={"local_path": local_path},
                cause=exc,
            ) from exc

        with f:
            name = os.path.basename(local_path)
            content_type = mimetypes.guess_type(name)[0] or DEFAULT_UPLOAD_MIME

            body: dict[str, Any] = {"name": name}
            if parent_id:
                body["parents"] = [parent_id]

            location = self._execute(lambda: self._start_upload_session(body, content_type))

            response = send(
                self._session,
                "PUT",
                location,
                data=f,
                headers={"Content-Type": content_type},
            )
            payload = read_json(response)

        created = FileResource.from_upload(payload)
        return created.to_item(parent_id=parent_id)

    def download_file(self, file_id: str, local_path: str) -> None:
        """Stream file content to local_path; a partial file is removed on failure."""
        headers = self._auth.authorization_header()
        response = send(
            self._session,
            "GET",
            file_url(file_id),
            params={"alt": "media"},
            headers=headers,
            stream=True,
        )
        with response:
            if not response.ok:
                # Raises: error object or status mapping.
                read_json(response)

            out = _open_destination(local_path)
            try:
                with out:
                    for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                        if chunk:
                            out.write(chunk)
            except (OSError, requests.RequestException) as exc:
                _remove_partial(local_path)
                logger.error("Download of %s failed: %s", file_id, exc)
                raise NetworkError(
                    "Download failed",
                    details={"file_id": file_id, "local_path": local_path},
                    cause=exc,
                ) from exc

    # ----------------------------
    # Internals
    # ----------------------------
    def _request_json(
        self,
        method: str,
        url: str,
        *,
        params: Optional[dict[str, str]] = None,
        json_body: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        def call() -> dict[str, Any]:
            headers = self._auth.authorization_header()
            kwargs: dict[str, Any] = {"headers": headers}
            if params is not None:
                kwargs["params"] = params
            if json_body is not None:
                kwargs["json"] = json_body
            response = send(self._session, method, url, **kwargs)
            return read_json(response)

        return self._execute(call)

    def _start_upload_session(self, body: dict[str, Any], content_type: str) -> str:
        headers = self._auth.authorization_header()
        headers["X-Upload-Content-Type"] = content_type
        response = send(
            self._session,
            "POST",
            UPLOAD_URL,
            params={"uploadType": "resumable"},
            json=body,
            headers=headers,
        )
        read_json(response)

        location = response.headers.get("Location")
        if not location:
            logger.error("Error extracting location from upload request headers.")
            raise ProtocolError("Upload session response has no Location header")
        return location

    def _execute(self, func: Callable[[], T]) -> T:
        delay = self._retry_policy.initial_delay_sec
        for attempt in range(self._retry_policy.max_retries + 1):
            try:
                return func()
            except (RateLimitError, NetworkError, ApiError) as exc:
                if self._should_retry(exc) and attempt < self._retry_policy.max_retries:
                    logger.warning(
                        "%s on attempt %d, retrying in %.1fs...",
                        exc.__class__.__name__,
                        attempt + 1,
                        delay,
                    )
                    time.sleep(delay)
                    delay *= 2
                    continue
                raise

        raise ApiError("Unexpected retry loop termination")

    def _should_retry(self, exc: Exception) -> bool:
        if isinstance(exc, (RateLimitError, NetworkError)):
            return True
        if isinstance(exc, ApiError):
            status_code = exc.details.get("status_code")
            return isinstance(status_code, int) and 500 <= status_code <= 599
        return False


def _open_destination(local_path: str) -> BinaryIO:
    """Create parent directories and open local_path for writing."""
    try:
        parent_dir = os.path.dirname(local_path)
        if parent_dir:
            os.makedirs(parent_dir, exist_ok=True)
        return open(local_path, "wb")
    except OSError as exc:
        logger.error("Cannot write download to %s: %s", local_path, exc)
        raise InvalidArgumentError(
            "Download destination is not writable",
            details={"local_path": local_path},
            cause=exc,
        ) from exc


def _remove_partial(local_path: str) -> None:
    if not os.path.isfile(local_path):
        return
    try:
        os.remove(local_path)
    except OSError as exc:
        logger.warning("Could not remove partial download %s: %s", local_path, exc)
