"""Async client for the Drive, Docs, Sheets and Slides REST APIs.

``DriveClient.fetch`` is the crawler's object fetcher: it loads a file's
Drive metadata, then the type-specific body, and extracts the links that
body references.

Public API::

    from paperchaser.api import DriveClient
    from paperchaser.auth import AuthConfig

    async with DriveClient(AuthConfig(access_token="ya29...")) as client:
        drive_object = await client.fetch("1AbC...")
        print(drive_object.links)
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from .auth import AuthConfig, AuthExpiredError, is_invalid_token_response
from .config import FOLDER_ORDER_BY, FOLDER_PAGE_SIZE, SELECTORS
from .document import MIME_DOCUMENT, MIME_FOLDER, MIME_PRESENTATION, MIME_SPREADSHEET, OPEN_URL, DriveObject
from .links import extract_links

LOGGER = logging.getLogger(__name__)

DRIVE_FILES_URL = "https://www.googleapis.com/drive/v2/files/{id}"
DRIVE_CHILDREN_URL = "https://www.googleapis.com/drive/v2/files/{id}/children"
DOCS_URL = "https://docs.googleapis.com/v1/documents/{id}"
SHEETS_URL = "https://sheets.googleapis.com/v4/spreadsheets/{id}"
SLIDES_URL = "https://slides.googleapis.com/v1/presentations/{id}"


class DriveClient:
    """Fetches Drive objects one at a time over a shared httpx client."""

    def __init__(
        self,
        auth: AuthConfig,
        *,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._auth = auth
        self._timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def open(self) -> None:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                headers=self._auth.headers(),
                proxy=self._auth.proxy,
                verify=False,
                timeout=self._timeout,
                transport=self._transport,
            )

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> "DriveClient":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _get_json(
        self, url: str, params: Optional[Dict[str, Any]] = None
    ) -> Optional[Any]:
        """GET *url* and return its JSON body, or None if there is none.

        Raises:
            AuthExpiredError: If the access token was rejected.
        """
        await self.open()
        assert self._client is not None

        try:
            response = await self._client.get(url, params=params)
        except httpx.RequestError as exc:
            LOGGER.warning("Request failed for %s: %s", url, exc)
            return None

        if is_invalid_token_response(response):
            raise AuthExpiredError("Access token is invalid or expired", url=url)

        if response.status_code != 200:
            LOGGER.debug("HTTP %d for %s", response.status_code, url)
            return None

        try:
            return response.json()
        except ValueError:
            LOGGER.debug("Non-JSON response for %s", url)
            return None
        except RecursionError:
            LOGGER.warning("Response for %s is nested too deeply to parse", url)
            return None

    async def get_drive_file_metadata(self, drive_id: str) -> Optional[Dict[str, Any]]:
        data = await self._get_json(DRIVE_FILES_URL.format(id=drive_id))
        return data if isinstance(data, dict) else None

    async def get_google_doc(self, document_id: str) -> Optional[Any]:
        return await self._get_json(DOCS_URL.format(id=document_id))

    async def get_google_sheet(self, sheet_id: str) -> Optional[Any]:
        return await self._get_json(
            SHEETS_URL.format(id=sheet_id), params={"includeGridData": "true"}
        )

    async def get_google_slides(self, slides_id: str) -> Optional[Any]:
        return await self._get_json(SLIDES_URL.format(id=slides_id))

    async def get_folder_children(self, folder_id: str) -> List[Dict[str, Any]]:
        """Return every child of a folder, following ``nextPageToken``."""
        children: List[Dict[str, Any]] = []
        page_token: Optional[str] = None

        while True:
            params: Dict[str, Any] = {
                "maxResults": FOLDER_PAGE_SIZE,
                "orderBy": ",".join(FOLDER_ORDER_BY),
            }
            if page_token:
                params["pageToken"] = page_token

            page = await self._get_json(
                DRIVE_CHILDREN_URL.format(id=folder_id), params=params
            )
            if not isinstance(page, dict):
                break

            children.extend(item for item in page.get("items") or [] if isinstance(item, dict))
            page_token = page.get("nextPageToken")
            if not page_token:
                break

        return children

    async def fetch(self, drive_id: str) -> Optional[DriveObject]:
        """Fetch metadata, body and links for one Drive identifier.

        Returns:
            DriveObject, or None when the file's metadata is not accessible.

        Raises:
            AuthExpiredError: If the access token was rejected.
        """
        metadata = await self.get_drive_file_metadata(drive_id)
        if metadata is None:
            return None

        drive_object = DriveObject(id=drive_id, metadata=metadata)
        mime_type = drive_object.mime_type

        if mime_type == MIME_DOCUMENT:
            drive_object.body = await self.get_google_doc(drive_id)
        elif mime_type == MIME_SPREADSHEET:
            drive_object.body = await self.get_google_sheet(drive_id)
        elif mime_type == MIME_PRESENTATION:
            drive_object.body = await self.get_google_slides(drive_id)
        elif mime_type == MIME_FOLDER:
            drive_object.body = await self.get_folder_children(drive_id)
            drive_object.links = [
                OPEN_URL.format(id=child["id"])
                for child in drive_object.body
                if child.get("id")
            ]
            return drive_object
        else:
            return drive_object

        if drive_object.body is not None:
            native_selectors, text_selectors = SELECTORS[mime_type]
            drive_object.links = extract_links(
                drive_object.body, native_selectors, text_selectors
            )
        return drive_object
