"""Google Drive v3 API client for file listing.

This module provides a read-only HTTP client for the Drive v3 REST API. It
expects an already-issued OAuth bearer token; obtaining and refreshing tokens
happens outside cloudscan.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from cloudscan.providers.base import (
    EntryMetadata,
    Page,
    ProviderAuthError,
    ProviderError,
)

logger = logging.getLogger(__name__)

DRIVE_API_URL = "https://www.googleapis.com/drive/v3"

# Only non-trashed files; the fields mirror what FileRecord needs
LIST_QUERY = "trashed = false"
LIST_FIELDS = "nextPageToken, files(id, name, mimeType, size, modifiedTime, parents)"
METADATA_FIELDS = "id, name, parents"

DEFAULT_PAGE_SIZE = 100


class DriveClient:
    """HTTP client for the Google Drive v3 files endpoints.

    Implements the parent-graph listing source: paged file listing plus a
    single-file metadata lookup used to walk parent chains.
    """

    def __init__(
        self,
        access_token: str,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        timeout_seconds: int = 30,
        base_url: str = DRIVE_API_URL,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            access_token: OAuth bearer token with a Drive read-only scope.
            page_size: Files requested per page (1-1000).
            timeout_seconds: Per-request timeout.
            base_url: API root, overridable for testing.
            transport: Optional httpx transport (tests use MockTransport).
        """
        self._access_token = access_token
        self._page_size = page_size
        self._timeout = timeout_seconds
        self._base_url = base_url.rstrip("/")
        self._transport = transport
        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self._base_url,
                timeout=self._timeout,
                headers=self._headers(),
                transport=self._transport,
            )
        return self._client

    def _headers(self) -> dict[str, str]:
        """Get request headers with the bearer token."""
        return {"Authorization": f"Bearer {self._access_token}"}

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _get_json(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        """Issue a GET request and decode the JSON body.

        Raises:
            ProviderAuthError: If the token is rejected (401).
            ProviderError: On any other transport, HTTP or decoding failure.
        """
        client = self._get_client()
        try:
            response = client.get(url, params=params)
            if response.status_code == 401:
                raise ProviderAuthError("Google Drive rejected the access token")
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            raise ProviderError(f"Google Drive request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise ProviderError(f"Google Drive request failed: {e}") from e
        except ValueError as e:
            raise ProviderError(f"Google Drive returned invalid JSON: {e}") from e

    def list_page(self, token: str | None = None) -> Page:
        """Fetch one page of non-trashed files.

        Args:
            token: ``nextPageToken`` from the previous page, or None.

        Returns:
            Page of raw file resources.
        """
        params: dict[str, Any] = {
            "q": LIST_QUERY,
            "fields": LIST_FIELDS,
            "pageSize": self._page_size,
        }
        if token:
            params["pageToken"] = token
        data = self._get_json("/files", params)
        files = data.get("files") or []
        logger.debug("Drive returned %d files", len(files))
        return Page(entries=files, next_token=data.get("nextPageToken") or None)

    def get_entry_metadata(self, entry_id: str) -> EntryMetadata:
        """Look up the name and parents of a single file or folder."""
        data = self._get_json(f"/files/{entry_id}", {"fields": METADATA_FIELDS})
        return EntryMetadata(
            name=data.get("name", ""),
            parent_ids=tuple(data.get("parents") or ()),
        )
