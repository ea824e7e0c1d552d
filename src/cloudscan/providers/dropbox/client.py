"""Dropbox v2 API client for recursive file listing.

This module provides a read-only HTTP client for the Dropbox
``files/list_folder`` RPC endpoints. It expects an already-issued bearer
token; obtaining and refreshing tokens happens outside cloudscan.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from cloudscan.providers.base import Page, ProviderAuthError, ProviderError

logger = logging.getLogger(__name__)

DROPBOX_API_URL = "https://api.dropboxapi.com/2"


class DropboxClient:
    """HTTP client for the Dropbox v2 ``files/list_folder`` endpoints.

    Implements the flat-path listing source. The continuation token is the
    Dropbox cursor, reported only while ``has_more`` is true.
    """

    def __init__(
        self,
        access_token: str,
        *,
        timeout_seconds: int = 30,
        base_url: str = DROPBOX_API_URL,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            access_token: OAuth bearer token with ``files.metadata.read``.
            timeout_seconds: Per-request timeout.
            base_url: API root, overridable for testing.
            transport: Optional httpx transport (tests use MockTransport).
        """
        self._access_token = access_token
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
                headers={"Authorization": f"Bearer {self._access_token}"},
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def _post(self, endpoint: str, body: dict[str, Any]) -> dict[str, Any]:
        """Call an RPC endpoint and decode the JSON result.

        Raises:
            ProviderAuthError: If the token is rejected (401).
            ProviderError: On any other transport, HTTP or decoding failure.
        """
        client = self._get_client()
        try:
            response = client.post(endpoint, json=body)
            if response.status_code == 401:
                raise ProviderAuthError("Dropbox rejected the access token")
            if response.status_code == 409:
                # Endpoint-specific error, e.g. an expired cursor
                raise ProviderError(f"Dropbox API error: {response.text}")
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            raise ProviderError(f"Dropbox request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise ProviderError(f"Dropbox request failed: {e}") from e
        except ValueError as e:
            raise ProviderError(f"Dropbox returned invalid JSON: {e}") from e

    def list_page(self, token: str | None = None) -> Page:
        """Fetch one page of the recursive listing.

        Args:
            token: Cursor from the previous page, or None to start at the root.

        Returns:
            Page of raw metadata entries.
        """
        if token:
            data = self._post("/files/list_folder/continue", {"cursor": token})
        else:
            data = self._post(
                "/files/list_folder",
                {
                    "path": "",
                    "recursive": True,
                    "include_deleted": False,
                    "include_has_explicit_shared_members": False,
                    "include_mounted_folders": False,
                },
            )
        entries = data.get("entries") or []
        logger.debug("Dropbox returned %d entries", len(entries))
        next_token = data.get("cursor") if data.get("has_more") else None
        return Page(entries=entries, next_token=next_token or None)
