"""Shared test fixtures for cloudscan."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from cloudscan.providers import EntryMetadata, Page, ProviderError


class FakeListingSource:
    """In-memory listing source serving pre-built pages.

    Page tokens are the page index as a string. Metadata lookups are served
    from ``metadata``; ids in ``failing_ids`` (or missing) raise
    ProviderError.
    """

    def __init__(
        self,
        pages: list[list[dict[str, Any]]],
        *,
        fail_on_page: int | None = None,
        metadata: dict[str, EntryMetadata] | None = None,
        failing_ids: tuple[str, ...] = (),
    ) -> None:
        self.pages = pages
        self.fail_on_page = fail_on_page
        self.metadata = dict(metadata or {})
        self.failing_ids = set(failing_ids)
        self.requested_tokens: list[str | None] = []
        self.metadata_calls: list[str] = []
        self.closed = False

    def list_page(self, token: str | None = None) -> Page:
        self.requested_tokens.append(token)
        index = int(token) if token else 0
        if self.fail_on_page is not None and index == self.fail_on_page:
            raise ProviderError(f"page {index} failed")
        if not self.pages:
            return Page()
        next_token = str(index + 1) if index + 1 < len(self.pages) else None
        return Page(entries=list(self.pages[index]), next_token=next_token)

    def get_entry_metadata(self, entry_id: str) -> EntryMetadata:
        self.metadata_calls.append(entry_id)
        if entry_id in self.failing_ids or entry_id not in self.metadata:
            raise ProviderError(f"File not found: {entry_id}")
        return self.metadata[entry_id]

    def close(self) -> None:
        self.closed = True


def make_drive_entry(
    entry_id: str,
    name: str,
    parents: tuple[str, ...] | None = ("root",),
    *,
    folder: bool = False,
    size: int | None = None,
) -> dict[str, Any]:
    """Build a raw Drive v3 file resource."""
    entry: dict[str, Any] = {
        "id": entry_id,
        "name": name,
        "mimeType": (
            "application/vnd.google-apps.folder" if folder else "text/plain"
        ),
        "modifiedTime": "2024-01-15T10:30:00.000Z",
    }
    if parents is not None:
        entry["parents"] = list(parents)
    if size is not None:
        entry["size"] = str(size)
    return entry


def make_dropbox_entry(
    path: str,
    *,
    folder: bool = False,
    entry_id: str | None = None,
    size: int = 100,
) -> dict[str, Any]:
    """Build a raw Dropbox metadata entry."""
    entry: dict[str, Any] = {
        ".tag": "folder" if folder else "file",
        "name": path.rsplit("/", 1)[-1],
        "path_display": path,
        "path_lower": path.lower(),
        "id": entry_id or f"id:{path.lower()}",
    }
    if not folder:
        entry["size"] = size
        entry["client_modified"] = "2024-01-15T10:30:00Z"
        entry["server_modified"] = "2024-01-16T08:00:00Z"
    return entry


@pytest.fixture
def fake_source() -> type[FakeListingSource]:
    """Return the in-memory listing source class."""
    return FakeListingSource


@pytest.fixture
def drive_entry() -> Callable[..., dict[str, Any]]:
    """Return a factory for raw Drive file resources."""
    return make_drive_entry


@pytest.fixture
def dropbox_entry() -> Callable[..., dict[str, Any]]:
    """Return a factory for raw Dropbox metadata entries."""
    return make_dropbox_entry


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """Return an empty snapshot directory path (not yet created)."""
    return tmp_path / "cache"


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level after a test reconfigures them."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
