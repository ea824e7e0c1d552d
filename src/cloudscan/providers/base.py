"""Provider-agnostic interfaces for listing, enumeration and tree building.

A provider contributes three things:

- a listing source (an HTTP client) that returns raw pages of entries,
- an enumerator that pages through the source and normalizes entries into
  FileRecords,
- a tree builder that turns the complete record set into a FolderNode tree.

The scan coordinator only talks to these interfaces.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol

from cloudscan.domain import FileRecord, FolderNode

logger = logging.getLogger(__name__)

# Path reported for records at (or unresolvable below) the storage root
ROOT_PATH = "/"

# Progress is reported after every page and every N records within a page
PROGRESS_INTERVAL = 10

RecordHandler = Callable[[FileRecord], None]
ProgressHandler = Callable[[int, int], None]


class ProviderError(Exception):
    """Raised when a remote listing call fails."""


class ProviderAuthError(ProviderError):
    """Raised when the provider rejects the access token."""


@dataclass(frozen=True)
class Page:
    """One page of raw provider entries."""

    entries: list[dict[str, Any]] = field(default_factory=list)
    next_token: str | None = None  # None when there are no further pages


@dataclass(frozen=True)
class EntryMetadata:
    """Minimal metadata for a single entry, used to walk parent chains."""

    name: str
    parent_ids: tuple[str, ...] = ()


class ListingSource(Protocol):
    """Remote listing source for a provider."""

    def list_page(self, token: str | None = None) -> Page:
        """Return the page identified by ``token`` (first page if None)."""
        ...

    def close(self) -> None:
        """Release any network resources."""
        ...


class ParentGraphSource(ListingSource, Protocol):
    """Listing source that can also look up a single entry by id."""

    def get_entry_metadata(self, entry_id: str) -> EntryMetadata:
        """Return name and parents of ``entry_id``."""
        ...


class ScanProgressObserver(Protocol):
    """Protocol for scan progress callbacks. Purely informational."""

    def on_progress(self, fetched: int, scanned: int, findings: int) -> None:
        """Called after every page and every few records."""
        ...


class ProviderEnumerator(ABC):
    """Pages through a listing source and yields normalized records.

    Pagination is an explicit loop over continuation tokens. Each page is
    fully normalized, and each record handed to ``on_record``, before the
    next page is requested. A failed page fetch propagates and aborts the
    enumeration.
    """

    def __init__(self, source: ListingSource) -> None:
        self._source = source
        self.fetched = 0
        self.scanned = 0

    @property
    def source(self) -> ListingSource:
        """The underlying listing source."""
        return self._source

    @abstractmethod
    def normalize(self, entry: dict[str, Any]) -> FileRecord | None:
        """Convert a raw entry to a FileRecord, or None to skip it."""

    @abstractmethod
    def folder_path(self, record: FileRecord) -> str:
        """Return the human-readable folder path containing ``record``."""

    def _record_seen(self, record: FileRecord) -> None:
        """Hook invoked for every normalized record before ``on_record``."""

    def enumerate(
        self,
        on_record: RecordHandler | None = None,
        on_progress: ProgressHandler | None = None,
    ) -> list[FileRecord]:
        """Retrieve the complete file set.

        Args:
            on_record: Called with each record as soon as it is normalized.
            on_progress: Called with ``(fetched, scanned)`` when a page arrives,
                after every PROGRESS_INTERVAL records and once the page has
                been processed. Repeated identical counts are reported once.

        Returns:
            All records in listing order.

        Raises:
            ProviderError: If any page fetch fails.
        """
        self.fetched = 0
        self.scanned = 0
        records: list[FileRecord] = []
        token: str | None = None
        pages = 0
        last_reported: tuple[int, int] | None = None

        def report() -> None:
            nonlocal last_reported
            counts = (self.fetched, self.scanned)
            if on_progress is None or counts == last_reported:
                return
            last_reported = counts
            on_progress(*counts)

        while True:
            page = self._source.list_page(token)
            pages += 1
            self.fetched += len(page.entries)
            report()

            for entry in page.entries:
                record = self.normalize(entry)
                if record is None:
                    continue
                self.scanned += 1
                records.append(record)
                self._record_seen(record)
                if on_record is not None:
                    on_record(record)
                if self.scanned % PROGRESS_INTERVAL == 0:
                    report()
            report()

            token = page.next_token
            if not token:
                break
            logger.debug(
                "Fetched %d entries over %d pages, requesting next page",
                self.fetched,
                pages,
            )

        logger.info(
            "Enumeration complete: %d fetched, %d records over %d pages",
            self.fetched,
            self.scanned,
            pages,
            extra={"fetched": self.fetched, "scanned": self.scanned},
        )
        return records


class TreeBuilder(ABC):
    """Reconstructs a folder tree from a complete record set.

    Implementations are pure: no network calls, and the resulting structure
    depends only on the set of records, not their order.
    """

    root_name: str = "Root"

    @abstractmethod
    def build(self, records: Iterable[FileRecord]) -> FolderNode:
        """Return the synthetic root folder holding every record."""
