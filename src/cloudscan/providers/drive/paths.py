"""Folder path resolution for the parent-graph model.

Drive records only know their parent ids. Turning that into a readable path
means walking the primary-parent chain up to a parentless folder, looking up
every ancestor the scan has not already seen.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from cloudscan.domain import FileRecord
from cloudscan.providers.base import ROOT_PATH, ParentGraphSource, ProviderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FolderEntry:
    """Name and parents of a known folder."""

    name: str
    parent_ids: tuple[str, ...] = ()


# id -> entry for every folder a scan knows of; None records a failed lookup
FolderMap = dict[str, FolderEntry | None]


def remember_folder(folders: FolderMap, record: FileRecord) -> None:
    """Add a listed folder record to ``folders``."""
    folders[record.id] = FolderEntry(
        name=record.name, parent_ids=record.parent_ids or ()
    )


def primary_parent(folders: FolderMap, folder_id: str) -> str | None:
    """Return the first parent id recorded for ``folder_id``, if any."""
    entry = folders.get(folder_id)
    if entry is None or not entry.parent_ids:
        return None
    return entry.parent_ids[0]


class FolderPathResolver:
    """Resolves folder paths with one memoized folder map per scan.

    Folder records seen during enumeration are registered up front, so only
    ancestors the listing never returned (the Drive root folder, folders
    shared from other accounts) cost a remote lookup, and each such id is
    looked up at most once. Failed lookups are memoized too. Passing the
    same ``folders`` map to DriveTreeBuilder lets tree assembly read the
    entries gathered here.
    """

    def __init__(
        self, source: ParentGraphSource, folders: FolderMap | None = None
    ) -> None:
        self._source = source
        self.folders: FolderMap = folders if folders is not None else {}
        self._paths: dict[str, str] = {}
        self.lookups = 0

    def register(self, record: FileRecord) -> None:
        """Remember a folder record from the listing."""
        if record.is_folder:
            remember_folder(self.folders, record)

    def _lookup(self, folder_id: str) -> FolderEntry | None:
        """Return the memoized entry for ``folder_id``, fetching it if needed."""
        if folder_id in self.folders:
            return self.folders[folder_id]

        self.lookups += 1
        entry: FolderEntry | None
        try:
            metadata = self._source.get_entry_metadata(folder_id)
        except ProviderError as e:
            logger.debug("Could not look up folder %s: %s", folder_id, e)
            entry = None
        else:
            entry = FolderEntry(name=metadata.name, parent_ids=metadata.parent_ids)
        self.folders[folder_id] = entry
        return entry

    def resolve(self, parent_ids: Sequence[str]) -> str:
        """Return the path of the folder that ``parent_ids`` points into.

        Args:
            parent_ids: A record's parent ids; only the first is followed.

        Returns:
            ``/Top/.../Parent``, or ``/`` when the record is parentless, any
            ancestor lookup fails, or the chain loops.
        """
        if not parent_ids:
            return ROOT_PATH

        start = parent_ids[0]
        if start in self._paths:
            return self._paths[start]

        names: list[str] = []
        seen: set[str] = set()
        current: str | None = start
        while current is not None:
            if current in seen:
                logger.warning("Parent chain of folder %s loops, using root", start)
                return self._remember(start, ROOT_PATH)
            seen.add(current)
            entry = self._lookup(current)
            if entry is None:
                return self._remember(start, ROOT_PATH)
            names.append(entry.name)
            current = primary_parent(self.folders, current)

        return self._remember(start, "/" + "/".join(reversed(names)))

    def _remember(self, folder_id: str, path: str) -> str:
        self._paths[folder_id] = path
        return path
