"""Enumerator for the parent-graph (Google Drive) model."""

from __future__ import annotations

from typing import Any

from cloudscan.domain import FileRecord
from cloudscan.providers.base import ParentGraphSource, ProviderEnumerator
from cloudscan.providers.drive.normalize import normalize_drive_file
from cloudscan.providers.drive.paths import FolderPathResolver


class DriveEnumerator(ProviderEnumerator):
    """Pages through Drive and resolves folder paths via parent chains."""

    def __init__(
        self,
        source: ParentGraphSource,
        resolver: FolderPathResolver | None = None,
    ) -> None:
        super().__init__(source)
        self.resolver = resolver or FolderPathResolver(source)

    def normalize(self, entry: dict[str, Any]) -> FileRecord:
        return normalize_drive_file(entry)

    def _record_seen(self, record: FileRecord) -> None:
        self.resolver.register(record)

    def folder_path(self, record: FileRecord) -> str:
        return self.resolver.resolve(record.parent_ids or ())
