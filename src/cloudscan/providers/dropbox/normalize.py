"""Normalization of Dropbox metadata entries into FileRecords."""

from __future__ import annotations

import logging
from typing import Any

from cloudscan.domain import FileRecord

logger = logging.getLogger(__name__)


def normalize_dropbox_entry(entry: dict[str, Any]) -> FileRecord | None:
    """Convert a Dropbox metadata entry to a FileRecord.

    Returns None for entries that are neither files nor folders (deleted
    markers), which carry no id or size.
    """
    tag = entry.get(".tag")
    if tag not in ("file", "folder"):
        logger.debug("Skipping Dropbox entry with tag %r", tag)
        return None

    path = entry.get("path_display") or entry.get("path_lower") or ""
    is_folder = tag == "folder"
    return FileRecord(
        id=entry.get("id") or f"path:{path.lower()}",
        name=entry.get("name", ""),
        is_folder=is_folder,
        size=None if is_folder else entry.get("size"),
        modified_time=entry.get("client_modified") or entry.get("server_modified"),
        full_path=path,
    )
