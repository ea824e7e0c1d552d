"""Normalization of Drive file resources into FileRecords."""

from __future__ import annotations

from typing import Any

from cloudscan.domain import FileRecord

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"


def normalize_drive_file(entry: dict[str, Any]) -> FileRecord:
    """Convert a Drive v3 file resource to a FileRecord.

    Drive reports ``size`` as a decimal string and omits it for folders and
    Google-native documents.
    """
    size = entry.get("size")
    mime_type = entry.get("mimeType")
    return FileRecord(
        id=entry["id"],
        name=entry.get("name", ""),
        is_folder=mime_type == FOLDER_MIME_TYPE,
        size=int(size) if size is not None else None,
        modified_time=entry.get("modifiedTime"),
        parent_ids=tuple(entry.get("parents") or ()),
        mime_type=mime_type,
    )
