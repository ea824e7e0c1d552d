"""Enumerator for the flat-path (Dropbox) model."""

from __future__ import annotations

from typing import Any

from cloudscan.domain import FileRecord
from cloudscan.providers.base import ROOT_PATH, ProviderEnumerator
from cloudscan.providers.dropbox.normalize import normalize_dropbox_entry


def parent_path(full_path: str) -> str:
    """Return the folder portion of a slash-delimited path.

    >>> parent_path("/a/b/secret.key")
    '/a/b'
    >>> parent_path("/top.env")
    '/'
    """
    parent, _, _ = full_path.rstrip("/").rpartition("/")
    return parent or ROOT_PATH


class DropboxEnumerator(ProviderEnumerator):
    """Pages through Dropbox; folder paths come straight from the record."""

    def normalize(self, entry: dict[str, Any]) -> FileRecord | None:
        return normalize_dropbox_entry(entry)

    def folder_path(self, record: FileRecord) -> str:
        return parent_path(record.full_path or "")
