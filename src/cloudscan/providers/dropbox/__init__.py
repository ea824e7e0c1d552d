"""Dropbox provider (flat-path hierarchy model)."""

from cloudscan.providers.dropbox.client import DropboxClient
from cloudscan.providers.dropbox.enumerator import DropboxEnumerator, parent_path
from cloudscan.providers.dropbox.normalize import normalize_dropbox_entry
from cloudscan.providers.dropbox.tree import DropboxTreeBuilder, synthetic_folder_id

__all__ = [
    "DropboxClient",
    "DropboxEnumerator",
    "DropboxTreeBuilder",
    "normalize_dropbox_entry",
    "parent_path",
    "synthetic_folder_id",
]
