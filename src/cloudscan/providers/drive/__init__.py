"""Google Drive provider (parent-graph hierarchy model)."""

from cloudscan.providers.drive.client import DriveClient
from cloudscan.providers.drive.enumerator import DriveEnumerator
from cloudscan.providers.drive.normalize import FOLDER_MIME_TYPE, normalize_drive_file
from cloudscan.providers.drive.paths import FolderMap, FolderPathResolver
from cloudscan.providers.drive.tree import DriveTreeBuilder

__all__ = [
    "FOLDER_MIME_TYPE",
    "DriveClient",
    "DriveEnumerator",
    "DriveTreeBuilder",
    "FolderMap",
    "FolderPathResolver",
    "normalize_drive_file",
]
