"""Provider selection by tag.

The scan coordinator works on a Provider bundle and never on concrete
provider types; this module is the only place that maps a ProviderKind to
its enumerator and tree builder.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from cloudscan.domain import ProviderKind
from cloudscan.providers.base import (
    ListingSource,
    ParentGraphSource,
    ProviderEnumerator,
    TreeBuilder,
)
from cloudscan.providers.drive import (
    DriveClient,
    DriveEnumerator,
    DriveTreeBuilder,
    FolderMap,
    FolderPathResolver,
)
from cloudscan.providers.dropbox import (
    DropboxClient,
    DropboxEnumerator,
    DropboxTreeBuilder,
)

if TYPE_CHECKING:
    from cloudscan.config.models import CloudScanConfig

logger = logging.getLogger(__name__)

PROVIDER_LABELS: dict[ProviderKind, str] = {
    ProviderKind.DRIVE: "GoogleDrive",
    ProviderKind.DROPBOX: "Dropbox",
}


class MissingCredentialsError(Exception):
    """Raised when no access token is configured for a provider."""


@dataclass(frozen=True)
class Provider:
    """Everything the coordinator needs to scan one provider."""

    kind: ProviderKind
    enumerator: ProviderEnumerator
    tree_builder: TreeBuilder

    @property
    def label(self) -> str:
        """Display label recorded in the scan summary."""
        return PROVIDER_LABELS[self.kind]

    @property
    def key(self) -> str:
        """Snapshot cache key."""
        return self.kind.value

    def close(self) -> None:
        """Release the listing source's network resources."""
        self.enumerator.source.close()


def build_provider(kind: ProviderKind, source: ListingSource) -> Provider:
    """Bundle ``source`` with the enumerator and tree builder for ``kind``.

    Args:
        kind: Provider tag.
        source: Listing source; must be a ParentGraphSource for Drive.

    Returns:
        Provider ready to scan. A fresh enumerator is created on each call,
        so folder memoization never leaks between scans.
    """
    if kind is ProviderKind.DRIVE:
        parent_source: ParentGraphSource = source  # type: ignore[assignment]
        # One folder map per scan, read by path resolution and tree assembly
        folders: FolderMap = {}
        resolver = FolderPathResolver(parent_source, folders)
        return Provider(
            kind, DriveEnumerator(parent_source, resolver), DriveTreeBuilder(folders)
        )
    if kind is ProviderKind.DROPBOX:
        return Provider(kind, DropboxEnumerator(source), DropboxTreeBuilder())
    raise ValueError(f"Unsupported provider: {kind}")


def create_provider(kind: ProviderKind, config: CloudScanConfig) -> Provider:
    """Create a Provider backed by the real HTTP client.

    Raises:
        MissingCredentialsError: If no access token is configured.
    """
    source: ListingSource
    if kind is ProviderKind.DRIVE:
        if not config.drive.access_token:
            raise MissingCredentialsError(
                "No Google Drive access token configured "
                "(set CLOUDSCAN_DRIVE_TOKEN or [drive] access_token)"
            )
        source = DriveClient(
            config.drive.access_token,
            page_size=config.drive.page_size,
            timeout_seconds=config.drive.timeout_seconds,
        )
    elif kind is ProviderKind.DROPBOX:
        if not config.dropbox.access_token:
            raise MissingCredentialsError(
                "No Dropbox access token configured "
                "(set CLOUDSCAN_DROPBOX_TOKEN or [dropbox] access_token)"
            )
        source = DropboxClient(
            config.dropbox.access_token,
            timeout_seconds=config.dropbox.timeout_seconds,
        )
    else:
        raise ValueError(f"Unsupported provider: {kind}")

    logger.debug("Created %s listing source", PROVIDER_LABELS[kind])
    return build_provider(kind, source)
