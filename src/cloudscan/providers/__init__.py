"""Storage providers for cloudscan.

Public API:
    - Provider: Enumerator + tree builder bundle for one provider
    - build_provider: Bundle an existing listing source
    - create_provider: Bundle the real HTTP client from configuration
    - ProviderEnumerator / TreeBuilder: Interfaces implemented per provider
    - ProviderError / ProviderAuthError: Transport failures
"""

from cloudscan.providers.base import (
    PROGRESS_INTERVAL,
    ROOT_PATH,
    EntryMetadata,
    ListingSource,
    Page,
    ParentGraphSource,
    ProviderAuthError,
    ProviderEnumerator,
    ProviderError,
    ScanProgressObserver,
    TreeBuilder,
)
from cloudscan.providers.registry import (
    PROVIDER_LABELS,
    MissingCredentialsError,
    Provider,
    build_provider,
    create_provider,
)

__all__ = [
    "PROGRESS_INTERVAL",
    "PROVIDER_LABELS",
    "ROOT_PATH",
    "EntryMetadata",
    "ListingSource",
    "MissingCredentialsError",
    "Page",
    "ParentGraphSource",
    "Provider",
    "ProviderAuthError",
    "ProviderEnumerator",
    "ProviderError",
    "ScanProgressObserver",
    "TreeBuilder",
    "build_provider",
    "create_provider",
]
