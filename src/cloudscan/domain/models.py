"""Domain models for cloudscan.

These types are shared by every provider. A scan builds them fresh (or the
snapshot cache restores them wholesale); nothing is updated incrementally.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from cloudscan.domain.enums import Severity

# Synthetic id of every tree root
ROOT_ID = "root"


@dataclass(frozen=True)
class FileRecord:
    """Normalized listing entry from any provider.

    Exactly one locator is populated: ``parent_ids`` for parent-graph
    providers, ``full_path`` for flat-path providers.
    """

    id: str
    name: str
    is_folder: bool
    size: int | None = None
    modified_time: str | None = None  # ISO-8601 as reported by the provider
    parent_ids: tuple[str, ...] | None = None
    full_path: str | None = None
    mime_type: str | None = None  # Drive only

    def __post_init__(self) -> None:
        """Validate that exactly one locator style is set."""
        if (self.parent_ids is None) == (self.full_path is None):
            raise ValueError(
                f"FileRecord {self.id!r} must have exactly one of "
                "parent_ids or full_path"
            )

    @property
    def primary_parent(self) -> str | None:
        """Return the first parent id, or None when the record is parentless."""
        if self.parent_ids:
            return self.parent_ids[0]
        return None


@dataclass(frozen=True)
class RiskMatch:
    """A single rule hit against a file name."""

    category: str
    severity: Severity
    description: str


@dataclass(frozen=True)
class Finding:
    """A file record paired with every rule it matched."""

    record: FileRecord
    risks: tuple[RiskMatch, ...]
    folder_path: str

    @property
    def max_severity(self) -> Severity:
        """Return the highest severity among the matched risks."""
        return max((r.severity for r in self.risks), key=lambda s: s.rank)


@dataclass(frozen=True)
class LeafNode:
    """A file in the reconstructed tree."""

    name: str
    id: str
    size: int | None = None
    modified_time: str | None = None
    mime_type: str | None = None


@dataclass
class FolderNode:
    """A folder in the reconstructed tree.

    ``children`` maps a key unique within this folder to the child node. The
    key equals the child's name unless two children share a name, in which
    case later ones get a suffixed key (see ``providers.tree_utils``).
    """

    name: str
    id: str
    children: dict[str, TreeNode] = field(default_factory=dict)

    def walk(self):
        """Yield every node below this folder, depth first."""
        for child in self.children.values():
            yield child
            if isinstance(child, FolderNode):
                yield from child.walk()


TreeNode = FolderNode | LeafNode


@dataclass(frozen=True)
class ScanSummary:
    """Counters and metadata describing one scan."""

    total_records_scanned: int
    finding_count: int
    scan_timestamp: str  # ISO-8601 UTC
    provider_label: str
    total_records_fetched: int = 0
    severity_counts: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ScanResult:
    """Everything a scan produces; the unit persisted by the snapshot cache."""

    findings: tuple[Finding, ...]
    tree: FolderNode
    summary: ScanSummary
