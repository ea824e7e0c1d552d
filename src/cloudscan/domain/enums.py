"""Domain enums for cloudscan.

This module contains enums shared by the rule catalog, the providers and
the snapshot cache.
"""

from enum import Enum


class Severity(Enum):
    """Ordinal risk level assigned to a rule category.

    Ordering: HIGH > MEDIUM > LOW. Use ``rank`` for comparisons and sorting;
    the string value is what gets persisted.
    """

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @property
    def rank(self) -> int:
        """Return the ordinal weight (HIGH=3, MEDIUM=2, LOW=1)."""
        return _SEVERITY_RANKS[self]


_SEVERITY_RANKS: dict[Severity, int] = {
    Severity.HIGH: 3,
    Severity.MEDIUM: 2,
    Severity.LOW: 1,
}


class ProviderKind(Enum):
    """Storage provider tag used to select enumerator and tree builder.

    Values double as snapshot cache keys.
    """

    DRIVE = "drive"  # Parent-graph hierarchy (Google Drive)
    DROPBOX = "dropbox"  # Flat-path hierarchy (Dropbox)
