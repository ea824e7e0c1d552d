"""Domain models and enums for cloudscan.

Usage:
    from cloudscan.domain import FileRecord, Finding, ScanResult, Severity
"""

from .enums import ProviderKind, Severity
from .models import (
    ROOT_ID,
    FileRecord,
    Finding,
    FolderNode,
    LeafNode,
    RiskMatch,
    ScanResult,
    ScanSummary,
    TreeNode,
)

__all__ = [
    # Models
    "FileRecord",
    "Finding",
    "FolderNode",
    "LeafNode",
    "RiskMatch",
    "ScanResult",
    "ScanSummary",
    "TreeNode",
    "ROOT_ID",
    # Enums
    "ProviderKind",
    "Severity",
]
