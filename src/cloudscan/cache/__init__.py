"""Snapshot cache for scan results.

Public API:
    - SnapshotCache: Save/load one ScanResult per provider key
    - SnapshotNotFoundError: Missing or corrupt snapshot
    - snapshot_age: Time since a snapshot's scan
    - result_to_dict: Persisted JSON structure of a ScanResult
"""

from cloudscan.cache.serialization import result_from_model, result_to_dict
from cloudscan.cache.snapshot import (
    SnapshotCache,
    SnapshotNotFoundError,
    snapshot_age,
)

__all__ = [
    "SnapshotCache",
    "SnapshotNotFoundError",
    "result_from_model",
    "result_to_dict",
    "snapshot_age",
]
