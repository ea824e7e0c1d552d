"""Scan coordination."""

from cloudscan.scanner.orchestrator import (
    ScanCoordinator,
    count_severities,
    run_scan,
    sort_findings,
)

__all__ = [
    "ScanCoordinator",
    "count_severities",
    "run_scan",
    "sort_findings",
]
