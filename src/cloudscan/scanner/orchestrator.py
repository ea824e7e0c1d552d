"""Scan coordinator: enumerate, classify, build the tree, summarize."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import TYPE_CHECKING

from cloudscan.core import utc_now
from cloudscan.domain import (
    FileRecord,
    Finding,
    ScanResult,
    ScanSummary,
    Severity,
)
from cloudscan.logging import scan_context
from cloudscan.providers.base import (
    ProviderEnumerator,
    ScanProgressObserver,
    TreeBuilder,
)
from cloudscan.rules import Classifier

if TYPE_CHECKING:
    from cloudscan.cache import SnapshotCache
    from cloudscan.providers.registry import Provider

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def sort_findings(findings: Iterable[Finding]) -> list[Finding]:
    """Order findings by descending max severity.

    The sort is stable, so findings of equal severity keep discovery order.
    """
    return sorted(findings, key=lambda f: -f.max_severity.rank)


def count_severities(findings: Iterable[Finding]) -> dict[str, int]:
    """Count findings by max severity; every severity gets a key."""
    counts = {severity.value: 0 for severity in Severity}
    for finding in findings:
        counts[finding.max_severity.value] += 1
    return counts


def _format_timestamp(moment: datetime) -> str:
    return moment.isoformat().replace("+00:00", "Z")


class ScanCoordinator:
    """Runs one full scan of a single provider.

    The coordinator only talks to the enumerator and tree builder
    interfaces. It holds no state between runs: each ``run()`` enumerates
    from scratch.
    """

    def __init__(
        self,
        enumerator: ProviderEnumerator,
        tree_builder: TreeBuilder,
        classifier: Classifier | None = None,
        observer: ScanProgressObserver | None = None,
        *,
        provider_label: str = "",
        clock: Clock | None = None,
    ) -> None:
        """Initialize the coordinator.

        Args:
            enumerator: Pages through the provider's listing.
            tree_builder: Rebuilds the folder tree once enumeration finishes.
            classifier: Rule classifier (default rule catalog if None).
            observer: Optional progress observer.
            provider_label: Label recorded in the summary.
            clock: Returns the scan timestamp; defaults to ``utc_now``.
        """
        self._enumerator = enumerator
        self._tree_builder = tree_builder
        self._classifier = classifier or Classifier()
        self._observer = observer
        self._provider_label = provider_label
        self._clock = clock or utc_now
        self._findings: list[Finding] = []

    def _on_record(self, record: FileRecord) -> None:
        risks = self._classifier.classify(record)
        if not risks:
            return
        folder_path = self._enumerator.folder_path(record)
        self._findings.append(Finding(record, risks, folder_path))
        logger.debug(
            "Flagged %s in %s (%d risks)",
            record.name,
            folder_path,
            len(risks),
            extra={"path": folder_path.rstrip("/") + "/" + record.name},
        )

    def _on_progress(self, fetched: int, scanned: int) -> None:
        if self._observer is not None:
            self._observer.on_progress(fetched, scanned, len(self._findings))

    def run(self) -> ScanResult:
        """Enumerate the provider and assemble a ScanResult.

        Raises:
            ProviderError: If enumeration fails. No partial result is
                produced.
        """
        self._findings = []
        with scan_context(self._provider_label):
            logger.info("Starting scan")
            records = self._enumerator.enumerate(
                on_record=self._on_record, on_progress=self._on_progress
            )
            tree = self._tree_builder.build(records)
            findings = sort_findings(self._findings)

            summary = ScanSummary(
                total_records_scanned=self._enumerator.scanned,
                finding_count=len(findings),
                scan_timestamp=_format_timestamp(self._clock()),
                provider_label=self._provider_label,
                total_records_fetched=self._enumerator.fetched,
                severity_counts=count_severities(findings),
            )
            logger.info(
                "Scan complete: %d records scanned, %d findings",
                summary.total_records_scanned,
                summary.finding_count,
                extra={
                    "fetched": summary.total_records_fetched,
                    "scanned": summary.total_records_scanned,
                    "findings": summary.finding_count,
                },
            )
        return ScanResult(findings=tuple(findings), tree=tree, summary=summary)


def run_scan(
    provider: Provider,
    *,
    classifier: Classifier | None = None,
    observer: ScanProgressObserver | None = None,
    cache: SnapshotCache | None = None,
    clock: Clock | None = None,
) -> ScanResult:
    """Run a full scan of ``provider`` and optionally persist it.

    Args:
        provider: Provider bundle from ``create_provider``/``build_provider``.
        classifier: Rule classifier (default rule catalog if None).
        observer: Optional progress observer.
        cache: If given, the result is saved under ``provider.key``.
        clock: Timestamp source, for tests.

    Returns:
        The ScanResult. A failed cache write is logged and does not affect
        the return value.

    Raises:
        ProviderError: If enumeration fails. Nothing is cached.
    """
    coordinator = ScanCoordinator(
        provider.enumerator,
        provider.tree_builder,
        classifier,
        observer,
        provider_label=provider.label,
        clock=clock,
    )
    result = coordinator.run()

    if cache is not None:
        try:
            cache.save(provider.key, result)
        except OSError as e:
            logger.warning("Could not save %s snapshot: %s", provider.key, e)
    return result
