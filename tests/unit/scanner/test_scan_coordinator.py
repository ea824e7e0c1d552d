"""Tests for the scan coordinator."""

import logging
from datetime import datetime, timezone
from pathlib import Path

import pytest

from cloudscan.cache import SnapshotCache
from cloudscan.domain import ProviderKind, Severity
from cloudscan.logging import get_scan_provider
from cloudscan.providers import EntryMetadata, ProviderError, build_provider
from cloudscan.scanner import ScanCoordinator, count_severities, run_scan, sort_findings

FIXED_NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def _clock() -> datetime:
    return FIXED_NOW


class RecordingObserver:
    def __init__(self) -> None:
        self.calls: list[tuple[int, int, int]] = []

    def on_progress(self, fetched: int, scanned: int, findings: int) -> None:
        self.calls.append((fetched, scanned, findings))


@pytest.fixture
def dropbox_provider(fake_source, dropbox_entry):
    source = fake_source(
        [
            [
                dropbox_entry("/a", folder=True),
                dropbox_entry("/a/report.log"),
                dropbox_entry("/a/b/secret.key"),
            ],
            [
                dropbox_entry("/a/c/readme.txt"),
                dropbox_entry("/db-backup.sql"),
                dropbox_entry("/keys.pem"),
            ],
        ]
    )
    return build_provider(ProviderKind.DROPBOX, source)


class TestScanCoordinator:
    """Tests for ScanCoordinator.run."""

    def test_findings_sorted_by_severity(self, dropbox_provider) -> None:
        result = run_scan(dropbox_provider, clock=_clock)

        names = [f.record.name for f in result.findings]
        # HIGH findings first in discovery order, then MEDIUM, then LOW
        assert names == ["secret.key", "keys.pem", "db-backup.sql", "report.log"]
        severities = [f.max_severity for f in result.findings]
        assert severities == [
            Severity.HIGH,
            Severity.HIGH,
            Severity.MEDIUM,
            Severity.LOW,
        ]

    def test_folder_paths(self, dropbox_provider) -> None:
        result = run_scan(dropbox_provider, clock=_clock)
        paths = {f.record.name: f.folder_path for f in result.findings}
        assert paths == {
            "secret.key": "/a/b",
            "keys.pem": "/",
            "db-backup.sql": "/",
            "report.log": "/a",
        }

    def test_summary(self, dropbox_provider) -> None:
        summary = run_scan(dropbox_provider, clock=_clock).summary
        assert summary.total_records_scanned == 6
        assert summary.total_records_fetched == 6
        assert summary.finding_count == 4
        assert summary.provider_label == "Dropbox"
        assert summary.scan_timestamp == "2024-03-01T12:00:00Z"
        assert summary.severity_counts == {"HIGH": 2, "MEDIUM": 1, "LOW": 1}

    def test_tree_holds_every_record(self, dropbox_provider) -> None:
        tree = run_scan(dropbox_provider, clock=_clock).tree
        assert tree.name == "Dropbox"
        assert len(list(tree.walk())) == 8  # 6 records + implicit /a/b and /a/c

    def test_observer_sees_finding_counts(self, dropbox_provider) -> None:
        observer = RecordingObserver()
        run_scan(dropbox_provider, observer=observer, clock=_clock)
        assert observer.calls == [(3, 0, 0), (3, 3, 2), (6, 3, 2), (6, 6, 4)]

    def test_idempotent_except_timestamp(self, dropbox_provider) -> None:
        first = run_scan(dropbox_provider, clock=_clock)
        later = datetime(2024, 3, 2, tzinfo=timezone.utc)
        second = run_scan(dropbox_provider, clock=lambda: later)
        assert first.findings == second.findings
        assert first.tree == second.tree
        assert first.summary.scan_timestamp != second.summary.scan_timestamp

    def test_scan_context_active_during_enumeration(
        self, fake_source, dropbox_entry
    ) -> None:
        seen: list[str | None] = []
        provider = build_provider(
            ProviderKind.DROPBOX, fake_source([[dropbox_entry("/x.txt")]])
        )
        coordinator = ScanCoordinator(
            provider.enumerator,
            provider.tree_builder,
            provider_label="Dropbox",
        )
        original = provider.enumerator.normalize

        def spy(entry):
            seen.append(get_scan_provider())
            return original(entry)

        provider.enumerator.normalize = spy  # type: ignore[method-assign]
        coordinator.run()
        assert seen == ["Dropbox"]
        assert get_scan_provider() is None

    def test_drive_scan_with_unknown_parent(self, fake_source, drive_entry) -> None:
        source = fake_source(
            [[drive_entry("f1", "credentials", ("not-listed",))]],
            metadata={},
        )
        result = run_scan(build_provider(ProviderKind.DRIVE, source), clock=_clock)

        (finding,) = result.findings
        assert finding.folder_path == "/"
        assert result.tree.children["credentials"].id == "f1"
        assert result.summary.provider_label == "GoogleDrive"

    def test_drive_paths_use_ancestors(self, fake_source, drive_entry) -> None:
        source = fake_source(
            [
                [
                    drive_entry("work", "Work", ("drive-root",), folder=True),
                    drive_entry("f1", "passwords.txt", ("work",)),
                ]
            ],
            metadata={"drive-root": EntryMetadata(name="My Drive")},
        )
        result = run_scan(build_provider(ProviderKind.DRIVE, source), clock=_clock)
        assert result.findings[0].folder_path == "/My Drive/Work"


class TestRunScanFailures:
    """Tests for error propagation and cache interaction."""

    def test_enumeration_error_propagates_without_cache_write(
        self, fake_source, dropbox_entry, tmp_path: Path
    ) -> None:
        source = fake_source(
            [[dropbox_entry("/.env")], [dropbox_entry("/b")]], fail_on_page=1
        )
        cache = SnapshotCache(tmp_path)

        with pytest.raises(ProviderError):
            run_scan(build_provider(ProviderKind.DROPBOX, source), cache=cache)

        assert not cache.exists("dropbox")

    def test_saves_to_cache_after_success(self, dropbox_provider, tmp_path) -> None:
        cache = SnapshotCache(tmp_path)
        result = run_scan(dropbox_provider, cache=cache, clock=_clock)
        assert cache.load("dropbox") == result

    def test_cache_write_failure_is_logged(self, dropbox_provider, caplog) -> None:
        class BrokenCache:
            def save(self, key, result):
                raise OSError("disk full")

        with caplog.at_level(logging.WARNING):
            result = run_scan(dropbox_provider, cache=BrokenCache(), clock=_clock)

        assert result.summary.finding_count == 4
        assert "disk full" in caplog.text


class TestHelpers:
    """Tests for sort_findings and count_severities."""

    def test_sort_is_stable(self, dropbox_provider) -> None:
        findings = list(run_scan(dropbox_provider, clock=_clock).findings)
        assert sort_findings(findings) == findings

    def test_count_severities_has_every_key(self) -> None:
        assert count_severities([]) == {"HIGH": 0, "MEDIUM": 0, "LOW": 0}
