"""Tests for logging setup, context tagging and JSON output."""

import json
import logging
from pathlib import Path

import pytest

from cloudscan.config import LoggingConfig
from cloudscan.domain import ProviderKind
from cloudscan.logging import (
    SCAN_FIELDS,
    JSONFormatter,
    ScanContextFilter,
    configure_logging,
    get_scan_provider,
    scan_context,
)
from cloudscan.providers import build_provider
from cloudscan.scanner import run_scan


def _record(message: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="cloudscan.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


class TestScanContext:
    """Tests for scan_context and ScanContextFilter."""

    def test_context_sets_and_resets(self) -> None:
        assert get_scan_provider() is None
        with scan_context("Dropbox"):
            assert get_scan_provider() == "Dropbox"
        assert get_scan_provider() is None

    def test_reset_on_error(self) -> None:
        with pytest.raises(RuntimeError):
            with scan_context("GoogleDrive"):
                raise RuntimeError("boom")
        assert get_scan_provider() is None

    def test_filter_adds_tag(self) -> None:
        record = _record()
        with scan_context("Dropbox"):
            assert ScanContextFilter().filter(record) is True
        assert record.scan_provider == "Dropbox"
        assert record.scan_tag == "[Dropbox] "

    def test_filter_without_scan(self) -> None:
        record = _record()
        ScanContextFilter().filter(record)
        assert record.scan_provider is None
        assert record.scan_tag == ""


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_fields(self) -> None:
        data = json.loads(JSONFormatter().format(_record("scan done")))
        assert data["level"] == "INFO"
        assert data["message"] == "scan done"
        assert data["logger"] == "cloudscan.test"
        assert "provider" not in data

    def test_timestamp_is_utc_with_z_suffix(self) -> None:
        data = json.loads(JSONFormatter().format(_record()))
        assert data["timestamp"].endswith("Z")
        assert "+" not in data["timestamp"]

    def test_provider_and_scan_fields(self) -> None:
        record = _record()
        with scan_context("GoogleDrive"):
            ScanContextFilter().filter(record)
        record.fetched = 120
        record.scanned = 118
        record.path = "/Finance/tax.pdf"
        data = json.loads(JSONFormatter().format(record))
        assert data["provider"] == "GoogleDrive"
        assert data["fetched"] == 120
        assert data["scanned"] == 118
        assert data["path"] == "/Finance/tax.pdf"
        assert "findings" not in data

    def test_unrelated_extras_ignored(self) -> None:
        record = _record()
        record.page = 3
        data = json.loads(JSONFormatter().format(record))
        assert "page" not in data
        assert set(data) == {"timestamp", "level", "logger", "message"}

    def test_scan_fields_constant(self) -> None:
        assert SCAN_FIELDS == ("fetched", "scanned", "findings", "path")


@pytest.mark.usefixtures("restore_root_logger")
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_stderr_only_by_default(self) -> None:
        configure_logging(LoggingConfig(level="debug"))
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_file_handler(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "cloudscan.log"
        configure_logging(LoggingConfig(file=log_file, format="json"))

        with scan_context("Dropbox"):
            logging.getLogger("cloudscan.test").info("written")
        for handler in logging.getLogger().handlers:
            handler.flush()

        line = json.loads(log_file.read_text().splitlines()[-1])
        assert line["message"] == "written"
        assert line["provider"] == "Dropbox"

    def test_httpx_quieted(self) -> None:
        configure_logging(LoggingConfig(level="debug"))
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_overrides_replace_config_fields(self, tmp_path: Path) -> None:
        base = LoggingConfig(level="warning", file=tmp_path / "a.log")
        effective = configure_logging(base, level="debug", format="json")
        assert effective.level == "debug"
        assert effective.format == "json"
        assert effective.file == tmp_path / "a.log"
        assert base.level == "warning"
        assert logging.getLogger().level == logging.DEBUG

    def test_invalid_override_rejected(self) -> None:
        with pytest.raises(ValueError):
            configure_logging(LoggingConfig(), format="xml")

    def test_unopenable_file_falls_back_to_stderr(self, tmp_path: Path, capsys) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        configure_logging(LoggingConfig(file=blocker / "cloudscan.log"))
        root = logging.getLogger()
        assert [type(h) for h in root.handlers] == [logging.StreamHandler]
        assert "Could not open log file" in capsys.readouterr().err

    def test_scan_summary_logged_as_json(
        self, tmp_path: Path, fake_source, dropbox_entry
    ) -> None:
        log_file = tmp_path / "scan.log"
        configure_logging(LoggingConfig(file=log_file, format="json"))
        provider = build_provider(
            ProviderKind.DROPBOX, fake_source([[dropbox_entry("/.env")]])
        )

        run_scan(provider)
        for handler in logging.getLogger().handlers:
            handler.flush()

        lines = [json.loads(line) for line in log_file.read_text().splitlines()]
        complete = next(e for e in lines if e["message"].startswith("Scan complete"))
        assert complete["provider"] == "Dropbox"
        assert complete["scanned"] == 1
        assert complete["findings"] == 1
