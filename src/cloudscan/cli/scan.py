"""Scan command: run (or reuse) a full scan of one provider."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click

from cloudscan.cache import (
    SnapshotCache,
    SnapshotNotFoundError,
    result_to_dict,
    snapshot_age,
)
from cloudscan.cli.exit_codes import ExitCode
from cloudscan.cli.output import error_exit, warning_output
from cloudscan.config import CloudScanConfig, get_cache_dir
from cloudscan.core import format_age
from cloudscan.domain import ProviderKind, ScanResult, Severity
from cloudscan.providers import (
    MissingCredentialsError,
    ProviderAuthError,
    ProviderError,
    create_provider,
)
from cloudscan.scanner import run_scan

logger = logging.getLogger(__name__)


class ProgressDisplay:
    """Display progress for scan operations.

    Shows simple counters that update in place using carriage return.
    Only active when output is a TTY and not JSON mode.
    """

    def __init__(self, *, enabled: bool = True):
        """Initialize the progress display.

        Args:
            enabled: Whether to show progress output.
        """
        self._enabled = enabled and sys.stdout.isatty()
        self._has_output = False

    def _write(self, text: str) -> None:
        """Write text to stdout, clearing previous line."""
        if not self._enabled:
            return
        # \r moves to start of line, \033[K clears to end of line
        sys.stdout.write(f"\r\033[K{text}")
        sys.stdout.flush()
        self._has_output = True

    def on_progress(self, fetched: int, scanned: int, findings: int) -> None:
        """Called after every page and every few records."""
        self._write(
            f"Scanning... {scanned:,} files checked, "
            f"{fetched:,} fetched, {findings:,} flagged"
        )

    def finish(self) -> None:
        """Finish current line with newline."""
        if self._enabled and self._has_output:
            sys.stdout.write("\n")
            sys.stdout.flush()
            self._has_output = False


def _load_cached(cache: SnapshotCache, kind: ProviderKind) -> ScanResult | None:
    try:
        result = cache.load(kind.value)
    except SnapshotNotFoundError as e:
        logger.info("No usable %s snapshot: %s", kind.value, e)
        return None
    logger.info(
        "Using cached %s scan from %s", kind.value, result.summary.scan_timestamp
    )
    return result


def _live_scan(
    kind: ProviderKind,
    config: CloudScanConfig,
    cache: SnapshotCache | None,
    *,
    show_progress: bool,
    json_output: bool,
) -> ScanResult:
    try:
        provider = create_provider(kind, config)
    except MissingCredentialsError as e:
        error_exit(
            str(e), ExitCode.MISSING_CREDENTIALS, json_output, provider=kind.value
        )

    progress = ProgressDisplay(enabled=show_progress)
    try:
        return run_scan(provider, observer=progress, cache=cache)
    except ProviderAuthError as e:
        error_exit(
            f"{provider.label} rejected the access token: {e}",
            ExitCode.AUTH_ERROR,
            json_output,
            provider=kind.value,
        )
    except ProviderError as e:
        error_exit(
            f"{provider.label} scan failed: {e}",
            ExitCode.PROVIDER_ERROR,
            json_output,
            provider=kind.value,
        )
    except KeyboardInterrupt:
        error_exit(
            "Scan interrupted", ExitCode.INTERRUPTED, json_output, provider=kind.value
        )
    finally:
        progress.finish()
        provider.close()


def _summary_line(result: ScanResult) -> str:
    summary = result.summary
    counts = ", ".join(
        f"{severity.value} {summary.severity_counts.get(severity.value, 0)}"
        for severity in Severity
    )
    return (
        f"{summary.provider_label}: {summary.total_records_scanned:,} files scanned, "
        f"{summary.finding_count:,} flagged ({counts})"
    )


def _print_findings(result: ScanResult) -> None:
    for finding in result.findings:
        path = finding.folder_path.rstrip("/") + "/" + finding.record.name
        categories = ", ".join(risk.category for risk in finding.risks)
        click.echo(f"  [{finding.max_severity.value}] {path}  ({categories})")


@click.command("scan")
@click.option(
    "--provider",
    "-p",
    "provider_name",
    type=click.Choice([kind.value for kind in ProviderKind], case_sensitive=False),
    required=True,
    help="Storage provider to scan.",
)
@click.option(
    "--use-cache/--refresh",
    default=False,
    help="Reuse the last saved snapshot instead of scanning (default: refresh).",
)
@click.option(
    "--cache-only",
    is_flag=True,
    default=False,
    help="Only read the saved snapshot; fail if there is none.",
)
@click.option(
    "--no-save",
    is_flag=True,
    default=False,
    help="Do not write a snapshot after a live scan.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Also write the full result as JSON to this file.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Print the full result as JSON.",
)
@click.pass_context
def scan_command(
    ctx: click.Context,
    provider_name: str,
    use_cache: bool,
    cache_only: bool,
    no_save: bool,
    output: Path | None,
    json_output: bool,
) -> None:
    """Scan a cloud storage account for risky file names.

    Lists every file in the account, flags names that suggest secrets or
    sensitive records, and prints a summary. File contents are never read.
    """
    config: CloudScanConfig = ctx.obj["config"]
    kind = ProviderKind(provider_name.lower())
    cache = SnapshotCache(get_cache_dir(config))

    result: ScanResult | None = None
    from_cache = False
    if use_cache or cache_only:
        result = _load_cached(cache, kind)
        from_cache = result is not None
        if result is None and cache_only:
            error_exit(
                f"No cached {kind.value} scan in {cache.directory}",
                ExitCode.CACHE_MISS,
                json_output,
                provider=kind.value,
            )

    if result is None:
        save_to = cache if config.cache.enabled and not no_save else None
        result = _live_scan(
            kind,
            config,
            save_to,
            show_progress=not json_output,
            json_output=json_output,
        )

    payload = result_to_dict(result)
    if output is not None:
        try:
            output.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            error_exit(
                f"Cannot write {output}: {e}",
                ExitCode.OUTPUT_ERROR,
                json_output,
                provider=kind.value,
            )

    if json_output:
        click.echo(json.dumps(payload, indent=2))
        return

    line = _summary_line(result)
    if from_cache:
        try:
            age = format_age(snapshot_age(result).total_seconds())
            line += f" [cached {age} ago]"
        except ValueError:
            warning_output("Cached snapshot has an unreadable timestamp")
    click.echo(line)
    _print_findings(result)
