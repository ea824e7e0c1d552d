"""Cache commands: inspect and clear saved scan snapshots."""

from __future__ import annotations

import json

import click

from cloudscan.cache import SnapshotCache, SnapshotNotFoundError, snapshot_age
from cloudscan.config import CloudScanConfig, get_cache_dir
from cloudscan.core import format_age
from cloudscan.domain import ProviderKind


def _snapshot_cache(ctx: click.Context) -> SnapshotCache:
    config: CloudScanConfig = ctx.obj["config"]
    return SnapshotCache(get_cache_dir(config))


@click.group("cache")
def cache_group() -> None:
    """Inspect or clear saved scan snapshots."""


@cache_group.command("status")
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output in JSON format.",
)
@click.pass_context
def cache_status(ctx: click.Context, json_output: bool) -> None:
    """Show the saved snapshot for each provider."""
    cache = _snapshot_cache(ctx)
    entries = []
    for kind in ProviderKind:
        entry: dict = {"provider": kind.value, "path": str(cache.path_for(kind.value))}
        if not cache.exists(kind.value):
            entry["status"] = "missing"
            entries.append(entry)
            continue
        try:
            result = cache.load(kind.value)
        except SnapshotNotFoundError:
            entry["status"] = "unreadable"
            entries.append(entry)
            continue
        entry["status"] = "ok"
        entry["scanDate"] = result.summary.scan_timestamp
        entry["findings"] = result.summary.finding_count
        try:
            entry["age"] = format_age(snapshot_age(result).total_seconds())
        except ValueError:
            entry["age"] = None
        entries.append(entry)

    if json_output:
        payload = {"directory": str(cache.directory), "snapshots": entries}
        click.echo(json.dumps(payload, indent=2))
        return

    click.echo(f"Cache directory: {cache.directory}")
    for entry in entries:
        if entry["status"] == "ok":
            age = f", {entry['age']} old" if entry["age"] else ""
            click.echo(
                f"  {entry['provider']}: {entry['findings']} findings, "
                f"scanned {entry['scanDate']}{age}"
            )
        else:
            click.echo(f"  {entry['provider']}: {entry['status']}")


@cache_group.command("clear")
@click.option(
    "--provider",
    "-p",
    "provider_name",
    type=click.Choice([kind.value for kind in ProviderKind], case_sensitive=False),
    default=None,
    help="Only clear this provider's snapshot (default: all).",
)
@click.pass_context
def cache_clear(ctx: click.Context, provider_name: str | None) -> None:
    """Delete saved snapshots."""
    cache = _snapshot_cache(ctx)
    if provider_name:
        kinds = [ProviderKind(provider_name.lower())]
    else:
        kinds = list(ProviderKind)
    removed = [kind.value for kind in kinds if cache.clear(kind.value)]
    if removed:
        click.echo(f"Removed snapshots: {', '.join(removed)}")
    else:
        click.echo("No snapshots to remove")
