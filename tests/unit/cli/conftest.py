"""Fixtures for CLI tests."""

from pathlib import Path

import pytest

from cloudscan.domain import ProviderKind
from cloudscan.providers import build_provider

CLOUDSCAN_ENV_VARS = (
    "CLOUDSCAN_CONFIG_PATH",
    "CLOUDSCAN_DATA_DIR",
    "CLOUDSCAN_CACHE_DIR",
    "CLOUDSCAN_LOG_LEVEL",
    "CLOUDSCAN_DRIVE_TOKEN",
    "CLOUDSCAN_DROPBOX_TOKEN",
    "CLOUDSCAN_DRIVE_PAGE_SIZE",
)


@pytest.fixture(autouse=True)
def cli_env(monkeypatch, tmp_path: Path, cache_dir: Path, restore_root_logger):
    """Isolate the CLI from the user's config, tokens and cache."""
    for var in CLOUDSCAN_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("CLOUDSCAN_CONFIG_PATH", str(tmp_path / "missing.toml"))
    monkeypatch.setenv("CLOUDSCAN_CACHE_DIR", str(cache_dir))
    # Keep INFO logs out of the captured output
    monkeypatch.setenv("CLOUDSCAN_LOG_LEVEL", "warning")
    return monkeypatch


@pytest.fixture
def patch_provider(monkeypatch):
    """Replace the HTTP-backed provider factory with one over ``source``.

    Returns a function taking the listing source to serve.
    """

    def _patch(source):
        def factory(kind: ProviderKind, config):
            return build_provider(kind, source)

        monkeypatch.setattr("cloudscan.cli.scan.create_provider", factory)
        return source

    return _patch
