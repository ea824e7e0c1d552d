"""Snapshot cache: one persisted ScanResult per provider key.

Snapshots never expire. Callers judge staleness from the recorded scan
timestamp (see ``snapshot_age``).
"""

from __future__ import annotations

import json
import logging
import os
import re
from datetime import datetime, timedelta
from pathlib import Path

from cloudscan.cache.schemas import SnapshotModel
from cloudscan.cache.serialization import result_from_model, result_to_dict
from cloudscan.core import parse_iso_timestamp, parse_json_with_schema, utc_now
from cloudscan.domain import ScanResult

logger = logging.getLogger(__name__)

_VALID_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class SnapshotNotFoundError(Exception):
    """Raised when no usable snapshot exists for a provider key.

    Covers both a missing file and one that cannot be parsed; either way the
    caller should run a live scan.
    """


class SnapshotCache:
    """Reads and writes scan snapshots as JSON files in one directory."""

    def __init__(self, directory: Path) -> None:
        """Initialize the cache.

        Args:
            directory: Directory holding ``<key>-scan.json`` files. Created
                on first save.
        """
        self._directory = Path(directory).expanduser()

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, provider_key: str) -> Path:
        """Return the snapshot file path for ``provider_key``.

        Raises:
            ValueError: If the key could escape the cache directory.
        """
        if not _VALID_KEY.match(provider_key) or provider_key in (".", ".."):
            raise ValueError(f"Invalid provider key: {provider_key!r}")
        return self._directory / f"{provider_key}-scan.json"

    def exists(self, provider_key: str) -> bool:
        return self.path_for(provider_key).is_file()

    def save(self, provider_key: str, result: ScanResult) -> Path:
        """Persist ``result``, replacing any previous snapshot for the key.

        The file is written to a temporary sibling and renamed into place, so
        a crash never leaves a half-written snapshot behind.

        Raises:
            OSError: If the directory or file cannot be written.
        """
        path = self.path_for(provider_key)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(result_to_dict(result), indent=2)

        tmp_path = path.with_name(path.name + ".tmp")
        try:
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError:
            tmp_path.unlink(missing_ok=True)
            raise
        logger.info(
            "Saved %s snapshot with %d findings to %s",
            provider_key,
            len(result.findings),
            path,
        )
        return path

    def load(self, provider_key: str) -> ScanResult:
        """Load the snapshot for ``provider_key``.

        Raises:
            SnapshotNotFoundError: If the snapshot is missing, unreadable or
                does not parse into a ScanResult.
        """
        path = self.path_for(provider_key)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise SnapshotNotFoundError(f"No cached scan for {provider_key}") from None
        except (OSError, UnicodeDecodeError) as e:
            raise SnapshotNotFoundError(f"Cannot read {path}: {e}") from e

        parsed = parse_json_with_schema(raw, SnapshotModel, context=str(path))
        if not parsed.success or parsed.value is None:
            raise SnapshotNotFoundError(parsed.error or f"Invalid snapshot {path}")

        try:
            result = result_from_model(parsed.value)
        except ValueError as e:
            raise SnapshotNotFoundError(f"Invalid snapshot {path}: {e}") from e
        logger.debug("Loaded %s snapshot from %s", provider_key, path)
        return result

    def clear(self, provider_key: str) -> bool:
        """Delete the snapshot for ``provider_key``.

        Returns:
            True if a snapshot was removed.
        """
        path = self.path_for(provider_key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        logger.info("Removed %s snapshot %s", provider_key, path)
        return True


def snapshot_age(result: ScanResult, now: datetime | None = None) -> timedelta:
    """Return how long ago ``result`` was scanned.

    Raises:
        ValueError: If the recorded timestamp is not ISO-8601.
    """
    scanned_at = parse_iso_timestamp(result.summary.scan_timestamp)
    return (now or utc_now()) - scanned_at
