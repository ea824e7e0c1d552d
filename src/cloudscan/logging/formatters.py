"""Log formatters for scan runs."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

TEXT_FORMAT = "%(asctime)s - %(scan_tag)s%(name)s - %(levelname)s - %(message)s"

# Counters and locations a scan attaches to its records through ``extra``
SCAN_FIELDS: tuple[str, ...] = ("fetched", "scanned", "findings", "path")


def text_formatter() -> logging.Formatter:
    """Return the human-readable formatter, tagged with the scan provider."""
    return logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")


class JSONFormatter(logging.Formatter):
    """Write one JSON object per record.

    Keys are ``timestamp`` (UTC, ``Z`` suffix), ``level``, ``logger`` and
    ``message``, plus ``provider`` while a scan is running and any of
    SCAN_FIELDS the record carries. Other ``extra`` attributes are ignored.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, Any] = {
            "timestamp": created.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        provider = getattr(record, "scan_provider", None)
        if provider:
            entry["provider"] = provider
        for field in SCAN_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = value
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)
