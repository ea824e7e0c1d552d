"""Scan context for structured logging.

A contextvar holds the label of the provider being scanned, so every log
line emitted during a scan can be tagged without threading the label
through each call.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Generator

_scan_provider: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "scan_provider", default=None
)


def get_scan_provider() -> str | None:
    """Return the provider label of the running scan, if any."""
    return _scan_provider.get()


@contextmanager
def scan_context(provider_label: str) -> Generator[None, None, None]:
    """Tag log records emitted inside the block with ``provider_label``.

    Example:
        with scan_context("Dropbox"):
            logger.info("Starting scan")  # text format: "[Dropbox] Starting scan"
    """
    token = _scan_provider.set(provider_label)
    try:
        yield
    finally:
        _scan_provider.reset(token)


class ScanContextFilter(logging.Filter):
    """Logging filter that injects the scan provider into log records.

    Adds ``scan_provider`` (raw value, for JSON output) and ``scan_tag``
    (``"[Dropbox] "`` or empty, for the text format).
    """

    def filter(self, record: logging.LogRecord) -> bool:
        provider = get_scan_provider()
        record.scan_provider = provider
        record.scan_tag = f"[{provider}] " if provider else ""
        return True  # Never filter out records
