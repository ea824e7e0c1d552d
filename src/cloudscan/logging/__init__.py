"""Structured logging module for cloudscan.

Provides configurable logging with JSON format support and file rotation,
with every record tagged by the provider being scanned.
"""

from cloudscan.logging.config import configure_logging
from cloudscan.logging.context import (
    ScanContextFilter,
    get_scan_provider,
    scan_context,
)
from cloudscan.logging.formatters import SCAN_FIELDS, JSONFormatter

__all__ = [
    "JSONFormatter",
    "SCAN_FIELDS",
    "ScanContextFilter",
    "configure_logging",
    "get_scan_provider",
    "scan_context",
]
