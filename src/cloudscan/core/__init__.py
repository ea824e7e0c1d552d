"""Shared utilities for cloudscan."""

from cloudscan.core.datetime_utils import format_age, parse_iso_timestamp, utc_now
from cloudscan.core.json_utils import JsonParseResult, parse_json_with_schema

__all__ = [
    "JsonParseResult",
    "format_age",
    "parse_iso_timestamp",
    "parse_json_with_schema",
    "utc_now",
]
