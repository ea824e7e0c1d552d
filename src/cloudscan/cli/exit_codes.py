"""Centralized exit codes for all CLI commands.

Exit code ranges:
    0: Success
    1-9: General errors
    10-19: Configuration errors
    20-29: Provider errors
    30-39: Cache and output errors
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for cloudscan CLI commands."""

    # Success (0)
    SUCCESS = 0

    # General errors (1-9)
    GENERAL_ERROR = 1
    INTERRUPTED = 2  # Ctrl+C / SIGINT

    # Configuration errors (10-19)
    CONFIG_ERROR = 11
    MISSING_CREDENTIALS = 12

    # Provider errors (20-29)
    PROVIDER_ERROR = 20
    AUTH_ERROR = 21

    # Cache and output errors (30-39)
    CACHE_MISS = 30
    OUTPUT_ERROR = 31
