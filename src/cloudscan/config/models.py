"""Configuration data models.

This module defines dataclasses for cloudscan configuration options. Each
section validates itself in ``__post_init__`` and raises ValueError.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class CacheConfig:
    """Configuration for the scan snapshot cache."""

    # Snapshot directory (None = <data dir>/cache)
    directory: Path | None = None

    # Write a snapshot after every successful live scan
    enabled: bool = True


@dataclass(frozen=True)
class DriveConfig:
    """Google Drive API access.

    The access token is issued by an external OAuth flow; cloudscan only
    reads it.
    """

    access_token: str | None = None
    """OAuth bearer token with a Drive read-only scope."""

    page_size: int = 100
    """Files requested per listing page (1-1000)."""

    timeout_seconds: int = 30
    """Request timeout in seconds (1-300)."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not 1 <= self.page_size <= 1000:
            raise ValueError(f"page_size must be 1-1000, got {self.page_size}")
        if not 1 <= self.timeout_seconds <= 300:
            raise ValueError("Timeout must be between 1 and 300 seconds")


@dataclass(frozen=True)
class DropboxConfig:
    """Dropbox API access."""

    access_token: str | None = None
    """OAuth bearer token with ``files.metadata.read``."""

    timeout_seconds: int = 30
    """Request timeout in seconds (1-300)."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not 1 <= self.timeout_seconds <= 300:
            raise ValueError("Timeout must be between 1 and 300 seconds")


@dataclass
class CloudScanConfig:
    """Main configuration container for cloudscan."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    drive: DriveConfig = field(default_factory=DriveConfig)
    dropbox: DropboxConfig = field(default_factory=DropboxConfig)
