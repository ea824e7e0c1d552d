"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to get_config)
2. Environment variables (CLOUDSCAN_*)
3. Config file (~/.cloudscan/config.toml)
4. Default values

Environment variables:
- CLOUDSCAN_CONFIG_PATH: Path to config file (overrides default location)
- CLOUDSCAN_DATA_DIR: Path to the data directory (overrides ~/.cloudscan/)
- CLOUDSCAN_CACHE_DIR: Snapshot cache directory
- CLOUDSCAN_LOG_LEVEL: Log level
- CLOUDSCAN_DRIVE_TOKEN: Google Drive access token
- CLOUDSCAN_DRIVE_PAGE_SIZE: Drive listing page size
- CLOUDSCAN_DROPBOX_TOKEN: Dropbox access token
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from cloudscan.config.env import EnvReader
from cloudscan.config.models import (
    CacheConfig,
    CloudScanConfig,
    DriveConfig,
    DropboxConfig,
    LoggingConfig,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".cloudscan"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


class ConfigError(Exception):
    """Raised when configuration cannot be read or is invalid."""


def get_default_config_path(env_reader: EnvReader | None = None) -> Path:
    """Get the config file path, honouring CLOUDSCAN_CONFIG_PATH."""
    reader = env_reader or EnvReader()
    return reader.get_path("CLOUDSCAN_CONFIG_PATH", DEFAULT_CONFIG_FILE)


def get_data_dir(env_reader: EnvReader | None = None) -> Path:
    """Get the cloudscan data directory, honouring CLOUDSCAN_DATA_DIR."""
    reader = env_reader or EnvReader()
    return reader.get_path("CLOUDSCAN_DATA_DIR", DEFAULT_CONFIG_DIR)


def get_cache_dir(config: CloudScanConfig, env_reader: EnvReader | None = None) -> Path:
    """Return the effective snapshot directory for ``config``."""
    if config.cache.directory is not None:
        return config.cache.directory
    return get_data_dir(env_reader) / "cache"


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from a TOML file.

    Args:
        path: Path to config file. If None, uses default location.
        strict: If True, raise ConfigError on read or parse failures.
                If False (default), log a warning and return an empty dict.

    Returns:
        Parsed configuration dict. Empty dict if the file doesn't exist.
    """
    if path is None:
        path = get_default_config_path()

    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        if strict:
            raise ConfigError(f"Cannot load config file {path}: {e}") from e
        logger.warning("Failed to load config file %s: %s", path, e)
        return {}

    logger.debug("Loaded config from %s", path)
    return data


def _section(file_config: dict, name: str) -> dict[str, Any]:
    section = file_config.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table")
    return section


def _pick(*values: Any) -> Any:
    """Return the first value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def _optional_path(value: Any) -> Path | None:
    return Path(value).expanduser() if value else None


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    log_level: str | None = None,
    cache_dir: Path | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> CloudScanConfig:
    """Get cloudscan configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides CLOUDSCAN_CONFIG_PATH).
        log_level: CLI override for the log level.
        cache_dir: CLI override for the snapshot directory.
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise ConfigError on config file parse failures.

    Returns:
        CloudScanConfig with merged configuration.

    Raises:
        ConfigError: If a value fails validation (or, in strict mode, the
            file cannot be parsed).
    """
    reader = env_reader or EnvReader()
    if config_path is None:
        config_path = get_default_config_path(reader)
    file_config = load_config_file(config_path, strict=strict)

    file_logging = _section(file_config, "logging")
    file_cache = _section(file_config, "cache")
    file_drive = _section(file_config, "drive")
    file_dropbox = _section(file_config, "dropbox")

    defaults = LoggingConfig()
    try:
        return CloudScanConfig(
            logging=LoggingConfig(
                level=_pick(
                    log_level,
                    reader.get_str("CLOUDSCAN_LOG_LEVEL"),
                    file_logging.get("level"),
                    defaults.level,
                ),
                file=_optional_path(file_logging.get("file")),
                format=file_logging.get("format", defaults.format),
                include_stderr=file_logging.get(
                    "include_stderr", defaults.include_stderr
                ),
                max_bytes=file_logging.get("max_bytes", defaults.max_bytes),
                backup_count=file_logging.get("backup_count", defaults.backup_count),
            ),
            cache=CacheConfig(
                directory=_pick(
                    cache_dir,
                    reader.get_path("CLOUDSCAN_CACHE_DIR"),
                    _optional_path(file_cache.get("directory")),
                ),
                enabled=file_cache.get("enabled", True),
            ),
            drive=DriveConfig(
                access_token=_pick(
                    reader.get_str("CLOUDSCAN_DRIVE_TOKEN"),
                    file_drive.get("access_token"),
                ),
                page_size=_pick(
                    reader.get_int("CLOUDSCAN_DRIVE_PAGE_SIZE"),
                    file_drive.get("page_size"),
                    100,
                ),
                timeout_seconds=file_drive.get("timeout_seconds", 30),
            ),
            dropbox=DropboxConfig(
                access_token=_pick(
                    reader.get_str("CLOUDSCAN_DROPBOX_TOKEN"),
                    file_dropbox.get("access_token"),
                ),
                timeout_seconds=file_dropbox.get("timeout_seconds", 30),
            ),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
