"""Configuration management for cloudscan.

Configuration is loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (CLOUDSCAN_*)
3. Config file (~/.cloudscan/config.toml)
4. Default values (lowest priority)
"""

from cloudscan.config.env import EnvReader
from cloudscan.config.loader import (
    ConfigError,
    get_cache_dir,
    get_config,
    get_data_dir,
    get_default_config_path,
    load_config_file,
)
from cloudscan.config.models import (
    CacheConfig,
    CloudScanConfig,
    DriveConfig,
    DropboxConfig,
    LoggingConfig,
)

__all__ = [
    # Models
    "CacheConfig",
    "CloudScanConfig",
    "DriveConfig",
    "DropboxConfig",
    "LoggingConfig",
    # Loader
    "ConfigError",
    "EnvReader",
    "get_cache_dir",
    "get_config",
    "get_data_dir",
    "get_default_config_path",
    "load_config_file",
]
