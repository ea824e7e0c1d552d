"""Root logger setup for a cloudscan run."""

from __future__ import annotations

import dataclasses
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from cloudscan.logging.context import ScanContextFilter
from cloudscan.logging.formatters import JSONFormatter, text_formatter

if TYPE_CHECKING:
    from cloudscan.config.models import LoggingConfig


def _open_log_file(config: LoggingConfig) -> logging.Handler | None:
    path = Path(config.file).expanduser()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        return RotatingFileHandler(
            path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    except OSError as e:
        sys.stderr.write(f"Warning: Could not open log file {path}: {e}\n")
        return None


def configure_logging(
    config: LoggingConfig,
    *,
    level: str | None = None,
    file: Path | None = None,
    format: str | None = None,
) -> LoggingConfig:
    """Install the root logger handlers for this run.

    Keyword arguments are command line overrides for the matching fields of
    ``config``. When the log file cannot be opened, output goes to stderr.

    Returns:
        The effective LoggingConfig.

    Raises:
        ValueError: If an override is not a valid level or format.
    """
    overrides = {"level": level, "file": file, "format": format}
    config = dataclasses.replace(
        config, **{k: v for k, v in overrides.items() if v is not None}
    )
    log_level = logging.getLevelNamesMapping()[config.level.upper()]

    handlers: list[logging.Handler] = []
    if config.file:
        file_handler = _open_log_file(config)
        if file_handler is not None:
            handlers.append(file_handler)
    if config.include_stderr or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    formatter = (
        JSONFormatter() if config.format.lower() == "json" else text_formatter()
    )
    context_filter = ScanContextFilter()
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root_logger.addHandler(handler)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))
    return config
