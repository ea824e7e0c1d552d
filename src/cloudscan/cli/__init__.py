"""CLI module for cloudscan."""

import logging
from pathlib import Path

import click

from cloudscan.cli.exit_codes import ExitCode
from cloudscan.cli.output import error_exit
from cloudscan.config import ConfigError, get_config
from cloudscan.logging import configure_logging

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="cloudscan")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: ~/.cloudscan/config.toml).",
)
@click.option(
    "--cache-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Snapshot directory (default: ~/.cloudscan/cache).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    cache_dir: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """cloudscan - Find risky file names in cloud storage accounts."""
    ctx.ensure_object(dict)

    # An explicitly named config file must parse
    try:
        config = get_config(
            config_path=config_path,
            log_level=log_level,
            cache_dir=cache_dir,
            strict=config_path is not None,
        )
    except ConfigError as e:
        error_exit(str(e), ExitCode.CONFIG_ERROR)

    try:
        config.logging = configure_logging(
            config.logging,
            file=log_file,
            format="json" if log_json else None,
        )
    except ValueError as e:
        error_exit(f"Invalid logging configuration: {e}", ExitCode.CONFIG_ERROR)

    logger.debug("cloudscan starting: log_level=%s", config.logging.level)
    ctx.obj["config"] = config


# Defer import to avoid circular dependency
def _register_commands():
    from cloudscan.cli.cache import cache_group
    from cloudscan.cli.scan import scan_command

    main.add_command(scan_command)
    main.add_command(cache_group)


_register_commands()
