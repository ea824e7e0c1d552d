"""Shared CLI output helpers."""

from __future__ import annotations

import json
import sys
from typing import NoReturn

import click

from cloudscan.cli.exit_codes import ExitCode


def error_exit(
    message: str,
    code: ExitCode,
    json_output: bool = False,
    *,
    provider: str | None = None,
) -> NoReturn:
    """Report a failed command and exit with ``code``.

    In JSON mode a single-line document takes the place of the scan result
    on stdout, keyed like the result so a consumer can check ``error``
    first:

        {"provider": "dropbox", "error": {"code": "AUTH_ERROR",
         "exitCode": 21, "message": "..."}}

    Otherwise ``Error: <message>`` goes to stderr.
    """
    if json_output:
        document = {
            "provider": provider,
            "error": {
                "code": code.name,
                "exitCode": int(code),
                "message": message,
            },
        }
        click.echo(json.dumps(document))
    else:
        click.echo(f"Error: {message}", err=True)
    sys.exit(int(code))


def warning_output(message: str, json_output: bool = False) -> None:
    """Print a warning to stderr unless JSON output is requested."""
    if not json_output:
        click.echo(f"Warning: {message}", err=True)
