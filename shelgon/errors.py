"""Shared error handling for shelgon.

Every failure ends the interactive session; there is no retry policy.
"""

import sys
from typing import NoReturn

import typer


class ShelgonError(Exception):
    """Base exception for shelgon operations."""

    report_prefix = "Error"

    def __init__(self, message: str, exit_code: int = 1) -> None:
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)


class CommandError(ShelgonError):
    """Raised by an executor when completion or execution fails."""

    report_prefix = "Command failed"


class TerminalError(ShelgonError):
    """Raised when drawing to or reading from the terminal fails."""

    report_prefix = "Terminal error"


class ConfigError(ShelgonError):
    """Raised when the configuration file cannot be loaded."""

    def __init__(self, path, reason: str) -> None:
        self.path = path
        super().__init__(f"Invalid config {path}: {reason}")


def handle_error(error: Exception) -> NoReturn:
    """Report the error that ended the session and exit.

    The terminal is already restored at this point, so the report goes to
    plain stderr.
    """
    if isinstance(error, ShelgonError):
        typer.echo(f"{error.report_prefix}: {error.message}", err=True)
        if isinstance(error, TerminalError):
            typer.echo("shelgon needs an interactive POSIX terminal.", err=True)
        sys.exit(error.exit_code)

    typer.echo(f"Unexpected error: {error}", err=True)
    sys.exit(1)
