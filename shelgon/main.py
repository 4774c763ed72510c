"""Shelgon CLI Main Entry Point

Runs the sample echo shell in a full-screen REPL session.

Usage:
    shelgon                        # start the echo shell
    shelgon -c path/to/config.yaml # use a specific config file
    shelgon --log-file shelgon.log # write logs to a file
    shelgon -v                     # show version

Keys:
    Enter           run the command (or add a stdin line)
    Ctrl-D / Ctrl-C exit (or finish stdin)
    Tab             complete the command
    Up              recall the last command
    Ctrl-L          clear history
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from ._version import __version__
from .config import ShelgonConfig, resolve_config_path
from .engine import App
from .errors import handle_error
from .runtime import Runtime
from .sample.echosh import Executor
from .utils import setup_logging

log = logging.getLogger(__name__)

typer_app = typer.Typer()


@typer_app.command()
def cli(
    version: bool = typer.Option(
        False, "-v", "--version", help="Show version and exit."
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Path to config.yaml (default: $SHELGON_CONFIG or ~/.shelgon/config.yaml).",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log at INFO level."),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Write logs to this file (--verbose default: ~/.shelgon/shelgon.log).",
    ),
) -> None:
    """Interactive echo shell built on shelgon.

    Examples:
        shelgon                     Start the shell
        shelgon --verbose --log-file shelgon.log
    """
    if version:
        typer.echo(f"shelgon {__version__}")
        raise typer.Exit()

    try:
        config = ShelgonConfig.load(config_path or resolve_config_path())
        setup_logging(verbose=verbose, log_file=log_file or config.log_file)

        with Runtime() as runtime:
            app = App.new(runtime, Executor, config=config)
            message = app.execute()
    except Exception as exc:
        log.debug("Session failed", exc_info=True)
        handle_error(exc)

    if message:
        typer.echo(message)


def main() -> None:
    """Entry point for the shelgon console script."""
    typer_app()


if __name__ == "__main__":
    main()
