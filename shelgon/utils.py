"""Logging setup"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler

DEFAULT_LOG_FILE = "~/.shelgon/shelgon.log"

# stream opened by the last setup_logging call
_log_stream: TextIO | None = None


def setup_logging(verbose: bool = False, log_file: Path | None = None) -> Path | None:
    """Configure logging for shelgon.

    Log levels:
    - Normal: Only warnings/errors recorded
    - Verbose (--verbose): INFO level - session start/end, executions
    - Debug (SHELGON_DEBUG=1): DEBUG level - every state transition

    The session owns the whole screen while it runs, so records never go to
    the terminal. Verbose and debug logging fall back to DEFAULT_LOG_FILE when
    no log_file is given; otherwise, without a file, records are discarded.

    Returns:
        The file records are written to, or None when they are discarded.
    """
    global _log_stream

    if os.environ.get("SHELGON_DEBUG"):
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    if log_file is None and level < logging.WARNING:
        log_file = Path(DEFAULT_LOG_FILE).expanduser()

    shelgon_logger = logging.getLogger("shelgon")
    for old in shelgon_logger.handlers:
        old.close()
    if _log_stream is not None:
        _log_stream.close()
        _log_stream = None

    if log_file is None:
        handler: logging.Handler = logging.NullHandler()
    else:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _log_stream = log_file.open("a", encoding="utf-8")
        handler = RichHandler(
            console=Console(file=_log_stream, width=120),
            show_path=bool(os.environ.get("SHELGON_DEBUG")),
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))

    shelgon_logger.setLevel(level)
    shelgon_logger.handlers = [handler]
    shelgon_logger.propagate = False
    return log_file
