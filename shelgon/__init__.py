"""Shelgon - framework for building interactive REPLs and custom shells"""

from shelgon._version import __version__
from shelgon.command import (
    ClearAction,
    CommandAction,
    CommandInput,
    CommandOutput,
    Execute,
    ExitAction,
    New,
    OutputAction,
    Prepare,
)
from shelgon.config import ShelgonConfig
from shelgon.engine import App
from shelgon.errors import CommandError, ShelgonError, TerminalError
from shelgon.keys import KeyCode, KeyEvent, KeyEventKind, KeyModifiers
from shelgon.runtime import Runtime
from shelgon.terminal import Terminal

__all__ = [
    "__version__",
    # command contract
    "ClearAction",
    "CommandAction",
    "CommandInput",
    "CommandOutput",
    "Execute",
    "ExitAction",
    "New",
    "OutputAction",
    "Prepare",
    # engine
    "App",
    "KeyCode",
    "KeyEvent",
    "KeyEventKind",
    "KeyModifiers",
    "Runtime",
    "ShelgonConfig",
    "Terminal",
    # errors
    "CommandError",
    "ShelgonError",
    "TerminalError",
]
