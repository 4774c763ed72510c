"""Terminal adapter

Raw-mode key input comes from prompt_toolkit, full-screen drawing from a rich
Live display. Only POSIX terminals are supported: reads block on the input
file descriptor with select().
"""

from __future__ import annotations

import logging
import select
from collections import deque
from contextlib import ExitStack
from typing import Iterable

from prompt_toolkit.input import Input, create_input
from prompt_toolkit.key_binding.key_processor import KeyPress
from prompt_toolkit.keys import Keys
from rich.console import Console, Group
from rich.live import Live
from rich.text import Text

from shelgon.config import TerminalConfig
from shelgon.errors import TerminalError
from shelgon.keys import KeyCode, KeyEvent, KeyModifiers

log = logging.getLogger(__name__)

_SPECIAL_KEYS: dict[Keys, KeyEvent] = {
    Keys.Left: KeyEvent(KeyCode.LEFT),
    Keys.Right: KeyEvent(KeyCode.RIGHT),
    Keys.Up: KeyEvent(KeyCode.UP),
    Keys.Down: KeyEvent(KeyCode.DOWN),
    Keys.Home: KeyEvent(KeyCode.HOME),
    Keys.End: KeyEvent(KeyCode.END),
    Keys.Delete: KeyEvent(KeyCode.DELETE),
    Keys.Escape: KeyEvent(KeyCode.ESC),
    Keys.ControlI: KeyEvent(KeyCode.TAB),
    Keys.BackTab: KeyEvent(KeyCode.TAB, KeyModifiers.SHIFT),
    Keys.ControlM: KeyEvent(KeyCode.ENTER),
    Keys.ControlJ: KeyEvent(KeyCode.ENTER),
    # terminals send DEL (0x7f) for backspace, prompt_toolkit maps it here
    Keys.ControlH: KeyEvent(KeyCode.BACKSPACE),
    Keys.ShiftLeft: KeyEvent(KeyCode.LEFT, KeyModifiers.SHIFT),
    Keys.ShiftRight: KeyEvent(KeyCode.RIGHT, KeyModifiers.SHIFT),
    Keys.ControlLeft: KeyEvent(KeyCode.LEFT, KeyModifiers.CONTROL),
    Keys.ControlRight: KeyEvent(KeyCode.RIGHT, KeyModifiers.CONTROL),
}


def _text_events(text: str) -> list[KeyEvent]:
    events = []
    for ch in text.replace("\r\n", "\n"):
        if ch in "\r\n":
            events.append(KeyEvent(KeyCode.ENTER))
        elif ch.isprintable():
            events.append(KeyEvent.char(ch))
    return events


def translate_key_press(press: KeyPress) -> list[KeyEvent]:
    """Translate a prompt_toolkit KeyPress into zero or more KeyEvents."""
    key = press.key

    if key == Keys.BracketedPaste:
        return _text_events(press.data)

    if isinstance(key, Keys):
        event = _SPECIAL_KEYS.get(key)
        if event is not None:
            return [event]
        # "c-a" .. "c-z"
        name = key.value
        if name.startswith("c-") and len(name) == 3 and name[2].isalpha():
            return [KeyEvent.ctrl(name[2])]
        log.debug(f"Ignoring unsupported key {key!r}")
        return []

    if len(key) == 1 and key.isprintable():
        return [KeyEvent.char(key)]
    return []


def visible_lines(lines: list[Text], height: int) -> list[Text]:
    """The tail of the frame that fits on screen."""
    if height <= 0:
        return []
    return lines[-height:]


class Terminal:
    """Full-screen terminal session.

    Use as a context manager: entering switches to raw mode and the alternate
    screen, leaving restores the terminal whether the body returned normally
    or raised.
    """

    def __init__(
        self,
        config: TerminalConfig | None = None,
        console: Console | None = None,
        input: Input | None = None,
    ):
        self.config = config or TerminalConfig()
        self._console = console or Console()
        self._input = input
        self._stack: ExitStack | None = None
        self._live: Live | None = None
        self._pending: deque[KeyEvent] = deque()

    @property
    def active(self) -> bool:
        return self._stack is not None

    def __enter__(self) -> "Terminal":
        stack = ExitStack()
        try:
            # callbacks unwind in reverse: cursor is shown last
            stack.callback(self._console.show_cursor, True)
            if self._input is None:
                self._input = create_input(always_prefer_tty=True)
            stack.enter_context(self._input.raw_mode())

            live = Live(
                console=self._console,
                screen=True,
                auto_refresh=False,
                redirect_stdout=False,
                redirect_stderr=False,
            )
            stack.enter_context(live)
        except OSError as e:
            stack.close()
            raise TerminalError(f"Failed to set up terminal: {e}") from e

        self._stack = stack
        self._live = live
        log.debug("Entered raw mode and alternate screen")
        return self

    def __exit__(self, *exc_info) -> None:
        stack, self._stack, self._live = self._stack, None, None
        if stack is not None:
            stack.close()
            log.debug("Restored terminal")

    def draw(self, lines: list[Text]) -> None:
        """Replace the screen contents with the given lines."""
        if self._live is None:
            raise TerminalError("Terminal session is not active")
        frame = visible_lines(lines, self._console.height)
        try:
            self._live.update(Group(*frame), refresh=True)
        except OSError as e:
            raise TerminalError(f"Failed to draw: {e}") from e

    def clear(self) -> None:
        try:
            self._console.clear()
        except OSError as e:
            raise TerminalError(f"Failed to clear screen: {e}") from e

    def read_key(self) -> KeyEvent:
        """Block until the next key event arrives.

        After each read the parser may hold an incomplete escape sequence, so
        the next wait is bounded by escape_timeout; when it expires the parser
        is flushed and a lone ESC becomes the Escape key.
        """
        if self._stack is None or self._input is None:
            raise TerminalError("Terminal session is not active")

        timeout = None
        try:
            while not self._pending:
                ready, _, _ = select.select([self._input.fileno()], [], [], timeout)
                if ready:
                    presses = self._input.read_keys()
                    if self._input.closed:
                        raise TerminalError("Terminal input closed")
                else:
                    presses = self._input.flush_keys()
                self._pending.extend(self._translate(presses))
                timeout = self.config.escape_timeout if ready else None
        except OSError as e:
            raise TerminalError(f"Failed to read key: {e}") from e
        return self._pending.popleft()

    @staticmethod
    def _translate(presses: Iterable[KeyPress]) -> list[KeyEvent]:
        events = []
        for press in presses:
            events.extend(translate_key_press(press))
        return events
