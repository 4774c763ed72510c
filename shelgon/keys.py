"""Key events consumed by the engine.

Terminal backends translate their native events into KeyEvent so the state
machine never depends on a particular terminal library.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, Flag, auto


class KeyCode(str, Enum):
    BACKSPACE = "backspace"
    ENTER = "enter"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    TAB = "tab"
    DELETE = "delete"
    ESC = "esc"


class KeyModifiers(Flag):
    NONE = 0
    SHIFT = auto()
    CONTROL = auto()
    ALT = auto()


class KeyEventKind(str, Enum):
    PRESS = "press"
    REPEAT = "repeat"
    RELEASE = "release"


@dataclass(frozen=True)
class KeyEvent:
    """A single key event.

    code is either a KeyCode or a single character.
    """

    code: KeyCode | str
    modifiers: KeyModifiers = KeyModifiers.NONE
    kind: KeyEventKind = KeyEventKind.PRESS

    @classmethod
    def char(cls, c: str, modifiers: KeyModifiers = KeyModifiers.NONE) -> "KeyEvent":
        return cls(c, modifiers)

    @classmethod
    def ctrl(cls, c: str) -> "KeyEvent":
        return cls(c, KeyModifiers.CONTROL)

    @property
    def is_char(self) -> bool:
        return not isinstance(self.code, KeyCode) and len(self.code) == 1
