"""Engine states and loop control signals."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from shelgon.command import Prepare


@dataclass
class Idle:
    """Editing a command line."""

    buffer: str = ""
    cursor: int = 0
    completions: list[str] | None = None


@dataclass
class Running:
    """Collecting stdin for a prepared command."""

    prepare: Prepare
    stdin_lines: list[str] = field(default_factory=list)


State = Union[Idle, Running]


@dataclass(frozen=True)
class Continue:
    pass


@dataclass(frozen=True)
class Exit:
    message: str = ""


@dataclass(frozen=True)
class Clear:
    pass


Next = Union[Continue, Exit, Clear]
