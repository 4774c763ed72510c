"""Projection of the session into display lines.

Pure functions: they read the history and the current state and return a list
of rich Text lines for the terminal to draw. Nothing here mutates its inputs.
"""

from __future__ import annotations

from typing import Iterable

from rich.text import Text

from shelgon.command import CommandOutput
from shelgon.config import ThemeConfig
from shelgon.state import Idle, Running, State


def _command_line(prompt: str, command: str, theme: ThemeConfig) -> Text:
    line = Text()
    line.append(prompt, style=theme.prompt)
    line.append(" ")
    line.append(command, style=theme.command)
    return line


def render_history(output: CommandOutput, theme: ThemeConfig | None = None) -> list[Text]:
    """Lines for one history entry: command, then stdin, stdout, stderr."""
    theme = theme or ThemeConfig()
    lines = [_command_line(output.prompt, output.command, theme)]
    lines.extend(Text(line) for line in output.stdin)
    lines.extend(Text(line) for line in output.stdout)
    lines.extend(Text(line, style=theme.stderr) for line in output.stderr)
    return lines


def render_idle(state: Idle, prompt: str, theme: ThemeConfig) -> list[Text]:
    left, right = state.buffer[: state.cursor], state.buffer[state.cursor :]

    line = _command_line(prompt, left, theme)
    if right:
        line.append(right[0], style=theme.cursor)
        line.append(right[1:], style=theme.command)
    else:
        line.append(" ", style=theme.cursor_blank)

    lines = [line]
    for candidate in state.completions or []:
        lines.append(Text(state.buffer + candidate, style=theme.completion))
    return lines


def render_running(state: Running, prompt: str, theme: ThemeConfig) -> list[Text]:
    lines = [_command_line(prompt, state.prepare.command, theme)]
    lines.extend(Text(line) for line in state.stdin_lines)
    return lines


def render(
    history: Iterable[CommandOutput],
    state: State,
    prompt: str,
    theme: ThemeConfig | None = None,
) -> list[Text]:
    """Render the whole session: history in order, then the current state."""
    theme = theme or ThemeConfig()
    lines = [line for entry in history for line in render_history(entry, theme)]

    if isinstance(state, Idle):
        lines.extend(render_idle(state, prompt, theme))
    elif isinstance(state, Running):
        lines.extend(render_running(state, prompt, theme))
    else:
        raise TypeError(f"Unknown state: {state!r}")
    return lines
