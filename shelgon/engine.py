"""Shelgon Engine

The REPL control engine: turns key events into state transitions and command
executions, and drives the terminal session.
"""

from __future__ import annotations

import logging
from typing import Generic

from rich.text import Text

from shelgon.command import (
    C,
    ClearAction,
    CommandAction,
    CommandInput,
    CommandOutput,
    Execute,
    ExitAction,
    New,
    Prepare,
)
from shelgon.config import ShelgonConfig
from shelgon.keys import KeyCode, KeyEvent, KeyEventKind, KeyModifiers
from shelgon.renderer import render
from shelgon.runtime import Runtime
from shelgon.state import Clear, Continue, Exit, Idle, Next, Running, State
from shelgon.terminal import Terminal

log = logging.getLogger(__name__)


class App(Generic[C]):
    """A REPL session around one executor.

    The app owns the executor's context and the history. Nothing else writes
    to them: the executor only gets the context back during execute().
    """

    def __init__(
        self,
        runtime: Runtime,
        executor: Execute[C],
        context: C,
        config: ShelgonConfig | None = None,
    ):
        self.runtime = runtime
        self.executor = executor
        self.config = config or ShelgonConfig()
        self._context = context
        self._state: State = Idle()
        self._history: list[CommandOutput] = []

    @classmethod
    def new(
        cls,
        runtime: Runtime,
        executor_cls: type[New[C]],
        config: ShelgonConfig | None = None,
    ) -> "App[C]":
        """Build an app from an executor that can construct itself."""
        executor, context = executor_cls.new()
        return cls(runtime, executor, context, config=config)

    @property
    def state(self) -> State:
        return self._state

    @property
    def history(self) -> list[CommandOutput]:
        return self._history

    @property
    def context(self) -> C:
        return self._context

    def render(self) -> list[Text]:
        prompt = self.executor.prompt(self._context)
        return render(self._history, self._state, prompt, self.config.theme)

    # -------------------------------------------------------------------------
    # Input handling
    # -------------------------------------------------------------------------

    def input(self, event: KeyEvent) -> Next:
        """Apply one key event.

        Returns what the driving loop should do next. Exceptions from the
        executor are not caught here.
        """
        # some platforms report both press and release
        if event.kind is KeyEventKind.RELEASE:
            return Continue()

        code, modifiers = event.code, event.modifiers

        if event.is_char:
            if modifiers == KeyModifiers.CONTROL:
                return self._control(code.lower())
            if modifiers in (KeyModifiers.NONE, KeyModifiers.SHIFT):
                self._insert_char(code)
            return Continue()

        if modifiers != KeyModifiers.NONE:
            return Continue()

        if code is KeyCode.LEFT:
            self._move_cursor_left()
        elif code is KeyCode.RIGHT:
            self._move_cursor_right()
        elif code is KeyCode.TAB:
            self._complete()
        elif code is KeyCode.BACKSPACE:
            self._backspace()
        elif code is KeyCode.ENTER:
            return self._enter()
        elif code is KeyCode.UP:
            self._recall_last()
        return Continue()

    def _control(self, key: str) -> Next:
        if key == "l":
            self._history.clear()
        elif key in ("c", "d"):
            if isinstance(self._state, Running):
                return self.finalize(
                    self._state.prepare, list(self._state.stdin_lines)
                )
            return Exit("")
        return Continue()

    def _insert_char(self, ch: str) -> None:
        state = self._state
        if isinstance(state, Running):
            if state.stdin_lines:
                state.stdin_lines[-1] += ch
            else:
                state.stdin_lines.append(ch)
            return

        state.buffer = state.buffer[: state.cursor] + ch + state.buffer[state.cursor :]
        state.cursor += 1
        if state.completions is not None:
            # typed char consumed from the front of each surviving suggestion
            state.completions = [c[1:] for c in state.completions if c.startswith(ch)]

    def _move_cursor_left(self) -> None:
        state = self._state
        if isinstance(state, Idle) and state.cursor > 0:
            state.cursor -= 1
            state.completions = None

    def _move_cursor_right(self) -> None:
        state = self._state
        if isinstance(state, Idle) and state.cursor < len(state.buffer):
            state.cursor += 1

    def _complete(self) -> None:
        state = self._state
        if not isinstance(state, Idle):
            return
        if state.completions is not None or state.cursor != len(state.buffer):
            return

        fixed, candidates = self.executor.completion(self._context, state.buffer)
        state.buffer += fixed
        state.cursor = len(state.buffer)
        state.completions = list(candidates)
        log.debug(f"Completed {fixed!r} with {len(state.completions)} candidates")

    def _backspace(self) -> None:
        state = self._state
        if isinstance(state, Running):
            lines = state.stdin_lines
            if not lines:
                return
            lines[-1] = lines[-1][:-1]
            if not lines[-1]:
                lines.pop()
            return

        if state.cursor == 0:
            return
        state.buffer = state.buffer[: state.cursor - 1] + state.buffer[state.cursor :]
        state.cursor -= 1
        state.completions = None

    def _enter(self) -> Next:
        state = self._state
        if isinstance(state, Running):
            state.stdin_lines.append("")
            return Continue()

        prepare = self.executor.prepare(state.buffer)
        if not prepare.stdin_required:
            return self.finalize(prepare, None)

        log.debug(f"Collecting stdin for {prepare.command!r}")
        self._state = Running(prepare)
        return Continue()

    def _recall_last(self) -> None:
        state = self._state
        if not isinstance(state, Idle) or not self._history:
            return
        state.buffer = self._history[-1].command
        state.cursor = len(state.buffer)
        state.completions = None

    # -------------------------------------------------------------------------
    # Execution
    # -------------------------------------------------------------------------

    def finalize(self, prepare: Prepare, stdin: list[str] | None) -> Next:
        """Execute a prepared command and apply its action.

        The state is back to an empty Idle line before the action is applied.
        """
        command_input = CommandInput(
            prompt=self.executor.prompt(self._context),
            command=prepare.command,
            stdin=stdin,
            runtime=self.runtime,
        )
        log.info(f"Executing {prepare.command!r}")
        action = self.executor.execute(self._context, command_input)
        self._state = Idle()

        if isinstance(action, CommandAction):
            self._history.append(action.output)
            return Continue()
        if isinstance(action, ExitAction):
            return Exit("")
        if isinstance(action, ClearAction):
            self._history.clear()
            return Clear()
        raise TypeError(f"Unknown output action: {action!r}")

    def execute(self, terminal: Terminal | None = None) -> str:
        """Run the session until it exits.

        Draws a frame, waits for a key, applies it; repeat. The terminal is
        restored on every way out, including errors, before they surface.

        Returns:
            The exit message.
        """
        if terminal is None:
            terminal = Terminal(config=self.config.terminal)

        log.info("Session started")
        with terminal:
            while True:
                terminal.draw(self.render())
                next_ = self.input(terminal.read_key())

                if isinstance(next_, Exit):
                    log.info("Session ended")
                    return next_.message
                if isinstance(next_, Clear):
                    terminal.clear()
