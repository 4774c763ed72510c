"""echosh - a small shell that echoes what it is given.

Builtins:
- cat: reads stdin until Ctrl-D and prints it back
- echo ARGS: prints ARGS
- sleep N: waits N seconds on the session runtime
- clear: clears history and screen
- exit: ends the session

Anything else is echoed verbatim.
"""

from __future__ import annotations

import asyncio
import math
import os
from dataclasses import dataclass

from shelgon.command import (
    ClearAction,
    CommandAction,
    CommandInput,
    CommandOutput,
    ExitAction,
    New,
    OutputAction,
    Prepare,
)

BUILTINS = ("cat", "clear", "echo", "exit", "sleep")


@dataclass
class Context:
    executed: int = 0


class Executor(New[Context]):
    """Sample executor used by the shelgon command."""

    @classmethod
    def new(cls) -> tuple["Executor", Context]:
        return cls(), Context()

    def prompt(self, ctx: Context) -> str:
        return "$"

    def completion(self, ctx: Context, incomplete_command: str) -> tuple[str, list[str]]:
        # only the command name is completed
        if " " in incomplete_command:
            return "", []

        matches = [
            name[len(incomplete_command) :]
            for name in BUILTINS
            if name.startswith(incomplete_command)
        ]
        fixed = os.path.commonprefix(matches)
        candidates = [m[len(fixed) :] for m in matches if m[len(fixed) :]]
        return fixed, candidates

    def prepare(self, command: str) -> Prepare:
        return Prepare(command=command, stdin_required=command.strip() == "cat")

    def execute(self, ctx: Context, input: CommandInput) -> OutputAction:
        ctx.executed += 1
        name, _, rest = input.command.strip().partition(" ")
        rest = rest.strip()

        if name == "exit":
            return ExitAction()
        if name == "clear":
            return ClearAction()

        stdout: list[str] = []
        stderr: list[str] = []
        if name == "cat":
            stdout = list(input.stdin or ())
        elif name == "echo":
            stdout = [rest]
        elif name == "sleep":
            try:
                seconds = float(rest)
            except ValueError:
                seconds = -1.0
            if not math.isfinite(seconds) or seconds < 0:
                stderr.append(f"sleep: invalid time interval '{rest}'")
            else:
                input.runtime.block_on(asyncio.sleep(seconds))
        else:
            stdout = [input.command]

        return CommandAction(
            output=CommandOutput(
                prompt=input.prompt,
                command=input.command,
                stdin=input.stdin or (),
                stdout=stdout,
                stderr=stderr,
            )
        )
