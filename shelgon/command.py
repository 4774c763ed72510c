"""Shelgon Command Contract

The interface pluggable shell logic implements, and the values exchanged with
the engine around each execution.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Annotated, Generic, Literal, TypeVar, Union

from pydantic import BaseModel, Field

from shelgon.runtime import Runtime

C = TypeVar("C")


class CommandOutput(BaseModel):
    """A finished command as it appears in the history."""

    model_config = {"frozen": True}

    prompt: str
    command: str
    stdin: tuple[str, ...] = ()
    stdout: tuple[str, ...] = ()
    stderr: tuple[str, ...] = ()


class CommandAction(BaseModel):
    """Record the output in the history and keep going."""

    model_config = {"frozen": True}

    kind: Literal["command"] = "command"
    output: CommandOutput


class ExitAction(BaseModel):
    """End the session."""

    model_config = {"frozen": True}

    kind: Literal["exit"] = "exit"


class ClearAction(BaseModel):
    """Wipe the history and the screen."""

    model_config = {"frozen": True}

    kind: Literal["clear"] = "clear"


OutputAction = Annotated[
    Union[CommandAction, ExitAction, ClearAction], Field(discriminator="kind")
]


class CommandInput(BaseModel):
    """Everything an executor receives for one invocation."""

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    prompt: str
    command: str
    # None when the command did not ask for stdin
    stdin: tuple[str, ...] | None = None
    runtime: Runtime


class Prepare(BaseModel):
    """Decision taken on Enter, before anything runs."""

    model_config = {"frozen": True}

    command: str
    stdin_required: bool = False


class Execute(ABC, Generic[C]):
    """Base class for command executors.

    An executor is parametrised by its context type C. The engine owns the
    context and hands it back on every call:
    - prompt, completion: read the context, never modify it
    - prepare: decides whether stdin is collected before execution
    - execute: runs the command; the only place the context may change

    Exceptions raised by completion or execute are not caught by the engine
    and end the session.
    """

    @abstractmethod
    def prompt(self, ctx: C) -> str:
        """Prompt shown before the command line. Called on every render."""
        pass

    def completion(self, ctx: C, incomplete_command: str) -> tuple[str, list[str]]:
        """Complete a partially typed command.

        Args:
            ctx: The session context.
            incomplete_command: The buffer as typed so far.

        Returns:
            A deterministic suffix appended to the buffer right away, and a
            list of candidate suffixes offered after it.
        """
        return "", []

    @abstractmethod
    def prepare(self, command: str) -> Prepare:
        """Decide whether the command needs stdin. Must be deterministic."""
        pass

    @abstractmethod
    def execute(self, ctx: C, input: CommandInput) -> OutputAction:
        """Execute a command.

        Concurrent work goes through input.runtime, but the final result
        must be returned from this call.
        """
        pass


class New(Execute[C]):
    """Executors that can build themselves and their initial context."""

    @classmethod
    @abstractmethod
    def new(cls) -> tuple["New[C]", C]:
        pass
