"""Tests for the command contract types."""

import pytest
from pydantic import TypeAdapter, ValidationError

from shelgon.command import (
    ClearAction,
    CommandAction,
    CommandInput,
    CommandOutput,
    Execute,
    ExitAction,
    OutputAction,
    Prepare,
)


class Minimal(Execute[None]):
    def prompt(self, ctx):
        return "$"

    def prepare(self, command):
        return Prepare(command=command)

    def execute(self, ctx, input):
        return ExitAction()


class TestModels:
    def test_command_output_is_immutable(self):
        output = CommandOutput(prompt="$", command="ls", stdout=["a"])
        assert output.stdout == ("a",)
        with pytest.raises(ValidationError):
            output.command = "rm"

    def test_command_output_defaults(self):
        output = CommandOutput(prompt="$", command="ls")
        assert output.stdin == output.stdout == output.stderr == ()

    def test_prepare_defaults(self):
        assert Prepare(command="ls").stdin_required is False

    def test_command_input_requires_runtime(self):
        with pytest.raises(ValidationError):
            CommandInput(prompt="$", command="ls", runtime=object())

    def test_command_input_stdin(self, runtime):
        without = CommandInput(prompt="$", command="ls", runtime=runtime)
        empty = CommandInput(prompt="$", command="ls", stdin=[], runtime=runtime)
        assert without.stdin is None
        assert empty.stdin == ()

    def test_output_action_discriminator(self):
        adapter = TypeAdapter(OutputAction)
        assert adapter.validate_python({"kind": "exit"}) == ExitAction()
        assert adapter.validate_python({"kind": "clear"}) == ClearAction()
        action = adapter.validate_python(
            {"kind": "command", "output": {"prompt": "$", "command": "ls"}}
        )
        assert isinstance(action, CommandAction)
        assert action.output.command == "ls"


class TestExecute:
    def test_default_completion_is_empty(self):
        assert Minimal().completion(None, "anything") == ("", [])

    def test_abstract_methods_required(self):
        class Incomplete(Execute[None]):
            def prompt(self, ctx):
                return "$"

        with pytest.raises(TypeError):
            Incomplete()
