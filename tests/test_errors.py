"""Tests for session-ending error reports."""

import pytest

from shelgon.errors import (
    CommandError,
    ConfigError,
    ShelgonError,
    TerminalError,
    handle_error,
)


def report(error, capsys):
    with pytest.raises(SystemExit) as exc_info:
        handle_error(error)
    return exc_info.value.code, capsys.readouterr().err


class TestHandleError:
    def test_command_error(self, capsys):
        code, err = report(CommandError("cat: no such file"), capsys)
        assert code == 1
        assert err == "Command failed: cat: no such file\n"

    def test_terminal_error_mentions_terminal(self, capsys):
        code, err = report(TerminalError("Terminal input closed", exit_code=3), capsys)
        assert code == 3
        assert err.startswith("Terminal error: Terminal input closed\n")
        assert "interactive POSIX terminal" in err

    def test_config_error(self, capsys):
        code, err = report(ConfigError("c.yaml", "malformed yaml"), capsys)
        assert code == 1
        assert err == "Error: Invalid config c.yaml: malformed yaml\n"

    def test_base_error(self, capsys):
        _, err = report(ShelgonError("nope", exit_code=2), capsys)
        assert err == "Error: nope\n"

    def test_unexpected_error(self, capsys):
        code, err = report(ValueError("bad value"), capsys)
        assert code == 1
        assert err == "Unexpected error: bad value\n"
