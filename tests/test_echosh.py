"""Tests for the sample echo shell."""

from shelgon.command import ClearAction, CommandAction, CommandInput, ExitAction
from shelgon.engine import App
from shelgon.keys import KeyCode, KeyEvent
from shelgon.sample.echosh import BUILTINS, Context, Executor


def make_input(runtime, command, stdin=None):
    return CommandInput(prompt="$", command=command, stdin=stdin, runtime=runtime)


class TestCompletion:
    def test_ambiguous_prefix(self):
        executor, ctx = Executor.new()
        assert executor.completion(ctx, "c") == ("", ["at", "lear"])
        assert executor.completion(ctx, "e") == ("", ["cho", "xit"])

    def test_unique_prefix(self):
        executor, ctx = Executor.new()
        assert executor.completion(ctx, "ex") == ("it", [])
        assert executor.completion(ctx, "s") == ("leep", [])

    def test_empty_prefix_offers_everything(self):
        executor, ctx = Executor.new()
        assert executor.completion(ctx, "") == ("", list(BUILTINS))

    def test_no_match(self):
        executor, ctx = Executor.new()
        assert executor.completion(ctx, "zzz") == ("", [])

    def test_arguments_not_completed(self):
        executor, ctx = Executor.new()
        assert executor.completion(ctx, "echo c") == ("", [])


class TestExecute:
    def test_prepare(self):
        executor, _ = Executor.new()
        assert executor.prepare("cat").stdin_required
        assert not executor.prepare("echo cat").stdin_required

    def test_cat_echoes_stdin(self, runtime):
        executor, ctx = Executor.new()
        action = executor.execute(ctx, make_input(runtime, "cat", ["a", "b"]))
        assert isinstance(action, CommandAction)
        assert action.output.stdin == ("a", "b")
        assert action.output.stdout == ("a", "b")

    def test_echo(self, runtime):
        executor, ctx = Executor.new()
        action = executor.execute(ctx, make_input(runtime, "echo hello world"))
        assert action.output.stdout == ("hello world",)
        assert action.output.stdin == ()

    def test_unknown_command_echoed(self, runtime):
        executor, ctx = Executor.new()
        action = executor.execute(ctx, make_input(runtime, "ls -la"))
        assert action.output.stdout == ("ls -la",)

    def test_sleep_uses_runtime(self, runtime):
        executor, ctx = Executor.new()
        action = executor.execute(ctx, make_input(runtime, "sleep 0"))
        assert action.output.stderr == ()

    def test_sleep_bad_interval(self, runtime):
        executor, ctx = Executor.new()
        action = executor.execute(ctx, make_input(runtime, "sleep soon"))
        assert action.output.stderr == ("sleep: invalid time interval 'soon'",)

    def test_exit_and_clear(self, runtime):
        executor, ctx = Executor.new()
        assert executor.execute(ctx, make_input(runtime, "exit")) == ExitAction()
        assert executor.execute(ctx, make_input(runtime, "clear")) == ClearAction()

    def test_context_counts_executions(self, runtime):
        executor, ctx = Executor.new()
        for cmd in ("echo a", "echo b", "exit"):
            executor.execute(ctx, make_input(runtime, cmd))
        assert ctx == Context(executed=3)


def test_cat_session(runtime):
    """Typing cat, two lines and Ctrl-D records the lines in history."""
    app = App.new(runtime, Executor)
    for ch in "cat":
        app.input(KeyEvent.char(ch))
    app.input(KeyEvent(KeyCode.ENTER))
    for ch in "hi":
        app.input(KeyEvent.char(ch))
    app.input(KeyEvent(KeyCode.ENTER))
    for ch in "yo":
        app.input(KeyEvent.char(ch))
    app.input(KeyEvent.ctrl("d"))

    assert len(app.history) == 1
    assert app.history[0].stdout == ("hi", "yo")
    assert [line.plain for line in app.render()] == ["$ cat", "hi", "yo", "hi", "yo", "$  "]


def test_tab_completes_exit(runtime):
    app = App.new(runtime, Executor)
    app.input(KeyEvent.char("e"))
    app.input(KeyEvent(KeyCode.TAB))
    assert app.state.completions == ["cho", "xit"]
    app.input(KeyEvent.char("x"))
    assert app.state.completions == ["it"]
    assert [line.plain for line in app.render()] == ["$ ex ", "exit"]
