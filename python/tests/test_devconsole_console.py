"""Tests for the DevConsole facade."""

from __future__ import annotations

from devconsole.config import ConsoleSettings
from devconsole.console import SCROLL_TO_END, WELCOME, DevConsole
from devconsole.output import Severity


def texts(console, severity=None):
    return [line.text for line in console.output.lines if severity is None or line.severity is severity]


def test_welcome_line_and_builtins():
    console = DevConsole()
    assert texts(console) == [WELCOME]
    for name in ("help", "clear", "print", "history", "version"):
        assert name in console.registry


def test_instances_do_not_share_state():
    first, second = DevConsole(), DevConsole()
    first.register_direct("only_here", "", lambda: None)
    first.submit("only_here")
    assert "only_here" not in second.registry
    assert len(second.history) == 0


def test_submit_echoes_records_history_and_evaluates(console):
    ran = []
    console.register_direct("ping", "", lambda: ran.append(1))
    console.set_text("ping")
    assert console.submit()
    assert ran == [1]
    assert texts(console)[0] == "> ping"
    assert console.text == ""
    assert console.history.snapshot() == ["ping"]


def test_submit_empty_line_prints_marker(console):
    assert not console.submit("")
    assert texts(console) == [">"]


def test_resubmitting_same_line_keeps_one_history_entry(console):
    console.submit("clear")
    console.submit("clear")
    assert console.history.snapshot() == ["clear"]


def test_unknown_command_only_touches_history(console):
    registered = len(console.registry)
    console.submit("frobnicate")
    assert console.history.snapshot() == ["frobnicate"]
    assert len(console.registry) == registered
    assert any("frobnicate" in text for text in texts(console, Severity.ERROR))


def test_selected_suggestion_autocompletes_instead_of_executing(console):
    console.set_text("he")
    assert console.suggestions.suggestions == ["help"]
    console.toggle_suggestions()
    assert not console.submit()
    assert console.text == "help"
    assert console.history.snapshot() == []
    assert console.submit()
    assert any(text.startswith("=== Command List") for text in texts(console))


def test_without_selection_the_typed_text_runs(console):
    console.set_text("he")
    assert console.submit()
    assert console.history.snapshot() == ["he"]


def test_always_autocomplete_uses_first_suggestion():
    console = DevConsole(ConsoleSettings(always_autocomplete=True))
    console.set_text("print(cl")
    assert not console.submit()
    assert console.text == "print(clear"


def test_navigate_walks_history_and_restores_draft(console):
    console.submit("print(a)")
    console.submit("print(b)")
    console.set_text("pri")
    assert console.navigate(1) == "print(b)"
    assert console.navigate(1) == "print(a)"
    assert console.navigate(-1) == "print(b)"
    assert console.navigate(-1) == "pri"


def test_navigate_cycles_suggestions_when_focused(console):
    console.register_direct("history_dump", "", lambda: None)
    console.set_text("hist")
    console.toggle_suggestions()
    assert console.suggestions.current() == "history"
    assert console.navigate(1) == "hist"
    assert console.suggestions.current() == "history_dump"
    assert console.navigate(1) == "hist"
    assert console.suggestions.current() == "history"


def test_open_schedules_a_single_scroll(console):
    scrolled = []
    console.on_scroll_to_end = lambda: scrolled.append(True)
    console.open()
    console.output.info("one")
    console.output.info("two")
    assert SCROLL_TO_END in console.scheduler
    assert len(console.scheduler) == 1
    assert console.scheduler.run_pending() == 1
    assert scrolled == [True]
    assert console.scheduler.run_pending() == 0


def test_closed_console_does_not_scroll(console):
    console.on_scroll_to_end = lambda: None
    console.output.info("quiet")
    assert len(console.scheduler) == 0


def test_close_clears_input(console):
    console.open()
    console.set_text("half typed")
    console.close()
    assert console.text == ""
    assert not console.is_open
    assert console.toggle() is True


def test_builtin_print_and_clear(console):
    console.submit("print(hello, 2)")
    assert texts(console)[-2:] == ["hello", "hello"]
    console.submit("print(once)")
    assert texts(console)[-1] == "once"
    console.submit("clear")
    assert texts(console) == []


def test_help_groups_categories_and_lists_uncategorized_last(console):
    console.register_direct("spawn", "Spawn a thing.", lambda count: None, category="World")
    console.register_direct("loose", "No category.", lambda: None)
    console.submit("help")
    lines = texts(console)
    utility = lines.index("# Utility #")
    world = lines.index("# World #")
    uncategorized = lines.index("# Uncategorized #")
    assert utility < world < uncategorized
    assert "- spawn(Any): Spawn a thing." in lines
    assert "- print(str, int): Print the typed text in the console a number of times." in lines
    assert lines.index("- loose(): No category.") > uncategorized


def test_history_command_lists_entries(console):
    console.submit("print(x)")
    console.submit("history")
    lines = texts(console)
    assert "  0  history" in lines
    assert "  1  print(x)" in lines


def test_open_and_close_callbacks(console):
    events = []
    console.on_open = lambda: events.append("open")
    console.on_close = lambda: events.append("close")
    console.toggle()
    console.toggle()
    assert events == ["open", "close"]


def test_open_callback_from_constructor():
    events = []
    DevConsole(ConsoleSettings(start_opened=True), on_open=lambda: events.append("open"))
    assert events == ["open"]


def test_version_command(console):
    from devconsole import __version__

    console.submit("version")
    assert texts(console)[-1] == f"devconsole {__version__}"
