"""Script and single-command execution tests for the devconsole CLI."""

from __future__ import annotations

import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]
PYTHON_SRC = REPO_ROOT / "python"
if str(PYTHON_SRC) not in sys.path:
    sys.path.append(str(PYTHON_SRC))

from devconsole.cli import _run_script, build_arg_parser, build_console, main


def _console(*argv):
    return build_console(build_arg_parser().parse_args(list(argv)))


def test_single_command_prints_output(capsys):
    rc = main(["-c", "print(hi, 2)"])
    assert rc == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["> print(hi, 2)", "hi", "hi"]


def test_single_command_failure_sets_exit_code(capsys):
    rc = main(["-c", "frobnicate(1)"])
    assert rc == 1
    out = capsys.readouterr().out
    assert "ERROR: Command \"frobnicate\" was not implemented" in out


def test_json_output(capsys):
    rc = main(["--json", "-c", "print(hi)"])
    assert rc == 0
    payloads = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert payloads[-1] == {"status": "ok", "message": "hi"}


def test_script_executes_lines(tmp_path, capsys):
    script = tmp_path / "script.txt"
    script.write_text("# comment\nprint(one)\n\nprint(two)\n", encoding="utf-8")
    console = _console()
    rc = _run_script(console, str(script))
    assert rc == 0
    assert console.history.snapshot() == ["print(two)", "print(one)"]
    out = capsys.readouterr().out
    assert "one" in out and "two" in out


def test_script_reports_failure(tmp_path):
    script = tmp_path / "script.txt"
    script.write_text("unknowncmd\n", encoding="utf-8")
    rc = _run_script(_console(), str(script))
    assert rc != 0


def test_script_missing_file_returns_error(tmp_path):
    missing = tmp_path / "missing.txt"
    rc = _run_script(_console(), str(missing))
    assert rc != 0


def test_flags_reach_settings():
    console = _console("--no-quick-commands", "--always-autocomplete", "--history-size", "7", "--show-call-info")
    settings = console.settings
    assert not settings.allow_quick_commands
    assert settings.always_autocomplete
    assert settings.history_size == 7
    assert settings.show_call_info
    assert console.history.limit == 7


def test_log_level_defaults_from_environment(monkeypatch):
    monkeypatch.setenv("DEVCONSOLE_LOG", "DEBUG")
    assert build_arg_parser().parse_args([]).log_level == "DEBUG"
    monkeypatch.delenv("DEVCONSOLE_LOG")
    assert build_arg_parser().parse_args([]).log_level == "INFO"
