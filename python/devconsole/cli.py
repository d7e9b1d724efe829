"""devconsole CLI entry point."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List

from .config import ConsoleSettings
from .console import DevConsole
from .output import OutputLine, format_line
from .repl import ConsoleREPL

LOG = logging.getLogger("devconsole.cli")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Developer command console")
    parser.add_argument("--json", action="store_true", help="Emit one JSON object per output line")
    parser.add_argument(
        "--log-level", default=os.environ.get("DEVCONSOLE_LOG", "INFO"), help="Logging level (default INFO)"
    )
    parser.add_argument("--history-size", type=int, default=100, help="Number of lines kept in history")
    parser.add_argument(
        "--no-quick-commands",
        action="store_true",
        help="Require parentheses for zero-argument commands",
    )
    parser.add_argument(
        "--always-autocomplete",
        action="store_true",
        help="Submitting a partial name completes it with the first suggestion",
    )
    parser.add_argument("--show-call-info", action="store_true", help="Log every reduced call and its arguments")
    parser.add_argument(
        "-c",
        "--command",
        help="Execute a single line non-interactively (quote the line)",
    )
    parser.add_argument("--script", type=Path, help="Execute each line of a file and exit")
    return parser


def build_console(args: argparse.Namespace) -> DevConsole:
    settings = ConsoleSettings(
        allow_quick_commands=not args.no_quick_commands,
        always_autocomplete=args.always_autocomplete,
        history_size=args.history_size,
        show_call_info=args.show_call_info,
        json_output=args.json,
    )
    return DevConsole(settings)


def main(argv: List[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)
    console = build_console(args)
    if args.command:
        return _run_lines(console, [args.command])
    if args.script:
        return _run_script(console, str(args.script))
    repl = ConsoleREPL(console, json_output=args.json)
    try:
        return repl.run()
    except KeyboardInterrupt:
        print()
        return 0


def _print_line(console: DevConsole, line: OutputLine) -> None:
    print(format_line(line, json_output=console.settings.json_output))


def _run_lines(console: DevConsole, lines: List[str]) -> int:
    console.output.clear()
    console.output.subscribe(lambda line: _print_line(console, line))
    status = 0
    for line in lines:
        if not console.execute(line):
            status = 1
    return status


def _run_script(console: DevConsole, path: str) -> int:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        LOG.error("cannot read script %s: %s", path, exc)
        print(f"error: cannot read script {path}: {exc}")
        return 1
    lines = [line.strip() for line in text.splitlines()]
    return _run_lines(console, [line for line in lines if line and not line.startswith("#")])


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
