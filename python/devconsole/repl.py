"""Interactive prompt_toolkit front-end for a DevConsole."""

from __future__ import annotations

import logging
from typing import List, Optional

from prompt_toolkit import PromptSession, print_formatted_text
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.input import Input
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.output import Output
from prompt_toolkit.patch_stdout import patch_stdout
from prompt_toolkit.styles import Style

from .completion import ConsoleCompleter
from .console import DevConsole
from .output import OutputLine, format_line

LOGGER = logging.getLogger("devconsole.repl")

STYLE = Style.from_dict(
    {
        "info": "",
        "warn": "ansiyellow",
        "error": "ansired",
        "suggestion": "",
        "selected": "reverse bold",
    }
)


class ConsoleREPL:
    """Feeds keystrokes from a terminal prompt into a :class:`DevConsole`."""

    def __init__(
        self,
        console: DevConsole,
        *,
        json_output: Optional[bool] = None,
        input: Optional[Input] = None,
        output: Optional[Output] = None,
    ) -> None:
        self.console = console
        self.input = input
        self.output = output
        self.json_output = console.settings.json_output if json_output is None else json_output
        self._applying = False
        self._buffer: Optional[Buffer] = None

    def run(self) -> int:
        for line in self.console.output.lines:
            self._print_line(line)
        self.console.output.subscribe(self._print_line)
        self.console.open()
        session = PromptSession(
            "> ",
            completer=ConsoleCompleter(self.console.suggestions),
            complete_while_typing=False,
            key_bindings=self._key_bindings(),
            bottom_toolbar=self._toolbar,
            style=STYLE,
            input=self.input,
            output=self.output,
        )
        self._buffer = session.default_buffer
        self._buffer.on_text_changed += self._text_changed
        pending: List[str] = []
        default = ""
        try:
            while True:
                try:
                    with patch_stdout():
                        line = session.prompt(default=default)
                except (EOFError, KeyboardInterrupt):
                    print()
                    return 0
                default = ""
                if self._handle_multiline(pending, line):
                    continue
                payload = " ".join(pending) if pending else line
                pending.clear()
                if not self.console.submit(payload):
                    default = self.console.text
                self.console.scheduler.run_pending()
        finally:
            self.console.output.unsubscribe(self._print_line)
            self.console.close()
            LOGGER.debug("prompt closed")

    def _print_line(self, line: OutputLine) -> None:
        text = format_line(line, json_output=self.json_output)
        if self.json_output:
            print(text)
            return
        print_formatted_text(FormattedText([(f"class:{line.severity.value}", text)]), style=STYLE)

    def _text_changed(self, buffer: Buffer) -> None:
        if not self._applying:
            self.console.set_text(buffer.text)

    def _apply(self, buffer: Buffer, text: str) -> None:
        self._applying = True
        try:
            buffer.text = text
            buffer.cursor_position = len(text)
        finally:
            self._applying = False

    def _key_bindings(self) -> KeyBindings:
        bindings = KeyBindings()

        @bindings.add("up")
        def _older(event) -> None:
            self._apply(event.current_buffer, self.console.navigate(1))

        @bindings.add("down")
        def _newer(event) -> None:
            self._apply(event.current_buffer, self.console.navigate(-1))

        @bindings.add("tab")
        def _toggle(event) -> None:
            self.console.toggle_suggestions()

        @bindings.add("c-space")
        def _complete(event) -> None:
            event.current_buffer.start_completion(select_first=False)

        return bindings

    def _toolbar(self) -> FormattedText:
        engine = self.console.suggestions
        if not engine.visible:
            return FormattedText([])
        fragments = []
        for index, name in enumerate(engine.suggestions):
            style = "class:selected" if index == engine.selected else "class:suggestion"
            fragments.append((style, f" {name} "))
        return FormattedText(fragments)

    @staticmethod
    def _handle_multiline(pending: List[str], line: str) -> bool:
        stripped = line.rstrip()
        if stripped.endswith("\\"):
            pending.append(stripped[:-1])
            return True
        if pending:
            pending.append(stripped)
        return False
