"""Console facade tying input, evaluation and output together."""

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional

from .commands import CommandRegistry, install_builtin_commands
from .commands.base import CommandDescriptor, TargetMode
from .completion import SuggestionEngine
from .config import ConsoleSettings
from .deferred import FrameScheduler
from .evaluator import ExpressionEvaluator
from .history import HistoryBuffer
from .output import ConsoleOutput, OutputLine
from .targets import FindAll, FindOne, TargetResolver

LOGGER = logging.getLogger("devconsole.console")

WELCOME = '> Welcome to DevConsole! Type "help" to see a list of all registered commands.'
SCROLL_TO_END = "scroll-to-end"


class DevConsole:
    """One interactive console.

    Every instance owns its registry, history, suggestions and output; the
    host composes as many as it needs.  Key handling stays with the host,
    which forwards text changes to :meth:`set_text` and keys to
    :meth:`submit`, :meth:`navigate` and :meth:`toggle_suggestions`.
    """

    def __init__(
        self,
        settings: Optional[ConsoleSettings] = None,
        *,
        output: Optional[ConsoleOutput] = None,
        find_all: Optional[FindAll] = None,
        find_one: Optional[FindOne] = None,
        scheduler: Optional[FrameScheduler] = None,
        on_scroll_to_end: Optional[Callable[[], None]] = None,
        on_open: Optional[Callable[[], None]] = None,
        on_close: Optional[Callable[[], None]] = None,
        builtins: bool = True,
    ) -> None:
        self.settings = settings or ConsoleSettings()
        self.output = output or ConsoleOutput(max_chars=self.settings.max_log_chars)
        self.registry = CommandRegistry(output=self.output)
        self.resolver = TargetResolver(self.registry, find_all=find_all, find_one=find_one)
        self.evaluator = ExpressionEvaluator(self.registry, self.resolver, self.output, settings=self.settings)
        self.suggestions = SuggestionEngine(self.registry)
        self.history = HistoryBuffer(limit=self.settings.history_size)
        self.scheduler = scheduler or FrameScheduler()
        self.on_scroll_to_end = on_scroll_to_end
        self.on_open = on_open
        self.on_close = on_close
        self.text = ""
        self._draft = ""
        self.is_open = False
        self.output.subscribe(self._on_output)
        self.output.info(WELCOME)
        if builtins:
            install_builtin_commands(self)
        if self.settings.start_opened:
            self.open()

    # ------------------------------------------------------------------
    # visibility

    def open(self) -> None:
        self.is_open = True
        self.suggestions.selected = -1
        self.suggestions.focused = False
        self.history.reset_cursor()
        self.scroll_to_end()
        if self.on_open is not None:
            self.on_open()

    def close(self) -> None:
        self.is_open = False
        self.set_text("")
        if self.on_close is not None:
            self.on_close()

    def toggle(self) -> bool:
        if self.is_open:
            self.close()
        else:
            self.open()
        return self.is_open

    def scroll_to_end(self) -> None:
        """Ask the host to scroll the log once the current render pass is done."""
        if self.is_open and self.on_scroll_to_end is not None:
            self.scheduler.schedule(SCROLL_TO_END, self.on_scroll_to_end)

    def _on_output(self, _line: OutputLine) -> None:
        self.scroll_to_end()

    # ------------------------------------------------------------------
    # input

    def set_text(self, text: str, *, from_history: bool = False) -> None:
        self.text = text
        if not from_history:
            self._draft = text
        self.suggestions.update(text)

    def toggle_suggestions(self) -> None:
        if self.suggestions.visible:
            self.suggestions.toggle()

    def navigate(self, step: int) -> str:
        """Handle up (+1) or down (-1); returns the input text afterwards."""
        if self.suggestions.visible and self.suggestions.focused:
            self.suggestions.cycle(step)
            return self.text
        self.set_text(self.history.navigate(step, self._draft), from_history=True)
        return self.text

    def submit(self, line: Optional[str] = None) -> bool:
        """Execute the input line, or autocomplete it when a suggestion is pending.

        Returns True when the line was executed.
        """
        if line is not None and line != self.text:
            self.set_text(line)
        text = self.text
        if not text:
            self.output.info(">")
            return False
        if self._should_autocomplete():
            self.set_text(self.suggestions.accept(text, self._chosen_suggestion()))
            return False
        self.output.info(f"> {text}")
        self.set_text("")
        self.history.append(text)
        self.history.reset_cursor()
        self.suggestions.clear()
        if not self.evaluator.evaluate(text):
            LOGGER.debug("line halted: %r", text)
        return True

    def execute(self, line: str) -> bool:
        """Evaluate *line* without touching the input field or suggestions."""
        self.output.info(f"> {line}")
        self.history.append(line)
        return self.evaluator.evaluate(line)

    def _chosen_suggestion(self) -> Optional[str]:
        engine = self.suggestions
        if engine.selected >= 0:
            return engine.current()
        return engine.suggestions[0] if engine.suggestions else None

    def _should_autocomplete(self) -> bool:
        engine = self.suggestions
        if not engine.suggestions:
            return False
        if engine.selected < 0 and not self.settings.always_autocomplete:
            return False
        return engine.partial != self._chosen_suggestion()

    # ------------------------------------------------------------------
    # registration

    def register_direct(
        self, name: str, description: str, function: Callable[..., Any], *, category: Optional[str] = None
    ) -> List[CommandDescriptor]:
        return self.registry.register_direct(name, description, function, category=category)

    def register_bound(
        self, name: str, description: str, instance: Any, method_name: str, *, category: Optional[str] = None
    ) -> List[CommandDescriptor]:
        return self.registry.register_bound(name, description, instance, method_name, category=category)

    def register_method(
        self,
        declaring_type: type,
        method_name: str,
        *,
        name: Optional[str] = None,
        description: str = "",
        category: Optional[str] = None,
        target_mode: TargetMode = TargetMode.SINGLE,
    ) -> List[CommandDescriptor]:
        return self.registry.register_method(
            declaring_type,
            method_name,
            name=name,
            description=description,
            category=category,
            target_mode=target_mode,
        )

    def register_discovered(self, descriptor: CommandDescriptor) -> CommandDescriptor:
        return self.registry.register_discovered(descriptor)

    def register_singleton(self, instance_type: type, instance: Any) -> None:
        self.registry.register_singleton(instance_type, instance)

    def unregister_singleton(self, instance_type: type) -> None:
        self.registry.unregister_singleton(instance_type)
