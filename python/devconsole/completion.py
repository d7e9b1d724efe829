"""Command-name suggestions and the prompt_toolkit completer built on them."""

from __future__ import annotations

from typing import Iterable, List, Optional

from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document

from .commands import CommandRegistry


def last_open_paren(text: str) -> int:
    """Index of the last '(' not closed later in *text*, or -1."""
    stack: List[int] = []
    for index, char in enumerate(text):
        if char == "(":
            stack.append(index)
        elif char == ")" and stack:
            stack.pop()
    return stack[-1] if stack else -1


def partial_token(text: str) -> str:
    """The command name being typed: text after the last unmatched '(' or the whole text."""
    index = last_open_paren(text)
    token = text[index + 1 :] if index >= 0 else text
    return token.lstrip()


class SuggestionEngine:
    """Filters registered command names against the token being typed.

    ``selected`` is -1 while nothing is selected.  ``focused`` tells whether
    up/down currently walk the suggestions instead of the history.
    """

    def __init__(self, registry: CommandRegistry) -> None:
        self.registry = registry
        self.suggestions: List[str] = []
        self.partial = ""
        self.selected = -1
        self.focused = False

    @property
    def visible(self) -> bool:
        return bool(self.suggestions)

    def matches(self, token: str) -> List[str]:
        if not token:
            return []
        needle = token.lower()
        return [name for name in self.registry.names() if name.lower().startswith(needle)]

    def update(self, text: str) -> List[str]:
        self.partial = partial_token(text or "")
        self.suggestions = self.matches(self.partial)
        self._rebuild()
        return list(self.suggestions)

    def clear(self) -> None:
        self.suggestions = []
        self.partial = ""
        self._rebuild()

    def toggle(self) -> None:
        self.focused = not self.focused
        self.selected = 0 if self.focused else -1
        self._rebuild()

    def cycle(self, step: int) -> Optional[str]:
        if not self.suggestions:
            return None
        self.selected = (self.selected + step) % len(self.suggestions)
        return self.suggestions[self.selected]

    def current(self) -> Optional[str]:
        if 0 <= self.selected < len(self.suggestions):
            return self.suggestions[self.selected]
        return None

    def accept(self, text: str, choice: Optional[str] = None) -> str:
        """Replace the trailing partial token of *text* with *choice*."""
        if choice is None:
            choice = self.current() or (self.suggestions[0] if self.suggestions else None)
        if choice is None:
            return text
        index = last_open_paren(text)
        prefix = text[: index + 1] if index >= 0 else ""
        completed = prefix + choice
        self.update(completed)
        return completed

    def _rebuild(self) -> None:
        if self.suggestions:
            if self.selected > len(self.suggestions) - 1:
                self.selected = len(self.suggestions) - 1
            return
        self.selected = -1
        self.focused = False


class ConsoleCompleter(Completer):
    """Offers command names for the token left of the cursor."""

    def __init__(self, engine: SuggestionEngine) -> None:
        self.engine = engine

    def get_completions(self, document: Document, complete_event: CompleteEvent) -> Iterable[Completion]:
        token = partial_token(document.text_before_cursor)
        for name in self.engine.matches(token):
            yield Completion(name, start_position=-len(token))
