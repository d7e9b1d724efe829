"""Utility commands available in every console."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from ..console import DevConsole

CATEGORY = "Utility"


class UtilityCommands:
    def __init__(self, console: "DevConsole") -> None:
        self.console = console

    def install(self) -> None:
        registry = self.console.registry
        registry.register_bound("clear", "Clear the console.", self, "clear", category=CATEGORY)
        registry.register_bound(
            "print",
            "Print the typed text in the console a number of times.",
            self,
            "print_text",
            category=CATEGORY,
        )
        registry.register_bound("history", "List previously submitted lines.", self, "history", category=CATEGORY)
        registry.register_direct("version", "Show the console version.", self.version, category=CATEGORY)

    def clear(self) -> None:
        self.console.output.clear()

    def print_text(self, text: str, amount: int = 1) -> None:
        for _ in range(amount):
            self.console.output.info(text)

    def history(self) -> None:
        entries = self.console.history.snapshot()
        if not entries:
            self.console.output.info("History is empty")
            return
        for index, entry in enumerate(entries):
            self.console.output.info(f"{index:>3}  {entry}")

    def version(self) -> None:
        from .. import __version__

        self.console.output.info(f"devconsole {__version__}")
