"""Help command."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional

from ..output import ConsoleOutput
from .base import CommandDescriptor

if TYPE_CHECKING:  # pragma: no cover
    from . import CommandRegistry

UNCATEGORIZED = "Uncategorized"


def render_help(commands: Iterable[CommandDescriptor]) -> List[str]:
    """Group commands by category, first-seen order, uncategorized last."""
    commands = list(commands)
    lines = ["=== Command List ===", "This is a list of all available commands:", ""]
    categories: List[str] = []
    for command in commands:
        if command.category is not None and command.category not in categories:
            categories.append(command.category)
    for category in categories:
        lines.append(f"# {category} #")
        lines.extend(command.format_help() for command in commands if command.category == category)
        lines.append("")
    uncategorized = [command for command in commands if command.category is None]
    if uncategorized:
        lines.append(f"# {UNCATEGORIZED} #")
        lines.extend(command.format_help() for command in uncategorized)
        lines.append("")
    lines.append("Use TAB to switch between history and suggestions, then UP and DOWN to navigate.")
    lines.append('Vectors of 2, 3 and 4 components are written between square brackets. Ex: "[0, 0]"')
    lines.append("=== End of the List ===")
    return lines


class HelpCommand:
    name = "help"
    description = "Show all registered commands."

    def __init__(self) -> None:
        self._registry: Optional[CommandRegistry] = None
        self._output: Optional[ConsoleOutput] = None

    def bind(self, registry: "CommandRegistry", output: ConsoleOutput) -> None:
        self._registry = registry
        self._output = output

    def run(self) -> None:
        registry = self._registry
        if registry is None or self._output is None:
            return
        for line in render_help(registry.list_commands()):
            self._output.info(line)
