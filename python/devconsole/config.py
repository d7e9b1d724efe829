"""Console preferences."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ConsoleSettings:
    """Holds the tunables of one console instance."""

    # Zero-argument commands may be typed without parentheses ("help").
    # Only the outermost call of a line can use this.
    allow_quick_commands: bool = True
    # Submitting always autocompletes with the first suggestion when one exists.
    always_autocomplete: bool = False
    history_size: int = 100
    max_log_chars: int = 15000
    show_call_info: bool = False
    start_opened: bool = False
    json_output: bool = False

    def __post_init__(self) -> None:
        self.history_size = max(1, int(self.history_size or 1))
        self.max_log_chars = max(1, int(self.max_log_chars or 1))
