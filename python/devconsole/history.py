"""Submitted-line history with a navigation cursor."""

from __future__ import annotations

from typing import Iterable, List


class HistoryBuffer:
    """Bounded history list, most recent first.

    ``cursor`` is -1 while the user is editing a fresh line; stepping up
    moves toward older entries.
    """

    def __init__(self, *, limit: int = 100) -> None:
        self.limit = max(1, int(limit or 1))
        self.entries: List[str] = []
        self.cursor = -1

    def append(self, line: str) -> bool:
        if not line:
            return False
        if self.entries and self.entries[0] == line:
            return False
        self.entries.insert(0, line)
        if len(self.entries) > self.limit:
            del self.entries[self.limit :]
        return True

    def extend(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.append(line)

    def navigate(self, step: int, draft: str) -> str:
        """Move the cursor by *step* (+1 older, -1 newer) and return the text to show."""
        self.cursor = max(-1, min(self.cursor + step, len(self.entries) - 1))
        if self.cursor == -1:
            return draft
        return self.entries[self.cursor]

    def reset_cursor(self) -> None:
        self.cursor = -1

    def snapshot(self) -> List[str]:
        return list(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
