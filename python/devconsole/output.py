"""Output helpers for devconsole."""

from __future__ import annotations

import json
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Deque, Dict, List, Optional


class Severity(str, Enum):
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


@dataclass(frozen=True)
class OutputLine:
    text: str
    severity: Severity = Severity.INFO


OutputListener = Callable[[OutputLine], None]


class ConsoleOutput:
    """Accumulates ``(text, severity)`` lines for whatever renders the console log.

    The accumulated text is capped at *max_chars*; the oldest lines are
    dropped until a new line fits.
    """

    def __init__(self, *, max_chars: int = 15000) -> None:
        self.max_chars = max(1, int(max_chars or 1))
        self._lines: Deque[OutputLine] = deque()
        self._size = 0
        self._listeners: List[OutputListener] = []

    def subscribe(self, listener: OutputListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: OutputListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, text: str, severity: Severity = Severity.INFO) -> OutputLine:
        line = OutputLine(str(text), Severity(severity))
        cost = len(line.text) + 1
        while self._lines and self._size + cost > self.max_chars:
            dropped = self._lines.popleft()
            self._size -= len(dropped.text) + 1
        self._lines.append(line)
        self._size += cost
        for listener in list(self._listeners):
            listener(line)
        return line

    def info(self, text: str) -> OutputLine:
        return self.emit(text, Severity.INFO)

    def warn(self, text: str) -> OutputLine:
        return self.emit(text, Severity.WARN)

    def error(self, text: str) -> OutputLine:
        return self.emit(text, Severity.ERROR)

    def clear(self) -> None:
        self._lines.clear()
        self._size = 0

    @property
    def lines(self) -> List[OutputLine]:
        return list(self._lines)

    @property
    def text(self) -> str:
        return "".join(f"{line.text}\n" for line in self._lines)

    def __len__(self) -> int:
        return len(self._lines)


def _json_dump(payload: Dict[str, Any]) -> str:
    return json.dumps(payload, sort_keys=True)


def format_line(line: OutputLine, *, json_output: bool = False) -> str:
    """Render one output line for a plain terminal."""
    if json_output:
        status = "ok" if line.severity is Severity.INFO else line.severity.value
        return _json_dump({"status": status, "message": line.text})
    if line.severity is Severity.ERROR:
        return f"ERROR: {line.text}"
    if line.severity is Severity.WARN:
        return f"WARNING: {line.text}"
    return line.text


__all__ = ["Severity", "OutputLine", "ConsoleOutput", "format_line"]
