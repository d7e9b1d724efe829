"""Continuations deferred until the host finishes its current render pass."""

from __future__ import annotations

import logging
from typing import Callable, Dict

LOGGER = logging.getLogger("devconsole.deferred")


class FrameScheduler:
    """Queue of keyed callbacks run once by :meth:`run_pending`.

    Scheduling a key that is already pending does not queue it twice.
    """

    def __init__(self) -> None:
        self._pending: Dict[str, Callable[[], None]] = {}

    def schedule(self, key: str, callback: Callable[[], None]) -> bool:
        if key in self._pending:
            self._pending[key] = callback
            return False
        self._pending[key] = callback
        return True

    def run_pending(self) -> int:
        pending, self._pending = self._pending, {}
        for key, callback in pending.items():
            try:
                callback()
            except Exception:
                LOGGER.exception("deferred callback %s failed", key)
        return len(pending)

    def cancel(self, key: str) -> None:
        self._pending.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._pending

    def __len__(self) -> int:
        return len(self._pending)
