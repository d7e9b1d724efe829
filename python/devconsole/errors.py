"""Exception types raised inside devconsole and reported at the evaluator boundary."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from .commands.base import CommandDescriptor


class ConsoleError(Exception):
    """Base class for console failures."""


class RegistrationError(ConsoleError):
    """A command could not be registered."""


class CommandNotFound(ConsoleError):
    def __init__(self, name: str) -> None:
        super().__init__(f'Command "{name}" was not implemented. Type "help" for a list of implemented commands.')
        self.name = name


class ArityMismatch(ConsoleError):
    """No same-named descriptor accepts the received argument count."""

    def __init__(self, name: str, candidates: Sequence["CommandDescriptor"], received: Sequence[Any]) -> None:
        super().__init__(f'The parameters for the command "{name}" are invalid.')
        self.name = name
        self.candidates = list(candidates)
        self.received = list(received)


class ArgumentTypeMismatch(ArityMismatch):
    """Arity matched, but an argument does not fit the declared parameter type."""

    def __init__(
        self,
        descriptor: "CommandDescriptor",
        candidates: Sequence["CommandDescriptor"],
        received: Sequence[Any],
        *,
        position: int,
    ) -> None:
        super().__init__(descriptor.name, candidates, received)
        self.descriptor = descriptor
        self.position = position


__all__ = [
    "ConsoleError",
    "RegistrationError",
    "CommandNotFound",
    "ArityMismatch",
    "ArgumentTypeMismatch",
]
