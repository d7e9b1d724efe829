"""Nested-call evaluation of console command lines."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from .commands import CommandRegistry
from .commands.base import CommandDescriptor, TargetMode
from .config import ConsoleSettings
from .errors import ArgumentTypeMismatch, ArityMismatch, CommandNotFound, ConsoleError
from .output import ConsoleOutput
from .targets import TargetResolver
from .values import MalformedVector, coerce_argument, convert_token, split_fields, value_type_name

LOGGER = logging.getLogger("devconsole.evaluator")

# A call whose argument text holds no parentheses, i.e. an innermost call.
CALL_RE = re.compile(r"(?P<func>\w+)\((?P<params>[^()]*)\)")


class ExpressionEvaluator:
    """Reduces a line such as ``outer(inner(1, 2), 3)`` one innermost call at a time.

    Each reduced call is replaced in the line by a placeholder key; the key is
    looked up when the enclosing call's arguments are converted.  Placeholders
    live for a single line.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        resolver: TargetResolver,
        output: ConsoleOutput,
        *,
        settings: Optional[ConsoleSettings] = None,
    ) -> None:
        self.registry = registry
        self.resolver = resolver
        self.output = output
        self.settings = settings or ConsoleSettings()
        self._held: Dict[str, Any] = {}
        self._sources: Dict[str, str] = {}

    def evaluate(self, line: str) -> bool:
        """Execute every call in *line*; False when evaluation halted on an error."""
        text = line.strip()
        if not text:
            return True
        try:
            if self.settings.allow_quick_commands and "(" not in text:
                self.invoke(text, [])
                return True
            return self._reduce(text)
        except ConsoleError as exc:
            self._report(exc)
            return False
        finally:
            self._held.clear()
            self._sources.clear()

    def invoke(self, name: str, arguments: List[Any]) -> Any:
        """Run one resolved call.

        Lookup and argument failures raise; a fault inside the command body
        is logged and yields None.
        """
        descriptor, values = self._select(self.registry.resolve_for_call(name, arguments), arguments)
        try:
            if descriptor.target_mode is TargetMode.DIRECT:
                result = descriptor.function(*values)
                return None if descriptor.closure else result
            return self.resolver.dispatch(descriptor, values)
        except Exception as exc:
            LOGGER.exception("command '%s' failed", name)
            self.output.error(f'Command "{name}" failed: {exc}')
            return None

    def _reduce(self, text: str) -> bool:
        if not CALL_RE.search(text):
            raise CommandNotFound(text)
        while True:
            match = CALL_RE.search(text)
            if match is None:
                break
            name = match.group("func")
            raw = match.group("params")
            arguments = [convert_token(field, self._held) for field in split_fields(raw)]
            if self.settings.show_call_info:
                LOGGER.info(
                    "func=%s count=%d raw=%r final=%s",
                    name,
                    len(arguments),
                    self._restore(raw),
                    "; ".join(str(arg) for arg in arguments),
                )
            result = self.invoke(name, arguments)
            key = self._placeholder(name, match.start())
            self._held[key] = result
            self._sources[key] = self._restore(match.group(0))
            text = text[: match.start()] + key + text[match.end() :]
        remainder = text.strip()
        if remainder in self._held:
            return True
        raise CommandNotFound(self._restore(remainder))

    def _placeholder(self, name: str, offset: int) -> str:
        key = f"{{{name}@{offset}}}"
        suffix = 1
        while key in self._held:
            key = f"{{{name}@{offset}#{suffix}}}"
            suffix += 1
        return key

    def _restore(self, text: str) -> str:
        for key, source in self._sources.items():
            text = text.replace(key, source)
        return text

    def _select(self, first: CommandDescriptor, arguments: List[Any]) -> Tuple[CommandDescriptor, List[Any]]:
        """Coerce against *first*, then against same-arity overloads in registration order.

        When none fits, the mismatch of *first* is raised.
        """
        try:
            return first, self._coerce(first, arguments)
        except ArgumentTypeMismatch:
            for candidate in self.registry.lookup(first.name):
                if candidate is first or candidate.arity != len(arguments):
                    continue
                try:
                    return candidate, self._coerce(candidate, arguments)
                except ArgumentTypeMismatch:
                    continue
            raise

    def _coerce(self, descriptor: CommandDescriptor, arguments: List[Any]) -> List[Any]:
        values = []
        for position, (param, value) in enumerate(zip(descriptor.parameters, arguments)):
            try:
                values.append(coerce_argument(value, param.annotation))
            except TypeError:
                raise ArgumentTypeMismatch(
                    descriptor,
                    self.registry.lookup(descriptor.name),
                    arguments,
                    position=position,
                ) from None
        return values

    def _report(self, exc: ConsoleError) -> None:
        if not isinstance(exc, ArityMismatch):
            self.output.error(str(exc))
            return
        self.output.error(f"{exc} Expected:")
        for candidate in exc.candidates:
            self.output.error(candidate.signature())
        self.output.error("Received:")
        self.output.error("(" + "; ".join(value_type_name(value) for value in exc.received) + ")")
        if isinstance(exc, ArgumentTypeMismatch):
            param = exc.descriptor.parameters[exc.position]
            value = exc.received[exc.position]
            if isinstance(value, MalformedVector):
                self.output.error(
                    f"Argument {exc.position + 1} ('{param.name}') is a malformed vector {value.text}: {value.reason}"
                )
                return
            self.output.error(f"Argument {exc.position + 1} ('{param.name}') could not be used as {param.type_name}")
