"""Command registry for devconsole."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, List, Optional

from ..errors import ArityMismatch, CommandNotFound, RegistrationError
from ..output import ConsoleOutput
from .base import CommandDescriptor, ParameterSpec, TargetMode, describe_callable, describe_method

if TYPE_CHECKING:  # pragma: no cover
    from ..console import DevConsole

LOGGER = logging.getLogger("devconsole.commands")


class CommandRegistry:
    """Stores command descriptors in registration order.

    Names are not unique: descriptors sharing a name are told apart by arity
    when a call is resolved.  A side table keeps one externally supplied
    instance per type for REGISTRY-mode commands.
    """

    def __init__(self, *, output: Optional[ConsoleOutput] = None) -> None:
        self.output = output
        self._ordered: List[CommandDescriptor] = []
        self._by_name: Dict[str, List[CommandDescriptor]] = {}
        self._singletons: Dict[type, Any] = {}

    def register(self, descriptor: CommandDescriptor) -> CommandDescriptor:
        if not isinstance(descriptor, CommandDescriptor):
            raise TypeError(f"expected CommandDescriptor, got {type(descriptor).__name__}")
        self._ordered.append(descriptor)
        self._by_name.setdefault(descriptor.name, []).append(descriptor)
        return descriptor

    def register_discovered(self, descriptor: CommandDescriptor) -> CommandDescriptor:
        """Accept a descriptor produced by an external discovery pass."""
        return self.register(descriptor)

    def register_direct(
        self,
        name: str,
        description: str,
        function: Callable[..., Any],
        *,
        category: Optional[str] = None,
    ) -> List[CommandDescriptor]:
        descriptors = describe_callable(name, function, description=description, category=category, closure=True)
        for descriptor in descriptors:
            self.register(descriptor)
        return descriptors

    def register_bound(
        self,
        name: str,
        description: str,
        instance: Any,
        method_name: str,
        *,
        category: Optional[str] = None,
    ) -> List[CommandDescriptor]:
        """Register *method_name* of *instance*, one descriptor per accepted arity.

        A missing method is reported on the console output instead of raising.
        """
        method = getattr(instance, method_name, None)
        if not callable(method):
            self._report_error(
                f'Could not find method "{method_name}" in the defined object instance for the command "{name}".'
            )
            return []
        try:
            descriptors = describe_callable(name, method, description=description, category=category)
        except RegistrationError as exc:
            self._report_error(str(exc))
            return []
        for descriptor in descriptors:
            self.register(descriptor)
        return descriptors

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
        descriptors = describe_method(
            declaring_type,
            method_name,
            name=name,
            description=description,
            category=category,
            target_mode=target_mode,
        )
        for descriptor in descriptors:
            self.register_discovered(descriptor)
        return descriptors

    def lookup(self, name: str) -> List[CommandDescriptor]:
        return list(self._by_name.get(name, ()))

    def resolve_for_call(self, name: str, arguments: List[Any]) -> CommandDescriptor:
        """Return the first descriptor named *name* accepting ``len(arguments)``."""
        candidates = self._by_name.get(name)
        if not candidates:
            raise CommandNotFound(name)
        for descriptor in candidates:
            if descriptor.arity == len(arguments):
                return descriptor
        raise ArityMismatch(name, candidates, arguments)

    def list_commands(self) -> Iterable[CommandDescriptor]:
        return self._ordered

    def names(self) -> List[str]:
        return list(dict.fromkeys(descriptor.name for descriptor in self._ordered))

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._ordered)

    # ------------------------------------------------------------------
    # REGISTRY-mode side table

    def register_singleton(self, instance_type: type, instance: Any) -> None:
        if instance_type in self._singletons:
            message = f"An object of type {instance_type.__name__} is already registered in the registry. It will be replaced."
            LOGGER.warning(message)
            if self.output is not None:
                self.output.warn(message)
        self._singletons[instance_type] = instance

    def unregister_singleton(self, instance_type: type) -> None:
        self._singletons.pop(instance_type, None)

    def singleton_for(self, instance_type: type) -> Optional[Any]:
        return self._singletons.get(instance_type)

    def _report_error(self, message: str) -> None:
        LOGGER.error(message)
        if self.output is not None:
            self.output.error(message)


def install_builtin_commands(console: "DevConsole") -> None:
    """Register the help and utility commands every console starts with."""
    from .help import HelpCommand
    from .utility import UtilityCommands

    help_command = HelpCommand()
    help_command.bind(console.registry, console.output)
    console.registry.register_bound("help", help_command.description, help_command, "run", category="Utility")
    UtilityCommands(console).install()


__all__ = [
    "CommandRegistry",
    "CommandDescriptor",
    "ParameterSpec",
    "TargetMode",
    "install_builtin_commands",
]
