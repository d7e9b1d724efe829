"""Receiver lookup for commands that are not bound to an instance."""

from __future__ import annotations

import logging
import weakref
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Sequence

from .commands.base import CommandDescriptor, TargetMode

if TYPE_CHECKING:  # pragma: no cover
    from .commands import CommandRegistry

LOGGER = logging.getLogger("devconsole.targets")

FindAll = Callable[[type], Sequence[Any]]
FindOne = Callable[[type], Optional[Any]]


class LiveInstances:
    """Weakly tracks host objects so commands can be aimed at them by type."""

    def __init__(self) -> None:
        self._refs: List[weakref.ReferenceType] = []

    def track(self, instance: Any) -> Any:
        if not any(ref() is instance for ref in self._refs):
            self._refs.append(weakref.ref(instance))
        return instance

    def forget(self, instance: Any) -> None:
        self._refs = [ref for ref in self._refs if ref() is not None and ref() is not instance]

    def _alive(self) -> List[Any]:
        alive = []
        refs = []
        for ref in self._refs:
            obj = ref()
            if obj is not None:
                alive.append(obj)
                refs.append(ref)
        self._refs = refs
        return alive

    def find_all(self, instance_type: type) -> List[Any]:
        return [obj for obj in self._alive() if isinstance(obj, instance_type)]

    def find_one(self, instance_type: type) -> Optional[Any]:
        for obj in self._alive():
            if isinstance(obj, instance_type):
                return obj
        return None

    def __len__(self) -> int:
        return len(self._alive())


class TargetResolver:
    """Yields the receivers a non-direct command runs against.

    Instance enumeration is supplied by the host: *find_all* returns every
    live instance of a type, *find_one* picks a single one.  Without
    *find_one* the first result of *find_all* is used.
    """

    def __init__(
        self,
        registry: "CommandRegistry",
        *,
        find_all: Optional[FindAll] = None,
        find_one: Optional[FindOne] = None,
    ) -> None:
        self.registry = registry
        self._find_all = find_all
        self._find_one = find_one

    def resolve(self, declaring_type: type, mode: TargetMode) -> List[Any]:
        if mode is TargetMode.DIRECT:
            raise ValueError("direct commands carry their own callable")
        if mode is TargetMode.REGISTRY:
            instance = self.registry.singleton_for(declaring_type)
            return [] if instance is None else [instance]
        if mode is TargetMode.ALL:
            return list(self._find_all(declaring_type)) if self._find_all else []
        if self._find_one is not None:
            instance = self._find_one(declaring_type)
            return [] if instance is None else [instance]
        if self._find_all is not None:
            found = list(self._find_all(declaring_type))
            return found[:1]
        return []

    def dispatch(self, descriptor: CommandDescriptor, arguments: Sequence[Any]) -> Any:
        """Invoke *descriptor* on its resolved receivers.

        No receiver is a silent no-op.  With several receivers every one is
        invoked in order and no single result can be returned.
        """
        targets = self.resolve(descriptor.declaring_type, descriptor.target_mode)
        if not targets:
            LOGGER.debug("no %s target of type %s for '%s'", descriptor.target_mode.value, descriptor.declaring_type, descriptor.name)
            return None
        if len(targets) == 1:
            return descriptor.function(targets[0], *arguments)
        for target in targets:
            descriptor.function(target, *arguments)
        return None
