"""Command descriptors for devconsole."""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

from ..errors import RegistrationError
from ..values import type_name


class TargetMode(str, Enum):
    """Which receiver(s) a command is invoked against."""

    DIRECT = "direct"
    SINGLE = "single"
    ALL = "all"
    REGISTRY = "registry"


@dataclass(frozen=True)
class ParameterSpec:
    name: str
    annotation: Any = inspect.Parameter.empty
    optional: bool = False

    @property
    def type_name(self) -> str:
        return type_name(self.annotation)


@dataclass(frozen=True)
class CommandDescriptor:
    """One callable shape of a named command.

    DIRECT descriptors carry a ready-to-call ``function``.  Every other mode
    carries the plain function together with ``declaring_type``; receivers
    are located at call time and passed as the first argument.
    """

    name: str
    function: Callable[..., Any]
    description: str = ""
    category: Optional[str] = None
    parameters: Tuple[ParameterSpec, ...] = field(default_factory=tuple)
    target_mode: TargetMode = TargetMode.DIRECT
    declaring_type: Optional[type] = None
    closure: bool = False

    def __post_init__(self) -> None:
        if not self.name or not str(self.name).strip():
            raise RegistrationError("command name must not be empty")
        if not callable(self.function):
            raise RegistrationError(f"command '{self.name}' has no callable")
        if self.target_mode is not TargetMode.DIRECT and self.declaring_type is None:
            raise RegistrationError(
                f"command '{self.name}' uses target mode {self.target_mode.value} without a declaring type"
            )

    @property
    def arity(self) -> int:
        return len(self.parameters)

    @property
    def parameter_types(self) -> List[str]:
        return [param.type_name for param in self.parameters]

    def signature(self) -> str:
        return f"{self.name}({', '.join(self.parameter_types)})"

    def format_help(self) -> str:
        text = f"- {self.signature()}:"
        if self.description:
            text += f" {self.description}"
        return text


def _signature(function: Callable[..., Any]) -> inspect.Signature:
    try:
        return inspect.signature(function, eval_str=True)
    except (NameError, SyntaxError, TypeError):
        # Annotations that cannot be resolved are treated as untyped.
        return inspect.signature(function)


def parameter_overloads(function: Callable[..., Any], *, skip_receiver: bool = False) -> List[Tuple[ParameterSpec, ...]]:
    """Return one parameter tuple per accepted positional arity, shortest first."""
    try:
        signature = _signature(function)
    except (TypeError, ValueError) as exc:
        raise RegistrationError(f"cannot inspect {function!r}: {exc}") from exc
    params = list(signature.parameters.values())
    if skip_receiver:
        params = params[1:]
    for param in params:
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            raise RegistrationError(f"{function!r} takes a variable argument list '*{param.name}'")
        if param.kind is inspect.Parameter.KEYWORD_ONLY and param.default is inspect.Parameter.empty:
            raise RegistrationError(f"{function!r} has required keyword-only parameter '{param.name}'")
    positional = [
        param
        for param in params
        if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    specs = tuple(
        ParameterSpec(param.name, param.annotation, param.default is not inspect.Parameter.empty)
        for param in positional
    )
    required = sum(1 for spec in specs if not spec.optional)
    return [specs[:count] for count in range(required, len(specs) + 1)]


def describe_callable(
    name: str,
    function: Callable[..., Any],
    *,
    description: str = "",
    category: Optional[str] = None,
    closure: bool = False,
) -> List[CommandDescriptor]:
    """Build DIRECT descriptors for a bound method or free function.

    With *closure* set, the zero-argument shape runs for effect only and its
    return value is dropped.
    """
    return [
        CommandDescriptor(
            name=name,
            function=function,
            description=description,
            category=category,
            parameters=params,
            closure=closure and not params,
        )
        for params in parameter_overloads(function)
    ]


def describe_method(
    declaring_type: type,
    method_name: str,
    *,
    name: Optional[str] = None,
    description: str = "",
    category: Optional[str] = None,
    target_mode: TargetMode = TargetMode.SINGLE,
) -> List[CommandDescriptor]:
    """Build descriptors for a method declared on *declaring_type*.

    Static and class methods need no receiver and always become DIRECT.
    """
    try:
        raw = inspect.getattr_static(declaring_type, method_name)
    except AttributeError as exc:
        raise RegistrationError(f"{declaring_type.__name__} has no method '{method_name}'") from exc
    command_name = name or method_name
    if isinstance(raw, (staticmethod, classmethod)):
        bound = getattr(declaring_type, method_name)
        return [
            CommandDescriptor(
                name=command_name,
                function=bound,
                description=description,
                category=category,
                parameters=params,
            )
            for params in parameter_overloads(bound)
        ]
    if not callable(raw):
        raise RegistrationError(f"{declaring_type.__name__}.{method_name} is not callable")
    if TargetMode(target_mode) is TargetMode.DIRECT:
        raise RegistrationError(
            f"{declaring_type.__name__}.{method_name} needs a receiver; register it on an instance instead"
        )
    return [
        CommandDescriptor(
            name=command_name,
            function=raw,
            description=description,
            category=category,
            parameters=params,
            target_mode=TargetMode(target_mode),
            declaring_type=declaring_type,
        )
        for params in parameter_overloads(raw, skip_receiver=True)
    ]
