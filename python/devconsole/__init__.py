"""
devconsole package.

An in-process developer console: command lines such as
``outer(inner(1, 2), 3)`` are resolved into calls of registered commands.
Use ``python -m devconsole`` to try it in a terminal.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .commands import CommandRegistry
from .commands.base import CommandDescriptor, ParameterSpec, TargetMode, describe_callable, describe_method
from .config import ConsoleSettings
from .console import DevConsole
from .output import ConsoleOutput, OutputLine, Severity
from .targets import LiveInstances, TargetResolver
from .values import MalformedVector, Vector2, Vector3, Vector4, convert_token


def main(argv=None) -> int:
    from .cli import main as cli_main

    return cli_main(argv)


__all__ = [
    "main",
    "CommandDescriptor",
    "CommandRegistry",
    "ConsoleOutput",
    "ConsoleSettings",
    "DevConsole",
    "LiveInstances",
    "MalformedVector",
    "OutputLine",
    "ParameterSpec",
    "Severity",
    "TargetMode",
    "TargetResolver",
    "Vector2",
    "Vector3",
    "Vector4",
    "convert_token",
    "describe_callable",
    "describe_method",
]
