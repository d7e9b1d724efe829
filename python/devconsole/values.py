"""Typed values parsed from console tokens.

Every argument typed at the console goes through :func:`convert_token`.
Integers win over floats, floats accept an optional ``f`` suffix, and
square-bracketed lists of 2 to 4 numbers become vectors.  Anything else is
kept as the stripped text.
"""

from __future__ import annotations

import inspect
import re
import types
import typing
from dataclasses import astuple, dataclass
from typing import Any, Iterator, List, MutableMapping, Optional

_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

_OPENERS = {"(": ")", "[": "]"}
_CLOSERS = {")", "]"}

Placeholders = MutableMapping[str, Any]


class _Vector:
    def __iter__(self) -> Iterator[float]:
        return iter(astuple(self))

    def __len__(self) -> int:
        return len(astuple(self))

    def __str__(self) -> str:
        return "(" + ", ".join(f"{value:g}" for value in self) + ")"


@dataclass(frozen=True)
class Vector2(_Vector):
    x: float = 0.0
    y: float = 0.0


@dataclass(frozen=True)
class Vector3(_Vector):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


@dataclass(frozen=True)
class Vector4(_Vector):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0


VECTOR_TYPES = {2: Vector2, 3: Vector3, 4: Vector4}


@dataclass(frozen=True)
class MalformedVector:
    """Bracketed literal that could not become a vector.

    It is still passed along as an argument so the call fails type matching
    with the offending text visible in the report.
    """

    text: str
    reason: str = ""

    def __bool__(self) -> bool:
        return False

    def __str__(self) -> str:
        return self.text


def split_fields(text: str, separator: str = ",") -> List[str]:
    """Split *text* on top-level separators, keeping (...) and [...] groups intact."""
    if not text or not text.strip():
        return []
    fields: List[str] = []
    depth = 0
    current: List[str] = []
    for char in text:
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth = max(0, depth - 1)
        elif char == separator and depth == 0:
            fields.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    fields.append("".join(current).strip())
    return fields


def parse_number(text: str) -> Optional[float]:
    """Return an int or float for numeric *text*, or None."""
    if _INT_RE.fullmatch(text):
        return int(text)
    if _FLOAT_RE.fullmatch(text):
        return float(text)
    if len(text) > 1 and text.endswith("f") and _FLOAT_RE.fullmatch(text[:-1]):
        return float(text[:-1])
    return None


def convert_token(token: str, placeholders: Optional[Placeholders] = None) -> Any:
    """Convert one argument token into a typed value.

    When *placeholders* is given, a token naming a pending nested-call result
    is replaced by that result and the entry is consumed.
    """
    text = token.strip()
    if placeholders and text in placeholders:
        return placeholders.pop(text)
    number = parse_number(text)
    if number is not None:
        return number
    if len(text) >= 2 and text.startswith("[") and text.endswith("]"):
        return _convert_vector(text, placeholders)
    return text


def _convert_vector(text: str, placeholders: Optional[Placeholders]) -> Any:
    parts = split_fields(text[1:-1])
    vector_type = VECTOR_TYPES.get(len(parts))
    if vector_type is None:
        return MalformedVector(text, f"expected 2 to 4 components, got {len(parts)}")
    components: List[float] = []
    for part in parts:
        value = convert_token(part, placeholders)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return MalformedVector(text, f"component {part!r} is not a number")
        components.append(float(value))
    return vector_type(*components)


# ---------------------------------------------------------------------------
# Parameter coercion


def is_unannotated(annotation: Any) -> bool:
    return annotation is inspect.Parameter.empty or annotation is Any or annotation is object or isinstance(annotation, str)


def type_name(annotation: Any) -> str:
    if is_unannotated(annotation):
        return "Any"
    if typing.get_origin(annotation) is not None:
        return str(annotation).replace("typing.", "")
    return getattr(annotation, "__name__", str(annotation))


def value_type_name(value: Any) -> str:
    if value is None:
        return "None"
    return type(value).__name__


def coerce_argument(value: Any, annotation: Any) -> Any:
    """Fit *value* to a declared parameter type or raise ``TypeError``."""
    if isinstance(value, MalformedVector):
        raise TypeError(f"malformed vector {value.text!r}: {value.reason}")
    if is_unannotated(annotation):
        return value
    if typing.get_origin(annotation) in (typing.Union, types.UnionType):
        for member in typing.get_args(annotation):
            if member is type(None):
                if value is None:
                    return None
                continue
            try:
                return coerce_argument(value, member)
            except TypeError:
                continue
        raise TypeError(f"{value_type_name(value)} does not fit {type_name(annotation)}")
    if not isinstance(annotation, type):
        return value
    if isinstance(value, annotation) and not (annotation is int and isinstance(value, bool)):
        return value
    if annotation is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    if annotation is str and isinstance(value, (int, float, _Vector)):
        return str(value)
    raise TypeError(f"{value_type_name(value)} does not fit {type_name(annotation)}")


__all__ = [
    "Vector2",
    "Vector3",
    "Vector4",
    "VECTOR_TYPES",
    "MalformedVector",
    "split_fields",
    "parse_number",
    "convert_token",
    "coerce_argument",
    "type_name",
    "value_type_name",
]
