"""Static values produced by the expression resolver."""

from __future__ import annotations

from dataclasses import dataclass, fields, is_dataclass
from enum import Enum
import json
from typing import Any

from pydantic.alias_generators import to_camel

__all__ = [
    "BigInt",
    "Sentinel",
    "UNDEFINED",
    "UNRESOLVED",
    "Verbatim",
    "display_value",
    "infer_type",
    "is_static",
    "to_plain",
]


class Sentinel(Enum):
    """Markers for values that have no Python literal counterpart."""

    UNDEFINED = "undefined"
    UNRESOLVED = "unresolved"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return self.name


UNDEFINED = Sentinel.UNDEFINED
UNRESOLVED = Sentinel.UNRESOLVED


@dataclass(frozen=True, slots=True)
class BigInt:
    """A ``123n`` literal."""

    value: int

    def __str__(self) -> str:
        return f"{self.value}n"


@dataclass(frozen=True, slots=True)
class Verbatim:
    """Source text captured for an expression that is never evaluated."""

    text: str

    def __str__(self) -> str:
        return self.text


def is_static(value: Any) -> bool:
    """Return ``True`` when ``value`` is a fully materialized literal."""

    if isinstance(value, (Verbatim, Sentinel)):
        return False
    if isinstance(value, dict):
        return all(is_static(item) for item in value.values())
    if isinstance(value, list):
        return all(is_static(item) for item in value)
    return True


def infer_type(value: Any) -> str:
    """Return the runtime category of ``value``.

    Example:
        >>> infer_type(-1), infer_type([1]), infer_type(Verbatim("!d"))
        ('number', 'array', 'any')
    """

    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float, BigInt)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if value is None or isinstance(value, dict):
        return "object"
    return "any"


def _js_literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, BigInt):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list):
        return "[" + ", ".join(_js_literal(item) for item in value) + "]"
    if isinstance(value, dict):
        inner = ", ".join(
            f"{json.dumps(key)}: {_js_literal(item)}" for key, item in value.items()
        )
        return "{" + inner + "}"
    if isinstance(value, (Verbatim, Sentinel)):
        return str(value.text if isinstance(value, Verbatim) else value.value)
    return json.dumps(value, ensure_ascii=False)


def display_value(value: Any) -> str:
    """Render ``value`` the way it reads in a call signature.

    Example:
        >>> display_value("hello"), display_value(Verbatim("a || b"))
        ('"hello"', 'a || b')
    """

    return _js_literal(value)


def to_plain(value: Any) -> Any:
    """Convert entry payloads into JSON-compatible structures.

    Dataclass fields are keyed by their camelCase names (``default_value``
    becomes ``defaultValue``). Keys of object literals are left untouched.
    """

    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (Verbatim, BigInt)):
        return str(value)
    if isinstance(value, list):
        return [to_plain(item) for item in value]
    if isinstance(value, dict):
        return {key: to_plain(item) for key, item in value.items()}
    if is_dataclass(value):
        return {
            to_camel(item.name): to_plain(getattr(value, item.name))
            for item in fields(value)
        }
    return value
