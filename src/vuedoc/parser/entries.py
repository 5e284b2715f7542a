"""Documentation entry variants emitted by the extractors."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import StrEnum
from typing import Any, ClassVar

from pydantic.alias_generators import to_camel

from vuedoc.core.config import Visibility

from .values import UNDEFINED, to_plain

__all__ = [
    "ComputedEntry",
    "DataEntry",
    "Entry",
    "EntryKind",
    "EventArgument",
    "EventEntry",
    "Keyword",
    "MethodEntry",
    "MethodParam",
    "MethodReturn",
    "ModelEntry",
    "PropEntry",
    "SlotEntry",
    "SlotProp",
    "TypeName",
]

TypeName = str | list[str]


class EntryKind(StrEnum):
    PROP = "prop"
    DATA = "data"
    COMPUTED = "computed"
    METHOD = "method"
    EVENT = "event"
    SLOT = "slot"
    MODEL = "model"


@dataclass(slots=True)
class Keyword:
    """A ``@name description`` tag kept in declaration order."""

    name: str
    description: str = ""


@dataclass(slots=True)
class Entry:
    """Fields shared by every documentation entry."""

    kind: ClassVar[EntryKind]

    name: str
    visibility: Visibility = Visibility.PUBLIC
    category: str | None = None
    description: str = ""
    keywords: list[Keyword] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return a plain mapping suitable for JSON serialization.

        Keys use the camelCase field names (``describeModel``,
        ``initialValue``, ``defaultValue``). ``UNDEFINED`` values are omitted
        so absent defaults stay absent.
        """

        payload: dict[str, Any] = {"kind": str(self.kind)}
        for item in fields(self):
            value = getattr(self, item.name)
            if value is UNDEFINED:
                continue
            payload[to_camel(item.name)] = to_plain(value)
        return payload


@dataclass(slots=True)
class PropEntry(Entry):
    kind: ClassVar[EntryKind] = EntryKind.PROP

    type: TypeName = "any"
    default: Any = UNDEFINED
    required: bool = False
    describe_model: bool = False


@dataclass(slots=True)
class DataEntry(Entry):
    kind: ClassVar[EntryKind] = EntryKind.DATA

    type: str = "any"
    initial_value: Any = UNDEFINED


@dataclass(slots=True)
class ComputedEntry(Entry):
    kind: ClassVar[EntryKind] = EntryKind.COMPUTED

    dependencies: list[str] = field(default_factory=list)


@dataclass(slots=True)
class MethodParam:
    name: str
    type: TypeName = "unknown"
    default_value: str | None = None
    description: str = ""
    rest: bool = False
    declaration: str | None = None


@dataclass(slots=True)
class MethodReturn:
    type: TypeName = "void"
    description: str = ""


@dataclass(slots=True)
class MethodEntry(Entry):
    kind: ClassVar[EntryKind] = EntryKind.METHOD

    params: list[MethodParam] = field(default_factory=list)
    returns: MethodReturn = field(default_factory=MethodReturn)
    syntax: list[str] = field(default_factory=list)


@dataclass(slots=True)
class EventArgument:
    name: str
    type: TypeName = "any"
    description: str = ""
    rest: bool = False
    declaration: str | None = None


@dataclass(slots=True)
class EventEntry(Entry):
    kind: ClassVar[EntryKind] = EntryKind.EVENT

    arguments: list[EventArgument] = field(default_factory=list)


@dataclass(slots=True)
class SlotProp:
    name: str
    type: TypeName = "any"
    description: str = ""


@dataclass(slots=True)
class SlotEntry(Entry):
    kind: ClassVar[EntryKind] = EntryKind.SLOT

    props: list[SlotProp] = field(default_factory=list)


@dataclass(slots=True)
class ModelEntry(Entry):
    kind: ClassVar[EntryKind] = EntryKind.MODEL

    prop: str = "value"
    event: str = "input"
