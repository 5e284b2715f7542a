"""Parsing of JSDoc-style tag payloads and merging with structural facts."""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Any, Callable, Iterable, TypeVar

from .entries import Keyword, TypeName

__all__ = [
    "ParamTag",
    "ReturnTag",
    "format_type",
    "merge_param_tags",
    "parse_param_tag",
    "parse_return_tag",
    "parse_slot_tag",
    "parse_type_tag",
    "split_type",
]

_NAME_TOKEN = re.compile(r"^(\[[^\]]*\]|\S+)\s*(.*)$", re.S)
_DASH = re.compile(r"^-(\s+|$)")
_OPENERS = {"<": ">", "(": ")", "{": "}", "[": "]"}

T = TypeVar("T")


@dataclass(slots=True)
class ParamTag:
    name: str
    type: TypeName | None = None
    description: str = ""
    rest: bool = False
    optional: bool = False
    default: str | None = None


@dataclass(slots=True)
class ReturnTag:
    type: TypeName | None = None
    description: str = ""


def split_type(text: str) -> TypeName:
    """Split a union type on top-level ``|`` separators.

    Example:
        >>> split_type("Number|String")
        ['Number', 'String']
        >>> split_type("Record<string, A | B>")
        'Record<string, A | B>'
    """

    parts: list[str] = []
    depth = 0
    current: list[str] = []
    closers = set(_OPENERS.values())
    for char in text:
        if char in _OPENERS:
            depth += 1
        elif char in closers:
            depth = max(0, depth - 1)
        if char == "|" and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    parts.append("".join(current).strip())
    parts = [part for part in parts if part]
    if not parts:
        return "any"
    if len(parts) == 1:
        return parts[0]
    return parts


def format_type(value: TypeName) -> str:
    if isinstance(value, list):
        return " | ".join(value)
    return value


def _read_braced(text: str) -> tuple[str | None, str]:
    """Return the ``{...}`` prefix of ``text`` and the remainder."""

    if not text.startswith("{"):
        return None, text
    depth = 0
    for index, char in enumerate(text):
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[1:index].strip(), text[index + 1 :].lstrip()
    return None, text


def _clean_description(text: str) -> str:
    return _DASH.sub("", text.strip(), count=1).strip()


def parse_param_tag(text: str) -> ParamTag | None:
    """Parse ``{type} [name=default] - description`` payloads.

    Example:
        >>> tag = parse_param_tag("{...number} values - Values to sum")
        >>> tag.name, tag.type, tag.rest, tag.description
        ('values', 'number', True, 'Values to sum')
    """

    type_text, remainder = _read_braced(text.strip())
    rest = optional = False
    if type_text is not None:
        if type_text.startswith("..."):
            rest = True
            type_text = type_text[3:]
        if type_text.endswith("="):
            optional = True
            type_text = type_text[:-1]

    match = _NAME_TOKEN.match(remainder)
    if match is None:
        return None
    token, description = match.group(1), match.group(2)
    default: str | None = None
    if token.startswith("[") and token.endswith("]"):
        optional = True
        name, _, raw_default = token[1:-1].partition("=")
        token = name.strip()
        default = raw_default.strip() or None
    if token.startswith("..."):
        rest = True
        token = token[3:]

    return ParamTag(
        name=token,
        type=split_type(type_text) if type_text else None,
        description=_clean_description(description),
        rest=rest,
        optional=optional,
        default=default,
    )


def parse_return_tag(text: str) -> ReturnTag:
    """Parse ``{type} description``; the type is optional."""

    type_text, remainder = _read_braced(text.strip())
    return ReturnTag(
        type=split_type(type_text) if type_text else None,
        description=_clean_description(remainder),
    )


def parse_type_tag(text: str) -> TypeName | None:
    """Parse ``@type`` payloads written with or without braces."""

    type_text, remainder = _read_braced(text.strip())
    if type_text is None:
        type_text = remainder.strip().split("\n", 1)[0]
    return split_type(type_text) if type_text else None


def parse_slot_tag(text: str) -> tuple[str, str]:
    """Parse ``name - description`` payloads of ``@slot`` tags.

    Example:
        >>> parse_slot_tag("title - A title slot")
        ('title', 'A title slot')
    """

    _, remainder = _read_braced(text.strip())
    match = _NAME_TOKEN.match(remainder)
    if match is None:
        return "default", ""
    return match.group(1), _clean_description(match.group(2))


def param_tags(keywords: Iterable[Keyword], *names: str) -> list[ParamTag]:
    """Parse every keyword named in ``names`` into a :class:`ParamTag`."""

    wanted = set(names)
    tags: list[ParamTag] = []
    for keyword in keywords:
        if keyword.name not in wanted:
            continue
        tag = parse_param_tag(keyword.description)
        if tag is not None:
            tags.append(tag)
    return tags


def _apply_tag(record: Any, tag: ParamTag) -> None:
    if tag.type is not None:
        record.type = tag.type
    if tag.description:
        record.description = tag.description
    if getattr(record, "default_value", "") is None and tag.default:
        record.default_value = tag.default


def merge_param_tags(
    records: list[T],
    tags: list[ParamTag],
    make: Callable[[ParamTag], T],
) -> list[T]:
    """Merge documented tags into structurally inferred records.

    Tags match positionally when both lists have the same length and by name
    otherwise; tags matching no record are appended through ``make``. Names,
    defaults and rest flags inferred from code are never replaced.
    """

    tags = [tag for tag in tags if "." not in tag.name]
    if not tags:
        return records
    merged = list(records)
    if len(tags) == len(records):
        for record, tag in zip(records, tags):
            _apply_tag(record, tag)
        return merged

    by_name = {getattr(record, "name"): record for record in records}
    for tag in tags:
        record = by_name.get(tag.name)
        if record is None:
            merged.append(make(tag))
        else:
            _apply_tag(record, tag)
    return merged
