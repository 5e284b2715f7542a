"""Prop extraction from ``props`` options and ``@Prop`` class fields."""

from __future__ import annotations

import re
from typing import Any

from vuedoc.core.config import Feature, NameCase

from ..entries import EntryKind, PropEntry, TypeName
from ..errors import UnsupportedSyntaxError
from ..jsdoc import parse_type_tag
from ..syntax import named_children, unwrap_expression
from ..values import Verbatim
from .base import AbstractExtractor, node_line
from .expression import FUNCTION_NODES, member_name

__all__ = ["PropExtractor", "convert_case"]

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")
_KEBAB_SEPARATOR = re.compile(r"-+([a-zA-Z0-9])")


def convert_case(name: str, case: NameCase) -> str:
    """Apply the configured naming convention to a prop name.

    Example:
        >>> convert_case("cycleHighlight", NameCase.KEBAB)
        'cycle-highlight'
        >>> convert_case("cycle-highlight", NameCase.CAMEL)
        'cycleHighlight'
    """

    if case is NameCase.KEBAB:
        return _CAMEL_BOUNDARY.sub("-", name).lower()
    if case is NameCase.CAMEL:
        return _KEBAB_SEPARATOR.sub(lambda match: match.group(1).upper(), name)
    return name


class PropExtractor(AbstractExtractor):
    """Produce one :class:`PropEntry` per declared prop."""

    kind = EntryKind.PROP
    feature = Feature.PROPS
    name_tag = "prop"
    reserved_tags = frozenset({"prop", "type", "default", "model"})

    def extract(self, node: Any) -> None:
        node = unwrap_expression(node)
        if node.type == "array":
            for item in named_children(node):
                name = self.resolver.resolve(item)
                if not isinstance(name, str) or not name:
                    self.emit_diagnostic("Invalid prop declaration", item)
                    continue
                self._emit(PropEntry(name=name), item)
        elif node.type == "object":
            for member in named_children(node):
                self._parse_member(member)
        else:
            raise UnsupportedSyntaxError("props", node)

    def parse_decorated(self, name: str, options: Any | None, doc_node: Any) -> None:
        """Extract a prop declared by a ``@Prop(options)`` class field."""

        if not self.enabled:
            return
        entry = PropEntry(name=name)
        if options is not None:
            self._apply_definition(entry, unwrap_expression(options))
        self._emit(entry, doc_node)

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------
    def _parse_member(self, member: Any) -> None:
        if member.type == "spread_element":
            self.logger.debug("Skipping spread member", line=node_line(member))
            return
        if member.type == "shorthand_property_identifier":
            self._emit(PropEntry(name=self.resolver.text(member)), member)
            return
        if member.type != "pair":
            raise UnsupportedSyntaxError("props", member)

        name = member_name(member, self.resolver)
        if not name:
            self.emit_diagnostic("Invalid prop declaration", member)
            return
        entry = PropEntry(name=name)
        value = unwrap_expression(member.child_by_field_name("value"))
        if not self._apply_definition(entry, value):
            self.emit_diagnostic(f"Invalid declaration for prop {name!r}", value)
            return
        self._emit(entry, member)

    def _apply_definition(self, entry: PropEntry, value: Any | None) -> bool:
        if value is None:
            return False
        if value.type == "object":
            self._apply_options(entry, value)
            return True
        type_name = self._type_of(value)
        if type_name is None:
            return False
        entry.type = type_name
        return True

    def _apply_options(self, entry: PropEntry, node: Any) -> None:
        for member in named_children(node):
            if member.type == "method_definition":
                if member_name(member, self.resolver) == "default":
                    entry.default = self.resolver.verbatim(member)
                continue
            if member.type != "pair":
                continue
            key = member_name(member, self.resolver)
            value = unwrap_expression(member.child_by_field_name("value"))
            if value is None:
                continue
            if key == "type":
                entry.type = self._type_of(value) or "any"
            elif key == "default":
                if value.type in FUNCTION_NODES:
                    entry.default = self.resolver.verbatim(value)
                else:
                    entry.default = self.resolver.value_of(value)
            elif key == "required":
                entry.required = self.resolver.resolve(value) is True

    def _type_of(self, node: Any) -> TypeName | None:
        """Return the type named by a constructor reference or a list of them."""

        if node.type in {"identifier", "member_expression"}:
            return self.resolver.text(node)
        if node.type == "null":
            return "any"
        if node.type == "array":
            names = [
                self.resolver.text(unwrap_expression(item))
                for item in named_children(node)
            ]
            if not names:
                return "any"
            return names[0] if len(names) == 1 else names
        return None

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------
    def _emit(self, entry: PropEntry, doc_node: Any) -> None:
        source_name = entry.name
        parsed = self.parse_entry_comment(entry, doc_node)
        for keyword in parsed.keywords:
            if keyword.name == "type":
                entry.type = parse_type_tag(keyword.description) or entry.type
            elif keyword.name == "default" and keyword.description:
                entry.default = Verbatim(keyword.description)
            elif keyword.name == "model":
                entry.describe_model = True

        model_prop = self.context.model_prop
        if source_name == model_prop or convert_case(
            source_name, NameCase.KEBAB
        ) == convert_case(model_prop, NameCase.KEBAB):
            entry.describe_model = True
        entry.name = convert_case(entry.name, self.context.settings.prop_case)
        self.emit(entry)
