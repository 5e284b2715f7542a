"""Computed property extraction and dependency tracking."""

from __future__ import annotations

from typing import Any

from vuedoc.core.config import Feature

from ..entries import ComputedEntry, EntryKind
from ..errors import UnsupportedSyntaxError
from ..syntax import (
    SourceText,
    has_keyword,
    iterate_nodes,
    named_children,
    unwrap_expression,
)
from .base import AbstractExtractor, node_line
from .events import EventExtractor
from .expression import (
    FUNCTION_NODES,
    THIS_BINDING_NODES,
    function_body,
    function_parameters,
    function_scope,
    member_name,
)

__all__ = ["ComputedExtractor", "collect_dependencies"]

_THIS = "this"


def _receivers(function: Any, source: SourceText) -> set[str]:
    """Return the names standing for the component instance inside ``function``.

    Arrow getters receive the instance as their first parameter.
    """

    receivers = {_THIS}
    if function.type == "arrow_function":
        params = function_parameters(function)
        if params and params[0].type == "identifier":
            receivers.add(source.slice(params[0]))
    return receivers


def collect_dependencies(function: Any, source: SourceText) -> list[str]:
    """Return instance members read by ``function`` in first-seen order.

    Nested non-arrow functions rebind ``this`` and are not entered.
    """

    receivers = _receivers(function, source)
    found: dict[str, None] = {}

    def is_receiver(node: Any | None) -> bool:
        node = unwrap_expression(node)
        return node is not None and source.slice(node) in receivers

    body = function_body(function)
    if body is None:
        return []
    for node in iterate_nodes(body, named=True, skip=_binds_this):
        if node.type == "member_expression":
            prop = node.child_by_field_name("property")
            if prop is not None and is_receiver(node.child_by_field_name("object")):
                found.setdefault(source.slice(prop), None)
        elif node.type == "variable_declarator":
            name = node.child_by_field_name("name")
            if (
                name is not None
                and name.type == "object_pattern"
                and is_receiver(node.child_by_field_name("value"))
            ):
                for key in _pattern_keys(name, source):
                    found.setdefault(key, None)
    return list(found)


def _binds_this(node: Any) -> bool:
    return node.type in THIS_BINDING_NODES


def _pattern_keys(pattern: Any, source: SourceText) -> list[str]:
    keys = []
    for child in named_children(pattern):
        if child.type == "shorthand_property_identifier_pattern":
            keys.append(source.slice(child))
        elif child.type in {"pair_pattern", "object_assignment_pattern"}:
            key = child.child_by_field_name("key") or child.child_by_field_name("left")
            if key is not None:
                keys.append(source.slice(key))
    return keys


class ComputedExtractor(AbstractExtractor):
    """Produce one :class:`ComputedEntry` per computed property."""

    kind = EntryKind.COMPUTED
    feature = Feature.COMPUTED
    name_tag = "computed"
    reserved_tags = frozenset({"computed"})

    def extract(self, node: Any) -> None:
        node = unwrap_expression(node)
        if node.type != "object":
            raise UnsupportedSyntaxError("computed", node)
        for member in named_children(node):
            self._parse_member(member)

    def parse_accessor(self, name: str, member: Any) -> None:
        """Extract a computed property declared as a class ``get``/``set`` pair.

        The getter yields the entry. A setter only contributes the events it
        raises.
        """

        if not self.enabled:
            return
        if has_keyword(member, {"get"}):
            self._emit(name, member, member)
        else:
            scope = function_scope(member, self.scope, self.context.source)
            EventExtractor(self.context, scope).parse(member)

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------
    def _parse_member(self, member: Any) -> None:
        if member.type == "spread_element":
            self.logger.debug("Skipping spread member", line=node_line(member))
            return
        if member.type == "method_definition":
            self._emit(member_name(member, self.resolver), member, member)
        elif member.type == "pair":
            value = unwrap_expression(member.child_by_field_name("value"))
            self._emit(member_name(member, self.resolver), self._getter(value), member)
        elif member.type == "shorthand_property_identifier":
            self._emit(self.resolver.text(member), None, member)
        else:
            raise UnsupportedSyntaxError("computed", member)

    def _getter(self, value: Any | None) -> Any | None:
        if value is None:
            return None
        if value.type in FUNCTION_NODES:
            return value
        if value.type == "object":
            # ``{ get() {}, set(value) {} }``
            for member in named_children(value):
                if member_name(member, self.resolver) != "get":
                    continue
                if member.type == "method_definition":
                    return member
                if member.type == "pair":
                    inner = unwrap_expression(member.child_by_field_name("value"))
                    if inner is not None and inner.type in FUNCTION_NODES:
                        return inner
        return None

    def _emit(self, name: str | None, function: Any | None, doc_node: Any) -> None:
        if not name:
            return
        dependencies = []
        if function is not None:
            dependencies = collect_dependencies(function, self.context.source)
        entry = ComputedEntry(name=name, dependencies=dependencies)
        self.parse_entry_comment(entry, doc_node)
        self.emit(entry)

        if function is not None:
            scope = function_scope(function, self.scope, self.context.source)
            EventExtractor(self.context, scope).parse(function)
