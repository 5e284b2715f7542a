"""Reactive data extraction."""

from __future__ import annotations

from typing import Any

from vuedoc.core.config import Feature

from ..entries import DataEntry, EntryKind
from ..errors import UnsupportedSyntaxError
from ..jsdoc import format_type, parse_type_tag
from ..scope import Scope
from ..syntax import named_children, unwrap_expression
from ..values import UNDEFINED, UNRESOLVED, Verbatim, infer_type
from .base import AbstractExtractor, node_line
from .expression import (
    FUNCTION_NODES,
    ValueResolver,
    block_scope,
    function_body,
    function_scope,
    iterate_returns,
    member_name,
)

__all__ = ["DataExtractor"]


class DataExtractor(AbstractExtractor):
    """Produce one :class:`DataEntry` per member of the data object.

    Data functions get their own scope so shorthand members such as
    ``return { a, b }`` resolve to the local declarations.
    """

    kind = EntryKind.DATA
    feature = Feature.DATA
    name_tag = "data"
    reserved_tags = frozenset({"data", "type", "initialValue"})

    def extract(self, node: Any) -> None:
        node = unwrap_expression(node)
        if node.type == "object":
            self._parse_object(node, self.resolver)
        elif node.type in FUNCTION_NODES:
            self._parse_function(node)
        else:
            raise UnsupportedSyntaxError("data", node)

    def parse_field(self, name: str, value: Any | None, doc_node: Any) -> None:
        """Extract a class field declared with an optional initializer."""

        if not self.enabled:
            return
        resolved = UNDEFINED if value is None else self.resolver.value_of(value)
        self._emit(name, resolved, doc_node)

    # ------------------------------------------------------------------
    # Functions
    # ------------------------------------------------------------------
    def _parse_function(self, node: Any) -> None:
        scope: Scope = function_scope(node, self.scope, self.context.source)
        body = function_body(node)
        returned = None
        if body is not None and body.type == "statement_block":
            scope = block_scope(body, scope, self.context.source)
            for statement in iterate_returns(body):
                argument = unwrap_expression(
                    statement.named_children[0] if statement.named_children else None
                )
                if argument is not None and argument.type == "object":
                    returned = argument
                    break
        else:
            returned = unwrap_expression(body)
            if returned is not None and returned.type != "object":
                returned = None

        if returned is None:
            self.emit_diagnostic("Unable to find the object returned by data", node)
            return
        self._parse_object(returned, ValueResolver(self.context.source, scope))

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------
    def _parse_object(self, node: Any, resolver: ValueResolver) -> None:
        for member in named_children(node):
            if member.type == "spread_element":
                self.logger.debug("Skipping spread member", line=node_line(member))
                continue
            if member.type == "shorthand_property_identifier":
                name = resolver.text(member)
                value = resolver.scope.lookup(name)
                if value is UNRESOLVED:
                    value = Verbatim(name)
                self._emit(name, value, member)
            elif member.type == "pair":
                name = member_name(member, resolver)
                if not name:
                    continue
                value_node = member.child_by_field_name("value")
                self._emit(name, resolver.value_of(value_node), member)
            elif member.type == "method_definition":
                name = member_name(member, resolver)
                if name:
                    self._emit(name, resolver.verbatim(member), member)
            else:
                raise UnsupportedSyntaxError("data", member)

    def _emit(self, name: str, value: Any, doc_node: Any) -> None:
        entry = DataEntry(name=name, type=infer_type(value), initial_value=value)
        parsed = self.parse_entry_comment(entry, doc_node)
        for keyword in parsed.keywords:
            if keyword.name == "type":
                declared = parse_type_tag(keyword.description)
                if declared:
                    entry.type = format_type(declared)
            elif keyword.name == "initialValue" and keyword.description:
                entry.initial_value = Verbatim(keyword.description)
        self.emit(entry)
