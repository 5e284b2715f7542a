"""Event extraction from emit calls and ``emits`` declarations."""

from __future__ import annotations

from typing import Any

from vuedoc.core.config import Feature

from ..entries import EntryKind, EventArgument, EventEntry
from ..jsdoc import merge_param_tags, param_tags
from ..scope import Scope
from ..syntax import named_children, unwrap_expression
from ..values import UNRESOLVED, display_value, infer_type, is_static
from .base import AbstractExtractor
from .expression import (
    FUNCTION_NODES,
    ValueResolver,
    block_scope,
    function_scope,
    member_name,
    parameter_shapes,
)

__all__ = ["EventExtractor"]

MISSING_EVENT_NAME = "Missing keyword value for @event"

_LITERAL_NODES = frozenset(
    {"string", "number", "true", "false", "null", "undefined", "template_string"}
)
_BLOCK_NODES = frozenset({"statement_block", "class_body", "switch_body"})


def _argument_from_tag(tag: Any) -> EventArgument:
    return EventArgument(
        name=tag.name,
        type=tag.type or "any",
        description=tag.description,
        rest=tag.rest,
    )


class EventExtractor(AbstractExtractor):
    """Find calls to the emit primitive anywhere below a node.

    The walk opens a scope frame for every function and block it enters, so
    event names held in local constants resolve to their values.
    """

    kind = EntryKind.EVENT
    feature = Feature.EVENTS
    name_tag = "event"
    reserved_tags = frozenset({"event", "arg", "argument", "param"})

    def extract(self, node: Any) -> None:
        self._walk(node, self.scope)

    def parse_declarations(self, node: Any) -> None:
        """Extract events declared by an ``emits`` option."""

        if not self.enabled:
            return
        node = unwrap_expression(node)
        if node.type == "array":
            for item in named_children(node):
                name = self.resolver.resolve(item)
                if not isinstance(name, str) or not name:
                    self.emit_diagnostic("Invalid event declaration", item)
                    continue
                self._emit_declared(name, item, [])
        elif node.type == "object":
            for member in named_children(node):
                self._parse_declared_member(member)
        else:
            self.emit_diagnostic("Invalid emits declaration", node)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------
    def _walk(self, node: Any, scope: Scope) -> None:
        source = self.context.source
        stack = [(node, scope)]
        while stack:
            current, frame = stack.pop()
            if current.type == "call_expression" and self._is_emit_call(current):
                self._parse_emit(current, frame)

            pending = []
            for child in named_children(current):
                if child.type in FUNCTION_NODES:
                    pending.append((child, function_scope(child, frame, source)))
                elif child.type in _BLOCK_NODES:
                    pending.append((child, block_scope(child, frame, source)))
                else:
                    pending.append((child, frame))
            stack.extend(reversed(pending))

    def _is_emit_call(self, node: Any) -> bool:
        callee = unwrap_expression(node.child_by_field_name("function"))
        if callee is None:
            return False
        primitives = self.context.settings.emit_primitives
        if callee.type == "identifier":
            return self.resolver.text(callee) in primitives
        if callee.type == "member_expression":
            prop = callee.child_by_field_name("property")
            return prop is not None and self.resolver.text(prop) in primitives
        return False

    # ------------------------------------------------------------------
    # Emit calls
    # ------------------------------------------------------------------
    def _parse_emit(self, node: Any, scope: Scope) -> None:
        arguments = node.child_by_field_name("arguments")
        args = named_children(arguments) if arguments is not None else []
        if not args:
            return

        resolver = self.resolver.with_scope(scope)
        value = resolver.resolve(args[0])
        entry = EventEntry(
            name=value if isinstance(value, str) else "",
            arguments=[self._argument(item, resolver) for item in args[1:]],
        )
        parsed = self.parse_entry_comment(entry, node)
        entry.arguments = merge_param_tags(
            entry.arguments,
            param_tags(parsed.keywords, "arg", "argument", "param"),
            _argument_from_tag,
        )

        if not entry.name:
            self.emit_diagnostic(MISSING_EVENT_NAME, node)
            return
        self.emit(entry, unique=True)

    def _argument(self, node: Any, resolver: ValueResolver) -> EventArgument:
        node = unwrap_expression(node)
        if node.type == "spread_element":
            inner = named_children(node)
            name = resolver.text(inner[0]) if inner else "args"
            return EventArgument(name=name, rest=True, declaration=f"...{name}")
        if node.type == "identifier":
            value = resolver.resolve(node)
            kind = infer_type(value) if value is not UNRESOLVED else "any"
            return EventArgument(name=resolver.text(node), type=kind)
        if node.type in _LITERAL_NODES or node.type == "unary_expression":
            value = resolver.value_of(node)
            if is_static(value):
                return EventArgument(name=display_value(value), type=infer_type(value))
        if node.type == "object":
            return EventArgument(name=resolver.text(node), type="object")
        if node.type == "array":
            return EventArgument(name=resolver.text(node), type="array")
        return EventArgument(name=resolver.text(node))

    # ------------------------------------------------------------------
    # Declared events
    # ------------------------------------------------------------------
    def _parse_declared_member(self, member: Any) -> None:
        if member.type == "spread_element":
            return
        if member.type == "shorthand_property_identifier":
            self._emit_declared(self.resolver.text(member), member, [])
            return
        if member.type not in {"pair", "method_definition"}:
            self.emit_diagnostic("Invalid event declaration", member)
            return

        name = member_name(member, self.resolver)
        if not name:
            self.emit_diagnostic(MISSING_EVENT_NAME, member)
            return
        validator = member
        if member.type == "pair":
            validator = unwrap_expression(member.child_by_field_name("value"))
        arguments: list[EventArgument] = []
        if validator is not None and validator.type in FUNCTION_NODES:
            for shape in parameter_shapes(validator, self.resolver):
                arguments.append(
                    EventArgument(
                        name=shape.name,
                        type=shape.annotation or "any",
                        rest=shape.rest,
                        declaration=shape.declaration,
                    )
                )
        elif validator is not None and validator.type != "null":
            self.emit_diagnostic(f"Invalid validator for event {name!r}", validator)
        self._emit_declared(name, member, arguments)

    def _emit_declared(
        self,
        name: str,
        node: Any,
        arguments: list[EventArgument],
    ) -> None:
        entry = EventEntry(name=name, arguments=arguments)
        parsed = self.parse_entry_comment(entry, node)
        entry.arguments = merge_param_tags(
            entry.arguments,
            param_tags(parsed.keywords, "arg", "argument", "param"),
            _argument_from_tag,
        )
        self.emit(entry, unique=True)
