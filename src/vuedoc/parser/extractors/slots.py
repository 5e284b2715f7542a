"""Slot extraction from component markup and render functions."""

from __future__ import annotations

from typing import Any

from vuedoc.core.config import Feature

from ..comments import ParsedComment
from ..entries import EntryKind, SlotEntry, SlotProp
from ..jsdoc import ParamTag, merge_param_tags, param_tags, parse_slot_tag
from ..syntax import (
    first_child_of_type,
    iterate_nodes,
    named_children,
    unwrap_expression,
)
from .base import AbstractExtractor
from .expression import THIS_BINDING_NODES

__all__ = ["SlotExtractor", "markup_attributes"]

_SLOT_TAG = "slot"
_BIND_PREFIXES = (":", "v-bind:")
# Attributes of a ``<slot>`` element that are not passed to the slot scope.
_RESERVED_ATTRIBUTES = frozenset({"name", "slot", "key", "ref", "is"})
_SLOT_MAPS = frozenset({"$slots", "$scopedSlots", "slots"})


def _prop_from_tag(tag: ParamTag) -> SlotProp:
    return SlotProp(name=tag.name, type=tag.type or "any", description=tag.description)


def markup_attributes(node: Any, source: Any) -> list[tuple[str, str | None]]:
    """Return ``(name, value)`` pairs of an element's opening tag in order."""

    tag = first_child_of_type(node, "start_tag", "self_closing_tag")
    if tag is None:
        return []
    attributes: list[tuple[str, str | None]] = []
    for child in tag.named_children:
        if child.type != "attribute":
            continue
        name_node = first_child_of_type(child, "attribute_name")
        if name_node is None:
            continue
        value_node = first_child_of_type(
            child, "quoted_attribute_value", "attribute_value"
        )
        value = None
        if value_node is not None:
            value = source.slice(value_node).strip()
            if value[:1] in {"'", '"'} and value.endswith(value[0]):
                value = value[1:-1]
        attributes.append((source.slice(name_node).strip(), value))
    return attributes


def _tag_name(node: Any, source: Any) -> str | None:
    tag = first_child_of_type(node, "start_tag", "self_closing_tag")
    if tag is None:
        return None
    name = first_child_of_type(tag, "tag_name")
    return source.slice(name).strip().lower() if name is not None else None


def _unbind(name: str) -> tuple[str, bool]:
    for prefix in _BIND_PREFIXES:
        if name.startswith(prefix):
            return name[len(prefix) :], True
    return name, False


class SlotExtractor(AbstractExtractor):
    """Produce one :class:`SlotEntry` per slot, flattened in document order.

    ``@slot name - description`` tags expand into one entry each. Slots are
    keyed by name and the first declaration wins.
    """

    kind = EntryKind.SLOT
    feature = Feature.SLOTS
    reserved_tags = frozenset({"slot", "prop"})

    def extract(self, node: Any) -> None:
        source = self.context.source
        for element in iterate_nodes(node):
            if element.type != "element" or _tag_name(element, source) != _SLOT_TAG:
                continue
            self._parse_element(element)

    def parse_tags(self, doc_node: Any) -> None:
        """Extract the slots documented by ``@slot`` tags of a script comment."""

        if not self.enabled:
            return
        self._emit_tagged(self.context.comment_for(doc_node), [])

    def parse_render(self, function: Any) -> None:
        """Extract slots referenced by a render function."""

        if not self.enabled:
            return
        for name in self._render_references(function):
            entry = SlotEntry(name=name)
            self.apply_comment(entry, ParsedComment())
            self.emit(entry, unique=True)

    # ------------------------------------------------------------------
    # Markup
    # ------------------------------------------------------------------
    def _parse_element(self, element: Any) -> None:
        name = "default"
        props: list[SlotProp] = []
        for attribute, value in markup_attributes(element, self.context.source):
            if attribute.startswith(("v-on:", "@", "#")) or attribute == "v-bind":
                continue
            target, bound = _unbind(attribute)
            if target == "name":
                name = value or name
            elif target in _RESERVED_ATTRIBUTES or target.startswith("v-"):
                continue
            else:
                props.append(SlotProp(name=target, type="any" if bound else "string"))

        parsed = self.context.comment_for(element)
        if parsed.find("slot") is not None:
            self._emit_tagged(parsed, props)
            return
        entry = SlotEntry(name=name)
        self.apply_comment(entry, parsed)
        entry.props = self._merge_props(props, parsed)
        self.emit(entry, unique=True)

    def _emit_tagged(self, parsed: ParsedComment, props: list[SlotProp]) -> None:
        for keyword in parsed.find_all("slot"):
            name, description = parse_slot_tag(keyword.description)
            entry = SlotEntry(name=name)
            self.apply_comment(entry, parsed)
            entry.description = description
            entry.props = self._merge_props(
                [SlotProp(item.name, item.type, item.description) for item in props],
                parsed,
            )
            self.emit(entry, unique=True)

    def _merge_props(
        self,
        props: list[SlotProp],
        parsed: ParsedComment,
    ) -> list[SlotProp]:
        tags = param_tags(parsed.keywords, "prop")
        return merge_param_tags(props, tags, _prop_from_tag)

    # ------------------------------------------------------------------
    # Render functions
    # ------------------------------------------------------------------
    def _render_references(self, function: Any) -> list[str]:
        found: list[str] = []
        source = self.context.source

        body = function.child_by_field_name("body")
        if body is None:
            return found
        nodes = iterate_nodes(
            body, named=True, skip=lambda child: child.type in THIS_BINDING_NODES
        )
        for node in nodes:
            if node.type != "member_expression":
                continue
            target = unwrap_expression(node.child_by_field_name("object"))
            prop = node.child_by_field_name("property")
            if target is not None and prop is not None and self._is_slot_map(target):
                found.append(source.slice(prop))
        return found

    def _is_slot_map(self, node: Any) -> bool:
        """Return ``True`` for ``this.$slots``, ``slots()`` and friends."""

        source = self.context.source
        if node.type == "identifier":
            return source.slice(node) in _SLOT_MAPS
        if node.type == "member_expression":
            prop = node.child_by_field_name("property")
            return prop is not None and source.slice(prop) in _SLOT_MAPS
        if node.type == "call_expression":
            callee = unwrap_expression(node.child_by_field_name("function"))
            return callee is not None and self._is_slot_map(callee)
        return False
