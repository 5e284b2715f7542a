"""Two-way-binding model extraction."""

from __future__ import annotations

from typing import Any

from vuedoc.core.config import Feature

from ..entries import EntryKind, ModelEntry
from ..syntax import named_children, unwrap_expression
from .base import AbstractExtractor
from .expression import member_name

__all__ = ["ModelExtractor", "read_model"]


def read_model(node: Any | None, resolver: Any) -> dict[str, str] | None:
    """Return the ``prop``/``event`` strings declared by a ``model`` option.

    ``None`` means the option is not an object literal.
    """

    node = unwrap_expression(node)
    if node is None or node.type != "object":
        return None
    declared: dict[str, str] = {}
    for member in named_children(node):
        if member.type != "pair":
            continue
        key = member_name(member, resolver)
        value = resolver.resolve(member.child_by_field_name("value"))
        if key in {"prop", "event"} and isinstance(value, str) and value:
            declared[key] = value
    return declared


class ModelExtractor(AbstractExtractor):
    """Produce the :class:`ModelEntry` of a ``model`` option."""

    kind = EntryKind.MODEL
    feature = Feature.MODEL
    reserved_tags = frozenset({"model"})

    def extract(self, node: Any) -> None:
        declared = read_model(node, self.resolver)
        if declared is None:
            self.emit_diagnostic("Invalid model declaration", node)
            return
        entry = ModelEntry(
            name="model",
            prop=declared.get("prop", self.context.settings.default_model_prop),
            event=declared.get("event", self.context.settings.default_model_event),
        )
        doc_node = node.parent if node.parent is not None else node
        self.parse_entry_comment(entry, doc_node)
        self.emit(entry, unique=True)
