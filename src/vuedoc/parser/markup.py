"""Structural checks on component markup reported as diagnostics."""

from __future__ import annotations

from typing import Any

from .channel import Diagnostic
from .extractors.base import ExtractionContext, node_line
from .syntax import first_child_of_type, iterate_nodes

__all__ = ["OPTIONAL_END_TAGS", "VOID_ELEMENTS", "check_markup"]

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)

# Elements whose end tag HTML lets authors omit.
OPTIONAL_END_TAGS = frozenset(
    {
        "li",
        "dt",
        "dd",
        "p",
        "rt",
        "rp",
        "optgroup",
        "option",
        "colgroup",
        "caption",
        "thead",
        "tbody",
        "tfoot",
        "tr",
        "td",
        "th",
        "html",
        "head",
        "body",
    }
)


def _end_tag(element: Any) -> Any | None:
    for child in element.children:
        if child.type == "end_tag" and not child.is_missing:
            return child
    return None


def check_markup(context: ExtractionContext, root: Any) -> int:
    """Report unbalanced tags below ``root``; return the number reported."""

    logger = context.scoped_logger("markup")
    source = context.source
    reported = 0
    for node in iterate_nodes(root):
        message = None
        if node.type == "erroneous_end_tag":
            name = first_child_of_type(node, "erroneous_end_tag_name")
            tag = source.slice(name).strip() if name is not None else "?"
            message = f"end tag </{tag}> has no matching start tag."
        elif node.type == "element":
            start = first_child_of_type(node, "start_tag")
            if start is None:
                continue
            name = first_child_of_type(start, "tag_name")
            tag = source.slice(name).strip().lower() if name is not None else ""
            if (
                tag
                and tag not in VOID_ELEMENTS
                and tag not in OPTIONAL_END_TAGS
                and _end_tag(node) is None
            ):
                message = f"tag <{tag}> has no matching end tag."
        if message is None:
            continue
        diagnostic = Diagnostic(message=message, line=node_line(node))
        logger.warning(
            "Recoverable markup issue", message=message, line=diagnostic.line
        )
        context.channel.push_diagnostic(diagnostic)
        reported += 1
    return reported
