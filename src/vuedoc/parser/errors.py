"""Domain-specific exceptions for documentation extraction."""

from __future__ import annotations

from typing import Any


class ExtractionError(RuntimeError):
    """Base error for extraction failures that abort a subtree."""


class UnsupportedSyntaxError(ExtractionError):
    """Raised when a node kind has no case in an extractor's grammar coverage.

    This signals a coverage gap in the engine rather than an authoring
    mistake, so it is never downgraded to a diagnostic.
    """

    def __init__(self, context: str, node: Any) -> None:
        self.node_type = getattr(node, "type", type(node).__name__)
        point = getattr(node, "start_point", None)
        self.line = point[0] + 1 if point is not None else None
        location = f" (line {self.line})" if self.line is not None else ""
        super().__init__(f"Unknown {context} node: {self.node_type}{location}")
        self.context = context


class GrammarUnavailableError(ExtractionError):
    """Raised when a tree-sitter grammar cannot be loaded."""


__all__ = [
    "ExtractionError",
    "GrammarUnavailableError",
    "UnsupportedSyntaxError",
]
