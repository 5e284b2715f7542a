"""Shared scaffolding for documentation extractors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from vuedoc.core.config import ExtractionSettings, Feature, Visibility
from vuedoc.core.logging import Logger, get_logger

from ..channel import Diagnostic, EmissionChannel
from ..comments import CommentIndex, ParsedComment
from ..entries import Entry, EntryKind
from ..scope import Scope
from ..syntax import SourceText, SyntaxTree, point_row
from .expression import ValueResolver

__all__ = ["AbstractExtractor", "ExtractionContext", "RESERVED_TAGS"]

VISIBILITY_TAGS = frozenset(item.value for item in Visibility)
RESERVED_TAGS = VISIBILITY_TAGS | {"category"}


@dataclass(slots=True)
class ExtractionContext:
    """State shared by every extractor working on one source tree."""

    source: SourceText
    comments: CommentIndex
    settings: ExtractionSettings
    channel: EmissionChannel
    logger: Logger
    model_prop: str = "value"
    model_event: str = "input"
    declarations: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def for_tree(
        cls,
        tree: SyntaxTree,
        *,
        settings: ExtractionSettings | None = None,
        channel: EmissionChannel | None = None,
        logger: Logger | None = None,
    ) -> "ExtractionContext":
        """Build a context indexing the comments of ``tree``."""

        settings = settings or ExtractionSettings()
        return cls(
            source=tree.source,
            comments=CommentIndex.build(tree.root, tree.source),
            settings=settings,
            channel=channel if channel is not None else EmissionChannel(),
            logger=logger or get_logger("vuedoc.parser"),
            model_prop=settings.default_model_prop,
            model_event=settings.default_model_event,
        )

    def enabled(self, feature: Feature | str) -> bool:
        return self.settings.is_enabled(feature)

    def scoped_logger(self, extractor: str) -> Logger:
        """Return a logger bound to ``extractor`` for structured context."""

        return self.logger.bind(extractor=extractor)

    def comment_for(self, node: Any | None) -> ParsedComment:
        """Return the parsed comment documenting ``node`` (empty when none)."""

        block = self.comments.leading(node) if node is not None else None
        return block.parse() if block is not None else ParsedComment()


def node_line(node: Any | None) -> int | None:
    if node is None:
        return None
    return point_row(node.start_point) + 1


class AbstractExtractor:
    """Base class for the kind-specific extractors.

    Subclasses set ``kind`` and ``feature``, implement :meth:`extract`, and
    list the tags they consume in ``reserved_tags``. ``name_tag`` names the
    tag whose value replaces the structurally derived entry name.
    """

    kind: ClassVar[EntryKind]
    feature: ClassVar[Feature]
    name_tag: ClassVar[str | None] = None
    reserved_tags: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, context: ExtractionContext, scope: Scope | None = None) -> None:
        self.context = context
        self.scope = scope if scope is not None else Scope()
        self.resolver = ValueResolver(context.source, self.scope)
        self.logger = context.scoped_logger(self.kind.value)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def enabled(self) -> bool:
        return self.context.enabled(self.feature)

    def parse(self, node: Any) -> None:
        """Extract entries from ``node`` unless the feature is disabled."""

        if not self.enabled:
            return
        self.extract(node)

    def extract(self, node: Any) -> None:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------
    def parse_entry_comment(self, entry: Entry, node: Any | None) -> ParsedComment:
        """Apply the comment documenting ``node`` to ``entry``.

        Returns the full parsed comment, reserved tags included, so callers
        can merge the tags they consume.
        """

        parsed = self.context.comment_for(node)
        self.apply_comment(entry, parsed)
        return parsed

    def apply_comment(self, entry: Entry, parsed: ParsedComment) -> None:
        settings = self.context.settings
        entry.description = parsed.description
        entry.visibility = settings.default_visibility
        entry.category = settings.default_category

        reserved = RESERVED_TAGS | self.reserved_tags
        visibility: Visibility | None = None
        keywords = []
        for keyword in parsed.keywords:
            if keyword.name in VISIBILITY_TAGS:
                visibility = visibility or Visibility(keyword.name)
            elif keyword.name == "category":
                entry.category = keyword.description or entry.category
            elif keyword.name == self.name_tag:
                name = keyword.description.split("\n", 1)[0].strip()
                if name:
                    entry.name = name
            elif keyword.name not in reserved:
                keywords.append(keyword)

        if visibility is not None:
            entry.visibility = visibility
        entry.keywords = keywords

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------
    def emit(self, entry: Entry, *, unique: bool = False) -> bool:
        pushed = self.context.channel.push_entry(entry, unique=unique)
        if pushed:
            self.logger.debug("Emitted entry", name=entry.name)
        else:
            self.logger.debug("Skipped duplicate entry", name=entry.name)
        return pushed

    def emit_diagnostic(self, message: str, node: Any | None = None) -> None:
        diagnostic = Diagnostic(message=message, line=node_line(node), kind=self.kind)
        self.logger.warning(
            "Recoverable extraction issue",
            message=message,
            line=diagnostic.line,
        )
        self.context.channel.push_diagnostic(diagnostic)
