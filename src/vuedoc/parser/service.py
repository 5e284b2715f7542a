"""Extraction entry point tying the tree loaders to the extractors."""

from __future__ import annotations

from vuedoc.core.config import ExtractionSettings
from vuedoc.core.logging import Logger, get_logger

from .channel import EmissionChannel
from .errors import ExtractionError
from .extractors import ExtractionContext, ScriptExtractor, SlotExtractor
from .markup import check_markup
from .syntax import SyntaxTree, parse_script, parse_template

__all__ = ["extract"]

Source = str | SyntaxTree


def _script_tree(script: Source, lang: str) -> SyntaxTree:
    if isinstance(script, SyntaxTree):
        return script
    return parse_script(script, lang)


def _template_tree(template: Source) -> SyntaxTree:
    if isinstance(template, SyntaxTree):
        return template
    return parse_template(template)


def extract(
    script: Source | None = None,
    template: Source | None = None,
    *,
    lang: str = "js",
    settings: ExtractionSettings | None = None,
    logger: Logger | None = None,
) -> EmissionChannel:
    """Extract documentation entries from a component's script and markup.

    Args:
        script: Script section text, or a tree from :func:`parse_script`.
        template: Markup section text, or a tree from :func:`parse_template`.
        lang: Script language (``js``, ``ts`` or ``tsx``).
        settings: Extraction settings; defaults enable every feature.
        logger: Structured logger; defaults to ``vuedoc.parser``.

    Returns:
        The channel holding entries and diagnostics in emission order.

    Raises:
        UnsupportedSyntaxError: If a node kind has no extraction case.
        GrammarUnavailableError: If a tree-sitter grammar is not installed.

    Example:
        >>> channel = extract("export default { props: ['title'] }")
        >>> [entry.name for entry in channel.entries]
        ['title']
    """

    settings = settings or ExtractionSettings()
    log = logger or get_logger("vuedoc.parser")
    channel = EmissionChannel()

    try:
        if script is not None:
            tree = _script_tree(script, lang)
            context = ExtractionContext.for_tree(
                tree, settings=settings, channel=channel, logger=log
            )
            ScriptExtractor(context).parse(tree.root)

        if template is not None:
            tree = _template_tree(template)
            context = ExtractionContext.for_tree(
                tree, settings=settings, channel=channel, logger=log
            )
            SlotExtractor(context).parse(tree.root)
            check_markup(context, tree.root)
    except ExtractionError as exc:
        log.error(
            "Extraction aborted",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        raise

    log.debug(
        "Extraction completed",
        entries=len(channel.entries),
        diagnostics=len(channel.diagnostics),
    )
    return channel
