"""tree-sitter loading and node inspection helpers shared by extractors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator

from .errors import GrammarUnavailableError

__all__ = [
    "SourceText",
    "SyntaxTree",
    "first_child_of_type",
    "has_keyword",
    "iterate_nodes",
    "named_children",
    "parse_script",
    "parse_template",
    "point_row",
    "unwrap_expression",
]

_LANGUAGE_ALIASES = {
    "js": "javascript",
    "javascript": "javascript",
    "jsx": "javascript",
    "mjs": "javascript",
    "ts": "typescript",
    "typescript": "typescript",
    "tsx": "tsx",
    "html": "html",
}

# Wrappers that carry no value of their own for static analysis.
_TRANSPARENT_EXPRESSIONS = frozenset(
    {
        "parenthesized_expression",
        "as_expression",
        "satisfies_expression",
        "non_null_expression",
        "type_assertion",
    }
)


@dataclass(slots=True)
class _ParserResources:
    """Container for tree-sitter parser resources."""

    parser: Any
    language: str


_PARSERS: dict[str, _ParserResources] = {}


def _grammar_factory(language: str) -> Callable[[], Any]:
    if language == "javascript":
        import tree_sitter_javascript

        return tree_sitter_javascript.language
    if language == "typescript":
        import tree_sitter_typescript

        return tree_sitter_typescript.language_typescript
    if language == "tsx":
        import tree_sitter_typescript

        return tree_sitter_typescript.language_tsx
    if language == "html":
        import tree_sitter_html

        return tree_sitter_html.language
    raise GrammarUnavailableError(f"No tree-sitter grammar for {language!r}")


def _load_parser(lang: str) -> _ParserResources:
    language = _LANGUAGE_ALIASES.get(lang.strip().lower())
    if language is None:
        raise GrammarUnavailableError(f"Unsupported script language: {lang!r}")

    cached = _PARSERS.get(language)
    if cached is not None:
        return cached

    try:
        from tree_sitter import Language, Parser

        grammar = _grammar_factory(language)
        parser = Parser(Language(grammar()))
    except ImportError as exc:
        raise GrammarUnavailableError(
            f"tree-sitter grammar for {language!r} is not installed: {exc}"
        ) from exc

    resources = _ParserResources(parser=parser, language=language)
    _PARSERS[language] = resources
    return resources


class SourceText:
    """UTF-8 source buffer addressed by tree-sitter byte offsets."""

    __slots__ = ("data",)

    def __init__(self, data: bytes) -> None:
        self.data = data

    @classmethod
    def from_text(cls, text: str) -> "SourceText":
        return cls(text.encode("utf-8"))

    def text(self, start: int, end: int) -> str:
        return self.data[start:end].decode("utf-8", errors="ignore")

    def slice(self, node: Any) -> str:
        """Return the verbatim source text spanned by ``node``."""

        return self.text(node.start_byte, node.end_byte)

    def is_blank(self, start: int, end: int) -> bool:
        return not self.data[start:end].strip()


@dataclass(frozen=True, slots=True)
class SyntaxTree:
    """A parsed tree together with the buffer it was parsed from."""

    tree: Any
    source: SourceText
    language: str

    @property
    def root(self) -> Any:
        return self.tree.root_node


def _parse(text: str, lang: str) -> SyntaxTree:
    resources = _load_parser(lang)
    source = SourceText.from_text(text)
    tree = resources.parser.parse(source.data)
    return SyntaxTree(tree=tree, source=source, language=resources.language)


def parse_script(text: str, lang: str = "js") -> SyntaxTree:
    """Parse script ``text`` written in ``lang`` (``js``, ``ts`` or ``tsx``).

    Raises:
        GrammarUnavailableError: If the grammar package is not installed.

    Example:
        >>> tree = parse_script("export default {}")
        >>> tree.root.type
        'program'
    """

    return _parse(text, lang)


def parse_template(text: str) -> SyntaxTree:
    """Parse component markup ``text`` with the HTML grammar."""

    return _parse(text, "html")


def point_row(point: Any) -> int:
    """Return the zero-based row for a tree-sitter point."""

    row = getattr(point, "row", None)
    if row is not None:
        return int(row)
    return int(point[0])


def named_children(node: Any) -> list[Any]:
    """Return the named children of ``node`` without comment nodes."""

    return [child for child in node.named_children if child.type != "comment"]


def first_child_of_type(node: Any, *types: str) -> Any | None:
    for child in node.children:
        if child.type in types:
            return child
    return None


def iterate_nodes(
    node: Any,
    *,
    named: bool = False,
    skip: Callable[[Any], bool] | None = None,
) -> Iterator[Any]:
    """Yield ``node`` and its descendants depth-first, left to right.

    Descendants matching ``skip`` are left out together with their subtrees.
    The walk keeps an explicit stack instead of recursing.
    """

    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        children = current.named_children if named else current.children
        stack.extend(
            child for child in reversed(children) if skip is None or not skip(child)
        )


def unwrap_expression(node: Any | None) -> Any | None:
    """Strip parentheses and TypeScript assertion wrappers from ``node``."""

    while node is not None and node.type in _TRANSPARENT_EXPRESSIONS:
        inner = named_children(node)
        if not inner:
            break
        # ``<T>expr`` puts the type first; every other wrapper leads with it.
        node = inner[-1] if node.type == "type_assertion" else inner[0]
    return node


def has_keyword(node: Any, keywords: Iterable[str]) -> bool:
    """Return ``True`` when an anonymous child token of ``node`` is a keyword."""

    wanted = set(keywords)
    return any(
        not child.is_named and child.type in wanted for child in node.children
    )
