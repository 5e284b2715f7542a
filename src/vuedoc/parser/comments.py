"""Comment index and tag parser.

Comments are collected once per tree and looked up by byte offset. A comment
documents a node when nothing but whitespace separates the two.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
import re
from typing import Any, Sequence

from .entries import Keyword
from .syntax import SourceText, iterate_nodes, point_row

__all__ = [
    "CommentBlock",
    "CommentIndex",
    "ParsedComment",
    "normalize_comment",
    "parse_comment",
]

_KEYWORD_LINE = re.compile(r"^@([A-Za-z_][\w-]*)(.*)$")
_STAR_PREFIX = re.compile(r"^\s*\*")
_LINE_PREFIX = re.compile(r"^\s*//")
_FENCE = "```"


@dataclass(slots=True)
class ParsedComment:
    """Leading prose and ordered keywords of one comment block."""

    description: str = ""
    keywords: list[Keyword] = field(default_factory=list)

    def find(self, name: str) -> Keyword | None:
        for keyword in self.keywords:
            if keyword.name == name:
                return keyword
        return None

    def find_all(self, *names: str) -> list[Keyword]:
        wanted = set(names)
        return [keyword for keyword in self.keywords if keyword.name in wanted]


@dataclass(frozen=True, slots=True)
class CommentBlock:
    """A comment (or a run of adjacent ``//`` lines) located in the source."""

    text: str
    start_byte: int
    end_byte: int
    line: int
    trailing: bool = False

    def parse(self) -> ParsedComment:
        return parse_comment(self.text)


def _dedent(lines: list[str]) -> list[str]:
    indents = [len(line) - len(line.lstrip()) for line in lines if line.strip()]
    if not indents:
        return [line.strip() for line in lines]
    width = min(indents)
    return [line[width:].rstrip() for line in lines]


def normalize_comment(raw: str) -> list[str]:
    """Strip comment markers and normalize indentation, one item per line.

    Example:
        >>> normalize_comment("/**\\n * Hello\\n *   world\\n */")
        ['Hello', '  world']
    """

    text = raw.strip().replace("\r\n", "\n").replace("\r", "\n")
    if text.startswith("//"):
        lines = [_LINE_PREFIX.sub("", line, count=1) for line in text.split("\n")]
        lines = _dedent(lines)
    else:
        starred = False
        if text.startswith("<!--"):
            body = text[4:]
            body = body[:-3] if body.endswith("-->") else body
        elif text.startswith("/*"):
            body = text[2:]
            body = body[:-2] if body.endswith("*/") else body
            starred = True
        else:
            body = text
        lines = body.split("\n")
        first = lines[0].lstrip("*").strip() if starred else lines[0].strip()
        rest = lines[1:]
        if starred and all(
            _STAR_PREFIX.match(line) for line in rest if line.strip()
        ):
            rest = [_STAR_PREFIX.sub("", line, count=1) for line in rest]
        lines = [first, *_dedent(rest)]

    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return lines


def parse_comment(raw: str) -> ParsedComment:
    """Split a comment into its description and ``@`` keywords.

    Only a line starting with ``@word`` opens a keyword, and never inside a
    fenced code block, so inline ``@input`` text stays in the prose.

    Example:
        >>> parsed = parse_comment("/**\\n * Close it\\n * @event close\\n */")
        >>> parsed.description, [(k.name, k.description) for k in parsed.keywords]
        ('Close it', [('event', 'close')])
    """

    description: list[str] = []
    keywords: list[tuple[str, list[str]]] = []
    in_fence = False

    for line in normalize_comment(raw):
        stripped = line.strip()
        if stripped.startswith(_FENCE):
            in_fence = not in_fence
        match = None if in_fence else _KEYWORD_LINE.match(line)
        if match is not None:
            keywords.append((match.group(1), [match.group(2).strip()]))
        elif keywords:
            keywords[-1][1].append(line)
        else:
            description.append(line)

    return ParsedComment(
        description="\n".join(description).strip(),
        keywords=[
            Keyword(name=name, description="\n".join(body).strip())
            for name, body in keywords
        ],
    )


class CommentIndex:
    """Position-indexed lookup of the comment block preceding a node."""

    def __init__(self, blocks: Sequence[CommentBlock], source: SourceText) -> None:
        self._blocks = sorted(blocks, key=lambda block: block.start_byte)
        self._ends = [block.end_byte for block in self._blocks]
        self._source = source

    @classmethod
    def build(cls, root: Any, source: SourceText) -> "CommentIndex":
        blocks: list[CommentBlock] = []
        for node in iterate_nodes(root):
            if node.type != "comment":
                continue
            text = source.slice(node)
            trailing = text.startswith("//") and not _starts_line(
                source, node.start_byte
            )
            previous = blocks[-1] if blocks else None
            if (
                previous is not None
                and not trailing
                and not previous.trailing
                and previous.text.startswith("//")
                and text.startswith("//")
                and source.is_blank(previous.end_byte, node.start_byte)
                and source.text(previous.end_byte, node.start_byte).count("\n") <= 1
            ):
                blocks[-1] = CommentBlock(
                    text=previous.text + "\n" + text,
                    start_byte=previous.start_byte,
                    end_byte=node.end_byte,
                    line=previous.line,
                )
                continue
            blocks.append(
                CommentBlock(
                    text=text,
                    start_byte=node.start_byte,
                    end_byte=node.end_byte,
                    line=point_row(node.start_point) + 1,
                    trailing=trailing,
                )
            )
        return cls(blocks, source)

    def __len__(self) -> int:
        return len(self._blocks)

    def leading(self, node: Any) -> CommentBlock | None:
        """Return the comment documenting ``node``.

        Ancestors that begin at the same offset are tried as well, so a call
        found inside an expression statement picks up the statement comment.
        """

        candidate = node
        while candidate is not None:
            block = self._leading_at(candidate.start_byte)
            if block is not None:
                return block
            parent = candidate.parent
            if parent is None or parent.start_byte != candidate.start_byte:
                return None
            candidate = parent
        return None

    def _leading_at(self, offset: int) -> CommentBlock | None:
        index = bisect_right(self._ends, offset) - 1
        if index < 0:
            return None
        block = self._blocks[index]
        if block.trailing or not self._source.is_blank(block.end_byte, offset):
            return None
        return block


def _starts_line(source: SourceText, offset: int) -> bool:
    line_start = source.data.rfind(b"\n", 0, offset) + 1
    return source.is_blank(line_start, offset)
