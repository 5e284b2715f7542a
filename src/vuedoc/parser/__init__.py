"""Documentation extraction surface for single-file components."""

from __future__ import annotations

from .channel import Diagnostic, EmissionChannel, Message
from .comments import CommentIndex, ParsedComment, parse_comment
from .entries import (
    ComputedEntry,
    DataEntry,
    Entry,
    EntryKind,
    EventArgument,
    EventEntry,
    Keyword,
    MethodEntry,
    MethodParam,
    MethodReturn,
    ModelEntry,
    PropEntry,
    SlotEntry,
    SlotProp,
)
from .errors import ExtractionError, GrammarUnavailableError, UnsupportedSyntaxError
from .extractors import ExtractionContext, ScriptExtractor, SlotExtractor
from .markup import check_markup
from .scope import Scope
from .service import extract
from .syntax import SyntaxTree, parse_script, parse_template
from .values import UNDEFINED, UNRESOLVED, BigInt, Verbatim

__all__ = [
    "BigInt",
    "CommentIndex",
    "ComputedEntry",
    "DataEntry",
    "Diagnostic",
    "EmissionChannel",
    "Entry",
    "EntryKind",
    "EventArgument",
    "EventEntry",
    "ExtractionContext",
    "ExtractionError",
    "GrammarUnavailableError",
    "Keyword",
    "Message",
    "MethodEntry",
    "MethodParam",
    "MethodReturn",
    "ModelEntry",
    "ParsedComment",
    "PropEntry",
    "Scope",
    "ScriptExtractor",
    "SlotEntry",
    "SlotExtractor",
    "SlotProp",
    "SyntaxTree",
    "UNDEFINED",
    "UNRESOLVED",
    "UnsupportedSyntaxError",
    "Verbatim",
    "check_markup",
    "extract",
    "parse_comment",
    "parse_script",
    "parse_template",
]
