"""Tests for static values, scopes and the expression resolver."""

from __future__ import annotations

from textwrap import dedent

import pytest

from vuedoc.parser import UNDEFINED, UNRESOLVED, BigInt, Scope, Verbatim, parse_script
from vuedoc.parser.extractors.expression import (
    ValueResolver,
    block_scope,
    parse_number,
    unescape_string,
)
from vuedoc.parser.values import display_value, infer_type, is_static, to_plain


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("42", 42),
        ("1_000", 1000),
        ("0x1F", 31),
        ("010", 8),
        ("1.5e3", 1500.0),
        ("12n", BigInt(12)),
    ],
)
def test_parse_number(text: str, expected: object) -> None:
    assert parse_number(text) == expected


def test_unescape_string() -> None:
    assert unescape_string(r"line\nnext") == "line\nnext"
    assert unescape_string(r"\u{1F600}") == "\U0001F600"
    assert unescape_string(r"it\'s") == "it's"


def test_infer_type_categories() -> None:
    assert infer_type("a") == "string"
    assert infer_type(1.5) == "number"
    assert infer_type(BigInt(1)) == "number"
    assert infer_type(False) == "boolean"
    assert infer_type({}) == "object"
    assert infer_type(None) == "object"
    assert infer_type([1]) == "array"
    assert infer_type(UNDEFINED) == "any"
    assert infer_type(Verbatim("!d")) == "any"


def test_display_value_reads_like_source() -> None:
    assert display_value("hello") == '"hello"'
    assert display_value(123) == "123"
    assert display_value(None) == "null"
    assert display_value([1, True]) == "[1, true]"
    assert display_value({"a": 1}) == '{"a": 1}'
    assert display_value(Verbatim("a || b")) == "a || b"
    assert display_value(UNDEFINED) == "undefined"


def test_sentinels_are_falsy_and_not_static() -> None:
    assert not UNDEFINED
    assert not UNRESOLVED
    assert not is_static({"a": UNRESOLVED})
    assert is_static({"a": [1, "b", None]})


def test_to_plain_converts_markers() -> None:
    assert to_plain({"a": [BigInt(3), Verbatim("x")]}) == {"a": ["3n", "x"]}


def test_scope_lookup_walks_parents_and_shadows() -> None:
    module = Scope()
    module.define("EVENTS", {"CLOSE": "close"})
    body = module.child()
    body.define("value", 1)

    assert body.lookup("EVENTS") == {"CLOSE": "close"}
    assert body.lookup("value") == 1
    assert module.lookup("value") is UNRESOLVED
    assert body.depth == 1
    assert "value" not in module.bindings

    body.define("EVENTS", "shadowed")
    assert body.lookup("EVENTS") == "shadowed"
    assert module.lookup("EVENTS") == {"CLOSE": "close"}


def _resolve_declarations(source: str) -> Scope:
    tree = parse_script(dedent(source))
    return block_scope(tree.root, Scope(), tree.source)


def test_block_scope_resolves_declarations() -> None:
    pytest.importorskip("tree_sitter_javascript")

    scope = _resolve_declarations(
        """
        import Vue, { mixin as extra } from 'vue'
        const EVENTS = { CLOSE: 'close', list: [1, 2] }
        const name = EVENTS.CLOSE
        const first = EVENTS['list'][0]
        const missing = EVENTS.OPEN
        const negative = -5
        const big = 10n
        const greeting = `hi`
        const computed = `hi ${name}`
        let a, b = null
        const flag = !(a || b)
        const { x, y: [z] } = source()
        function helper() {}
        """
    )

    assert scope.lookup("EVENTS") == {"CLOSE": "close", "list": [1, 2]}
    assert scope.lookup("name") == "close"
    assert scope.lookup("first") == 1
    assert scope.lookup("missing") == Verbatim("EVENTS.OPEN")
    assert scope.lookup("negative") == -5
    assert scope.lookup("big") == BigInt(10)
    assert scope.lookup("greeting") == "hi"
    assert scope.lookup("computed") == Verbatim("`hi ${name}`")
    assert scope.lookup("a") is UNDEFINED
    assert scope.lookup("b") is None
    assert scope.lookup("flag") == Verbatim("!(a || b)")
    for name in ("Vue", "extra", "x", "z", "helper"):
        assert scope.lookup(name) is UNRESOLVED
    assert scope.lookup("undeclared") is UNRESOLVED


def test_resolver_reports_unresolved_members() -> None:
    pytest.importorskip("tree_sitter_javascript")

    tree = parse_script("EVENTS.UNKNOWN; EVENTS.CLOSE; undefined")
    scope = Scope()
    scope.define("EVENTS", {"CLOSE": "close"})
    resolver = ValueResolver(tree.source, scope)
    unknown, close, undefined = [
        statement.named_children[0] for statement in tree.root.named_children
    ]

    assert resolver.resolve(unknown) is UNRESOLVED
    assert resolver.value_of(unknown) == Verbatim("EVENTS.UNKNOWN")
    assert resolver.resolve(close) == "close"
    assert resolver.resolve(undefined) is UNDEFINED


def test_deeply_nested_literals_stay_verbatim() -> None:
    pytest.importorskip("tree_sitter_javascript")

    literal = "[" * 400 + "1" + "]" * 400
    scope = _resolve_declarations(f"const deep = {literal}\nconst flat = [[1]]")

    assert scope.lookup("deep") == Verbatim(literal)
    assert scope.lookup("flat") == [[1]]
