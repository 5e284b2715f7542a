"""Tests for prop extraction."""

from __future__ import annotations

import pytest

from vuedoc.core.config import NameCase
from vuedoc.parser import UNDEFINED, EntryKind, UnsupportedSyntaxError, Verbatim
from vuedoc.parser.extractors.props import convert_case


def _props(channel) -> dict:
    return {entry.name: entry for entry in channel.entries_of(EntryKind.PROP)}


def test_object_props_capture_type_default_and_required(extract_script) -> None:
    channel = extract_script(
        """
        export default {
          props: {
            /**
             * The initial value
             */
            value: { type: [Number, String], default: 'hello' },
            cycleHighlight: Boolean,
            items: { type: Array, default: () => [] },
            factory: { type: Object, default() { return {} } },
            name: { type: String, required: true },
            anything: {},
            big: { type: BigInt, default: 10n },
            nullable: null,
          }
        }
        """
    )

    props = _props(channel)
    assert list(props) == [
        "value",
        "cycle-highlight",
        "items",
        "factory",
        "name",
        "anything",
        "big",
        "nullable",
    ]

    value = props["value"]
    assert value.description == "The initial value"
    assert value.type == ["Number", "String"]
    assert value.default == "hello"
    assert value.describe_model is True

    assert props["cycle-highlight"].type == "Boolean"
    assert props["cycle-highlight"].default is UNDEFINED
    assert props["items"].default == Verbatim("() => []")
    assert props["factory"].default == Verbatim("default() { return {} }")
    assert props["name"].required is True
    assert props["anything"].type == "any"
    assert props["big"].type == "BigInt"
    assert props["nullable"].type == "any"
    assert not any(
        entry.describe_model for name, entry in props.items() if name != "value"
    )


def test_array_props_and_name_case(extract_script) -> None:
    channel = extract_script(
        """
        export default {
          props: ['title', 'subTitle', 42],
        }
        """,
        propCase="camel",
    )

    props = _props(channel)
    assert list(props) == ["title", "subTitle"]
    assert all(entry.type == "any" for entry in props.values())
    assert [item.message for item in channel.diagnostics] == [
        "Invalid prop declaration"
    ]


def test_prop_tags_override_structure(extract_script) -> None:
    channel = extract_script(
        """
        export default {
          props: {
            /**
             * @type {'small' | 'large'}
             * @default 'small'
             * @model
             * @prop size
             * @deprecated use variant
             */
            sizing: String,
          }
        }
        """
    )

    (entry,) = channel.entries_of(EntryKind.PROP)
    assert entry.name == "size"
    assert entry.type == ["'small'", "'large'"]
    assert entry.default == Verbatim("'small'")
    assert entry.describe_model is True
    assert [(item.name, item.description) for item in entry.keywords] == [
        ("deprecated", "use variant")
    ]


def test_invalid_prop_definition_is_a_diagnostic(extract_script) -> None:
    channel = extract_script(
        """
        export default {
          props: {
            good: String,
            bad: 'String',
          }
        }
        """
    )

    assert [entry.name for entry in channel.entries] == ["good"]
    (diagnostic,) = channel.diagnostics
    assert diagnostic.message == "Invalid declaration for prop 'bad'"
    assert diagnostic.kind is EntryKind.PROP


def test_non_collection_props_raise(extract_script) -> None:
    with pytest.raises(UnsupportedSyntaxError) as excinfo:
        extract_script(
            """
            export default {
              props: 'title',
            }
            """
        )

    assert excinfo.value.node_type == "string"
    assert excinfo.value.line == 3


def test_convert_case() -> None:
    assert convert_case("cycleHighlight", NameCase.KEBAB) == "cycle-highlight"
    assert convert_case("cycle-highlight", NameCase.CAMEL) == "cycleHighlight"
    assert convert_case("already_snake", NameCase.AS_IS) == "already_snake"
