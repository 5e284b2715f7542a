"""Tests for reactive data extraction."""

from __future__ import annotations

import pytest

from vuedoc.parser import UNDEFINED, EntryKind, UnsupportedSyntaxError, Verbatim


def _data(channel) -> dict:
    return {entry.name: entry for entry in channel.entries_of(EntryKind.DATA)}


def test_data_function_resolves_local_declarations(extract_script) -> None:
    channel = extract_script(
        """
        export default {
          data() {
            let a, b, c = 0
            const d = !(a || b || c)

            return {
              a,
              b,
              c,
              d,
              /**
               * Whether the form is valid
               * @type boolean
               * @initialValue false
               */
              e: d,
              f: !!d,
              g: this.value,
            }
          }
        }
        """
    )

    data = _data(channel)
    assert list(data) == ["a", "b", "c", "d", "e", "f", "g"]
    assert (data["a"].type, data["a"].initial_value) == ("any", UNDEFINED)
    assert (data["b"].type, data["b"].initial_value) == ("any", UNDEFINED)
    assert (data["c"].type, data["c"].initial_value) == ("number", 0)
    assert data["d"].type == "any"
    assert data["d"].initial_value == Verbatim("!(a || b || c)")
    assert data["e"].description == "Whether the form is valid"
    assert data["e"].type == "boolean"
    assert data["e"].initial_value == Verbatim("false")
    assert data["e"].keywords == []
    assert data["f"].initial_value == Verbatim("!!d")
    assert (data["g"].type, data["g"].initial_value) == ("any", Verbatim("this.value"))


def test_data_shapes(extract_script) -> None:
    object_form = extract_script(
        """
        export default {
          data: { count: 1, label: 'x', list: [], config: { a: 1 }, none: null },
        }
        """
    )
    arrow_form = extract_script(
        """
        export default {
          data: () => ({ visible: true, ...defaults }),
        }
        """
    )
    function_form = extract_script(
        """
        export default {
          data: function () {
            return { items: [1, 2] }
          },
        }
        """
    )

    types = {name: entry.type for name, entry in _data(object_form).items()}
    assert types == {
        "count": "number",
        "label": "string",
        "list": "array",
        "config": "object",
        "none": "object",
    }
    assert _data(arrow_form)["visible"].initial_value is True
    assert list(_data(arrow_form)) == ["visible"]
    assert _data(function_form)["items"].initial_value == [1, 2]


def test_data_without_returned_object_is_a_diagnostic(extract_script) -> None:
    channel = extract_script(
        """
        export default {
          data() {
            return createState()
          }
        }
        """
    )

    assert channel.entries == ()
    (diagnostic,) = channel.diagnostics
    assert diagnostic.message == "Unable to find the object returned by data"
    assert diagnostic.kind is EntryKind.DATA


def test_data_as_string_raises(extract_script) -> None:
    with pytest.raises(UnsupportedSyntaxError, match="Unknown data node: string"):
        extract_script("export default { data: 'nope' }")
