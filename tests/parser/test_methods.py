"""Tests for method extraction."""

from __future__ import annotations

from vuedoc.core.config import Visibility
from vuedoc.parser import EntryKind, MethodParam
from vuedoc.parser.extractors import build_syntax


def _methods(channel) -> dict:
    return {entry.name: entry for entry in channel.entries_of(EntryKind.METHOD)}


def test_method_merges_param_tags_with_parameters(extract_script) -> None:
    channel = extract_script(
        """
        export default {
          methods: {
            /**
             * Load the schema
             * @param {object} schema - The JSON Schema object
             * @param {Number|String|Array|Object|Boolean} model - Initial value
             * @Note keeps its case
             */
            load(schema, model = "hello") {}
          }
        }
        """
    )

    (entry,) = channel.entries_of(EntryKind.METHOD)
    assert entry.name == "load"
    assert entry.description == "Load the schema"
    assert entry.visibility is Visibility.PUBLIC
    assert [(item.name, item.description) for item in entry.keywords] == [
        ("Note", "keeps its case")
    ]
    schema, model = entry.params
    assert (schema.name, schema.type, schema.description) == (
        "schema",
        "object",
        "The JSON Schema object",
    )
    assert model.type == ["Number", "String", "Array", "Object", "Boolean"]
    assert model.default_value == '"hello"'
    assert entry.returns.type == "void"
    assert entry.syntax == [
        'load(schema: object, model: Number | String | Array | Object | Boolean'
        ' = "hello"): void'
    ]


def test_method_return_types_are_inferred(extract_script) -> None:
    channel = extract_script(
        """
        export default {
          methods: {
            count() { return 1 },
            bare() { return },
            nothing() { return undefined },
            silent() {},
            mixed(a) { if (a) { return 'x' } return 2 },
            label: () => 'label',
            async fetch() { return 'data' },
            nested() {
              return function () { return 1 }
            },
          }
        }
        """
    )

    returns = {name: entry.returns.type for name, entry in _methods(channel).items()}
    assert returns == {
        "count": "number",
        "bare": "unknown",
        "nothing": "unknown",
        "silent": "void",
        "mixed": "unknown",
        "label": "string",
        "fetch": "Promise<string>",
        "nested": "unknown",
    }


def test_return_tag_overrides_type_and_keeps_description(extract_script) -> None:
    channel = extract_script(
        """
        export default {
          methods: {
            /**
             * @returns {boolean} Whether it worked
             */
            save() { return this.persist() },
            /**
             * @return undefined
             */
            reset() { return 1 },
          }
        }
        """
    )

    methods = _methods(channel)
    assert methods["save"].returns.type == "boolean"
    assert methods["save"].returns.description == "Whether it worked"
    assert methods["reset"].returns.type == "number"
    assert methods["reset"].returns.description == "undefined"
    assert methods["save"].keywords == []


def test_method_tags_rename_and_set_visibility(extract_script) -> None:
    channel = extract_script(
        """
        export default {
          methods: {
            /**
             * @method submitForm
             * @private
             * @category Forms
             * @syntax submitForm(): void
             */
            submit() {},
            /** @protected @public ignored */
            other() {},
          }
        }
        """,
        defaultCategory="General",
    )

    methods = _methods(channel)
    submit = methods["submitForm"]
    assert submit.visibility is Visibility.PRIVATE
    assert submit.category == "Forms"
    assert submit.syntax == ["submitForm(): void"]
    assert methods["other"].category == "General"


def test_method_parameter_shapes(extract_script) -> None:
    channel = extract_script(
        """
        export default {
          methods: {
            spread(first, { a, b }, [c], ...rest) {},
            defaults(size = 10, flag = false, items = [1, 2]) {},
          }
        }
        """
    )

    methods = _methods(channel)
    first, obj, arr, rest = methods["spread"].params
    assert (first.name, first.type) == ("first", "unknown")
    assert (obj.name, obj.declaration) == ("object", "{ a, b }")
    assert (arr.name, arr.declaration) == ("array", "[c]")
    assert (rest.name, rest.rest, rest.declaration) == ("rest", True, "...rest")
    assert methods["spread"].syntax == [
        "spread(first: unknown, object: unknown, array: unknown, ...rest: unknown)"
        ": void"
    ]

    size, flag, items = methods["defaults"].params
    assert (size.type, size.default_value) == ("number", "10")
    assert (flag.type, flag.default_value) == ("boolean", "false")
    assert (items.type, items.default_value) == ("array", "[1, 2]")


def test_method_values_resolve_through_declarations(extract_script) -> None:
    channel = extract_script(
        """
        import debounce from 'debounce'

        function reload(force) {
          return true
        }

        export default {
          methods: {
            reload,
            refresh: reload,
            search: debounce(function (query) {}, 100),
            external: debounce,
            ...mapActions(['load']),
          }
        }
        """
    )

    methods = _methods(channel)
    assert list(methods) == ["reload", "refresh", "search", "external"]
    assert methods["reload"].returns.type == "boolean"
    assert [param.name for param in methods["refresh"].params] == ["force"]
    assert [param.name for param in methods["search"].params] == ["query"]
    assert methods["external"].params == []
    assert methods["external"].returns.type == "unknown"


def test_typescript_methods_use_annotations(extract_typescript) -> None:
    channel = extract_typescript(
        """
        export default {
          methods: {
            scale(value: number, factor?: number): number {
              return value * (factor ?? 1)
            },
            async load(url: string = '/api') {
              return 'ok'
            },
          }
        }
        """
    )

    methods = _methods(channel)
    value, factor = methods["scale"].params
    assert (value.name, value.type) == ("value", "number")
    assert (factor.name, factor.type) == ("factor", "number")
    assert methods["scale"].returns.type == "number"
    assert methods["scale"].syntax == ["scale(value: number, factor: number): number"]
    assert methods["load"].params[0].default_value == '"/api"'
    assert methods["load"].returns.type == "Promise<string>"


def test_build_syntax_renders_rest_and_defaults() -> None:
    params = [
        MethodParam("a", "number", default_value="1"),
        MethodParam("rest", ["string", "number"], rest=True),
    ]

    assert build_syntax("sum", params, "void") == (
        "sum(a: number = 1, ...rest: string | number): void"
    )
