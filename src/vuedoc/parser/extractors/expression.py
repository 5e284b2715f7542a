"""Static value resolution over JavaScript/TypeScript expression nodes."""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Any, Callable, Iterator

from ..scope import Scope
from ..syntax import SourceText, iterate_nodes, named_children, unwrap_expression
from ..values import (
    UNDEFINED,
    UNRESOLVED,
    BigInt,
    Verbatim,
    display_value,
    infer_type,
    is_static,
)

__all__ = [
    "FUNCTION_NODES",
    "THIS_BINDING_NODES",
    "ParamShape",
    "ValueResolver",
    "block_scope",
    "define_declarations",
    "function_body",
    "function_parameters",
    "function_scope",
    "iterate_import_names",
    "iterate_returns",
    "member_name",
    "parameter_shape",
    "parameter_shapes",
    "parse_number",
    "unescape_string",
]

FUNCTION_NODES = frozenset(
    {
        "function",
        "function_expression",
        "function_declaration",
        "generator_function",
        "generator_function_declaration",
        "arrow_function",
        "method_definition",
    }
)
# Functions where ``this`` is rebound; arrows keep the enclosing one.
THIS_BINDING_NODES = FUNCTION_NODES - {"arrow_function"}

_DECLARATION_NODES = frozenset({"lexical_declaration", "variable_declaration"})
_HOISTED_FUNCTIONS = frozenset(
    {"function_declaration", "generator_function_declaration", "class_declaration"}
)
_PATTERN_IDENTIFIERS = frozenset(
    {"identifier", "shorthand_property_identifier_pattern"}
)
_ESCAPE = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])"
)
_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
    "\n": "",
    "\r\n": "",
}


def _decode_escape(match: re.Match[str]) -> str:
    sequence = match.group(1)
    if sequence in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[sequence]
    if sequence.startswith("u{"):
        return chr(int(sequence[2:-1], 16))
    if sequence[0] in "ux" and len(sequence) > 1:
        return chr(int(sequence[1:], 16))
    return sequence


def unescape_string(text: str) -> str:
    r"""Decode JavaScript escape sequences.

    Example:
        >>> unescape_string(r"a\tb\u0041")
        'a\tbA'
    """

    return _ESCAPE.sub(_decode_escape, text)


def parse_number(text: str) -> int | float | BigInt | None:
    """Parse a numeric literal; ``None`` when the text is not representable."""

    cleaned = text.replace("_", "")
    if cleaned.endswith("n"):
        try:
            return BigInt(int(cleaned[:-1], 0))
        except ValueError:
            return None
    try:
        return int(cleaned, 0)
    except ValueError:
        pass
    if len(cleaned) > 1 and cleaned[0] == "0" and cleaned.isdigit():
        # Legacy octal literal such as ``010``.
        return int(cleaned, 8) if set(cleaned) <= set("01234567") else int(cleaned)
    try:
        return float(cleaned)
    except ValueError:
        return None


@dataclass(slots=True)
class ParamShape:
    """Structural facts about one declared parameter."""

    name: str
    default: Any = UNDEFINED
    default_text: str | None = None
    rest: bool = False
    optional: bool = False
    annotation: str | None = None
    declaration: str | None = None

    @property
    def inferred_type(self) -> str:
        if self.annotation:
            return self.annotation
        if self.default is not UNDEFINED and is_static(self.default):
            return infer_type(self.default)
        return "unknown"


class ValueResolver:
    """Materialize expression nodes into static values.

    Identifiers resolve through the active :class:`Scope`; literal objects
    and arrays rebuild into ``dict``/``list`` when every member is static;
    anything else is captured verbatim and never evaluated.
    """

    MAX_DEPTH = 64

    def __init__(self, source: SourceText, scope: Scope) -> None:
        self.source = source
        self.scope = scope
        self._depth = 0

    def with_scope(self, scope: Scope) -> "ValueResolver":
        return ValueResolver(self.source, scope)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def resolve(self, node: Any | None) -> Any:
        """Return the static value of ``node``.

        Unbound identifiers and unknown members yield ``UNRESOLVED``. Literals
        nested deeper than ``MAX_DEPTH`` are kept verbatim.
        """

        node = unwrap_expression(node)
        if node is None:
            return UNDEFINED
        handler = self._HANDLERS.get(node.type)
        if handler is None or self._depth >= self.MAX_DEPTH:
            return self.verbatim(node)
        self._depth += 1
        try:
            return handler(self, node)
        finally:
            self._depth -= 1

    def value_of(self, node: Any | None) -> Any:
        """Like :meth:`resolve` but fall back to verbatim text when unresolved."""

        value = self.resolve(node)
        if value is UNRESOLVED:
            return self.verbatim(unwrap_expression(node))
        return value

    def verbatim(self, node: Any) -> Verbatim:
        return Verbatim(self.source.slice(node))

    def display(self, node: Any) -> str:
        """Render ``node``'s value the way it reads in a call signature."""

        return display_value(self.value_of(node))

    def text(self, node: Any) -> str:
        return self.source.slice(node)

    # ------------------------------------------------------------------
    # Node handlers
    # ------------------------------------------------------------------
    def _identifier(self, node: Any) -> Any:
        name = self.source.slice(node)
        if name == "undefined" and not self.scope.resolves(name):
            return UNDEFINED
        return self.scope.lookup(name)

    def _string(self, node: Any) -> str:
        raw = self.source.slice(node)
        return unescape_string(raw[1:-1])

    def _template_string(self, node: Any) -> Any:
        if any(child.type == "template_substitution" for child in node.children):
            return self.verbatim(node)
        return unescape_string(self.source.slice(node)[1:-1])

    def _number(self, node: Any) -> Any:
        value = parse_number(self.source.slice(node))
        return self.verbatim(node) if value is None else value

    def _constant(self, node: Any) -> Any:
        return {"true": True, "false": False, "null": None}.get(node.type, UNDEFINED)

    def _unary(self, node: Any) -> Any:
        operator = node.child_by_field_name("operator")
        argument = unwrap_expression(node.child_by_field_name("argument"))
        symbol = self.source.slice(operator) if operator is not None else ""
        if symbol in {"-", "+"} and argument is not None and argument.type == "number":
            value = self._number(argument)
            if isinstance(value, BigInt):
                return BigInt(-value.value) if symbol == "-" else value
            if isinstance(value, (int, float)):
                return -value if symbol == "-" else value
        if symbol == "void":
            return UNDEFINED
        return self.verbatim(node)

    def _object(self, node: Any) -> Any:
        result: dict[str, Any] = {}
        for member in named_children(node):
            if member.type == "pair":
                key = member_name(member, self)
                value = self.resolve(member.child_by_field_name("value"))
            elif member.type == "shorthand_property_identifier":
                key = self.source.slice(member)
                value = self.scope.lookup(key)
            else:
                return self.verbatim(node)
            if key is None or not is_static(value):
                return self.verbatim(node)
            result[key] = value
        return result

    def _array(self, node: Any) -> Any:
        items = [self.resolve(child) for child in named_children(node)]
        if any(child.type == "spread_element" for child in named_children(node)):
            return self.verbatim(node)
        if not all(is_static(item) for item in items):
            return self.verbatim(node)
        return items

    def _member(self, node: Any) -> Any:
        target = self.resolve(node.child_by_field_name("object"))
        prop = node.child_by_field_name("property")
        if prop is None:
            return UNRESOLVED
        return _index(target, self.source.slice(prop))

    def _subscript(self, node: Any) -> Any:
        target = self.resolve(node.child_by_field_name("object"))
        index = self.resolve(node.child_by_field_name("index"))
        if isinstance(index, (str, int)) and not isinstance(index, bool):
            return _index(target, index)
        return UNRESOLVED

    _HANDLERS: dict[str, Callable[["ValueResolver", Any], Any]] = {
        "identifier": _identifier,
        "undefined": _constant,
        "true": _constant,
        "false": _constant,
        "null": _constant,
        "string": _string,
        "template_string": _template_string,
        "number": _number,
        "unary_expression": _unary,
        "object": _object,
        "array": _array,
        "member_expression": _member,
        "subscript_expression": _subscript,
    }


def _index(target: Any, key: str | int) -> Any:
    if isinstance(target, dict) and str(key) in target:
        return target[str(key)]
    if isinstance(target, list):
        if key == "length":
            return len(target)
        if isinstance(key, int) and 0 <= key < len(target):
            return target[key]
    if isinstance(target, str) and key == "length":
        return len(target)
    return UNRESOLVED


def member_name(node: Any, resolver: ValueResolver) -> str | None:
    """Return the static key of a ``pair`` or ``method_definition`` node."""

    key = node.child_by_field_name("key") or node.child_by_field_name("name")
    if key is None:
        return None
    if key.type == "string":
        return resolver.resolve(key)
    if key.type == "computed_property_name":
        inner = named_children(key)
        if not inner:
            return None
        value = resolver.resolve(inner[0])
        if isinstance(value, (str, int)) and not isinstance(value, bool):
            return str(value)
        return resolver.text(inner[0])
    return resolver.text(key)


# ----------------------------------------------------------------------
# Functions
# ----------------------------------------------------------------------
def function_body(node: Any) -> Any | None:
    return node.child_by_field_name("body")


def function_parameters(node: Any) -> list[Any]:
    """Return the parameter nodes of a function-like node."""

    single = node.child_by_field_name("parameter")
    if single is not None:
        return [single]
    params = node.child_by_field_name("parameters")
    if params is None:
        return []
    return named_children(params)


def _annotation_text(resolver: ValueResolver, node: Any | None) -> str | None:
    if node is None:
        return None
    text = resolver.text(node).strip()
    return text[1:].strip() if text.startswith(":") else text


def parameter_shape(node: Any, resolver: ValueResolver) -> ParamShape | None:
    """Map a parameter node to a :class:`ParamShape`.

    ``this`` parameters and unrecognized shapes yield ``None``.
    """

    annotation: str | None = None
    optional = False
    default_node = None
    if node.type in {"required_parameter", "optional_parameter"}:
        optional = node.type == "optional_parameter"
        annotation = _annotation_text(resolver, node.child_by_field_name("type"))
        default_node = node.child_by_field_name("value")
        node = node.child_by_field_name("pattern")
        if node is None:
            return None

    if node.type == "assignment_pattern":
        default_node = node.child_by_field_name("right")
        node = node.child_by_field_name("left")

    shape: ParamShape
    if node.type == "identifier":
        shape = ParamShape(name=resolver.text(node))
    elif node.type == "rest_pattern":
        inner = named_children(node)
        name = resolver.text(inner[0]) if inner else "args"
        shape = ParamShape(name=name, rest=True, declaration=f"...{name}")
    elif node.type in {"object_pattern", "array_pattern"}:
        shape = ParamShape(
            name="object" if node.type == "object_pattern" else "array",
            declaration=resolver.text(node),
        )
    else:
        return None

    shape.annotation = annotation
    shape.optional = optional or default_node is not None
    if default_node is not None:
        shape.default = resolver.value_of(default_node)
        shape.default_text = display_value(shape.default)
    return shape


def parameter_shapes(node: Any, resolver: ValueResolver) -> list[ParamShape]:
    shapes = []
    for param in function_parameters(node):
        shape = parameter_shape(param, resolver)
        if shape is not None:
            shapes.append(shape)
    return shapes


def _pattern_names(node: Any, source: SourceText) -> list[str]:
    """Return the identifiers bound by a (possibly destructuring) pattern."""

    if node.type in _PATTERN_IDENTIFIERS:
        return [source.slice(node)]
    if node.type in {"assignment_pattern", "object_assignment_pattern"}:
        left = node.child_by_field_name("left")
        return _pattern_names(left, source) if left is not None else []
    if node.type == "pair_pattern":
        value = node.child_by_field_name("value")
        return _pattern_names(value, source) if value is not None else []
    if node.type in {"object_pattern", "array_pattern", "rest_pattern"}:
        names: list[str] = []
        for child in named_children(node):
            names.extend(_pattern_names(child, source))
        return names
    return []


def function_scope(node: Any, parent: Scope, source: SourceText) -> Scope:
    """Open a frame binding the parameters of ``node`` as unresolved."""

    scope = parent.child()
    for param in function_parameters(node):
        if param.type in {"required_parameter", "optional_parameter"}:
            param = param.child_by_field_name("pattern") or param
        for name in _pattern_names(param, source):
            scope.define(name, UNRESOLVED)
    return scope


def block_scope(node: Any, parent: Scope, source: SourceText) -> Scope:
    """Open a frame for a block or program, binding its declarations in order."""

    scope = parent.child()
    define_declarations(scope, named_children(node), source)
    return scope


def define_declarations(
    scope: Scope,
    statements: list[Any],
    source: SourceText,
) -> None:
    resolver = ValueResolver(source, scope)
    for statement in statements:
        if statement.type == "export_statement":
            declaration = statement.child_by_field_name("declaration")
            if declaration is None:
                continue
            statement = declaration
        if statement.type in _HOISTED_FUNCTIONS:
            name = statement.child_by_field_name("name")
            if name is not None:
                scope.define(source.slice(name), UNRESOLVED)
        elif statement.type == "import_statement":
            for child in iterate_import_names(statement, source):
                scope.define(child, UNRESOLVED)
        elif statement.type in _DECLARATION_NODES:
            for declarator in named_children(statement):
                if declarator.type != "variable_declarator":
                    continue
                name = declarator.child_by_field_name("name")
                value = declarator.child_by_field_name("value")
                if name is None:
                    continue
                if name.type == "identifier":
                    resolved = UNDEFINED if value is None else resolver.value_of(value)
                    scope.define(source.slice(name), resolved)
                else:
                    for item in _pattern_names(name, source):
                        scope.define(item, UNRESOLVED)


def iterate_import_names(node: Any, source: SourceText) -> list[str]:
    names: list[str] = []
    for child in named_children(node):
        if child.type != "import_clause":
            continue
        for item in child.named_children:
            if item.type == "identifier":
                names.append(source.slice(item))
            elif item.type == "namespace_import":
                names.extend(
                    source.slice(part)
                    for part in item.named_children
                    if part.type == "identifier"
                )
            elif item.type == "named_imports":
                for specifier in item.named_children:
                    if specifier.type != "import_specifier":
                        continue
                    alias = specifier.child_by_field_name("alias")
                    name = specifier.child_by_field_name("name")
                    target = alias or name
                    if target is not None:
                        names.append(source.slice(target))
    return names


def iterate_returns(node: Any) -> Iterator[Any]:
    """Yield the ``return_statement`` nodes of a body outside nested functions."""

    def nested(child: Any) -> bool:
        return child.type in FUNCTION_NODES or child.type == "class_body"

    for child in iterate_nodes(node, named=True, skip=nested):
        if child is not node and child.type == "return_statement":
            yield child
