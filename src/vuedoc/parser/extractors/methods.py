"""Method extraction from ``methods`` options and class bodies."""

from __future__ import annotations

from typing import Any, Iterable

from vuedoc.core.config import Feature

from ..entries import EntryKind, MethodEntry, MethodParam, MethodReturn, TypeName
from ..errors import UnsupportedSyntaxError
from ..jsdoc import (
    ParamTag,
    format_type,
    merge_param_tags,
    param_tags,
    parse_return_tag,
)
from ..scope import Scope
from ..syntax import has_keyword, named_children, unwrap_expression
from ..values import UNDEFINED, infer_type, is_static
from .base import AbstractExtractor, node_line
from .events import EventExtractor
from .expression import (
    FUNCTION_NODES,
    ParamShape,
    ValueResolver,
    block_scope,
    function_body,
    function_scope,
    iterate_returns,
    member_name,
    parameter_shapes,
)

__all__ = ["LIFECYCLE_HOOKS", "MethodExtractor", "build_syntax", "is_accessor"]

_PRIMITIVE_RETURNS = frozenset({"string", "number", "boolean", "array", "object"})

LIFECYCLE_HOOKS = frozenset(
    {
        "beforeCreate",
        "created",
        "beforeMount",
        "mounted",
        "beforeUpdate",
        "updated",
        "activated",
        "deactivated",
        "beforeDestroy",
        "destroyed",
        "beforeUnmount",
        "unmounted",
        "errorCaptured",
        "renderTracked",
        "renderTriggered",
        "serverPrefetch",
        "beforeRouteEnter",
        "beforeRouteUpdate",
        "beforeRouteLeave",
    }
)
# Class members that are component options rather than methods.
_CLASS_OPTIONS = LIFECYCLE_HOOKS | {"constructor", "data", "render", "setup"}


def is_accessor(node: Any) -> bool:
    return has_keyword(node, {"get", "set"})


def _param_from_shape(shape: ParamShape) -> MethodParam:
    return MethodParam(
        name=shape.name,
        type=shape.inferred_type,
        default_value=shape.default_text,
        rest=shape.rest,
        declaration=shape.declaration,
    )


def _param_from_tag(tag: ParamTag) -> MethodParam:
    return MethodParam(
        name=tag.name,
        type=tag.type or "unknown",
        default_value=tag.default,
        description=tag.description,
        rest=tag.rest,
    )


def build_syntax(name: str, params: Iterable[MethodParam], returns: TypeName) -> str:
    """Synthesize a human-readable call signature.

    Example:
        >>> build_syntax("sum", [MethodParam("a", "number"), MethodParam(
        ...     "rest", "number", rest=True)], "number")
        'sum(a: number, ...rest: number): number'
    """

    rendered = []
    for param in params:
        prefix = "..." if param.rest else ""
        text = f"{prefix}{param.name}: {format_type(param.type)}"
        if param.default_value is not None and not param.rest:
            text += f" = {param.default_value}"
        rendered.append(text)
    return f"{name}({', '.join(rendered)}): {format_type(returns)}"


class MethodExtractor(AbstractExtractor):
    """Produce one :class:`MethodEntry` per method and scan it for events."""

    kind = EntryKind.METHOD
    feature = Feature.METHODS
    name_tag = "method"
    reserved_tags = frozenset(
        {"method", "param", "arg", "argument", "return", "returns", "syntax"}
    )

    def extract(self, node: Any) -> None:
        node = unwrap_expression(node)
        if node.type == "object":
            self._parse_object(node)
        elif node.type == "class_body":
            self._parse_class_body(node)
        else:
            raise UnsupportedSyntaxError("methods", node)

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------
    def _parse_object(self, node: Any) -> None:
        for member in named_children(node):
            if member.type == "spread_element":
                self.logger.debug("Skipping spread member", line=node_line(member))
                continue
            if member.type == "method_definition":
                self.parse_method(member_name(member, self.resolver), member, member)
            elif member.type == "pair":
                name = member_name(member, self.resolver)
                value = unwrap_expression(member.child_by_field_name("value"))
                self.parse_method(name, self._callable(value), member)
            elif member.type == "shorthand_property_identifier":
                name = self.resolver.text(member)
                target = self.context.declarations.get(name)
                self.parse_method(name, self._callable(target), member)
            else:
                raise UnsupportedSyntaxError("methods", member)

    def _parse_class_body(self, node: Any) -> None:
        overloads: list[Any] = []
        for member in named_children(node):
            if member.type == "method_signature":
                overloads.append(member)
                continue
            if member.type == "method_definition":
                name = member_name(member, self.resolver)
                if name in _CLASS_OPTIONS or is_accessor(member):
                    overloads = []
                    continue
                signatures = [
                    item
                    for item in overloads
                    if member_name(item, self.resolver) == name
                ]
                self.parse_method(
                    name,
                    member,
                    signatures[0] if signatures else member,
                    overloads=signatures,
                )
            overloads = []

    def _callable(self, node: Any | None, *, depth: int = 0) -> Any | None:
        """Return the function node a ``methods`` member value stands for."""

        node = unwrap_expression(node)
        if node is None or depth > 8:
            return None
        if node.type in FUNCTION_NODES:
            return node
        if node.type == "identifier":
            declared = self.context.declarations.get(self.resolver.text(node))
            return self._callable(declared, depth=depth + 1)
        if node.type == "call_expression":
            # Wrapped handlers such as ``debounce(function () {}, 100)``.
            arguments = node.child_by_field_name("arguments")
            if arguments is None:
                return None
            for argument in named_children(arguments):
                argument = unwrap_expression(argument)
                if argument.type in FUNCTION_NODES:
                    return argument
        return None

    # ------------------------------------------------------------------
    # Methods
    # ------------------------------------------------------------------
    def parse_method(
        self,
        name: str | None,
        function: Any | None,
        doc_node: Any,
        *,
        overloads: list[Any] | None = None,
    ) -> MethodEntry | None:
        """Emit the entry for ``function`` documented by ``doc_node``."""

        if not name:
            return None
        if function is None:
            entry = MethodEntry(name=name, returns=MethodReturn(type="unknown"))
            parsed = self.parse_entry_comment(entry, doc_node)
            self._merge_tags(entry, parsed.keywords, inferred_return="unknown")
            entry.syntax = self._syntax(entry, parsed.keywords, [])
            self.emit(entry)
            return entry

        scope = function_scope(function, self.scope, self.context.source)
        resolver = ValueResolver(self.context.source, scope)
        shapes = parameter_shapes(function, resolver)
        entry = MethodEntry(
            name=name,
            params=[_param_from_shape(shape) for shape in shapes],
        )
        parsed = self.parse_entry_comment(entry, doc_node)
        self._merge_tags(entry, parsed.keywords, self._infer_return(function, scope))
        entry.syntax = self._syntax(entry, parsed.keywords, overloads or [])
        self.emit(entry)

        EventExtractor(self.context, scope).parse(function)
        return entry

    def _merge_tags(
        self,
        entry: MethodEntry,
        keywords: list[Any],
        inferred_return: TypeName,
    ) -> None:
        entry.params = merge_param_tags(
            entry.params,
            param_tags(keywords, "param", "arg", "argument"),
            _param_from_tag,
        )
        returns = MethodReturn(type=inferred_return)
        for keyword in keywords:
            if keyword.name in {"return", "returns"}:
                tag = parse_return_tag(keyword.description)
                returns = MethodReturn(
                    type=tag.type or inferred_return,
                    description=tag.description,
                )
                break
        entry.returns = returns

    def _syntax(
        self,
        entry: MethodEntry,
        keywords: list[Any],
        overloads: list[Any],
    ) -> list[str]:
        explicit = [
            keyword.description.strip()
            for keyword in keywords
            if keyword.name == "syntax" and keyword.description.strip()
        ]
        if explicit:
            return explicit
        if overloads:
            return [self._signature_syntax(entry.name, item) for item in overloads]
        return [build_syntax(entry.name, entry.params, entry.returns.type)]

    def _signature_syntax(self, name: str, signature: Any) -> str:
        shapes = parameter_shapes(signature, self.resolver)
        params = [_param_from_shape(shape) for shape in shapes]
        annotation = signature.child_by_field_name("return_type")
        returns = self._annotation(annotation) or "void"
        return build_syntax(name, params, returns)

    # ------------------------------------------------------------------
    # Return types
    # ------------------------------------------------------------------
    def _annotation(self, node: Any | None) -> str | None:
        if node is None:
            return None
        text = self.resolver.text(node).strip()
        return text[1:].strip() if text.startswith(":") else text

    def _infer_return(self, function: Any, scope: Scope) -> TypeName:
        annotated = self._annotation(function.child_by_field_name("return_type"))
        if annotated:
            return annotated

        inferred = self._scan_returns(function, scope)
        if has_keyword(function, {"async"}):
            return f"Promise<{format_type(inferred)}>"
        return inferred

    def _scan_returns(self, function: Any, scope: Scope) -> TypeName:
        body = function_body(function)
        if body is None:
            return "void"
        if body.type != "statement_block":
            arguments = [body]
        else:
            resolver_scope = block_scope(body, scope, self.context.source)
            scope = resolver_scope
            arguments = [
                statement.named_children[0] if statement.named_children else None
                for statement in iterate_returns(body)
            ]
            if not arguments:
                return "void"

        resolver = ValueResolver(self.context.source, scope)
        kinds: list[str] = []
        for argument in arguments:
            if argument is None or argument.type == "comment":
                return "unknown"
            value = resolver.resolve(argument)
            if value is UNDEFINED or not is_static(value):
                return "unknown"
            kind = infer_type(value)
            if kind not in _PRIMITIVE_RETURNS or value is None:
                return "unknown"
            if kind not in kinds:
                kinds.append(kind)
        return kinds[0] if len(kinds) == 1 else "unknown"
