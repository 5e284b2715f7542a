"""Component options walker dispatching to the kind-specific extractors."""

from __future__ import annotations

from typing import Any

from vuedoc.core.config import Feature

from ..channel import Diagnostic
from ..errors import UnsupportedSyntaxError
from ..scope import Scope
from ..syntax import first_child_of_type, has_keyword, named_children, unwrap_expression
from .base import ExtractionContext, node_line
from .computed import ComputedExtractor
from .data import DataExtractor
from .events import EventExtractor
from .expression import (
    FUNCTION_NODES,
    ValueResolver,
    block_scope,
    define_declarations,
    function_body,
    function_scope,
    iterate_returns,
    member_name,
)
from .methods import LIFECYCLE_HOOKS, MethodExtractor, is_accessor
from .model import ModelExtractor, read_model
from .props import PropExtractor
from .slots import SlotExtractor

__all__ = ["ScriptExtractor"]

_CLASS_NODES = frozenset({"class", "class_declaration", "abstract_class_declaration"})
_DECLARATION_NODES = frozenset({"lexical_declaration", "variable_declaration"})
_FIELD_NODES = frozenset({"field_definition", "public_field_definition"})
# Class body members that carry no documentation.
_IGNORED_MEMBERS = frozenset(
    {
        "method_signature",
        "abstract_method_signature",
        "index_signature",
        "class_static_block",
        "decorator",
        "comment",
    }
)
_OPTION_FEATURES = {
    "props": Feature.PROPS,
    "data": Feature.DATA,
    "computed": Feature.COMPUTED,
    "methods": Feature.METHODS,
    "model": Feature.MODEL,
    "emits": Feature.EVENTS,
}
_DEFINITION_ARGUMENTS = _CLASS_NODES | {"object", "call_expression"}
_EXPORTS = "module.exports"


class ScriptExtractor:
    """Locate the component definition of a script and extract every kind.

    Recognized shapes are ``export default {...}``, wrapped definitions such
    as ``defineComponent({...})``, ``module.exports = {...}``, exported
    identifiers, mixin factories returning a definition, and class
    components.
    """

    def __init__(self, context: ExtractionContext) -> None:
        self.context = context
        self.logger = context.scoped_logger("component")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def parse(self, root: Any) -> None:
        module = Scope()
        statements = named_children(root)
        define_declarations(module, statements, self.context.source)
        self._index_declarations(statements)

        located = self._locate(statements, module)
        if located is None:
            self.logger.debug("No component definition found")
            return
        definition, doc_node, scope = located
        self.logger.debug(
            "Component definition located",
            node_type=definition.type,
            line=node_line(definition),
        )

        SlotExtractor(self.context, scope).parse_tags(doc_node)
        if definition.type in _CLASS_NODES:
            self._walk_class(definition, doc_node, scope)
        else:
            self._walk_options(definition, scope)

    # ------------------------------------------------------------------
    # Locating the definition
    # ------------------------------------------------------------------
    def _index_declarations(self, statements: list[Any]) -> None:
        source = self.context.source
        for statement in statements:
            if statement.type == "export_statement":
                statement = statement.child_by_field_name("declaration") or statement
            if statement.type in FUNCTION_NODES | _CLASS_NODES:
                name = statement.child_by_field_name("name")
                if name is not None:
                    self.context.declarations[source.slice(name)] = statement
            elif statement.type in _DECLARATION_NODES:
                for declarator in named_children(statement):
                    name = declarator.child_by_field_name("name")
                    value = declarator.child_by_field_name("value")
                    if (
                        name is not None
                        and value is not None
                        and name.type == "identifier"
                    ):
                        self.context.declarations[source.slice(name)] = value

    def _locate(
        self,
        statements: list[Any],
        module: Scope,
    ) -> tuple[Any, Any, Scope] | None:
        for statement in statements:
            if statement.type == "export_statement" and has_keyword(
                statement, {"default"}
            ):
                value = statement.child_by_field_name(
                    "value"
                ) or statement.child_by_field_name("declaration")
                definition = self._definition_of(value)
                if definition is not None:
                    return definition, statement, module
            elif statement.type == "expression_statement":
                definition = self._module_exports(statement)
                if definition is not None:
                    return definition, statement, module

        for statement in statements:
            if statement.type != "export_statement":
                continue
            function = statement.child_by_field_name("declaration")
            if function is None or function.type not in FUNCTION_NODES:
                continue
            located = self._factory_definition(function, module)
            if located is not None:
                return located[0], statement, located[1]
        return None

    def _module_exports(self, statement: Any) -> Any | None:
        expressions = named_children(statement)
        if not expressions:
            return None
        expression = unwrap_expression(expressions[0])
        if expression.type != "assignment_expression":
            return None
        left = expression.child_by_field_name("left")
        if left is None or self.context.source.slice(left) != _EXPORTS:
            return None
        return self._definition_of(expression.child_by_field_name("right"))

    def _factory_definition(
        self,
        function: Any,
        module: Scope,
    ) -> tuple[Any, Scope] | None:
        body = function_body(function)
        if body is None or body.type != "statement_block":
            return None
        source = self.context.source
        scope = block_scope(body, function_scope(function, module, source), source)
        for statement in iterate_returns(body):
            argument = statement.named_children[0] if statement.named_children else None
            definition = self._definition_of(argument)
            if definition is not None:
                return definition, scope
        return None

    def _definition_of(self, node: Any | None, *, depth: int = 0) -> Any | None:
        node = unwrap_expression(node)
        if node is None or depth > 8:
            return None
        if node.type == "object" or node.type in _CLASS_NODES:
            return node
        if node.type == "identifier":
            declared = self.context.declarations.get(self.context.source.slice(node))
            return self._definition_of(declared, depth=depth + 1)
        if node.type == "call_expression":
            arguments = node.child_by_field_name("arguments")
            for argument in named_children(arguments) if arguments is not None else []:
                argument = unwrap_expression(argument)
                if argument.type in _DEFINITION_ARGUMENTS:
                    found = self._definition_of(argument, depth=depth + 1)
                    if found is not None:
                        return found
        return None

    # ------------------------------------------------------------------
    # Options objects
    # ------------------------------------------------------------------
    def _walk_options(self, node: Any, scope: Scope) -> None:
        resolver = ValueResolver(self.context.source, scope)
        members: list[tuple[str, Any, Any]] = []
        for member in named_children(node):
            if member.type == "spread_element":
                self.logger.debug("Skipping spread option", line=node_line(member))
                continue
            if member.type == "pair":
                name = member_name(member, resolver)
                value = unwrap_expression(member.child_by_field_name("value"))
            elif member.type == "method_definition":
                name = member_name(member, resolver)
                value = member
            elif member.type == "shorthand_property_identifier":
                name = resolver.text(member)
                value = self.context.declarations.get(name)
            else:
                raise UnsupportedSyntaxError("component options", member)
            if name and value is not None:
                members.append((name, value, member))

        # The model option decides which prop gets ``describe_model``.
        for name, value, _ in members:
            if name == "model":
                declared = read_model(value, resolver) or {}
                self.context.model_prop = declared.get("prop", self.context.model_prop)
                self.context.model_event = declared.get(
                    "event", self.context.model_event
                )

        for name, value, member in members:
            self._dispatch(name, self._dereference(value), member, scope)

    def _dereference(self, node: Any) -> Any:
        node = unwrap_expression(node)
        if node is not None and node.type == "identifier":
            declared = self.context.declarations.get(self.context.source.slice(node))
            if declared is not None:
                return unwrap_expression(declared)
        return node

    def _dispatch(self, name: str, value: Any, member: Any, scope: Scope) -> None:
        feature = _OPTION_FEATURES.get(name)
        if feature is not None and value.type in {
            "identifier",
            "member_expression",
            "call_expression",
            "new_expression",
        }:
            self._unresolved_option(name, feature, value)
            return

        context = self.context
        if name == "props":
            PropExtractor(context, scope).parse(value)
        elif name == "data":
            DataExtractor(context, scope).parse(value)
        elif name == "computed":
            ComputedExtractor(context, scope).parse(value)
        elif name == "methods":
            MethodExtractor(context, scope).parse(value)
        elif name == "model":
            ModelExtractor(context, scope).parse(value)
        elif name == "emits":
            EventExtractor(context, scope).parse_declarations(value)
        else:
            if name == "render" and value.type in FUNCTION_NODES:
                SlotExtractor(context, scope).parse_render(value)
            self._scan_events(value, scope)

    def _scan_events(self, node: Any, scope: Scope) -> None:
        if node.type in FUNCTION_NODES:
            scope = function_scope(node, scope, self.context.source)
        EventExtractor(self.context, scope).parse(node)

    def _unresolved_option(self, name: str, feature: Feature, node: Any) -> None:
        if not self.context.enabled(feature):
            return
        message = f"Unable to resolve the {name} option statically"
        self.logger.warning("Recoverable extraction issue", message=message)
        self.context.channel.push_diagnostic(
            Diagnostic(message=message, line=node_line(node))
        )

    # ------------------------------------------------------------------
    # Class components
    # ------------------------------------------------------------------
    def _walk_class(self, node: Any, export: Any, scope: Scope) -> None:
        for decorator in self._decorators(node, export):
            options = self._decorator_options(decorator)
            if options is not None and options.type == "object":
                self._walk_options(options, scope)

        body = node.child_by_field_name("body")
        if body is None:
            return
        context = self.context
        MethodExtractor(context, scope).parse(body)

        source = context.source
        resolver = ValueResolver(source, scope)
        for member in named_children(body):
            if member.type == "method_definition":
                name = member_name(member, resolver)
                if is_accessor(member):
                    if name:
                        ComputedExtractor(context, scope).parse_accessor(name, member)
                elif name == "data":
                    DataExtractor(context, scope).parse(member)
                elif name == "render":
                    SlotExtractor(context, scope).parse_render(member)
                    self._scan_events(member, scope)
                elif name in LIFECYCLE_HOOKS or name == "setup":
                    self._scan_events(member, scope)
            elif member.type in _FIELD_NODES:
                self._parse_field(member, resolver, scope)
            elif member.type not in _IGNORED_MEMBERS:
                raise UnsupportedSyntaxError("class body", member)

    def _parse_field(self, member: Any, resolver: ValueResolver, scope: Scope) -> None:
        key = member.child_by_field_name("property")
        key = key or member.child_by_field_name("name")
        if key is None or has_keyword(member, {"static"}):
            return
        name = resolver.text(key)
        decorators = [self._decorator_name(item) for item in self._decorators(member)]
        if "Prop" in decorators:
            decorator = self._decorators(member)[decorators.index("Prop")]
            PropExtractor(self.context, scope).parse_decorated(
                name, self._decorator_options(decorator), member
            )
        elif not decorators:
            DataExtractor(self.context, scope).parse_field(
                name, member.child_by_field_name("value"), member
            )

    def _decorators(self, *nodes: Any) -> list[Any]:
        return [
            child
            for node in nodes
            if node is not None
            for child in node.children
            if child.type == "decorator"
        ]

    def _decorator_name(self, decorator: Any) -> str | None:
        inner = named_children(decorator)
        if not inner:
            return None
        target = inner[0]
        if target.type == "call_expression":
            target = target.child_by_field_name("function")
        return self.context.source.slice(target) if target is not None else None

    def _decorator_options(self, decorator: Any) -> Any | None:
        call = first_child_of_type(decorator, "call_expression")
        if call is None:
            return None
        arguments = call.child_by_field_name("arguments")
        if arguments is None:
            return None
        for argument in named_children(arguments):
            argument = unwrap_expression(argument)
            if argument.type in {"object", "identifier", "array"}:
                return argument
        return None
