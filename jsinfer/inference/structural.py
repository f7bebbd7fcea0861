from __future__ import annotations

from collections.abc import Callable
from typing import TypeAlias

from loguru import logger
from tree_sitter import Node

from .. import constants as cs
from .. import logs as ls
from ..models import GenericType, InferredType, TypeExpr
from ..types_defs import TypeMap
from . import ast_utils as au
from . import known_types as kt
from .operators import infer_binary, infer_unary
from .type_algebra import (
    ANY,
    BOOLEAN,
    FUNCTION,
    NULL,
    NUMBER,
    OBJECT,
    REGEXP,
    STRING,
    UNDEFINED,
    array_of,
    element_type,
    promise_of,
    union_of,
    unwrap_promise,
)

TypeRule: TypeAlias = Callable[[Node], InferredType]


class StructuralTyper:
    def __init__(self, type_map: TypeMap | None = None) -> None:
        self.type_map: TypeMap = type_map if type_map is not None else {}
        self._nesting = 0
        self._rules: dict[str, TypeRule] = {
            cs.TS_STRING: self._certain(STRING),
            cs.TS_TEMPLATE_STRING: self._certain(STRING),
            cs.TS_NUMBER: self._certain(NUMBER),
            cs.TS_TRUE: self._certain(BOOLEAN),
            cs.TS_FALSE: self._certain(BOOLEAN),
            cs.TS_NULL: self._certain(NULL),
            cs.TS_UNDEFINED: self._certain(UNDEFINED),
            cs.TS_REGEX: self._certain(REGEXP),
            cs.TS_IDENTIFIER: self._infer_identifier,
            cs.TS_ARRAY: self._infer_array,
            cs.TS_OBJECT: self._infer_object,
            cs.TS_FUNCTION_EXPRESSION: self._infer_function_literal,
            cs.TS_FUNCTION_LEGACY: self._infer_function_literal,
            cs.TS_GENERATOR_FUNCTION: self._infer_function_literal,
            cs.TS_ARROW_FUNCTION: self._infer_function_literal,
            cs.TS_CALL_EXPRESSION: self._infer_call,
            cs.TS_NEW_EXPRESSION: self._infer_new,
            cs.TS_MEMBER_EXPRESSION: self._infer_member,
            cs.TS_SUBSCRIPT_EXPRESSION: self._infer_subscript,
            cs.TS_UNARY_EXPRESSION: self._infer_unary,
            cs.TS_UPDATE_EXPRESSION: self._certain(NUMBER, cs.CONFIDENCE_OPERATOR),
            cs.TS_BINARY_EXPRESSION: self._infer_binary,
            cs.TS_TERNARY_EXPRESSION: self._infer_ternary,
            cs.TS_AWAIT_EXPRESSION: self._infer_await,
            cs.TS_SEQUENCE_EXPRESSION: self._infer_last_child,
            cs.TS_ASSIGNMENT_EXPRESSION: self._infer_assigned_value,
            cs.TS_AUGMENTED_ASSIGNMENT_EXPRESSION: self._infer_assigned_value,
        }

    def infer(self, node: Node) -> InferredType:
        if self._nesting >= cs.MAX_EXPRESSION_NESTING:
            logger.debug(
                ls.EXPRESSION_NESTING_EXCEEDED.format(limit=cs.MAX_EXPRESSION_NESTING)
            )
            return InferredType(ANY, cs.CONFIDENCE_UNKNOWN)
        node = au.unwrap_parens(node)
        rule = self._rules.get(node.type, self._infer_unknown)
        self._nesting += 1
        try:
            return rule(node)
        finally:
            self._nesting -= 1

    @staticmethod
    def _certain(
        expr: TypeExpr, confidence: float = cs.CONFIDENCE_CERTAIN
    ) -> TypeRule:
        return lambda _node: InferredType(expr, confidence)

    def _infer_unknown(self, node: Node) -> InferredType:
        return InferredType(ANY, cs.CONFIDENCE_UNKNOWN)

    def _infer_identifier(self, node: Node) -> InferredType:
        name = au.safe_decode_text(node)
        if name == cs.UNDEFINED_IDENTIFIER:
            return InferredType(UNDEFINED, cs.CONFIDENCE_CERTAIN)
        return self._infer_name(name)

    def _infer_name(self, name: str | None) -> InferredType:
        return InferredType(ANY, cs.CONFIDENCE_UNKNOWN)

    def _infer_function_literal(self, node: Node) -> InferredType:
        return InferredType(FUNCTION, cs.CONFIDENCE_FUNCTION_LITERAL)

    def _element_of_spread(self, spread: Node) -> InferredType:
        inner = au.first_named_child(spread)
        if inner is None:
            return InferredType(ANY, cs.CONFIDENCE_UNKNOWN)
        source = self.infer(inner)
        if (element := element_type(source.type_expr)) is not None:
            return InferredType(element, source.confidence)
        if source.type_expr == STRING:
            return InferredType(STRING, source.confidence)
        return InferredType(ANY, cs.CONFIDENCE_UNKNOWN)

    def _infer_array(self, node: Node) -> InferredType:
        elements = au.named_children(node)
        if not elements:
            return InferredType(array_of(ANY), cs.CONFIDENCE_ARRAY_EMPTY)

        element_types = [
            self._element_of_spread(element)
            if element.type == cs.TS_SPREAD_ELEMENT
            else self.infer(element)
            for element in elements
        ]
        first = element_types[0].type_expr
        if all(
            inferred.type_expr == first
            and inferred.confidence > cs.CONFIDENCE_ARRAY_ELEMENT_MIN
            for inferred in element_types
        ) and first != ANY:
            return InferredType(array_of(first), cs.CONFIDENCE_ARRAY_HOMOGENEOUS)
        return InferredType(array_of(ANY), cs.CONFIDENCE_ARRAY_MIXED)

    def _infer_object(self, node: Node) -> InferredType:
        properties: dict[str, InferredType] = {}
        for member in au.named_children(node):
            match member.type:
                case cs.TS_PAIR:
                    key = au.property_key(member.child_by_field_name(cs.FIELD_KEY))
                    value = member.child_by_field_name(cs.FIELD_VALUE)
                    if key is not None and value is not None:
                        properties[key] = self.infer(value)
                case cs.TS_SHORTHAND_PROPERTY_IDENTIFIER:
                    if key := au.safe_decode_text(member):
                        properties[key] = self._infer_name(key)
                case cs.TS_METHOD_DEFINITION:
                    key = au.property_key(member.child_by_field_name(cs.FIELD_NAME))
                    if key is not None:
                        properties[key] = InferredType(
                            FUNCTION, cs.CONFIDENCE_FUNCTION_LITERAL
                        )
        return InferredType(OBJECT, cs.CONFIDENCE_OBJECT_LITERAL, properties)

    def _infer_call(self, node: Node) -> InferredType:
        callee = node.child_by_field_name(cs.FIELD_FUNCTION)
        if callee is None:
            return InferredType(ANY, cs.CONFIDENCE_UNKNOWN_CALL)

        if callee.type == cs.TS_IDENTIFIER:
            name = au.safe_decode_text(callee)
            if name in kt.GLOBAL_CALL_TYPES:
                return InferredType(
                    kt.GLOBAL_CALL_TYPES[name], cs.CONFIDENCE_KNOWN_CALL
                )
        elif callee.type == cs.TS_MEMBER_EXPRESSION:
            if (static := self._infer_static_call(node, callee)) is not None:
                return static

        return InferredType(ANY, cs.CONFIDENCE_UNKNOWN_CALL)

    def _infer_static_call(self, node: Node, callee: Node) -> InferredType | None:
        object_node, method = au.member_parts(callee)
        namespace = au.identifier_name(object_node)
        if namespace is None or method is None:
            return None

        if (namespace, method) == kt.PROMISE_RESOLVE:
            args = au.call_arguments(node)
            if not args:
                return InferredType(promise_of(ANY), cs.CONFIDENCE_PROMISE_FALLBACK)
            value = self.infer(args[0])
            return InferredType(
                promise_of(value.type_expr),
                max(
                    cs.CONFIDENCE_PROMISE_MIN,
                    value.confidence * cs.DECAY_PROMISE_RESOLVE,
                ),
            )
        if namespace in kt.NUMERIC_NAMESPACES:
            return InferredType(NUMBER, cs.CONFIDENCE_STATIC_METHOD)
        if (namespace, method) in kt.STATIC_METHOD_TYPES:
            return InferredType(
                kt.STATIC_METHOD_TYPES[(namespace, method)],
                cs.CONFIDENCE_STATIC_METHOD,
            )
        return None

    def _infer_new(self, node: Node) -> InferredType:
        constructor = au.identifier_name(node.child_by_field_name(cs.FIELD_CONSTRUCTOR))
        if constructor is None:
            return InferredType(OBJECT, cs.CONFIDENCE_OBJECT_FALLBACK)
        if constructor == cs.TYPE_PROMISE:
            return self._infer_promise_constructor(node)
        if constructor in kt.CONSTRUCTOR_TYPES:
            return InferredType(
                kt.CONSTRUCTOR_TYPES[constructor], cs.CONFIDENCE_KNOWN_CONSTRUCTOR
            )
        return InferredType(
            GenericType(constructor), cs.CONFIDENCE_UNKNOWN_CONSTRUCTOR
        )

    def _infer_promise_constructor(self, node: Node) -> InferredType:
        args = au.call_arguments(node)
        executor = args[0] if args else None
        if executor is None or executor.type not in cs.FUNCTION_LITERAL_NODES:
            return InferredType(promise_of(ANY), cs.CONFIDENCE_PROMISE_FALLBACK)

        params = au.function_params(executor)
        if len(params) <= cs.RESOLVE_PARAM_INDEX:
            return InferredType(promise_of(ANY), cs.CONFIDENCE_PROMISE_FALLBACK)
        resolve_name = params[cs.RESOLVE_PARAM_INDEX].name
        if resolve_name is None:
            return InferredType(promise_of(ANY), cs.CONFIDENCE_PROMISE_FALLBACK)

        resolved = InferredType(ANY, cs.CONFIDENCE_EXECUTOR_DEFAULT)
        stack: list[Node] = [executor]
        while stack:
            current = stack.pop()
            if (
                current.type == cs.TS_CALL_EXPRESSION
                and au.callee_name(current) == resolve_name
            ):
                if call_args := au.call_arguments(current):
                    candidate = self.infer(call_args[0])
                    if candidate.confidence > resolved.confidence:
                        resolved = candidate
            stack.extend(reversed(current.children))

        return InferredType(
            promise_of(resolved.type_expr),
            max(
                cs.CONFIDENCE_PROMISE_MIN,
                resolved.confidence * cs.DECAY_PROMISE_RESOLVE,
            ),
        )

    def _infer_member(self, node: Node) -> InferredType:
        object_node, prop = au.member_parts(node)
        namespace = au.identifier_name(object_node)
        if namespace is not None and (namespace, prop) in kt.STATIC_PROPERTY_TYPES:
            return InferredType(
                kt.STATIC_PROPERTY_TYPES[(namespace, prop)],
                cs.CONFIDENCE_STATIC_METHOD,
            )
        return InferredType(ANY, cs.CONFIDENCE_UNKNOWN)

    def _infer_subscript(self, node: Node) -> InferredType:
        return InferredType(ANY, cs.CONFIDENCE_UNKNOWN)

    def _infer_unary(self, node: Node) -> InferredType:
        operator = au.safe_decode_text(node.child_by_field_name(cs.FIELD_OPERATOR))
        if operator is not None and (result := infer_unary(operator)) is not None:
            return result
        return InferredType(ANY, cs.CONFIDENCE_UNKNOWN)

    def _infer_binary(self, node: Node) -> InferredType:
        operator = au.safe_decode_text(node.child_by_field_name(cs.FIELD_OPERATOR))
        left = node.child_by_field_name(cs.FIELD_LEFT)
        right = node.child_by_field_name(cs.FIELD_RIGHT)
        if operator is None or left is None or right is None:
            return InferredType(ANY, cs.CONFIDENCE_UNKNOWN)
        return infer_binary(operator, self.infer(left), self.infer(right))

    def _infer_ternary(self, node: Node) -> InferredType:
        consequence = node.child_by_field_name(cs.FIELD_CONSEQUENCE)
        alternative = node.child_by_field_name(cs.FIELD_ALTERNATIVE)
        if consequence is None or alternative is None:
            return InferredType(ANY, cs.CONFIDENCE_UNKNOWN)
        return union_of(self.infer(consequence), self.infer(alternative))

    def _infer_await(self, node: Node) -> InferredType:
        argument = au.first_named_child(node)
        if argument is None:
            return InferredType(ANY, cs.CONFIDENCE_UNKNOWN)
        awaited = self.infer(argument)
        if (inner := unwrap_promise(awaited.type_expr)) is not None:
            return InferredType(inner, awaited.confidence * cs.DECAY_AWAIT)
        return awaited

    def _infer_last_child(self, node: Node) -> InferredType:
        children = au.named_children(node)
        if not children:
            return InferredType(ANY, cs.CONFIDENCE_UNKNOWN)
        return self.infer(children[-1])

    def _infer_assigned_value(self, node: Node) -> InferredType:
        value = node.child_by_field_name(cs.FIELD_RIGHT)
        if value is None:
            return InferredType(ANY, cs.CONFIDENCE_UNKNOWN)
        return self.infer(value)
