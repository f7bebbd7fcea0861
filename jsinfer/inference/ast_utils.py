from __future__ import annotations

from functools import lru_cache

from tree_sitter import Node

from .. import constants as cs
from ..types_defs import BoundName, ParamInfo, Visit
from .visitor import NodeVisitor


@lru_cache(maxsize=10000)
def _cached_decode_bytes(text_bytes: bytes) -> str:
    return text_bytes.decode(cs.ENCODING_UTF8)


def safe_decode_text(node: Node | None) -> str | None:
    if node is None or node.text is None:
        return None
    text_bytes = node.text
    if isinstance(text_bytes, bytes):
        return _cached_decode_bytes(text_bytes)
    return str(text_bytes)


def named_children(node: Node) -> list[Node]:
    return [child for child in node.named_children if child.type != cs.TS_COMMENT]


def first_named_child(node: Node) -> Node | None:
    children = named_children(node)
    return children[0] if children else None


def unwrap_parens(node: Node) -> Node:
    while node.type == cs.TS_PARENTHESIZED_EXPRESSION:
        inner = first_named_child(node)
        if inner is None:
            break
        node = inner
    return node


def has_child_type(node: Node, node_type: str) -> bool:
    return any(child.type == node_type for child in node.children)


def is_optional(node: Node) -> bool:
    return has_child_type(node, cs.TS_OPTIONAL_CHAIN)


def is_async(function_node: Node) -> bool:
    return has_child_type(function_node, cs.TS_ASYNC)


def is_function_node(node: Node | None) -> bool:
    return node is not None and (
        node.type in cs.FUNCTION_LITERAL_NODES or node.type in cs.NAMED_FUNCTION_NODES
    )


def identifier_name(node: Node | None) -> str | None:
    if node is None or node.type != cs.TS_IDENTIFIER:
        return None
    return safe_decode_text(node)


def string_literal_value(node: Node) -> str | None:
    text = safe_decode_text(node)
    if text is None or len(text) < 2:
        return None
    return text[1:-1]


def property_key(key_node: Node | None) -> str | None:
    if key_node is None:
        return None
    match key_node.type:
        case cs.TS_STRING:
            return string_literal_value(key_node)
        case cs.TS_PROPERTY_IDENTIFIER | cs.TS_NUMBER | cs.TS_IDENTIFIER:
            return safe_decode_text(key_node)
        case _:
            return None


def call_arguments(call_node: Node) -> list[Node]:
    args_node = call_node.child_by_field_name(cs.FIELD_ARGUMENTS)
    if args_node is None or args_node.type != cs.TS_ARGUMENTS:
        return []
    return named_children(args_node)


def callee_name(call_node: Node) -> str | None:
    return identifier_name(call_node.child_by_field_name(cs.FIELD_FUNCTION))


def member_parts(member_node: Node) -> tuple[Node | None, str | None]:
    object_node = member_node.child_by_field_name(cs.FIELD_OBJECT)
    property_node = member_node.child_by_field_name(cs.FIELD_PROPERTY)
    return object_node, safe_decode_text(property_node)


def function_parameters(function_node: Node) -> list[Node]:
    if single := function_node.child_by_field_name(cs.FIELD_PARAMETER):
        return [single]
    params_node = function_node.child_by_field_name(cs.FIELD_PARAMETERS)
    if params_node is None:
        return []
    return named_children(params_node)


def parse_param(param_node: Node) -> ParamInfo:
    match param_node.type:
        case cs.TS_IDENTIFIER:
            return ParamInfo(safe_decode_text(param_node), False, None, None)
        case cs.TS_ASSIGNMENT_PATTERN:
            left = param_node.child_by_field_name(cs.FIELD_LEFT)
            right = param_node.child_by_field_name(cs.FIELD_RIGHT)
            if name := identifier_name(left):
                return ParamInfo(name, False, right, None)
            return ParamInfo(None, False, right, left)
        case cs.TS_REST_PATTERN:
            inner = first_named_child(param_node)
            if name := identifier_name(inner):
                return ParamInfo(name, True, None, None)
            return ParamInfo(None, True, None, inner)
        case _:
            return ParamInfo(None, False, None, param_node)


def function_params(function_node: Node) -> tuple[ParamInfo, ...]:
    return tuple(parse_param(param) for param in function_parameters(function_node))


def pattern_bindings(pattern: Node) -> list[BoundName]:
    bindings: list[BoundName] = []
    stack: list[Node] = [pattern]

    while stack:
        current = stack.pop()
        match current.type:
            case cs.TS_IDENTIFIER | cs.TS_SHORTHAND_PROPERTY_IDENTIFIER_PATTERN:
                if name := safe_decode_text(current):
                    bindings.append(BoundName(name, current))
            case cs.TS_PAIR_PATTERN:
                if value := current.child_by_field_name(cs.FIELD_VALUE):
                    stack.append(value)
            case cs.TS_ASSIGNMENT_PATTERN | cs.TS_OBJECT_ASSIGNMENT_PATTERN:
                if left := current.child_by_field_name(cs.FIELD_LEFT):
                    stack.append(left)
            case cs.TS_OBJECT_PATTERN | cs.TS_ARRAY_PATTERN | cs.TS_REST_PATTERN:
                stack.extend(reversed(named_children(current)))

    return bindings


def declared_function_name(function_node: Node) -> str | None:
    if function_node.type in cs.NAMED_FUNCTION_NODES:
        return safe_decode_text(function_node.child_by_field_name(cs.FIELD_NAME))
    parent = function_node.parent
    if (
        parent is not None
        and parent.type == cs.TS_VARIABLE_DECLARATOR
        and function_node.type in cs.FUNCTION_LITERAL_NODES
    ):
        return identifier_name(parent.child_by_field_name(cs.FIELD_NAME))
    return None


def enclosing_function_name(node: Node) -> str | None:
    current = node.parent
    while current is not None:
        if is_function_node(current) and (name := declared_function_name(current)):
            return name
        current = current.parent
    return None


def function_body(function_node: Node) -> Node | None:
    return function_node.child_by_field_name(cs.FIELD_BODY)


def return_expressions(function_node: Node) -> tuple[list[Node], bool]:
    body = function_body(function_node)
    if body is None:
        return [], False
    if body.type != cs.TS_STATEMENT_BLOCK:
        return [body], True

    expressions: list[Node] = []
    found = False

    def on_return(node: Node) -> Visit:
        nonlocal found
        found = True
        if argument := first_named_child(node):
            expressions.append(argument)
        return Visit.SKIP

    NodeVisitor(
        {cs.TS_RETURN_STATEMENT: on_return}, cs.FUNCTION_BOUNDARY_NODES
    ).walk(body)
    return expressions, found


def is_binding_identifier(node: Node) -> bool:
    parent = node.parent
    if parent is None:
        return False
    match parent.type:
        case cs.TS_VARIABLE_DECLARATOR:
            return parent.child_by_field_name(cs.FIELD_NAME) == node
        case cs.TS_ASSIGNMENT_PATTERN | cs.TS_OBJECT_ASSIGNMENT_PATTERN:
            return parent.child_by_field_name(cs.FIELD_LEFT) == node
        case cs.TS_PAIR_PATTERN:
            return parent.child_by_field_name(cs.FIELD_VALUE) == node
        case (
            cs.TS_FORMAL_PARAMETERS
            | cs.TS_REST_PATTERN
            | cs.TS_ARRAY_PATTERN
            | cs.TS_OBJECT_PATTERN
        ):
            return True
        case cs.TS_ARROW_FUNCTION:
            return parent.child_by_field_name(cs.FIELD_PARAMETER) == node
        case _ if is_function_node(parent):
            return parent.child_by_field_name(cs.FIELD_NAME) == node
        case _:
            return False
