from __future__ import annotations

from loguru import logger
from tree_sitter import Node

from .. import constants as cs
from .. import logs as ls
from ..constants import UsageTag
from ..types_defs import TypeMap, UsageMap
from . import ast_utils as au
from .visitor import NodeVisitor

LITERAL_TAGS: dict[str, UsageTag] = {
    cs.TS_NUMBER: UsageTag.NUMBER,
    cs.TS_STRING: UsageTag.STRING,
    cs.TS_TEMPLATE_STRING: UsageTag.STRING,
    cs.TS_TRUE: UsageTag.BOOLEAN,
    cs.TS_FALSE: UsageTag.BOOLEAN,
}


def _enclosing_expression(node: Node) -> Node | None:
    parent = node.parent
    while parent is not None and parent.type == cs.TS_PARENTHESIZED_EXPRESSION:
        parent = parent.parent
    return parent


def _binary_operator(node: Node | None) -> str | None:
    if node is None or node.type != cs.TS_BINARY_EXPRESSION:
        return None
    return au.safe_decode_text(node.child_by_field_name(cs.FIELD_OPERATOR))


def _arithmetic_tag(binary: Node, operator: str) -> UsageTag:
    if operator != cs.OP_PLUS:
        return UsageTag.NUMBER
    if _binary_operator(_enclosing_expression(binary)) in cs.ARITHMETIC_OPERATORS:
        return UsageTag.NUMBER
    return UsageTag.NUMBER_OR_STRING


def _comparison_tag(binary: Node, reference: Node) -> UsageTag | None:
    left = binary.child_by_field_name(cs.FIELD_LEFT)
    right = binary.child_by_field_name(cs.FIELD_RIGHT)
    other = right if left == reference else left
    if other is None:
        return None
    return LITERAL_TAGS.get(au.unwrap_parens(other).type)


def classify_usage(reference: Node) -> UsageTag | None:
    parent = reference.parent
    if parent is None:
        return None

    match parent.type:
        case cs.TS_BINARY_EXPRESSION:
            operator = _binary_operator(parent)
            if operator in cs.USAGE_ARITHMETIC_OPERATORS:
                return _arithmetic_tag(parent, operator)
            if operator in cs.COMPARISON_OPERATORS:
                return _comparison_tag(parent, reference)
        case cs.TS_SUBSCRIPT_EXPRESSION:
            index = parent.child_by_field_name(cs.FIELD_INDEX)
            if (
                parent.child_by_field_name(cs.FIELD_OBJECT) == reference
                and index is not None
                and index.type == cs.TS_NUMBER
            ):
                return UsageTag.ARRAY
        case cs.TS_MEMBER_EXPRESSION:
            object_node, prop = au.member_parts(parent)
            if object_node != reference or prop is None:
                return None
            if prop in cs.STRING_METHODS:
                return UsageTag.STRING
            if prop in cs.ARRAY_METHODS:
                return UsageTag.ARRAY
    return None


class UsageAnalyzer:
    def analyze(self, root: Node, type_map: TypeMap) -> UsageMap:
        usage_map: UsageMap = {}

        def on_identifier(node: Node) -> None:
            name = au.safe_decode_text(node)
            if name is None or name not in type_map or au.is_binding_identifier(node):
                return
            if (tag := classify_usage(node)) is None:
                return
            usage_map.setdefault(name, set()).add(tag)
            logger.debug(ls.USAGE_EVIDENCE.format(name=name, tag=tag))

        NodeVisitor({cs.TS_IDENTIFIER: on_identifier}).walk(root)
        logger.debug(ls.USAGE_DONE.format(count=len(usage_map)))
        return usage_map
