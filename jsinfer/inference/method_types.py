from __future__ import annotations

from collections.abc import Callable
from typing import TypeAlias

from tree_sitter import Node

from .. import constants as cs
from ..models import ArrayType, GenericType, InferredType, TypeExpr, UnionType
from . import known_types as kt
from .type_algebra import (
    ANY,
    BOOLEAN,
    NULL,
    NUMBER,
    STRING,
    VOID,
    array_of,
    or_undefined,
)

NodeTyper: TypeAlias = Callable[[Node], InferredType]
CallbackTyper: TypeAlias = Callable[[Node], InferredType | None]


def _usable(inferred: InferredType | None) -> TypeExpr:
    if inferred is None or inferred.confidence < cs.CONFIDENCE_ARRAY_ELEMENT_MIN:
        return ANY
    return inferred.type_expr


def _array_method(
    receiver: ArrayType,
    method: str,
    args: list[Node],
    infer: NodeTyper,
    callback_return: CallbackTyper,
) -> TypeExpr | None:
    element = receiver.element
    if method == cs.MAP_METHOD:
        returned = callback_return(args[0]) if args else None
        return array_of(_usable(returned))
    if method == cs.FLAT_MAP_METHOD:
        returned = _usable(callback_return(args[0]) if args else None)
        return returned if isinstance(returned, ArrayType) else array_of(returned)
    if method in cs.REDUCE_METHODS:
        if len(args) > 1:
            return _usable(infer(args[1]))
        return element
    if method == cs.FLAT_METHOD:
        return element if isinstance(element, ArrayType) else receiver
    if method in kt.ARRAY_SELF_METHODS:
        return receiver
    if method in kt.ARRAY_NUMBER_METHODS:
        return NUMBER
    if method in kt.ARRAY_BOOLEAN_METHODS:
        return BOOLEAN
    if method in kt.ARRAY_STRING_METHODS:
        return STRING
    if method in kt.ARRAY_VOID_METHODS:
        return VOID
    if method in kt.ARRAY_ELEMENT_OR_UNDEFINED_METHODS:
        return ANY if element == ANY else or_undefined(element)
    return None


def _generic_method(receiver: GenericType, method: str) -> TypeExpr | None:
    if receiver.name == cs.TYPE_REGEXP and method == kt.REGEXP_EXEC_METHOD:
        return UnionType((kt.REGEXP_EXEC_ARRAY, NULL))
    if receiver.name == cs.TYPE_DATE and method.startswith(
        (kt.DATE_GETTER_PREFIX, kt.DATE_SETTER_PREFIX)
    ):
        return NUMBER
    return kt.GENERIC_METHOD_RETURNS.get(receiver.name, {}).get(method)


def method_return_type(
    receiver: InferredType,
    method: str,
    args: list[Node],
    infer: NodeTyper,
    callback_return: CallbackTyper,
) -> InferredType | None:
    expr = receiver.type_expr
    match expr:
        case _ if expr == STRING:
            result = kt.STRING_METHOD_RETURNS.get(method, STRING)
        case _ if expr == NUMBER:
            result = kt.NUMBER_METHOD_RETURNS.get(method)
        case ArrayType():
            result = _array_method(expr, method, args, infer, callback_return)
        case GenericType():
            result = _generic_method(expr, method)
        case _:
            result = None

    if result is None or result == ANY:
        return None
    return InferredType(
        result, min(cs.CONFIDENCE_METHOD_RETURN, receiver.confidence)
    )


def property_type(receiver: InferredType, prop: str) -> InferredType | None:
    expr = receiver.type_expr
    if receiver.properties is not None and prop in receiver.properties:
        return receiver.properties[prop]
    if prop == cs.PROPERTY_LENGTH and (expr == STRING or isinstance(expr, ArrayType)):
        return InferredType(NUMBER, cs.CONFIDENCE_CERTAIN)
    if isinstance(expr, GenericType):
        if (known := kt.PROPERTY_TYPES.get(expr.name, {}).get(prop)) is not None:
            return InferredType(known, cs.CONFIDENCE_METHOD_RETURN)
    return None
