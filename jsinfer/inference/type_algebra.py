from __future__ import annotations

from .. import constants as cs
from ..models import (
    ArrayType,
    FunctionType,
    GenericType,
    InferredType,
    PrimitiveType,
    TypeExpr,
    UnionType,
    UnknownType,
)
from ..types_defs import TypeMap

ANY = UnknownType()
NUMBER = PrimitiveType(cs.Primitive.NUMBER)
STRING = PrimitiveType(cs.Primitive.STRING)
BOOLEAN = PrimitiveType(cs.Primitive.BOOLEAN)
NULL = PrimitiveType(cs.Primitive.NULL)
UNDEFINED = PrimitiveType(cs.Primitive.UNDEFINED)
OBJECT = PrimitiveType(cs.Primitive.OBJECT)
VOID = PrimitiveType(cs.Primitive.VOID)
FUNCTION = GenericType(cs.TYPE_FUNCTION)
REGEXP = GenericType(cs.TYPE_REGEXP)
DATE = GenericType(cs.TYPE_DATE)


def array_of(element: TypeExpr) -> ArrayType:
    return ArrayType(element)


def promise_of(inner: TypeExpr) -> GenericType:
    return GenericType(cs.TYPE_PROMISE, (inner,))


def is_promise(expr: TypeExpr) -> bool:
    return isinstance(expr, GenericType) and expr.name == cs.TYPE_PROMISE


def unwrap_promise(expr: TypeExpr) -> TypeExpr | None:
    if not isinstance(expr, GenericType) or expr.name != cs.TYPE_PROMISE:
        return None
    return expr.args[0] if expr.args else ANY


def element_type(expr: TypeExpr) -> TypeExpr | None:
    return expr.element if isinstance(expr, ArrayType) else None


def union_members(expr: TypeExpr) -> tuple[TypeExpr, ...]:
    return expr.members if isinstance(expr, UnionType) else (expr,)


def _dedupe(members: list[TypeExpr]) -> list[TypeExpr]:
    unique: list[TypeExpr] = []
    for member in members:
        if member not in unique:
            unique.append(member)
    return unique


def union_of(left: InferredType, right: InferredType) -> InferredType:
    if (
        left.confidence < cs.CONFIDENCE_UNION_MIN_BRANCH
        or right.confidence < cs.CONFIDENCE_UNION_MIN_BRANCH
    ):
        return InferredType(ANY, cs.CONFIDENCE_UNION_COLLAPSED)

    lowest = min(left.confidence, right.confidence)
    if left.type_expr == right.type_expr:
        properties = left.properties if left.properties == right.properties else None
        return InferredType(
            left.type_expr, lowest * cs.DECAY_UNION_SAME, properties
        )

    members = _dedupe(
        [*union_members(left.type_expr), *union_members(right.type_expr)]
    )
    if len(members) > cs.MAX_UNION_MEMBERS:
        return InferredType(ANY, cs.CONFIDENCE_UNION_COLLAPSED)
    if len(members) == 1:
        return InferredType(members[0], lowest * cs.DECAY_UNION_SAME)
    return InferredType(
        UnionType(tuple(members)),
        max(cs.CONFIDENCE_UNION_MIN, lowest * cs.DECAY_UNION),
    )


def with_undefined(inferred: InferredType) -> InferredType:
    members = _dedupe([*union_members(inferred.type_expr), UNDEFINED])
    if len(members) == 1:
        return inferred
    if len(members) > cs.MAX_UNION_MEMBERS:
        return InferredType(ANY, cs.CONFIDENCE_UNION_COLLAPSED)
    return InferredType(
        UnionType(tuple(members)),
        max(cs.CONFIDENCE_UNION_MIN, inferred.confidence * cs.DECAY_UNION),
    )


def or_undefined(element: TypeExpr) -> TypeExpr:
    members = _dedupe([*union_members(element), UNDEFINED])
    if len(members) > cs.MAX_UNION_MEMBERS:
        return ANY
    return UnionType(tuple(members)) if len(members) > 1 else element


def function_of(
    params: list[TypeExpr], returns: TypeExpr, rest: TypeExpr | None = None
) -> FunctionType:
    return FunctionType(tuple(params), returns, rest)


def merge(
    old: InferredType | None, new: InferredType, replace_equal: bool = False
) -> InferredType:
    if old is None or new.confidence > old.confidence:
        return new
    if replace_equal and new.confidence == old.confidence:
        return new
    return old


def assign(
    type_map: TypeMap, name: str, new: InferredType, replace_equal: bool = False
) -> bool:
    old = type_map.get(name)
    chosen = merge(old, new, replace_equal)
    if chosen is old:
        return False
    type_map[name] = chosen
    return old != chosen


def render_shape(inferred: InferredType) -> str:
    if inferred.properties is None:
        return inferred.type_name
    if not inferred.properties:
        return cs.SHAPE_EMPTY
    fields = cs.PARAM_SEPARATOR.join(
        f"{name}{cs.SHAPE_FIELD_SEPARATOR}{render_shape(value)}"
        for name, value in inferred.properties.items()
    )
    return f"{cs.SHAPE_OPEN}{fields}{cs.SHAPE_CLOSE}"


def serialize_type_map(type_map: TypeMap) -> str:
    entries = [
        cs.SERIALIZE_FIELD_SEPARATOR.join(
            (
                name,
                inferred.type_name,
                cs.SERIALIZE_CONFIDENCE_FORMAT.format(inferred.confidence),
            )
        )
        for name, inferred in sorted(type_map.items())
    ]
    return cs.SERIALIZE_ENTRY_SEPARATOR.join(entries)
