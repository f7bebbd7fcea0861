from __future__ import annotations

from .. import constants as cs
from ..models import InferredType
from .type_algebra import ANY, BOOLEAN, NUMBER, STRING, UNDEFINED, union_of


def infer_unary(operator: str) -> InferredType | None:
    match operator:
        case cs.OP_NOT | cs.OP_DELETE:
            return InferredType(BOOLEAN, cs.CONFIDENCE_CERTAIN)
        case cs.OP_TYPEOF:
            return InferredType(STRING, cs.CONFIDENCE_CERTAIN)
        case cs.OP_VOID:
            return InferredType(UNDEFINED, cs.CONFIDENCE_CERTAIN)
        case _ if operator in cs.NUMERIC_UNARY_OPERATORS:
            return InferredType(NUMBER, cs.CONFIDENCE_CERTAIN)
        case _:
            return None


def infer_plus(left: InferredType, right: InferredType) -> InferredType:
    if left.type_expr == STRING or right.type_expr == STRING:
        return InferredType(STRING, cs.CONFIDENCE_OPERATOR)
    if left.type_expr == NUMBER and right.type_expr == NUMBER:
        return InferredType(NUMBER, cs.CONFIDENCE_OPERATOR)
    return InferredType(ANY, cs.CONFIDENCE_PLUS_AMBIGUOUS)


def infer_binary(
    operator: str, left: InferredType, right: InferredType
) -> InferredType:
    if operator in cs.LOGICAL_OPERATORS:
        return union_of(left, right)
    if operator in cs.BOOLEAN_OPERATORS:
        return InferredType(BOOLEAN, cs.CONFIDENCE_OPERATOR)
    if operator in cs.NUMERIC_OPERATORS:
        return InferredType(NUMBER, cs.CONFIDENCE_OPERATOR)
    if operator == cs.OP_PLUS:
        return infer_plus(left, right)
    return InferredType(ANY, cs.CONFIDENCE_UNKNOWN_CALL)
