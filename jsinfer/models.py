from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TypeAlias

from . import constants as cs
from .types_defs import ASTNode, ParamInfo


@dataclass(frozen=True)
class PrimitiveType:
    name: cs.Primitive

    def render(self) -> str:
        return str(self.name)


@dataclass(frozen=True)
class UnknownType:
    def render(self) -> str:
        return cs.TYPE_ANY


@dataclass(frozen=True)
class ArrayType:
    element: TypeExpr

    def render(self) -> str:
        return f"{_render_nested(self.element)}{cs.ARRAY_SUFFIX}"


@dataclass(frozen=True)
class GenericType:
    name: str
    args: tuple[TypeExpr, ...] = ()

    def render(self) -> str:
        if not self.args:
            return self.name
        rendered = cs.PARAM_SEPARATOR.join(arg.render() for arg in self.args)
        return f"{self.name}<{rendered}>"


@dataclass(frozen=True)
class FunctionType:
    params: tuple[TypeExpr, ...]
    returns: TypeExpr
    rest: TypeExpr | None = None

    def render(self) -> str:
        parts = [param.render() for param in self.params]
        if self.rest is not None:
            parts.append(f"{cs.REST_PREFIX}{self.rest.render()}")
        return f"({cs.PARAM_SEPARATOR.join(parts)}){cs.ARROW}{self.returns.render()}"


@dataclass(frozen=True, eq=False)
class UnionType:
    members: tuple[TypeExpr, ...]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnionType):
            return NotImplemented
        return frozenset(self.members) == frozenset(other.members)

    def __hash__(self) -> int:
        return hash(frozenset(self.members))

    def render(self) -> str:
        return cs.UNION_SEPARATOR.join(
            f"({member.render()})"
            if isinstance(member, FunctionType)
            else member.render()
            for member in self.members
        )


TypeExpr: TypeAlias = (
    PrimitiveType | UnknownType | ArrayType | GenericType | FunctionType | UnionType
)


def _render_nested(expr: TypeExpr) -> str:
    if isinstance(expr, UnionType | FunctionType):
        return f"({expr.render()})"
    return expr.render()


@dataclass(frozen=True)
class InferredType:
    type_expr: TypeExpr
    confidence: float
    properties: dict[str, InferredType] | None = None

    def __post_init__(self) -> None:
        clamped = min(cs.CONFIDENCE_CERTAIN, max(cs.CONFIDENCE_FLOOR, self.confidence))
        object.__setattr__(self, "confidence", clamped)

    @property
    def type_name(self) -> str:
        return self.type_expr.render()

    def with_confidence(self, confidence: float) -> InferredType:
        return replace(self, confidence=confidence)

    def scaled(self, factor: float) -> InferredType:
        return replace(self, confidence=self.confidence * factor)


@dataclass
class FunctionInfo:
    name: str
    params: tuple[ParamInfo, ...]
    node: ASTNode
    is_async: bool = False
    return_type: InferredType | None = None
    callees: set[str] = field(default_factory=set)
    callers: set[str] = field(default_factory=set)

    @property
    def param_names(self) -> list[str | None]:
        return [param.name for param in self.params]


@dataclass(frozen=True)
class CallSite:
    callee_name: str
    argument_types: tuple[InferredType | None, ...]
    node: ASTNode
    caller: str | None = None


@dataclass
class CallGraphResult:
    functions: dict[str, FunctionInfo] = field(default_factory=dict)
    call_sites: list[CallSite] = field(default_factory=list)
