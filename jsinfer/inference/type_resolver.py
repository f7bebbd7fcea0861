from __future__ import annotations

from loguru import logger
from tree_sitter import Node

from .. import constants as cs
from .. import logs as ls
from ..constants import UsageTag
from ..models import (
    ArrayType,
    CallGraphResult,
    FunctionInfo,
    FunctionType,
    InferredType,
    TypeExpr,
    UnionType,
)
from ..types_defs import ParamInfo, TypeMap, UsageMap
from . import ast_utils as au
from .context import InferenceContext
from .method_types import method_return_type, property_type
from .structural import StructuralTyper
from .type_algebra import (
    ANY,
    BOOLEAN,
    FUNCTION,
    NUMBER,
    OBJECT,
    STRING,
    VOID,
    array_of,
    assign,
    element_type,
    function_of,
    is_promise,
    promise_of,
    with_undefined,
)
from .visitor import NodeVisitor


def _is_function_like(inferred: InferredType) -> bool:
    return (
        isinstance(inferred.type_expr, FunctionType) or inferred.type_expr == FUNCTION
    )


class ExpressionTyper(StructuralTyper):
    def __init__(
        self,
        type_map: TypeMap,
        graph: CallGraphResult,
        context: InferenceContext,
    ) -> None:
        super().__init__(type_map)
        self.graph = graph
        self.context = context
        self._fallback = StructuralTyper(type_map)
        self._depth = 0
        self._visited: set[str] = set()
        self._returns: dict[str, InferredType | None] = {}

    def infer(self, node: Node) -> InferredType:
        if self.context.deadline_passed():
            self._fallback._nesting = self._nesting
            return self._fallback.infer(node)
        return super().infer(node)

    def _infer_name(self, name: str | None) -> InferredType:
        if name is None:
            return InferredType(ANY, cs.CONFIDENCE_UNKNOWN)
        if (info := self.graph.functions.get(name)) is not None:
            self.function_return(info)
        if (known := self.type_map.get(name)) is not None:
            return known
        return InferredType(ANY, cs.CONFIDENCE_UNKNOWN)

    def _infer_function_literal(self, node: Node) -> InferredType:
        name = au.declared_function_name(node)
        if name is not None and (info := self.graph.functions.get(name)):
            if info.node == node:
                return self._infer_name(name)

        returned = self.literal_return(node)
        if returned is None:
            return InferredType(FUNCTION, cs.CONFIDENCE_FUNCTION_EXPRESSION)
        return InferredType(
            self.signature(au.function_params(node), returned.type_expr),
            cs.CONFIDENCE_FUNCTION_EXPRESSION,
        )

    def _infer_call(self, node: Node) -> InferredType:
        callee = node.child_by_field_name(cs.FIELD_FUNCTION)
        if callee is None:
            return InferredType(ANY, cs.CONFIDENCE_UNKNOWN_CALL)

        result = self._infer_callee_result(node, au.unwrap_parens(callee))
        optional = au.is_optional(node) or (
            callee.type == cs.TS_MEMBER_EXPRESSION and au.is_optional(callee)
        )
        return with_undefined(result) if optional else result

    def _infer_callee_result(self, node: Node, callee: Node) -> InferredType:
        if callee.type in cs.FUNCTION_LITERAL_NODES:
            return self._infer_iife(node, callee)

        if callee.type == cs.TS_IDENTIFIER:
            name = au.safe_decode_text(callee)
            if name is not None and (info := self.graph.functions.get(name)):
                if (returned := self.function_return(info)) is not None:
                    return returned
                return super()._infer_call(node)
            known = self.type_map.get(name) if name is not None else None
            if known is not None and isinstance(known.type_expr, FunctionType):
                return InferredType(
                    known.type_expr.returns, known.confidence * cs.DECAY_CALL_RETURN
                )
            return super()._infer_call(node)

        if callee.type == cs.TS_MEMBER_EXPRESSION:
            if (static := self._infer_static_call(node, callee)) is not None:
                return static
            return self._infer_method_call(node, callee)

        return super()._infer_call(node)

    def _infer_iife(self, node: Node, function_node: Node) -> InferredType:
        args = au.call_arguments(node)
        for param, argument in zip(au.function_params(function_node), args):
            if param.name is None or param.is_rest:
                continue
            assign(self.type_map, param.name, self.infer(argument))
        returned = self.literal_return(function_node)
        return returned or InferredType(ANY, cs.CONFIDENCE_UNKNOWN_CALL)

    def _infer_method_call(self, node: Node, callee: Node) -> InferredType:
        object_node, method = au.member_parts(callee)
        if object_node is None or method is None:
            return InferredType(ANY, cs.CONFIDENCE_UNKNOWN_CALL)

        receiver = self.infer(object_node)
        args = au.call_arguments(node)
        self.bind_callbacks(receiver, method, args)

        if receiver.properties is not None and method in receiver.properties:
            member = receiver.properties[method]
            if isinstance(member.type_expr, FunctionType):
                return InferredType(
                    member.type_expr.returns, member.confidence * cs.DECAY_CALL_RETURN
                )

        result = method_return_type(
            receiver, method, args, self.infer, self.callback_return
        )
        return result or InferredType(ANY, cs.CONFIDENCE_UNKNOWN_CALL)

    def _infer_member(self, node: Node) -> InferredType:
        static = super()._infer_member(node)
        if static.type_expr != ANY:
            return static

        object_node, prop = au.member_parts(node)
        result = InferredType(ANY, cs.CONFIDENCE_UNKNOWN)
        if object_node is not None and prop is not None:
            receiver = self.infer(object_node)
            result = property_type(receiver, prop) or result
        return with_undefined(result) if au.is_optional(node) else result

    def _infer_subscript(self, node: Node) -> InferredType:
        object_node = node.child_by_field_name(cs.FIELD_OBJECT)
        index = node.child_by_field_name(cs.FIELD_INDEX)
        result = InferredType(ANY, cs.CONFIDENCE_UNKNOWN)
        if object_node is not None:
            receiver = self.infer(object_node)
            if (element := element_type(receiver.type_expr)) is not None:
                result = InferredType(element, receiver.confidence)
            elif receiver.type_expr == STRING:
                result = InferredType(STRING, receiver.confidence)
            elif index is not None and index.type == cs.TS_STRING:
                key = au.string_literal_value(index)
                if key is not None:
                    result = property_type(receiver, key) or result
        return with_undefined(result) if au.is_optional(node) else result

    def bind_callbacks(
        self, receiver: InferredType, method: str, args: list[Node]
    ) -> None:
        if not isinstance(receiver.type_expr, ArrayType) or not args:
            return
        callback = au.unwrap_parens(args[0])
        if callback.type not in cs.FUNCTION_LITERAL_NODES:
            return

        array = receiver.scaled(cs.DECAY_CALLBACK_PARAM)
        element = InferredType(receiver.type_expr.element, array.confidence)
        index = InferredType(NUMBER, cs.CONFIDENCE_METHOD_RETURN)

        if method in cs.ELEMENT_CALLBACK_METHODS:
            seeds = [element, index, array]
        elif method in cs.SORT_METHODS:
            seeds = [element, element]
        elif method in cs.REDUCE_METHODS:
            accumulator = element
            if len(args) > 1:
                initial = self.infer(args[1])
                if initial.confidence >= cs.CONFIDENCE_ARRAY_ELEMENT_MIN:
                    accumulator = initial
            seeds = [accumulator, element, index, array]
        else:
            return

        for param, seed in zip(au.function_params(callback), seeds):
            if param.name is None or param.is_rest or seed.type_expr == ANY:
                continue
            if assign(self.type_map, param.name, seed):
                logger.debug(
                    ls.RESOLVER_CALLBACK_PARAM.format(
                        param=param.name, type_name=seed.type_name
                    )
                )

    def callback_return(self, node: Node) -> InferredType | None:
        node = au.unwrap_parens(node)
        if node.type in cs.FUNCTION_LITERAL_NODES:
            return self.literal_return(node)
        name = au.identifier_name(node)
        if name is not None and (info := self.graph.functions.get(name)):
            return self.function_return(info)
        return None

    def literal_return(self, function_node: Node) -> InferredType | None:
        if self.context.budget_exceeded(self._depth + 1):
            return None
        self._depth += 1
        try:
            return self._infer_returns(function_node, au.is_async(function_node))
        finally:
            self._depth -= 1

    def _infer_returns(self, function_node: Node, is_async: bool) -> InferredType:
        expressions, _ = au.return_expressions(function_node)
        best: InferredType | None = None
        for expression in expressions:
            candidate = self.infer(expression)
            if best is None or candidate.confidence > best.confidence:
                best = candidate
        if best is None:
            best = InferredType(VOID, cs.CONFIDENCE_VOID_RETURN)
        if is_async and not is_promise(best.type_expr):
            best = InferredType(promise_of(best.type_expr), best.confidence)
        return best

    def function_return(self, info: FunctionInfo) -> InferredType | None:
        if info.name in self._visited:
            logger.debug(ls.RESOLVER_CYCLE.format(function=info.name))
            return None
        if info.name in self._returns:
            return self._returns[info.name]
        if (
            info.return_type is not None
            and info.return_type.confidence >= cs.CONFIDENCE_RESOLVED_FUNCTION
        ):
            return info.return_type
        if self.context.budget_exceeded(self._depth + 1):
            return None

        self._visited.add(info.name)
        self._depth += 1
        try:
            returned = self._infer_returns(info.node, info.is_async)
        finally:
            self._depth -= 1
            self._visited.discard(info.name)

        info.return_type = returned
        self._returns[info.name] = returned
        logger.debug(
            ls.RESOLVER_RETURN_INFERRED.format(
                function=info.name, type_name=returned.type_name
            )
        )
        self.write_signature(info)
        return returned

    def signature(
        self, params: tuple[ParamInfo, ...], returns: TypeExpr
    ) -> FunctionType:
        positional: list[TypeExpr] = []
        rest: TypeExpr | None = None
        for param in params:
            known = self.type_map.get(param.name) if param.name is not None else None
            if param.is_rest:
                rest = known.type_expr if known is not None else array_of(ANY)
                break
            positional.append(known.type_expr if known is not None else ANY)
        return function_of(positional, returns, rest)

    def write_signature(self, info: FunctionInfo) -> None:
        if info.return_type is None:
            return
        current = self.type_map.get(info.name)
        confidence = max(cs.CONFIDENCE_FUNCTION_MIN, info.return_type.confidence)
        if current is not None and _is_function_like(current):
            confidence = max(confidence, current.confidence)
        signature = InferredType(
            self.signature(info.params, info.return_type.type_expr),
            min(cs.CONFIDENCE_SIGNATURE_MAX, confidence),
        )
        if assign(self.type_map, info.name, signature, replace_equal=True):
            logger.debug(
                ls.RESOLVER_SIGNATURE.format(
                    function=info.name, type_name=signature.type_name
                )
            )


class TypeResolver:
    def __init__(self, root: Node, context: InferenceContext | None = None) -> None:
        self.root = root
        self.context = context or InferenceContext()

    def resolve(
        self, type_map: TypeMap, usage_map: UsageMap, graph: CallGraphResult
    ) -> TypeMap:
        typer = ExpressionTyper(type_map, graph, self.context)
        self._propagate(type_map, typer, graph)
        self._refine_call_graph(type_map, typer, graph)
        self._fold_usage(type_map, usage_map)
        return type_map

    def _propagate(
        self, type_map: TypeMap, typer: ExpressionTyper, graph: CallGraphResult
    ) -> None:
        def on_declarator(node: Node) -> None:
            name_node = node.child_by_field_name(cs.FIELD_NAME)
            value_node = node.child_by_field_name(cs.FIELD_VALUE)
            if name_node is None or value_node is None:
                return
            value = au.unwrap_parens(value_node)
            if value.type in cs.LITERAL_NODES:
                return

            if name_node.type in cs.DESTRUCTURING_PATTERN_NODES:
                self._destructure(type_map, typer, name_node, typer.infer(value))
                return

            name = au.safe_decode_text(name_node)
            if name is None:
                return
            if value.type in cs.FUNCTION_LITERAL_NODES and name in graph.functions:
                return
            inferred = typer.infer(value)
            if value.type == cs.TS_IDENTIFIER:
                inferred = inferred.scaled(cs.DECAY_ASSIGNMENT)
            self._bind(type_map, name, inferred)

        def on_call(node: Node) -> None:
            typer.infer(node)

        NodeVisitor(
            {cs.TS_VARIABLE_DECLARATOR: on_declarator, cs.TS_CALL_EXPRESSION: on_call}
        ).walk(self.root)

    def _bind(self, type_map: TypeMap, name: str, inferred: InferredType) -> None:
        if assign(type_map, name, inferred):
            logger.debug(
                ls.RESOLVER_PROPAGATED.format(
                    name=name,
                    type_name=inferred.type_name,
                    confidence=inferred.confidence,
                )
            )

    def _destructure(
        self,
        type_map: TypeMap,
        typer: ExpressionTyper,
        pattern: Node,
        source: InferredType,
    ) -> None:
        def bind_target(target: Node, inferred: InferredType | None) -> None:
            match target.type:
                case cs.TS_IDENTIFIER | cs.TS_SHORTHAND_PROPERTY_IDENTIFIER_PATTERN:
                    name = au.safe_decode_text(target)
                    if name is not None and inferred is not None:
                        self._bind(type_map, name, inferred)
                case cs.TS_ASSIGNMENT_PATTERN | cs.TS_OBJECT_ASSIGNMENT_PATTERN:
                    left = target.child_by_field_name(cs.FIELD_LEFT)
                    right = target.child_by_field_name(cs.FIELD_RIGHT)
                    if inferred is None and right is not None:
                        inferred = typer.infer(right)
                    if left is not None:
                        bind_target(left, inferred)
                case cs.TS_OBJECT_PATTERN | cs.TS_ARRAY_PATTERN:
                    if inferred is not None:
                        self._destructure(type_map, typer, target, inferred)

        if pattern.type == cs.TS_OBJECT_PATTERN:
            for member in au.named_children(pattern):
                match member.type:
                    case cs.TS_PAIR_PATTERN:
                        key = au.property_key(member.child_by_field_name(cs.FIELD_KEY))
                        value = member.child_by_field_name(cs.FIELD_VALUE)
                        if key is not None and value is not None:
                            bind_target(value, property_type(source, key))
                    case cs.TS_SHORTHAND_PROPERTY_IDENTIFIER_PATTERN:
                        key = au.safe_decode_text(member)
                        if key is not None:
                            bind_target(member, property_type(source, key))
                    case cs.TS_OBJECT_ASSIGNMENT_PATTERN:
                        left = member.child_by_field_name(cs.FIELD_LEFT)
                        key = au.safe_decode_text(left)
                        if key is not None:
                            bind_target(member, property_type(source, key))
                    case cs.TS_REST_PATTERN:
                        if inner := au.first_named_child(member):
                            rest = InferredType(OBJECT, cs.CONFIDENCE_OBJECT_LITERAL)
                            bind_target(inner, rest)
            return

        element = element_type(source.type_expr)
        element_inferred = (
            InferredType(element, source.confidence) if element is not None else None
        )
        for member in au.named_children(pattern):
            if member.type == cs.TS_REST_PATTERN:
                if inner := au.first_named_child(member):
                    bind_target(inner, source if element is not None else None)
                continue
            bind_target(member, element_inferred)

    def _refine_call_graph(
        self, type_map: TypeMap, typer: ExpressionTyper, graph: CallGraphResult
    ) -> None:
        for site in graph.call_sites:
            info = graph.functions.get(site.callee_name)
            if info is None:
                continue
            args = au.call_arguments(site.node)
            for position, param in enumerate(info.params):
                if param.is_rest or position >= len(args):
                    break
                if param.name is None or args[position].type == cs.TS_SPREAD_ELEMENT:
                    continue
                argument = site.argument_types[position] or typer.infer(args[position])
                if assign(type_map, param.name, argument):
                    logger.debug(
                        ls.RESOLVER_PARAM_REFINED.format(
                            param=param.name,
                            function=info.name,
                            type_name=argument.type_name,
                            confidence=argument.confidence,
                        )
                    )

        for info in graph.functions.values():
            if (
                info.return_type is None
                or info.return_type.confidence < cs.CONFIDENCE_RESOLVED_FUNCTION
            ):
                typer.function_return(info)
            typer.write_signature(info)

    def _fold_usage(self, type_map: TypeMap, usage_map: UsageMap) -> None:
        for name, tags in sorted(usage_map.items()):
            current = type_map.get(name)
            if (
                current is not None
                and current.confidence >= cs.CONFIDENCE_USAGE_CEILING
            ):
                continue
            if (candidate := self._usage_candidate(tags, current)) is None:
                continue
            if assign(type_map, name, candidate):
                logger.debug(
                    ls.RESOLVER_USAGE_FOLDED.format(
                        name=name, type_name=candidate.type_name
                    )
                )

    @staticmethod
    def _usage_candidate(
        tags: set[UsageTag], current: InferredType | None
    ) -> InferredType | None:
        if UsageTag.ARRAY in tags:
            return InferredType(array_of(ANY), cs.CONFIDENCE_USAGE)
        if UsageTag.BOOLEAN in tags:
            return InferredType(BOOLEAN, cs.CONFIDENCE_USAGE)

        definite = tags & {UsageTag.STRING, UsageTag.NUMBER}
        if len(definite) == 1:
            tag = next(iter(definite))
            expr = NUMBER if tag is UsageTag.NUMBER else STRING
            return InferredType(expr, cs.CONFIDENCE_USAGE)

        if not definite and UsageTag.NUMBER_OR_STRING not in tags:
            return None
        if UsageTag.NUMBER in tags or (
            current is not None and current.type_expr == NUMBER
        ):
            return InferredType(NUMBER, cs.CONFIDENCE_USAGE_NUMERIC_PLUS)
        return InferredType(
            UnionType((NUMBER, STRING)), cs.CONFIDENCE_USAGE_AMBIGUOUS
        )

