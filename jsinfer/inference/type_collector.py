from __future__ import annotations

from loguru import logger
from tree_sitter import Node

from .. import constants as cs
from .. import logs as ls
from ..models import InferredType
from ..types_defs import NodeHandler, TypeMap
from . import ast_utils as au
from .structural import StructuralTyper
from .type_algebra import ANY, array_of, assign, function_of
from .visitor import NodeVisitor

FLOOR = InferredType(ANY, cs.CONFIDENCE_FLOOR)
REST_FLOOR = InferredType(array_of(ANY), cs.CONFIDENCE_REST_PARAM)
FUNCTION_PLACEHOLDER = InferredType(
    function_of([], ANY, rest=array_of(ANY)), cs.CONFIDENCE_FUNCTION_DECLARATION
)


class TypeCollector:
    def collect(self, root: Node) -> TypeMap:
        type_map: TypeMap = {}
        typer = StructuralTyper(type_map)

        def seed(name: str | None, inferred: InferredType) -> None:
            if name is None:
                return
            if assign(type_map, name, inferred):
                logger.debug(
                    ls.COLLECTOR_SEEDED.format(
                        name=name,
                        type_name=inferred.type_name,
                        confidence=inferred.confidence,
                    )
                )

        def seed_pattern(pattern: Node | None) -> None:
            if pattern is None:
                return
            for binding in au.pattern_bindings(pattern):
                seed(binding.name, FLOOR)

        def on_declarator(node: Node) -> None:
            name_node = node.child_by_field_name(cs.FIELD_NAME)
            value_node = node.child_by_field_name(cs.FIELD_VALUE)
            if name_node is None:
                return
            if name_node.type in cs.DESTRUCTURING_PATTERN_NODES:
                seed_pattern(name_node)
                return
            name = au.safe_decode_text(name_node)
            seed(name, FLOOR)
            if value_node is not None:
                seed(name, typer.infer(value_node))

        def on_function(node: Node) -> None:
            if node.type in cs.NAMED_FUNCTION_NODES:
                seed(au.declared_function_name(node), FUNCTION_PLACEHOLDER)
            for param in au.function_params(node):
                if param.is_rest:
                    seed(param.name, REST_FLOOR)
                    seed_pattern(param.pattern)
                    continue
                seed(param.name, FLOOR)
                seed_pattern(param.pattern)
                if param.default is not None:
                    seed(param.name, typer.infer(param.default))

        handlers: dict[str, NodeHandler] = {cs.TS_VARIABLE_DECLARATOR: on_declarator}
        for function_type in cs.FUNCTION_LITERAL_NODES | cs.NAMED_FUNCTION_NODES:
            handlers[function_type] = on_function
        handlers[cs.TS_METHOD_DEFINITION] = on_function

        NodeVisitor(handlers).walk(root)
        logger.debug(ls.COLLECTOR_DONE.format(count=len(type_map)))
        return type_map
