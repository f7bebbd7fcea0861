from __future__ import annotations

from loguru import logger
from tree_sitter import Node

from .. import constants as cs
from .. import logs as ls
from ..models import CallGraphResult, CallSite, FunctionInfo, InferredType
from ..types_defs import NodeHandler, TypeMap
from . import ast_utils as au
from .structural import StructuralTyper
from .visitor import NodeVisitor


class CallGraphBuilder:
    def build(self, root: Node, type_map: TypeMap | None = None) -> CallGraphResult:
        result = CallGraphResult()
        self._collect_functions(root, result)
        self._collect_call_sites(root, result, StructuralTyper(type_map))
        logger.debug(
            ls.CALL_GRAPH_DONE.format(
                functions=len(result.functions), calls=len(result.call_sites)
            )
        )
        return result

    def _collect_functions(self, root: Node, result: CallGraphResult) -> None:
        def on_function(node: Node) -> None:
            name = au.declared_function_name(node)
            if name is None or name in result.functions:
                return
            params = au.function_params(node)
            result.functions[name] = FunctionInfo(
                name=name,
                params=params,
                node=node,
                is_async=au.is_async(node),
            )
            logger.debug(ls.CALL_GRAPH_FUNCTION.format(name=name, count=len(params)))

        handlers: dict[str, NodeHandler] = {
            function_type: on_function
            for function_type in cs.FUNCTION_LITERAL_NODES | cs.NAMED_FUNCTION_NODES
        }
        NodeVisitor(handlers).walk(root)

    def _collect_call_sites(
        self, root: Node, result: CallGraphResult, typer: StructuralTyper
    ) -> None:
        def guess(argument: Node) -> InferredType | None:
            if au.unwrap_parens(argument).type in cs.LITERAL_NODES:
                return typer.infer(argument)
            return None

        def on_call(node: Node) -> None:
            callee = au.callee_name(node)
            if callee is None:
                return
            caller = au.enclosing_function_name(node)
            result.call_sites.append(
                CallSite(
                    callee_name=callee,
                    argument_types=tuple(
                        guess(argument) for argument in au.call_arguments(node)
                    ),
                    node=node,
                    caller=caller,
                )
            )
            logger.debug(ls.CALL_GRAPH_CALL_SITE.format(callee=callee, caller=caller))

            if caller is None or callee not in result.functions:
                return
            if caller in result.functions:
                result.functions[caller].callees.add(callee)
            result.functions[callee].callers.add(caller)

        NodeVisitor({cs.TS_CALL_EXPRESSION: on_call}).walk(root)
