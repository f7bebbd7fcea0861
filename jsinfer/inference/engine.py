from __future__ import annotations

from loguru import logger
from tree_sitter import Node, Tree

from .. import exceptions as ex
from .. import logs as ls
from ..config import InferenceConfig, settings
from ..parser_loader import parse_source
from ..types_defs import TypeMap
from .call_graph import CallGraphBuilder
from .context import InferenceContext
from .type_algebra import serialize_type_map
from .type_collector import TypeCollector
from .type_resolver import TypeResolver
from .usage_analyzer import UsageAnalyzer


def _root_of(tree_or_root: Tree | Node) -> Node:
    if isinstance(tree_or_root, Tree):
        return tree_or_root.root_node
    if isinstance(tree_or_root, Node):
        return tree_or_root
    raise TypeError(ex.INVALID_TREE.format(kind=type(tree_or_root).__name__))


class TypeInferenceEngine:
    def __init__(self, config: InferenceConfig | None = None) -> None:
        self.config = config or settings.resolve_config()

    def infer(self, tree_or_root: Tree | Node) -> TypeMap:
        root = _root_of(tree_or_root)
        context = InferenceContext(self.config)
        logger.debug(
            ls.ENGINE_START.format(
                max_depth=self.config.max_depth, max_time=self.config.max_time
            )
        )

        type_map = TypeCollector().collect(root)
        graph = CallGraphBuilder().build(root, type_map)
        analyzer = UsageAnalyzer()
        resolver = TypeResolver(root, context)

        previous = serialize_type_map(type_map)
        converged = False
        for round_number in range(1, self.config.max_iterations + 1):
            logger.debug(
                ls.ENGINE_ROUND.format(round=round_number, entries=len(type_map))
            )
            usage_map = analyzer.analyze(root, type_map)
            resolver.resolve(type_map, usage_map, graph)

            current = serialize_type_map(type_map)
            if current == previous:
                converged = True
                logger.info(ls.ENGINE_FIXPOINT.format(rounds=round_number))
                break
            previous = current
            if context.deadline_passed():
                break

        if not converged:
            logger.info(
                ls.ENGINE_ITERATION_CAP.format(rounds=self.config.max_iterations)
            )
        logger.debug(
            ls.ENGINE_DONE.format(count=len(type_map), elapsed=context.elapsed_ms())
        )
        return type_map


def infer_types(source: str | bytes, config: InferenceConfig | None = None) -> TypeMap:
    return TypeInferenceEngine(config).infer(parse_source(source))
