from __future__ import annotations

from collections.abc import Callable

import pytest
from loguru import logger
from tree_sitter import Node, Parser

from jsinfer.config import InferenceConfig
from jsinfer.inference.engine import TypeInferenceEngine
from jsinfer.parser_loader import load_parser
from jsinfer.types_defs import TypeMap

logger.remove()

UNBOUNDED = InferenceConfig(max_time=0)


@pytest.fixture(scope="module")
def js_parser() -> Parser:
    try:
        return load_parser()
    except RuntimeError:
        pytest.skip("JavaScript parser not available")


@pytest.fixture
def parse(js_parser: Parser) -> Callable[[str], Node]:
    def _parse(code: str) -> Node:
        return js_parser.parse(code.encode()).root_node

    return _parse


@pytest.fixture
def infer(parse: Callable[[str], Node]) -> Callable[[str], TypeMap]:
    def _infer(code: str) -> TypeMap:
        return TypeInferenceEngine(UNBOUNDED).infer(parse(code))

    return _infer
