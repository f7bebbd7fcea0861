from collections.abc import Callable
from typing import TypeAlias

import pytest
from loguru import logger
from tree_sitter import Node, Parser

from jsinfer import constants as cs
from jsinfer.config import InferenceConfig
from jsinfer.inference.call_graph import CallGraphBuilder
from jsinfer.inference.context import InferenceContext
from jsinfer.inference.engine import TypeInferenceEngine, infer_types
from jsinfer.inference.type_algebra import serialize_type_map
from jsinfer.inference.type_resolver import TypeResolver
from jsinfer.inference.usage_analyzer import UsageAnalyzer
from jsinfer.types_defs import TypeMap

Infer: TypeAlias = Callable[[str], TypeMap]

PROGRAM = """
const s = "hi";
const a = [1, 2, 3];
const flag = true;
const r = flag ? "a" : 1;
function f(x) { return x * 2; }
f(5);
function add(p, q) { return p + q; }
const total = add(1, 2);
const doubled = a.map(n => n * 2);
async function main() {
  const pending = new Promise(resolve => resolve(42));
  const value = await pending;
  return value;
}
"""


class TestScenarios:
    def test_string_literal(self, infer: Infer) -> None:
        type_map = infer('const s = "hi";')
        assert type_map["s"].type_name == "string"
        assert type_map["s"].confidence == cs.CONFIDENCE_CERTAIN

    def test_homogeneous_array(self, infer: Infer) -> None:
        type_map = infer("const a = [1, 2, 3];")
        assert type_map["a"].type_name == "number[]"
        assert type_map["a"].confidence >= cs.CONFIDENCE_ARRAY_HOMOGENEOUS

    def test_call_site_refines_parameter(self, infer: Infer) -> None:
        type_map = infer("function f(x) { return x * 2; }\nf(5);")
        assert type_map["x"].type_name == "number"
        assert type_map["f"].type_name == "(number) => number"

    def test_mixed_ternary(self, infer: Infer) -> None:
        type_map = infer('const r = flag ? "a" : 1;')
        assert type_map["r"].type_name == "string | number"
        assert type_map["r"].confidence >= cs.CONFIDENCE_UNION_MIN

    def test_mutual_recursion_completes(self, infer: Infer) -> None:
        type_map = infer(
            "function a(x) { return b(x); }\nfunction b(x) { return a(x); }"
        )
        assert "a" in type_map
        assert "b" in type_map

    def test_promise_round_trip(self, infer: Infer) -> None:
        type_map = infer(
            "async function main() {\n"
            "  const p = new Promise(r => r(42));\n"
            "  const v = await p;\n"
            "  return v;\n"
            "}"
        )
        assert type_map["p"].type_name == "Promise<number>"
        assert type_map["v"].type_name == "number"
        assert type_map["main"].type_name == "() => Promise<number>"

    def test_two_parameter_function_converges(self, infer: Infer) -> None:
        type_map = infer("function add(a, b) { return a + b; }\nadd(1, 2);")
        assert type_map["add"].type_name == "(number, number) => number"


class TestProperties:
    def test_deterministic(self, infer: Infer) -> None:
        first = serialize_type_map(infer(PROGRAM))
        second = serialize_type_map(infer(PROGRAM))
        assert first == second

    def test_confidence_bounds(self, infer: Infer) -> None:
        type_map = infer(PROGRAM)
        assert all(0.0 <= t.confidence <= 1.0 for t in type_map.values())
        for literal in ("s", "flag"):
            assert type_map[literal].confidence == cs.CONFIDENCE_CERTAIN

    def test_every_declared_name_is_tracked(self, infer: Infer) -> None:
        type_map = infer(PROGRAM)
        for name in ("s", "a", "r", "f", "x", "add", "p", "q", "total", "n"):
            assert name in type_map

    def test_extra_round_after_convergence_is_a_no_op(
        self, parse: Callable[[str], Node]
    ) -> None:
        root = parse(PROGRAM)
        config = InferenceConfig(max_time=0, max_iterations=10)
        type_map = TypeInferenceEngine(config).infer(root)
        converged = serialize_type_map(type_map)

        graph = CallGraphBuilder().build(root, type_map)
        usage_map = UsageAnalyzer().analyze(root, type_map)
        TypeResolver(root, InferenceContext(config)).resolve(
            type_map, usage_map, graph
        )
        assert serialize_type_map(type_map) == converged

    def test_single_iteration_cap(self, parse: Callable[[str], Node]) -> None:
        root = parse("function add(a, b) { return a + b; }\nadd(1, 2);")
        config = InferenceConfig(max_time=0, max_iterations=1)
        type_map = TypeInferenceEngine(config).infer(root)
        assert type_map["add"].type_name == "(number, number) => any"


class TestInputs:
    def test_accepts_tree(self, js_parser: Parser) -> None:
        tree = js_parser.parse(b"const n = 1;")
        type_map = TypeInferenceEngine(InferenceConfig(max_time=0)).infer(tree)
        assert type_map["n"].type_name == "number"

    def test_infer_types_parses_source(self, js_parser: Parser) -> None:
        type_map = infer_types("const n = 1;", InferenceConfig(max_time=0))
        assert type_map["n"].type_name == "number"

    def test_empty_program(self, infer: Infer) -> None:
        assert infer("") == {}

    def test_syntax_errors_do_not_raise(self, infer: Infer) -> None:
        type_map = infer("const n = 1;\nconst = = ;")
        assert type_map["n"].type_name == "number"

    def test_long_concatenation_chain(self, infer: Infer) -> None:
        chain = " + ".join(['"a"'] * 1000)
        type_map = infer(f"const s = {chain};")
        assert type_map["s"].type_name == "string"

    def test_long_return_expression(self, infer: Infer) -> None:
        chain = " + ".join(["x"] * 1500)
        type_map = infer(f"function f(x) {{ return {chain}; }}\nconst r = f(1);")
        assert "f" in type_map
        assert "r" in type_map

    @pytest.mark.parametrize("bad_input", ["const n = 1;", None, 42])
    def test_rejects_non_tree_input(self, bad_input: object) -> None:
        engine = TypeInferenceEngine(InferenceConfig())
        with pytest.raises(TypeError):
            engine.infer(bad_input)  # type: ignore[arg-type]


class TestLogging:
    def test_reports_fixpoint(self, infer: Infer) -> None:
        messages: list[str] = []
        handler_id = logger.add(lambda m: messages.append(m.record["message"]))
        try:
            infer("const n = 1;")
        finally:
            logger.remove(handler_id)
        assert any("converged" in message for message in messages)
