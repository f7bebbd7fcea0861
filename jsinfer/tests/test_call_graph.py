from collections.abc import Callable

import pytest
from tree_sitter import Node

from jsinfer import constants as cs
from jsinfer.inference.call_graph import CallGraphBuilder
from jsinfer.models import CallGraphResult


@pytest.fixture
def build(parse: Callable[[str], Node]) -> Callable[[str], CallGraphResult]:
    def _build(code: str) -> CallGraphResult:
        return CallGraphBuilder().build(parse(code))

    return _build


class TestFunctionDiscovery:
    def test_declarations_and_bound_literals(
        self, build: Callable[[str], CallGraphResult]
    ) -> None:
        graph = build(
            """
            function add(a, b) { return a + b; }
            const double = (x) => x * 2;
            const shout = function (text) { return text; };
            """
        )
        assert set(graph.functions) == {"add", "double", "shout"}
        assert graph.functions["add"].param_names == ["a", "b"]
        assert graph.functions["double"].param_names == ["x"]
        assert graph.functions["shout"].param_names == ["text"]

    def test_anonymous_callbacks_are_not_registered(
        self, build: Callable[[str], CallGraphResult]
    ) -> None:
        graph = build("[1, 2].map(n => n + 1);")
        assert graph.functions == {}

    def test_async_flag(self, build: Callable[[str], CallGraphResult]) -> None:
        graph = build(
            """
            async function load() { return 1; }
            const save = async () => 2;
            function plain() {}
            """
        )
        assert graph.functions["load"].is_async
        assert graph.functions["save"].is_async
        assert not graph.functions["plain"].is_async

    def test_first_declaration_wins(
        self, build: Callable[[str], CallGraphResult]
    ) -> None:
        graph = build(
            """
            function dup(a) { return a; }
            function dup(a, b, c) { return c; }
            """
        )
        assert graph.functions["dup"].param_names == ["a"]

    def test_parameter_shapes(self, build: Callable[[str], CallGraphResult]) -> None:
        graph = build("function f(a, b = 1, { c }, ...rest) {}")
        params = graph.functions["f"].params
        assert [param.name for param in params] == ["a", "b", None, "rest"]
        assert params[1].default is not None
        assert params[2].pattern is not None
        assert params[3].is_rest


class TestCallSites:
    def test_literal_arguments_are_snapshotted(
        self, build: Callable[[str], CallGraphResult]
    ) -> None:
        graph = build('function f(a, b, c) {}\nf(5, "x", value);')
        (site,) = graph.call_sites
        assert site.callee_name == "f"
        assert site.caller is None
        number, text, unknown = site.argument_types
        assert number is not None and number.type_name == "number"
        assert number.confidence == cs.CONFIDENCE_CERTAIN
        assert text is not None and text.type_name == "string"
        assert unknown is None

    def test_member_calls_are_not_call_sites(
        self, build: Callable[[str], CallGraphResult]
    ) -> None:
        graph = build("console.log(1); obj.method(2);")
        assert graph.call_sites == []

    def test_unknown_callees_are_recorded_without_edges(
        self, build: Callable[[str], CallGraphResult]
    ) -> None:
        graph = build("function outer() { helper(1); }")
        assert [site.callee_name for site in graph.call_sites] == ["helper"]
        assert graph.call_sites[0].caller == "outer"
        assert graph.functions["outer"].callees == set()


class TestEdges:
    def test_caller_and_callee_edges(
        self, build: Callable[[str], CallGraphResult]
    ) -> None:
        graph = build(
            """
            function main() { return helper(2); }
            function helper(n) { return n * 2; }
            """
        )
        assert graph.functions["main"].callees == {"helper"}
        assert graph.functions["helper"].callers == {"main"}
        assert graph.functions["helper"].callees == set()

    def test_recursion_is_a_self_edge(
        self, build: Callable[[str], CallGraphResult]
    ) -> None:
        graph = build("function fact(n) { return n <= 1 ? 1 : n * fact(n - 1); }")
        assert graph.functions["fact"].callees == {"fact"}
        assert graph.functions["fact"].callers == {"fact"}

    def test_calls_from_nested_callbacks_use_enclosing_named_function(
        self, build: Callable[[str], CallGraphResult]
    ) -> None:
        graph = build(
            """
            function fmt(x) { return String(x); }
            function render(items) { return items.map(item => fmt(item)); }
            """
        )
        assert graph.functions["fmt"].callers == {"render"}

    def test_top_level_calls_have_no_caller(
        self, build: Callable[[str], CallGraphResult]
    ) -> None:
        graph = build("function f() {}\nf();")
        assert graph.call_sites[0].caller is None
        assert graph.functions["f"].callers == set()
