from collections.abc import Callable

import pytest
from tree_sitter import Node

from jsinfer import constants as cs
from jsinfer.inference.type_collector import TypeCollector


@pytest.fixture
def collect(parse: Callable[[str], Node]) -> Callable[[str], dict]:
    def _collect(code: str) -> dict:
        return TypeCollector().collect(parse(code))

    return _collect


class TestLiteralSeeds:
    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ('const s = "hi";', "string"),
            ("const s = `hello ${name}`;", "string"),
            ("const n = 42;", "number"),
            ("const b = true;", "boolean"),
            ("const z = null;", "null"),
            ("const u = undefined;", "undefined"),
            ("const r = /ab+c/gi;", "RegExp"),
        ],
    )
    def test_literal_is_certain(
        self, collect: Callable[[str], dict], code: str, expected: str
    ) -> None:
        type_map = collect(code)
        name = next(iter(type_map))
        assert type_map[name].type_name == expected
        assert type_map[name].confidence == cs.CONFIDENCE_CERTAIN

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("const t = typeof x;", "string"),
            ("const t = !x;", "boolean"),
            ("const t = void 0;", "undefined"),
            ("const t = delete obj.key;", "boolean"),
            ("const t = -x;", "number"),
            ("const t = ~x;", "number"),
        ],
    )
    def test_unary_operators(
        self, collect: Callable[[str], dict], code: str, expected: str
    ) -> None:
        type_map = collect(code)
        assert type_map["t"].type_name == expected
        assert type_map["t"].confidence == cs.CONFIDENCE_CERTAIN


class TestStructuralSeeds:
    def test_homogeneous_array(self, collect: Callable[[str], dict]) -> None:
        type_map = collect("const a = [1, 2, 3];")
        assert type_map["a"].type_name == "number[]"
        assert type_map["a"].confidence >= cs.CONFIDENCE_ARRAY_HOMOGENEOUS

    def test_mixed_array(self, collect: Callable[[str], dict]) -> None:
        type_map = collect('const a = [1, "two", true];')
        assert type_map["a"].type_name == "any[]"

    def test_empty_array(self, collect: Callable[[str], dict]) -> None:
        type_map = collect("const a = [];")
        assert type_map["a"].type_name == "any[]"
        assert type_map["a"].confidence == pytest.approx(cs.CONFIDENCE_ARRAY_EMPTY)

    def test_spread_of_unresolved_name_is_mixed(
        self, collect: Callable[[str], dict]
    ) -> None:
        type_map = collect('const a = ["x"]; const b = [...a, "y"];')
        assert type_map["b"].type_name == "any[]"

    def test_object_shape(self, collect: Callable[[str], dict]) -> None:
        type_map = collect('const o = { a: 1, "b": "x", nested: { c: true } };')
        inferred = type_map["o"]
        assert inferred.type_name == "object"
        assert inferred.confidence == pytest.approx(cs.CONFIDENCE_OBJECT_LITERAL)
        assert inferred.properties is not None
        assert inferred.properties["a"].type_name == "number"
        assert inferred.properties["b"].type_name == "string"
        nested = inferred.properties["nested"].properties
        assert nested is not None
        assert nested["c"].type_name == "boolean"

    def test_function_literal_placeholder(self, collect: Callable[[str], dict]) -> None:
        type_map = collect("const f = (a) => a;")
        assert type_map["f"].type_name == "Function"
        assert type_map["f"].confidence == pytest.approx(
            cs.CONFIDENCE_FUNCTION_LITERAL
        )

    def test_named_function_placeholder(self, collect: Callable[[str], dict]) -> None:
        type_map = collect("function f(a, b) { return a; }")
        assert type_map["f"].type_name == "(...any[]) => any"
        assert type_map["a"].confidence == cs.CONFIDENCE_FLOOR
        assert type_map["b"].type_name == "any"


class TestKnownCalls:
    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ('const n = parseInt("42");', "number"),
            ("const s = String(1);", "string"),
            ("const b = Boolean(1);", "boolean"),
            ("const k = Object.keys(o);", "string[]"),
            ("const e = Object.entries(o);", "any[][]"),
            ("const v = Array.isArray(o);", "boolean"),
            ("const m = Math.max(1, 2);", "number"),
            ("const j = JSON.stringify(o);", "string"),
            ("const p = Promise.resolve(1);", "Promise<number>"),
            ("const d = new Date();", "Date"),
            ("const m = new Map();", "Map<any, any>"),
            ("const s = new Set();", "Set<any>"),
            ("const w = new Widget();", "Widget"),
        ],
    )
    def test_known_table(
        self, collect: Callable[[str], dict], code: str, expected: str
    ) -> None:
        type_map = collect(code)
        name = next(iter(type_map))
        assert type_map[name].type_name == expected

    def test_unknown_call_is_low_confidence(
        self, collect: Callable[[str], dict]
    ) -> None:
        type_map = collect("const x = mystery();")
        assert type_map["x"].type_name == "any"
        assert 0 < type_map["x"].confidence <= cs.CONFIDENCE_UNKNOWN_CALL

    def test_promise_constructor_detects_resolve(
        self, collect: Callable[[str], dict]
    ) -> None:
        type_map = collect("const p = new Promise(r => r(42));")
        assert type_map["p"].type_name == "Promise<number>"
        assert type_map["p"].confidence >= cs.CONFIDENCE_PROMISE_MIN

    def test_promise_constructor_without_executor(
        self, collect: Callable[[str], dict]
    ) -> None:
        type_map = collect("const p = new Promise(executor);")
        assert type_map["p"].type_name == "Promise<any>"
        assert type_map["p"].confidence == pytest.approx(
            cs.CONFIDENCE_PROMISE_FALLBACK
        )


class TestParameterSeeds:
    def test_default_parameter(self, collect: Callable[[str], dict]) -> None:
        type_map = collect('function greet(name = "Guest", items = []) {}')
        assert type_map["name"].type_name == "string"
        assert type_map["name"].confidence == cs.CONFIDENCE_CERTAIN
        assert type_map["items"].type_name == "any[]"

    def test_rest_parameter(self, collect: Callable[[str], dict]) -> None:
        type_map = collect("function sum(...nums) {}")
        assert type_map["nums"].type_name == "any[]"
        assert type_map["nums"].confidence == pytest.approx(cs.CONFIDENCE_REST_PARAM)

    def test_arrow_single_parameter(self, collect: Callable[[str], dict]) -> None:
        type_map = collect("const f = x => x;")
        assert type_map["x"].confidence == cs.CONFIDENCE_FLOOR

    def test_destructured_names_get_floor_entries(
        self, collect: Callable[[str], dict]
    ) -> None:
        type_map = collect(
            "const { a, b: renamed, c = 1 } = obj; const [first, ...rest] = list;"
        )
        for name in ("a", "renamed", "c", "first", "rest"):
            assert name in type_map
            assert type_map[name].confidence == cs.CONFIDENCE_FLOOR

    def test_uninitialized_binding_gets_floor(
        self, collect: Callable[[str], dict]
    ) -> None:
        type_map = collect("let later;")
        assert type_map["later"].type_name == "any"
        assert type_map["later"].confidence == cs.CONFIDENCE_FLOOR
