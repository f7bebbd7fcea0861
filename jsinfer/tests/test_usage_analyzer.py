from collections.abc import Callable

import pytest
from tree_sitter import Node

from jsinfer.constants import UsageTag
from jsinfer.inference.type_collector import TypeCollector
from jsinfer.inference.usage_analyzer import UsageAnalyzer
from jsinfer.types_defs import UsageMap


@pytest.fixture
def usage(parse: Callable[[str], Node]) -> Callable[[str], UsageMap]:
    def _usage(code: str) -> UsageMap:
        root = parse(code)
        return UsageAnalyzer().analyze(root, TypeCollector().collect(root))

    return _usage


class TestOperatorEvidence:
    @pytest.mark.parametrize(
        ("body", "tag"),
        [
            ("return x * 2;", UsageTag.NUMBER),
            ("return x - 1;", UsageTag.NUMBER),
            ("return 2 ** x;", UsageTag.NUMBER),
            ("return x + 1;", UsageTag.NUMBER_OR_STRING),
            ("return (x + 1) * 2;", UsageTag.NUMBER),
            ("return x > 5;", UsageTag.NUMBER),
            ('return x === "a";', UsageTag.STRING),
            ("return x == true;", UsageTag.BOOLEAN),
        ],
    )
    def test_binary_usage(
        self, usage: Callable[[str], UsageMap], body: str, tag: UsageTag
    ) -> None:
        usage_map = usage(f"function f(x) {{ {body} }}")
        assert usage_map["x"] == {tag}

    def test_comparison_with_non_literal_is_not_evidence(
        self, usage: Callable[[str], UsageMap]
    ) -> None:
        usage_map = usage("function f(x, y) { return x === y; }")
        assert "x" not in usage_map
        assert "y" not in usage_map


class TestMemberEvidence:
    @pytest.mark.parametrize(
        ("body", "tag"),
        [
            ("return x.toUpperCase();", UsageTag.STRING),
            ('return x.split(",");', UsageTag.STRING),
            ("x.push(1);", UsageTag.ARRAY),
            ("return x.map(v => v);", UsageTag.ARRAY),
            ("return x[0];", UsageTag.ARRAY),
        ],
    )
    def test_member_usage(
        self, usage: Callable[[str], UsageMap], body: str, tag: UsageTag
    ) -> None:
        usage_map = usage(f"function f(x) {{ {body} }}")
        assert usage_map["x"] == {tag}

    def test_string_index_is_not_array_evidence(
        self, usage: Callable[[str], UsageMap]
    ) -> None:
        usage_map = usage('function f(x) { return x["key"]; }')
        assert "x" not in usage_map

    def test_unrelated_property_is_not_evidence(
        self, usage: Callable[[str], UsageMap]
    ) -> None:
        usage_map = usage("function f(x) { return x.whatever; }")
        assert "x" not in usage_map


class TestScope:
    def test_evidence_accumulates(self, usage: Callable[[str], UsageMap]) -> None:
        usage_map = usage("function f(x) { const a = x * 2; return x + 1; }")
        assert usage_map["x"] == {UsageTag.NUMBER, UsageTag.NUMBER_OR_STRING}

    def test_untracked_names_are_ignored(
        self, usage: Callable[[str], UsageMap]
    ) -> None:
        usage_map = usage("const y = external * 2;")
        assert "external" not in usage_map

    def test_binding_sites_are_not_usages(
        self, usage: Callable[[str], UsageMap]
    ) -> None:
        usage_map = usage("const total = 0;")
        assert usage_map == {}
