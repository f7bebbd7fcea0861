from tree_sitter import Parser

from jsinfer import constants as cs
from jsinfer.parser_loader import _try_import_language, load_parser, parse_source


class TestParserLoader:
    def test_missing_module_returns_none(self) -> None:
        assert _try_import_language("tree_sitter_no_such_grammar", "language") is None

    def test_parser_is_cached(self, js_parser: Parser) -> None:
        assert load_parser() is js_parser

    def test_parse_source_accepts_str_and_bytes(self, js_parser: Parser) -> None:
        from_str = parse_source("const n = 1;")
        from_bytes = parse_source(b"const n = 1;")
        assert from_str.root_node.type == cs.TS_PROGRAM
        assert from_str.root_node.text == from_bytes.root_node.text
