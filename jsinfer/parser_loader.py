import importlib
from functools import lru_cache

from loguru import logger
from tree_sitter import Language, Parser, Tree

from . import constants as cs
from . import exceptions as ex
from . import logs as ls
from .types_defs import LanguageImport, LanguageLoader

JS_IMPORT = LanguageImport(
    cs.SupportedLanguage.JS, cs.TreeSitterModule.JS, cs.QUERY_LANGUAGE
)


def _try_import_language(module_path: str, attr_name: str) -> LanguageLoader:
    try:
        logger.debug(ls.IMPORTING_MODULE.format(module=module_path))
        module = importlib.import_module(module_path)
        loader: LanguageLoader = getattr(module, attr_name)
        return loader
    except ImportError:
        return None


@lru_cache(maxsize=1)
def load_parser() -> Parser:
    lang_lib = _try_import_language(JS_IMPORT.module_path, JS_IMPORT.attr_name)
    if not lang_lib:
        logger.debug(ls.LIB_NOT_AVAILABLE.format(lang=JS_IMPORT.lang_key))
        raise RuntimeError(ex.JS_GRAMMAR_UNAVAILABLE)

    try:
        language = Language(lang_lib())
        parser = Parser(language)
    except Exception as e:
        logger.warning(ls.GRAMMAR_LOAD_FAILED.format(lang=JS_IMPORT.lang_key, error=e))
        raise RuntimeError(ex.JS_GRAMMAR_UNAVAILABLE) from e

    logger.success(ls.GRAMMAR_LOADED.format(lang=JS_IMPORT.lang_key))
    return parser


def parse_source(code: str | bytes) -> Tree:
    source = code.encode(cs.ENCODING_UTF8) if isinstance(code, str) else code
    return load_parser().parse(source)
