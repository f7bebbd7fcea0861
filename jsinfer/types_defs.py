from __future__ import annotations

from collections.abc import Callable
from enum import StrEnum
from typing import TYPE_CHECKING, NamedTuple, TypeAlias

from .constants import SupportedLanguage, UsageTag

if TYPE_CHECKING:
    from tree_sitter import Language, Node

    from .models import InferredType

ASTNode: TypeAlias = "Node"
LanguageLoader: TypeAlias = Callable[[], "Language"] | None

TypeMap: TypeAlias = dict[str, "InferredType"]
UsageMap: TypeAlias = dict[str, set[UsageTag]]
NodeHandler: TypeAlias = Callable[["Node"], "Visit | None"]


class Visit(StrEnum):
    CONTINUE = "continue"
    SKIP = "skip"


class LanguageImport(NamedTuple):
    lang_key: SupportedLanguage
    module_path: str
    attr_name: str


class ParamInfo(NamedTuple):
    name: str | None
    is_rest: bool
    default: ASTNode | None
    pattern: ASTNode | None


class BoundName(NamedTuple):
    name: str
    node: ASTNode
