from __future__ import annotations

from tree_sitter import Node

from ..types_defs import NodeHandler, Visit


class NodeVisitor:
    def __init__(
        self,
        handlers: dict[str, NodeHandler],
        boundaries: frozenset[str] = frozenset(),
    ) -> None:
        self.handlers = handlers
        self.boundaries = boundaries

    def walk(self, root: Node) -> None:
        stack: list[Node] = [root]

        while stack:
            current = stack.pop()

            if current is not root and current.type in self.boundaries:
                continue

            handler = self.handlers.get(current.type)
            if handler is not None and handler(current) is Visit.SKIP:
                continue

            stack.extend(reversed(current.children))
