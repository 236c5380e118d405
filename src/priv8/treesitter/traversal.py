"""Predicate-driven tree search.

Every search is a pre-order walk (parent before children, children
left-to-right over *all* children, anonymous tokens included), so result
order is reproducible for a given tree.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING

from priv8.treesitter.text import node_bytes

if TYPE_CHECKING:
    from tree_sitter import Node

NodePredicate = Callable[["Node"], bool]
TextPredicate = Callable[[str], bool]


def iter_nodes(root: Node | None) -> Iterator[Node]:
    """Yield ``root`` and all of its descendants in pre-order."""
    if root is None:
        return

    # Explicit stack; children pushed in reverse to pop left-to-right.
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        children = [child for child in node.children if child is not None]
        stack.extend(reversed(children))


class TreeWalker:
    """Find nodes by type, arbitrary predicate or text content.

    Usage::

        walker = TreeWalker()
        commands = walker.find_nodes_of_type(tree.root_node, "command")
        tokens = walker.find_nodes_containing_text(tree.root_node, source, "API_KEY")
    """

    def find_nodes_of_type(self, root: Node | None, node_type: str) -> list[Node]:
        """All nodes whose type equals ``node_type``."""
        return self.find_nodes_matching(root, lambda node: node.type == node_type)

    def find_nodes_matching(self, root: Node | None, predicate: NodePredicate) -> list[Node]:
        """All nodes for which ``predicate`` returns True."""
        return [node for node in iter_nodes(root) if predicate(node)]

    def find_nodes_by_text(
        self,
        root: Node | None,
        source: bytes,
        text_predicate: TextPredicate,
    ) -> list[Node]:
        """All nodes whose text satisfies ``text_predicate``.

        Nodes with a byte range that does not fit ``source`` never match.
        """

        def matches(node: Node) -> bool:
            raw = node_bytes(node, source)
            if raw is None:
                return False
            return text_predicate(raw.decode("utf-8", errors="replace"))

        return self.find_nodes_matching(root, matches)

    def find_nodes_containing_text(self, root: Node | None, source: bytes, text: str) -> list[Node]:
        """All nodes whose text contains ``text`` as a substring."""
        return self.find_nodes_by_text(root, source, lambda node_text: text in node_text)
