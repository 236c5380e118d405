"""Parsed trees with stable per-node identities.

Each parse gets a fresh generation number and every node in it a pre-order
index, assigned once when the tree is wrapped. ``NodeId(generation, index)``
is hashable, ordered and serialisable, unlike the provider's own node ids
which are memory addresses.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, NamedTuple

from priv8.treesitter.privacy import PrivacyNode
from priv8.treesitter.traversal import iter_nodes

if TYPE_CHECKING:
    from tree_sitter import Node, Tree

_generations = itertools.count(1)


def next_generation() -> int:
    return next(_generations)


class NodeId(NamedTuple):
    """Identity of a node within one parse. Meaningless across parses."""

    generation: int
    index: int

    def __str__(self) -> str:
        return f"{self.generation}:{self.index}"


@dataclass
class ParsedTree:
    """A syntax tree together with the source bytes it was parsed from.

    Holding ``source`` here keeps the buffer alive for as long as any node
    or annotation drawn from this tree.
    """

    tree: Tree
    source: bytes
    grammar: str
    generation: int = field(default_factory=next_generation)
    error_count: int = field(default=0, init=False)
    _index: dict[int, int] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        for position, node in enumerate(iter_nodes(self.tree.root_node)):
            self._index[node.id] = position
            if node.type == "ERROR" or node.is_missing:
                self.error_count += 1

    @property
    def root_node(self) -> Node:
        return self.tree.root_node

    @property
    def total_nodes(self) -> int:
        return len(self._index)

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0

    def __contains__(self, node: Any) -> bool:
        return getattr(node, "id", None) in self._index

    def node_id(self, node: Node) -> NodeId:
        """Identity of ``node``.

        Raises:
            ValueError: If ``node`` does not belong to this tree.
        """
        try:
            return NodeId(self.generation, self._index[node.id])
        except KeyError:
            raise ValueError(
                f"Node {node.type!r} does not belong to parse generation {self.generation}"
            ) from None

    def annotate(self, node: Node) -> PrivacyNode:
        """Wrap ``node`` in a PrivacyNode carrying this tree's identity for it."""
        return PrivacyNode(node=node, node_id=self.node_id(node))
