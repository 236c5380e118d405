"""Query execution over a (sub)tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tree_sitter import QueryCursor as _TSQueryCursor

from priv8.treesitter.registry import compile_query

if TYPE_CHECKING:
    from tree_sitter import Node, Query

    from priv8.treesitter.registry import GrammarRegistry

_ADHOC_QUERY_NAME = "<adhoc>"


@dataclass(frozen=True)
class QueryMatch:
    """One occurrence of a query pattern and the nodes it captured."""

    pattern_index: int
    captures: dict[str, list[Node]]

    def nodes(self, capture_name: str) -> list[Node]:
        return self.captures.get(capture_name, [])

    def byte_ranges(self) -> list[tuple[str, int, int]]:
        """(capture, start, end) for every captured node, in capture order."""
        return [
            (name, node.start_byte, node.end_byte)
            for name, nodes in self.captures.items()
            for node in nodes
        ]


def _run(query: Query, root: Node | None) -> list[QueryMatch]:
    if root is None:
        return []
    # The cursor starts at root, so only root's subtree is visited.
    cursor = _TSQueryCursor(query)
    return [
        QueryMatch(pattern_index=pattern_index, captures=dict(captures))
        for pattern_index, captures in cursor.matches(root)
    ]


class QueryEngine:
    """Runs registered (or ad-hoc) queries and returns ordered match sets.

    Matches keep the order the query cursor produces them in. Running the
    same query twice over an unchanged tree gives the same match set.
    """

    def __init__(self, registry: GrammarRegistry) -> None:
        self._registry = registry

    @property
    def registry(self) -> GrammarRegistry:
        return self._registry

    def execute_query(
        self, grammar_name: str, query_name: str, root: Node | None
    ) -> list[QueryMatch]:
        """Run a registered query starting at ``root``.

        Zero matches is an empty list, not an error.

        Raises:
            GrammarNotFoundError / QueryNotFoundError: If the query cannot be resolved.
        """
        query = self._registry.get_query(grammar_name, query_name)
        return _run(query, root)

    def execute_pattern(
        self, grammar_name: str, pattern: str, root: Node | None
    ) -> list[QueryMatch]:
        """Compile ``pattern`` without registering it and run it."""
        language = self._registry.get_grammar(grammar_name)
        query = compile_query(grammar_name, _ADHOC_QUERY_NAME, language, pattern)
        return _run(query, root)

    def captures(
        self,
        grammar_name: str,
        query_name: str,
        root: Node | None,
        capture_name: str,
    ) -> list[Node]:
        """Nodes captured as ``capture_name``, flattened in match order."""
        return [
            node
            for match in self.execute_query(grammar_name, query_name, root)
            for node in match.nodes(capture_name)
        ]
