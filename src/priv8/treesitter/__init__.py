"""Tree-sitter registry, query, traversal and annotation engine."""

from priv8.treesitter.arena import NodeId, ParsedTree
from priv8.treesitter.privacy import (
    DEFAULT_SENSITIVITY,
    ContextValue,
    PrivacyNode,
    new_privacy_node,
)
from priv8.treesitter.query import QueryEngine, QueryMatch
from priv8.treesitter.registry import GrammarRegistry
from priv8.treesitter.text import UNKNOWN_POSITION, get_position_text, get_text, node_to_string
from priv8.treesitter.traversal import TreeWalker, iter_nodes

__all__ = [
    "ContextValue",
    "DEFAULT_SENSITIVITY",
    "GrammarRegistry",
    "NodeId",
    "ParsedTree",
    "PrivacyNode",
    "QueryEngine",
    "QueryMatch",
    "TreeWalker",
    "UNKNOWN_POSITION",
    "get_position_text",
    "get_text",
    "iter_nodes",
    "new_privacy_node",
    "node_to_string",
]
