"""Privacy annotations attached to syntax nodes.

A PrivacyNode marks one node as a finding. The policy layer decides the
issue type, sensitivity and replacement; nothing here validates them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from priv8.treesitter.text import get_position_text, get_text

if TYPE_CHECKING:
    from tree_sitter import Node

    from priv8.treesitter.arena import NodeId, ParsedTree

ContextValue = str | int | bool

# Conventional 0-10 scale; 5 is "medium".
DEFAULT_SENSITIVITY = 5


def _check_context_entry(key: object, value: object) -> None:
    if not isinstance(key, str):
        raise TypeError(f"Context key must be str, got {type(key).__name__}")
    if not isinstance(value, (str, int, bool)):
        raise TypeError(
            f"Context value for {key!r} must be str, int or bool, got {type(value).__name__}"
        )


@dataclass(eq=False)
class PrivacyNode:
    """Privacy metadata for a single syntax node.

    The node is referenced, not copied: the tree it came from must outlive
    the annotation.
    """

    node: Node | None
    issue_type: str = ""
    sensitivity: int = DEFAULT_SENSITIVITY
    replacement_value: str = ""  # "" = no replacement decided yet
    context: dict[str, ContextValue] = field(default_factory=dict)
    node_id: NodeId | None = None

    def __post_init__(self) -> None:
        for key, value in self.context.items():
            _check_context_entry(key, value)

    @property
    def id(self) -> NodeId | None:
        """Disambiguates annotations within one in-memory parse.

        Only valid for the lifetime of the tree in this process. It is not a
        content hash and must not be compared across parses or persisted as a
        fingerprint. None when the annotation was created without its tree.
        """
        return self.node_id

    def set_context(self, key: str, value: ContextValue) -> None:
        _check_context_entry(key, value)
        self.context[key] = value

    def get_text(self, source: bytes) -> str:
        return get_text(self.node, source)

    def get_position_text(self) -> str:
        return get_position_text(self.node)

    def to_dict(self, source: bytes | None = None) -> dict[str, Any]:
        """JSON-friendly view of the finding."""
        result: dict[str, Any] = {
            "id": str(self.node_id) if self.node_id is not None else None,
            "issue_type": self.issue_type,
            "sensitivity": self.sensitivity,
            "replacement_value": self.replacement_value,
            "position": self.get_position_text(),
            "node_type": self.node.type if self.node is not None else None,
            "byte_range": (
                [self.node.start_byte, self.node.end_byte] if self.node is not None else None
            ),
            "context": dict(self.context),
        }
        if source is not None:
            result["text"] = self.get_text(source)
        return result


def new_privacy_node(node: Node | None, tree: ParsedTree | None = None) -> PrivacyNode:
    """Create an annotation with default sensitivity and no replacement.

    Pass the owning ``tree`` to give the annotation an identity.
    """
    if tree is not None and node is not None:
        return tree.annotate(node)
    return PrivacyNode(node=node)
