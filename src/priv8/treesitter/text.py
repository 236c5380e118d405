"""Node text, position and debug rendering.

Byte offsets come from the parser, not from us, so every accessor here
treats a bad range as "no text" instead of failing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tree_sitter import Node

UNKNOWN_POSITION = "unknown position"

# Debug dump shows at most this many bytes of a node's text.
_PREVIEW_LIMIT = 40
_ELLIPSIS = b"..."


def node_bytes(node: Node | None, source: bytes) -> bytes | None:
    """Raw bytes spanned by ``node``, or None if the range is unusable."""
    if node is None:
        return None

    start = node.start_byte
    end = node.end_byte

    if start < 0 or end > len(source) or start > end:
        return None

    return source[start:end]


def get_text(node: Node | None, source: bytes) -> str:
    """Text content of ``node`` within ``source``.

    Returns "" for a missing node or an inverted / out-of-range span.
    Invalid UTF-8 is replaced rather than raised.
    """
    raw = node_bytes(node, source)
    if raw is None:
        return ""
    return raw.decode("utf-8", errors="replace")


def get_position_text(node: Node | None) -> str:
    """Render ``line R1:C1 to R2:C2`` with 1-based rows and columns."""
    if node is None:
        return UNKNOWN_POSITION

    start_row, start_col = node.start_point
    end_row, end_col = node.end_point
    return f"line {start_row + 1}:{start_col + 1} to {end_row + 1}:{end_col + 1}"


def _preview(raw: bytes) -> str:
    if len(raw) > _PREVIEW_LIMIT:
        raw = raw[: _PREVIEW_LIMIT - len(_ELLIPSIS)] + _ELLIPSIS
    return repr(raw.decode("utf-8", errors="replace"))


def node_to_string(node: Node | None, source: bytes | None = None, indent: str = "") -> str:
    """Debug dump of ``node`` and, recursively, its named children.

    Diagnostic only; the layout is not a stable format.
    """
    if node is None:
        return indent + "<nil>"

    start_row, start_col = node.start_point
    end_row, end_col = node.end_point

    lines = [
        f"{indent}Type: {node.type}",
        f"{indent}Range: ({start_row},{start_col}) - ({end_row},{end_col})",
    ]

    if source is not None:
        raw = node_bytes(node, source)
        if raw is not None:
            lines.append(f"{indent}Text: {_preview(raw)}")

    lines.append(f"{indent}Children: {node.child_count}")
    result = "\n".join(lines) + "\n"

    if node.child_count > 0:
        result += f"{indent}Named Children: {node.named_child_count}\n"
        for i, child in enumerate(node.named_children):
            if child is None:
                continue
            result += f"{indent}Named Child {i}:\n"
            result += node_to_string(child, source, indent + "  ")

    return result
