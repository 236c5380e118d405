"""User-facing console output for the CLI.

Usage::

    from priv8.core.console import status

    status("Parsed 12 nodes")
    status("Processing complete!", style="success")
    status("File 'x.sh' does not exist", style="error")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

_console = Console(stderr=True)

_STYLES = {
    "success": "green",
    "error": "red",
    "warning": "yellow",
    "info": "",
}


def _get_logger() -> BoundLogger:
    """Get logger lazily to respect runtime config."""
    from priv8.core.logging import get_logger

    return get_logger("console")


def status(message: str, *, style: str = "info", indent: int = 0) -> None:
    """Print a styled status message to stderr."""
    color = _STYLES.get(style, "")
    text = " " * indent + escape(message)
    if color:
        text = f"[{color}]{text}[/{color}]"
    _console.print(text, highlight=False, soft_wrap=True)

    _get_logger().debug("status", message=message, style=style)


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Return "1 node" / "3 nodes" style counts."""
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"
