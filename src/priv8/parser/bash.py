"""Bash script parsing."""

from __future__ import annotations

from priv8.core.errors import ParseFailureError
from priv8.treesitter.arena import ParsedTree
from priv8.treesitter.grammars import load_grammar_module
from priv8.treesitter.registry import GrammarRegistry

BASH = "bash"


class BashParser:
    """Parses bash scripts with the tree-sitter-bash grammar.

    Loads the grammar into ``registry`` if it is not there yet, so a shared
    registry can carry bash queries alongside other grammars.
    """

    def __init__(self, registry: GrammarRegistry | None = None) -> None:
        self.registry = registry if registry is not None else GrammarRegistry()
        if BASH not in self.registry:
            load_grammar_module(self.registry, BASH)

    def parse(self, content: bytes) -> ParsedTree:
        try:
            return self.registry.parse(BASH, content)
        except ParseFailureError as e:
            raise ParseFailureError(
                code=e.code,
                message="Failed to parse bash script",
                details=e.details,
            ) from e
