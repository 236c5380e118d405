"""Grammar and query registry.

The registry is a plain object: construct one and pass it around. Only
``load_grammar`` and ``register_query`` mutate it; callers that share a
registry between threads must serialise those two calls. Lookups, parsing
and query execution only read it.
"""

from __future__ import annotations

from typing import Any

import structlog
import tree_sitter
from tree_sitter import Query as _TSQuery
from tree_sitter import QueryError as _TSQueryError

from priv8.core.errors import (
    GrammarNotFoundError,
    InvalidGrammarError,
    ParseFailureError,
    QueryCompileError,
    QueryNotFoundError,
)
from priv8.treesitter.arena import ParsedTree

log = structlog.get_logger(__name__)


def compile_query(
    grammar_name: str,
    query_name: str,
    language: tree_sitter.Language,
    pattern: str,
) -> _TSQuery:
    """Compile ``pattern`` against ``language``.

    Raises:
        QueryCompileError: With the tree-sitter diagnostic quoted verbatim.
    """
    try:
        return _TSQuery(language, pattern)
    except _TSQueryError as e:
        raise QueryCompileError.for_pattern(grammar_name, query_name, str(e)) from e


class GrammarRegistry:
    """Loaded grammars by name, each with its own set of named queries.

    Usage::

        registry = GrammarRegistry()
        registry.load_grammar("bash", tree_sitter.Language(tree_sitter_bash.language()))
        registry.register_query("bash", "assignments", "(variable_assignment) @assignment")

        parsed = registry.parse("bash", b"TOKEN=abc\\n")
    """

    def __init__(self) -> None:
        self._grammars: dict[str, tree_sitter.Language] = {}
        self._queries: dict[str, dict[str, _TSQuery]] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._grammars

    def grammar_names(self) -> list[str]:
        return sorted(self._grammars)

    def query_names(self, grammar_name: str) -> list[str]:
        self.get_grammar(grammar_name)
        return sorted(self._queries[grammar_name])

    def load_grammar(self, name: str, grammar: Any) -> None:
        """Load (or replace) a grammar under ``name``.

        ``grammar`` is a ``tree_sitter.Language`` or the raw language pointer
        a grammar package's ``language()`` returns. Reloading a name drops the
        queries registered against the previous grammar.

        Raises:
            InvalidGrammarError: If ``name`` is empty or ``grammar`` is None
                or not a usable language handle.
        """
        if not name:
            raise InvalidGrammarError.empty_name()
        if grammar is None:
            raise InvalidGrammarError.empty_handle(name)

        if not isinstance(grammar, tree_sitter.Language):
            try:
                grammar = tree_sitter.Language(grammar)
            except (TypeError, ValueError) as e:
                raise InvalidGrammarError.empty_handle(name) from e

        replaced = name in self._grammars
        self._grammars[name] = grammar
        self._queries[name] = {}
        log.debug("grammar_loaded", grammar=name, replaced=replaced)

    def get_grammar(self, name: str) -> tree_sitter.Language:
        try:
            return self._grammars[name]
        except KeyError:
            raise GrammarNotFoundError.for_grammar(name) from None

    def register_query(self, grammar_name: str, query_name: str, pattern: str) -> None:
        """Compile ``pattern`` and store it as ``(grammar_name, query_name)``.

        The registry is only touched once compilation has succeeded.

        Raises:
            GrammarNotFoundError: If the grammar is not loaded.
            QueryCompileError: If the pattern does not compile.
        """
        language = self.get_grammar(grammar_name)
        query = compile_query(grammar_name, query_name, language, pattern)

        self._queries[grammar_name][query_name] = query
        log.debug(
            "query_registered",
            grammar=grammar_name,
            query=query_name,
            patterns=query.pattern_count,
        )

    def load_queries(self, grammar_name: str, patterns: dict[str, str]) -> None:
        """Register several queries; stops at the first one that fails."""
        for query_name, pattern in patterns.items():
            self.register_query(grammar_name, query_name, pattern)

    def get_query(self, grammar_name: str, query_name: str) -> _TSQuery:
        """Look up a compiled query.

        Raises:
            GrammarNotFoundError: If the grammar was never loaded.
            QueryNotFoundError: If the grammar is loaded but has no such query.
        """
        grammar_queries = self._queries.get(grammar_name)
        if grammar_queries is None:
            raise GrammarNotFoundError.for_grammar(grammar_name)

        try:
            return grammar_queries[query_name]
        except KeyError:
            raise QueryNotFoundError.for_query(grammar_name, query_name) from None

    def create_parser(self, grammar_name: str) -> tree_sitter.Parser:
        """A new parser bound to the grammar. Parsers are never shared."""
        return tree_sitter.Parser(self.get_grammar(grammar_name))

    def parse(self, grammar_name: str, source: bytes) -> ParsedTree:
        """Parse ``source`` with a fresh parser.

        Raises:
            GrammarNotFoundError: If the grammar is not loaded.
            ParseFailureError: If tree-sitter returns no tree.
        """
        parser = self.create_parser(grammar_name)
        tree = parser.parse(source)
        if tree is None:
            raise ParseFailureError.for_grammar(grammar_name, len(source))

        parsed = ParsedTree(tree=tree, source=source, grammar=grammar_name)
        log.debug(
            "parsed",
            grammar=grammar_name,
            generation=parsed.generation,
            size=len(source),
            nodes=parsed.total_nodes,
            errors=parsed.error_count,
        )
        return parsed
