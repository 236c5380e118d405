"""priv8 error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Grammar / query registry
- 4xxx: Parse
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Grammar / query (3xxx)
    INVALID_GRAMMAR = 3001
    GRAMMAR_NOT_FOUND = 3002
    QUERY_NOT_FOUND = 3003
    QUERY_COMPILE_ERROR = 3004
    GRAMMAR_NOT_INSTALLED = 3005

    # Parse (4xxx)
    PARSE_FAILURE = 4001


@dataclass(frozen=True, slots=True)
class Priv8Error(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'GRAMMAR_NOT_FOUND')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(Priv8Error):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class GrammarError(Priv8Error):
    """Grammar registry errors."""


class InvalidGrammarError(GrammarError):
    """A null or empty grammar handle was offered to the registry."""

    @classmethod
    def empty_handle(cls, name: str) -> "InvalidGrammarError":
        return cls(
            code=ErrorCode.INVALID_GRAMMAR,
            message=f"Grammar {name!r} is nil",
            details={"grammar": name},
        )

    @classmethod
    def empty_name(cls) -> "InvalidGrammarError":
        return cls(
            code=ErrorCode.INVALID_GRAMMAR,
            message="Grammar name must not be empty",
            details={"grammar": ""},
        )


class GrammarNotInstalledError(GrammarError):
    """The Python package shipping a grammar cannot be imported."""

    @classmethod
    def for_module(cls, name: str, module: str, reason: str) -> "GrammarNotInstalledError":
        return cls(
            code=ErrorCode.GRAMMAR_NOT_INSTALLED,
            message=f"Grammar {name!r} not available from module {module!r}: {reason}",
            details={"grammar": name, "module": module, "reason": reason},
        )


class NotFoundError(GrammarError):
    """Lookup of a grammar or query that is not registered."""


class GrammarNotFoundError(NotFoundError):
    """Grammar was never loaded."""

    @classmethod
    def for_grammar(cls, name: str) -> "GrammarNotFoundError":
        return cls(
            code=ErrorCode.GRAMMAR_NOT_FOUND,
            message=f"Grammar {name} not loaded",
            details={"grammar": name},
        )


class QueryNotFoundError(NotFoundError):
    """Grammar is loaded but no query is registered under the name."""

    @classmethod
    def for_query(cls, grammar: str, query: str) -> "QueryNotFoundError":
        return cls(
            code=ErrorCode.QUERY_NOT_FOUND,
            message=f"Query {query} not registered for grammar {grammar}",
            details={"grammar": grammar, "query": query},
        )


class QueryCompileError(GrammarError):
    """Pattern text failed to compile against a grammar.

    ``details["reason"]`` carries the compiler diagnostic verbatim.
    """

    @classmethod
    def for_pattern(cls, grammar: str, query: str, reason: str) -> "QueryCompileError":
        return cls(
            code=ErrorCode.QUERY_COMPILE_ERROR,
            message=f"Failed to create query {query} for grammar {grammar}: {reason}",
            details={"grammar": grammar, "query": query, "reason": reason},
        )


class ParseFailureError(Priv8Error):
    """The syntax tree provider returned no tree."""

    @classmethod
    def for_grammar(cls, grammar: str, size: int) -> "ParseFailureError":
        return cls(
            code=ErrorCode.PARSE_FAILURE,
            message=f"Failed to parse {size} bytes with grammar {grammar}",
            details={"grammar": grammar, "size": size},
        )

