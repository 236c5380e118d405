"""Core module exports."""

from priv8.core.errors import (
    ConfigError,
    ErrorCode,
    GrammarError,
    GrammarNotFoundError,
    GrammarNotInstalledError,
    InvalidGrammarError,
    NotFoundError,
    ParseFailureError,
    Priv8Error,
    QueryCompileError,
    QueryNotFoundError,
)
from priv8.core.logging import configure_logging, get_logger

__all__ = [
    # Errors
    "Priv8Error",
    "ErrorCode",
    "ConfigError",
    "GrammarError",
    "GrammarNotFoundError",
    "GrammarNotInstalledError",
    "InvalidGrammarError",
    "NotFoundError",
    "ParseFailureError",
    "QueryCompileError",
    "QueryNotFoundError",
    # Logging
    "configure_logging",
    "get_logger",
]
