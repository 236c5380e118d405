"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (PRIV8__SECTION__KEY)
3. YAML config file (--config PATH or ~/.config/priv8/config.yaml)
4. Built-in defaults (this file)

Environment Variable Format:
    PRIV8__<SECTION>__<KEY>=<VALUE>

Examples:
    PRIV8__LOGGING__LEVEL=DEBUG
    PRIV8__GRAMMARS__DEFAULT=bash
    PRIV8__OUTPUT__SUFFIX=.clean
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        PRIV8__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG traces every grammar load, query and parse.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class GrammarConfig(BaseModel):
    """Grammar selection.

    Env vars:
        PRIV8__GRAMMARS__DEFAULT: Grammar used by the CLI (default: bash)
    """

    default: str = Field(
        default="bash",
        description="Grammar the CLI parses target files with. Must be a key of `packages`.",
    )
    packages: dict[str, str] = Field(
        default_factory=lambda: {"bash": "tree_sitter_bash"},
        description="Grammar name -> importable tree-sitter grammar module.",
    )

    @field_validator("packages")
    @classmethod
    def validate_packages(cls, v: dict[str, str]) -> dict[str, str]:
        for name, module in v.items():
            if not name or not module:
                raise ValueError(f"Grammar package entries must be non-empty: {name!r}={module!r}")
        return v


class OutputConfig(BaseModel):
    """Output file configuration.

    Env vars:
        PRIV8__OUTPUT__SUFFIX: Suffix appended to the target path when --output is omitted
    """

    suffix: str = Field(
        default=".sanitized",
        description="Suffix for the default output path.",
    )

    @field_validator("suffix")
    @classmethod
    def validate_suffix(cls, v: str) -> str:
        if not v:
            raise ValueError("Output suffix must not be empty (would overwrite the target)")
        return v


class Priv8Config(BaseModel):
    """Root configuration for priv8."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    grammars: GrammarConfig = Field(default_factory=GrammarConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
