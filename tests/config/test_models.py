"""Tests for config/models.py module.

Covers:
- LogOutputConfig model
- LoggingConfig model
- GrammarConfig model
- OutputConfig model
- Priv8Config root model
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from priv8.config.models import (
    GrammarConfig,
    LoggingConfig,
    LogOutputConfig,
    OutputConfig,
    Priv8Config,
)


class TestLogOutputConfig:
    """Tests for LogOutputConfig model."""

    def test_defaults(self) -> None:
        config = LogOutputConfig()
        assert config.format == "console"
        assert config.destination == "stderr"
        assert config.level is None

    @pytest.mark.parametrize("destination", ["stderr", "stdout"])
    def test_stream_destinations(self, destination: str) -> None:
        assert LogOutputConfig(destination=destination).destination == destination

    def test_relative_file_rejected(self) -> None:
        with pytest.raises(ValidationError, match="absolute path"):
            LogOutputConfig(destination="logs/priv8.log")

    def test_absolute_file_accepted(self) -> None:
        config = LogOutputConfig(destination="/var/log/priv8.log")
        assert config.destination == "/var/log/priv8.log"

    def test_invalid_format(self) -> None:
        with pytest.raises(ValidationError):
            LogOutputConfig(format="xml")  # type: ignore[arg-type]


class TestLoggingConfig:
    def test_defaults(self) -> None:
        config = LoggingConfig()
        assert config.level == "WARNING"
        assert len(config.outputs) == 1
        assert config.outputs[0].destination == "stderr"

    def test_invalid_level(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(level="TRACE")  # type: ignore[arg-type]


class TestGrammarConfig:
    def test_defaults(self) -> None:
        config = GrammarConfig()
        assert config.default == "bash"
        assert config.packages == {"bash": "tree_sitter_bash"}

    def test_defaults_not_shared(self) -> None:
        a = GrammarConfig()
        a.packages["sh"] = "tree_sitter_bash"
        assert GrammarConfig().packages == {"bash": "tree_sitter_bash"}

    def test_empty_module_rejected(self) -> None:
        with pytest.raises(ValidationError, match="non-empty"):
            GrammarConfig(packages={"bash": ""})


class TestOutputConfig:
    def test_default_suffix(self) -> None:
        assert OutputConfig().suffix == ".sanitized"

    def test_empty_suffix_rejected(self) -> None:
        with pytest.raises(ValidationError, match="must not be empty"):
            OutputConfig(suffix="")


class TestPriv8Config:
    def test_all_sections_present(self) -> None:
        config = Priv8Config()
        assert isinstance(config.logging, LoggingConfig)
        assert isinstance(config.grammars, GrammarConfig)
        assert isinstance(config.output, OutputConfig)

    def test_nested_dict_input(self) -> None:
        config = Priv8Config.model_validate(
            {"logging": {"level": "DEBUG"}, "output": {"suffix": ".clean"}}
        )
        assert config.logging.level == "DEBUG"
        assert config.output.suffix == ".clean"
        assert config.grammars.default == "bash"
