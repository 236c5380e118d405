"""Config module exports."""

from priv8.config.loader import load_config
from priv8.config.models import (
    GrammarConfig,
    LoggingConfig,
    LogOutputConfig,
    OutputConfig,
    Priv8Config,
)

__all__ = [
    "load_config",
    "Priv8Config",
    "GrammarConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "OutputConfig",
]
