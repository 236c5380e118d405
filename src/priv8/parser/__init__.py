"""Grammar-specific parser wrappers."""

from priv8.parser.bash import BashParser

__all__ = ["BashParser"]
