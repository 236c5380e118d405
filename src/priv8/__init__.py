"""priv8 - syntax-aware detection and annotation of sensitive content in scripts."""

__version__ = "0.1.0"
