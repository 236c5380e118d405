"""Tree-sitter grammar packages and loading them into a registry.

Grammars ship as separate PyPI packages exposing ``language()``. This module
knows which package provides which grammar and turns an importable module
into a loaded registry entry.
"""

from __future__ import annotations

import importlib
from importlib.util import find_spec
from typing import TYPE_CHECKING

import structlog
import tree_sitter

from priv8.core.errors import GrammarNotInstalledError

if TYPE_CHECKING:
    from priv8.config.models import GrammarConfig
    from priv8.treesitter.registry import GrammarRegistry

log = structlog.get_logger(__name__)

# Grammar name -> (PyPI package name, import name)
GRAMMAR_PACKAGES: dict[str, tuple[str, str]] = {
    "bash": ("tree-sitter-bash", "tree_sitter_bash"),
    "python": ("tree-sitter-python", "tree_sitter_python"),
    "javascript": ("tree-sitter-javascript", "tree_sitter_javascript"),
    "ruby": ("tree-sitter-ruby", "tree_sitter_ruby"),
    "php": ("tree-sitter-php", "tree_sitter_php"),
    "lua": ("tree-sitter-lua", "tree_sitter_lua"),
    "dockerfile": ("tree-sitter-dockerfile", "tree_sitter_dockerfile"),
    "make": ("tree-sitter-make", "tree_sitter_make"),
    "yaml": ("tree-sitter-yaml", "tree_sitter_yaml"),
    "json": ("tree-sitter-json", "tree_sitter_json"),
}

# Grammars whose package exposes something other than ``language()``.
LANGUAGE_FUNCS: dict[str, str] = {
    "php": "language_php",
}


def is_grammar_installed(import_name: str) -> bool:
    """Check if a grammar package is installed."""
    try:
        return find_spec(import_name) is not None
    except ModuleNotFoundError:
        # Dotted name whose parent package is missing
        return False


def import_language(name: str, module_name: str | None = None) -> tree_sitter.Language:
    """Import a grammar package and build its Language.

    Args:
        name: Grammar name (key of GRAMMAR_PACKAGES when ``module_name`` is None).
        module_name: Module to import instead of the catalogued one.

    Raises:
        GrammarNotInstalledError: If the module or its language function is missing.
    """
    if module_name is None:
        if name not in GRAMMAR_PACKAGES:
            raise GrammarNotInstalledError.for_module(name, "", "no package known for grammar")
        module_name = GRAMMAR_PACKAGES[name][1]

    if not is_grammar_installed(module_name):
        reason = "module not installed"
        if name in GRAMMAR_PACKAGES and GRAMMAR_PACKAGES[name][1] == module_name:
            reason += f" (pip install {GRAMMAR_PACKAGES[name][0]})"
        raise GrammarNotInstalledError.for_module(name, module_name, reason)

    func_name = LANGUAGE_FUNCS.get(name, "language")
    try:
        module = importlib.import_module(module_name)
        language_fn = getattr(module, func_name)
    except ImportError as e:
        raise GrammarNotInstalledError.for_module(name, module_name, str(e)) from e
    except AttributeError as e:
        raise GrammarNotInstalledError.for_module(
            name, module_name, f"module has no {func_name}()"
        ) from e

    return tree_sitter.Language(language_fn())


def load_grammar_module(
    registry: GrammarRegistry, name: str, module_name: str | None = None
) -> None:
    """Import a grammar package and load it into ``registry`` under ``name``."""
    registry.load_grammar(name, import_language(name, module_name))
    log.debug("grammar_imported", grammar=name, module=module_name or GRAMMAR_PACKAGES[name][1])


def load_configured_grammars(registry: GrammarRegistry, config: GrammarConfig) -> list[str]:
    """Load every grammar listed in ``config.packages``. Returns the names loaded."""
    for name, module_name in config.packages.items():
        load_grammar_module(registry, name, module_name)
    return list(config.packages)
