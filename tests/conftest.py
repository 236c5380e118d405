"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages and
provides shared grammar fixtures.
"""

import sys
from dataclasses import dataclass, field
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

import tree_sitter  # noqa: E402
import tree_sitter_bash  # noqa: E402

from priv8.treesitter.registry import GrammarRegistry  # noqa: E402

BASH_SCRIPT = b"TOKEN=abc\necho $TOKEN\n"


@dataclass(eq=False)
class FakeNode:
    """Stand-in for tree_sitter.Node with freely chosen (even invalid) ranges."""

    type: str
    start_byte: int = 0
    end_byte: int = 0
    start_point: tuple[int, int] = (0, 0)
    end_point: tuple[int, int] = (0, 0)
    children: list["FakeNode"] = field(default_factory=list)
    is_named: bool = True
    is_missing: bool = False

    @property
    def id(self) -> int:
        return id(self)

    @property
    def child_count(self) -> int:
        return len(self.children)

    @property
    def named_children(self) -> list["FakeNode"]:
        return [child for child in self.children if child.is_named]

    @property
    def named_child_count(self) -> int:
        return len(self.named_children)


@pytest.fixture
def fake_node() -> type[FakeNode]:
    return FakeNode


@pytest.fixture
def bash_language() -> tree_sitter.Language:
    return tree_sitter.Language(tree_sitter_bash.language())


@pytest.fixture
def registry() -> GrammarRegistry:
    return GrammarRegistry()


@pytest.fixture
def bash_registry(
    registry: GrammarRegistry, bash_language: tree_sitter.Language
) -> GrammarRegistry:
    registry.load_grammar("bash", bash_language)
    return registry


@pytest.fixture
def bash_source() -> bytes:
    return BASH_SCRIPT
