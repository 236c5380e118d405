"""Tests for PrivacyNode annotations."""

from typing import Any

import pytest

from priv8.treesitter.privacy import DEFAULT_SENSITIVITY, PrivacyNode, new_privacy_node
from priv8.treesitter.registry import GrammarRegistry


class TestDefaults:
    """Replacement-free defaults."""

    def test_new_privacy_node_defaults(self, fake_node: Any) -> None:
        node = fake_node("word")

        annotation = new_privacy_node(node)

        assert annotation.node is node
        assert annotation.sensitivity == 5 == DEFAULT_SENSITIVITY
        assert annotation.replacement_value == ""
        assert annotation.issue_type == ""
        assert annotation.context == {}
        assert annotation.id is None

    def test_context_maps_are_not_shared(self, fake_node: Any) -> None:
        first = PrivacyNode(fake_node("word"))
        second = PrivacyNode(fake_node("word"))

        first.set_context("source", "env")

        assert second.context == {}

    def test_none_node_is_tolerated(self) -> None:
        annotation = new_privacy_node(None)

        assert annotation.get_text(b"abc") == ""
        assert annotation.get_position_text() == "unknown position"


class TestMutation:
    """Fields are the caller's to set; nothing is validated except context types."""

    def test_out_of_range_sensitivity_is_kept(self, fake_node: Any) -> None:
        annotation = new_privacy_node(fake_node("word"))

        annotation.sensitivity = 42
        annotation.issue_type = "made_up_category"

        assert annotation.sensitivity == 42
        assert annotation.issue_type == "made_up_category"

    @pytest.mark.parametrize("value", ["aws", 3, True, False])
    def test_context_accepts_str_int_bool(self, fake_node: Any, value: str | int | bool) -> None:
        annotation = new_privacy_node(fake_node("word"))

        annotation.set_context("key", value)

        assert annotation.context["key"] == value

    @pytest.mark.parametrize("value", [1.5, None, ["a"], {"a": 1}])
    def test_context_rejects_other_types(self, fake_node: Any, value: object) -> None:
        annotation = new_privacy_node(fake_node("word"))

        with pytest.raises(TypeError):
            annotation.set_context("key", value)  # type: ignore[arg-type]

        assert annotation.context == {}

    def test_context_rejects_non_str_key(self, fake_node: Any) -> None:
        annotation = new_privacy_node(fake_node("word"))

        with pytest.raises(TypeError, match="key must be str"):
            annotation.set_context(7, "aws")  # type: ignore[arg-type]

    def test_constructor_validates_context(self, fake_node: Any) -> None:
        with pytest.raises(TypeError, match="'k'"):
            PrivacyNode(fake_node("word"), context={"k": 1.5})  # type: ignore[dict-item]

    def test_constructor_accepts_typed_context(self, fake_node: Any) -> None:
        annotation = PrivacyNode(fake_node("word"), context={"rule": "aws", "line": 3})

        assert annotation.context == {"rule": "aws", "line": 3}


class TestAccessors:
    """Text/position delegation and serialisation."""

    def test_text_and_position(self, bash_registry: GrammarRegistry, bash_source: bytes) -> None:
        parsed = bash_registry.parse("bash", bash_source)
        assignment = parsed.root_node.named_children[0]

        annotation = new_privacy_node(assignment, parsed)

        assert annotation.get_text(bash_source) == "TOKEN=abc"
        assert annotation.get_position_text() == "line 1:1 to 1:10"
        assert annotation.id == parsed.node_id(assignment)

    def test_to_dict(self, bash_registry: GrammarRegistry, bash_source: bytes) -> None:
        parsed = bash_registry.parse("bash", bash_source)
        value = parsed.root_node.named_children[0].child_by_field_name("value")
        annotation = parsed.annotate(value)
        annotation.issue_type = "hardcoded_secret"
        annotation.sensitivity = 8
        annotation.replacement_value = "REDACTED"
        annotation.set_context("variable", "TOKEN")

        result = annotation.to_dict(bash_source)

        assert result == {
            "id": str(annotation.id),
            "issue_type": "hardcoded_secret",
            "sensitivity": 8,
            "replacement_value": "REDACTED",
            "position": "line 1:7 to 1:10",
            "node_type": "word",
            "byte_range": [6, 9],
            "context": {"variable": "TOKEN"},
            "text": "abc",
        }

    def test_to_dict_without_source_or_node(self) -> None:
        result = new_privacy_node(None).to_dict()

        assert result["id"] is None
        assert result["byte_range"] is None
        assert "text" not in result
