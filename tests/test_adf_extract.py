"""Tests for jira_ai.integrations.jira.adf module.

Tests cover:
- Node classification
- Text extraction for every recognized shape
- Unknown shapes and None
- Very deep documents
"""

from __future__ import annotations

import pytest

from jira_ai.integrations.jira.adf import NodeKind, classify_node, extract_text

# =============================================================================
# classify_node Tests
# =============================================================================


class TestClassifyNode:
    """Tests for classify_node."""

    @pytest.mark.parametrize(
        "node,expected",
        [
            ("plain", NodeKind.PLAIN_TEXT),
            ("", NodeKind.PLAIN_TEXT),
            ({"type": "text", "text": "x"}, NodeKind.TEXT_LEAF),
            ({"type": "text"}, NodeKind.TEXT_LEAF),
            ({"type": "doc", "content": []}, NodeKind.COMPOSITE),
            ([1, 2], NodeKind.NODE_LIST),
            (None, NodeKind.UNKNOWN),
            (42, NodeKind.UNKNOWN),
            ({"type": "hardBreak"}, NodeKind.UNKNOWN),
            ({"content": "not a list"}, NodeKind.UNKNOWN),
        ],
    )
    def test_classifies_shapes(self, node, expected):
        """Each input shape maps to its NodeKind."""
        assert classify_node(node) is expected

    def test_text_type_wins_over_content(self):
        """A text node with stray content is still a leaf."""
        assert classify_node({"type": "text", "text": "a", "content": []}) is NodeKind.TEXT_LEAF


# =============================================================================
# extract_text Tests
# =============================================================================


class TestExtractText:
    """Tests for extract_text."""

    def test_none_is_empty(self):
        """None contributes no text."""
        assert extract_text(None) == ""

    def test_plain_string_returned_unchanged(self):
        """Plain strings (API v2 descriptions) pass through."""
        assert extract_text("Already plain\ntext") == "Already plain\ntext"

    def test_text_leaf(self):
        """A text node yields its text."""
        assert extract_text({"type": "text", "text": "hello"}) == "hello"

    def test_text_leaf_without_text(self):
        """A text node without text yields an empty string."""
        assert extract_text({"type": "text"}) == ""

    def test_paragraphs_joined_with_spaces(self):
        """Depth-first text leaves are joined with single spaces."""
        doc = {
            "type": "doc",
            "content": [
                {"type": "paragraph", "content": [{"type": "text", "text": "Hello"}]},
                {"type": "paragraph", "content": [{"type": "text", "text": "world"}]},
            ],
        }
        assert extract_text(doc) == "Hello world"

    def test_inline_marks_dropped(self):
        """Formatting marks and link attributes are discarded."""
        node = {
            "type": "paragraph",
            "content": [
                {"type": "text", "text": "See", "marks": [{"type": "strong"}]},
                {
                    "type": "text",
                    "text": "docs",
                    "marks": [{"type": "link", "attrs": {"href": "https://x"}}],
                },
            ],
        }
        assert extract_text(node) == "See docs"

    def test_bare_list(self):
        """A bare list of nodes is joined like content."""
        assert extract_text(["a", {"type": "text", "text": "b"}, "c"]) == "a b c"

    def test_unknown_child_contributes_empty_piece(self):
        """An unknown child still takes a slot in the join."""
        assert extract_text({"content": ["a", {"type": "hardBreak"}, "b"]}) == "a  b"

    def test_empty_content(self):
        """A composite without children yields an empty string."""
        assert extract_text({"type": "doc", "content": []}) == ""

    @pytest.mark.parametrize("value", [42, 3.5, True, object(), {"type": "mention"}])
    def test_unknown_shapes_are_empty(self, value):
        """Unrecognized values never raise."""
        assert extract_text(value) == ""

    def test_nested_lists_and_composites(self):
        """Lists inside composites inside lists are all flattened."""
        node = [{"content": [["x", {"content": ["y"]}]]}, "z"]
        assert extract_text(node) == "x y z"

    def test_very_deep_document_does_not_raise(self):
        """Depth beyond the recursion limit is handled."""
        node: object = {"type": "text", "text": "bottom"}
        for _ in range(5000):
            node = {"type": "paragraph", "content": [node]}
        assert extract_text(node) == "bottom"


# =============================================================================
# Idempotence
# =============================================================================

IDEMPOTENCE_CASES = [
    None,
    "plain text",
    {"type": "text", "text": "leaf"},
    {"type": "doc", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "a"}]}]},
    {"content": ["a", {"type": "hardBreak"}, "b"]},
    {"content": [{"type": "mention"}, {"type": "text", "text": "x"}, 7]},
    [{"content": [["x", {"content": ["y"]}]]}, "z"],
    ["a", {"type": "text", "text": "b"}, "c"],
]


class TestExtractTextIdempotence:
    """Extracting already extracted text changes nothing."""

    @pytest.mark.parametrize("node", IDEMPOTENCE_CASES)
    def test_string_rewrap(self, node):
        once = extract_text(node)

        assert extract_text(once) == once

    @pytest.mark.parametrize("node", IDEMPOTENCE_CASES)
    def test_text_leaf_rewrap(self, node):
        once = extract_text(node)

        assert extract_text({"type": "text", "text": once}) == once
