"""Tests for the engine value types."""

import pytest
from unittest.mock import Mock

from jfmt.engine.types import Diagnostic, Edit, RuleContext, Span, is_fixable
from jfmt.engine.config import Configuration
from jfmt.engine.position import SourceText
from jfmt.rules import IndentStyleRule, MaxLineLengthRule


class TestSpan:
    """Test cases for Span."""

    def test_invalid_spans_rejected(self):
        with pytest.raises(ValueError):
            Span(3, 2)
        with pytest.raises(ValueError):
            Span(-1, 2)

    def test_adjacent_spans_do_not_overlap(self):
        assert not Span(0, 3).overlaps(Span(3, 5))
        assert Span(0, 4).overlaps(Span(3, 5))

    def test_empty_span_inside_other_overlaps(self):
        assert Span(2, 2).overlaps(Span(0, 5))
        assert not Span(0, 0).overlaps(Span(0, 5))


class TestDiagnostic:
    """Test cases for Diagnostic ordering."""

    def test_sort_key(self):
        a = Diagnostic("b-rule", "warning", Span(5, 6), "m")
        b = Diagnostic("a-rule", "warning", Span(5, 9), "m")
        c = Diagnostic("z-rule", "warning", Span(1, 2), "m")
        assert sorted([a, b, c], key=lambda d: d.sort_key) == [c, b, a]

    def test_immutable(self):
        diagnostic = Diagnostic("r", "warning", Span(0, 1), "m")
        with pytest.raises(AttributeError):
            diagnostic.message = "other"


class TestRuleContext:
    """Test cases for tree walking."""

    def test_walk_nodes_document_order(self):
        leaf_a = Mock(children=[])
        leaf_b = Mock(children=[])
        inner = Mock(children=[leaf_a])
        root = Mock(children=[inner, leaf_b])
        tree = Mock(root_node=root)
        ctx = RuleContext(text=SourceText.from_str(""), tree=tree, config=Configuration())

        assert list(ctx.walk_nodes()) == [root, inner, leaf_a, leaf_b]

    def test_walk_nodes_without_tree(self):
        ctx = RuleContext(text=SourceText.from_str(""), tree=None, config=Configuration())
        assert list(ctx.walk_nodes()) == []


def test_is_fixable():
    assert is_fixable(IndentStyleRule())
    assert not is_fixable(MaxLineLengthRule())


def test_edit_defaults():
    edit = Edit(Span(0, 1), "")
    assert edit.rule_id == ""
