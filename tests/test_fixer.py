"""Tests for the fix engine."""

import logging

import pytest

from jfmt.engine.config import Configuration, IndentStyle
from jfmt.engine.errors import ConflictingEdits, OutOfRange
from jfmt.engine.fixer import apply_edits, collect_edits, fix
from jfmt.engine.position import SourceText
from jfmt.engine.types import Edit, RuleContext, RuleMeta, Span
from jfmt.rules import IndentStyleRule, MaxLineLengthRule


class StaticFixRule:
    """Fix-capable rule returning fixed edits."""

    def __init__(self, rule_id, edits):
        self.meta = RuleMeta(id=rule_id, autofix_safety="safe")
        self.edits = edits

    def check(self, ctx):
        return []

    def fix(self, ctx):
        return self.edits


class BrokenFixRule:
    meta = RuleMeta(id="broken-fix", autofix_safety="safe")

    def check(self, ctx):
        return []

    def fix(self, ctx):
        raise RuntimeError("cannot fix")


def make_ctx(source, **config):
    return RuleContext(text=SourceText.from_str(source), tree=None, config=Configuration(**config))


class TestApplyEdits:
    """Test cases for apply_edits()."""

    def test_no_edits_returns_input(self):
        text = SourceText.from_str("abc")
        assert apply_edits(text, []) is text

    def test_multiple_edits_single_pass(self):
        result = apply_edits("a;b;c;", [
            Edit(Span(1, 2), ""),
            Edit(Span(5, 6), ""),
            Edit(Span(3, 4), ""),
        ])
        assert result.decode() == "abc"

    def test_order_has_no_effect(self):
        edits = [Edit(Span(0, 1), "XX"), Edit(Span(2, 3), ""), Edit(Span(4, 4), "!")]
        forward = apply_edits("abcdef", edits)
        backward = apply_edits("abcdef", list(reversed(edits)))
        assert forward == backward
        assert forward.decode() == "XXbd!ef"

    def test_growing_replacement_keeps_later_offsets(self):
        result = apply_edits("\tx;\n\ty;\n", [
            Edit(Span(0, 1), "    "),
            Edit(Span(4, 5), "    "),
        ])
        assert result.decode() == "    x;\n    y;\n"

    def test_adjacent_edits_allowed(self):
        result = apply_edits("abcd", [Edit(Span(0, 2), "x"), Edit(Span(2, 4), "y")])
        assert result.decode() == "xy"

    def test_overlap_raises_and_names_both_rules(self):
        edits = [
            Edit(Span(0, 3), "", rule_id="first-rule"),
            Edit(Span(2, 5), "", rule_id="second-rule"),
        ]
        with pytest.raises(ConflictingEdits) as excinfo:
            apply_edits("abcdef", edits)

        message = str(excinfo.value)
        assert "first-rule" in message and "second-rule" in message
        assert "[0, 3)" in message and "[2, 5)" in message
        assert {excinfo.value.first.rule_id, excinfo.value.second.rule_id} == {"first-rule", "second-rule"}

    def test_insertion_at_replacement_start_allowed(self):
        result = apply_edits("abc", [Edit(Span(1, 2), "y"), Edit(Span(1, 1), "x")])
        assert result.decode() == "axyc"

    def test_insertion_inside_replacement_conflicts(self):
        with pytest.raises(ConflictingEdits):
            apply_edits("abcdef", [Edit(Span(1, 4), "x"), Edit(Span(2, 2), "y")])

    def test_out_of_range_edit(self):
        with pytest.raises(OutOfRange):
            apply_edits("abc", [Edit(Span(1, 9), "")])

    def test_bytes_outside_edits_preserved(self):
        source = "// é\nint x;;\n"
        text = SourceText.from_str(source)
        second_semicolon = text.data.rindex(b";")
        result = apply_edits(text, [Edit(Span(second_semicolon, second_semicolon + 1), "")])
        assert result.decode() == "// é\nint x;\n"


class TestFix:
    """Test cases for collect_edits() and fix()."""

    def test_check_only_rules_ignored(self):
        ctx = make_ctx("x" * 200)
        assert collect_edits(ctx, [MaxLineLengthRule()]) == []

    def test_rule_id_filled_in(self):
        ctx = make_ctx("abc")
        edits = collect_edits(ctx, [StaticFixRule("r", [Edit(Span(0, 1), "")])])
        assert edits[0].rule_id == "r"

    def test_out_of_range_edit_dropped(self, caplog):
        ctx = make_ctx("abc")
        rule = StaticFixRule("r", [Edit(Span(0, 10), ""), Edit(Span(0, 1), "")])
        with caplog.at_level(logging.ERROR):
            edits = collect_edits(ctx, [rule])
        assert [e.span for e in edits] == [Span(0, 1)]
        assert "dropping edit" in caplog.text

    def test_broken_fix_skipped(self):
        ctx = make_ctx("abc")
        rules = [BrokenFixRule(), StaticFixRule("ok", [Edit(Span(0, 1), "A")])]
        result = fix(ctx, rules)
        assert result.text.decode() == "Abc"

    def test_conflicting_rules_apply_nothing(self):
        ctx = make_ctx("abcdef")
        rules = [
            StaticFixRule("one", [Edit(Span(0, 3), "")]),
            StaticFixRule("two", [Edit(Span(1, 2), "")]),
        ]
        with pytest.raises(ConflictingEdits):
            fix(ctx, rules)
        assert ctx.text.decode() == "abcdef"

    def test_noop_edits_not_reported(self):
        ctx = make_ctx("abc")
        result = fix(ctx, [StaticFixRule("r", [Edit(Span(0, 1), "a")])])
        assert not result.changed
        assert result.text == ctx.text

    def test_indent_fix_is_idempotent(self):
        ctx = make_ctx("class A {\n\tint x;\n\t\tint y;\n}\n", indent_style=IndentStyle.SPACES)
        rule = IndentStyleRule()
        first = fix(ctx, [rule])
        assert first.changed

        again = RuleContext(text=first.text, tree=None, config=ctx.config)
        assert list(rule.check(again)) == []
        assert not fix(again, [rule]).changed
