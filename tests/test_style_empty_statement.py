"""Tests for the no-empty-statement rule."""

import pytest

from jfmt.engine.config import Configuration
from jfmt.engine.fixer import apply_edits
from jfmt.engine.java_adapter import JavaAdapter
from jfmt.engine.position import SourceText
from jfmt.engine.types import RuleContext, Span
from jfmt.rules.style_empty_statement import NoEmptyStatementRule


class FakeNode:
    """Minimal stand-in for a tree-sitter node."""

    def __init__(self, type, start, end, children=()):
        self.type = type
        self.start_byte = start
        self.end_byte = end
        self.children = list(children)
        self.parent = None
        for child in self.children:
            child.parent = self


class TestNoEmptyStatementRuleWithFakeTree:
    """Rule logic against hand-built trees."""

    def setup_method(self):
        self.rule = NoEmptyStatementRule()

    def _ctx(self, code, root):
        return RuleContext(text=SourceText.from_str(code), tree=root, config=Configuration())

    def test_rule_metadata(self):
        assert self.rule.meta.id == "no-empty-statement"
        assert self.rule.meta.autofix_safety == "safe"

    def test_bare_terminator_in_program(self):
        code = "   ;\n"
        root = FakeNode("program", 0, 5, [FakeNode(";", 3, 4)])
        ctx = self._ctx(code, root)

        findings = list(self.rule.check(ctx))
        assert [f.span for f in findings] == [Span(3, 4)]
        assert apply_edits(ctx.text, self.rule.fix(ctx)).decode() == "   \n"

    def test_empty_statement_node_reported_once(self):
        code = "{ ; }"
        semicolon = FakeNode(";", 2, 3)
        root = FakeNode("block", 0, 5, [
            FakeNode("{", 0, 1),
            FakeNode("empty_statement", 2, 3, [semicolon]),
            FakeNode("}", 4, 5),
        ])
        findings = list(self.rule.check(self._ctx(code, root)))
        assert [f.span for f in findings] == [Span(2, 3)]

    def test_statement_terminators_ignored(self):
        code = "x();"
        root = FakeNode("program", 0, 4, [
            FakeNode("expression_statement", 0, 4, [
                FakeNode("method_invocation", 0, 3),
                FakeNode(";", 3, 4),
            ]),
        ])
        assert list(self.rule.check(self._ctx(code, root))) == []

    def test_loop_body_becomes_empty_block(self):
        code = "while (x);"
        body = FakeNode(";", 9, 10)
        loop = FakeNode("while_statement", 0, 10, [
            FakeNode("while", 0, 5),
            FakeNode("parenthesized_expression", 6, 9),
            body,
        ])
        root = FakeNode("block", 0, 10, [loop])
        ctx = self._ctx(code, root)

        assert [f.span for f in self.rule.check(ctx)] == [Span(9, 10)]
        assert apply_edits(ctx.text, self.rule.fix(ctx)).decode() == "while (x){}"

    def test_else_body_becomes_empty_block(self):
        code = "if (x) y(); else;"
        body = FakeNode(";", 16, 17)
        stmt = FakeNode("if_statement", 0, 17, [
            FakeNode("if", 0, 2),
            FakeNode("parenthesized_expression", 3, 6),
            FakeNode("expression_statement", 7, 11),
            FakeNode("else", 12, 16),
            body,
        ])
        ctx = self._ctx(code, FakeNode("block", 0, 17, [stmt]))

        assert [f.span for f in self.rule.check(ctx)] == [Span(16, 17)]
        assert apply_edits(ctx.text, self.rule.fix(ctx)).decode() == "if (x) y(); else{}"

    def test_enum_constant_terminator_kept(self):
        code = "A, B; ;"
        first = FakeNode(";", 4, 5)
        stray = FakeNode(";", 6, 7)
        root = FakeNode("enum_body_declarations", 4, 7, [first, stray])
        assert [f.span for f in self.rule.check(self._ctx(code, root))] == [Span(6, 7)]


class TestNoEmptyStatementRuleWithParser:
    """Rule behavior on real tree-sitter Java trees."""

    def setup_method(self):
        self.rule = NoEmptyStatementRule()
        self.adapter = JavaAdapter()

    def _ctx(self, code):
        if not self.adapter.is_available():
            pytest.skip("tree-sitter-java not available")
        text = SourceText.from_str(code)
        return RuleContext(text=text, tree=self.adapter.parse(text), config=Configuration())

    def _fixed(self, ctx):
        return apply_edits(ctx.text, self.rule.fix(ctx)).decode()

    def test_stray_semicolons_in_method_body(self):
        code = "class A {\n    void f() {\n        int x = 1;;\n        ;\n    }\n}\n"
        ctx = self._ctx(code)

        findings = list(self.rule.check(ctx))
        assert len(findings) == 2
        assert all(ctx.text.text(f.span) == ";" for f in findings)
        assert self._fixed(ctx) == "class A {\n    void f() {\n        int x = 1;\n        \n    }\n}\n"

    def test_semicolon_in_class_body(self):
        ctx = self._ctx("class A {\n    int x;\n    ;\n}\n")
        assert len(list(self.rule.check(ctx))) == 1
        assert self._fixed(ctx) == "class A {\n    int x;\n    \n}\n"

    def test_regular_statements_not_flagged(self):
        code = (
            "package a.b;\n"
            "import java.util.List;\n"
            "class A {\n"
            "    int x;\n"
            "    void f() {\n"
            "        for (int i = 0; i < 3; i++) { x++; }\n"
            "        return;\n"
            "    }\n"
            "}\n"
        )
        assert list(self.rule.check(self._ctx(code))) == []

    def test_empty_loop_body_kept_as_block(self):
        code = "class A {\n    void f(int n) {\n        for (int i = 0; i < n; i++);\n    }\n}\n"
        ctx = self._ctx(code)

        findings = list(self.rule.check(ctx))
        assert len(findings) == 1
        fixed = self._fixed(ctx)
        assert "for (int i = 0; i < n; i++){}" in fixed

    def test_fixed_output_has_no_empty_statements(self):
        code = "class A {\n    ;\n    void f() { ;; if (true); }\n};\n"
        ctx = self._ctx(code)
        assert list(self.rule.check(ctx))

        fixed = self._ctx(self._fixed(ctx))
        assert list(self.rule.check(fixed)) == []
