"""
Rule: indent-style

Checks that the leading whitespace of each line matches the configured
indentation style, and rewrites it when that can be done safely.

- spaces mode: any tab in the leading run is flagged at the first tab. The
  fix replaces each tab with indent_width spaces and keeps the spaces that
  are already there.
- tabs mode: a leading run made only of spaces is flagged when its length is
  a multiple of indent_width, and the fix replaces it with the matching
  number of tabs. Runs that mix tabs and spaces, or whose length is not a
  multiple of indent_width, are not reported: they cannot be converted to a
  whole number of tabs.

Lines holding nothing but whitespace are not indentation and are skipped.
Lines that start inside a Java text block belong to a string value, since
Java strips only the indentation its lines share, and are skipped too.
Each line yields at most one edit, confined to its own leading run.
"""

from typing import Iterator, List, NamedTuple

from jfmt.engine.config import IndentStyle
from jfmt.engine.types import Diagnostic, Edit, RuleContext, RuleMeta, Span

_SPACE = 0x20
_TAB = 0x09

_STRING_NODE_TYPES = ('string_literal', 'text_block')


class IndentViolation(NamedTuple):
    span: Span         # reported range
    run: Span          # whole leading-whitespace run of the line
    replacement: str
    message: str


class IndentStyleRule:
    """Flag and normalize indentation that does not match the configured style."""

    meta = RuleMeta(
        id="indent-style",
        description="Indentation must use the configured style (tabs or spaces)",
        autofix_safety="safe",
    )

    def check(self, ctx: RuleContext) -> Iterator[Diagnostic]:
        for violation in self._find_violations(ctx):
            yield Diagnostic(
                rule_id=self.meta.id,
                severity="warning",
                span=violation.span,
                message=violation.message,
            )

    def fix(self, ctx: RuleContext) -> Iterator[Edit]:
        for violation in self._find_violations(ctx):
            yield Edit(span=violation.run, replacement=violation.replacement, rule_id=self.meta.id)

    def _find_violations(self, ctx: RuleContext) -> List[IndentViolation]:
        style = ctx.config.indent_style
        width = ctx.config.indent_width
        data = ctx.text.data
        text_blocks = self._text_block_spans(ctx)
        violations = []

        for _, line in ctx.text.iter_lines():
            if any(block.start < line.start < block.end for block in text_blocks):
                continue
            run_end = line.start
            while run_end < line.end and data[run_end] in (_SPACE, _TAB):
                run_end += 1
            if run_end == line.start or run_end == line.end:
                # No indentation, or a whitespace-only line
                continue

            run = Span(line.start, run_end)
            leading = data[line.start:run_end]

            if style == IndentStyle.SPACES:
                first_tab = leading.find(b"\t")
                if first_tab == -1:
                    continue
                replacement = leading.decode('ascii').replace("\t", " " * width)
                violations.append(IndentViolation(
                    span=Span(line.start + first_tab, run_end),
                    run=run,
                    replacement=replacement,
                    message="Use spaces for indentation",
                ))
            else:
                if b"\t" in leading or len(leading) % width != 0:
                    continue
                violations.append(IndentViolation(
                    span=run,
                    run=run,
                    replacement="\t" * (len(leading) // width),
                    message="Use tabs for indentation",
                ))

        return violations

    def _text_block_spans(self, ctx: RuleContext) -> List[Span]:
        """Spans of every text block literal in the tree."""
        spans = []
        for node in ctx.walk_nodes():
            if node.type not in _STRING_NODE_TYPES:
                continue
            span = ctx.node_span(node)
            if ctx.text.slice(span).startswith(b'"""'):
                spans.append(span)
        return spans
