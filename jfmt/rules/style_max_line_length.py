"""
Rule: max-line-length

Flags lines longer than the configured maximum. Length is counted in
characters (code points), not counting the line terminator. The reported
span covers only the excess part of the line. No fix is offered; how to
shorten a line is a content decision.
"""

from typing import Iterator

from jfmt.engine.types import Diagnostic, RuleContext, RuleMeta, Span


class MaxLineLengthRule:
    """Flag lines exceeding the configured maximum length."""

    meta = RuleMeta(
        id="max-line-length",
        description="Lines should not exceed the configured maximum length",
        autofix_safety="suggest-only",
    )

    def check(self, ctx: RuleContext) -> Iterator[Diagnostic]:
        """Check for lines exceeding maximum length."""
        max_length = ctx.config.max_line_length
        text = ctx.text

        for _, line_span in text.iter_lines():
            # A line cannot hold more characters than bytes
            if line_span.length <= max_length:
                continue
            length = text.char_length(line_span)
            if length <= max_length:
                continue

            excess_start = text.advance_chars(line_span.start, max_length, limit=line_span.end)
            yield Diagnostic(
                rule_id=self.meta.id,
                severity="warning",
                span=Span(excess_start, line_span.end),
                message=f"Line exceeds {max_length} characters ({length} > {max_length})",
            )
