"""
Exception types raised by the jfmt engine.

Failures are scoped to the smallest unit possible: a RuleError affects one
rule on one file, ConflictingEdits aborts the fix step of one file, and
OutOfRange marks a single bad span that is dropped after being logged.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .types import Edit


class JfmtError(Exception):
    """Base class for all engine errors."""


class OutOfRange(JfmtError, IndexError):
    """An offset, position or span lies outside the source text."""


class ParseError(JfmtError):
    """The Java grammar is unavailable or the parser produced no tree."""


class ConfigError(JfmtError):
    """A configuration file or value is invalid."""


class RuleError(JfmtError):
    """A rule could not evaluate the tree it was given."""

    def __init__(self, rule_id: str, cause: Optional[BaseException] = None):
        self.rule_id = rule_id
        self.cause = cause
        if cause is not None:
            detail = f"{type(cause).__name__}: {cause}"
        else:
            detail = "unknown failure"
        super().__init__(f"rule '{rule_id}' failed: {detail}")


class ConflictingEdits(JfmtError):
    """Two proposed edits overlap; no edit of the file may be applied."""

    def __init__(self, first: "Edit", second: "Edit"):
        self.first = first
        self.second = second
        super().__init__(
            f"edit from '{first.rule_id}' at [{first.span.start}, {first.span.end}) "
            f"overlaps edit from '{second.rule_id}' at [{second.span.start}, {second.span.end})"
        )
