"""
Core types for the jfmt engine.

This module provides the value types shared by the engine and the rules:
spans, diagnostics, edits, rule metadata, the per-file rule context and the
Rule / FixableRule protocols.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Iterator, Literal, Protocol, Tuple, runtime_checkable

if TYPE_CHECKING:
    from .config import Configuration
    from .position import SourceText


# Type aliases for clarity
Severity = Literal["warning", "error"]
AutofixSafety = Literal["safe", "suggest-only"]
Position = Tuple[int, int]  # (line, column) 1-based


@dataclass(frozen=True, order=True)
class Span:
    """Half-open byte range [start, end) within a source text."""
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.start > self.end:
            raise ValueError(f"invalid span [{self.start}, {self.end})")

    @property
    def length(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "Span") -> bool:
        """True when the two ranges share at least one byte.

        An empty span sitting strictly inside a non-empty one also counts,
        since its insertion point would be swallowed by the other edit.
        """
        if self.start == self.end or other.start == other.end:
            return other.start < self.start < other.end or self.start < other.start < self.end
        return self.start < other.end and other.start < self.end


@dataclass(frozen=True)
class Diagnostic:
    """A single finding reported by a rule."""
    rule_id: str
    severity: Severity
    span: Span
    message: str

    @property
    def sort_key(self) -> Tuple[int, str]:
        return (self.span.start, self.rule_id)


@dataclass(frozen=True)
class Edit:
    """Replace bytes [span.start, span.end) of the original text with replacement."""
    span: Span
    replacement: str
    rule_id: str = ""


@dataclass(frozen=True)
class RuleMeta:
    """Metadata about a rule.

    Attributes:
        id: Stable rule identifier (e.g., "no-wildcard-imports")
        description: Human-readable description
        autofix_safety: "safe" when the rule can rewrite code, otherwise "suggest-only"
    """
    id: str
    description: str = ""
    autofix_safety: AutofixSafety = "suggest-only"


@dataclass(frozen=True)
class RuleContext:
    """Read-only input handed to every rule for one file."""
    text: "SourceText"
    tree: Any
    config: "Configuration"
    file_path: str = "<memory>"

    def walk_nodes(self, start_node=None) -> Iterator[Any]:
        """Walk all nodes of the syntax tree in document order."""
        if start_node is None:
            if self.tree is None:
                return
            start_node = getattr(self.tree, 'root_node', self.tree)

        stack = [start_node]
        while stack:
            node = stack.pop()
            yield node
            children = getattr(node, 'children', None) or []
            stack.extend(reversed(children))

    def node_span(self, node) -> Span:
        """Get the byte span of a tree node."""
        return Span(node.start_byte, node.end_byte)

    def node_text(self, node) -> str:
        return self.text.text(self.node_span(node))


@runtime_checkable
class Rule(Protocol):
    """Protocol for all rules.

    Rules are stateless: a rule is a pure function of the context it is given
    and may be shared between threads.
    """
    meta: RuleMeta

    def check(self, ctx: RuleContext) -> Iterable[Diagnostic]:
        """Return the diagnostics for one file."""
        ...


@runtime_checkable
class FixableRule(Rule, Protocol):
    """A rule that can also propose edits for the violations it reports."""

    def fix(self, ctx: RuleContext) -> Iterable[Edit]:
        """Return edits computed against the original, unmodified text."""
        ...


def is_fixable(rule: Any) -> bool:
    """Check whether a rule offers the fix capability."""
    return callable(getattr(rule, 'fix', None))
