"""Rule: no-wildcard-imports

Detects wildcard imports (import x.y.*;) in Java code.

Wildcard imports hide which types a file actually depends on and can make
new classes in the imported package shadow or clash with existing names.
No fix is offered: turning a wildcard into explicit imports needs to know
which symbols are used.

Examples:
- import java.util.*;              // BAD
- import static org.junit.Assert.*; // BAD, static wildcards are flagged too
- import java.util.List;           // GOOD
"""

import re
from typing import Iterator

from jfmt.engine.types import Diagnostic, RuleContext, RuleMeta

_WHITESPACE = re.compile(rb"\s+")


class NoWildcardImportsRule:
    """Flag import declarations ending in a wildcard segment."""

    meta = RuleMeta(
        id="no-wildcard-imports",
        description="Wildcard import; use explicit class imports",
        autofix_safety="suggest-only",
    )

    def check(self, ctx: RuleContext) -> Iterator[Diagnostic]:
        """Find wildcard imports in the file."""
        for node in ctx.walk_nodes():
            if node.type != 'import_declaration':
                continue
            if not self._is_wildcard_import(node, ctx):
                continue

            span = ctx.node_span(node)
            import_text = " ".join(ctx.text.text(span).split())
            yield Diagnostic(
                rule_id=self.meta.id,
                severity="warning",
                span=span,
                message=f"Avoid wildcard imports (use explicit classes): {import_text}",
            )

    def _is_wildcard_import(self, node, ctx: RuleContext) -> bool:
        """Check whether the imported path ends in '*'."""
        for child in node.children:
            if child.type in ('asterisk', '*'):
                return True

        # Fallback on the statement text for grammars without an asterisk node
        raw = _WHITESPACE.sub(b"", ctx.text.slice(ctx.node_span(node)))
        return raw.rstrip(b";").endswith(b".*")
