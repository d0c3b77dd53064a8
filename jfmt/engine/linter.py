"""
Lint engine: runs every rule over one file and orders the results.
"""

import logging
from typing import Iterable, List, Optional

from .errors import OutOfRange, RuleError
from .position import SourceText
from .registry import get_all_rules
from .types import Diagnostic, Rule, RuleContext, Span

logger = logging.getLogger(__name__)


def rule_error_diagnostic(error: RuleError) -> Diagnostic:
    """Turn a failed rule into a diagnostic reported against that rule."""
    cause = error.cause
    detail = f"{type(cause).__name__}: {cause}" if cause is not None else str(error)
    return Diagnostic(
        rule_id=error.rule_id,
        severity="error",
        span=Span(0, 0),
        message=f"internal error: {detail}",
    )


def run_rule(rule: Rule, ctx: RuleContext) -> List[Diagnostic]:
    """Run one rule's check, wrapping any failure in a RuleError."""
    rule_id = rule.meta.id
    try:
        return list(rule.check(ctx))
    except RuleError:
        raise
    except Exception as e:
        raise RuleError(rule_id, e) from e


def lint(ctx: RuleContext, rules: Iterable[Rule]) -> List[Diagnostic]:
    """
    Run every rule's check over one file.

    A failing rule is reported as a single error diagnostic for that rule and
    never stops the remaining rules. Diagnostics whose span falls outside the
    text are logged and dropped.

    Returns:
        Diagnostics sorted by (span.start, rule_id)
    """
    text_len = len(ctx.text)
    diagnostics: List[Diagnostic] = []

    for rule in rules:
        try:
            found = run_rule(rule, ctx)
        except RuleError as e:
            logger.warning("%s: %s", ctx.file_path, e, exc_info=e.cause)
            diagnostics.append(rule_error_diagnostic(e))
            continue

        for diagnostic in found:
            if diagnostic.span.end > text_len:
                logger.error(
                    "%s: dropping diagnostic from '%s': %s",
                    ctx.file_path,
                    diagnostic.rule_id,
                    OutOfRange(f"span [{diagnostic.span.start}, {diagnostic.span.end}) "
                               f"outside text of {text_len} bytes"),
                )
                continue
            diagnostics.append(diagnostic)

    diagnostics.sort(key=lambda d: d.sort_key)
    return diagnostics


def lint_source(text, tree, config, rules: Optional[Iterable[Rule]] = None,
                file_path: str = "<memory>") -> List[Diagnostic]:
    """Convenience wrapper building the context from its parts.

    Uses every registered rule when rules is None.
    """
    ctx = RuleContext(
        text=SourceText.coerce(text),
        tree=tree,
        config=config,
        file_path=file_path,
    )
    return lint(ctx, get_all_rules() if rules is None else rules)
