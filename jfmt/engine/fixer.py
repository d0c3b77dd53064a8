"""
Fix engine: gathers edits from fix-capable rules and applies them.

Every edit is computed against the original text. Edits are sorted, checked
for overlap and then applied in one pass that copies the untouched bytes of
the original buffer and splices in each replacement, so no offset is ever
invalidated by an earlier edit.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

from .errors import ConflictingEdits, OutOfRange
from .position import SourceText
from .types import Edit, FixableRule, Rule, RuleContext, is_fixable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixResult:
    """Outcome of a fix pass over one file."""
    text: SourceText
    applied: Tuple[Edit, ...]

    @property
    def changed(self) -> bool:
        return bool(self.applied)


def sort_edits(edits: Iterable[Edit]) -> List[Edit]:
    """Order edits by start offset, then end offset."""
    return sorted(edits, key=lambda e: (e.span.start, e.span.end))


def validate_edits(edits: List[Edit]) -> None:
    """Raise ConflictingEdits if two sorted edits overlap."""
    for prev, cur in zip(edits, edits[1:]):
        if prev.span.overlaps(cur.span):
            raise ConflictingEdits(prev, cur)


def apply_edits(text: Union[SourceText, str, bytes], edits: Iterable[Edit]) -> SourceText:
    """
    Apply a set of edits to text in a single pass.

    Args:
        text: The original, unmodified text every edit was computed against
        edits: Edits in any order

    Returns:
        New SourceText with every replacement made

    Raises:
        OutOfRange: if an edit lies outside the text
        ConflictingEdits: if two edits overlap; nothing is applied
    """
    source = SourceText.coerce(text)
    ordered = sort_edits(edits)
    if not ordered:
        return source

    data = source.data
    for edit in ordered:
        if edit.span.end > len(data):
            raise OutOfRange(
                f"edit from '{edit.rule_id}' at [{edit.span.start}, {edit.span.end}) "
                f"outside text of {len(data)} bytes"
            )
    validate_edits(ordered)

    parts: List[bytes] = []
    cursor = 0
    for edit in ordered:
        parts.append(data[cursor:edit.span.start])
        parts.append(edit.replacement.encode('utf-8'))
        cursor = edit.span.end
    parts.append(data[cursor:])
    return SourceText(b"".join(parts))


def collect_edits(ctx: RuleContext, rules: Iterable[Rule]) -> List[Edit]:
    """
    Run the fix pass of every fix-capable rule over the same original text.

    A rule whose fix raises contributes no edits; an edit outside the text is
    dropped. Both are logged.
    """
    text_len = len(ctx.text)
    edits: List[Edit] = []
    fixable: List[FixableRule] = [rule for rule in rules if is_fixable(rule)]

    for rule in fixable:
        rule_id = rule.meta.id
        try:
            proposed = list(rule.fix(ctx))
        except Exception:
            logger.exception("%s: fix for rule '%s' failed; skipping its edits", ctx.file_path, rule_id)
            continue

        for edit in proposed:
            if not edit.rule_id:
                edit = Edit(edit.span, edit.replacement, rule_id)
            if edit.span.end > text_len:
                logger.error(
                    "%s: dropping edit from '%s': span [%d, %d) outside text of %d bytes",
                    ctx.file_path, rule_id, edit.span.start, edit.span.end, text_len,
                )
                continue
            edits.append(edit)

    return edits


def fix(ctx: RuleContext, rules: Iterable[Rule]) -> FixResult:
    """
    Compute and apply every safe fix for one file.

    Raises:
        ConflictingEdits: if two rules proposed overlapping edits
    """
    edits = collect_edits(ctx, rules)
    new_text = apply_edits(ctx.text, edits)
    # Edits that change nothing are not reported as applied.
    effective = [e for e in edits if ctx.text.slice(e.span) != e.replacement.encode('utf-8')]
    if effective:
        logger.info("%s: applied %d edit(s)", ctx.file_path, len(effective))
    return FixResult(text=new_text, applied=tuple(sort_edits(effective)))
