"""
Diagnostic output formatting for the jfmt engine.

The engine reports byte spans; this module converts them to line/column
positions for display. A diagnostic whose position cannot be computed is
logged and skipped so one bad span never aborts the output of a file.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from .errors import OutOfRange
from .position import SourceText
from .types import Diagnostic

logger = logging.getLogger(__name__)


def format_diagnostic(path: str, diagnostic: Diagnostic, text: SourceText) -> Optional[str]:
    """Render a diagnostic as 'path:line:column: rule-id: message'."""
    try:
        line, column = text.offset_to_position(diagnostic.span.start)
    except OutOfRange as e:
        logger.error("%s: cannot position diagnostic from '%s': %s", path, diagnostic.rule_id, e)
        return None
    return f"{path}:{line}:{column}: {diagnostic.rule_id}: {diagnostic.message}"


def format_diagnostics(path: str, diagnostics: Iterable[Diagnostic], text: SourceText) -> List[str]:
    """Render every diagnostic of one file, skipping those that cannot be positioned."""
    lines = []
    for diagnostic in diagnostics:
        rendered = format_diagnostic(path, diagnostic, text)
        if rendered is not None:
            lines.append(rendered)
    return lines


def diagnostics_to_json(path: str, diagnostics: Iterable[Diagnostic], text: SourceText) -> List[Dict[str, Any]]:
    """Convert diagnostics of one file to JSON-serializable dictionaries."""
    results = []
    for diagnostic in diagnostics:
        try:
            line, column = text.offset_to_position(diagnostic.span.start)
        except OutOfRange as e:
            logger.error("%s: cannot position diagnostic from '%s': %s", path, diagnostic.rule_id, e)
            continue
        results.append({
            "file": path,
            "rule_id": diagnostic.rule_id,
            "severity": diagnostic.severity,
            "message": diagnostic.message,
            "line": line,
            "column": column,
            "start_byte": diagnostic.span.start,
            "end_byte": diagnostic.span.end,
        })
    return results
