"""
Built-in jfmt rules.

RULES is the Rule Set: every rule the engine runs, in a fixed order.
"""

from .imports_wildcard import NoWildcardImportsRule
from .style_empty_statement import NoEmptyStatementRule
from .style_indent_style import IndentStyleRule
from .style_max_line_length import MaxLineLengthRule

RULES = [
    NoWildcardImportsRule(),
    NoEmptyStatementRule(),
    MaxLineLengthRule(),
    IndentStyleRule(),
]

__all__ = [
    "RULES",
    "NoWildcardImportsRule",
    "NoEmptyStatementRule",
    "MaxLineLengthRule",
    "IndentStyleRule",
]
