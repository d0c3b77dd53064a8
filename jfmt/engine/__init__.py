"""
jfmt engine package.

This package provides the rule-evaluation and autofix engine: position
index, value types, lint and fix engines, and the Java parser adapter.
"""

from .types import (
    Span, Diagnostic, Edit, RuleMeta, RuleContext, Rule, FixableRule,
    Severity, Position, is_fixable
)

from .errors import (
    JfmtError, OutOfRange, ParseError, ConfigError, RuleError, ConflictingEdits
)

from .position import SourceText

from .config import (
    Configuration, IndentStyle, load_config, load_config_from, find_config_file, get_default_config
)

from .registry import (
    Registry, get_registry, get_rule, get_all_rules, get_rule_ids, get_enabled_rules
)

from .linter import lint, lint_source
from .fixer import FixResult, apply_edits, collect_edits, fix

__all__ = [
    # Types
    "Span", "Diagnostic", "Edit", "RuleMeta", "RuleContext", "Rule", "FixableRule",
    "Severity", "Position", "is_fixable", "SourceText",

    # Errors
    "JfmtError", "OutOfRange", "ParseError", "ConfigError", "RuleError", "ConflictingEdits",

    # Config
    "Configuration", "IndentStyle", "load_config", "load_config_from", "find_config_file",
    "get_default_config",

    # Registry
    "Registry", "get_registry", "get_rule", "get_all_rules", "get_rule_ids", "get_enabled_rules",

    # Engines
    "lint", "lint_source", "FixResult", "apply_edits", "collect_edits", "fix",
]
