"""
Registry for rules.

This module provides a central registry holding the Rule Set in a fixed
order. The default registry is filled from jfmt.rules.RULES the first time
it is used.
"""

import fnmatch
import logging
import threading
from typing import Dict, Iterable, List, Optional

from .types import Rule

logger = logging.getLogger(__name__)


class Registry:
    """Ordered collection of rules indexed by id."""

    def __init__(self, rules: Optional[Iterable[Rule]] = None):
        self._rules: List[Rule] = []
        self._rule_index: Dict[str, Rule] = {}  # id -> rule
        for rule in rules or []:
            self.register_rule(rule)

    def register_rule(self, rule: Rule) -> None:
        """Register a rule in the registry."""
        if rule.meta.id in self._rule_index:
            # Skip duplicate registration silently
            return

        self._rules.append(rule)
        self._rule_index[rule.meta.id] = rule

    def get_rule(self, rule_id: str) -> Optional[Rule]:
        """Get rule by id."""
        return self._rule_index.get(rule_id)

    def get_all_rules(self) -> List[Rule]:
        """Get all registered rules."""
        return self._rules.copy()

    def get_rule_ids(self) -> List[str]:
        """Get all registered rule IDs."""
        return list(self._rule_index.keys())

    def get_enabled_rules(self, patterns: Optional[List[str]] = None) -> List[Rule]:
        """Get rules whose id matches any of the patterns, in registry order."""
        if not patterns or patterns == ["*"]:
            return self.get_all_rules()

        for pattern in patterns:
            is_glob = any(ch in pattern for ch in "*?[")
            if not is_glob and pattern not in self._rule_index:
                logger.warning("Rule '%s' not found", pattern)

        return [
            rule for rule in self._rules
            if any(fnmatch.fnmatchcase(rule.meta.id, pattern) for pattern in patterns)
        ]

    def clear(self) -> None:
        """Clear all registered rules (mainly for testing)."""
        self._rules.clear()
        self._rule_index.clear()


# Global registry instance
_global_registry: Optional[Registry] = None
_global_lock = threading.Lock()


def get_registry() -> Registry:
    """Get the global registry, loading the built-in rules on first use."""
    global _global_registry
    with _global_lock:
        if _global_registry is None:
            from ..rules import RULES
            _global_registry = Registry(RULES)
        return _global_registry


def get_rule(rule_id: str) -> Optional[Rule]:
    """Get rule by id from the global registry."""
    return get_registry().get_rule(rule_id)


def get_all_rules() -> List[Rule]:
    """Get all registered rules from the global registry."""
    return get_registry().get_all_rules()


def get_rule_ids() -> List[str]:
    """Get all registered rule IDs."""
    return get_registry().get_rule_ids()


def get_enabled_rules(patterns: Optional[List[str]] = None) -> List[Rule]:
    """Get rules enabled by patterns from the global registry."""
    return get_registry().get_enabled_rules(patterns)
