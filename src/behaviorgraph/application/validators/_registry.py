"""Rule registry for generated-code validation.

Central registry of all rules with factory functions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from behaviorgraph.application.validators._base import BaseCodeRule
from behaviorgraph.application.validators.access_rule import AccessModifierRule
from behaviorgraph.application.validators.inheritance_rule import InheritanceRule
from behaviorgraph.application.validators.naming_rule import NamingConventionRule
from behaviorgraph.application.validators.network_sync_rule import NetworkSyncRule
from behaviorgraph.application.validators.null_safety_rule import NullSafetyRule
from behaviorgraph.application.validators.performance_rule import PerformanceRule
from behaviorgraph.application.validators.syntax_rule import CSharpSyntaxRule
from behaviorgraph.domain.ports.code_rule import CodeRuleProtocol

if TYPE_CHECKING:
    from behaviorgraph.domain.model.configuration import PipelineConfig


# Registry - tuple for immutability
# Order matters: findings are reported in this order per class
_ALL_RULES: tuple[type[BaseCodeRule], ...] = (
    CSharpSyntaxRule,
    InheritanceRule,
    NamingConventionRule,
    AccessModifierRule,
    NetworkSyncRule,
    PerformanceRule,
    NullSafetyRule,
)


def rule_names() -> tuple[str, ...]:
    """Names of all registered rules, in run order."""
    return tuple(rule_cls.name for rule_cls in _ALL_RULES)


def default_rules() -> tuple[CodeRuleProtocol, ...]:
    """Instantiate every registered rule.

    Returns:
        Tuple of all rules
    """
    return tuple(rule_cls() for rule_cls in _ALL_RULES)


def rules_from_config(config: PipelineConfig) -> tuple[CodeRuleProtocol, ...]:
    """Instantiate rules enabled by config.

    Rules are created using their from_config() factory method.
    If from_config() returns None, the rule is disabled.

    Args:
        config: Pipeline configuration

    Returns:
        Tuple of enabled rules
    """
    rules: list[CodeRuleProtocol] = []

    for rule_cls in _ALL_RULES:
        rule = rule_cls.from_config(config)
        if rule is not None:
            rules.append(rule)

    return tuple(rules)
