"""Generated-code validation rules.

Rules check emitted UdonSharp classes:
- CSharpSyntaxRule: Class name legality and balanced delimiters
- InheritanceRule: UdonSharpBehaviour base class
- NamingConventionRule: PascalCase names
- AccessModifierRule: Public Unity event methods
- NetworkSyncRule: Synced field handling
- PerformanceRule: No lookups in per-frame methods
- NullSafetyRule: Null checks after GameObject.Find
"""

from behaviorgraph.application.validators._base import BaseCodeRule
from behaviorgraph.application.validators._registry import (
    default_rules,
    rule_names,
    rules_from_config,
)
from behaviorgraph.application.validators.access_rule import AccessModifierRule
from behaviorgraph.application.validators.generated_code_validator import GeneratedCodeValidator
from behaviorgraph.application.validators.inheritance_rule import InheritanceRule
from behaviorgraph.application.validators.naming_rule import NamingConventionRule
from behaviorgraph.application.validators.network_sync_rule import NetworkSyncRule
from behaviorgraph.application.validators.null_safety_rule import NullSafetyRule
from behaviorgraph.application.validators.performance_rule import PerformanceRule
from behaviorgraph.application.validators.syntax_rule import CSharpSyntaxRule

__all__ = [
    # Base
    "BaseCodeRule",
    # Rules
    "CSharpSyntaxRule",
    "InheritanceRule",
    "NamingConventionRule",
    "AccessModifierRule",
    "NetworkSyncRule",
    "PerformanceRule",
    "NullSafetyRule",
    # Runner
    "GeneratedCodeValidator",
    # Factory functions
    "default_rules",
    "rule_names",
    "rules_from_config",
]
