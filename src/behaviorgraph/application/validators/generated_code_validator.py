"""Runs generated-code rules over emitted classes."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from behaviorgraph.application.validators._registry import default_rules

if TYPE_CHECKING:
    from behaviorgraph.domain.model.finding import Finding
    from behaviorgraph.domain.model.generated_code import GeneratedClass
    from behaviorgraph.domain.ports.code_rule import CodeRuleProtocol

logger = logging.getLogger(__name__)


class GeneratedCodeValidator:
    """Applies every configured rule to every generated class.

    Example:
        validator = GeneratedCodeValidator(rules_from_config(config))
        findings = validator.validate([coordinator.source])
    """

    def __init__(self, rules: Sequence[CodeRuleProtocol] | None = None) -> None:
        """Initialize validator.

        Args:
            rules: Rules to run (all registered rules if None)
        """
        self._rules = tuple(rules) if rules is not None else default_rules()

    @property
    def rule_count(self) -> int:
        """Number of configured rules."""
        return len(self._rules)

    def validate(self, classes: Sequence[GeneratedClass]) -> tuple[Finding, ...]:
        """Validate classes.

        Args:
            classes: Generated classes

        Returns:
            Findings grouped by class, then by rule order
        """
        findings: list[Finding] = []
        for generated in classes:
            for rule in self._rules:
                findings.extend(rule.check(generated))
            logger.debug("Validated generated class %s", generated.class_name)
        return tuple(findings)
