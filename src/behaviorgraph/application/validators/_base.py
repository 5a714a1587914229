"""Base class for generated-code rules.

Provides default implementation of CodeRuleProtocol.
Concrete rules inherit from this.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Self

from behaviorgraph.domain.model.enums import ErrorCategory
from behaviorgraph.domain.model.finding import Finding

if TYPE_CHECKING:
    from behaviorgraph.domain.model.configuration import PipelineConfig
    from behaviorgraph.domain.model.enums import Severity
    from behaviorgraph.domain.model.generated_code import GeneratedClass


class BaseCodeRule(ABC):
    """Base class for rules implementing CodeRuleProtocol.

    Concrete rules must:
    1. Set `name` class attribute
    2. Implement `check()` method
    3. Optionally override `from_config()` for conditional activation

    Example:
        class NoTodoRule(BaseCodeRule):
            name = "no_todo"

            def check(self, generated: GeneratedClass) -> tuple[Finding, ...]:
                if "TODO" not in generated.source_code:
                    return ()
                return (self._finding(generated, Severity.INFO, "TODO left in code"),)
    """

    name: str
    """Unique rule name, matched against PipelineConfig.disabled_rules."""

    @abstractmethod
    def check(self, generated: GeneratedClass) -> tuple[Finding, ...]:
        """Check one generated class.

        Args:
            generated: Generated class

        Returns:
            Findings in source order (empty if clean)
        """

    @classmethod
    def from_config(cls, config: PipelineConfig) -> Self | None:
        """Create rule from config.

        Default: enabled unless listed in config.disabled_rules.

        Args:
            config: Pipeline configuration

        Returns:
            Rule instance if enabled, None if disabled
        """
        if cls.name in config.disabled_rules:
            return None
        return cls()

    def _finding(
        self,
        generated: GeneratedClass,
        severity: Severity,
        message: str,
        *,
        function: str | None = None,
        line: int | None = None,
        suggestion: str | None = None,
    ) -> Finding:
        """Build a GENERATED_CODE_ISSUE finding attributed to this rule."""
        return Finding(
            category=ErrorCategory.GENERATED_CODE_ISSUE,
            severity=severity,
            message=message,
            unit=generated.class_name,
            function=function,
            rule=self.name,
            line=line,
            suggestion=suggestion,
        )
