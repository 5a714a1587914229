"""Generated-code rule protocol."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from behaviorgraph.domain.model.finding import Finding
    from behaviorgraph.domain.model.generated_code import GeneratedClass


class CodeRuleProtocol(Protocol):
    """Contract for rules checking generated C# classes."""

    @property
    def name(self) -> str:
        """Unique rule name, used by PipelineConfig.disabled_rules."""
        ...

    def check(self, generated: GeneratedClass) -> tuple[Finding, ...]:
        """Check one generated class.

        Args:
            generated: Generated class

        Returns:
            Findings in source order
        """
        ...
