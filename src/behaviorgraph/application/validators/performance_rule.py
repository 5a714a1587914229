"""Performance rule: no GameObject.Find in per-frame methods."""

from __future__ import annotations

from typing import TYPE_CHECKING

from behaviorgraph.application.validators._base import BaseCodeRule
from behaviorgraph.application.validators._source import declaration_line, declared_methods
from behaviorgraph.domain.model.enums import Severity

if TYPE_CHECKING:
    from behaviorgraph.domain.model.finding import Finding
    from behaviorgraph.domain.model.generated_code import GeneratedClass

PER_FRAME_METHODS: frozenset[str] = frozenset({"Update", "LateUpdate", "FixedUpdate"})


class PerformanceRule(BaseCodeRule):
    """Warns about GameObject.Find calls inside Update methods."""

    name = "performance"

    def check(self, generated: GeneratedClass) -> tuple[Finding, ...]:
        """Check per-frame method bodies."""
        return tuple(
            self._finding(
                generated,
                Severity.WARNING,
                f"GameObject.Find in {method.name} method can impact performance",
                function=method.name,
                line=declaration_line(generated.source_code, method.declaration),
                suggestion="Cache GameObject references in Start() instead",
            )
            for method in declared_methods(generated)
            if method.name in PER_FRAME_METHODS and "GameObject.Find" in method.body
        )
