"""Null safety rule: GameObject.Find results should be null-checked."""

from __future__ import annotations

from typing import TYPE_CHECKING

from behaviorgraph.application.validators._base import BaseCodeRule
from behaviorgraph.domain.model.enums import Severity

if TYPE_CHECKING:
    from behaviorgraph.domain.model.finding import Finding
    from behaviorgraph.domain.model.generated_code import GeneratedClass

# Lines searched for a null check on each side of the lookup
_WINDOW = 2


class NullSafetyRule(BaseCodeRule):
    """Reports GameObject.Find calls with no null check nearby.

    Violation severity: INFO.
    """

    name = "null_safety"

    def check(self, generated: GeneratedClass) -> tuple[Finding, ...]:
        """Check every GameObject.Find line."""
        lines = generated.source_code.splitlines()
        findings: list[Finding] = []

        for index, text in enumerate(lines):
            if "GameObject.Find" not in text:
                continue
            window = lines[max(0, index - _WINDOW) : index + _WINDOW + 1]
            if any("!= null" in nearby or "== null" in nearby for nearby in window):
                continue
            findings.append(
                self._finding(
                    generated,
                    Severity.INFO,
                    "GameObject.Find call without null check",
                    line=index + 1,
                    suggestion="Add null check after GameObject.Find",
                )
            )

        return tuple(findings)
