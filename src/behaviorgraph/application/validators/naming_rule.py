"""Naming convention rule: PascalCase classes and methods."""

from __future__ import annotations

from typing import TYPE_CHECKING

from behaviorgraph.application.validators._base import BaseCodeRule
from behaviorgraph.application.validators._source import declaration_line, declared_methods
from behaviorgraph.domain.model.enums import Severity
from behaviorgraph.domain.naming import is_pascal_case

if TYPE_CHECKING:
    from behaviorgraph.domain.model.finding import Finding
    from behaviorgraph.domain.model.generated_code import GeneratedClass


class NamingConventionRule(BaseCodeRule):
    """Warns about class and method names that are not PascalCase."""

    name = "naming_convention"

    def check(self, generated: GeneratedClass) -> tuple[Finding, ...]:
        """Check class and method names."""
        findings: list[Finding] = []

        if not is_pascal_case(generated.class_name):
            findings.append(
                self._finding(
                    generated,
                    Severity.WARNING,
                    f"Class name '{generated.class_name}' should use PascalCase",
                    suggestion="Use PascalCase for class names (e.g., PlayerManager)",
                )
            )

        for method in declared_methods(generated):
            if is_pascal_case(method.name):
                continue
            findings.append(
                self._finding(
                    generated,
                    Severity.WARNING,
                    f"Method name '{method.name}' should use PascalCase",
                    function=method.name,
                    line=declaration_line(generated.source_code, method.declaration),
                    suggestion="Use PascalCase for method names (e.g., UpdatePlayerCount)",
                )
            )

        return tuple(findings)
