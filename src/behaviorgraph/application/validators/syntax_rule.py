"""C# syntax rule: legal class name and balanced delimiters."""

from __future__ import annotations

from typing import TYPE_CHECKING

from behaviorgraph.application.validators._base import BaseCodeRule
from behaviorgraph.application.validators._source import strip_literals
from behaviorgraph.domain.model.enums import Severity
from behaviorgraph.domain.naming import CSHARP_KEYWORDS, is_valid_identifier

if TYPE_CHECKING:
    from behaviorgraph.domain.model.finding import Finding
    from behaviorgraph.domain.model.generated_code import GeneratedClass


class CSharpSyntaxRule(BaseCodeRule):
    """Rejects invalid class names and unbalanced braces or parentheses.

    String literals and line comments are ignored when counting.
    Violation severity: ERROR.
    """

    name = "csharp_syntax"

    def check(self, generated: GeneratedClass) -> tuple[Finding, ...]:
        """Check class name and delimiter balance."""
        findings: list[Finding] = []

        if not is_valid_identifier(generated.class_name):
            findings.append(
                self._finding(
                    generated,
                    Severity.ERROR,
                    f"Invalid C# class name: {generated.class_name}",
                    suggestion="Use a valid C# identifier for the class name",
                )
            )
        elif generated.class_name in CSHARP_KEYWORDS:
            findings.append(
                self._finding(
                    generated,
                    Severity.ERROR,
                    f"Class name '{generated.class_name}' is a reserved C# keyword",
                    suggestion="Rename the class",
                )
            )

        code = strip_literals(generated.source_code)
        for opening, closing, label in (("{", "}", "braces"), ("(", ")", "parentheses")):
            opened = code.count(opening)
            closed = code.count(closing)
            if opened != closed:
                findings.append(
                    self._finding(
                        generated,
                        Severity.ERROR,
                        f"Unbalanced {label}: {opened} open, {closed} close",
                        suggestion=f"Check for missing or extra {label} in the generated code",
                    )
                )

        return tuple(findings)
