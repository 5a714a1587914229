"""Inheritance rule: generated classes derive from UdonSharpBehaviour."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from behaviorgraph.application.validators._base import BaseCodeRule
from behaviorgraph.domain.model.enums import Severity

if TYPE_CHECKING:
    from behaviorgraph.domain.model.finding import Finding
    from behaviorgraph.domain.model.generated_code import GeneratedClass

_BASE_CLASS = re.compile(r":\s*UdonSharpBehaviour\b")


class InheritanceRule(BaseCodeRule):
    """Rejects classes that do not inherit UdonSharpBehaviour.

    Violation severity: ERROR.
    """

    name = "inheritance"

    def check(self, generated: GeneratedClass) -> tuple[Finding, ...]:
        """Check the base class."""
        if _BASE_CLASS.search(generated.source_code):
            return ()
        return (
            self._finding(
                generated,
                Severity.ERROR,
                "Class must inherit from UdonSharpBehaviour",
                suggestion="Add ': UdonSharpBehaviour' to class declaration",
            ),
        )
