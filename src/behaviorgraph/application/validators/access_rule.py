"""Access modifier rule: Unity event methods must be public."""

from __future__ import annotations

from typing import TYPE_CHECKING

from behaviorgraph.application.validators._base import BaseCodeRule
from behaviorgraph.application.validators._source import declaration_line, declared_methods
from behaviorgraph.domain.model.enums import Severity

if TYPE_CHECKING:
    from behaviorgraph.domain.model.finding import Finding
    from behaviorgraph.domain.model.generated_code import GeneratedClass

# Event methods UdonSharp only dispatches when public
PUBLIC_EVENT_METHODS: frozenset[str] = frozenset(
    {"Start", "Update", "OnEnable", "OnDisable", "OnTriggerEnter"}
)


class AccessModifierRule(BaseCodeRule):
    """Warns when a Unity event method is not declared public."""

    name = "access_modifier"

    def check(self, generated: GeneratedClass) -> tuple[Finding, ...]:
        """Check declarations of Unity event methods."""
        return tuple(
            self._finding(
                generated,
                Severity.WARNING,
                f"Unity event method '{method.name}' should be public",
                function=method.name,
                line=declaration_line(generated.source_code, method.declaration),
                suggestion="Make Unity event methods public",
            )
            for method in declared_methods(generated)
            if method.name in PUBLIC_EVENT_METHODS and "public " not in method.declaration
        )
