"""Network sync rule: synced fields need ownership checks and serialization."""

from __future__ import annotations

from typing import TYPE_CHECKING

from behaviorgraph.application.validators._base import BaseCodeRule
from behaviorgraph.domain.model.enums import Severity

if TYPE_CHECKING:
    from behaviorgraph.domain.model.finding import Finding
    from behaviorgraph.domain.model.generated_code import GeneratedClass


class NetworkSyncRule(BaseCodeRule):
    """Warns about [UdonSynced] fields without master checks or serialization."""

    name = "network_sync"

    def check(self, generated: GeneratedClass) -> tuple[Finding, ...]:
        """Check classes declaring synchronized fields."""
        source = generated.source_code
        if "[UdonSynced" not in source:
            return ()

        findings: list[Finding] = []
        if "Networking.IsMaster" not in source:
            findings.append(
                self._finding(
                    generated,
                    Severity.WARNING,
                    "Synchronized fields should have master client validation",
                    suggestion="Add Networking.IsMaster checks before modifying synced fields",
                )
            )
        if "RequestSerialization" not in source:
            findings.append(
                self._finding(
                    generated,
                    Severity.WARNING,
                    "UdonSynced fields detected but no RequestSerialization calls found",
                    suggestion="Call RequestSerialization() after modifying synchronized fields",
                )
            )
        return tuple(findings)
