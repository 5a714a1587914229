"""Pipeline exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from behaviorgraph.domain.exceptions.base import BehaviorGraphError

if TYPE_CHECKING:
    from behaviorgraph.domain.model.verdict import FinalVerdict


class BlockedPipelineError(BehaviorGraphError, RuntimeError):
    """Emission requested for a blocking verdict.

    Attributes:
        verdict: The blocking verdict
    """

    def __init__(self, verdict: FinalVerdict) -> None:
        if not verdict.blocking:
            raise ValueError("BlockedPipelineError requires a blocking verdict")

        self.verdict = verdict

        msg_parts = [f"{verdict.status}: {verdict.error_count} error(s)"]
        for finding in verdict.findings:
            if finding.is_error:
                msg_parts.append(str(finding))
        super().__init__("\n".join(msg_parts))
