"""Reporter protocol for output formatting.

Not rich-specific: any output format can implement it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from behaviorgraph.application.services.pipeline import PipelineResult


class ReporterProtocol(Protocol):
    """Contract for reporters.

    behaviorgraph provides PlainTextReporter, JSONReporter and
    ConsoleReporter. Users can implement their own.
    """

    def report(self, result: PipelineResult) -> None:
        """Report a pipeline run.

        Args:
            result: Complete pipeline result
        """
        ...
