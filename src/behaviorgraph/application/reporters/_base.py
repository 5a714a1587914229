"""Base reporter class for output formatting.

Provides default implementation of ReporterProtocol.
Concrete reporters inherit from this.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from behaviorgraph.application.services.pipeline import PipelineResult


class BaseReporter(ABC):
    """Base class for reporters implementing ReporterProtocol.

    Example:
        class CountReporter(BaseReporter):
            def report(self, result: PipelineResult) -> None:
                print(f"Errors: {result.verdict.error_count}")
    """

    @abstractmethod
    def report(self, result: PipelineResult) -> None:
        """Report a pipeline run.

        Args:
            result: Complete pipeline result
        """
