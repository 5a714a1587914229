"""Plain text reporter using print().

Stdlib-only reporter for the two-phase validation report.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, TextIO

from behaviorgraph.application.reporters._base import BaseReporter
from behaviorgraph.domain.model.configuration import ReportConfig
from behaviorgraph.domain.model.enums import ErrorCategory

if TYPE_CHECKING:
    from behaviorgraph.application.services.pipeline import PipelineResult
    from behaviorgraph.domain.model.finding import Finding
    from behaviorgraph.domain.model.report import DependencyAnalysisReport

_RULE_WIDTH = 70


def structural_findings(result: PipelineResult) -> tuple[Finding, ...]:
    """Findings of phase one (everything but generated-code issues)."""
    return tuple(
        f for f in result.verdict.findings if f.category != ErrorCategory.GENERATED_CODE_ISSUE
    )


def group_by_category(findings: tuple[Finding, ...]) -> dict[ErrorCategory, tuple[Finding, ...]]:
    """Group findings by category, in category declaration order."""
    grouped: dict[ErrorCategory, tuple[Finding, ...]] = {}
    for category in ErrorCategory:
        matching = tuple(f for f in findings if f.category == category)
        if matching:
            grouped[category] = matching
    return grouped


class PlainTextReporter(BaseReporter):
    """Plain text reporter using print().

    Outputs to stdout by default, can be configured for any TextIO.
    Sections: structural validation, dependency analysis, generated
    code validation, overall status.
    """

    def __init__(
        self,
        output: TextIO | None = None,
        config: ReportConfig | None = None,
    ) -> None:
        """Initialize reporter.

        Args:
            output: Output stream (default: sys.stdout)
            config: Display limits (defaults if None)
        """
        self._output = output if output is not None else sys.stdout
        self._config = config or ReportConfig()

    def report(self, result: PipelineResult) -> None:
        """Report pipeline result as plain text.

        Args:
            result: Complete pipeline result
        """
        self._report_header()
        self._report_structural(result)
        if result.report is not None:
            self._report_dependencies(result.report, result.order)
        self._report_generated_code(result)
        self._report_status(result)
        self._report_footer(result)

    def _write(self, text: str = "") -> None:
        """Write line to output."""
        print(text, file=self._output)

    def _section(self, title: str) -> None:
        """Print section title between rules."""
        self._write()
        self._write("-" * _RULE_WIDTH)
        self._write(title)
        self._write("-" * _RULE_WIDTH)

    def _report_header(self) -> None:
        """Print report header."""
        self._write("=" * _RULE_WIDTH)
        self._write("Multi-Behavior Validation Report")
        self._write("=" * _RULE_WIDTH)

    def _report_findings(self, findings: tuple[Finding, ...]) -> None:
        """Print findings grouped by category, capped per category."""
        limit = self._config.max_findings_displayed
        for category, group in group_by_category(findings).items():
            self._write()
            self._write(f"{category.name} ({len(group)}):")
            shown = group if limit is None else group[:limit]
            for finding in shown:
                self._write(f"  [{finding.severity.name}] {finding.subject}: {finding.message}")
                if self._config.include_suggestions and finding.suggestion:
                    self._write(f"    Suggestion: {finding.suggestion}")
            hidden = len(group) - len(shown)
            if hidden > 0:
                self._write(f"  ... and {hidden} more")

    def _report_structural(self, result: PipelineResult) -> None:
        """Print phase one: structural validation."""
        self._section("Phase 1: Structural Validation")
        findings = structural_findings(result)
        self._write(f"  Behaviors: {len(result.units)}")
        self._write(f"  Shared functions: {len(result.shared_functions)}")
        if not findings:
            self._write("  No structural issues found")
            return
        self._report_findings(findings)

    def _report_dependencies(
        self,
        report: DependencyAnalysisReport,
        order: tuple[str, ...],
    ) -> None:
        """Print dependency analysis summary."""
        self._section("Dependency Analysis")
        metrics = report.complexity_metrics
        self._write(f"  Behaviors: {report.total_units}")
        self._write(f"  Dependencies: {report.total_dependencies}")
        self._write(f"  Roots: {', '.join(report.root_units) or '-'}")
        self._write(f"  Leaves: {', '.join(report.leaf_units) or '-'}")
        self._write(f"  Max depth: {metrics.max_depth}")
        self._write(f"  Avg dependencies: {metrics.avg_dependencies_per_unit:.2f}")
        self._write(f"  Coupling factor: {metrics.coupling_factor:.2f}")
        self._write(f"  Cohesion score: {metrics.cohesion_score:.2f}")
        if order:
            self._write(f"  Initialization order: {' -> '.join(order)}")

        if report.circular_dependencies:
            self._write()
            self._write(f"Circular dependencies ({len(report.circular_dependencies)}):")
            for cycle in report.circular_dependencies:
                self._write(f"  [{cycle.severity.name}] {cycle.path}")
                if self._config.include_suggestions:
                    for suggestion in cycle.suggestions:
                        self._write(f"    - {suggestion}")

        if self._config.verbose:
            for chain in report.dependency_chains:
                self._write(f"  Chain: {' -> '.join(chain)}")

    def _report_generated_code(self, result: PipelineResult) -> None:
        """Print phase two: generated code validation."""
        self._section("Phase 2: Generated Code Validation")
        issues = result.generated_code_issues
        if not issues:
            self._write("  No generated code issues found")
            return
        self._report_findings(issues)

    def _report_status(self, result: PipelineResult) -> None:
        """Print overall status, next steps and recommendations."""
        verdict = result.verdict
        self._section(f"Overall Status: {verdict.status}")
        self._write(f"  Errors: {verdict.error_count}")
        self._write(f"  Warnings: {verdict.warning_count}")
        self._write(f"  Info: {verdict.info_count}")

        if verdict.next_steps:
            self._write()
            self._write("Next steps:")
            for i, step in enumerate(verdict.next_steps, start=1):
                self._write(f"  {i}. {step}")

        if verdict.recommendations:
            self._write()
            self._write("Recommendations:")
            for recommendation in verdict.recommendations:
                self._write(f"  - {recommendation}")

    def _report_footer(self, result: PipelineResult) -> None:
        """Print report footer."""
        self._write()
        self._write("=" * _RULE_WIDTH)
        status = "PASSED" if result.passed else "FAILED"
        self._write(f"Result: {status}")
        self._write("=" * _RULE_WIDTH)
