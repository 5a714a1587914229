"""Console reporter: PipelineResult → rich formatted string."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING, TextIO

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from behaviorgraph.application.reporters._base import BaseReporter
from behaviorgraph.application.reporters.plain_text import group_by_category, structural_findings
from behaviorgraph.domain.model.configuration import ReportConfig
from behaviorgraph.domain.model.enums import Severity

if TYPE_CHECKING:
    from behaviorgraph.application.services.pipeline import PipelineResult
    from behaviorgraph.domain.model.finding import Finding
    from behaviorgraph.domain.model.report import DependencyAnalysisReport

_SEVERITY_STYLE = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}


@dataclass(frozen=True, slots=True)
class ConsoleConfig(ReportConfig):
    """Configuration for console reporter.

    ReportConfig plus console geometry.

    Attributes:
        width: Console width in characters
    """

    width: int = 120

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        ReportConfig.__post_init__(self)
        if self.width < 40:
            raise ValueError(f"width must be >= 40, got {self.width}")


class ConsoleReporter(BaseReporter):
    """Console reporter: renders rich formatted text.

    render() returns a str, report() writes it to the output stream.
    """

    def __init__(
        self,
        config: ConsoleConfig | None = None,
        output: TextIO | None = None,
    ) -> None:
        """Initialize reporter.

        Args:
            config: Reporter configuration. Uses defaults if None.
            output: Output stream for report() (default: sys.stdout)
        """
        self._config = config or ConsoleConfig()
        self._output = output if output is not None else sys.stdout

    def report(self, result: PipelineResult) -> None:
        """Write rendered result to output."""
        self._output.write(self.render(result))

    def render(self, result: PipelineResult) -> str:
        """Format pipeline result as rich formatted string.

        Args:
            result: Pipeline result to format.

        Returns:
            Formatted string with colors and tables.
        """
        output = StringIO()
        console = Console(file=output, force_terminal=True, width=self._config.width)

        console.print()
        console.rule("[bold]MULTI-BEHAVIOR VALIDATION[/bold]")
        console.print()

        console.print("[bold]Phase 1: Structural Validation[/bold]")
        self._render_findings(console, structural_findings(result))

        if result.report is not None:
            self._render_metrics(console, result.report, result.order)

        console.print("[bold]Phase 2: Generated Code Validation[/bold]")
        self._render_findings(console, result.generated_code_issues)

        self._render_status(console, result)
        return output.getvalue()

    def _render_findings(self, console: Console, findings: tuple[Finding, ...]) -> None:
        """Render findings grouped by category."""
        if not findings:
            console.print("  [green]No issues found[/green]")
            console.print()
            return

        limit = self._config.max_findings_displayed
        for category, group in group_by_category(findings).items():
            console.print(f"  [bold]{category.name}[/bold] ({len(group)})", highlight=False)
            shown = group if limit is None else group[:limit]
            for finding in shown:
                style = _SEVERITY_STYLE[finding.severity]
                console.print(
                    f"    [{style}]{finding.severity.name}[/{style}] "
                    f"{escape(finding.subject)}: {escape(finding.message)}",
                    highlight=False,
                )
                if self._config.include_suggestions and finding.suggestion:
                    suggestion = escape(finding.suggestion)
                    console.print(f"      [dim]{suggestion}[/dim]", highlight=False)
            if len(group) > len(shown):
                console.print(
                    f"    [dim]... and {len(group) - len(shown)} more[/dim]",
                    highlight=False,
                )
        console.print()

    def _render_metrics(
        self,
        console: Console,
        report: DependencyAnalysisReport,
        order: tuple[str, ...],
    ) -> None:
        """Render dependency metrics table and cycles."""
        metrics = report.complexity_metrics
        table = Table(title="Dependency Analysis", show_header=True)
        table.add_column("Metric")
        table.add_column("Value", justify="right")
        table.add_row("Behaviors", str(report.total_units))
        table.add_row("Dependencies", str(report.total_dependencies))
        table.add_row("Max depth", str(metrics.max_depth))
        table.add_row("Avg dependencies", f"{metrics.avg_dependencies_per_unit:.2f}")
        table.add_row("Cycles", str(metrics.cyclomatic_complexity))
        table.add_row("Coupling factor", f"{metrics.coupling_factor:.2f}")
        table.add_row("Cohesion score", f"{metrics.cohesion_score:.2f}")
        console.print(table)

        if order:
            console.print(f"  Initialization order: {' -> '.join(order)}", highlight=False)
        for cycle in report.circular_dependencies:
            console.print(
                f"  [bold red]{cycle.severity.name}[/bold red] cycle: {escape(cycle.path)}",
                highlight=False,
            )
        console.print()

    def _render_status(self, console: Console, result: PipelineResult) -> None:
        """Render overall status, next steps and recommendations."""
        verdict = result.verdict
        style = "bold green" if verdict.passed else "bold red"
        console.rule(f"[{style}]{verdict.status}[/{style}]")
        console.print(
            f"Errors: {verdict.error_count}  "
            f"Warnings: {verdict.warning_count}  "
            f"Info: {verdict.info_count}",
            highlight=False,
        )
        for i, step in enumerate(verdict.next_steps, start=1):
            console.print(f"  {i}. {step}", highlight=False)
        for recommendation in verdict.recommendations:
            console.print(f"  [dim]-[/dim] {recommendation}", highlight=False)
        console.print()
