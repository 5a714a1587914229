"""JSON reporter for machine-readable output.

Stdlib-only reporter for JSON output.
"""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, TextIO

from behaviorgraph.application.reporters._base import BaseReporter

if TYPE_CHECKING:
    from behaviorgraph.application.services.pipeline import PipelineResult
    from behaviorgraph.domain.model.behavior_unit import BehaviorUnit
    from behaviorgraph.domain.model.finding import Finding
    from behaviorgraph.domain.model.report import DependencyAnalysisReport


class JSONReporter(BaseReporter):
    """JSON reporter for machine-readable output.

    Outputs pipeline results as JSON for CI/CD integration or
    parsing by other tools. Output is deterministic: no timestamps.
    """

    def __init__(
        self,
        output: TextIO | None = None,
        *,
        indent: int | None = 2,
    ) -> None:
        """Initialize reporter.

        Args:
            output: Output stream (default: sys.stdout)
            indent: JSON indentation (default: 2, None for compact)
        """
        self._output = output if output is not None else sys.stdout
        self._indent = indent

    def report(self, result: PipelineResult) -> None:
        """Report pipeline result as JSON.

        Args:
            result: Complete pipeline result
        """
        data = self._result_to_dict(result)
        json.dump(data, self._output, indent=self._indent)
        self._output.write("\n")

    def _result_to_dict(self, result: PipelineResult) -> dict[str, object]:
        """Convert PipelineResult to JSON-serializable dict.

        Args:
            result: Pipeline result to convert

        Returns:
            Dictionary suitable for json.dump()
        """
        verdict = result.verdict
        return {
            "passed": result.passed,
            "status": verdict.status,
            "summary": {
                "unit_count": len(result.units),
                "shared_function_count": len(result.shared_functions),
                "error_count": verdict.error_count,
                "warning_count": verdict.warning_count,
                "info_count": verdict.info_count,
            },
            "units": [self._unit_to_dict(u) for u in result.units],
            "shared_functions": [f.name for f in result.shared_functions],
            "initialization_order": list(result.order),
            "dependency_analysis": (
                self._report_to_dict(result.report) if result.report is not None else None
            ),
            "coordinator": result.coordinator.name if result.coordinator is not None else None,
            "execution_order_hints": [
                {"script_name": h.script_name, "priority": h.priority}
                for h in result.execution_order_hints
            ],
            "findings": [self._finding_to_dict(f) for f in verdict.findings],
            "recommendations": list(verdict.recommendations),
            "next_steps": list(verdict.next_steps),
        }

    def _unit_to_dict(self, unit: BehaviorUnit) -> dict[str, object]:
        """Convert BehaviorUnit to dict."""
        return {
            "name": unit.name,
            "functions": [f.name for f in unit.functions],
            "events": list(unit.events),
            "auto_sync": unit.auto_sync,
            "calls": [
                {
                    "target": c.target,
                    "kind": c.kind.name,
                    "origin": c.origin.name,
                    "via": c.via,
                }
                for c in unit.inter_unit_calls
            ],
        }

    def _report_to_dict(self, report: DependencyAnalysisReport) -> dict[str, object]:
        """Convert DependencyAnalysisReport to dict."""
        metrics = report.complexity_metrics
        return {
            "total_units": report.total_units,
            "total_dependencies": report.total_dependencies,
            "root_units": list(report.root_units),
            "leaf_units": list(report.leaf_units),
            "circular_dependencies": [
                {
                    "cycle": list(c.cycle),
                    "severity": c.severity.name,
                    "description": c.description,
                    "suggestions": list(c.suggestions),
                }
                for c in report.circular_dependencies
            ],
            "dependency_chains": [list(chain) for chain in report.dependency_chains],
            "complexity_metrics": {
                "max_depth": metrics.max_depth,
                "avg_dependencies_per_unit": metrics.avg_dependencies_per_unit,
                "cyclomatic_complexity": metrics.cyclomatic_complexity,
                "coupling_factor": metrics.coupling_factor,
                "cohesion_score": metrics.cohesion_score,
            },
            "recommended_initialization_order": list(report.recommended_initialization_order),
            "unordered_units": list(report.unordered_units),
            "warnings": [
                {
                    "kind": w.kind.name,
                    "severity": w.severity.name,
                    "message": w.message,
                    "affected": list(w.affected),
                }
                for w in report.warnings
            ],
        }

    def _finding_to_dict(self, finding: Finding) -> dict[str, object]:
        """Convert Finding to dict."""
        return {
            "category": finding.category.name,
            "severity": finding.severity.name,
            "message": finding.message,
            "unit": finding.unit,
            "function": finding.function,
            "rule": finding.rule,
            "line": finding.line,
            "suggestion": finding.suggestion,
        }
