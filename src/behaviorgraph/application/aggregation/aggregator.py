"""Merges every validation stage into one FinalVerdict."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from behaviorgraph.domain.model.enums import CallKind, ErrorCategory, Severity
from behaviorgraph.domain.model.finding import Finding
from behaviorgraph.domain.model.verdict import FinalVerdict

if TYPE_CHECKING:
    from behaviorgraph.domain.model.finding import ValidationResult
    from behaviorgraph.domain.model.report import CircularDependency, DependencyAnalysisReport

logger = logging.getLogger(__name__)


def aggregate(
    validation: ValidationResult,
    dependency: DependencyAnalysisReport | None,
    generated_code_issues: Sequence[Finding] = (),
    *,
    ordering: Sequence[Finding] = (),
    shared_runtime_name: str = "SharedRuntime",
) -> FinalVerdict:
    """Combine structural, dependency and generated-code results.

    Findings are ordered: structural, cycles, missing references and
    ordering problems, generated code. The verdict blocks on any ERROR
    finding or any cycle.

    Args:
        validation: Partition and unit validation result
        dependency: Dependency report, None if analysis did not run
        generated_code_issues: Findings from generated-code rules
        ordering: Findings from initialization order validation
        shared_runtime_name: Named in cycle recommendations

    Returns:
        FinalVerdict
    """
    cycles = dependency.circular_dependencies if dependency is not None else ()

    findings: list[Finding] = list(validation.findings)
    findings.extend(_cycle_finding(cycle) for cycle in cycles)
    if dependency is not None:
        findings.extend(_missing_reference_findings(dependency))
    findings.extend(ordering)
    findings.extend(generated_code_issues)

    blocking = bool(cycles) or any(f.is_error for f in findings)
    error_count = sum(1 for f in findings if f.severity == Severity.ERROR)
    warning_count = sum(1 for f in findings if f.severity == Severity.WARNING)

    verdict = FinalVerdict(
        findings=tuple(findings),
        cycles=cycles,
        blocking=blocking,
        recommendations=_recommendations(cycles, error_count, warning_count, shared_runtime_name),
        next_steps=_next_steps(findings, cycles),
    )
    logger.info(
        "Verdict: %s (%d error(s), %d warning(s))",
        verdict.status,
        error_count,
        warning_count,
    )
    return verdict


def _cycle_finding(cycle: CircularDependency) -> Finding:
    return Finding(
        category=ErrorCategory.CIRCULAR_DEPENDENCY,
        severity=Severity.ERROR,
        message=f"Circular dependency: {cycle.path}",
        unit=cycle.cycle[0],
        suggestion=cycle.suggestions[0] if cycle.suggestions else None,
    )


def _missing_reference_findings(dependency: DependencyAnalysisReport) -> list[Finding]:
    findings: list[Finding] = []
    for reference in dependency.missing_references:
        if reference.kind == CallKind.DIRECT:
            findings.append(
                Finding(
                    category=ErrorCategory.MISSING_REFERENCE,
                    severity=Severity.ERROR,
                    message=(
                        f"Behavior '{reference.source}' depends on undefined behavior "
                        f"'{reference.target}'"
                    ),
                    unit=reference.source,
                    suggestion=f"Ensure behavior '{reference.target}' is properly defined",
                )
            )
        else:
            findings.append(
                Finding(
                    category=ErrorCategory.MISSING_REFERENCE,
                    severity=Severity.WARNING,
                    message=(
                        f"Behavior '{reference.source}' sends events to unknown behavior "
                        f"'{reference.target}'"
                    ),
                    unit=reference.source,
                    suggestion="Event targets are resolved at runtime; check the name",
                )
            )
    return findings


def _recommendations(
    cycles: tuple[CircularDependency, ...],
    error_count: int,
    warning_count: int,
    shared_runtime_name: str,
) -> tuple[str, ...]:
    recommendations: list[str] = []

    for cycle in cycles:
        if cycle.size == 2:
            first, second = cycle.cycle
            recommendations.append(
                "Use event-based communication instead of direct calls "
                f"between '{first}' and '{second}'"
            )
        else:
            recommendations.append(
                f"Extract shared functionality of {', '.join(cycle.cycle)} into "
                f"{shared_runtime_name} or a coordinator behavior"
            )

    if error_count:
        recommendations.append("Fix all errors before proceeding with compilation")
    if warning_count:
        recommendations.append("Consider addressing warnings to improve code quality")
    if not error_count and not warning_count and not cycles:
        recommendations.append("No issues found, behaviors are ready for compilation")

    return tuple(recommendations)


def _next_steps(
    findings: list[Finding],
    cycles: tuple[CircularDependency, ...],
) -> tuple[str, ...]:
    structural = bool(cycles) or any(
        f.is_error and f.category != ErrorCategory.GENERATED_CODE_ISSUE for f in findings
    )
    if structural:
        return ("Fix the structural errors listed above", "Re-run the analysis")
    if any(f.is_error for f in findings):
        return ("Review generated code validation issues", "Check code generation logic")
    return ("Proceed with UdonSharp compilation", "Deploy to VRChat world")
