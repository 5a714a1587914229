"""Final go/no-go decision of a pipeline run."""

from __future__ import annotations

from dataclasses import dataclass

from behaviorgraph.domain.model.enums import ErrorCategory, Severity
from behaviorgraph.domain.model.finding import Finding
from behaviorgraph.domain.model.report import CircularDependency

STATUS_READY = "READY FOR COMPILATION"
STATUS_BLOCKED = "COMPILATION BLOCKED"


@dataclass(frozen=True, slots=True)
class FinalVerdict:
    """Merged result of structural, dependency and generated-code validation.

    Attributes:
        findings: All findings in report order (structural, cycles,
            references/ordering, generated code)
        cycles: Circular dependencies, rendered separately in reports
        blocking: True if emission must not run
        recommendations: Actionable recommendations, most specific first
        next_steps: Ordered next steps for the user
    """

    findings: tuple[Finding, ...]
    cycles: tuple[CircularDependency, ...]
    blocking: bool
    recommendations: tuple[str, ...] = ()
    next_steps: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        has_error = any(f.severity == Severity.ERROR for f in self.findings)
        if has_error and not self.blocking:
            raise ValueError("verdict with ERROR findings must be blocking")
        if self.cycles and not self.blocking:
            raise ValueError("verdict with cycles must be blocking")

    @property
    def passed(self) -> bool:
        """True if emission may run."""
        return not self.blocking

    @property
    def status(self) -> str:
        """Overall status line."""
        return STATUS_BLOCKED if self.blocking else STATUS_READY

    @property
    def error_count(self) -> int:
        """Number of ERROR findings."""
        return sum(1 for f in self.findings if f.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        """Number of WARNING findings."""
        return sum(1 for f in self.findings if f.severity == Severity.WARNING)

    @property
    def info_count(self) -> int:
        """Number of INFO findings."""
        return sum(1 for f in self.findings if f.severity == Severity.INFO)

    def findings_in(self, *categories: ErrorCategory) -> tuple[Finding, ...]:
        """Findings belonging to any of the given categories."""
        return tuple(f for f in self.findings if f.category in categories)
