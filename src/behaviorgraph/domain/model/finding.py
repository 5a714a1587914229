"""Structured findings and accumulated validation results."""

from __future__ import annotations

from dataclasses import dataclass

from behaviorgraph.domain.model.enums import ErrorCategory, Severity


@dataclass(frozen=True, slots=True)
class Finding:
    """Single validation finding.

    Attributes:
        category: Error taxonomy category
        severity: ERROR/WARNING/INFO
        message: Human-readable message
        unit: Affected unit name
        function: Affected function name
        rule: Rule that produced the finding (generated-code rules)
        line: 1-based line in generated code
        suggestion: One-line remediation
    """

    category: ErrorCategory
    severity: Severity
    message: str
    unit: str | None = None
    function: str | None = None
    rule: str | None = None
    line: int | None = None
    suggestion: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.message:
            raise ValueError("message must not be empty")
        if self.line is not None and self.line < 1:
            raise ValueError(f"line must be >= 1, got {self.line}")

    @property
    def is_error(self) -> bool:
        """Finding blocks the pipeline."""
        return self.severity == Severity.ERROR

    @property
    def subject(self) -> str:
        """Most specific location description."""
        parts: list[str] = []
        if self.unit:
            parts.append(self.unit)
        if self.function:
            parts.append(self.function)
        subject = ".".join(parts) if parts else "<global>"
        if self.line is not None:
            subject += f":{self.line}"
        return subject

    def __str__(self) -> str:
        """Format finding for display."""
        text = f"[{self.severity.name}] {self.category.name}: {self.message}"
        if self.suggestion:
            text += f"\n  suggestion: {self.suggestion}"
        return text


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Accumulated findings of one validation stage.

    Attributes:
        findings: All findings in discovery order
    """

    findings: tuple[Finding, ...] = ()

    @property
    def blocking(self) -> bool:
        """True if any finding has ERROR severity."""
        return any(f.is_error for f in self.findings)

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

    def by_category(self) -> dict[ErrorCategory, tuple[Finding, ...]]:
        """Group findings by category, in category declaration order."""
        grouped: dict[ErrorCategory, tuple[Finding, ...]] = {}
        for category in ErrorCategory:
            matching = tuple(f for f in self.findings if f.category == category)
            if matching:
                grouped[category] = matching
        return grouped

    def merge(self, other: ValidationResult) -> ValidationResult:
        """Concatenate findings of both results."""
        return ValidationResult(findings=self.findings + other.findings)

    @classmethod
    def empty(cls) -> ValidationResult:
        """Create result with no findings."""
        return cls(findings=())
