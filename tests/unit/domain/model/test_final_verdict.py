"""Tests for domain/model/verdict.py."""

import pytest

from behaviorgraph.domain.model.enums import CycleSeverity, ErrorCategory, Severity
from behaviorgraph.domain.model.report import CircularDependency
from behaviorgraph.domain.model.verdict import STATUS_BLOCKED, STATUS_READY, FinalVerdict
from tests.factories import make_finding


class TestFinalVerdict:
    """Tests for FinalVerdict."""

    def test_clean_verdict_passes(self) -> None:
        """No findings, not blocking."""
        verdict = FinalVerdict(findings=(), cycles=(), blocking=False)

        assert verdict.passed
        assert verdict.status == STATUS_READY

    def test_blocking_status(self) -> None:
        """Blocking verdict reports blocked status."""
        verdict = FinalVerdict(findings=(make_finding(),), cycles=(), blocking=True)

        assert not verdict.passed
        assert verdict.status == STATUS_BLOCKED

    def test_error_requires_blocking(self) -> None:
        """ERROR findings cannot pass."""
        with pytest.raises(ValueError, match="ERROR findings must be blocking"):
            FinalVerdict(findings=(make_finding(Severity.ERROR),), cycles=(), blocking=False)

    def test_cycles_require_blocking(self) -> None:
        """Cycles cannot pass."""
        cycle = CircularDependency(
            cycle=("A", "B"),
            severity=CycleSeverity.CRITICAL,
            description="A -> B -> A",
        )

        with pytest.raises(ValueError, match="cycles must be blocking"):
            FinalVerdict(findings=(), cycles=(cycle,), blocking=False)

    def test_counts_and_filter(self) -> None:
        """Counts per severity and filter by category."""
        generated = make_finding(Severity.INFO, ErrorCategory.GENERATED_CODE_ISSUE)
        verdict = FinalVerdict(
            findings=(
                make_finding(Severity.ERROR),
                make_finding(Severity.WARNING, ErrorCategory.MISSING_REFERENCE),
                generated,
            ),
            cycles=(),
            blocking=True,
        )

        assert (verdict.error_count, verdict.warning_count, verdict.info_count) == (1, 1, 1)
        assert verdict.findings_in(ErrorCategory.GENERATED_CODE_ISSUE) == (generated,)
