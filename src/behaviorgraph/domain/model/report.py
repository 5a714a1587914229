"""Dependency analysis report value objects."""

from __future__ import annotations

from dataclasses import dataclass

from behaviorgraph.domain.model.enums import CycleSeverity, Severity, WarningKind
from behaviorgraph.domain.model.graph import MissingReference


@dataclass(frozen=True, slots=True)
class ComplexityMetrics:
    """Normalized metrics describing graph interconnection.

    Attributes:
        max_depth: Longest chain from a root through dependents
        avg_dependencies_per_unit: edges / units
        cyclomatic_complexity: Number of detected cycles
        coupling_factor: edges / (N·(N−1)), 0 when N <= 1
        cohesion_score: 1 − min(coupling_factor, 1)
    """

    max_depth: int
    avg_dependencies_per_unit: float
    cyclomatic_complexity: int
    coupling_factor: float
    cohesion_score: float

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.avg_dependencies_per_unit < 0:
            raise ValueError("avg_dependencies_per_unit must be >= 0")
        if self.cyclomatic_complexity < 0:
            raise ValueError("cyclomatic_complexity must be >= 0")
        if self.coupling_factor < 0:
            raise ValueError("coupling_factor must be >= 0")
        if not 0.0 <= self.cohesion_score <= 1.0:
            raise ValueError(f"cohesion_score must be in [0, 1], got {self.cohesion_score}")

    @classmethod
    def empty(cls) -> ComplexityMetrics:
        """Metrics of an empty graph."""
        return cls(
            max_depth=0,
            avg_dependencies_per_unit=0.0,
            cyclomatic_complexity=0,
            coupling_factor=0.0,
            cohesion_score=1.0,
        )


@dataclass(frozen=True, slots=True)
class CircularDependency:
    """Cycle among direct dependencies.

    Attributes:
        cycle: Units traversed before returning to the first one
        severity: CRITICAL if any edge is declared, HIGH otherwise
        description: Human-readable description
        suggestions: Remediations tailored to cycle length
    """

    cycle: tuple[str, ...]
    severity: CycleSeverity
    description: str
    suggestions: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.cycle:
            raise ValueError("cycle must not be empty")
        if not self.description:
            raise ValueError("description must not be empty")

    @property
    def size(self) -> int:
        """Number of units in the cycle."""
        return len(self.cycle)

    @property
    def path(self) -> str:
        """Closed path: "A -> B -> A"."""
        return " -> ".join((*self.cycle, self.cycle[0]))


@dataclass(frozen=True, slots=True)
class DependencyWarning:
    """Non-fatal (or fatal, for cycles and missing direct targets) analysis finding.

    Attributes:
        kind: Warning kind
        severity: ERROR/WARNING/INFO
        message: Human-readable message
        affected: Affected unit names
        suggestions: Suggested fixes
    """

    kind: WarningKind
    severity: Severity
    message: str
    affected: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.message:
            raise ValueError("message must not be empty")


@dataclass(frozen=True, slots=True)
class DependencyAnalysisReport:
    """Result of one dependency analysis run.

    Recomputed from scratch on every call, never updated in place.

    Attributes:
        total_units: Number of units
        total_dependencies: Number of direct edges
        root_units: Units with no dependencies
        leaf_units: Units with no dependents
        circular_dependencies: Detected cycles
        dependency_chains: Longest chains (top N, longest first)
        complexity_metrics: Graph metrics
        recommended_initialization_order: Topological order (prefix only if cyclic)
        unordered_units: Units left out of the order because of cycles
        warnings: Structured findings
        missing_references: Dropped edges to unknown units
    """

    total_units: int
    total_dependencies: int
    root_units: tuple[str, ...]
    leaf_units: tuple[str, ...]
    circular_dependencies: tuple[CircularDependency, ...]
    dependency_chains: tuple[tuple[str, ...], ...]
    complexity_metrics: ComplexityMetrics
    recommended_initialization_order: tuple[str, ...]
    unordered_units: tuple[str, ...] = ()
    warnings: tuple[DependencyWarning, ...] = ()
    missing_references: tuple[MissingReference, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.total_units < 0:
            raise ValueError("total_units must be >= 0")
        if self.total_dependencies < 0:
            raise ValueError("total_dependencies must be >= 0")
        ordered = len(self.recommended_initialization_order) + len(self.unordered_units)
        if ordered != self.total_units:
            raise ValueError(
                f"order covers {ordered} units, expected {self.total_units}"
            )

    @property
    def root_count(self) -> int:
        """Number of root units."""
        return len(self.root_units)

    @property
    def leaf_count(self) -> int:
        """Number of leaf units."""
        return len(self.leaf_units)

    @property
    def has_cycles(self) -> bool:
        """True if any cycle was detected."""
        return len(self.circular_dependencies) > 0

    @property
    def blocking(self) -> bool:
        """True if any warning has ERROR severity."""
        return any(w.severity == Severity.ERROR for w in self.warnings)

    def warnings_of(self, kind: WarningKind) -> tuple[DependencyWarning, ...]:
        """Warnings of given kind."""
        return tuple(w for w in self.warnings if w.kind == kind)
