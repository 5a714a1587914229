"""Tests for analysis/analyzer.py."""

import pytest

from behaviorgraph.application.analysis.analyzer import DependencyAnalyzer
from behaviorgraph.domain.exceptions.ordering import CircularDependencyError
from behaviorgraph.domain.model.configuration import PipelineConfig
from behaviorgraph.domain.model.enums import CallKind, CycleSeverity, Severity, WarningKind
from behaviorgraph.domain.model.graph import DependencyGraph, MissingReference
from tests.factories import make_unit, make_units


@pytest.fixture
def analyzer() -> DependencyAnalyzer:
    """Analyzer with default configuration."""
    return DependencyAnalyzer()


@pytest.fixture
def chain_units():
    """A depends on B, B depends on C."""
    return make_units({"A": ("B",), "B": ("C",), "C": ()})


class TestBuildGraph:
    """Tests for build_graph."""

    def test_direct_calls_become_edges(
        self,
        analyzer: DependencyAnalyzer,
        chain_units,
    ) -> None:
        """Edges point from unit to dependency."""
        graph = analyzer.build_graph(chain_units)

        assert graph.nodes == ("A", "B", "C")
        assert graph.edges == (("A", "B"), ("B", "C"))
        assert graph.dependents("C") == ("B",)

    def test_event_sends_are_not_edges(self, analyzer: DependencyAnalyzer) -> None:
        """EVENT_SEND never creates an ordering dependency."""
        units = (make_unit("A", sends_to=("B",)), make_unit("B"))

        graph = analyzer.build_graph(units)

        assert graph.edge_count == 0
        assert graph.missing_references == ()

    def test_inferred_calls_are_edges(self, analyzer: DependencyAnalyzer) -> None:
        """Inferred DIRECT calls order units like declared ones."""
        units = (make_unit("A", inferred=("B",)), make_unit("B"))

        assert analyzer.build_graph(units).edges == (("A", "B"),)

    def test_unknown_targets_recorded(self, analyzer: DependencyAnalyzer) -> None:
        """Calls to unknown units are dropped and recorded once."""
        units = (
            make_unit("A", depends_on=("Ghost",), sends_to=("Phantom",)),
            make_unit("B", depends_on=("Ghost",)),
        )

        graph = analyzer.build_graph(units)

        assert graph.edge_count == 0
        assert graph.missing_references == (
            MissingReference("A", "Ghost", CallKind.DIRECT),
            MissingReference("A", "Phantom", CallKind.EVENT_SEND),
            MissingReference("B", "Ghost", CallKind.DIRECT),
        )

    def test_roots_leaves_isolated(self, analyzer: DependencyAnalyzer) -> None:
        """Roots have no dependencies, leaves no dependents."""
        units = make_units({"A": ("B",), "B": (), "C": ()})
        graph = analyzer.build_graph(units)

        assert analyzer.find_roots(graph) == ("B", "C")
        assert analyzer.find_leaves(graph) == ("A", "C")
        assert analyzer.find_isolated(graph) == ("C",)


class TestOrdering:
    """Tests for detect_cycles and topological_order."""

    def test_chain_order(self, analyzer: DependencyAnalyzer, chain_units) -> None:
        """Dependencies come first."""
        graph = analyzer.build_graph(chain_units)

        assert analyzer.topological_order(graph) == ("C", "B", "A")
        assert analyzer.detect_cycles(graph) == ()

    def test_ties_keep_declaration_order(self, analyzer: DependencyAnalyzer) -> None:
        """Independent units keep their declaration order."""
        units = make_units({"A": ("D",), "B": ("D",), "C": ("D",), "D": ()})

        assert analyzer.topological_order(analyzer.build_graph(units)) == ("D", "A", "B", "C")

    def test_diamond(self, analyzer: DependencyAnalyzer) -> None:
        """Shared dependency is initialized once, before both dependents."""
        units = make_units({"A": ("B", "C"), "B": ("D",), "C": ("D",), "D": ()})

        assert analyzer.topological_order(analyzer.build_graph(units)) == ("D", "B", "C", "A")

    def test_two_cycle(self, analyzer: DependencyAnalyzer) -> None:
        """Mutual dependency is one cycle and blocks ordering."""
        graph = analyzer.build_graph(make_units({"A": ("B",), "B": ("A",)}))

        assert analyzer.detect_cycles(graph) == (("A", "B"),)
        with pytest.raises(CircularDependencyError) as exc_info:
            analyzer.topological_order(graph)
        assert exc_info.value.units == ("A", "B")

    def test_cycle_error_names_only_stuck_units(self, analyzer: DependencyAnalyzer) -> None:
        """Units outside and before the cycle are still ordered."""
        units = make_units({"A": (), "B": ("C", "A"), "C": ("B",)})

        with pytest.raises(CircularDependencyError, match="B, C") as exc_info:
            analyzer.topological_order(analyzer.build_graph(units))
        assert exc_info.value.units == ("B", "C")

    def test_self_loop(self, analyzer: DependencyAnalyzer) -> None:
        """Unit depending on itself is a one-unit cycle."""
        graph = analyzer.build_graph((make_unit("A", inferred=("A",)),))

        assert analyzer.detect_cycles(graph) == (("A",),)

    def test_independent_cycles_all_found(self, analyzer: DependencyAnalyzer) -> None:
        """Every component is searched."""
        units = make_units({"A": ("B",), "B": ("A",), "C": ("D",), "D": ("C",)})

        cycles = analyzer.detect_cycles(analyzer.build_graph(units))

        assert cycles == (("A", "B"), ("C", "D"))


class TestComplexityMetrics:
    """Tests for complexity_metrics and longest_chains."""

    def test_chain_metrics(self, analyzer: DependencyAnalyzer, chain_units) -> None:
        """Three-unit chain: depth 3, coupling 2/6."""
        metrics = analyzer.complexity_metrics(analyzer.build_graph(chain_units), chain_units)

        assert metrics.max_depth == 3
        assert metrics.avg_dependencies_per_unit == pytest.approx(2 / 3)
        assert metrics.coupling_factor == pytest.approx(1 / 3)
        assert metrics.cohesion_score == pytest.approx(2 / 3)
        assert metrics.cyclomatic_complexity == 0

    def test_isolated_units(self, analyzer: DependencyAnalyzer) -> None:
        """No edges: coupling 0, cohesion 1."""
        units = make_units({"A": (), "B": (), "C": ()})

        metrics = analyzer.complexity_metrics(analyzer.build_graph(units), units)

        assert metrics.max_depth == 1
        assert metrics.coupling_factor == 0.0
        assert metrics.cohesion_score == 1.0

    def test_single_unit_coupling(self, analyzer: DependencyAnalyzer) -> None:
        """One unit has no possible edges."""
        units = (make_unit("A"),)

        assert analyzer.complexity_metrics(analyzer.build_graph(units), units).coupling_factor == 0

    def test_empty_graph(self, analyzer: DependencyAnalyzer) -> None:
        """Empty graph has empty metrics."""
        metrics = analyzer.complexity_metrics(DependencyGraph.empty())

        assert metrics.max_depth == 0
        assert metrics.avg_dependencies_per_unit == 0.0
        assert metrics.cohesion_score == 1.0

    def test_cyclic_graph_depth_terminates(self, analyzer: DependencyAnalyzer) -> None:
        """Cycle reached from a root does not loop forever."""
        units = make_units({"A": (), "B": ("A", "C"), "C": ("B",)})

        metrics = analyzer.complexity_metrics(analyzer.build_graph(units), units)

        assert metrics.cyclomatic_complexity == 1
        assert metrics.max_depth == 3

    def test_longest_chains(self, analyzer: DependencyAnalyzer) -> None:
        """One chain per root, longest first."""
        units = make_units({"A": ("B",), "B": ("C",), "C": (), "D": (), "E": ("D",)})

        chains = analyzer.longest_chains(analyzer.build_graph(units))

        assert chains == (("C", "B", "A"), ("D", "E"))

    def test_chain_count_limited(self) -> None:
        """Only max_chains chains are kept."""
        analyzer = DependencyAnalyzer(PipelineConfig(max_chains=1))
        units = make_units({"A": (), "B": (), "C": ("B",)})

        assert analyzer.longest_chains(analyzer.build_graph(units)) == (("B", "C"),)


class TestGenerateReport:
    """Tests for generate_report."""

    def test_acyclic_report(self, analyzer: DependencyAnalyzer, chain_units) -> None:
        """Report carries order, roots, leaves and chains."""
        report = analyzer.generate_report(chain_units)

        assert report.total_units == 3
        assert report.total_dependencies == 2
        assert report.root_units == ("C",)
        assert report.leaf_units == ("A",)
        assert report.recommended_initialization_order == ("C", "B", "A")
        assert report.unordered_units == ()
        assert report.dependency_chains == (("C", "B", "A"),)
        assert not report.has_cycles
        assert not report.blocking

    def test_declared_cycle_is_critical(self, analyzer: DependencyAnalyzer) -> None:
        """Cycle through declared dependencies."""
        report = analyzer.generate_report(make_units({"A": ("B",), "B": ("A",)}))

        (cycle,) = report.circular_dependencies
        assert cycle.severity == CycleSeverity.CRITICAL
        assert cycle.path == "A -> B -> A"
        assert "(involves explicit dependencies)" in cycle.description
        assert cycle.suggestions[0] == (
            "Consider merging 'A' and 'B' into a single behavior if they are tightly coupled"
        )
        assert report.recommended_initialization_order == ()
        assert report.unordered_units == ("A", "B")
        assert report.blocking

    def test_inferred_cycle_is_high(self, analyzer: DependencyAnalyzer) -> None:
        """Cycle made only of inferred calls."""
        units = (make_unit("A", inferred=("B",)), make_unit("B", inferred=("A",)))

        (cycle,) = analyzer.generate_report(units).circular_dependencies

        assert cycle.severity == CycleSeverity.HIGH
        assert "explicit" not in cycle.description

    def test_long_cycle_suggestions(self, analyzer: DependencyAnalyzer) -> None:
        """Cycles of three or more units get decomposition advice."""
        units = make_units({"A": ("B",), "B": ("C",), "C": ("A",)})

        (cycle,) = analyzer.generate_report(units).circular_dependencies

        assert cycle.cycle == ("A", "B", "C")
        assert cycle.suggestions[0].startswith("Break down complex behaviors")
        assert cycle.suggestions[-1].endswith("SharedRuntime")

    def test_cycle_warning(self, analyzer: DependencyAnalyzer) -> None:
        """Each cycle also yields an ERROR warning."""
        report = analyzer.generate_report(make_units({"A": ("B",), "B": ("A",)}))

        (warning,) = report.warnings_of(WarningKind.CIRCULAR_DEPENDENCY)
        assert warning.severity == Severity.ERROR
        assert warning.message == "Circular dependency detected: A -> B -> A"

    def test_missing_reference_warnings(self, analyzer: DependencyAnalyzer) -> None:
        """Missing direct target is an error, missing event target a warning."""
        report = analyzer.generate_report(
            (make_unit("A", depends_on=("Ghost",), sends_to=("Phantom",)),)
        )

        direct, event = report.warnings_of(WarningKind.MISSING_DEPENDENCY)
        assert direct.severity == Severity.ERROR
        assert direct.message == "Behavior 'A' depends on undefined behavior 'Ghost'"
        assert event.severity == Severity.WARNING
        assert event.message == "Behavior 'A' sends events to undefined behavior 'Phantom'"
        assert report.blocking

    def test_deep_chain_warning(self, chain_units) -> None:
        """Chains longer than the threshold are reported."""
        analyzer = DependencyAnalyzer(PipelineConfig(deep_chain_threshold=2))

        report = analyzer.generate_report(chain_units)

        (warning,) = report.warnings_of(WarningKind.DEEP_DEPENDENCY_CHAIN)
        assert warning.message == "Deep dependency chain detected (3 levels): C -> B -> A"
        assert warning.severity == Severity.WARNING

    def test_high_coupling_warning(self, analyzer: DependencyAnalyzer) -> None:
        """Coupling above the threshold is reported."""
        report = analyzer.generate_report(make_units({"A": ("B",), "B": ("A",)}))

        (warning,) = report.warnings_of(WarningKind.HIGH_COUPLING)
        assert warning.message == "High coupling detected (factor: 1.00)"
        assert warning.affected == ("A", "B")

    def test_excessive_dependencies_warning(self) -> None:
        """Units with too many direct dependencies are reported."""
        analyzer = DependencyAnalyzer(PipelineConfig(max_direct_dependencies=1))
        units = make_units({"A": ("B", "C"), "B": (), "C": ()})

        (warning,) = analyzer.generate_report(units).warnings_of(
            WarningKind.EXCESSIVE_DEPENDENCIES
        )

        assert warning.message == (
            "Behavior 'A' has 2 dependencies, which may indicate tight coupling"
        )

    def test_isolation_warnings(self, analyzer: DependencyAnalyzer) -> None:
        """Three independent units: three INFO warnings, nothing else."""
        report = analyzer.generate_report(make_units({"A": (), "B": (), "C": ()}))

        assert report.root_units == ("A", "B", "C")
        assert report.leaf_units == ("A", "B", "C")
        assert [w.kind for w in report.warnings] == [WarningKind.ISOLATED_UNIT] * 3
        assert all(w.severity == Severity.INFO for w in report.warnings)
        assert not report.blocking

    def test_report_is_recomputed(self, analyzer: DependencyAnalyzer, chain_units) -> None:
        """Reusing an analyzer never leaks results between calls."""
        first = analyzer.generate_report(chain_units)
        analyzer.generate_report(make_units({"X": ("Y",), "Y": ("X",)}))
        again = analyzer.generate_report(chain_units)

        assert first == again

    def test_empty_units(self, analyzer: DependencyAnalyzer) -> None:
        """No units gives an empty report."""
        report = analyzer.generate_report(())

        assert report.total_units == 0
        assert report.recommended_initialization_order == ()
        assert report.warnings == ()

    def test_given_graph_is_reused(self, analyzer: DependencyAnalyzer, chain_units) -> None:
        """Passing the prebuilt graph gives the same report."""
        graph = analyzer.build_graph(chain_units)

        assert analyzer.generate_report(chain_units, graph=graph) == (
            analyzer.generate_report(chain_units)
        )

    def test_foreign_graph_rejected(self, analyzer: DependencyAnalyzer, chain_units) -> None:
        """Graph built from other units is refused."""
        graph = analyzer.build_graph(make_units({"X": ()}))

        with pytest.raises(ValueError, match="do not match units"):
            analyzer.generate_report(chain_units, graph=graph)
