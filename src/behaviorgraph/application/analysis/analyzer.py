"""Dependency graph analysis over behavior units.

Builds the direct-call graph, finds roots, leaves and cycles, computes
the initialization order and complexity metrics, and composes them into
a DependencyAnalysisReport. Every call recomputes from its input.

Note on max_depth: depth is measured through dependents starting at
roots, i.e. how far dependents pile up on top of a unit with no
dependencies. This may be the inverse of the intuitive "how deep do my
dependencies go" reading, and is kept for metric compatibility.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from behaviorgraph.domain.exceptions.ordering import CircularDependencyError
from behaviorgraph.domain.model.behavior_unit import BehaviorUnit
from behaviorgraph.domain.model.configuration import PipelineConfig
from behaviorgraph.domain.model.enums import (
    CallKind,
    CallOrigin,
    CycleSeverity,
    Severity,
    WarningKind,
)
from behaviorgraph.domain.model.graph import (
    DependencyGraph,
    MissingReference,
    find_cycles,
    kahn_order,
    longest_reverse_chain,
    reverse_depth,
)
from behaviorgraph.domain.model.report import (
    CircularDependency,
    ComplexityMetrics,
    DependencyAnalysisReport,
    DependencyWarning,
)

logger = logging.getLogger(__name__)


class DependencyAnalyzer:
    """Analyzes the direct-call dependency graph of behavior units.

    Holds configuration only. No results are cached between calls, so
    one analyzer may be reused for any number of unit sets.

    Example:
        analyzer = DependencyAnalyzer()
        report = analyzer.generate_report(units)
        if report.has_cycles:
            for cycle in report.circular_dependencies:
                print(cycle.path)
    """

    def __init__(self, config: PipelineConfig | None = None) -> None:
        """Initialize analyzer.

        Args:
            config: Pipeline configuration (defaults if None)
        """
        self._config = config or PipelineConfig()

    # =========================================================================
    # Graph construction
    # =========================================================================

    def build_graph(self, units: Sequence[BehaviorUnit]) -> DependencyGraph:
        """Build graph from DIRECT calls.

        EVENT_SEND calls never become edges. Calls to unknown units are
        recorded as missing references and their edge is dropped.

        Args:
            units: Units in declaration order

        Returns:
            DependencyGraph with nodes in declaration order
        """
        nodes = tuple(unit.name for unit in units)
        known = frozenset(nodes)
        edges: list[tuple[str, str]] = []
        missing: list[MissingReference] = []

        for unit in units:
            for call in unit.inter_unit_calls:
                if call.target not in known:
                    reference = MissingReference(unit.name, call.target, call.kind)
                    if reference not in missing:
                        missing.append(reference)
                    continue
                if call.kind == CallKind.DIRECT:
                    edges.append((unit.name, call.target))

        graph = DependencyGraph.from_edges(nodes, edges, missing_references=tuple(missing))
        logger.debug(
            "Built dependency graph: %d unit(s), %d edge(s), %d missing reference(s)",
            graph.node_count,
            graph.edge_count,
            len(missing),
        )
        return graph

    def graph_for(
        self,
        units: Sequence[BehaviorUnit],
        graph: DependencyGraph | None = None,
    ) -> DependencyGraph:
        """Reuse graph if given, else build it from units.

        Raises:
            ValueError: If graph nodes differ from the unit names
        """
        if graph is None:
            return self.build_graph(units)
        names = tuple(unit.name for unit in units)
        if graph.nodes != names:
            raise ValueError(
                f"graph nodes {list(graph.nodes)} do not match units {list(names)}"
            )
        return graph

    def find_roots(self, graph: DependencyGraph) -> tuple[str, ...]:
        """Units with no dependencies, declaration order."""
        return tuple(node for node in graph.nodes if not graph.dependencies(node))

    def find_leaves(self, graph: DependencyGraph) -> tuple[str, ...]:
        """Units nothing depends on, declaration order."""
        return tuple(node for node in graph.nodes if not graph.dependents(node))

    def find_isolated(self, graph: DependencyGraph) -> tuple[str, ...]:
        """Units that are both roots and leaves."""
        return tuple(
            node
            for node in graph.nodes
            if not graph.dependencies(node) and not graph.dependents(node)
        )

    # =========================================================================
    # Cycles and ordering
    # =========================================================================

    def detect_cycles(self, graph: DependencyGraph) -> tuple[tuple[str, ...], ...]:
        """Collect every cycle found by depth-first search.

        Args:
            graph: Dependency graph

        Returns:
            Cycles as the DFS path slice, without repeating the first unit
        """
        return find_cycles(graph)

    def topological_order(self, graph: DependencyGraph) -> tuple[str, ...]:
        """Initialization order, dependencies first.

        Ties are broken by declaration order.

        Args:
            graph: Dependency graph

        Returns:
            Every unit exactly once

        Raises:
            CircularDependencyError: If units remain after the sort. The
                error names exactly those units.
        """
        ordered, remaining = kahn_order(graph)
        if remaining:
            raise CircularDependencyError(units=remaining)
        return ordered

    # =========================================================================
    # Metrics
    # =========================================================================

    def complexity_metrics(
        self,
        graph: DependencyGraph,
        units: Sequence[BehaviorUnit] = (),
        *,
        cycle_count: int | None = None,
    ) -> ComplexityMetrics:
        """Compute depth, coupling and cohesion.

        Args:
            graph: Dependency graph
            units: Units the graph was built from (defaults to graph nodes)
            cycle_count: Known number of cycles, detected if None

        Returns:
            ComplexityMetrics
        """
        unit_count = len(units) if units else graph.node_count
        edge_count = graph.edge_count
        if cycle_count is None:
            cycle_count = len(find_cycles(graph))

        memo: dict[str, int] | None = {} if cycle_count == 0 else None
        max_depth = 0
        for root in self.find_roots(graph):
            max_depth = max(max_depth, reverse_depth(graph, root, memo=memo))

        if unit_count > 1:
            coupling = edge_count / (unit_count * (unit_count - 1))
        else:
            coupling = 0.0
        average = edge_count / unit_count if unit_count else 0.0

        return ComplexityMetrics(
            max_depth=max_depth,
            avg_dependencies_per_unit=average,
            cyclomatic_complexity=cycle_count,
            coupling_factor=coupling,
            cohesion_score=1.0 - min(coupling, 1.0),
        )

    def longest_chains(
        self,
        graph: DependencyGraph,
        *,
        cycle_count: int | None = None,
    ) -> tuple[tuple[str, ...], ...]:
        """Longest chain from each root through dependents.

        Args:
            graph: Dependency graph
            cycle_count: Known number of cycles, detected if None

        Returns:
            At most max_chains chains, longest first, ties in root order
        """
        if cycle_count is None:
            cycle_count = len(find_cycles(graph))
        memo: dict[str, tuple[str, ...]] | None = {} if cycle_count == 0 else None
        chains = [
            longest_reverse_chain(graph, root, memo=memo) for root in self.find_roots(graph)
        ]
        chains.sort(key=len, reverse=True)
        return tuple(chains[: self._config.max_chains])

    # =========================================================================
    # Report
    # =========================================================================

    def generate_report(
        self,
        units: Sequence[BehaviorUnit],
        *,
        graph: DependencyGraph | None = None,
    ) -> DependencyAnalysisReport:
        """Run the full analysis.

        Args:
            units: Units in declaration order
            graph: Graph already built from units (built here if None)

        Returns:
            Fresh DependencyAnalysisReport

        Raises:
            ValueError: If graph was not built from units
        """
        units = tuple(units)
        graph = self.graph_for(units, graph)
        roots = self.find_roots(graph)
        leaves = self.find_leaves(graph)

        cycles = tuple(self._describe_cycle(cycle, units) for cycle in self.detect_cycles(graph))
        ordered, unordered = kahn_order(graph)
        metrics = self.complexity_metrics(graph, units, cycle_count=len(cycles))
        chains = self.longest_chains(graph, cycle_count=len(cycles))

        warnings: list[DependencyWarning] = []
        warnings.extend(self._cycle_warnings(cycles))
        warnings.extend(self._missing_reference_warnings(graph.missing_references))
        warnings.extend(self._chain_warnings(chains))
        warnings.extend(self._coupling_warnings(metrics, graph))
        warnings.extend(self._excessive_dependency_warnings(graph))
        warnings.extend(self._isolation_warnings(graph))

        logger.info(
            "Analyzed %d unit(s): %d edge(s), %d cycle(s), %d warning(s)",
            graph.node_count,
            graph.edge_count,
            len(cycles),
            len(warnings),
        )

        return DependencyAnalysisReport(
            total_units=graph.node_count,
            total_dependencies=graph.edge_count,
            root_units=roots,
            leaf_units=leaves,
            circular_dependencies=cycles,
            dependency_chains=chains,
            complexity_metrics=metrics,
            recommended_initialization_order=ordered,
            unordered_units=unordered,
            warnings=tuple(warnings),
            missing_references=graph.missing_references,
        )

    def _describe_cycle(
        self,
        cycle: tuple[str, ...],
        units: tuple[BehaviorUnit, ...],
    ) -> CircularDependency:
        """Attach severity, description and suggestions to a raw cycle."""
        by_name = {unit.name: unit for unit in units}
        declared = False
        for i, name in enumerate(cycle):
            target = cycle[(i + 1) % len(cycle)]
            for call in by_name[name].calls_to(target):
                if call.kind == CallKind.DIRECT and call.origin == CallOrigin.DECLARED:
                    declared = True

        severity = CycleSeverity.CRITICAL if declared else CycleSeverity.HIGH
        path = " -> ".join((*cycle, cycle[0]))
        description = f"Circular dependency detected: {path}"
        if declared:
            description += " (involves explicit dependencies)"
        description += (
            ". This creates an initialization deadlock where behaviors cannot be properly ordered."
        )

        suggestions: list[str] = []
        if len(cycle) == 2:
            suggestions.append(
                f"Consider merging '{cycle[0]}' and '{cycle[1]}' into a single behavior "
                "if they are tightly coupled"
            )
            suggestions.append("Use events instead of direct calls for one direction")
        else:
            suggestions.append("Break down complex behaviors into smaller, more focused components")
            suggestions.append("Introduce a coordinator or move shared code to SharedRuntime")
        suggestions.append("Use initialization phases to establish proper startup order")
        suggestions.append(
            f"Move shared state to a centralized manager or {self._config.shared_runtime_name}"
        )

        return CircularDependency(
            cycle=cycle,
            severity=severity,
            description=description,
            suggestions=tuple(suggestions),
        )

    # =========================================================================
    # Warnings
    # =========================================================================

    @staticmethod
    def _cycle_warnings(cycles: tuple[CircularDependency, ...]) -> list[DependencyWarning]:
        return [
            DependencyWarning(
                kind=WarningKind.CIRCULAR_DEPENDENCY,
                severity=Severity.ERROR,
                message=f"Circular dependency detected: {cycle.path}",
                affected=cycle.cycle,
                suggestions=cycle.suggestions,
            )
            for cycle in cycles
        ]

    @staticmethod
    def _missing_reference_warnings(
        missing: tuple[MissingReference, ...],
    ) -> list[DependencyWarning]:
        warnings: list[DependencyWarning] = []
        for reference in missing:
            direct = reference.kind == CallKind.DIRECT
            verb = "depends on" if direct else "sends events to"
            warnings.append(
                DependencyWarning(
                    kind=WarningKind.MISSING_DEPENDENCY,
                    severity=Severity.ERROR if direct else Severity.WARNING,
                    message=(
                        f"Behavior '{reference.source}' {verb} undefined behavior "
                        f"'{reference.target}'"
                    ),
                    affected=(reference.source, reference.target),
                    suggestions=(
                        f"Ensure behavior '{reference.target}' is properly defined",
                        "Check for typos in behavior names",
                    ),
                )
            )
        return warnings

    def _chain_warnings(self, chains: tuple[tuple[str, ...], ...]) -> list[DependencyWarning]:
        threshold = self._config.deep_chain_threshold
        return [
            DependencyWarning(
                kind=WarningKind.DEEP_DEPENDENCY_CHAIN,
                severity=Severity.WARNING,
                message=(
                    f"Deep dependency chain detected ({len(chain)} levels): "
                    f"{' -> '.join(chain)}"
                ),
                affected=chain,
                suggestions=(
                    "Consider flattening the dependency structure",
                    "Use mediator pattern for complex interactions",
                ),
            )
            for chain in chains
            if len(chain) > threshold
        ]

    def _coupling_warnings(
        self,
        metrics: ComplexityMetrics,
        graph: DependencyGraph,
    ) -> list[DependencyWarning]:
        if metrics.coupling_factor <= self._config.coupling_threshold:
            return []
        return [
            DependencyWarning(
                kind=WarningKind.HIGH_COUPLING,
                severity=Severity.WARNING,
                message=f"High coupling detected (factor: {metrics.coupling_factor:.2f})",
                affected=graph.nodes,
                suggestions=(
                    "Reduce direct dependencies between behaviors",
                    "Use event-driven communication",
                    "Extract shared functionality",
                ),
            )
        ]

    def _excessive_dependency_warnings(self, graph: DependencyGraph) -> list[DependencyWarning]:
        limit = self._config.max_direct_dependencies
        warnings: list[DependencyWarning] = []
        for node in graph.nodes:
            count = len(graph.dependencies(node))
            if count > limit:
                warnings.append(
                    DependencyWarning(
                        kind=WarningKind.EXCESSIVE_DEPENDENCIES,
                        severity=Severity.WARNING,
                        message=(
                            f"Behavior '{node}' has {count} dependencies, "
                            "which may indicate tight coupling"
                        ),
                        affected=(node,),
                        suggestions=(
                            "Consider breaking down this behavior into smaller components",
                            "Use dependency injection to reduce direct coupling",
                        ),
                    )
                )
        return warnings

    def _isolation_warnings(self, graph: DependencyGraph) -> list[DependencyWarning]:
        return [
            DependencyWarning(
                kind=WarningKind.ISOLATED_UNIT,
                severity=Severity.INFO,
                message=f"Behavior '{node}' has no dependencies or dependents",
                affected=(node,),
                suggestions=(
                    "Consider if this behavior is needed",
                    "Integrate with other behaviors if appropriate",
                ),
            )
            for node in self.find_isolated(graph)
        ]
