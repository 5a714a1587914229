"""Initialization coordinator synthesis.

Turns a cycle-free unit set into an initialization order, a coordinator
class sequencing that order at runtime, and execution order hints.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from types import MappingProxyType
from typing import TYPE_CHECKING

from behaviorgraph.application.analysis.analyzer import DependencyAnalyzer
from behaviorgraph.application.coordination.csharp import render_coordinator, render_editor_script
from behaviorgraph.domain.exceptions.ordering import OrderingViolationError
from behaviorgraph.domain.model.behavior_unit import BehaviorUnit
from behaviorgraph.domain.model.coordinator import (
    CoordinatorStep,
    ExecutionOrderHint,
    InitializationCoordinator,
    InitializationSettings,
)
from behaviorgraph.domain.naming import to_snake_case

if TYPE_CHECKING:
    from behaviorgraph.domain.model.graph import DependencyGraph

logger = logging.getLogger(__name__)

COORDINATOR_PRIORITY = -1000
PRIORITY_STEP = 100


class CoordinatorSynthesizer:
    """Builds the initialization coordinator for an ordered unit set.

    Example:
        synthesizer = CoordinatorSynthesizer(InitializationSettings())
        order = synthesizer.determine_order(units)
        coordinator = synthesizer.synthesize(order, units)
        print(coordinator.source.source_code)
    """

    def __init__(
        self,
        settings: InitializationSettings | None = None,
        analyzer: DependencyAnalyzer | None = None,
    ) -> None:
        """Initialize synthesizer.

        Args:
            settings: Ordering and coordinator settings (defaults if None)
            analyzer: Analyzer used for automatic ordering
        """
        self._settings = settings or InitializationSettings()
        self._analyzer = analyzer or DependencyAnalyzer()

    @property
    def settings(self) -> InitializationSettings:
        """Active settings."""
        return self._settings

    def determine_order(
        self,
        units: Sequence[BehaviorUnit],
        *,
        graph: DependencyGraph | None = None,
    ) -> tuple[str, ...]:
        """Initialization order for units.

        Automatic mode sorts topologically. Manual mode validates the
        configured order and returns it unchanged.

        Args:
            units: Units in declaration order
            graph: Graph already built from units (built here if None)

        Returns:
            Unit names, dependencies first

        Raises:
            CircularDependencyError: Automatic mode on a cyclic graph
            OrderingViolationError: Manual order is invalid
        """
        if self._settings.auto_determine_order:
            order = self._analyzer.topological_order(self._analyzer.graph_for(units, graph))
            logger.debug("Automatic initialization order: %s", ", ".join(order))
            return order

        self.validate_manual_order(self._settings.manual_order, units, graph=graph)
        logger.debug("Manual initialization order accepted")
        return self._settings.manual_order

    def validate_manual_order(
        self,
        manual_order: Sequence[str],
        units: Sequence[BehaviorUnit],
        *,
        graph: DependencyGraph | None = None,
    ) -> None:
        """Check a manual order against the units and their direct dependencies.

        Every problem is collected before raising.

        Args:
            manual_order: Proposed order
            units: Units in declaration order
            graph: Graph already built from units (built here if None)

        Raises:
            OrderingViolationError: On any missing, unknown or duplicated
                name, or any dependency initialized after its dependent
        """
        names = tuple(unit.name for unit in units)
        known = frozenset(names)
        listed = frozenset(manual_order)

        missing = tuple(name for name in names if name not in listed)

        unknown: list[str] = []
        duplicates: list[str] = []
        positions: dict[str, int] = {}
        for position, name in enumerate(manual_order):
            if name not in known:
                if name not in unknown:
                    unknown.append(name)
            elif name in positions:
                if name not in duplicates:
                    duplicates.append(name)
            else:
                positions[name] = position

        graph = self._analyzer.graph_for(units, graph)
        violations: list[tuple[str, int, str, int]] = []
        for unit, dependency in graph.edges:
            if unit not in positions or dependency not in positions:
                continue
            if positions[dependency] >= positions[unit]:
                violations.append((unit, positions[unit], dependency, positions[dependency]))

        if missing or unknown or duplicates or violations:
            raise OrderingViolationError(
                missing=missing,
                unknown=tuple(unknown),
                duplicates=tuple(duplicates),
                violations=tuple(violations),
            )

    def synthesize(
        self,
        order: Sequence[str],
        units: Sequence[BehaviorUnit],
    ) -> InitializationCoordinator:
        """Build the coordinator for an already validated order.

        Args:
            order: Initialization order
            units: Units the order was computed from

        Returns:
            InitializationCoordinator with one step per ordered unit

        Raises:
            ValueError: If order names a unit not in units
        """
        known = {unit.name for unit in units}
        for name in order:
            if name not in known:
                raise ValueError(f"order references unknown unit '{name}'")

        steps = _build_steps(order)
        name = self._settings.coordinator_name
        source = render_coordinator(name, steps, self._settings)

        logger.info("Synthesized coordinator %s with %d step(s)", name, len(steps))
        return InitializationCoordinator(
            name=name,
            ordered_units=tuple(order),
            steps=steps,
            timeout_seconds=self._settings.timeout_seconds,
            per_unit_ready_flags=MappingProxyType(dict.fromkeys(order, False)),
            source=source,
        )

    def generate_execution_order_hints(
        self,
        order: Sequence[str],
    ) -> tuple[ExecutionOrderHint, ...]:
        """Script execution order hints, coordinator first.

        The coordinator gets the most negative priority. Units follow in
        order with strictly increasing priorities.

        Args:
            order: Initialization order

        Returns:
            Hints, coordinator first. Empty if hints are disabled.
        """
        if not self._settings.use_execution_order_hints:
            return ()

        hints = [ExecutionOrderHint(self._settings.coordinator_name, COORDINATOR_PRIORITY)]
        hints.extend(
            ExecutionOrderHint(name, index * PRIORITY_STEP) for index, name in enumerate(order)
        )
        return tuple(hints)

    def generate_editor_script(self, hints: Sequence[ExecutionOrderHint]) -> str:
        """Unity editor script applying hints on load."""
        return render_editor_script(hints, self._settings.namespace)


def _build_steps(order: Sequence[str]) -> tuple[CoordinatorStep, ...]:
    """One step per unit with snake_case field names.

    Distinct unit names can share a snake_case form ("FooBar", "Foo_bar").
    Later units with a taken form get their step index appended.
    """
    steps: list[CoordinatorStep] = []
    taken: set[str] = set()
    for index, unit in enumerate(order, start=1):
        stem = to_snake_case(unit)
        suffix = "" if stem not in taken else f"_{index}"
        taken.add(stem)
        steps.append(
            CoordinatorStep(
                index=index,
                unit=unit,
                field_name=f"_{stem}_behavior{suffix}",
                flag_name=f"_{stem}_initialized{suffix}",
            )
        )
    return tuple(steps)
