"""Tests for coordination/synthesizer.py."""

import pytest

from behaviorgraph.application.coordination.synthesizer import (
    COORDINATOR_PRIORITY,
    CoordinatorSynthesizer,
)
from behaviorgraph.domain.exceptions.ordering import (
    CircularDependencyError,
    OrderingViolationError,
)
from behaviorgraph.domain.model.coordinator import ExecutionOrderHint, InitializationSettings
from tests.factories import make_unit, make_units


def _manual(*order: str) -> CoordinatorSynthesizer:
    return CoordinatorSynthesizer(
        InitializationSettings(auto_determine_order=False, manual_order=order)
    )


class TestDetermineOrder:
    """Tests for determine_order."""

    def test_automatic_order(self) -> None:
        """Automatic mode sorts topologically."""
        units = make_units({"A": ("B",), "B": ("C",), "C": ()})

        assert CoordinatorSynthesizer().determine_order(units) == ("C", "B", "A")

    def test_automatic_order_on_cycle(self) -> None:
        """Automatic mode cannot order a cycle."""
        units = make_units({"A": ("B",), "B": ("A",)})

        with pytest.raises(CircularDependencyError):
            CoordinatorSynthesizer().determine_order(units)

    def test_manual_order_accepted(self) -> None:
        """Valid manual order is returned unchanged."""
        units = make_units({"A": ("B",), "B": ()})

        assert _manual("B", "A").determine_order(units) == ("B", "A")

    def test_manual_order_violation(self) -> None:
        """Dependency after its dependent is rejected with positions."""
        units = make_units({"A": ("B",), "B": ()})

        with pytest.raises(OrderingViolationError) as exc_info:
            _manual("A", "B").determine_order(units)

        assert exc_info.value.violations == (("A", 0, "B", 1),)
        assert exc_info.value.messages == (
            "Dependency violation: 'A' (position 0) depends on 'B' (position 1) "
            "but is initialized before it",
        )

    def test_event_sends_do_not_constrain_manual_order(self) -> None:
        """Only DIRECT calls are ordering dependencies."""
        units = (make_unit("A", sends_to=("B",)), make_unit("B"))

        assert _manual("A", "B").determine_order(units) == ("A", "B")


class TestValidateManualOrder:
    """Tests for validate_manual_order."""

    def test_all_problems_collected(self) -> None:
        """Missing, unknown and duplicated names are reported together."""
        units = make_units({"A": (), "B": ()})

        with pytest.raises(OrderingViolationError) as exc_info:
            CoordinatorSynthesizer().validate_manual_order(("A", "A", "Ghost"), units)

        error = exc_info.value
        assert error.missing == ("B",)
        assert error.unknown == ("Ghost",)
        assert error.duplicates == ("A",)
        assert error.violations == ()
        assert len(error.messages) == 3

    def test_duplicate_uses_first_position(self) -> None:
        """Positions come from the first occurrence."""
        units = make_units({"A": ("B",), "B": ()})

        with pytest.raises(OrderingViolationError) as exc_info:
            CoordinatorSynthesizer().validate_manual_order(("B", "A", "B"), units)

        assert exc_info.value.duplicates == ("B",)
        assert exc_info.value.violations == ()

    def test_valid_order(self) -> None:
        """Valid order raises nothing."""
        units = make_units({"A": ("B",), "B": ()})

        CoordinatorSynthesizer().validate_manual_order(("B", "A"), units)


class TestSynthesize:
    """Tests for synthesize."""

    def test_steps_follow_order(self) -> None:
        """One step per unit, 1-based, with derived field names."""
        units = make_units({"PlayerManager": ("Score",), "Score": ()})

        coordinator = CoordinatorSynthesizer().synthesize(("Score", "PlayerManager"), units)

        assert coordinator.name == "BehaviorCoordinator"
        assert coordinator.ordered_units == ("Score", "PlayerManager")
        assert [s.index for s in coordinator.steps] == [1, 2]
        step = coordinator.step_for("PlayerManager")
        assert step is not None
        assert step.field_name == "_player_manager_behavior"
        assert step.flag_name == "_player_manager_initialized"

    def test_colliding_snake_case_names_get_index(self) -> None:
        """FooBar and Foo_bar share a snake_case form but get distinct fields."""
        units = (make_unit("FooBar"), make_unit("Foo_bar"))

        coordinator = CoordinatorSynthesizer().synthesize(("FooBar", "Foo_bar"), units)

        assert [s.field_name for s in coordinator.steps] == [
            "_foo_bar_behavior",
            "_foo_bar_behavior_2",
        ]
        assert [s.flag_name for s in coordinator.steps] == [
            "_foo_bar_initialized",
            "_foo_bar_initialized_2",
        ]
        source = coordinator.source.source_code
        assert source.count("private FooBar _foo_bar_behavior;") == 1
        assert "private Foo_bar _foo_bar_behavior_2;" in source

    def test_ready_flags_start_false(self) -> None:
        """Every unit starts not ready."""
        units = make_units({"A": (), "B": ()})

        coordinator = CoordinatorSynthesizer().synthesize(("A", "B"), units)

        assert dict(coordinator.per_unit_ready_flags) == {"A": False, "B": False}
        assert coordinator.timeout_seconds == 30.0

    def test_settings_applied(self) -> None:
        """Coordinator name and timeout come from settings."""
        settings = InitializationSettings(coordinator_name="Bootstrap", timeout_seconds=5.0)
        units = (make_unit("A"),)

        coordinator = CoordinatorSynthesizer(settings).synthesize(("A",), units)

        assert coordinator.name == "Bootstrap"
        assert coordinator.source.class_name == "Bootstrap"
        assert "_initializationTimeout = 5.0f;" in coordinator.source.source_code

    def test_unknown_unit_rejected(self) -> None:
        """Order must only name known units."""
        with pytest.raises(ValueError, match="unknown unit 'Ghost'"):
            CoordinatorSynthesizer().synthesize(("Ghost",), (make_unit("A"),))

    def test_empty_order(self) -> None:
        """No units gives a coordinator with no steps."""
        coordinator = CoordinatorSynthesizer().synthesize((), ())

        assert coordinator.step_count == 0
        assert "public class BehaviorCoordinator" in coordinator.source.source_code

    def test_deterministic(self) -> None:
        """Same input, same source."""
        units = make_units({"A": ("B",), "B": ()})
        synthesizer = CoordinatorSynthesizer()

        first = synthesizer.synthesize(("B", "A"), units)
        second = synthesizer.synthesize(("B", "A"), units)

        assert first.source == second.source
        assert first.steps == second.steps


class TestExecutionOrderHints:
    """Tests for generate_execution_order_hints and generate_editor_script."""

    def test_coordinator_first(self) -> None:
        """Coordinator runs first, units follow with rising priorities."""
        hints = CoordinatorSynthesizer().generate_execution_order_hints(("C", "B", "A"))

        assert hints == (
            ExecutionOrderHint("BehaviorCoordinator", COORDINATOR_PRIORITY),
            ExecutionOrderHint("C", 0),
            ExecutionOrderHint("B", 100),
            ExecutionOrderHint("A", 200),
        )

    def test_priorities_strictly_increase(self) -> None:
        """Order is reflected exactly in priorities."""
        order = tuple(f"Unit{i}" for i in range(20))

        priorities = [
            h.priority for h in CoordinatorSynthesizer().generate_execution_order_hints(order)
        ]

        assert priorities == sorted(priorities)
        assert len(set(priorities)) == len(priorities)

    def test_hints_disabled(self) -> None:
        """No hints when disabled."""
        synthesizer = CoordinatorSynthesizer(
            InitializationSettings(use_execution_order_hints=False)
        )

        assert synthesizer.generate_execution_order_hints(("A",)) == ()

    def test_editor_script(self) -> None:
        """Editor script applies every hint."""
        synthesizer = CoordinatorSynthesizer()
        hints = synthesizer.generate_execution_order_hints(("Score",))

        script = synthesizer.generate_editor_script(hints)

        assert script.startswith("#if UNITY_EDITOR\n")
        assert script.endswith("#endif\n")
        assert 'SetScriptExecutionOrder("BehaviorCoordinator", -1000);' in script
        assert 'SetScriptExecutionOrder("Score", 0);' in script
