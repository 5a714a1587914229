"""Initialization coordinator settings and synthesized coordinator."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from behaviorgraph.domain.model.generated_code import GeneratedClass
from behaviorgraph.domain.naming import is_valid_identifier, is_valid_unit_name


@dataclass(frozen=True, slots=True)
class InitializationSettings:
    """Initialization ordering configuration.

    Attributes:
        auto_determine_order: Derive order from dependencies (else manual_order)
        manual_order: Explicit unit order, validated before use
        generate_coordinator: Synthesize a coordinator unit
        coordinator_name: Coordinator class name
        use_execution_order_hints: Emit script execution order hints
        timeout_seconds: Generated coordinator gives up after this long
        step_delay_seconds: Wait between initialization steps
        namespace: Optional C# namespace for generated code
    """

    auto_determine_order: bool = True
    manual_order: tuple[str, ...] = ()
    generate_coordinator: bool = True
    coordinator_name: str = "BehaviorCoordinator"
    use_execution_order_hints: bool = True
    timeout_seconds: float = 30.0
    step_delay_seconds: float = 0.1
    namespace: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.manual_order, tuple):
            raise TypeError("manual_order must be tuple")
        for name in self.manual_order:
            if not name:
                raise ValueError("manual_order entries must not be empty")
        if not is_valid_unit_name(self.coordinator_name):
            raise ValueError(f"coordinator_name '{self.coordinator_name}' is not a legal name")
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")
        if self.step_delay_seconds < 0:
            raise ValueError(f"step_delay_seconds must be >= 0, got {self.step_delay_seconds}")
        if self.namespace is not None:
            if not all(is_valid_identifier(part) for part in self.namespace.split(".")):
                raise ValueError(f"namespace '{self.namespace}' is not a legal C# namespace")


@dataclass(frozen=True, slots=True)
class CoordinatorStep:
    """One initialization step of the coordinator.

    Attributes:
        index: 1-based step number
        unit: Unit activated by this step
        field_name: Serialized reference field in generated code
        flag_name: Readiness flag field in generated code
    """

    index: int
    unit: str
    field_name: str
    flag_name: str

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.index < 1:
            raise ValueError(f"index must be >= 1, got {self.index}")
        if not self.unit:
            raise ValueError("unit must not be empty")


@dataclass(frozen=True, slots=True)
class ExecutionOrderHint:
    """Script execution order hint for the host scheduler.

    Attributes:
        script_name: Generated class name
        priority: Lower runs earlier
    """

    script_name: str
    priority: int


@dataclass(frozen=True, slots=True)
class InitializationCoordinator:
    """Synthesized unit sequencing the initialization of all other units.

    Never mutated after synthesis. Readiness state changes only inside
    the generated code at runtime.

    Attributes:
        name: Coordinator class name
        ordered_units: Units in activation order
        steps: One step per unit, same order
        timeout_seconds: Sequence is abandoned after this long
        per_unit_ready_flags: Initial readiness per unit (all False)
        source: Generated coordinator class
    """

    name: str
    ordered_units: tuple[str, ...]
    steps: tuple[CoordinatorStep, ...]
    timeout_seconds: float
    per_unit_ready_flags: Mapping[str, bool]
    source: GeneratedClass

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if len(self.steps) != len(self.ordered_units):
            raise ValueError(
                f"steps ({len(self.steps)}) must match ordered_units ({len(self.ordered_units)})"
            )
        for step, unit in zip(self.steps, self.ordered_units, strict=True):
            if step.unit != unit:
                raise ValueError(f"step {step.index} references '{step.unit}', expected '{unit}'")
        if len(set(self.ordered_units)) != len(self.ordered_units):
            raise ValueError("ordered_units must be unique")
        names = [n for step in self.steps for n in (step.field_name, step.flag_name)]
        if len(set(names)) != len(names):
            raise ValueError("step field and flag names must be unique")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")
        if set(self.per_unit_ready_flags) != set(self.ordered_units):
            raise ValueError("per_unit_ready_flags must cover exactly ordered_units")
        if any(self.per_unit_ready_flags.values()):
            raise ValueError("per_unit_ready_flags must start False")

    @property
    def step_count(self) -> int:
        """Number of initialization steps."""
        return len(self.steps)

    def step_for(self, unit: str) -> CoordinatorStep | None:
        """Find the step activating unit."""
        for step in self.steps:
            if step.unit == unit:
                return step
        return None
