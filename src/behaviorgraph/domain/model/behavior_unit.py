"""Behavior unit: one independently emitted UdonSharp class."""

from __future__ import annotations

from dataclasses import dataclass

from behaviorgraph.domain.model.enums import CallKind, CallOrigin
from behaviorgraph.domain.model.function import FunctionDescriptor
from behaviorgraph.domain.naming import is_unity_event, is_valid_identifier


@dataclass(frozen=True, slots=True)
class InterUnitCall:
    """Call from one behavior unit into another.

    Attributes:
        target: Target unit name
        kind: DIRECT (ordering dependency) or EVENT_SEND (no ordering)
        origin: DECLARED (attribute) or INFERRED (call graph)
        via: Calling function name, None for declared calls
    """

    target: str
    kind: CallKind
    origin: CallOrigin = CallOrigin.DECLARED
    via: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.target:
            raise ValueError("target must not be empty")


@dataclass(frozen=True, slots=True)
class BehaviorUnit:
    """Decomposed, independently compilable behavior.

    Immutable for the whole pipeline run.

    Attributes:
        name: Unique legal identifier
        functions: Functions in declaration order
        inter_unit_calls: Outgoing calls to other units
        events: Declared events (deduplicated, declaration order)
        auto_sync: Unit state is network-synchronized
    """

    name: str
    functions: tuple[FunctionDescriptor, ...] = ()
    inter_unit_calls: tuple[InterUnitCall, ...] = ()
    events: tuple[str, ...] = ()
    auto_sync: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
        if not is_valid_identifier(self.name):
            raise ValueError(f"name '{self.name}' is not a legal identifier")

        seen: set[str] = set()
        for function in self.functions:
            if function.name in seen:
                raise ValueError(f"duplicate function '{function.name}' in unit '{self.name}'")
            seen.add(function.name)

    @property
    def function_names(self) -> tuple[str, ...]:
        """Function names in declaration order."""
        return tuple(f.name for f in self.functions)

    @property
    def lifecycle_hooks(self) -> tuple[FunctionDescriptor, ...]:
        """Functions implementing a Unity/VRChat event."""
        return tuple(f for f in self.functions if f.is_lifecycle_hook)

    @property
    def lifecycle_events(self) -> tuple[str, ...]:
        """Unity events the unit implements, declared or by function name.

        Declared Unity events come first, then events of hook functions,
        deduplicated. Custom event names are not lifecycle events.
        """
        declared = [e for e in self.events if is_unity_event(e)]
        hooked = [f.lifecycle_event for f in self.lifecycle_hooks if f.lifecycle_event]
        return tuple(dict.fromkeys(declared + hooked))

    @property
    def direct_dependencies(self) -> tuple[str, ...]:
        """Targets of DIRECT calls, deduplicated, first-seen order."""
        return _unique_targets(self.inter_unit_calls, CallKind.DIRECT)

    @property
    def event_targets(self) -> tuple[str, ...]:
        """Targets of EVENT_SEND calls, deduplicated, first-seen order."""
        return _unique_targets(self.inter_unit_calls, CallKind.EVENT_SEND)

    def calls_to(self, target: str) -> tuple[InterUnitCall, ...]:
        """All calls into target unit."""
        return tuple(c for c in self.inter_unit_calls if c.target == target)


def _unique_targets(calls: tuple[InterUnitCall, ...], kind: CallKind) -> tuple[str, ...]:
    result: list[str] = []
    for call in calls:
        if call.kind == kind and call.target not in result:
            result.append(call.target)
    return tuple(result)
