"""Per-function input records and descriptors."""

from __future__ import annotations

from dataclasses import dataclass

from behaviorgraph.domain.model.enums import Visibility
from behaviorgraph.domain.naming import lifecycle_event_for


@dataclass(frozen=True, slots=True)
class BehaviorAttribute:
    """Structured behavior attribute attached to a function.

    Produced by the attribute layer and never re-parsed downstream.
    Values are validated by the partitioner so that every problem is
    reported at once, not here.

    Attributes:
        name: Target unit name. None = derive from function name.
        events: Unity/custom events the unit handles
        dependencies: Units called directly (ordering dependencies)
        event_targets: Units reached by runtime event sends (no ordering)
        auto_sync: Unit state is network-synchronized
    """

    name: str | None = None
    events: tuple[str, ...] = ("Start",)
    dependencies: tuple[str, ...] = ()
    event_targets: tuple[str, ...] = ()
    auto_sync: bool = False

    def __post_init__(self) -> None:
        """Validate field types. FAIL-FIRST."""
        for field_name in ("events", "dependencies", "event_targets"):
            if not isinstance(getattr(self, field_name), tuple):
                raise TypeError(f"{field_name} must be tuple")


@dataclass(frozen=True, slots=True)
class FunctionMeta:
    """Function-level metadata consumed by the partitioner.

    Attributes:
        name: Function name (must not be empty)
        visibility: Declared visibility
        attribute: Behavior attribute. None = untagged function.
        calls: Names of functions this function invokes
        parameter_types: Parameter type names in declaration order
    """

    name: str
    visibility: Visibility = Visibility.PUBLIC
    attribute: BehaviorAttribute | None = None
    calls: tuple[str, ...] = ()
    parameter_types: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
        if not isinstance(self.calls, tuple):
            raise TypeError("calls must be tuple")
        if not isinstance(self.parameter_types, tuple):
            raise TypeError("parameter_types must be tuple")

    @property
    def is_tagged(self) -> bool:
        """Function carries a behavior attribute."""
        return self.attribute is not None


@dataclass(frozen=True, slots=True)
class FunctionDescriptor:
    """Function as placed into a behavior unit.

    Attributes:
        name: Function name
        parameter_types: Parameter type names
        is_lifecycle_hook: Name maps to a Unity/VRChat event
    """

    name: str
    parameter_types: tuple[str, ...] = ()
    is_lifecycle_hook: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")

    @property
    def lifecycle_event(self) -> str | None:
        """Unity event implemented by this function, if any."""
        return lifecycle_event_for(self.name) if self.is_lifecycle_hook else None

    @classmethod
    def from_meta(cls, meta: FunctionMeta) -> FunctionDescriptor:
        """Build descriptor from input metadata."""
        return cls(
            name=meta.name,
            parameter_types=meta.parameter_types,
            is_lifecycle_hook=lifecycle_event_for(meta.name) is not None,
        )
