"""Initialization ordering exceptions."""

from behaviorgraph.domain.exceptions.base import BehaviorGraphError


class CircularDependencyError(BehaviorGraphError, ValueError):
    """No initialization order exists.

    Attributes:
        units: Units left unprocessed by the topological sort
    """

    def __init__(self, units: tuple[str, ...]) -> None:
        if not units:
            raise ValueError("CircularDependencyError requires at least one unit")

        self.units = units
        super().__init__(f"Circular dependency detected among behaviors: {', '.join(units)}")


class OrderingViolationError(BehaviorGraphError, ValueError):
    """Manual initialization order is invalid.

    All problems are collected before raising.

    Attributes:
        missing: Units absent from the manual order
        unknown: Names in the manual order that are not units
        duplicates: Names listed more than once
        violations: (unit, position, dependency, dependency position) where
            unit is initialized before its dependency. Positions are 0-based.
    """

    def __init__(
        self,
        *,
        missing: tuple[str, ...] = (),
        unknown: tuple[str, ...] = (),
        duplicates: tuple[str, ...] = (),
        violations: tuple[tuple[str, int, str, int], ...] = (),
    ) -> None:
        if not (missing or unknown or duplicates or violations):
            raise ValueError("OrderingViolationError requires at least one problem")

        self.missing = missing
        self.unknown = unknown
        self.duplicates = duplicates
        self.violations = violations
        super().__init__("\n".join(self.messages))

    @property
    def messages(self) -> tuple[str, ...]:
        """One message per problem."""
        lines = [
            f"Behavior '{name}' is missing from manual initialization order"
            for name in self.missing
        ]
        lines.extend(
            f"Unknown behavior '{name}' in manual initialization order" for name in self.unknown
        )
        lines.extend(
            f"Behavior '{name}' appears more than once in manual initialization order"
            for name in self.duplicates
        )
        lines.extend(
            f"Dependency violation: '{unit}' (position {pos}) depends on '{dep}' "
            f"(position {dep_pos}) but is initialized before it"
            for unit, pos, dep, dep_pos in self.violations
        )
        return tuple(lines)
