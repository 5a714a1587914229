"""Domain enumerations."""

from enum import Enum, auto


class Visibility(Enum):
    """Function visibility as declared in source."""

    PUBLIC = auto()
    PRIVATE = auto()


class Severity(Enum):
    """Finding severity.

    Only ERROR blocks the pipeline.
    """

    ERROR = auto()  # blocks emission
    WARNING = auto()  # reported, does not block
    INFO = auto()  # informational


class ErrorCategory(Enum):
    """Finding category.

    Declaration order is the grouping order used by reports.
    """

    INVALID_UNIT_NAME = auto()
    INVALID_ATTRIBUTE = auto()
    MISSING_REFERENCE = auto()
    CIRCULAR_DEPENDENCY = auto()
    ORDERING_VIOLATION = auto()
    STRUCTURAL_INCOMPLETENESS = auto()
    GENERATED_CODE_ISSUE = auto()


class CallKind(Enum):
    """How one unit reaches another.

    DIRECT calls constrain initialization order.
    EVENT_SEND calls are resolved by name at runtime and never do.
    """

    DIRECT = auto()
    EVENT_SEND = auto()


class CallOrigin(Enum):
    """Where an inter-unit call was found."""

    DECLARED = auto()  # attribute dependencies / event targets
    INFERRED = auto()  # function call graph


class CycleSeverity(Enum):
    """Severity of a circular dependency."""

    CRITICAL = auto()  # at least one declared edge
    HIGH = auto()  # inferred edges only


class WarningKind(Enum):
    """Dependency analysis warning kinds."""

    CIRCULAR_DEPENDENCY = auto()
    DEEP_DEPENDENCY_CHAIN = auto()
    HIGH_COUPLING = auto()
    ISOLATED_UNIT = auto()
    MISSING_DEPENDENCY = auto()
    EXCESSIVE_DEPENDENCIES = auto()


class FunctionType(Enum):
    """Name-based classification of a shared function."""

    UNITY_EVENT = auto()
    UTILITY = auto()
    DATA_ACCESS = auto()
    EVENT_HANDLER = auto()
    BUSINESS_LOGIC = auto()


class SharingStrategy(Enum):
    """Advisory strategy for a shared-runtime function.

    Advisory only: a shared function is emitted exactly once whatever
    the strategy says.
    """

    MOVE_TO_SHARED_RUNTIME = auto()
    STATIC_METHOD = auto()
    INTERFACE_METHOD = auto()
    KEEP_LOCAL = auto()
