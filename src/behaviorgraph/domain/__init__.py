"""behaviorgraph domain layer.

Pure domain logic with no external dependencies.
"""

from behaviorgraph.domain.exceptions import (
    BehaviorGraphError,
    BlockedPipelineError,
    CircularDependencyError,
    OrderingViolationError,
)
from behaviorgraph.domain.model import (
    BehaviorAttribute,
    BehaviorUnit,
    DependencyGraph,
    Finding,
    FunctionMeta,
    PipelineConfig,
    Severity,
    ValidationResult,
)
from behaviorgraph.domain.ports import CodeRuleProtocol, ReporterProtocol

__all__ = [
    "BehaviorGraphError",
    "BlockedPipelineError",
    "CircularDependencyError",
    "OrderingViolationError",
    "BehaviorAttribute",
    "BehaviorUnit",
    "DependencyGraph",
    "Finding",
    "FunctionMeta",
    "PipelineConfig",
    "Severity",
    "ValidationResult",
    "CodeRuleProtocol",
    "ReporterProtocol",
]
