"""Domain model entities."""

from behaviorgraph.domain.model.behavior_unit import BehaviorUnit, InterUnitCall
from behaviorgraph.domain.model.configuration import PipelineConfig, ReportConfig
from behaviorgraph.domain.model.coordinator import (
    CoordinatorStep,
    ExecutionOrderHint,
    InitializationCoordinator,
    InitializationSettings,
)
from behaviorgraph.domain.model.enums import (
    CallKind,
    CallOrigin,
    CycleSeverity,
    ErrorCategory,
    FunctionType,
    Severity,
    SharingStrategy,
    Visibility,
    WarningKind,
)
from behaviorgraph.domain.model.finding import Finding, ValidationResult
from behaviorgraph.domain.model.function import (
    BehaviorAttribute,
    FunctionDescriptor,
    FunctionMeta,
)
from behaviorgraph.domain.model.generated_code import GeneratedClass, GeneratedMethod
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
from behaviorgraph.domain.model.sharing import SharedFunctionPlan
from behaviorgraph.domain.model.verdict import FinalVerdict

__all__ = [
    # Enums
    "CallKind",
    "CallOrigin",
    "CycleSeverity",
    "ErrorCategory",
    "FunctionType",
    "Severity",
    "SharingStrategy",
    "Visibility",
    "WarningKind",
    # Input
    "BehaviorAttribute",
    "FunctionMeta",
    "FunctionDescriptor",
    # Units and graph
    "BehaviorUnit",
    "InterUnitCall",
    "DependencyGraph",
    "MissingReference",
    "find_cycles",
    "kahn_order",
    "longest_reverse_chain",
    "reverse_depth",
    # Results
    "Finding",
    "ValidationResult",
    "CircularDependency",
    "ComplexityMetrics",
    "DependencyAnalysisReport",
    "DependencyWarning",
    "SharedFunctionPlan",
    "FinalVerdict",
    # Coordination
    "CoordinatorStep",
    "ExecutionOrderHint",
    "InitializationCoordinator",
    "InitializationSettings",
    "GeneratedClass",
    "GeneratedMethod",
    # Configuration
    "PipelineConfig",
    "ReportConfig",
]
