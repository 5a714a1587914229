"""Application layer for behavior decomposition.

Components:
- partitioning: Function metadata → behavior units + shared runtime
- analysis: Dependency graph, cycles, order, metrics, warnings
- coordination: Initialization order and coordinator synthesis
- validators: Generated-code rules
- aggregation: Final verdict
- reporters: Output formatting (PlainText, JSON, Console, DOT)
- services: Main facade (DecompositionPipeline)
"""

from behaviorgraph.application.aggregation import aggregate
from behaviorgraph.application.analysis import DependencyAnalyzer
from behaviorgraph.application.coordination import CoordinatorSynthesizer
from behaviorgraph.application.partitioning import CodePartitioner, PartitionResult
from behaviorgraph.application.reporters import (
    BaseReporter,
    ConsoleReporter,
    DotExporter,
    JSONReporter,
    PlainTextReporter,
)
from behaviorgraph.application.services import DecompositionPipeline, PipelineResult
from behaviorgraph.application.validators import (
    BaseCodeRule,
    GeneratedCodeValidator,
    default_rules,
    rules_from_config,
)

__all__ = [
    # Partitioning
    "CodePartitioner",
    "PartitionResult",
    # Analysis
    "DependencyAnalyzer",
    # Coordination
    "CoordinatorSynthesizer",
    # Validators
    "BaseCodeRule",
    "GeneratedCodeValidator",
    "default_rules",
    "rules_from_config",
    # Aggregation
    "aggregate",
    # Reporters
    "BaseReporter",
    "ConsoleReporter",
    "DotExporter",
    "JSONReporter",
    "PlainTextReporter",
    # Services
    "DecompositionPipeline",
    "PipelineResult",
]
