"""Partitioning of function metadata into behavior units."""

from behaviorgraph.application.partitioning.partitioner import CodePartitioner, PartitionResult
from behaviorgraph.application.partitioning.sharing import (
    classify_function,
    estimate_size_reduction,
    plan_sharing,
    sharing_benefit,
    sharing_strategy,
)

__all__ = [
    "CodePartitioner",
    "PartitionResult",
    "classify_function",
    "estimate_size_reduction",
    "plan_sharing",
    "sharing_benefit",
    "sharing_strategy",
]
