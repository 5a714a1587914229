"""Domain exceptions."""

from behaviorgraph.domain.exceptions.base import BehaviorGraphError
from behaviorgraph.domain.exceptions.ordering import (
    CircularDependencyError,
    OrderingViolationError,
)
from behaviorgraph.domain.exceptions.pipeline import BlockedPipelineError

__all__ = [
    "BehaviorGraphError",
    "CircularDependencyError",
    "OrderingViolationError",
    "BlockedPipelineError",
]
