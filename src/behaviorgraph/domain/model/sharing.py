"""Shared-runtime function analysis results."""

from __future__ import annotations

from dataclasses import dataclass

from behaviorgraph.domain.model.enums import FunctionType, SharingStrategy


@dataclass(frozen=True, slots=True)
class SharedFunctionPlan:
    """Sharing analysis for one shared-runtime function.

    Attributes:
        name: Function name
        used_by: Units reaching the function, declaration order
        call_count: Number of call sites from unit functions
        function_type: Name-based classification
        sharing_benefit: Deduplication benefit score
        strategy: Advisory sharing strategy
        estimated_size_reduction: Estimated bytes saved by emitting once
    """

    name: str
    used_by: tuple[str, ...]
    call_count: int
    function_type: FunctionType
    sharing_benefit: float
    strategy: SharingStrategy
    estimated_size_reduction: int

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("name must not be empty")
        if len(self.used_by) < 2:
            raise ValueError(f"shared function '{self.name}' must be used by >= 2 units")
        if self.call_count < 0:
            raise ValueError("call_count must be >= 0")
        if self.estimated_size_reduction < 0:
            raise ValueError("estimated_size_reduction must be >= 0")
