"""Shared-runtime sharing analysis.

Scores each shared function by how much emitting it once saves. The
strategy is advisory: a shared function is emitted exactly once no
matter which strategy it gets.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from behaviorgraph.domain.model.enums import FunctionType, SharingStrategy
from behaviorgraph.domain.model.sharing import SharedFunctionPlan

if TYPE_CHECKING:
    from collections.abc import Mapping

    from behaviorgraph.domain.model.function import FunctionMeta

# Checked in order, first match wins
_TYPE_MARKERS: tuple[tuple[FunctionType, tuple[str, ...]], ...] = (
    (
        FunctionType.UNITY_EVENT,
        ("start", "awake", "update", "fixed_update", "on_enable", "on_disable"),
    ),
    (
        FunctionType.UTILITY,
        ("calculate", "compute", "convert", "format", "parse", "validate", "helper", "util"),
    ),
    (FunctionType.DATA_ACCESS, ("get", "set", "load", "save", "read", "write")),
    (FunctionType.EVENT_HANDLER, ("handle", "event", "trigger")),
)

_TYPE_MULTIPLIER: dict[FunctionType, float] = {
    FunctionType.UTILITY: 2.0,
    FunctionType.DATA_ACCESS: 1.5,
    FunctionType.BUSINESS_LOGIC: 1.0,
    FunctionType.EVENT_HANDLER: 0.8,
    FunctionType.UNITY_EVENT: 0.3,
}

# Estimated emitted size of one copy, in bytes
_BASE_SIZE: dict[FunctionType, int] = {
    FunctionType.UTILITY: 50,
    FunctionType.DATA_ACCESS: 100,
    FunctionType.BUSINESS_LOGIC: 200,
    FunctionType.EVENT_HANDLER: 75,
    FunctionType.UNITY_EVENT: 150,
}

# Cost of routing calls through the shared runtime
_SHARED_ACCESS_OVERHEAD = 20


def classify_function(name: str) -> FunctionType:
    """Classify a function by name substrings.

    Args:
        name: Function name

    Returns:
        First matching type, BUSINESS_LOGIC if none matches
    """
    lowered = name.lower()
    for function_type, markers in _TYPE_MARKERS:
        if any(marker in lowered for marker in markers):
            return function_type
    if lowered.startswith("on_"):
        return FunctionType.EVENT_HANDLER
    return FunctionType.BUSINESS_LOGIC


def sharing_benefit(unit_count: int, call_count: int, function_type: FunctionType) -> float:
    """Deduplication benefit: ((units - 1) * 10 + calls * 2) * type multiplier."""
    base = (unit_count - 1) * 10.0 + call_count * 2.0
    return base * _TYPE_MULTIPLIER[function_type]


def sharing_strategy(
    benefit: float,
    unit_count: int,
    function_type: FunctionType,
) -> SharingStrategy:
    """Pick an advisory strategy from the benefit score."""
    if function_type == FunctionType.UNITY_EVENT:
        return SharingStrategy.KEEP_LOCAL
    if benefit > 20.0:
        return SharingStrategy.MOVE_TO_SHARED_RUNTIME
    if benefit > 10.0:
        return SharingStrategy.STATIC_METHOD
    if benefit > 5.0 and unit_count > 2:
        return SharingStrategy.INTERFACE_METHOD
    return SharingStrategy.KEEP_LOCAL


def estimate_size_reduction(unit_count: int, function_type: FunctionType) -> int:
    """Bytes saved by emitting one copy instead of unit_count copies."""
    if unit_count < 2:
        return 0
    return _BASE_SIZE[function_type] * (unit_count - 1) - _SHARED_ACCESS_OVERHEAD


def plan_sharing(
    shared: tuple[FunctionMeta, ...],
    used_by: Mapping[str, tuple[str, ...]],
    call_counts: Mapping[str, int],
) -> tuple[SharedFunctionPlan, ...]:
    """Build one plan per shared function, highest benefit first.

    Args:
        shared: Shared functions in declaration order
        used_by: Function name → units reaching it
        call_counts: Function name → number of distinct call sites

    Returns:
        Plans sorted by benefit descending, ties keep declaration order
    """
    plans: list[SharedFunctionPlan] = []
    for meta in shared:
        units = used_by[meta.name]
        calls = call_counts.get(meta.name, 0)
        function_type = classify_function(meta.name)
        benefit = sharing_benefit(len(units), calls, function_type)
        plans.append(
            SharedFunctionPlan(
                name=meta.name,
                used_by=units,
                call_count=calls,
                function_type=function_type,
                sharing_benefit=benefit,
                strategy=sharing_strategy(benefit, len(units), function_type),
                estimated_size_reduction=estimate_size_reduction(len(units), function_type),
            )
        )

    plans.sort(key=lambda plan: plan.sharing_benefit, reverse=True)
    return tuple(plans)
