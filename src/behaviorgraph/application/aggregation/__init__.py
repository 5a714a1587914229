"""Verdict aggregation."""

from behaviorgraph.application.aggregation.aggregator import aggregate

__all__ = ["aggregate"]
