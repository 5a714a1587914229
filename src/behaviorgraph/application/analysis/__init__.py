"""Dependency graph analysis."""

from behaviorgraph.application.analysis.analyzer import DependencyAnalyzer

__all__ = ["DependencyAnalyzer"]
