"""pytest plugin for behaviorgraph.

Provides fixtures for decomposition tests:
    behavior_config: Pipeline configuration (override in conftest.py)
    decomposition_pipeline: DecompositionPipeline built from behavior_config
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from behaviorgraph.presentation.pytest_plugin.fixtures import (
    behavior_config,
    decomposition_pipeline,
)

if TYPE_CHECKING:
    import pytest

__all__ = [
    "behavior_config",
    "decomposition_pipeline",
]


def pytest_configure(config: pytest.Config) -> None:
    """Register plugin markers."""
    config.addinivalue_line(
        "markers",
        "behaviors: mark test as behavior decomposition test",
    )
