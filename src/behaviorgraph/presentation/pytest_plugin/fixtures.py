"""pytest fixtures for behavior decomposition.

User overrides behavior_config in their conftest.py.
"""

from __future__ import annotations

import pytest

from behaviorgraph.application.services import DecompositionPipeline
from behaviorgraph.domain.model.configuration import PipelineConfig


@pytest.fixture
def behavior_config() -> PipelineConfig:
    """Default pipeline configuration.

    Override in conftest.py to customize thresholds, ordering or
    disabled rules.

    Returns:
        PipelineConfig with defaults
    """
    return PipelineConfig()


@pytest.fixture
def decomposition_pipeline(behavior_config: PipelineConfig) -> DecompositionPipeline:
    """Pipeline with rules enabled by behavior_config.

    Returns:
        DecompositionPipeline without reporter
    """
    return DecompositionPipeline.from_config(behavior_config)
