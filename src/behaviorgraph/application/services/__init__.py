"""Application services."""

from behaviorgraph.application.services.pipeline import DecompositionPipeline, PipelineResult

__all__ = [
    "DecompositionPipeline",
    "PipelineResult",
]
