"""behaviorgraph - behavior-graph resolution and code partitioning for UdonSharp."""

__version__ = "0.1.0"

from behaviorgraph.application.services import DecompositionPipeline, PipelineResult

__all__ = ["DecompositionPipeline", "PipelineResult", "__version__"]
