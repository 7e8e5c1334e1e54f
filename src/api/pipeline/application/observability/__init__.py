"""Domain probes for pipeline application services."""

from pipeline.application.observability.pipeline_probe import (
    DefaultPipelineProbe,
    PipelineProbe,
)

__all__ = [
    "DefaultPipelineProbe",
    "PipelineProbe",
]
