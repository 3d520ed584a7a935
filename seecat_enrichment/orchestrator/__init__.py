"""Pipeline composition and the calling-layer retry policy."""

from .pipeline import EnrichmentPipeline, PipelineOptions
from .retry import is_retryable, run_with_retry

__all__ = ["EnrichmentPipeline", "PipelineOptions", "is_retryable", "run_with_retry"]
