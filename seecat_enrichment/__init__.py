"""Material enrichment and classification pipeline.

Modules:

- ``catalog``: category schema fetching, response shape sniffing, identity (NOUN/MODIFIER) extraction.
- ``inference``: prompt construction and completion parsing on top of a text-completion capability.
- ``taxonomy``: UNSPSC family tables, name stores and commodity code expansion.
- ``assembly``: output record merge and contract validation.
- ``orchestrator``: the configurable pipeline and the calling-layer retry policy.
"""

from .core.config import Settings, get_settings
from .orchestrator import EnrichmentPipeline, PipelineOptions

__all__ = ["EnrichmentPipeline", "PipelineOptions", "Settings", "get_settings"]
