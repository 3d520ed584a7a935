"""Shared core utilities for the material enrichment pipeline."""

from .config import Settings, get_settings
from .constants import (
    CATEGORY_KEY,
    CATEGORY_LABELS,
    IDENTITY_ATTRIBUTES,
    TAXONOMY_FIELD_ORDER,
    TAXONOMY_KEY,
    TAXONOMY_UNCERTAIN,
)
from .exceptions import (
    ConfigurationError,
    ContractViolationError,
    EnrichmentError,
    InferenceParseError,
    MissingParameterError,
    NoInferenceResultError,
    SchemaFormatError,
    UpstreamFetchError,
    UpstreamTimeoutError,
)
from .logging import configure_logging, request_context, use_stderr_defaults
from .models import (
    AttributeDefinition,
    AttributeSchema,
    CategoryClassification,
    EnrichedRecord,
    EnrichmentRequest,
    InferenceResult,
    TaxonomyBlock,
    TaxonomyEntry,
    TaxonomySeed,
)

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "request_context",
    "use_stderr_defaults",
    "CATEGORY_KEY",
    "CATEGORY_LABELS",
    "IDENTITY_ATTRIBUTES",
    "TAXONOMY_FIELD_ORDER",
    "TAXONOMY_KEY",
    "TAXONOMY_UNCERTAIN",
    "EnrichmentError",
    "ConfigurationError",
    "MissingParameterError",
    "UpstreamFetchError",
    "UpstreamTimeoutError",
    "SchemaFormatError",
    "NoInferenceResultError",
    "InferenceParseError",
    "ContractViolationError",
    "AttributeDefinition",
    "AttributeSchema",
    "CategoryClassification",
    "EnrichedRecord",
    "EnrichmentRequest",
    "InferenceResult",
    "TaxonomyBlock",
    "TaxonomyEntry",
    "TaxonomySeed",
]
