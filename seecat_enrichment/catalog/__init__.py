"""Category schema catalog access."""

from .client import CategoryCatalogClient
from .identity import extract_identity
from .loader import AttributeSchemaLoader, CatalogSourceProtocol
from .shapes import SHAPE_PARSERS, match_shape, parse_schema_payload

__all__ = [
    "AttributeSchemaLoader",
    "CatalogSourceProtocol",
    "CategoryCatalogClient",
    "SHAPE_PARSERS",
    "extract_identity",
    "match_shape",
    "parse_schema_payload",
]
