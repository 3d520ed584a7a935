"""Shared constant values used across the enrichment pipeline."""

from __future__ import annotations

from typing import Final

IDENTITY_ATTRIBUTES: Final[tuple[str, ...]] = (
    "NOUN",
    "MODIFIER",
    "MODIFIER 1",
    "MODIFIER 2",
    "MODIFIER 3",
)

CATEGORY_LABELS: Final[tuple[str, ...]] = ("SPAREPART", "TOOLS", "INVENTORY", "ASSET")

CATEGORY_KEY: Final[str] = "X_CATEGORY"
TAXONOMY_KEY: Final[str] = "X_UNSPC"
RESERVED_KEYS: Final[frozenset[str]] = frozenset({CATEGORY_KEY, TAXONOMY_KEY})

TAXONOMY_VERSION: Final[str] = "v26.0801"
TAXONOMY_UNCERTAIN: Final[str] = "UNSPSC_UNCERTAIN"
COMMODITY_CODE_LENGTH: Final[int] = 8

TAXONOMY_FIELD_ORDER: Final[tuple[str, ...]] = (
    "SEGMENT",
    "SEGMENT_NAME",
    "FAMILY",
    "FAMILY_NAME",
    "CLASS",
    "CLASS_NAME",
    "COMMODITY",
    "COMMODITY_NAME",
    "EXPLANATION",
)
UNEXPANDED_FIELD_ORDER: Final[tuple[str, ...]] = ("COMMODITY", "EXPLANATION")

# Markers the model sometimes emits instead of JSON null.
NULL_MARKERS: Final[frozenset[str]] = frozenset({"", "NULL", "NONE", "N/A", "NA", "NOT_FOUND", "-"})
