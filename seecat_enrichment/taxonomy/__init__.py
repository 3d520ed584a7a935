"""Taxonomy (UNSPSC) lookup, family tables and code expansion."""

from .expander import TaxonomyExpander, commodity_only, derive_hierarchy, is_commodity_code
from .families import CommodityFamily, FamilyTableSet, load_family_tables, parse_family_tables
from .store import (
    FileTaxonomyStore,
    HttpTaxonomyStore,
    InMemoryTaxonomyStore,
    TaxonomyStore,
    build_taxonomy_store,
)

__all__ = [
    "CommodityFamily",
    "FamilyTableSet",
    "FileTaxonomyStore",
    "HttpTaxonomyStore",
    "InMemoryTaxonomyStore",
    "TaxonomyExpander",
    "TaxonomyStore",
    "build_taxonomy_store",
    "commodity_only",
    "derive_hierarchy",
    "is_commodity_code",
    "load_family_tables",
    "parse_family_tables",
]
