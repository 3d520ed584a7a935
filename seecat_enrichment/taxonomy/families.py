"""Versioned domain family tables constraining commodity selection."""

from __future__ import annotations

import importlib.resources as resources
import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from seecat_enrichment.core.logging import get_logger
from seecat_enrichment.core.models import TaxonomyEntry

LOGGER = get_logger(__name__)

# Keep the Traversable path to the bundled tables (supports / and open()).
DATA_DIR = resources.files("seecat_enrichment.taxonomy") / "data"
DEFAULT_TABLES_FILENAME = "commodity_families.json"


@dataclass(slots=True, frozen=True)
class CommodityFamily:
    """Closed list of commodity codes for one material family (e.g. springs)."""

    name: str
    class_code: str
    class_name: str
    commodities: tuple[TaxonomyEntry, ...]
    fallback: str | None = None

    @property
    def codes(self) -> frozenset[str]:
        return frozenset(entry.code for entry in self.commodities)

    def covers(self, commodity_code: str | None) -> bool:
        """True when the code falls inside this family's class."""
        if not commodity_code:
            return False
        return commodity_code[:6] == self.class_code[:6]

    def fallback_entry(self) -> TaxonomyEntry | None:
        for entry in self.commodities:
            if entry.code == self.fallback:
                return entry
        return None


@dataclass(slots=True, frozen=True)
class FamilyTableSet:
    version: str
    families: tuple[CommodityFamily, ...]

    def family_for(self, commodity_code: str | None) -> CommodityFamily | None:
        for family in self.families:
            if family.covers(commodity_code):
                return family
        return None

    def missing_fallbacks(self) -> list[str]:
        return [family.name for family in self.families if family.fallback_entry() is None]


EMPTY_TABLES = FamilyTableSet(version="none", families=())


def _parse_family(raw: dict[str, Any]) -> CommodityFamily:
    name = str(raw.get("name") or "").strip()
    class_code = str(raw.get("class_code") or "").strip()
    if not name or not class_code:
        raise ValueError("Family tables require 'name' and 'class_code' for every family.")
    commodities = tuple(
        TaxonomyEntry(code=str(item["code"]).strip(), name=str(item["name"]).strip())
        for item in raw.get("commodities") or []
        if isinstance(item, dict) and item.get("code") and item.get("name")
    )
    if not commodities:
        raise ValueError(f"Family '{name}' lists no commodities.")
    fallback = raw.get("fallback")
    return CommodityFamily(
        name=name,
        class_code=class_code,
        class_name=str(raw.get("class_name") or "").strip(),
        commodities=commodities,
        fallback=str(fallback).strip() if fallback else None,
    )


def parse_family_tables(document: dict[str, Any]) -> FamilyTableSet:
    families = tuple(_parse_family(item) for item in document.get("families") or [])
    tables = FamilyTableSet(version=str(document.get("version") or "unversioned"), families=families)
    for family in tables.families:
        if family.fallback and family.fallback_entry() is None:
            raise ValueError(f"Family '{family.name}' fallback {family.fallback} is not one of its commodities.")
    missing = tables.missing_fallbacks()
    if missing:
        LOGGER.warning(
            "taxonomy.family_table_without_fallback",
            version=tables.version,
            families=missing,
        )
    return tables


def load_family_tables(path: Path | None = None) -> FamilyTableSet:
    """Load family tables from ``path`` or the bundled default."""
    if path is None:
        return _load_default_tables()
    with Path(path).open("r", encoding="utf-8") as handle:
        return parse_family_tables(json.load(handle))


@lru_cache(maxsize=1)
def _load_default_tables() -> FamilyTableSet:
    with (DATA_DIR / DEFAULT_TABLES_FILENAME).open("r", encoding="utf-8") as handle:
        return parse_family_tables(json.load(handle))


__all__ = [
    "CommodityFamily",
    "EMPTY_TABLES",
    "FamilyTableSet",
    "load_family_tables",
    "parse_family_tables",
]
