"""Deterministic expansion of a commodity code into its parent levels."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from seecat_enrichment.core.constants import COMMODITY_CODE_LENGTH
from seecat_enrichment.core.logging import get_logger
from seecat_enrichment.core.models import TaxonomyBlock, TaxonomySeed

from .store import TaxonomyStore

LOGGER = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class CodeHierarchy:
    segment: str
    family: str
    class_code: str
    commodity: str


def is_commodity_code(code: str | None) -> bool:
    return bool(code) and len(code) == COMMODITY_CODE_LENGTH and code.isascii() and code.isdigit()


def derive_hierarchy(commodity_code: str) -> CodeHierarchy:
    """Derive parent codes by prefix truncation and zero fill."""
    if not is_commodity_code(commodity_code):
        raise ValueError(f"Expected an {COMMODITY_CODE_LENGTH}-digit commodity code, got {commodity_code!r}")
    return CodeHierarchy(
        segment=commodity_code[:2] + "000000",
        family=commodity_code[:4] + "0000",
        class_code=commodity_code[:6] + "00",
        commodity=commodity_code,
    )


class TaxonomyExpander:
    """Fills segment/family/class codes and resolves display names from a store."""

    def __init__(self, store: TaxonomyStore, *, max_parallel: int = 1) -> None:
        self._store = store
        self._max_parallel = max(1, max_parallel)

    def expand(self, seed: TaxonomySeed | None) -> TaxonomyBlock:
        commodity = (seed.commodity_code or "").strip() if seed else ""
        explanation = seed.explanation if seed else None
        if not commodity:
            LOGGER.warning("taxonomy.commodity_missing")
            return TaxonomyBlock(commodity=None, explanation=explanation)

        if not is_commodity_code(commodity):
            LOGGER.info("taxonomy.expansion_skipped", commodity=commodity)
            names = self._resolve_names([commodity])
            return TaxonomyBlock(
                commodity=commodity,
                commodity_name=names[commodity],
                explanation=explanation,
            )

        hierarchy = derive_hierarchy(commodity)
        names = self._resolve_names(
            [hierarchy.segment, hierarchy.family, hierarchy.class_code, hierarchy.commodity],
        )
        LOGGER.info(
            "taxonomy.expanded",
            commodity=commodity,
            resolved=sum(1 for name in names.values() if name),
        )
        return TaxonomyBlock(
            segment=hierarchy.segment,
            segment_name=names[hierarchy.segment],
            family=hierarchy.family,
            family_name=names[hierarchy.family],
            class_code=hierarchy.class_code,
            class_name=names[hierarchy.class_code],
            commodity=hierarchy.commodity,
            commodity_name=names[hierarchy.commodity],
            explanation=explanation,
        )

    def _resolve_names(self, codes: list[str]) -> dict[str, str | None]:
        unique = list(dict.fromkeys(codes))
        if self._max_parallel == 1 or len(unique) == 1:
            return {code: self._store.lookup(code) for code in unique}
        workers = min(self._max_parallel, len(unique))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {code: executor.submit(self._store.lookup, code) for code in unique}
            return {code: future.result() for code, future in futures.items()}


def commodity_only(seed: TaxonomySeed | None) -> TaxonomyBlock:
    """Return the unexpanded block used when taxonomy expansion is disabled."""
    return TaxonomyBlock(
        commodity=seed.commodity_code if seed else None,
        explanation=seed.explanation if seed else None,
        expanded=False,
    )


__all__ = [
    "CodeHierarchy",
    "TaxonomyExpander",
    "commodity_only",
    "derive_hierarchy",
    "is_commodity_code",
]
