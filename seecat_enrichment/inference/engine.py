"""LLM-backed attribute inference, category classification and commodity seeding."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from seecat_enrichment.core.constants import (
    CATEGORY_KEY,
    IDENTITY_ATTRIBUTES,
    NULL_MARKERS,
    TAXONOMY_KEY,
)
from seecat_enrichment.core.exceptions import InferenceParseError, NoInferenceResultError
from seecat_enrichment.core.json_utils import DuplicateKeyCollector, parse_json_response
from seecat_enrichment.core.logging import get_logger
from seecat_enrichment.core.models import CategoryClassification, InferenceResult, TaxonomySeed
from seecat_enrichment.taxonomy.families import EMPTY_TABLES, FamilyTableSet

from .llm import LanguageModelProtocol
from .prompts import build_inference_prompt

LOGGER = get_logger(__name__)

# Unit symbols only; words like IN, A, M, L, G or HP are ordinary terms too.
_UNITS = (
    "MM", "CM", "KM", "FT", "KG", "LB", "V", "KV", "MA", "W", "KW", "HZ", "KHZ", "MHZ",
    "GHZ", "RPM", "BAR", "PSI", "MPA", "KPA", "NM", "GB", "MB", "TB", "ML", "VA", "KVA",
    "AH", "MAH",
)  # fmt: skip
UNIT_SPACING_PATTERN = re.compile(
    r"(\d)\s+(" + "|".join(sorted(_UNITS, key=len, reverse=True)) + r")(?![A-Z0-9])(?!\s*\d)"
)


def normalize_attribute_value(value: Any) -> str | None:
    """Uppercase, collapse whitespace and glue unit suffixes onto their numbers."""
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        raise InferenceParseError(f"Attribute values must be strings or null, got {type(value).__name__}")
    text = " ".join(str(value).split()).upper()
    if text in NULL_MARKERS:
        return None
    return UNIT_SPACING_PATTERN.sub(r"\1\2", text)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return " ".join(str(value).split())


def _parse_category(block: Any) -> CategoryClassification | None:
    if block is None:
        return None
    if not isinstance(block, dict):
        raise InferenceParseError(f"{CATEGORY_KEY} must be an object")
    return CategoryClassification(
        category=_text(block.get("CATEGORY")).upper(),
        explanation=_text(block.get("EXPLANATION")),
    )


def _parse_taxonomy_seed(block: Any) -> TaxonomySeed | None:
    if block is None:
        return None
    if not isinstance(block, dict):
        raise InferenceParseError(f"{TAXONOMY_KEY} must be an object")
    commodity = _text(block.get("COMMODITY")) or None
    explanation = _text(block.get("EXPLANATION")) or None
    return TaxonomySeed(commodity_code=commodity, explanation=explanation)


@dataclass
class AttributeInferenceEngine:
    llm: LanguageModelProtocol
    families: FamilyTableSet = EMPTY_TABLES
    identity_names: tuple[str, ...] = field(default=IDENTITY_ATTRIBUTES)
    temperature: float = 0.0

    def infer(
        self,
        material_name: str,
        attribute_names: Sequence[str],
        identity: Mapping[str, Any],
    ) -> InferenceResult:
        LOGGER.info(
            "inference.request",
            material_name=material_name,
            attribute_count=len(attribute_names),
            identity=list(identity),
        )
        blocked = set(self.identity_names)
        targets = [name for name in attribute_names if name not in blocked]
        prompt = build_inference_prompt(
            material_name,
            targets,
            identity,
            families=self.families,
            identity_names=self.identity_names,
        )
        payload = {
            "prompt": prompt,
            "context": json.dumps(material_name, ensure_ascii=False),
            "temperature": self.temperature,
        }
        response = self.llm.invoke(payload)
        result = self.parse_completion(response)
        LOGGER.info(
            "inference.response",
            attribute_count=len(result.attributes),
            category=result.category.category if result.category else None,
            commodity=result.taxonomy_seed.commodity_code if result.taxonomy_seed else None,
        )
        return result

    def parse_completion(self, response: Any) -> InferenceResult:
        """Split a completion into attributes, category and commodity seed."""
        if hasattr(response, "content"):
            response = getattr(response, "content")
        if response is None or (isinstance(response, str) and not response.strip()):
            raise NoInferenceResultError("No response from Enrichment AI")
        if not isinstance(response, str):
            raise InferenceParseError(f"Completion must be text, got {type(response).__name__}")

        collector = DuplicateKeyCollector()
        data = parse_json_response(response, collector=collector)
        if not isinstance(data, dict):
            raise InferenceParseError("Completion must be a single JSON object")

        attributes: dict[str, str | None] = {}
        echoed_identity: dict[str, Any] = {}
        category: CategoryClassification | None = None
        seed: TaxonomySeed | None = None
        for key, value in data.items():
            if key == CATEGORY_KEY:
                category = _parse_category(value)
            elif key == TAXONOMY_KEY:
                seed = _parse_taxonomy_seed(value)
            elif key in self.identity_names:
                echoed_identity[key] = value
            else:
                attributes[key] = normalize_attribute_value(value)

        if collector.duplicates:
            LOGGER.warning("inference.duplicate_keys", keys=collector.duplicates)
        self._check_family_selection(seed)
        return InferenceResult(
            attributes=attributes,
            category=category,
            taxonomy_seed=seed,
            duplicate_keys=list(collector.duplicates),
            echoed_identity=echoed_identity,
        )

    def _check_family_selection(self, seed: TaxonomySeed | None) -> None:
        code = seed.commodity_code if seed else None
        family = self.families.family_for(code)
        if family is not None and code not in family.codes:
            LOGGER.warning(
                "inference.commodity_outside_family_table",
                commodity=code,
                family=family.name,
                tables_version=self.families.version,
            )


__all__ = ["AttributeInferenceEngine", "normalize_attribute_value"]
