"""Shared data models."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from .constants import (
    CATEGORY_KEY,
    IDENTITY_ATTRIBUTES,
    TAXONOMY_FIELD_ORDER,
    TAXONOMY_KEY,
    UNEXPANDED_FIELD_ORDER,
)


@dataclass(slots=True, frozen=True)
class EnrichmentRequest:
    material_name: str | None
    category_code: str | None


@dataclass(slots=True, frozen=True)
class AttributeDefinition:
    name: str
    raw_value: Any = None


@dataclass(slots=True, frozen=True)
class AttributeSchema:
    """Attribute definitions of one category, in catalog order."""

    category_code: str
    attributes: tuple[AttributeDefinition, ...]
    shape: str
    raw_attributes: list[Any] | None = None

    @property
    def names(self) -> list[str]:
        return [attribute.name for attribute in self.attributes]

    def inference_targets(self, excluded: tuple[str, ...] = IDENTITY_ATTRIBUTES) -> list[str]:
        """Return attribute names that inference should fill, skipping identity names."""
        blocked = set(excluded)
        targets: list[str] = []
        for name in self.names:
            if name in blocked or name in targets:
                continue
            targets.append(name)
        return targets


@dataclass(slots=True, frozen=True)
class CategoryClassification:
    category: str
    explanation: str

    def as_dict(self) -> dict[str, str]:
        return {"CATEGORY": self.category, "EXPLANATION": self.explanation}


@dataclass(slots=True, frozen=True)
class TaxonomySeed:
    commodity_code: str | None
    explanation: str | None = None


@dataclass(slots=True)
class TaxonomyBlock:
    commodity: str | None
    explanation: str | None = None
    commodity_name: str | None = None
    segment: str | None = None
    segment_name: str | None = None
    family: str | None = None
    family_name: str | None = None
    class_code: str | None = None
    class_name: str | None = None
    expanded: bool = True

    def as_dict(self) -> dict[str, str | None]:
        values = {
            "SEGMENT": self.segment,
            "SEGMENT_NAME": self.segment_name,
            "FAMILY": self.family,
            "FAMILY_NAME": self.family_name,
            "CLASS": self.class_code,
            "CLASS_NAME": self.class_name,
            "COMMODITY": self.commodity,
            "COMMODITY_NAME": self.commodity_name,
            "EXPLANATION": self.explanation,
        }
        order = TAXONOMY_FIELD_ORDER if self.expanded else UNEXPANDED_FIELD_ORDER
        return {key: values[key] for key in order}


@dataclass(slots=True, frozen=True)
class TaxonomyEntry:
    code: str
    name: str

    def as_dict(self) -> dict[str, str]:
        return {"code": self.code, "name": self.name}


@dataclass(slots=True)
class InferenceResult:
    attributes: dict[str, str | None]
    category: CategoryClassification | None
    taxonomy_seed: TaxonomySeed | None
    duplicate_keys: list[str] = field(default_factory=list)
    echoed_identity: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class EnrichedRecord:
    fields: dict[str, Any]

    @property
    def category(self) -> Mapping[str, Any] | None:
        return self.fields.get(CATEGORY_KEY)

    @property
    def taxonomy(self) -> Mapping[str, Any] | None:
        return self.fields.get(TAXONOMY_KEY)

    def as_dict(self) -> dict[str, Any]:
        return dict(self.fields)

    def to_json(self, *, indent: int | None = None) -> str:
        return json.dumps(self.fields, ensure_ascii=False, indent=indent)
