"""Attribute schema loading on top of the catalog client."""

from __future__ import annotations

from typing import Any, Protocol

from seecat_enrichment.core.exceptions import MissingParameterError
from seecat_enrichment.core.logging import get_logger
from seecat_enrichment.core.models import AttributeSchema

from .shapes import parse_schema_payload

LOGGER = get_logger(__name__)


class CatalogSourceProtocol(Protocol):
    """Minimal contract for anything that can return a raw category payload."""

    def fetch_category(self, category_code: str | None = None) -> Any: ...


class AttributeSchemaLoader:
    """Fetches a category schema and normalises its response shape."""

    def __init__(self, source: CatalogSourceProtocol) -> None:
        self._source = source

    def load(self, category_code: str | None) -> AttributeSchema:
        code = (category_code or "").strip()
        if not code:
            raise MissingParameterError(["category_code"])
        payload = self._source.fetch_category(code)
        schema = parse_schema_payload(code, payload)
        LOGGER.info(
            "schema_loader.loaded",
            category_code=code,
            shape=schema.shape,
            attribute_count=len(schema.attributes),
        )
        return schema


__all__ = ["AttributeSchemaLoader", "CatalogSourceProtocol"]
