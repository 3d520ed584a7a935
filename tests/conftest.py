from __future__ import annotations

import json
from typing import Any

import pytest
import structlog

from seecat_enrichment.core.config import Settings
from seecat_enrichment.core.logging import use_stderr_defaults
from seecat_enrichment.taxonomy import InMemoryTaxonomyStore

SPRING_SCHEMA: dict[str, Any] = {
    "data": {
        "id": "MC-0107",
        "name": "SPRING",
        "attributes": [
            {"attribute_name": "NOUN", "attribute_value": {"value": "SPRING"}},
            {"attribute_name": "MODIFIER", "attribute_value": {"value": "COMPRESSION"}},
            {"attribute_name": "MODIFIER 1", "attribute_value": {"value": ""}},
            {"attribute_name": "MATERIAL", "attribute_value": None},
            {"attribute_name": "WIRE DIAMETER", "attribute_value": None},
            {"attribute_name": "FREE LENGTH", "attribute_value": None},
        ],
    }
}

SPRING_COMPLETION: dict[str, Any] = {
    "NOUN": "SPRINGS",
    "MATERIAL": "stainless  steel",
    "WIRE DIAMETER": "2 mm",
    "FREE LENGTH": None,
    "X_CATEGORY": {"CATEGORY": "SPAREPART", "EXPLANATION": "Replaceable bogie suspension component."},
    "X_UNSPC": {"COMMODITY": "31161904", "EXPLANATION": "Helical compression spring."},
}

TAXONOMY_NAMES = {
    "31000000": "Manufacturing Components and Supplies",
    "31160000": "Hardware",
    "31161900": "Springs",
    "31161901": "Helical springs",
    "31161904": "Compression springs",
    "31161600": "Bolts",
    "31161610": "Hex bolts",
}


class FakeLLM:
    """Returns canned completions and records every payload it receives."""

    def __init__(self, response: Any) -> None:
        self.response = response
        self.calls: list[dict[str, Any]] = []

    def invoke(self, input_data: dict[str, Any]) -> Any:
        self.calls.append(input_data)
        if isinstance(self.response, (dict, list)):
            return json.dumps(self.response)
        return self.response


class FakeCatalog:
    def __init__(self, payload: Any) -> None:
        self.payload = payload
        self.requested: list[str | None] = []
        self.closed = False

    def fetch_category(self, category_code: str | None = None) -> Any:
        self.requested.append(category_code)
        return self.payload

    def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def _stderr_logging():
    use_stderr_defaults()
    yield
    structlog.reset_defaults()
    use_stderr_defaults()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        catalog_base_url="https://catalog.test/api",
        taxonomy_lookup_parallel=1,
        retry_attempts=3,
        retry_backoff=0.1,
    )


@pytest.fixture
def taxonomy_store() -> InMemoryTaxonomyStore:
    return InMemoryTaxonomyStore(TAXONOMY_NAMES)


@pytest.fixture
def spring_schema() -> dict[str, Any]:
    return json.loads(json.dumps(SPRING_SCHEMA))


@pytest.fixture
def spring_completion() -> dict[str, Any]:
    return json.loads(json.dumps(SPRING_COMPLETION))
