"""HTTP client for the material category catalog."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Any

import httpx

from seecat_enrichment.core.config import Settings, get_settings
from seecat_enrichment.core.exceptions import UpstreamFetchError, UpstreamTimeoutError
from seecat_enrichment.core.logging import get_logger

LOGGER = get_logger(__name__)

CATEGORY_ENDPOINT = "material_categories/get"


class CategoryCatalogClient(AbstractContextManager["CategoryCatalogClient"]):
    """Fetches raw category payloads; shape handling lives in the loader."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=str(self._settings.catalog_base_url).rstrip("/") + "/",
            timeout=self._settings.catalog_timeout,
            headers=self._settings.catalog_headers(),
        )

    def __enter__(self) -> "CategoryCatalogClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:  # type: ignore[override]
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def fetch_category(self, category_code: str | None = None) -> Any:
        """Return the decoded catalog payload for one category (or all when no id is given)."""
        params = {"id": category_code} if category_code else None
        LOGGER.info("catalog.request", category_code=category_code)
        try:
            response = self._client.get(CATEGORY_ENDPOINT, params=params)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            LOGGER.error("catalog.timeout", category_code=category_code, timeout=self._settings.catalog_timeout)
            raise UpstreamTimeoutError(f"Category catalog timed out (timeout={self._settings.catalog_timeout:.0f}s)") from exc
        except httpx.HTTPStatusError as exc:
            LOGGER.error("catalog.http_error", category_code=category_code, status=exc.response.status_code)
            raise UpstreamFetchError(f"Failed to fetch material categories: HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            LOGGER.error("catalog.transport_error", category_code=category_code, error=str(exc))
            raise UpstreamFetchError("Failed to fetch material categories") from exc
        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamFetchError("Category catalog returned a non-JSON body") from exc
        LOGGER.debug("catalog.response", category_code=category_code, payload_type=type(payload).__name__)
        return payload


__all__ = ["CategoryCatalogClient", "CATEGORY_ENDPOINT"]
