"""Read-only taxonomy lookup stores (code -> display name)."""

from __future__ import annotations

import csv
import json
from contextlib import AbstractContextManager
from pathlib import Path
from typing import Any, Iterable, Mapping, Protocol

import httpx

from seecat_enrichment.core.config import Settings, get_settings
from seecat_enrichment.core.exceptions import ConfigurationError, UpstreamFetchError, UpstreamTimeoutError
from seecat_enrichment.core.logging import get_logger
from seecat_enrichment.core.models import TaxonomyEntry

LOGGER = get_logger(__name__)


class TaxonomyStore(Protocol):
    """Exact-match name lookup plus prefix search over taxonomy codes."""

    def lookup(self, code: str) -> str | None: ...

    def search(self, prefix: str) -> list[TaxonomyEntry]: ...


class InMemoryTaxonomyStore:
    """Dictionary-backed store; also the base for file-loaded stores."""

    def __init__(self, entries: Mapping[str, str] | Iterable[TaxonomyEntry]) -> None:
        if isinstance(entries, Mapping):
            self._names = {str(code): str(name) for code, name in entries.items()}
        else:
            self._names = {entry.code: entry.name for entry in entries}

    def __len__(self) -> int:
        return len(self._names)

    def lookup(self, code: str) -> str | None:
        return self._names.get(code)

    def search(self, prefix: str) -> list[TaxonomyEntry]:
        return [TaxonomyEntry(code=code, name=name) for code, name in sorted(self._names.items()) if code.startswith(prefix)]


class FileTaxonomyStore(InMemoryTaxonomyStore):
    """Loads ``code,name`` rows from a CSV file or a JSON mapping/list."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        if not self._path.exists():
            raise ConfigurationError(f"Taxonomy store not found: {self._path}")
        try:
            entries = dict(self._read_entries())
        except (OSError, ValueError) as exc:
            raise ConfigurationError(f"Taxonomy store {self._path} is unreadable: {exc}") from exc
        super().__init__(entries)
        LOGGER.debug("taxonomy_store.loaded", path=str(self._path), entries=len(self))

    def _read_entries(self) -> Iterable[tuple[str, str]]:
        if self._path.suffix.lower() == ".csv":
            with self._path.open("r", encoding="utf-8", newline="") as handle:
                for row in csv.DictReader(handle):
                    code = (row.get("code") or "").strip()
                    name = (row.get("name") or "").strip()
                    if code and name:
                        yield code, name
            return
        document = json.loads(self._path.read_text(encoding="utf-8"))
        yield from _json_entries(document)


def _json_entries(document: Any) -> Iterable[tuple[str, str]]:
    if isinstance(document, dict):
        for code, name in document.items():
            if code and isinstance(name, str):
                yield str(code).strip(), name.strip()
        return
    if isinstance(document, list):
        for item in document:
            if not isinstance(item, dict):
                continue
            code = item.get("code")
            name = item.get("name")
            if code and isinstance(name, str):
                yield str(code).strip(), name.strip()


class HttpTaxonomyStore(AbstractContextManager["HttpTaxonomyStore"]):
    """Remote taxonomy service exposing ``/unspsc/<code>`` and ``/unspsc-search``."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        client: httpx.Client | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        if client is None and not self._settings.taxonomy_base_url:
            raise ConfigurationError("taxonomy_base_url must be configured for the HTTP taxonomy store.")
        self._owns_client = client is None
        self._client = client or httpx.Client(
            base_url=str(self._settings.taxonomy_base_url).rstrip("/") + "/",
            timeout=self._settings.taxonomy_timeout,
            headers=self._settings.taxonomy_headers(),
        )

    def __exit__(self, exc_type, exc_value, traceback) -> None:  # type: ignore[override]
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def lookup(self, code: str) -> str | None:
        payload = self._get_json(f"unspsc/{code}", code=code)
        if isinstance(payload, dict):
            name = payload.get("name")
            return str(name) if name else None
        return None

    def search(self, prefix: str) -> list[TaxonomyEntry]:
        payload = self._get_json("unspsc-search", code=prefix, params={"code": prefix})
        return [TaxonomyEntry(code=code, name=name) for code, name in _json_entries(payload)]

    def _get_json(self, path: str, *, code: str, params: dict[str, str] | None = None) -> Any:
        try:
            response = self._client.get(path, params=params)
            if response.status_code == 404:
                return None
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as exc:
            LOGGER.error("taxonomy_store.timeout", code=code, timeout=self._settings.taxonomy_timeout)
            raise UpstreamTimeoutError(f"Taxonomy lookup for {code} timed out") from exc
        except httpx.HTTPStatusError as exc:
            raise UpstreamFetchError(f"Taxonomy lookup for {code} failed: HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise UpstreamFetchError(f"Taxonomy lookup for {code} failed") from exc
        except ValueError as exc:
            raise UpstreamFetchError(f"Taxonomy lookup for {code} returned a non-JSON body") from exc


def build_taxonomy_store(settings: Settings | None = None) -> TaxonomyStore:
    """Pick the configured store: a local file wins over the remote service."""
    resolved = settings or get_settings()
    if resolved.taxonomy_store_path:
        return FileTaxonomyStore(resolved.taxonomy_store_path)
    if resolved.taxonomy_base_url:
        return HttpTaxonomyStore(resolved)
    LOGGER.warning("taxonomy_store.unconfigured")
    return InMemoryTaxonomyStore({})


__all__ = [
    "FileTaxonomyStore",
    "HttpTaxonomyStore",
    "InMemoryTaxonomyStore",
    "TaxonomyStore",
    "build_taxonomy_store",
]
