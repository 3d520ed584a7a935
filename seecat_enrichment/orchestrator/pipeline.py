"""Sequential orchestration of the enrichment and classification pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from seecat_enrichment.assembly import ResultAssembler
from seecat_enrichment.catalog import AttributeSchemaLoader, CatalogSourceProtocol, CategoryCatalogClient, extract_identity
from seecat_enrichment.core.config import Settings, get_settings
from seecat_enrichment.core.constants import IDENTITY_ATTRIBUTES
from seecat_enrichment.core.exceptions import ConfigurationError, MissingParameterError
from seecat_enrichment.core.logging import get_logger, request_context
from seecat_enrichment.core.models import AttributeSchema, EnrichedRecord, EnrichmentRequest
from seecat_enrichment.inference import AttributeInferenceEngine, LanguageModelProtocol, OpenAIChatLLM
from seecat_enrichment.taxonomy import TaxonomyExpander, TaxonomyStore, build_taxonomy_store, commodity_only, load_family_tables
from seecat_enrichment.taxonomy.families import EMPTY_TABLES, FamilyTableSet

LOGGER = get_logger(__name__)


@dataclass(slots=True, frozen=True)
class PipelineOptions:
    """Switches that select between the pipeline variants."""

    identity_whitelist: bool = True
    identity_attributes: tuple[str, ...] = IDENTITY_ATTRIBUTES
    families: FamilyTableSet = EMPTY_TABLES
    taxonomy_expansion: bool = True

    @classmethod
    def from_settings(cls, settings: Settings) -> "PipelineOptions":
        try:
            families = load_family_tables(settings.family_tables_path)
        except (OSError, ValueError) as exc:
            raise ConfigurationError(f"Family tables could not be loaded: {exc}") from exc
        return cls(
            identity_whitelist=settings.identity_whitelist_enabled,
            families=families,
            taxonomy_expansion=settings.taxonomy_expansion_enabled,
        )

    @property
    def excluded_attributes(self) -> tuple[str, ...]:
        return self.identity_attributes if self.identity_whitelist else ()


def _require(**values: str | None) -> dict[str, str]:
    missing = [name for name, value in values.items() if not (value or "").strip()]
    if missing:
        raise MissingParameterError(missing)
    return {name: value.strip() for name, value in values.items()}


class EnrichmentPipeline:
    """Compose schema loading, inference, taxonomy expansion and assembly."""

    def __init__(
        self,
        catalog: CatalogSourceProtocol,
        llm: LanguageModelProtocol,
        store: TaxonomyStore,
        options: PipelineOptions | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._options = options or PipelineOptions()
        self._catalog = catalog
        self._store = store
        self._loader = AttributeSchemaLoader(catalog)
        self._engine = AttributeInferenceEngine(
            llm,
            families=self._options.families,
            identity_names=self._options.excluded_attributes,
            temperature=self._settings.inference_temperature,
        )
        self._expander = TaxonomyExpander(store, max_parallel=self._settings.taxonomy_lookup_parallel)
        self._assembler = ResultAssembler()

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        *,
        llm: LanguageModelProtocol | None = None,
    ) -> "EnrichmentPipeline":
        resolved = settings or get_settings()
        options = PipelineOptions.from_settings(resolved)
        store = build_taxonomy_store(resolved)
        return cls(CategoryCatalogClient(resolved), llm or OpenAIChatLLM(resolved), store, options, resolved)

    @property
    def options(self) -> PipelineOptions:
        return self._options

    def run(self, request: EnrichmentRequest) -> EnrichedRecord:
        params = _require(material_name=request.material_name, category_code=request.category_code)
        material_name = params["material_name"]
        with request_context(material_name=material_name, category_code=params["category_code"]):
            LOGGER.info("pipeline.start")
            return self._run(material_name, params["category_code"])

    def _run(self, material_name: str, category_code: str) -> EnrichedRecord:
        schema = self._loader.load(category_code)
        identity = self._identity_for(schema)
        targets = schema.inference_targets(self._options.excluded_attributes)
        inference = self._engine.infer(material_name, targets, identity)
        if self._options.taxonomy_expansion:
            taxonomy = self._expander.expand(inference.taxonomy_seed)
        else:
            taxonomy = commodity_only(inference.taxonomy_seed)
        record = self._assembler.assemble(material_name, targets, identity, inference, taxonomy)
        LOGGER.info("pipeline.complete", commodity=taxonomy.commodity)
        return record

    def enrich(self, material_name: str | None, category_code: str | None) -> EnrichedRecord:
        return self.run(EnrichmentRequest(material_name=material_name, category_code=category_code))

    def attribute_names(self, category_code: str | None) -> list[str]:
        """Return the category's attribute names in catalog order."""
        return self._loader.load(category_code).names

    def identity(self, category_code: str | None) -> dict[str, Any]:
        schema = self._loader.load(category_code)
        return extract_identity(schema.raw_attributes, self._options.identity_attributes)

    def category(self, category_code: str | None = None) -> Any:
        """Pass the raw catalog payload through; every category when no id is given."""
        code = (category_code or "").strip() or None
        return self._catalog.fetch_category(code)

    def taxonomy_search(self, prefix: str | None) -> list[dict[str, str]]:
        code = _require(code=prefix)["code"]
        entries = self._store.search(code)
        LOGGER.info("pipeline.taxonomy_search", prefix=code, matches=len(entries))
        return [entry.as_dict() for entry in entries]

    def close(self) -> None:
        for resource in (self._catalog, self._store):
            close = getattr(resource, "close", None)
            if callable(close):
                close()

    def __enter__(self) -> "EnrichmentPipeline":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _identity_for(self, schema: AttributeSchema) -> dict[str, Any]:
        if not self._options.identity_whitelist:
            return {}
        return extract_identity(schema.raw_attributes, self._options.identity_attributes)


__all__ = ["EnrichmentPipeline", "PipelineOptions"]
