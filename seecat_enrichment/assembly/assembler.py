"""Merge identity, inferred attributes, category and taxonomy into one record."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from seecat_enrichment.core.constants import CATEGORY_KEY, TAXONOMY_KEY
from seecat_enrichment.core.exceptions import ContractViolationError
from seecat_enrichment.core.logging import get_logger
from seecat_enrichment.core.models import EnrichedRecord, InferenceResult, TaxonomyBlock

from .validators import validate_record_inputs

LOGGER = get_logger(__name__)


class ResultAssembler:
    """Builds the flat output record, or refuses with every violation listed."""

    def assemble(
        self,
        material_name: str,
        targets: Sequence[str],
        identity: Mapping[str, Any],
        inference: InferenceResult,
        taxonomy: TaxonomyBlock,
    ) -> EnrichedRecord:
        errors = validate_record_inputs(targets, identity, inference)
        if errors:
            LOGGER.error("assembler.contract_violation", material_name=material_name, violations=errors)
            raise ContractViolationError(material_name, errors)

        if inference.echoed_identity:
            LOGGER.debug("assembler.echoed_identity_discarded", keys=list(inference.echoed_identity))

        fields: dict[str, Any] = dict(identity)
        for name in targets:
            fields[name] = inference.attributes[name]
        fields[CATEGORY_KEY] = inference.category.as_dict()
        fields[TAXONOMY_KEY] = taxonomy.as_dict()
        LOGGER.info(
            "assembler.record",
            material_name=material_name,
            identity_count=len(identity),
            attribute_count=len(targets),
        )
        return EnrichedRecord(fields=fields)


__all__ = ["ResultAssembler"]
