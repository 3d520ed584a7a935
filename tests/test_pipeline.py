from __future__ import annotations

import pytest

from conftest import FakeCatalog, FakeLLM
from seecat_enrichment.core.exceptions import (
    InferenceParseError,
    MissingParameterError,
    SchemaFormatError,
)
from seecat_enrichment.core.models import EnrichmentRequest
from seecat_enrichment.orchestrator import EnrichmentPipeline, PipelineOptions
from seecat_enrichment.taxonomy import load_family_tables


def _pipeline(settings, store, schema, completion, **options) -> tuple[EnrichmentPipeline, FakeCatalog, FakeLLM]:
    catalog = FakeCatalog(schema)
    llm = FakeLLM(completion)
    pipeline = EnrichmentPipeline(catalog, llm, store, PipelineOptions(**options), settings)
    return pipeline, catalog, llm


def test_end_to_end_record(settings, taxonomy_store, spring_schema, spring_completion):
    pipeline, catalog, _ = _pipeline(settings, taxonomy_store, spring_schema, spring_completion)
    record = pipeline.enrich("Spring compression SS 2x20x50", "MC-0107")

    assert catalog.requested == ["MC-0107"]
    assert record.as_dict() == {
        "NOUN": "SPRING",
        "MODIFIER": "COMPRESSION",
        "MATERIAL": "STAINLESS STEEL",
        "WIRE DIAMETER": "2MM",
        "FREE LENGTH": None,
        "X_CATEGORY": {"CATEGORY": "SPAREPART", "EXPLANATION": "Replaceable bogie suspension component."},
        "X_UNSPC": {
            "SEGMENT": "31000000",
            "SEGMENT_NAME": "Manufacturing Components and Supplies",
            "FAMILY": "31160000",
            "FAMILY_NAME": "Hardware",
            "CLASS": "31161900",
            "CLASS_NAME": "Springs",
            "COMMODITY": "31161904",
            "COMMODITY_NAME": "Compression springs",
            "EXPLANATION": "Helical compression spring.",
        },
    }
    assert list(record.fields)[:2] == ["NOUN", "MODIFIER"]


def test_identical_inputs_give_byte_identical_output(settings, taxonomy_store, spring_schema, spring_completion):
    outputs = []
    for _ in range(2):
        pipeline, _, _ = _pipeline(
            settings, taxonomy_store, spring_schema, spring_completion, families=load_family_tables()
        )
        outputs.append(pipeline.enrich("Spring compression SS 2x20x50", "MC-0107").to_json())
    assert outputs[0] == outputs[1]


@pytest.mark.parametrize(
    ("material_name", "category_code", "missing"),
    [
        (None, "MC-0107", ["material_name"]),
        ("Spring", "  ", ["category_code"]),
        ("", None, ["material_name", "category_code"]),
    ],
)
def test_missing_parameters(settings, taxonomy_store, material_name, category_code, missing):
    pipeline, catalog, llm = _pipeline(settings, taxonomy_store, {}, {})
    with pytest.raises(MissingParameterError) as excinfo:
        pipeline.run(EnrichmentRequest(material_name, category_code))
    assert excinfo.value.names == missing
    assert catalog.requested == [] and llm.calls == []


def test_unknown_schema_shape_stops_before_inference(settings, taxonomy_store):
    pipeline, _, llm = _pipeline(settings, taxonomy_store, {"status": "ok"}, {})
    with pytest.raises(SchemaFormatError):
        pipeline.enrich("Spring", "MC-0107")
    assert llm.calls == []


def test_identity_requires_nested_attributes(settings, taxonomy_store, spring_schema, spring_completion):
    flat = spring_schema["data"]["attributes"]
    pipeline, _, _ = _pipeline(settings, taxonomy_store, flat, spring_completion)
    with pytest.raises(SchemaFormatError):
        pipeline.enrich("Spring", "MC-0107")


def test_without_identity_whitelist_every_attribute_is_inferred(settings, taxonomy_store, spring_schema, spring_completion):
    spring_completion.update({"MODIFIER": "COMPRESSION", "MODIFIER 1": None})
    pipeline, _, llm = _pipeline(
        settings, taxonomy_store, spring_schema, spring_completion, identity_whitelist=False
    )
    record = pipeline.enrich("Spring", "MC-0107")
    assert record.fields["NOUN"] == "SPRINGS"
    assert "based on: NOUN, MODIFIER, MODIFIER 1, MATERIAL" in llm.calls[0]["prompt"]


def test_expansion_disabled_keeps_commodity_only(settings, taxonomy_store, spring_schema, spring_completion):
    pipeline, _, _ = _pipeline(
        settings, taxonomy_store, spring_schema, spring_completion, taxonomy_expansion=False
    )
    record = pipeline.enrich("Spring", "MC-0107")
    assert record.taxonomy == {"COMMODITY": "31161904", "EXPLANATION": "Helical compression spring."}


def test_parse_failure_never_yields_partial_record(settings, taxonomy_store, spring_schema):
    pipeline, _, _ = _pipeline(settings, taxonomy_store, spring_schema, '{"MATERIAL": "STEEL"')
    with pytest.raises(InferenceParseError):
        pipeline.enrich("Spring", "MC-0107")


def test_auxiliary_operations(settings, taxonomy_store, spring_schema):
    pipeline, catalog, _ = _pipeline(settings, taxonomy_store, spring_schema, {})
    assert pipeline.attribute_names("MC-0107") == [
        "NOUN",
        "MODIFIER",
        "MODIFIER 1",
        "MATERIAL",
        "WIRE DIAMETER",
        "FREE LENGTH",
    ]
    assert pipeline.identity("MC-0107") == {"NOUN": "SPRING", "MODIFIER": "COMPRESSION"}
    assert pipeline.category() == spring_schema
    assert catalog.requested[-1] is None
    assert pipeline.taxonomy_search("311619") == [
        {"code": "31161900", "name": "Springs"},
        {"code": "31161901", "name": "Helical springs"},
        {"code": "31161904", "name": "Compression springs"},
    ]
    with pytest.raises(MissingParameterError):
        pipeline.taxonomy_search(" ")


def test_close_releases_collaborators(settings, taxonomy_store, spring_schema):
    pipeline, catalog, _ = _pipeline(settings, taxonomy_store, spring_schema, {})
    with pipeline:
        pass
    assert catalog.closed
