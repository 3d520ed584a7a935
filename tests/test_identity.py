from __future__ import annotations

import pytest

from seecat_enrichment.catalog import extract_identity
from seecat_enrichment.core.exceptions import SchemaFormatError


def _item(name, value):
    return {"attribute_name": name, "attribute_value": {"value": value}}


def test_identity_follows_schema_order_not_whitelist_order():
    raw = [
        _item("MODIFIER 2", "HEAVY DUTY"),
        _item("COLOR", "RED"),
        _item("NOUN", "BOLT"),
        _item("MODIFIER", "HEX"),
    ]
    identity = extract_identity(raw)
    assert list(identity) == ["MODIFIER 2", "NOUN", "MODIFIER"]
    assert identity == {"MODIFIER 2": "HEAVY DUTY", "NOUN": "BOLT", "MODIFIER": "HEX"}


def test_empty_or_missing_values_are_skipped(spring_schema):
    raw = spring_schema["data"]["attributes"] + [
        {"attribute_name": "MODIFIER 3"},
        {"attribute_name": "MODIFIER 2", "attribute_value": None},
    ]
    assert extract_identity(raw) == {"NOUN": "SPRING", "MODIFIER": "COMPRESSION"}


def test_values_pass_through_untouched():
    raw = [_item("NOUN", "  Bolt, hex ")]
    assert extract_identity(raw) == {"NOUN": "  Bolt, hex "}


def test_first_occurrence_wins():
    raw = [_item("NOUN", "BOLT"), _item("NOUN", "SCREW")]
    assert extract_identity(raw) == {"NOUN": "BOLT"}


def test_custom_whitelist():
    raw = [_item("NOUN", "BOLT"), _item("BRAND", "ACME")]
    assert extract_identity(raw, ("BRAND",)) == {"BRAND": "ACME"}


@pytest.mark.parametrize("raw", [None, {"attributes": []}, "NOUN"])
def test_non_list_attributes_raise_schema_format_error(raw):
    with pytest.raises(SchemaFormatError):
        extract_identity(raw)
