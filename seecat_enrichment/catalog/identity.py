"""Identity attribute (NOUN / MODIFIER) extraction from a category schema."""

from __future__ import annotations

from typing import Any, Iterable

from seecat_enrichment.core.constants import IDENTITY_ATTRIBUTES
from seecat_enrichment.core.exceptions import SchemaFormatError
from seecat_enrichment.core.logging import get_logger

LOGGER = get_logger(__name__)


def _configured_value(item: dict[str, Any]) -> Any:
    attribute_value = item.get("attribute_value")
    if not isinstance(attribute_value, dict):
        return None
    return attribute_value.get("value")


def extract_identity(
    raw_attributes: Any,
    whitelist: Iterable[str] = IDENTITY_ATTRIBUTES,
) -> dict[str, Any]:
    """Return ``{name: value}`` for whitelisted attributes that carry a configured value.

    Order follows ``raw_attributes``; values are passed through untouched.
    """
    if not isinstance(raw_attributes, list):
        raise SchemaFormatError("Invalid data format: identity attributes require data.attributes")
    allowed = set(whitelist)
    identity: dict[str, Any] = {}
    for item in raw_attributes:
        if not isinstance(item, dict):
            continue
        name = item.get("attribute_name")
        if name not in allowed:
            continue
        value = _configured_value(item)
        if not value:
            continue
        identity.setdefault(name, value)
    LOGGER.debug("identity.extracted", names=list(identity))
    return identity


__all__ = ["extract_identity"]
