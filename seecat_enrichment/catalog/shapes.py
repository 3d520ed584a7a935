"""Ordered shape parsers for category schema responses.

The catalog does not commit to one response layout. Each parser below
recognises exactly one layout and either returns a :class:`ShapeMatch` or
``None``; :func:`parse_schema_payload` tries them in declaration order and the
first match wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence

from seecat_enrichment.core.exceptions import SchemaFormatError
from seecat_enrichment.core.models import AttributeDefinition, AttributeSchema


@dataclass(slots=True, frozen=True)
class ShapeMatch:
    shape: str
    attributes: tuple[AttributeDefinition, ...]


@dataclass(slots=True, frozen=True)
class ShapeParser:
    """Recognises an array found at ``path`` inside the payload."""

    shape: str
    path: tuple[str, ...]
    to_definition: Callable[[Any, int], AttributeDefinition]

    def parse(self, payload: Any) -> ShapeMatch | None:
        node = _walk(payload, self.path)
        if not isinstance(node, list):
            return None
        definitions = tuple(self.to_definition(item, index) for index, item in enumerate(node))
        return ShapeMatch(shape=self.shape, attributes=definitions)


def _walk(payload: Any, path: tuple[str, ...]) -> Any:
    node = payload
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def _object_definition(item: Any, index: int) -> AttributeDefinition:
    if not isinstance(item, dict):
        raise SchemaFormatError(f"Attribute entry #{index} is not an object")
    name = item.get("attribute_name")
    if not isinstance(name, str) or not name.strip():
        raise SchemaFormatError(f"Attribute entry #{index} has no attribute_name")
    raw_value = item.get("attribute_value")
    if raw_value is None:
        raw_value = item.get("attribute_values")
    return AttributeDefinition(name=name, raw_value=raw_value)


def _bare_name_definition(item: Any, index: int) -> AttributeDefinition:
    if not isinstance(item, str) or not item.strip():
        raise SchemaFormatError(f"Attribute name #{index} is not a non-empty string")
    return AttributeDefinition(name=item)


SHAPE_PARSERS: tuple[ShapeParser, ...] = (
    ShapeParser("array", (), _object_definition),
    ShapeParser("data", ("data",), _object_definition),
    ShapeParser("data.attributes", ("data", "attributes"), _object_definition),
    ShapeParser("attributes", ("attributes",), _object_definition),
    ShapeParser("attribute_name", ("attribute_name",), _bare_name_definition),
)


def match_shape(payload: Any, parsers: Sequence[ShapeParser] = SHAPE_PARSERS) -> ShapeMatch:
    """Return the first matching shape or raise ``SchemaFormatError``."""
    for parser in parsers:
        match = parser.parse(payload)
        if match is not None:
            return match
    raise SchemaFormatError("Invalid data format")


def nested_attributes(payload: Any) -> list[Any] | None:
    """Return the rich ``data.attributes`` list when the payload carries it."""
    node = _walk(payload, ("data", "attributes"))
    return node if isinstance(node, list) else None


def parse_schema_payload(category_code: str, payload: Any) -> AttributeSchema:
    match = match_shape(payload)
    return AttributeSchema(
        category_code=category_code,
        attributes=match.attributes,
        shape=match.shape,
        raw_attributes=nested_attributes(payload),
    )


__all__ = [
    "SHAPE_PARSERS",
    "ShapeMatch",
    "ShapeParser",
    "match_shape",
    "nested_attributes",
    "parse_schema_payload",
]
