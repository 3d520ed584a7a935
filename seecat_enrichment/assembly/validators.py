"""Output contract checks for assembled enrichment records."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from seecat_enrichment.core.constants import CATEGORY_KEY, CATEGORY_LABELS, RESERVED_KEYS
from seecat_enrichment.core.models import InferenceResult


def validate_record_inputs(
    targets: Sequence[str],
    identity: Mapping[str, Any],
    inference: InferenceResult,
) -> list[str]:
    """Return a list of contract violations for one record's parts."""

    errors: list[str] = []

    for key in inference.duplicate_keys:
        errors.append(f"completion repeats key `{key}`.")

    for name in list(identity) + list(targets):
        if name in RESERVED_KEYS:
            errors.append(f"attribute `{name}` collides with a reserved output key.")
    for name in targets:
        if name in identity:
            errors.append(f"attribute `{name}` is both an identity and an inferred attribute.")

    category = inference.category
    if category is None:
        errors.append(f"`{CATEGORY_KEY}` is missing.")
    else:
        if category.category not in CATEGORY_LABELS:
            errors.append(f"`{CATEGORY_KEY}.CATEGORY` ('{category.category}') must be one of {', '.join(CATEGORY_LABELS)}.")
        if not category.explanation:
            errors.append(f"`{CATEGORY_KEY}.EXPLANATION` must be a non-empty string.")

    declared = set(targets)
    for name in targets:
        if name not in inference.attributes:
            errors.append(f"attribute `{name}` is missing (expected a value or null).")
    for name in inference.attributes:
        if name not in declared:
            errors.append(f"attribute `{name}` is not declared by the category schema.")

    return errors


__all__ = ["validate_record_inputs"]
