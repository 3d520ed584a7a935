"""Prompt construction for attribute inference and classification."""

from __future__ import annotations

import json
from typing import Any, Mapping, Sequence

from seecat_enrichment.core.constants import (
    CATEGORY_KEY,
    CATEGORY_LABELS,
    IDENTITY_ATTRIBUTES,
    TAXONOMY_KEY,
    TAXONOMY_UNCERTAIN,
    TAXONOMY_VERSION,
)
from seecat_enrichment.taxonomy.families import CommodityFamily, FamilyTableSet

ROLE_PREAMBLE = (
    "You are an expert material master data engineer specialized in railway industry materials "
    "and UNSPSC classification.\n\n"
    "Your task is to normalize, enrich, and classify a material name into structured technical "
    "attributes, category, and UNSPSC code.\n\n"
    "IMPORTANT UNSPSC RULE (CRITICAL):\n"
    "- You MUST determine ONLY the UNSPSC COMMODITY code (8 digits).\n"
)

ATTRIBUTE_OBJECTIVE = (
    "1. TECHNICAL ATTRIBUTE EXTRACTION\n"
    "  - Define and extract technical attributes based on: {attribute_names}\n"
    "  - Analyze the material name and extract attributes using:\n"
    "    a. Explicit information stated in the material name\n"
    "    b. Implicit information derived from:\n"
    "       - Part numbering conventions\n"
    "       - International standards (ISO, DIN, ANSI, JIS)\n"
    "       - Common mechanical & electrical engineering rules\n"
    "  - Never fabricate a value. Numeric values MUST match the material name exactly.\n"
)

CATEGORY_OBJECTIVE = (
    "2. CATEGORY CLASSIFICATION (RAILWAY INDUSTRY CONTEXT)\n"
    "  - Determine ONE most appropriate category:\n"
    "{category_lines}\n"
    "  - Classification must follow railway maintenance and asset management practice.\n"
    "  - Explanation with reason refer to railway industry standards or common railway practice.\n"
)

TAXONOMY_OBJECTIVE = (
    "3. UNSPSC CLASSIFICATION ({version}, STRICT)\n"
    "  - Select the most appropriate UNSPSC COMMODITY code\n"
    "  - Use the UNSPSC {version} classification system\n"
    "  - Explanation with reason must be concise and precise refer to UNSPSC {version}\n"
    "  - Do NOT infer UNSPSC descriptions\n"
    "  - Only use the provided UNSPSC master data\n"
)

FORMATTING_RULES = (
    "ATTRIBUTE VALUE FORMATTING RULES (CRITICAL):\n"
    "- ATTRIBUTE_VALUE must be in UPPERCASE\n"
    "- ATTRIBUTE_VALUE MUST use SPACE to separate words, brands, series, and model identifiers\n"
    '  - Example: "INTEL CORE I7", "ATI RADEON", "LENOVO THINKPAD"\n'
    "- Units of measure MUST remain concatenated WITHOUT SPACE\n"
    '  - Example: "16GB", "512GB", "220V", "50HZ"\n'
    "- Do NOT remove or merge words that are commonly written as separate terms\n"
    "- Alphanumeric product series must remain readable and correctly spaced\n"
)

OUTPUT_RULES = (
    "OUTPUT RULES:\n"
    "- Output MUST be valid JSON only\n"
    "- Do NOT include markdown, comments, or explanations\n"
    "- Output MUST be a SINGLE flat JSON object\n"
    "- Output MUST be in English\n"
    "- Use ATTRIBUTE_NAME exactly as provided (case-sensitive), BUT SKIP FOR {identity_names}\n"
    "- Every listed ATTRIBUTE_NAME MUST appear exactly once\n"
    "- If an attribute has no value, set it to null\n"
)


def _family_block(family: CommodityFamily) -> str:
    lines = [
        f"  - IF {family.name}, use CLASS {family.class_code} {family.class_name} then select ONE "
        "the most appropriate UNSPSC COMMODITY CODE:",
    ]
    lines.extend(f"      {entry.code}\t{entry.name}" for entry in family.commodities)
    fallback = family.fallback_entry()
    if fallback is not None:
        lines.append(f"    IF not suitable for {family.name}, choose {fallback.code}\t{fallback.name}")
    else:
        lines.append(f"    IF not suitable for {family.name}, return {TAXONOMY_UNCERTAIN}")
    return "\n".join(lines)


def _output_schema(identity: Mapping[str, Any], identity_names: Sequence[str]) -> str:
    identity_json = json.dumps(identity, ensure_ascii=False)
    category_options = " | ".join(CATEGORY_LABELS)
    return (
        "FINAL OUTPUT SCHEMA (STRICT):\n\n"
        "{\n"
        f"  {identity_json}, as object, do not change OBJECT VALUE of {', '.join(identity_names)}\n"
        '  "<ATTRIBUTE_NAME>": "<ATTRIBUTE_VALUE or null>",\n'
        f'  "{CATEGORY_KEY}": {{\n'
        f'    "CATEGORY": "{category_options}",\n'
        '    "EXPLANATION": "<EXPLANATION>"\n'
        "  },\n"
        f'  "{TAXONOMY_KEY}": {{\n'
        '    "COMMODITY": "<COMMODITY_CODE>",\n'
        '    "EXPLANATION": "<EXPLANATION>"\n'
        "  }\n"
        "}\n"
    )


def build_inference_prompt(
    material_name: str,
    attribute_names: Sequence[str],
    identity: Mapping[str, Any],
    *,
    families: FamilyTableSet,
    identity_names: Sequence[str] = IDENTITY_ATTRIBUTES,
) -> str:
    """Return the system instruction for one material/category pair."""
    category_lines = "\n".join(f"    - {label}" for label in CATEGORY_LABELS)
    taxonomy_lines = [TAXONOMY_OBJECTIVE.format(version=TAXONOMY_VERSION)]
    taxonomy_lines.extend(_family_block(family) for family in families.families)
    taxonomy_lines.append(f"  - If unsure, return {TAXONOMY_UNCERTAIN}\n")
    sections = [
        ROLE_PREAMBLE,
        f"INPUT:\n- material_name: {material_name}\n",
        "OBJECTIVES:\n",
        ATTRIBUTE_OBJECTIVE.format(attribute_names=", ".join(attribute_names) or "(none)"),
        CATEGORY_OBJECTIVE.format(category_lines=category_lines),
        "\n".join(taxonomy_lines),
        FORMATTING_RULES,
        OUTPUT_RULES.format(identity_names=", ".join(identity_names)),
        _output_schema(identity, identity_names),
    ]
    return "\n".join(sections)


__all__ = ["build_inference_prompt"]
