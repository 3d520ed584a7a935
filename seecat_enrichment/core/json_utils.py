"""Reusable helpers for parsing JSON responses from the completion service."""

from __future__ import annotations

import json
import re
from typing import Any

from .exceptions import InferenceParseError

THINK_PATTERN = re.compile(r"<think>.*?</think>", flags=re.DOTALL)
CODE_BLOCK_PATTERN = re.compile(r"```(?:json)?(.*?)```", flags=re.DOTALL | re.IGNORECASE)


class DuplicateKeyCollector:
    """``object_pairs_hook`` that keeps the first value and records repeated keys."""

    def __init__(self) -> None:
        self.duplicates: list[str] = []

    def __call__(self, pairs: list[tuple[str, Any]]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, value in pairs:
            if key in result:
                if key not in self.duplicates:
                    self.duplicates.append(key)
                continue
            result[key] = value
        return result


def strip_think(content: str) -> str:
    return THINK_PATTERN.sub("", content)


def extract_json_blob(content: str) -> str:
    stripped = strip_think(content).strip()
    match = CODE_BLOCK_PATTERN.search(stripped)
    if match:
        stripped = match.group(1)
    return stripped.strip()


def parse_json_response(content: str, *, collector: DuplicateKeyCollector | None = None) -> Any:
    """Parse a completion into JSON, tolerating fences and reasoning blocks only.

    Truncated or otherwise malformed output is never repaired.
    """
    cleaned = extract_json_blob(content)
    if not cleaned:
        raise InferenceParseError("Completion contained no JSON content")
    try:
        if collector is not None:
            return json.loads(cleaned, object_pairs_hook=collector)
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise InferenceParseError(f"Unable to parse JSON from completion: {exc.msg} at position {exc.pos}") from exc
