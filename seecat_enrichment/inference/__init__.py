"""Attribute inference on top of a text-completion capability."""

from .engine import AttributeInferenceEngine, normalize_attribute_value
from .llm import LanguageModelProtocol, OpenAIChatLLM
from .prompts import build_inference_prompt

__all__ = [
    "AttributeInferenceEngine",
    "LanguageModelProtocol",
    "OpenAIChatLLM",
    "build_inference_prompt",
    "normalize_attribute_value",
]
