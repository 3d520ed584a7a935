"""Text-completion capability used by the inference engine."""

from __future__ import annotations

import json
from typing import Any, Protocol

from openai import APIConnectionError, APIStatusError, APITimeoutError, OpenAI, OpenAIError

from seecat_enrichment.core.config import Settings, get_settings
from seecat_enrichment.core.exceptions import ConfigurationError, UpstreamFetchError, UpstreamTimeoutError
from seecat_enrichment.core.logging import get_logger

LOGGER = get_logger(__name__)


class LanguageModelProtocol(Protocol):
    """Minimal protocol required from language models used in the pipeline."""

    def invoke(self, input_data: dict[str, Any]) -> Any: ...


class OpenAIChatLLM:
    """Chat Completions wrapper: one system instruction, one user message, no caching.

    The OpenAI client is built on first use, so commands that never reach the
    model run without credentials.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        client: OpenAI | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._model = self._settings.openai_model
        self._client = client

    def _get_client(self) -> OpenAI:
        if self._client is None:
            client_kwargs: dict[str, Any] = {"timeout": self._settings.inference_timeout, "max_retries": 0}
            if self._settings.openai_api_key:
                client_kwargs["api_key"] = self._settings.openai_api_key
            if self._settings.openai_base_url:
                client_kwargs["base_url"] = self._settings.openai_base_url
            try:
                self._client = OpenAI(**client_kwargs)
            except OpenAIError as exc:
                LOGGER.error("llm.client_unavailable", model=self._model, error=str(exc))
                raise ConfigurationError(f"Completion client is not configured: {exc}") from exc
        return self._client

    def invoke(self, input_data: dict[str, Any]) -> str | None:
        prompt = input_data.get("prompt") or ""
        context = input_data.get("context")
        if isinstance(context, (dict, list)):
            user_content = json.dumps(context, ensure_ascii=False)
        else:
            user_content = str(context) if context is not None else ""
        temperature = input_data.get("temperature", self._settings.inference_temperature)

        client = self._get_client()
        LOGGER.debug("llm.request", model=self._model, prompt_chars=len(prompt))
        try:
            completion = client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": str(prompt)},
                    {"role": "user", "content": user_content},
                ],
                temperature=temperature,
            )
        except APITimeoutError as exc:
            LOGGER.error("llm.timeout", model=self._model, timeout=self._settings.inference_timeout)
            raise UpstreamTimeoutError(f"Completion request timed out (timeout={self._settings.inference_timeout:.0f}s)") from exc
        except (APIConnectionError, APIStatusError) as exc:
            LOGGER.error("llm.request_failed", model=self._model, error=str(exc))
            raise UpstreamFetchError("Completion service request failed") from exc

        if not completion.choices:
            return None
        return completion.choices[0].message.content


__all__ = ["LanguageModelProtocol", "OpenAIChatLLM"]
