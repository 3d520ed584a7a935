"""Application configuration primitives."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SECRETS_PATH = Path(".secrets/secrets.toml")


class Settings(BaseSettings):
    """Central configuration for the enrichment pipeline."""

    catalog_base_url: HttpUrl = "https://mmkai.ptsisi.id/api"
    catalog_api_key: str | None = None
    catalog_timeout: float = 15.0

    openai_api_key: str | None = None
    openai_base_url: str | None = None
    openai_model: str = "gpt-5.2"
    inference_timeout: float = 120.0
    inference_temperature: float = 0.0

    taxonomy_store_path: Path | None = None
    taxonomy_base_url: HttpUrl | None = None
    taxonomy_api_key: str | None = None
    taxonomy_timeout: float = 10.0
    taxonomy_lookup_parallel: int = 4

    family_tables_path: Path | None = None
    identity_whitelist_enabled: bool = True
    taxonomy_expansion_enabled: bool = True

    retry_attempts: int = 1
    retry_backoff: float = 0.5
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    model_config = SettingsConfigDict(env_prefix="SEECAT_", env_file=(), extra="ignore")

    def catalog_headers(self) -> dict[str, str]:
        return _authorization_header(self.catalog_api_key)

    def taxonomy_headers(self) -> dict[str, str]:
        return _authorization_header(self.taxonomy_api_key)


def _authorization_header(api_key: str | None, prefix: str = "Bearer") -> dict[str, str]:
    if not api_key:
        return {}
    return {"Authorization": f"{prefix} {api_key}".strip()}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance."""
    overrides = _load_settings_overrides()
    return Settings(**overrides)


def _load_settings_overrides(secrets_path: Path = DEFAULT_SECRETS_PATH) -> dict[str, Any]:
    """Load configuration overrides from the secrets TOML file."""
    if not secrets_path.exists():
        return {}
    data = _read_toml(secrets_path)
    overrides: dict[str, Any] = {}

    catalog_cfg = _extract_section(data, "catalog")
    if catalog_cfg:
        overrides["catalog_base_url"] = catalog_cfg.get("url")
        overrides["catalog_api_key"] = _sanitize_api_key(catalog_cfg.get("api_key"))
        overrides["catalog_timeout"] = _coerce_float(catalog_cfg.get("timeout"))

    openai_cfg = _extract_section(data, "openai")
    if openai_cfg:
        overrides["openai_api_key"] = _sanitize_api_key(openai_cfg.get("api_key"))
        overrides["openai_base_url"] = openai_cfg.get("base_url")
        overrides["openai_model"] = openai_cfg.get("model")
        overrides["inference_timeout"] = _coerce_float(openai_cfg.get("timeout"))

    taxonomy_cfg = _extract_section(data, "taxonomy", "unspsc")
    if taxonomy_cfg:
        overrides["taxonomy_store_path"] = taxonomy_cfg.get("path")
        overrides["taxonomy_base_url"] = taxonomy_cfg.get("url")
        overrides["taxonomy_api_key"] = _sanitize_api_key(taxonomy_cfg.get("api_key"))
        overrides["taxonomy_timeout"] = _coerce_float(taxonomy_cfg.get("timeout"))

    general_cfg = data.get("seecat") or {}
    overrides.update({key: value for key, value in general_cfg.items() if key in Settings.model_fields})
    return {key: value for key, value in overrides.items() if value is not None}


def _read_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _extract_section(data: dict[str, Any], *candidates: str) -> dict[str, Any] | None:
    for key in candidates:
        section = data.get(key)
        if isinstance(section, dict):
            return section
    return None


def _sanitize_api_key(value: str | None, prefix: str = "Bearer") -> str | None:
    if not value:
        return None
    token = value.strip()
    if token.lower().startswith(f"{prefix.lower()} "):
        token = token[len(prefix) + 1 :].strip()
    return token or None


def _coerce_float(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return float(text)
        except ValueError:
            return None
    return None
