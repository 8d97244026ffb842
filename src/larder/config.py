"""Application configuration helpers."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

ENV_FILE_CANDIDATES = (Path(".env"), Path(".env.local"))


class Settings(BaseModel):
    """Global application settings loaded from environment variables or .env files."""

    database_path: Path = Field(
        default=Path("./data/larder.db"),
        description="SQLite database location.",
    )
    api_token: Optional[str] = Field(
        default=None,
        description="Bearer token required for authenticated endpoints.",
    )
    log_level: str = Field(default="INFO", description="Logging level (DEBUG/INFO/WARNING/ERROR)")
    log_format: str = Field(
        default="plain",
        description="Logging format (plain/json).",
    )
    log_requests: bool = Field(
        default=True,
        description="Emit request access logs when true.",
    )
    default_unit_system: str = Field(
        default="metric",
        description="Unit system used when a request does not specify one (metric/imperial).",
    )
    use_package_sizes: bool = Field(
        default=True,
        description="Round shopping quantities up to retail package sizes by default.",
    )
    package_match_threshold: float = Field(
        default=88.0,
        description="Minimum rapidfuzz score (0-100) for a fuzzy package-size catalog match.",
    )
    enrich_llm_enabled: bool = Field(
        default=False,
        description="Use an LLM endpoint for package-size enrichment when true.",
    )
    enrich_llm_base_url: Optional[str] = Field(
        default=None,
        description="Enrichment LLM base URL (OpenAI-compatible or Ollama runtime).",
    )
    enrich_llm_model: str = Field(
        default="gpt-4o-mini",
        description="Model identifier passed to the enrichment LLM endpoint.",
    )
    enrich_llm_provider: str = Field(
        default="openai",
        description="Enrichment LLM provider (openai or ollama).",
    )
    enrich_llm_temperature: float = Field(
        default=0.0,
        description="Sampling temperature for enrichment LLM calls.",
    )
    enrich_llm_max_tokens: int = Field(
        default=200,
        description="Max tokens for enrichment LLM responses.",
    )
    enrich_timeout: float = Field(
        default=10.0,
        description="Seconds to wait for a single package-size enrichment call.",
    )

    model_config = ConfigDict(frozen=True)


def _coerce_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _parse_env_file(path: Path) -> dict[str, str]:
    payload: dict[str, str] = {}
    try:
        with path.open("r", encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, raw_value = line.split("=", 1)
                payload[key.strip()] = raw_value.strip()
    except FileNotFoundError:
        return {}
    return payload


def _load_env_file_values() -> dict[str, str]:
    values: dict[str, str] = {}
    for candidate in ENV_FILE_CANDIDATES:
        values.update(_parse_env_file(candidate))
    return values


def _load_from_env() -> dict[str, object]:
    """Load optional overrides from env vars (with .env fallbacks)."""

    file_values = _load_env_file_values()

    def _env(key: str) -> Optional[str]:
        return os.environ.get(key) or file_values.get(key)

    payload: dict[str, object] = {}
    if (db_path := _env("LARDER_DATABASE_PATH")):
        payload["database_path"] = Path(db_path)
    if (api_token := _env("LARDER_API_TOKEN")):
        payload["api_token"] = api_token
    if (log_level := _env("LARDER_LOG_LEVEL")):
        payload["log_level"] = log_level
    if (log_format := _env("LARDER_LOG_FORMAT")):
        payload["log_format"] = log_format
    if (log_requests := _env("LARDER_LOG_REQUESTS")):
        payload["log_requests"] = _coerce_bool(log_requests)
    if (unit_system := _env("LARDER_UNIT_SYSTEM")):
        normalized = unit_system.strip().lower()
        if normalized in {"metric", "imperial"}:
            payload["default_unit_system"] = normalized
    if (use_package_sizes := _env("LARDER_USE_PACKAGE_SIZES")):
        payload["use_package_sizes"] = _coerce_bool(use_package_sizes)
    if (threshold := _env("LARDER_PACKAGE_MATCH_THRESHOLD")):
        try:
            payload["package_match_threshold"] = float(threshold)
        except ValueError:
            pass
    if (llm_enabled := _env("LARDER_ENRICH_LLM_ENABLED")):
        payload["enrich_llm_enabled"] = _coerce_bool(llm_enabled)
    if (llm_base := _env("LARDER_ENRICH_LLM_BASE_URL")):
        payload["enrich_llm_base_url"] = llm_base
    if (llm_model := _env("LARDER_ENRICH_LLM_MODEL")):
        payload["enrich_llm_model"] = llm_model
    if (llm_provider := _env("LARDER_ENRICH_LLM_PROVIDER")):
        payload["enrich_llm_provider"] = llm_provider
    if (llm_temperature := _env("LARDER_ENRICH_LLM_TEMPERATURE")):
        try:
            payload["enrich_llm_temperature"] = float(llm_temperature)
        except ValueError:
            pass
    if (llm_max_tokens := _env("LARDER_ENRICH_LLM_MAX_TOKENS")):
        try:
            payload["enrich_llm_max_tokens"] = int(llm_max_tokens)
        except ValueError:
            pass
    if (enrich_timeout := _env("LARDER_ENRICH_TIMEOUT")):
        try:
            payload["enrich_timeout"] = float(enrich_timeout)
        except ValueError:
            pass
    return payload


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings(**_load_from_env())
