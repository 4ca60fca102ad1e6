"""Environment-driven settings for eru.

The library itself needs very little configuration: how loudly to log and
whether to render logs as JSON. Validation never reads settings; only
``configure_logging()`` does.

Manifesto:
    Configuration should be explicit, validated, and environment-driven.

    - **Pydantic validation:** A bad ``ERU_LOG_LEVEL`` fails at load time
    - **Environment-driven:** Reads ``ERU_*`` env vars and a ``.env`` file
    - **Sensible defaults:** Works out of the box, quiet by default

Examples:
    >>> from eru.core.settings import get_settings
    >>> get_settings().log_level
    'WARNING'

Tags:
    settings, configuration, pydantic, environment, eru-core

Doc-Types:
    - API Reference
    - Configuration Guide
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from eru.core.errors import ConfigError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EruSettings(BaseSettings):
    """Settings read from ``ERU_``-prefixed environment variables.

    Fields
    ──────
    log_level         : Structlog log level
    json_logs         : True for JSON, False for console, None to auto-detect
    """

    model_config = SettingsConfigDict(
        env_prefix="ERU_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "WARNING"
    json_logs: bool | None = None

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> EruSettings:
    """Cached settings, loaded once per process.

    Raises:
        ConfigError: If an ``ERU_*`` variable holds an invalid value
    """
    try:
        return EruSettings()
    except PydanticValidationError as exc:
        raise ConfigError(
            f"Invalid eru settings ({exc.error_count()} error(s))", cause=exc
        ) from exc


__all__ = [
    "LOG_LEVELS",
    "EruSettings",
    "get_settings",
]
