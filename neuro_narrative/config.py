"""
Runtime configuration, read from the environment.

Recognized variables:
  OPENAI_API_KEY                  API key for the text generator
  DATABASE_URL                    SQLite database path (default: neuro_ai.db)
  PORT                            HTTP listening port (default: 3456)
  OPENAI_MODEL                    Chat model (default: gpt-4o-mini)
  LLM_TIMEOUT_SECONDS             Per-request timeout (default: 60)
  CONSOLIDATION_INTERVAL_SECONDS  Memory consolidation period (default: 3600)
  LOG_LEVEL                       Root log level (default: INFO)

A ``.env`` file in the working directory is loaded first, without overriding
variables already set in the process environment.
"""

import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel


class ConfigError(Exception):
    """Raised when required configuration is missing or malformed."""


class Settings(BaseModel):
    """Process-wide settings."""

    openai_api_key: Optional[str] = None
    database_url: str = "neuro_ai.db"
    port: int = 3456
    openai_model: str = "gpt-4o-mini"
    llm_timeout_seconds: float = 60.0
    consolidation_interval_seconds: int = 3600
    log_level: str = "INFO"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment (or an explicit mapping)."""
    if environ is None:
        load_dotenv()
        environ = os.environ

    try:
        return Settings(
            openai_api_key=environ.get("OPENAI_API_KEY") or None,
            database_url=environ.get("DATABASE_URL", "neuro_ai.db"),
            port=int(environ.get("PORT", "3456")),
            openai_model=environ.get("OPENAI_MODEL", "gpt-4o-mini"),
            llm_timeout_seconds=float(environ.get("LLM_TIMEOUT_SECONDS", "60")),
            consolidation_interval_seconds=int(
                environ.get("CONSOLIDATION_INTERVAL_SECONDS", "3600")
            ),
            log_level=environ.get("LOG_LEVEL", "INFO").upper(),
        )
    except ValueError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
