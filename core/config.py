"""Application settings.

A frozen dataclass read once from environment variables. Rule tables are
code, not configuration; only deployment concerns live here.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

DEFAULT_CORS_ORIGINS = ("http://localhost:3000", "http://localhost:3001")
DEFAULT_LETTER_MODEL = "anthropic:claude-sonnet-4-20250514"
DEFAULT_LETTER_MAX_TOKENS = 4000


@dataclass(frozen=True)
class Settings:
    """Deployment settings.

    Usage::

        settings = get_settings()
        completer = build_completer(settings)
    """

    app_name: str = "NoReply"
    version: str = "0.1.0"
    debug: bool = False
    cors_origins: tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)
    log_level: str = "INFO"

    # Letter generation
    anthropic_api_key: Optional[str] = None
    letter_model: str = DEFAULT_LETTER_MODEL
    letter_max_tokens: int = DEFAULT_LETTER_MAX_TOKENS

    # Tracing
    otel_endpoint: Optional[str] = None

    @classmethod
    def from_env(cls, prefix: str = "") -> "Settings":
        """Create settings from environment variables.

        Example: LETTER_MAX_TOKENS=2000
        """
        def env(name: str) -> Optional[str]:
            value = os.getenv(f"{prefix}{name}")
            return value.strip() if value and value.strip() else None

        overrides = {}
        if env("DEBUG"):
            overrides["debug"] = env("DEBUG").lower() == "true"
        if env("CORS_ORIGINS"):
            overrides["cors_origins"] = tuple(
                origin.strip() for origin in env("CORS_ORIGINS").split(",") if origin.strip()
            )
        if env("LOG_LEVEL"):
            overrides["log_level"] = env("LOG_LEVEL").upper()
        if env("ANTHROPIC_API_KEY"):
            overrides["anthropic_api_key"] = env("ANTHROPIC_API_KEY")
        if env("LETTER_MODEL"):
            overrides["letter_model"] = env("LETTER_MODEL")
        if env("LETTER_MAX_TOKENS"):
            overrides["letter_max_tokens"] = int(env("LETTER_MAX_TOKENS"))
        if env("OTEL_EXPORTER_OTLP_ENDPOINT"):
            overrides["otel_endpoint"] = env("OTEL_EXPORTER_OTLP_ENDPOINT")

        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
