"""Configuration helpers for API keys and environment variables."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import List, Optional

DEFAULT_FRONTEND_ORIGIN = "http://localhost:5173"


def _float_or_none(raw: Optional[str]) -> Optional[float]:
    if raw is None or raw.strip() == "":
        return None
    return float(raw)


@dataclass(slots=True)
class ApiSettings:
    """Centralised container for credentials and runtime knobs."""

    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.7
    llm_timeout_seconds: Optional[float] = None
    frontend_url: Optional[str] = None
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    sentry_dsn: Optional[str] = None

    @classmethod
    def from_env(cls) -> "ApiSettings":
        """Load settings from environment variables (``.env`` is read by the caller)."""

        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
            llm_temperature=float(os.getenv("LLM_TEMPERATURE", "0.7")),
            llm_timeout_seconds=_float_or_none(os.getenv("LLM_TIMEOUT_SECONDS")),
            frontend_url=os.getenv("FRONTEND_URL") or None,
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            sentry_dsn=os.getenv("SENTRY_DSN") or None,
        )

    def ensure(self, field: str) -> str:
        """Return the requested field and fail fast if it is missing."""

        value = getattr(self, field)
        if not value:
            raise RuntimeError(f"Missing configuration value: {field}")
        return value

    @property
    def has_model_credentials(self) -> bool:
        return bool(self.openai_api_key)

    def cors_origins(self) -> List[str]:
        """Origins allowed to call the API from a browser."""

        origins = [DEFAULT_FRONTEND_ORIGIN]
        if self.frontend_url and self.frontend_url not in origins:
            origins.append(self.frontend_url)
        return origins
