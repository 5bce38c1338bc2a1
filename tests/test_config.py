"""Tests for environment-driven settings."""
from __future__ import annotations

import pytest

from stayvision.core.config import DEFAULT_FRONTEND_ORIGIN, ApiSettings

ENV_VARS = [
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "LLM_TEMPERATURE",
    "LLM_TIMEOUT_SECONDS",
    "FRONTEND_URL",
    "HOST",
    "PORT",
    "LOG_LEVEL",
    "SENTRY_DSN",
]


@pytest.fixture
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = ApiSettings.from_env()

    assert settings.openai_api_key is None
    assert settings.openai_model == "gpt-4o-mini"
    assert settings.llm_temperature == 0.7
    assert settings.llm_timeout_seconds is None
    assert settings.port == 3000
    assert settings.log_level == "INFO"
    assert not settings.has_model_credentials
    assert settings.cors_origins() == [DEFAULT_FRONTEND_ORIGIN]


def test_reads_environment(clean_env):
    clean_env.setenv("OPENAI_API_KEY", "sk-live")
    clean_env.setenv("OPENAI_MODEL", "gpt-4o")
    clean_env.setenv("LLM_TEMPERATURE", "0.2")
    clean_env.setenv("LLM_TIMEOUT_SECONDS", "30")
    clean_env.setenv("FRONTEND_URL", "https://stayvision.example")
    clean_env.setenv("PORT", "8080")
    clean_env.setenv("LOG_LEVEL", "debug")

    settings = ApiSettings.from_env()

    assert settings.has_model_credentials
    assert settings.openai_model == "gpt-4o"
    assert settings.llm_temperature == 0.2
    assert settings.llm_timeout_seconds == 30.0
    assert settings.port == 8080
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins() == [DEFAULT_FRONTEND_ORIGIN, "https://stayvision.example"]


def test_blank_api_key_counts_as_missing(clean_env):
    clean_env.setenv("OPENAI_API_KEY", "")

    assert not ApiSettings.from_env().has_model_credentials


def test_ensure_fails_fast_for_missing_values():
    settings = ApiSettings()

    with pytest.raises(RuntimeError, match="openai_api_key"):
        settings.ensure("openai_api_key")
    assert settings.ensure("openai_model") == "gpt-4o-mini"
