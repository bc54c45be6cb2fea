"""Tests for settings and environment overrides."""

from __future__ import annotations

from pathlib import Path

from policyextract.config.settings import LLMProviderEnum, Settings


def test_defaults() -> None:
    settings = Settings()
    assert settings.llm.provider == LLMProviderEnum.OPENAI
    assert settings.extraction.timeout_seconds > 0
    assert settings.extraction.currency == "QAR"
    assert settings.llm.api_key == ""


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("LLM_PROVIDER", "Anthropic")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-test")
    monkeypatch.setenv("EXTRACTION_TIMEOUT", "12.5")
    monkeypatch.setenv("EXTRACTION_POLL_INTERVAL", "0.5")
    monkeypatch.setenv("POLICYEXTRACT_DB", "/tmp/x.db")
    settings = Settings()
    assert settings.llm.provider == LLMProviderEnum.ANTHROPIC
    assert settings.llm.api_key == "sk-ant-test"
    assert settings.extraction.timeout_seconds == 12.5
    assert settings.extraction.poll_interval_seconds == 0.5
    assert settings.storage.db_path == Path("/tmp/x.db")
