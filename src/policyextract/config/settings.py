"""Application settings and configuration."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LLMProviderEnum(str, Enum):
    """Supported LLM providers."""

    OPENAI = "openai"
    ANTHROPIC = "anthropic"


class LLMSettings(BaseModel):
    """LLM provider configuration."""

    provider: LLMProviderEnum = LLMProviderEnum.OPENAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    anthropic_api_key: str = ""
    anthropic_model: str = "claude-sonnet-4-20250514"
    max_tokens: int = 4096

    @property
    def api_key(self) -> str:
        """Credential for the selected provider."""
        if self.provider == LLMProviderEnum.ANTHROPIC:
            return self.anthropic_api_key
        return self.openai_api_key


class ExtractionSettings(BaseModel):
    """Submission and post-processing configuration."""

    timeout_seconds: float = 300.0
    poll_interval_seconds: float = 2.0
    currency: str = "QAR"


class StorageSettings(BaseModel):
    """Plan override store and extraction log location."""

    db_path: Path = Path("data/policyextract.db")


class Settings(BaseSettings):
    """Application configuration.

    Settings are loaded from environment variables or .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    # LLM Configuration
    llm: LLMSettings = Field(default_factory=LLMSettings)

    # Extraction Configuration
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)

    # Storage Configuration
    storage: StorageSettings = Field(default_factory=StorageSettings)

    # Logging
    log_level: str = "INFO"

    def __init__(self, **data: Any) -> None:
        """Initialize settings with environment variable overrides."""
        super().__init__(**data)
        self._load_env_overrides()

    def _load_env_overrides(self) -> None:
        """Load environment variable overrides for nested settings."""
        # LLM overrides
        if provider := os.getenv("LLM_PROVIDER"):
            self.llm.provider = LLMProviderEnum(provider.lower())
        if key := os.getenv("OPENAI_API_KEY"):
            self.llm.openai_api_key = key
        if model := os.getenv("OPENAI_MODEL"):
            self.llm.openai_model = model
        if key := os.getenv("ANTHROPIC_API_KEY"):
            self.llm.anthropic_api_key = key
        if model := os.getenv("ANTHROPIC_MODEL"):
            self.llm.anthropic_model = model

        # Extraction overrides
        if timeout := os.getenv("EXTRACTION_TIMEOUT"):
            self.extraction.timeout_seconds = float(timeout)
        if interval := os.getenv("EXTRACTION_POLL_INTERVAL"):
            self.extraction.poll_interval_seconds = float(interval)
        if currency := os.getenv("EXTRACTION_CURRENCY"):
            self.extraction.currency = currency

        # Storage overrides
        if db_path := os.getenv("POLICYEXTRACT_DB"):
            self.storage.db_path = Path(db_path)
