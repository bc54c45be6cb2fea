"""Anthropic document submitter."""

from __future__ import annotations

import base64
from typing import TYPE_CHECKING, Any

from policyextract.core.errors import ConfigurationError
from policyextract.core.submitter import DocumentSubmitter


if TYPE_CHECKING:
    import asyncio

    from policyextract.config.settings import Settings
    from policyextract.core.models import Document


class AnthropicSubmitter(DocumentSubmitter):
    """Sends the PDF inline as a base64 document block."""

    name = "anthropic"

    def __init__(self, settings: Settings) -> None:
        if not settings.llm.anthropic_api_key:
            msg = "ANTHROPIC_API_KEY is not set"
            raise ConfigurationError(msg)
        from anthropic import AsyncAnthropic  # noqa: PLC0415

        self.client = AsyncAnthropic(api_key=settings.llm.anthropic_api_key)
        self.model = settings.llm.anthropic_model
        self.max_tokens = settings.llm.max_tokens

    async def submit(
        self, document: Document, prompt: str, cancel: asyncio.Event | None = None
    ) -> Any:
        kwargs: dict[str, Any] = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": 0.0,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {
                            "type": "document",
                            "source": {
                                "type": "base64",
                                "media_type": "application/pdf",
                                "data": base64.standard_b64encode(document.data).decode("ascii"),
                            },
                        },
                        {"type": "text", "text": prompt},
                    ],
                }
            ],
        }
        response = await self.client.messages.create(**kwargs)
        return response.model_dump()
