"""OpenAI document submitter."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from policyextract.core.errors import ConfigurationError, SubmissionCancelledError, SubmissionError
from policyextract.core.submitter import DocumentSubmitter


if TYPE_CHECKING:
    from policyextract.config.settings import Settings
    from policyextract.core.models import Document


logger = logging.getLogger(__name__)

_PENDING = frozenset({"queued", "in_progress"})


class OpenAISubmitter(DocumentSubmitter):
    """Uploads the PDF and runs a background Responses API job."""

    name = "openai"

    def __init__(self, settings: Settings) -> None:
        if not settings.llm.openai_api_key:
            msg = "OPENAI_API_KEY is not set"
            raise ConfigurationError(msg)
        from openai import AsyncOpenAI  # noqa: PLC0415
        self.client = AsyncOpenAI(api_key=settings.llm.openai_api_key)
        self.model = settings.llm.openai_model
        self.poll_interval = settings.extraction.poll_interval_seconds

    async def submit(
        self, document: Document, prompt: str, cancel: asyncio.Event | None = None
    ) -> Any:
        uploaded = await self.client.files.create(
            file=(document.name, document.data, "application/pdf"), purpose="user_data",
        )
        logger.debug("Uploaded %s as %s", document.name, uploaded.id)
        try:
            response = await self.client.responses.create(
                model=self.model,
                input=[{
                    "role": "user",
                    "content": [
                        {"type": "input_file", "file_id": uploaded.id},
                        {"type": "input_text", "text": prompt},
                    ],
                }],
                background=True,
            )
            try:
                while response.status in _PENDING:
                    if cancel is not None and cancel.is_set():
                        await self._cancel_response(response.id)
                        msg = f"Response {response.id} cancelled"
                        raise SubmissionCancelledError(msg)
                    await asyncio.sleep(self.poll_interval)
                    response = await self.client.responses.retrieve(response.id)
                    logger.debug("Response %s status: %s", response.id, response.status)
            except asyncio.CancelledError:
                # Timed out or cancelled by the caller.
                await self._cancel_response(response.id)
                raise
            if response.status != "completed":
                detail = response.error.message if response.error else response.status
                msg = f"Response {response.id} ended as {response.status}: {detail}"
                raise SubmissionError(msg)
            return response.model_dump()
        finally:
            await self._delete_file(uploaded.id)

    async def _cancel_response(self, response_id: str) -> None:
        try:
            await self.client.responses.cancel(response_id)
        except Exception:
            logger.warning("Could not cancel response %s", response_id, exc_info=True)

    async def _delete_file(self, file_id: str) -> None:
        try:
            await self.client.files.delete(file_id)
        except Exception:
            logger.warning("Could not delete uploaded file %s", file_id, exc_info=True)
