"""Document submission abstraction for multiple providers."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from policyextract.config.settings import LLMProviderEnum, Settings
from policyextract.core.errors import (
    ConfigurationError,
    ExtractionError,
    SubmissionCancelledError,
    SubmissionError,
    SubmissionTimeoutError,
)


if TYPE_CHECKING:
    from policyextract.core.models import Document


logger = logging.getLogger(__name__)


class DocumentSubmitter(ABC):
    """Abstract base class for document submitters.

    A submitter sends one document and one prompt to a model and returns the
    provider's raw response, typically a ``model_dump()`` of the SDK object.
    """

    name: str = "submitter"

    @abstractmethod
    async def submit(
        self, document: Document, prompt: str, cancel: asyncio.Event | None = None
    ) -> Any:
        """Submit a document with its extraction prompt."""
        ...

    @classmethod
    def create(cls, settings: Settings | None = None, mock: bool = False) -> DocumentSubmitter:
        """Factory method to create the appropriate submitter."""
        if mock:
            from policyextract.core.mock_submitter import MockSubmitter  # noqa: PLC0415

            return MockSubmitter()
        if settings is None:
            settings = Settings()
        if settings.llm.provider == LLMProviderEnum.OPENAI:
            from policyextract.core.providers.openai import OpenAISubmitter  # noqa: PLC0415

            return OpenAISubmitter(settings)
        if settings.llm.provider == LLMProviderEnum.ANTHROPIC:
            from policyextract.core.providers.anthropic import AnthropicSubmitter  # noqa: PLC0415

            return AnthropicSubmitter(settings)
        msg = f"Unknown LLM provider: {settings.llm.provider}"
        raise ConfigurationError(msg)


async def submit_with_deadline(
    submitter: DocumentSubmitter,
    document: Document,
    prompt: str,
    timeout: float | None = None,
    cancel: asyncio.Event | None = None,
) -> Any:
    """Run a submission bounded by a timeout and a cancellation token.

    Raises:
        SubmissionTimeoutError: The submission outlived ``timeout`` seconds.
        SubmissionCancelledError: ``cancel`` was set first.
        SubmissionError: The provider failed.
    """
    if cancel is not None and cancel.is_set():
        msg = f"Submission of {document.name} cancelled before start"
        raise SubmissionCancelledError(msg)

    task = asyncio.ensure_future(submitter.submit(document, prompt, cancel))
    waiters: set[asyncio.Future[Any]] = {task}
    watcher = asyncio.ensure_future(cancel.wait()) if cancel is not None else None
    if watcher is not None:
        waiters.add(watcher)

    try:
        done, _ = await asyncio.wait(waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
    finally:
        if watcher is not None and not watcher.done():
            watcher.cancel()
        if not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task

    if task in done:
        try:
            return task.result()
        except ExtractionError:
            raise
        except Exception as e:
            logger.exception("Submission of %s failed", document.name)
            msg = f"{submitter.name} submission failed: {e}"
            raise SubmissionError(msg) from e
    if watcher is not None and watcher in done:
        msg = f"Submission of {document.name} cancelled"
        raise SubmissionCancelledError(msg)
    msg = f"Submission of {document.name} timed out after {timeout}s"
    raise SubmissionTimeoutError(msg)
