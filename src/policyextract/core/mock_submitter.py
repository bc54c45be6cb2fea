"""Mock submitter for running the pipeline without API keys."""

from __future__ import annotations

import asyncio
import json
import re
from typing import TYPE_CHECKING, Any

from policyextract.core.submitter import DocumentSubmitter


if TYPE_CHECKING:
    from policyextract.core.models import Document


_FIELD_SECTION = re.compile(r"=== FIELDS TO EXTRACT[^\n]*\n((?:- [^\n]*\n?)+)")


def requested_fields(prompt: str) -> list[str]:
    """Read the field names back out of an extraction prompt."""
    match = _FIELD_SECTION.search(prompt)
    if not match:
        return []
    return [line[2:].strip() for line in match.group(1).splitlines() if line.startswith("- ")]


class MockSubmitter(DocumentSubmitter):
    """Answers from ``Field: value`` lines in the document text.

    The reply mimics a chat completion whose content is a fenced JSON block,
    with null for every field the text does not mention.
    """

    name = "mock"

    def __init__(self, delay: float = 0.0) -> None:
        self.delay = delay
        self.calls = 0

    async def submit(
        self, document: Document, prompt: str, cancel: asyncio.Event | None = None
    ) -> Any:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        values: dict[str, str | None] = {}
        for name in requested_fields(prompt):
            match = re.search(
                rf"^\s*{re.escape(name)}\s*[:|]\s*(.+?)\s*$", document.text, re.MULTILINE | re.IGNORECASE
            )
            values[name] = match.group(1) if match else None
        content = f"```json\n{json.dumps(values, indent=2)}\n```"
        return {
            "id": f"mock-{self.calls}",
            "object": "chat.completion",
            "choices": [
                {"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}
            ],
        }
