"""Raw model response parsing.

Providers return very different envelopes: a plain string, an SDK object
with a ``content`` attribute, or dumped JSON from the chat completions,
responses, assistants or messages APIs. The parser finds the first textual
payload and decodes it into a JSON object.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from policyextract.core.errors import MalformedOutputError, ResponseShapeError
from policyextract.core.utils import extract_json_from_response, outermost_object_span


logger = logging.getLogger(__name__)


def _text_from_blocks(blocks: Any) -> str | None:
    if isinstance(blocks, str):
        return blocks
    if not isinstance(blocks, list):
        return None
    for block in blocks:
        if isinstance(block, str):
            return block
        if not isinstance(block, Mapping):
            continue
        text = block.get("text")
        if isinstance(text, str):
            return text
        # Assistants API nests the string one level deeper.
        if isinstance(text, Mapping) and isinstance(text.get("value"), str):
            return text["value"]
    return None


def _chat_completion(raw: Mapping[str, Any]) -> str | None:
    choices = raw.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    message = first.get("message") if isinstance(first, Mapping) else None
    if not isinstance(message, Mapping):
        return None
    return _text_from_blocks(message.get("content"))


def _responses_output(raw: Mapping[str, Any]) -> str | None:
    output = raw.get("output")
    if isinstance(output, str):
        return output
    if not isinstance(output, list):
        return None
    for item in output:
        if isinstance(item, Mapping) and item.get("type") == "message":
            text = _text_from_blocks(item.get("content"))
            if text is not None:
                return text
    return None


def _thread_messages(raw: Mapping[str, Any]) -> str | None:
    data = raw.get("data")
    if not isinstance(data, list) or not data:
        return None
    first = data[0]
    if not isinstance(first, Mapping):
        return None
    return _text_from_blocks(first.get("content"))


def _message_blocks(raw: Mapping[str, Any]) -> str | None:
    return _text_from_blocks(raw.get("content"))


_SHAPES = (_chat_completion, _responses_output, _thread_messages, _message_blocks)


def extract_payload(raw: Any) -> str:
    """Return the first textual payload of a raw response.

    Raises:
        ResponseShapeError: No shape matched, or the payload is empty.
    """
    text: str | None = None
    if isinstance(raw, str):
        text = raw
    elif isinstance(raw, Mapping):
        for shape in _SHAPES:
            text = shape(raw)
            if text is not None:
                break
    elif isinstance(getattr(raw, "content", None), str):
        text = raw.content

    if text is None:
        msg = f"Unrecognized response shape: {type(raw).__name__}"
        raise ResponseShapeError(msg)
    if not text.strip():
        msg = "Response payload is empty"
        raise ResponseShapeError(msg)
    return text


def decode_object(text: str) -> dict[str, Any]:
    """Decode a JSON object, falling back to the outermost brace span.

    Raises:
        MalformedOutputError: Neither attempt yields a JSON object.
    """
    try:
        data = json.loads(extract_json_from_response(text))
    except json.JSONDecodeError:
        span = outermost_object_span(text)
        if span is None:
            msg = "No JSON object found in response"
            raise MalformedOutputError(msg) from None
        logger.debug("Direct decode failed, retrying with brace span")
        try:
            data = json.loads(span)
        except json.JSONDecodeError as e:
            msg = f"Invalid JSON in response: {e}"
            raise MalformedOutputError(msg) from e

    if not isinstance(data, dict):
        msg = f"Expected a JSON object, got {type(data).__name__}"
        raise MalformedOutputError(msg)
    return data


def parse(raw: Any) -> dict[str, Any]:
    """Parse a raw model response into a flat mapping."""
    return decode_object(extract_payload(raw))
