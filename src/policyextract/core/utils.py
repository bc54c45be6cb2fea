"""Utility functions for the extraction system."""

from __future__ import annotations

import re


def extract_json_from_response(content: str) -> str:
    """Extract JSON string from LLM response content.

    Handles JSON wrapped in markdown code blocks (```json or ```)
    or plain JSON text.

    Args:
        content: LLM response content that may contain JSON.

    Returns:
        Extracted JSON string, stripped of markdown formatting.
    """
    json_match = re.search(r"```(?:json)?\s*([\s\S]*?)```", content)
    return json_match.group(1).strip() if json_match else content.strip()


def outermost_object_span(content: str) -> str | None:
    """Return the text from the first ``{`` to the last ``}``, if any."""
    start = content.find("{")
    end = content.rfind("}")
    if start == -1 or end <= start:
        return None
    return content[start : end + 1]


def and_variant(name: str) -> str | None:
    """Return the ``&``/``and`` spelling of a field name, if it has one."""
    if "&" in name:
        return re.sub(r"\s*&\s*", " and ", name)
    if re.search(r"\s+and\s+", name):
        return re.sub(r"\s+and\s+", " & ", name)
    return None
