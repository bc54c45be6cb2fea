"""Tests for raw response parsing."""

from __future__ import annotations

import json
from types import SimpleNamespace

import pytest

from policyextract.core.errors import MalformedOutputError, ResponseShapeError
from policyextract.pipeline.parser import parse


PAYLOAD = {"Policy Number": "ALK-001", "Category": None}
TEXT = json.dumps(PAYLOAD)


def test_plain_string() -> None:
    assert parse(TEXT) == PAYLOAD


def test_fenced_string() -> None:
    assert parse(f"```json\n{TEXT}\n```") == PAYLOAD


def test_prose_wrapped_object() -> None:
    assert parse(f"Here are the fields you asked for:\n{TEXT}\nLet me know!") == PAYLOAD


def test_content_attribute() -> None:
    assert parse(SimpleNamespace(content=TEXT)) == PAYLOAD


def test_chat_completion_shape() -> None:
    raw = {"choices": [{"index": 0, "message": {"role": "assistant", "content": TEXT}}]}
    assert parse(raw) == PAYLOAD


def test_responses_api_shape() -> None:
    raw = {
        "id": "resp_1",
        "output": [
            {"type": "reasoning", "summary": []},
            {
                "type": "message",
                "role": "assistant",
                "content": [{"type": "output_text", "text": TEXT, "annotations": []}],
            },
        ],
    }
    assert parse(raw) == PAYLOAD


def test_assistants_thread_shape() -> None:
    raw = {"data": [{"role": "assistant", "content": [{"type": "text", "text": {"value": TEXT}}]}]}
    assert parse(raw) == PAYLOAD


def test_message_blocks_shape() -> None:
    raw = {"role": "assistant", "content": [{"type": "text", "text": TEXT}]}
    assert parse(raw) == PAYLOAD


def test_message_string_content() -> None:
    assert parse({"content": TEXT}) == PAYLOAD


@pytest.mark.parametrize("raw", [42, None, {"unrelated": 1}, {"choices": []}, SimpleNamespace()])
def test_unrecognized_shape(raw) -> None:
    with pytest.raises(ResponseShapeError):
        parse(raw)


def test_empty_payload() -> None:
    with pytest.raises(ResponseShapeError):
        parse("   ")


@pytest.mark.parametrize("text", ["no json here", "{not: valid", "{broken} and {more", "[1, 2]", '"text"'])
def test_malformed_output(text: str) -> None:
    with pytest.raises(MalformedOutputError):
        parse(text)


def test_parse_errors_carry_stage() -> None:
    with pytest.raises(MalformedOutputError) as exc_info:
        parse("nothing")
    assert exc_info.value.stage.value == "parsing"
    assert str(exc_info.value).startswith("[parsing]")
