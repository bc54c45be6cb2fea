"""Tests for data models."""

from __future__ import annotations

import json
from datetime import datetime
from enum import Enum

import pytest
from pydantic import ValidationError

from policyextract.core import types
from policyextract.core.models import ExtractionResult, FieldSpec, LogEntry, PlanSchema
from policyextract.core.types import FieldKind, RunStatus


def test_result_round_trip_preserves_absent() -> None:
    result = ExtractionResult(
        source="a.pdf", values={"Policy Number": "ALK-001", "Category": None, "Plan": ""}
    )
    text = result.to_json()
    assert json.loads(text) == {"Policy Number": "ALK-001", "Category": None, "Plan": ""}
    restored = ExtractionResult.from_json(text, source="a.pdf")
    assert restored.values == result.values
    assert restored.missing == ["Category"]
    assert restored.found == ["Policy Number", "Plan"]


def test_from_json_requires_object() -> None:
    with pytest.raises(ValueError, match="object"):
        ExtractionResult.from_json("[1, 2]")


def test_result_is_frozen() -> None:
    result = ExtractionResult(source="a.pdf", values={})
    with pytest.raises(ValidationError):
        result.source = "b.pdf"


def test_result_values_are_read_only() -> None:
    source = {"Policy Number": "ALK-001"}
    result = ExtractionResult(source="a.pdf", values=source)
    source["Policy Number"] = "changed"
    assert result.get("Policy Number") == "ALK-001"
    with pytest.raises(TypeError):
        result.values["Policy Number"] = "ALK-002"  # type: ignore[index]
    with pytest.raises(TypeError):
        ExtractionResult(source="b.pdf").values["x"] = None  # type: ignore[index]
    assert result.model_dump()["values"] == {"Policy Number": "ALK-001"}


def test_core_types_are_enums() -> None:
    public = {k: v for k, v in vars(types).items() if not k.startswith("_") and k[0].isupper()}
    assert public
    assert all(isinstance(v, type) and issubclass(v, Enum) for v in public.values())


def test_plan_schema_helpers() -> None:
    schema = PlanSchema(
        plan="X",
        fields=(
            FieldSpec(name="A", required=True, hints=("alpha",)),
            FieldSpec(name="B", kind=FieldKind.CURRENCY),
        ),
    )
    assert schema.field_names == ["A", "B"]
    assert schema.required_fields == ["A"]
    assert schema.optional_fields == ["B"]
    assert schema.hints == {"A": ["alpha"]}
    assert schema.get("B").kind == FieldKind.CURRENCY
    assert schema.get("C") is None


def test_from_names() -> None:
    schema = PlanSchema.from_names("Y", ["One", "Two"])
    assert schema.field_names == ["One", "Two"]
    assert all(not f.required for f in schema.fields)


def test_log_entry_line() -> None:
    entry = LogEntry(
        id=1,
        created_at=datetime(2024, 5, 1, 10, 30),
        status=RunStatus.ERROR,
        source="policy.pdf",
        details="[parsing] bad",
    )
    assert entry.format_line() == "[2024-05-01T10:30:00] ERROR - policy.pdf - [parsing] bad"
    assert entry.model_copy(update={"details": None}).format_line().endswith("ERROR - policy.pdf")
