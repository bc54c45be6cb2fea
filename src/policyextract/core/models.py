"""Data models for the extraction system."""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, Field, field_serializer, field_validator

from policyextract.core.types import (  # noqa: TC001 - Pydantic needs at runtime
    ComparisonStatus,
    FieldKind,
    RunStatus,
)


class FieldValidation(BaseModel):
    """Optional value constraints for a field."""
    pattern: str | None = None
    min_length: int | None = None
    max_length: int | None = None
    min: float | None = None
    max: float | None = None

    model_config = {"frozen": True}


class FieldSpec(BaseModel):
    """Schema entry for one extractable field."""
    name: str
    required: bool = False
    kind: FieldKind = FieldKind.TEXT
    description: str = ""
    validation: FieldValidation | None = None
    hints: tuple[str, ...] = ()
    examples: tuple[str, ...] = ()

    model_config = {"frozen": True}


class PlanSchema(BaseModel):
    """Ordered field set for one payer plan."""
    plan: str
    fields: tuple[FieldSpec, ...] = ()

    model_config = {"frozen": True}

    @property
    def field_names(self) -> list[str]:
        return [f.name for f in self.fields]

    @property
    def required_fields(self) -> list[str]:
        return [f.name for f in self.fields if f.required]

    @property
    def optional_fields(self) -> list[str]:
        return [f.name for f in self.fields if not f.required]

    @property
    def hints(self) -> dict[str, list[str]]:
        return {f.name: list(f.hints) for f in self.fields if f.hints}

    def get(self, name: str) -> FieldSpec | None:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    @classmethod
    def from_names(cls, plan: str, names: list[str]) -> PlanSchema:
        """Build a bare schema from a list of field names."""
        return cls(plan=plan, fields=tuple(FieldSpec(name=n) for n in names))


class Document(BaseModel):
    """A loaded PDF document."""
    name: str
    data: bytes
    page_count: int = 0
    text: str = ""

    model_config = {"frozen": True}


class ExtractionResult(BaseModel):
    """Field values extracted from one document against one schema.

    ``None`` marks a field that is absent or could not be determined; it is
    never replaced by an empty string.
    """
    source: str
    plan: str | None = None
    values: Mapping[str, str | None] = Field(default_factory=dict, validate_default=True)
    extracted_at: datetime = Field(default_factory=datetime.now)

    model_config = {"frozen": True}

    @field_validator("values", mode="after")
    @classmethod
    def freeze_values(cls, values: Mapping[str, str | None]) -> Mapping[str, str | None]:
        return MappingProxyType(dict(values))

    @field_serializer("values")
    def serialize_values(self, values: Mapping[str, str | None]) -> dict[str, str | None]:
        return dict(values)

    @property
    def field_names(self) -> list[str]:
        return list(self.values)

    @property
    def found(self) -> list[str]:
        return [k for k, v in self.values.items() if v is not None]

    @property
    def missing(self) -> list[str]:
        return [k for k, v in self.values.items() if v is None]

    def get(self, field: str) -> str | None:
        return self.values.get(field)

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize the values as a flat JSON object."""
        return json.dumps(dict(self.values), indent=indent, ensure_ascii=False)

    @classmethod
    def from_json(cls, text: str, source: str = "", plan: str | None = None) -> ExtractionResult:
        data = json.loads(text)
        if not isinstance(data, dict):
            msg = "Extraction JSON must be an object"
            raise ValueError(msg)
        values = {str(k): (None if v is None else str(v)) for k, v in data.items()}
        return cls(source=source, plan=plan, values=values)


class ComparisonRecord(BaseModel):
    """Agreement of one field across two extraction results."""
    field: str
    left: str | None = None
    right: str | None = None
    status: ComparisonStatus

    model_config = {"frozen": True}

    def to_dict(self) -> dict[str, Any]:
        return {
            "field": self.field,
            "file1Value": self.left,
            "file2Value": self.right,
            "status": self.status.value,
        }


class ComparisonReport(BaseModel):
    """Per-field comparison of two documents, in schema order."""
    records: tuple[ComparisonRecord, ...] = ()
    left_source: str = ""
    right_source: str = ""
    generated_at: datetime = Field(default_factory=datetime.now)

    model_config = {"frozen": True}

    @property
    def field_names(self) -> list[str]:
        return [r.field for r in self.records]

    def count(self, status: ComparisonStatus) -> int:
        return sum(1 for r in self.records if r.status == status)

    def to_list(self) -> list[dict[str, Any]]:
        return [r.to_dict() for r in self.records]

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_list(), indent=indent, ensure_ascii=False)

    def to_template_data(self) -> dict[str, Any]:
        """Convert to data for HTML template."""
        return {
            "left_source": self.left_source,
            "right_source": self.right_source,
            "generated_at": self.generated_at.strftime("%Y-%m-%d %H:%M:%S"),
            "total": len(self.records),
            "same": self.count(ComparisonStatus.SAME),
            "different": self.count(ComparisonStatus.DIFFERENT),
            "missing": self.count(ComparisonStatus.BOTH_ABSENT),
            "records": self.to_list(),
        }


class LogEntry(BaseModel):
    """One row of the extraction audit log."""
    id: int
    created_at: datetime
    status: RunStatus
    source: str
    plan: str | None = None
    details: str | None = None

    model_config = {"frozen": True}

    def format_line(self) -> str:
        """Render as ``[timestamp] STATUS - source - details``."""
        line = f"[{self.created_at.isoformat()}] {self.status.value.upper()} - {self.source}"
        return f"{line} - {self.details}" if self.details else line
