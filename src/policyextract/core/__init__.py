"""Core module - Models, errors, events and submission."""

from __future__ import annotations

from policyextract.core.errors import (
    ConfigurationError,
    DocumentLoadError,
    ExtractionError,
    MalformedOutputError,
    ResponseShapeError,
    SubmissionCancelledError,
    SubmissionError,
    SubmissionTimeoutError,
)
from policyextract.core.events import CompositeSink, EventSink, LoggingSink, MemorySink, NullSink
from policyextract.core.models import (
    ComparisonRecord,
    ComparisonReport,
    Document,
    ExtractionResult,
    FieldSpec,
    FieldValidation,
    LogEntry,
    PlanSchema,
)
from policyextract.core.types import (
    ComparisonStatus,
    ExtractionStage,
    FieldKind,
    PayerPlan,
    RunStatus,
)
from policyextract.core.utils import extract_json_from_response


__all__ = [
    # Events
    "CompositeSink",
    # Models
    "ComparisonRecord",
    "ComparisonReport",
    # Types
    "ComparisonStatus",
    # Errors
    "ConfigurationError",
    "Document",
    "DocumentLoadError",
    "EventSink",
    "ExtractionError",
    "ExtractionResult",
    "ExtractionStage",
    "FieldKind",
    "FieldSpec",
    "FieldValidation",
    "LogEntry",
    "LoggingSink",
    "MalformedOutputError",
    "MemorySink",
    "NullSink",
    "PayerPlan",
    "PlanSchema",
    "ResponseShapeError",
    "RunStatus",
    "SubmissionCancelledError",
    "SubmissionError",
    "SubmissionTimeoutError",
    # Utils
    "extract_json_from_response",
]
