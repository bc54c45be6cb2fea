"""Core type definitions and enums."""

from __future__ import annotations

from enum import Enum


class PayerPlan(str, Enum):
    """Payer plans with a known field table and rule set."""

    QLM = "QLM"
    ALKOOT = "ALKOOT"
    CUSTOM = "CUSTOM"


class FieldKind(str, Enum):
    """Value kinds a field may hold."""

    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    PERCENTAGE = "percentage"
    CURRENCY = "currency"


class ComparisonStatus(str, Enum):
    """Per-field agreement between two extraction results."""

    SAME = "same"
    DIFFERENT = "different"
    BOTH_ABSENT = "missing"


class ExtractionStage(str, Enum):
    """Pipeline stages a failure can be attributed to."""

    CONFIGURATION = "configuration"
    UPLOAD = "upload"
    PARSING = "parsing"
    VALIDATION = "validation"


class RunStatus(str, Enum):
    """Lifecycle states written to the extraction log."""

    STARTED = "started"
    SUCCESS = "success"
    ERROR = "error"
