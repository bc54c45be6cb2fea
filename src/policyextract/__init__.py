"""policyExtract - Insurance policy field extraction and comparison.

This package provides a pipeline for:
- Building extraction prompts from payer plan schemas
- Submitting policy PDFs to a language model
- Parsing, normalizing and validating the returned fields
- Applying payer-specific post-processing
- Comparing the field sets of two documents
"""

from __future__ import annotations

from policyextract.config.settings import Settings
from policyextract.core.errors import (
    ConfigurationError,
    ExtractionError,
    MalformedOutputError,
    ResponseShapeError,
    SubmissionError,
    SubmissionTimeoutError,
)
from policyextract.core.models import (
    ComparisonRecord,
    ComparisonReport,
    ExtractionResult,
    FieldSpec,
    PlanSchema,
)
from policyextract.core.types import ComparisonStatus, PayerPlan
from policyextract.orchestrator.pipeline import Pipeline, resolve_fields


__version__ = "0.1.0"

__all__ = [
    "ComparisonRecord",
    "ComparisonReport",
    "ComparisonStatus",
    "ConfigurationError",
    "ExtractionError",
    "ExtractionResult",
    "FieldSpec",
    "MalformedOutputError",
    "PayerPlan",
    "Pipeline",
    "PlanSchema",
    "ResponseShapeError",
    "Settings",
    "SubmissionError",
    "SubmissionTimeoutError",
    "resolve_fields",
]
