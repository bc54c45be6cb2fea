"""Exception hierarchy for the extraction pipeline."""

from __future__ import annotations

from policyextract.core.types import ExtractionStage


class ExtractionError(Exception):
    """Base class for pipeline failures.

    Every error names the stage that failed so callers can report
    upload, parsing and configuration problems differently.
    """

    stage: ExtractionStage = ExtractionStage.VALIDATION

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"[{self.stage.value}] {self.message}"


class ConfigurationError(ExtractionError):
    """Missing credential or an empty/unknown field list."""

    stage = ExtractionStage.CONFIGURATION


class SubmissionError(ExtractionError):
    """The document submission adapter failed."""

    stage = ExtractionStage.UPLOAD


class SubmissionTimeoutError(SubmissionError, TimeoutError):
    """The submission did not complete before its deadline."""


class SubmissionCancelledError(SubmissionError):
    """The submission was cancelled through its cancellation token."""


class ResponseShapeError(ExtractionError):
    """The raw response carries no recognizable textual payload."""

    stage = ExtractionStage.PARSING


class MalformedOutputError(ExtractionError):
    """The payload could not be decoded into a JSON object."""

    stage = ExtractionStage.PARSING


class DocumentLoadError(ExtractionError):
    """The PDF could not be read."""

    stage = ExtractionStage.UPLOAD
