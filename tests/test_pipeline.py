"""Tests for the pipeline orchestrator."""

from __future__ import annotations

import asyncio
import json
import time

import pytest

from policyextract.config.settings import ExtractionSettings, Settings
from policyextract.core.errors import (
    ConfigurationError,
    MalformedOutputError,
    SubmissionError,
    SubmissionTimeoutError,
)
from policyextract.core.mock_submitter import MockSubmitter
from policyextract.core.models import Document
from policyextract.core.submitter import DocumentSubmitter
from policyextract.core.types import ComparisonStatus, RunStatus
from policyextract.orchestrator.pipeline import Pipeline
from policyextract.storage.repository import RepositorySink


class StaticSubmitter(DocumentSubmitter):
    name = "static"

    def __init__(self, raw) -> None:
        self.raw = raw

    async def submit(self, document, prompt, cancel=None):
        return self.raw


class SplitSubmitter(DocumentSubmitter):
    """Fails for ``bad.pdf`` and hangs for everything else."""

    name = "split"

    def __init__(self) -> None:
        self.slow_cancelled = False

    async def submit(self, document, prompt, cancel=None):
        if document.name == "bad.pdf":
            raise RuntimeError("upload refused")
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            self.slow_cancelled = True
            raise
        return "{}"


def _doc(name: str, text: str) -> Document:
    return Document(name=name, data=b"%PDF-1.4", page_count=1, text=text)


def test_extract_alkoot(settings, sink, alkoot_document, alkoot_schema) -> None:
    pipeline = Pipeline(settings, submitter=MockSubmitter(), sink=sink)
    result = asyncio.run(pipeline.extract(alkoot_document, "ALKOOT"))

    assert result.field_names == alkoot_schema.field_names
    assert result.plan == "ALKOOT"
    assert result.source == "alkoot.pdf"
    assert result.get("Policy Number") == "ALK-001"
    assert result.get("Category") == "Employee"
    assert result.get("Co-insurance on all inpatient treatment") == "20%"
    assert result.get("Deductible on consultation") == "QAR 50"
    assert result.get("Dental Benefit") == "QAR 500 per year"
    assert result.get("Pregnancy & Childbirth") is None
    assert result.get("Expiry Date") is None

    events = [name for name, _ in sink.events]
    assert events[0] == "extraction_started"
    assert events[-1] == "extraction_succeeded"
    assert [e["field"] for e in sink.of_type("value_rejected")] == ["Pregnancy & Childbirth"]


def test_extract_explicit_fields(settings, sink, alkoot_document) -> None:
    pipeline = Pipeline(settings, submitter=MockSubmitter(), sink=sink)
    result = asyncio.run(pipeline.extract(alkoot_document, fields=["Category", "Region"]))
    assert result.values == {"Category": "Employee", "Region": None}
    assert result.plan == "CUSTOM"


def test_extract_stored_plan(settings, sink, repository, alkoot_document) -> None:
    repository.set_fields("Daman", ["Policy Number", "Network"])
    pipeline = Pipeline(settings, submitter=MockSubmitter(), repository=repository, sink=sink)
    result = asyncio.run(pipeline.extract(alkoot_document, "Daman"))
    assert result.values == {"Policy Number": "ALK-001", "Network": None}


def test_configuration_failure_is_recorded(settings, sink, alkoot_document) -> None:
    pipeline = Pipeline(settings, submitter=MockSubmitter(), sink=sink)
    with pytest.raises(ConfigurationError):
        asyncio.run(pipeline.extract(alkoot_document, "UNKNOWN"))
    failed = sink.of_type("extraction_failed")
    assert failed[0]["stage"] == "configuration"
    assert failed[0]["source"] == "alkoot.pdf"


def test_malformed_response(settings, sink, alkoot_document) -> None:
    pipeline = Pipeline(settings, submitter=StaticSubmitter("I could not read the file."), sink=sink)
    with pytest.raises(MalformedOutputError):
        asyncio.run(pipeline.extract(alkoot_document, "QLM"))
    assert sink.of_type("extraction_failed")[0]["stage"] == "parsing"


def test_response_envelopes_are_parsed(settings, sink, alkoot_document) -> None:
    raw = {"content": [{"type": "text", "text": json.dumps({"Plan": "Premium", "Bogus": "x"})}]}
    pipeline = Pipeline(settings, submitter=StaticSubmitter(raw), sink=sink)
    result = asyncio.run(pipeline.extract(alkoot_document, "QLM"))
    assert result.get("Plan") == "Premium"
    assert "Bogus" not in result.values
    assert len(result.values) == 12


def test_timeout_from_settings(sink, alkoot_document) -> None:
    settings = Settings(extraction=ExtractionSettings(timeout_seconds=0.05))
    pipeline = Pipeline(settings, submitter=MockSubmitter(delay=5), sink=sink)
    with pytest.raises(SubmissionTimeoutError):
        asyncio.run(pipeline.extract(alkoot_document, "ALKOOT"))
    assert sink.of_type("extraction_failed")[0]["stage"] == "upload"


def test_compare(settings, sink) -> None:
    left = _doc("a.pdf", "Policy Number: ALK-001\nCategory: Employee\n")
    right = _doc("b.pdf", "Policy Number: ALK-001\nCategory: Dependent\n")
    pipeline = Pipeline(settings, submitter=MockSubmitter(), sink=sink)
    report = asyncio.run(pipeline.compare(left, right, "ALKOOT"))

    by_field = {r.field: r for r in report.records}
    assert report.field_names[:2] == ["Policy Number", "Category"]
    assert by_field["Policy Number"].status == ComparisonStatus.SAME
    assert by_field["Category"].status == ComparisonStatus.DIFFERENT
    assert by_field["Effective Date"].status == ComparisonStatus.BOTH_ABSENT
    assert (report.left_source, report.right_source) == ("a.pdf", "b.pdf")
    assert sink.of_type("comparison_completed")[0]["different"] == 1


def test_compare_runs_concurrently(settings, sink) -> None:
    pipeline = Pipeline(settings, submitter=MockSubmitter(delay=0.3), sink=sink)
    start = time.monotonic()
    asyncio.run(pipeline.compare(_doc("a.pdf", ""), _doc("b.pdf", ""), "QLM"))
    assert time.monotonic() - start < 0.55


def test_compare_failure_cancels_other_side(settings, sink) -> None:
    submitter = SplitSubmitter()
    pipeline = Pipeline(settings, submitter=submitter, sink=sink)
    start = time.monotonic()
    with pytest.raises(SubmissionError, match="upload refused"):
        asyncio.run(pipeline.compare(_doc("good.pdf", ""), _doc("bad.pdf", ""), "QLM"))
    assert time.monotonic() - start < 5
    assert submitter.slow_cancelled
    sources = {e["source"] for e in sink.of_type("extraction_failed")}
    assert sources == {"good.pdf", "bad.pdf"}


def test_extract_from_pdf_with_log(settings, repository, make_pdf) -> None:
    path = make_pdf("policy.pdf", ["Policy Number: ALK-777", "Category: Senior"])
    pipeline = Pipeline(
        settings, submitter=MockSubmitter(), repository=repository, sink=RepositorySink(repository)
    )
    result = asyncio.run(pipeline.extract(path, "ALKOOT"))
    assert result.get("Policy Number") == "ALK-777"
    assert result.get("Category") == "Senior"

    logs = repository.recent_logs()
    assert [e.status for e in logs] == [RunStatus.SUCCESS, RunStatus.STARTED]
    assert logs[0].source == "policy.pdf"
    assert logs[0].plan == "ALKOOT"


def test_missing_pdf_is_logged_as_error(settings, repository) -> None:
    pipeline = Pipeline(
        settings, submitter=MockSubmitter(), repository=repository, sink=RepositorySink(repository)
    )
    with pytest.raises(Exception, match="not found"):
        asyncio.run(pipeline.extract("/nonexistent/policy.pdf", "QLM"))
    assert repository.recent_logs(status=RunStatus.ERROR)[0].source == "policy.pdf"
