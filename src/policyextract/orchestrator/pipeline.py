"""Pipeline orchestrator for the extraction system."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING

from policyextract.config.fields import as_plan, get_plan_schema, plan_key
from policyextract.config.settings import Settings
from policyextract.core.errors import ConfigurationError, ExtractionError
from policyextract.core.events import LoggingSink
from policyextract.core.models import Document, ExtractionResult, FieldSpec, PlanSchema
from policyextract.core.submitter import DocumentSubmitter, submit_with_deadline
from policyextract.core.types import ComparisonStatus, PayerPlan
from policyextract.pipeline import build, compare, normalize, parse, post_process, validate
from policyextract.tools.pdf import PDFTool


if TYPE_CHECKING:
    from collections.abc import Sequence

    from policyextract.core.events import EventSink
    from policyextract.core.models import ComparisonReport
    from policyextract.storage.repository import PayerRepository

logger = logging.getLogger(__name__)

DocumentSource = str | Path | Document


def _plan_name(plan: PayerPlan | str | None) -> str:
    if plan is None:
        return PayerPlan.CUSTOM.value
    return plan_key(plan)


def _with_static_specs(plan: str, names: Sequence[str]) -> PlanSchema:
    """Build a schema for ``names``, reusing static specs where names match."""
    member = as_plan(plan)
    static = get_plan_schema(member) if member is not None else None
    specs = []
    for name in names:
        spec = static.get(name) if static is not None else None
        specs.append(spec if spec is not None else FieldSpec(name=name))
    return PlanSchema(plan=plan, fields=tuple(specs))


def resolve_fields(
    plan: PayerPlan | str | None,
    override_fields: Sequence[str] | None = None,
    store: PayerRepository | None = None,
) -> PlanSchema:
    """Resolve the schema used for one extraction.

    Order: explicit field list, then a stored override for the plan name,
    then the static plan table.

    Raises:
        ConfigurationError: No source yields a non-empty field list.
    """
    name = _plan_name(plan)
    if override_fields:
        names = [f.strip() for f in override_fields if f.strip()]
        if names:
            logger.debug("Using %d explicit fields for %s", len(names), name)
            return _with_static_specs(name, names)
    if store is not None:
        stored = store.get_fields(name)
        if stored:
            logger.debug("Using %d stored fields for %s", len(stored), name)
            return _with_static_specs(name, stored)
    member = as_plan(name)
    if member is not None:
        schema = get_plan_schema(member)
        if schema.fields:
            return schema
    msg = f"No fields configured for plan {name}"
    raise ConfigurationError(msg)


class Pipeline:
    """Orchestrates extraction and comparison runs."""

    def __init__(
        self,
        settings: Settings | None = None,
        mock: bool = False,
        submitter: DocumentSubmitter | None = None,
        repository: PayerRepository | None = None,
        sink: EventSink | None = None,
    ) -> None:
        if settings is None:
            settings = Settings()
        self.settings = settings
        self._submitter = submitter if submitter is not None else DocumentSubmitter.create(settings, mock=mock)
        self._repository = repository
        self._sink: EventSink = sink if sink is not None else LoggingSink()
        self._pdf = PDFTool()

    def resolve_schema(
        self, plan: PayerPlan | str | None, fields: Sequence[str] | None = None
    ) -> PlanSchema:
        return resolve_fields(plan, fields, self._repository)

    def load(self, source: DocumentSource) -> Document:
        if isinstance(source, Document):
            return source
        return self._pdf.load(source)

    async def extract(
        self,
        source: DocumentSource,
        plan: PayerPlan | str | None = None,
        fields: Sequence[str] | None = None,
        cancel: asyncio.Event | None = None,
    ) -> ExtractionResult:
        """Run one extraction on a PDF path or a loaded document."""
        source_name = source.name if isinstance(source, Document) else Path(source).name
        plan_name = _plan_name(plan)
        self._sink.record("extraction_started", {"source": source_name, "plan": plan_name})
        try:
            schema = self.resolve_schema(plan, fields)
            return await self._run(source, schema, cancel)
        except ExtractionError as e:
            self._sink.record(
                "extraction_failed",
                {"source": source_name, "plan": plan_name, "stage": e.stage.value, "details": e.message},
            )
            raise
        except asyncio.CancelledError:
            self._sink.record(
                "extraction_failed",
                {"source": source_name, "plan": plan_name, "stage": "upload", "details": "cancelled"},
            )
            raise

    async def _run(
        self, source: DocumentSource, schema: PlanSchema, cancel: asyncio.Event | None
    ) -> ExtractionResult:
        start_time = time.time()
        document = self.load(source)
        logger.info("Extracting %d fields from %s (%s)", len(schema.fields), document.name, schema.plan)

        prompt = build(schema.field_names, schema.hints, schema.plan)
        raw = await submit_with_deadline(
            self._submitter,
            document,
            prompt,
            timeout=self.settings.extraction.timeout_seconds,
            cancel=cancel,
        )

        values = normalize(parse(raw), schema.field_names)
        values = validate(values, sink=self._sink, schema=schema)
        values = post_process(values, schema.plan, currency=self.settings.extraction.currency)
        result = ExtractionResult(source=document.name, plan=schema.plan, values=values)

        elapsed = time.time() - start_time
        self._sink.record(
            "extraction_succeeded",
            {
                "source": document.name,
                "plan": schema.plan,
                "details": f"{len(result.found)}/{len(values)} fields found in {elapsed:.1f}s",
            },
        )
        logger.info("Extraction of %s complete in %.1fs", document.name, elapsed)
        return result

    async def compare(
        self,
        left: DocumentSource,
        right: DocumentSource,
        plan: PayerPlan | str | None = None,
        fields: Sequence[str] | None = None,
        cancel: asyncio.Event | None = None,
    ) -> ComparisonReport:
        """Extract two documents concurrently and compare them field by field.

        If either extraction fails, the other is cancelled and the error is
        raised. No partial report is produced.
        """
        schema = self.resolve_schema(plan, fields)
        names = schema.field_names
        tasks = [
            asyncio.ensure_future(self.extract(left, schema.plan, names, cancel)),
            asyncio.ensure_future(self.extract(right, schema.plan, names, cancel)),
        ]
        try:
            done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            raise

        errors = [e for e in (t.exception() for t in tasks if t in done) if e is not None]
        if errors:
            for task in pending:
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
            logger.error("Comparison aborted: %s", errors[0])
            raise errors[0]

        left_result, right_result = tasks[0].result(), tasks[1].result()
        report = compare(names, left_result, right_result)
        self._sink.record(
            "comparison_completed",
            {
                "left": left_result.source,
                "right": right_result.source,
                "plan": schema.plan,
                "different": report.count(ComparisonStatus.DIFFERENT),
            },
        )
        return report
