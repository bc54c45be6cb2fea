"""Rejection of placeholder and empty values.

Models often answer "N/A" or "Not found" instead of null. Such values, and
values with no alphanumeric content, are downgraded to None. A rejection is
an audit event, never an exception.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING

from policyextract.core.types import FieldKind


if TYPE_CHECKING:
    from collections.abc import Mapping

    from policyextract.core.events import EventSink
    from policyextract.core.models import FieldSpec, PlanSchema


logger = logging.getLogger(__name__)

HALLUCINATION_VALUES = frozenset(
    {
        "not found",
        "not present",
        "n/a",
        "na",
        "n.a.",
        "unknown",
        "not applicable",
        "pending",
        "tbd",
        "tba",
        "not specified",
        "not mentioned",
        "not available",
        "not stated",
        "not provided",
        "not given",
        "no data",
        "no information",
        "none",
        "null",
        "undefined",
    }
)

_CITATION = re.compile(r"【[^】]*】|\[\d+(?:[,:\-]\s*\d+)*\]")
_ALNUM = re.compile(r"[^\W_]")
_NUMBER = re.compile(r"[^\d.]")


def strip_citations(value: str) -> str:
    """Remove bracketed source markers and trim."""
    previous = None
    while previous != value:
        previous = value
        value = _CITATION.sub("", value)
    return value.strip()


def rejection_reason(value: str) -> str | None:
    """Return why a cleaned value must be discarded, or None to keep it."""
    if not value:
        return "empty"
    if value.casefold() in HALLUCINATION_VALUES:
        return "placeholder"
    if not _ALNUM.search(value):
        return "no alphanumeric content"
    return None


def check_field_rules(spec: FieldSpec, value: str) -> list[str]:
    """Return the constraints of ``spec`` that ``value`` violates."""
    rules = spec.validation
    if rules is None:
        return []
    violations = []
    if rules.pattern and not re.search(rules.pattern, value):
        violations.append("pattern")
    if rules.min_length is not None and len(value) < rules.min_length:
        violations.append("min_length")
    if rules.max_length is not None and len(value) > rules.max_length:
        violations.append("max_length")
    if spec.kind in (FieldKind.NUMBER, FieldKind.CURRENCY, FieldKind.PERCENTAGE) and (
        rules.min is not None or rules.max is not None
    ):
        try:
            number = float(_NUMBER.sub("", value))
        except ValueError:
            violations.append("numeric")
        else:
            if rules.min is not None and number < rules.min:
                violations.append("min")
            if rules.max is not None and number > rules.max:
                violations.append("max")
    return violations


def validate(
    values: Mapping[str, str | None],
    sink: EventSink | None = None,
    schema: PlanSchema | None = None,
) -> dict[str, str | None]:
    """Return a cleaned copy of ``values``.

    Applying the function to its own output changes nothing.
    """
    cleaned: dict[str, str | None] = {}
    for field, value in values.items():
        if value is None:
            cleaned[field] = None
            continue
        text = strip_citations(value)
        reason = rejection_reason(text)
        if reason is not None:
            logger.debug("Rejected %s=%r (%s)", field, value, reason)
            if sink is not None:
                sink.record("value_rejected", {"field": field, "value": value, "reason": reason})
            cleaned[field] = None
            continue
        cleaned[field] = text

        spec = schema.get(field) if schema is not None else None
        if spec is not None and sink is not None:
            violations = check_field_rules(spec, text)
            if violations:
                sink.record(
                    "field_rule_violation",
                    {"field": field, "value": text, "rules": violations},
                )
    return cleaned
