"""Per-field comparison of two extraction results."""

from __future__ import annotations

from typing import TYPE_CHECKING

from policyextract.core.models import ComparisonRecord, ComparisonReport, ExtractionResult
from policyextract.core.types import ComparisonStatus


if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence


def classify(left: str | None, right: str | None) -> ComparisonStatus:
    if left is None and right is None:
        return ComparisonStatus.BOTH_ABSENT
    if left == right:
        return ComparisonStatus.SAME
    return ComparisonStatus.DIFFERENT


def _values(result: ExtractionResult | Mapping[str, str | None]) -> Mapping[str, str | None]:
    return result.values if isinstance(result, ExtractionResult) else result


def compare(
    fields: Sequence[str],
    left: ExtractionResult | Mapping[str, str | None],
    right: ExtractionResult | Mapping[str, str | None],
) -> ComparisonReport:
    """Classify every field in ``fields`` order.

    Values are compared as exact strings. Callers wanting looser matching
    must normalize both sides first.
    """
    left_values, right_values = _values(left), _values(right)
    records = tuple(
        ComparisonRecord(
            field=name,
            left=left_values.get(name),
            right=right_values.get(name),
            status=classify(left_values.get(name), right_values.get(name)),
        )
        for name in fields
    )
    return ComparisonReport(
        records=records,
        left_source=left.source if isinstance(left, ExtractionResult) else "",
        right_source=right.source if isinstance(right, ExtractionResult) else "",
    )
