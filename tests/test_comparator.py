"""Tests for the comparator."""

from __future__ import annotations

import json

import pytest

from policyextract.core.models import ExtractionResult
from policyextract.core.types import ComparisonStatus
from policyextract.pipeline.comparator import classify, compare


@pytest.mark.parametrize(
    ("left", "right", "status"),
    [
        ({"Policy Number": "ALK-001"}, {"Policy Number": "ALK-001"}, "same"),
        ({"Category": None}, {"Category": None}, "missing"),
        ({"Dental Benefit": "QAR 100"}, {"Dental Benefit": "QAR 200"}, "different"),
    ],
)
def test_documented_examples(left: dict, right: dict, status: str) -> None:
    fields = list(left)
    report = compare(fields, left, right)
    assert [r.to_dict()["status"] for r in report.records] == [status]
    assert report.to_list()[0]["field"] == fields[0]


def test_one_side_absent_is_different() -> None:
    assert classify("QAR 100", None) == ComparisonStatus.DIFFERENT
    assert classify(None, "QAR 100") == ComparisonStatus.DIFFERENT


def test_no_fuzzy_matching() -> None:
    assert classify("QAR 100", "QAR100") == ComparisonStatus.DIFFERENT
    assert classify("Covered", "covered") == ComparisonStatus.DIFFERENT


def test_empty_string_is_not_absent() -> None:
    assert classify("", None) == ComparisonStatus.DIFFERENT
    assert classify("", "") == ComparisonStatus.SAME


def test_swapping_inputs_swaps_values_and_keeps_status() -> None:
    fields = ["A", "B", "C", "D"]
    left = {"A": "1", "B": "2", "C": None, "D": None}
    right = {"A": "1", "B": "3", "C": None, "D": "4"}
    forward = compare(fields, left, right)
    backward = compare(fields, right, left)
    for f, b in zip(forward.records, backward.records, strict=True):
        assert f.status == b.status
        assert (f.left, f.right) == (b.right, b.left)


def test_report_follows_field_order_and_missing_keys() -> None:
    report = compare(["B", "A", "Z"], {"A": "x", "B": "y"}, {"B": "y", "A": "q"})
    assert report.field_names == ["B", "A", "Z"]
    assert [r.status for r in report.records] == [
        ComparisonStatus.SAME,
        ComparisonStatus.DIFFERENT,
        ComparisonStatus.BOTH_ABSENT,
    ]


def test_extraction_results_carry_sources() -> None:
    left = ExtractionResult(source="a.pdf", values={"A": "1"})
    right = ExtractionResult(source="b.pdf", values={"A": None})
    report = compare(["A"], left, right)
    assert (report.left_source, report.right_source) == ("a.pdf", "b.pdf")


def test_external_json_form() -> None:
    report = compare(["Category"], {"Category": None}, {"Category": "Employee"})
    assert json.loads(report.to_json()) == [
        {"field": "Category", "file1Value": None, "file2Value": "Employee", "status": "different"}
    ]
    assert report.count(ComparisonStatus.DIFFERENT) == 1
