"""Tests for field normalization."""

from __future__ import annotations

import pytest

from policyextract.config.fields import PLAN_SCHEMAS
from policyextract.core.types import PayerPlan
from policyextract.pipeline.normalizer import normalize


@pytest.mark.parametrize("plan", [PayerPlan.QLM, PayerPlan.ALKOOT])
@pytest.mark.parametrize(
    "parsed",
    [
        {},
        {"Policy Number": "ALK-001", "Extra": "dropped"},
        {"Insured": 42, "Plan": ["a"], "Policy No": {"x": 1}},
        {"Unrelated": "only"},
    ],
)
def test_key_set_matches_schema(plan: PayerPlan, parsed: dict) -> None:
    names = PLAN_SCHEMAS[plan].field_names
    assert list(normalize(parsed, names)) == names


def test_copies_strings_and_absents_the_rest() -> None:
    values = normalize(
        {"A": "x", "B": 5, "C": None, "D": True, "Z": "ignored"}, ["A", "B", "C", "D", "E"]
    )
    assert values == {"A": "x", "B": None, "C": None, "D": None, "E": None}


def test_empty_string_is_kept_for_the_validator() -> None:
    assert normalize({"A": ""}, ["A"]) == {"A": ""}


def test_follows_field_order() -> None:
    assert list(normalize({"b": "1", "a": "2"}, ["a", "b"])) == ["a", "b"]
