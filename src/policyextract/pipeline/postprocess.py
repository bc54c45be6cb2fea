"""Payer-specific post-processing of validated field values.

Each plan carries an ordered tuple of rules. A rule targets exactly one
field and rewrites its value by a small deterministic procedure. Rules read
the validated values as they were before post-processing started, so the
outcome does not depend on rule order.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from pydantic import BaseModel


if TYPE_CHECKING:
    from collections.abc import Mapping

    from policyextract.config.fields import PlanRules
    from policyextract.core.types import PayerPlan


logger = logging.getLogger(__name__)

_DATE_PATTERN = re.compile(
    r"\d{4}-\d{1,2}-\d{1,2}"
    r"|\d{1,2}[/.\-]\d{1,2}[/.\-]\d{2,4}"
    r"|\d{1,2}[-/. ][A-Za-z]{3,9}\.?[-/. ]\d{2,4}"
    r"|\d{1,2}(?:st|nd|rd|th)?\s+[A-Za-z]{3,9}\.?,?\s+\d{4}"
    r"|[A-Za-z]{3,9}\.?\s+\d{1,2}(?:st|nd|rd|th)?,?\s+\d{4}"
)
_PERIOD_SHAPE = re.compile(r"^\s*from\s+(?P<start>.+?)\s+to\s+(?P<end>.+?)\s*$", re.IGNORECASE)
_RANGE_SHAPE = re.compile(
    r"^\s*(?P<start>.*?\d.*?)\s+(?:to|until|till|-|\u2013)\s+(?P<end>.*?\d.*?)\s*$", re.IGNORECASE
)
_PERCENT = re.compile(r"(\d{1,3}(?:\.\d+)?)\s*%")
_AMOUNT = re.compile(r"\d[\d,]*(?:\.\d+)?")
_SPACES = re.compile(r"\s{2,}")


def _format_amount(raw: str) -> str:
    digits = raw.replace(",", "")
    if "." in digits:
        whole, _, frac = digits.partition(".")
        return f"{int(whole):,}.{frac}"
    return f"{int(digits):,}"


class PostRule(BaseModel, ABC):
    """Rewrite rule bound to a single field."""

    field: str

    model_config = {"frozen": True}

    @abstractmethod
    def apply(self, value: str | None, values: Mapping[str, str | None]) -> str | None:
        """Return the rewritten value for ``field``."""
        ...


class PeriodRule(PostRule):
    """Canonicalize a coverage period to ``From <start> To <end>``.

    ``default`` is substituted when neither two dates nor an ``X to Y`` range
    can be found. It is None in the shipped plan tables, so an unrecoverable
    period becomes absent.
    """

    default: str | None = None

    def apply(self, value: str | None, values: Mapping[str, str | None]) -> str | None:
        if value is None:
            return None
        shaped = _PERIOD_SHAPE.match(value)
        if shaped:
            return f"From {shaped.group('start')} To {shaped.group('end')}"
        dates = _DATE_PATTERN.findall(value)
        if len(dates) >= 2:
            return f"From {dates[0]} To {dates[1]}"
        ranged = _RANGE_SHAPE.match(value)
        if ranged:
            return f"From {ranged.group('start')} To {ranged.group('end')}"
        logger.debug("No date range in %r for %s", value, self.field)
        return self.default


class CurrencyRule(PostRule):
    """Canonicalize an amount to ``<CUR> 1,234`` or a percentage to ``N%``.

    A value already carrying the currency code keeps its amount and only has
    its spacing normalized. With ``percent_first`` (copayment fields) a
    percentage wins over the currency code.
    """

    currency: str = "QAR"
    default: str | None = None
    percent_first: bool = False
    keep_terms: tuple[str, ...] = ("nil", "none", "covered", "not covered", "waived", "free")

    def apply(self, value: str | None, values: Mapping[str, str | None]) -> str | None:
        if value is None:
            return None
        stripped = value.strip()
        lowered = stripped.lower()
        percent = _PERCENT.search(stripped)
        if percent and self.percent_first:
            return f"{percent.group(1)}%"
        if self.currency.lower() in lowered:
            return re.sub(
                rf"(?i)\b{re.escape(self.currency)}\s*(?=\d)", f"{self.currency} ", stripped
            )
        if percent:
            return f"{percent.group(1)}%"
        amount = _AMOUNT.search(stripped)
        if amount:
            return f"{self.currency} {_format_amount(amount.group(0))}"
        if lowered in self.keep_terms:
            return stripped
        logger.debug("No amount in %r for %s", value, self.field)
        return self.default


class CoverageRule(PostRule):
    """Collapse capped or limited benefit descriptions to ``Covered``."""

    keywords: tuple[str, ...] = ("session", "up to", "limit")
    token: str = "Covered"

    def apply(self, value: str | None, values: Mapping[str, str | None]) -> str | None:
        if value is None:
            return None
        lowered = value.lower()
        if lowered.strip().startswith("not covered"):
            return value
        if any(k in lowered for k in self.keywords):
            return self.token
        return value


class SpacingRule(PostRule):
    """Harmonize spacing around the currency prefix and percent signs."""

    currency: str = "QAR"

    def apply(self, value: str | None, values: Mapping[str, str | None]) -> str | None:
        if value is None:
            return None
        text = re.sub(rf"(?i)\b{re.escape(self.currency)}\s*(?=\d)", f"{self.currency} ", value)
        text = re.sub(r"(\d)\s+%", r"\1%", text)
        return _SPACES.sub(" ", text).strip()


class CoveragePercentRule(PostRule):
    """Express a provider benefit as ``N% covered``."""

    def apply(self, value: str | None, values: Mapping[str, str | None]) -> str | None:
        if value is None:
            return None
        lowered = value.lower().strip()
        if lowered.startswith("not covered"):
            return "Not covered"
        coinsurance = re.search(r"(\d{1,2})\s*%\s*(?:co-?insurance|co-?pay)", lowered)
        if coinsurance:
            return f"{100 - int(coinsurance.group(1))}% covered"
        percent = _PERCENT.search(value)
        if percent:
            return f"{percent.group(1)}% covered"
        if lowered == "covered" or re.search(r"\b(full|fully|all)\b", lowered):
            return "100% covered"
        return value


class ProviderSpecificRule(PostRule):
    """Reject provider-specific values that were copied from a general field.

    A bare percentage, or a value identical to one of ``sibling_fields``, is
    replaced by ``replacement`` unless it names the provider.
    """

    provider_terms: tuple[str, ...] = ()
    sibling_fields: tuple[str, ...] = ()
    replacement: str = "Not applicable"

    def apply(self, value: str | None, values: Mapping[str, str | None]) -> str | None:
        if value is None:
            return None
        lowered = value.lower()
        if any(term in lowered for term in self.provider_terms):
            return value
        if re.fullmatch(r"\s*\d{1,3}(?:\.\d+)?\s*%\s*", value):
            return self.replacement
        for sibling in self.sibling_fields:
            if values.get(sibling) is not None and values.get(sibling) == value:
                return self.replacement
        return value


def post_process(
    values: Mapping[str, str | None],
    plan: PayerPlan | str | PlanRules | None,
    currency: str | None = None,
) -> dict[str, str | None]:
    """Apply a plan's post rules and return a new mapping.

    Fields without a rule, and rules naming fields outside ``values``, are
    left alone so the key set never changes. ``currency`` replaces the
    currency code of rules that carry one.
    """
    if plan is None:
        return dict(values)
    if isinstance(plan, str):
        from policyextract.config.fields import get_plan_rules  # noqa: PLC0415

        rules = get_plan_rules(plan)
    else:
        rules = plan
    result = dict(values)
    for base in rules.post_rules:
        if base.field not in values:
            continue
        rule = base
        if currency and "currency" in type(base).model_fields:
            rule = base.model_copy(update={"currency": currency})
        before = values[rule.field]
        after = rule.apply(before, values)
        if after != before:
            logger.debug("%s: %r -> %r (%s)", rule.field, before, after, type(rule).__name__)
        result[rule.field] = after
    return result
