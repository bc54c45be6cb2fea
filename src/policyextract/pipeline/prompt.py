"""Extraction prompt construction."""

from __future__ import annotations

from typing import TYPE_CHECKING

from policyextract.core.errors import ConfigurationError
from policyextract.core.utils import and_variant


if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from policyextract.core.types import PayerPlan


PREAMBLE = """You are an insurance policy data extraction expert.
Extract ONLY what is explicitly present in the attached document. Never infer or
guess values that are not clearly stated."""

GLOBAL_RULES = """=== EXTRACTION RULES ===
1. Match each field name literally and exactly as written above. Do not substitute a
   similar-looking field.
2. Do not infer one field's value from another field.
3. If a field is not present, return null. Never return placeholder text such as
   "not found", "N/A" or "unknown" in place of null.
4. Preserve currency symbols and codes (e.g. QAR), percent signs and punctuation
   exactly as shown.
5. Remove citation markers such as 【4:2†source】 or [3] from values.
6. If a value spans several lines or table cell rows, join it into one continuous
   string.

=== OUTPUT FORMAT ===
Respond with a single flat JSON object whose keys are exactly the field names listed
above and whose values are strings or null. Return ONLY the JSON object, no prose and
no explanations."""


def _hint_lines(fields: Sequence[str], hints: Mapping[str, Sequence[str]] | None) -> list[str]:
    lines = []
    for name in fields:
        synonyms = list(hints.get(name) or ()) if hints else []
        variant = and_variant(name)
        if variant and variant not in synonyms:
            synonyms.append(variant)
        if synonyms:
            lines.append(f"- {name}: {', '.join(synonyms)}")
    return lines


def build(
    fields: Sequence[str],
    hints: Mapping[str, Sequence[str]] | None = None,
    plan: PayerPlan | str | None = None,
) -> str:
    """Build the extraction instruction for a field list.

    Args:
        fields: Field names, used verbatim as the required output keys.
        hints: Optional synonyms per field, offered for searching only.
        plan: Plan whose rule blocks are appended and which may suppress hints.

    Returns:
        The prompt text.

    Raises:
        ConfigurationError: If ``fields`` is empty.
    """
    if not fields:
        msg = "Cannot build an extraction prompt without fields"
        raise ConfigurationError(msg)

    suppress_hints = False
    blocks: tuple[str, ...] = ()
    if plan is not None:
        from policyextract.config.fields import get_plan_rules  # noqa: PLC0415

        rules = get_plan_rules(plan)
        suppress_hints = rules.suppress_hints
        blocks = rules.prompt_blocks

    sections = [
        PREAMBLE,
        "=== FIELDS TO EXTRACT (exact names) ===\n" + "\n".join(f"- {f}" for f in fields),
        GLOBAL_RULES,
    ]
    if not suppress_hints:
        lines = _hint_lines(fields, hints)
        if lines:
            sections.append(
                "=== FIELD SYNONYMS (search only; output keys must match exactly) ===\n"
                + "\n".join(lines)
            )
    sections.extend(blocks)
    return "\n\n".join(sections)
