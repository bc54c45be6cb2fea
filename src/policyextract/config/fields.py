"""Static payer plan tables.

Each plan pairs an ordered field schema with a rule set. Adding a plan is a
data change here: a ``PlanSchema`` entry, a ``PlanRules`` entry and a new
``PayerPlan`` member.
"""

from __future__ import annotations

from pydantic import BaseModel

from policyextract.core.errors import ConfigurationError
from policyextract.core.models import FieldSpec, FieldValidation, PlanSchema
from policyextract.core.types import FieldKind, PayerPlan
from policyextract.pipeline.postprocess import (
    CoveragePercentRule,
    CoverageRule,
    CurrencyRule,
    PeriodRule,
    PostRule,
    ProviderSpecificRule,
    SpacingRule,
)


class PlanRules(BaseModel):
    """Prompt and post-processing behavior attached to a plan."""

    suppress_hints: bool = False
    prompt_blocks: tuple[str, ...] = ()
    post_rules: tuple[PostRule, ...] = ()

    model_config = {"frozen": True}


_POLICY_ID = FieldValidation(pattern=r"^[A-Z0-9-]+$", min_length=5, max_length=20)
_PERCENT_RANGE = FieldValidation(min=0, max=100)
_NON_NEGATIVE = FieldValidation(min=0)


QLM_SCHEMA = PlanSchema(
    plan=PayerPlan.QLM.value,
    fields=(
        FieldSpec(
            name="Insured",
            required=True,
            description="Name of the insured person/policyholder",
            validation=FieldValidation(min_length=2, max_length=100),
            hints=("Policyholder", "Member name", "Insured person", "Beneficiary name"),
            examples=("John Doe", "Sarah Al-Ahmad"),
        ),
        FieldSpec(
            name="Policy No",
            required=True,
            description="Unique policy identification number",
            validation=_POLICY_ID,
            hints=("Policy number", "Policy ID", "Contract number", "Policy reference"),
            examples=("QLM-2024-001", "POL123456"),
        ),
        FieldSpec(
            name="Period of Insurance",
            required=True,
            kind=FieldKind.DATE,
            description="Coverage period dates (start to end)",
            hints=("Policy period", "Coverage period", "Insurance period"),
            examples=("01/01/2024 - 31/12/2024", "Jan 2024 to Dec 2024"),
        ),
        FieldSpec(
            name="Plan",
            required=True,
            description="Insurance plan type or category",
            hints=("Plan type", "Plan name", "Scheme"),
            examples=("Premium", "Standard", "Basic", "Family Plan"),
        ),
        FieldSpec(
            name="For Eligible Medical Expenses at Al Ahli Hospital",
            kind=FieldKind.PERCENTAGE,
            description="Coverage percentage for medical expenses at Al Ahli Hospital",
            validation=_PERCENT_RANGE,
            hints=("Al Ahli Hospital", "Al-Ahli Hospital"),
            examples=("100%", "80%", "90%"),
        ),
        FieldSpec(
            name="Inpatient Deductible",
            kind=FieldKind.CURRENCY,
            description="Amount patient pays before inpatient coverage begins",
            validation=_NON_NEGATIVE,
            hints=("In-patient deductible", "IP deductible"),
            examples=("QAR 500", "500", "0"),
        ),
        FieldSpec(
            name="Deductible per each outpatient consultation",
            kind=FieldKind.CURRENCY,
            description="Fixed amount paid per outpatient visit",
            validation=_NON_NEGATIVE,
            hints=("Outpatient deductible", "OP consultation deductible", "Consultation fee"),
            examples=("QAR 50", "50", "25"),
        ),
        FieldSpec(
            name="Vaccination of children",
            description="Coverage details for child vaccination services",
            hints=("Child vaccination", "Immunization of children", "Vaccinations"),
            examples=("Covered", "Not Covered", "80% Coverage", "Full Coverage"),
        ),
        FieldSpec(
            name="Psychiatric Treatment",
            description="Mental health and psychiatric care coverage",
            hints=("Psychiatric care", "Mental health", "Psychotherapy"),
            examples=("Covered", "Limited Coverage", "Not Covered", "Up to QAR 5000"),
        ),
        FieldSpec(
            name="Dental Copayment",
            kind=FieldKind.CURRENCY,
            description="Patient contribution for dental services",
            validation=_NON_NEGATIVE,
            hints=("Dental co-pay", "Dental co-insurance"),
            examples=("QAR 100", "20%", "50"),
        ),
        FieldSpec(
            name="Maternity Copayment",
            kind=FieldKind.CURRENCY,
            description="Patient contribution for maternity services",
            validation=_NON_NEGATIVE,
            hints=("Maternity co-pay", "Maternity co-insurance", "Pregnancy copayment"),
            examples=("QAR 1000", "10%", "500"),
        ),
        FieldSpec(
            name="Optical Copayment",
            kind=FieldKind.CURRENCY,
            description="Patient contribution for optical/vision services",
            validation=_NON_NEGATIVE,
            hints=("Optical co-pay", "Vision copayment"),
            examples=("QAR 200", "30%", "150"),
        ),
    ),
)


ALKOOT_SCHEMA = PlanSchema(
    plan=PayerPlan.ALKOOT.value,
    fields=(
        FieldSpec(
            name="Policy Number",
            required=True,
            description="Unique policy identification number",
            validation=_POLICY_ID,
            examples=("ALK-2024-001", "ALKOOT123456"),
        ),
        FieldSpec(
            name="Category",
            required=True,
            description="Member or plan category classification",
            examples=("Employee", "Dependent", "Senior", "Executive"),
        ),
        FieldSpec(
            name="Effective Date",
            required=True,
            kind=FieldKind.DATE,
            description="Date when coverage becomes effective",
            examples=("01/01/2024", "2024-01-01", "Jan 1, 2024"),
        ),
        FieldSpec(
            name="Expiry Date",
            required=True,
            kind=FieldKind.DATE,
            description="Date when coverage expires",
            examples=("31/12/2024", "2024-12-31", "Dec 31, 2024"),
        ),
        FieldSpec(
            name="Provider-specific co-insurance at Al Ahli Hospital",
            kind=FieldKind.PERCENTAGE,
            description="Co-insurance percentage specifically for Al Ahli Hospital services",
            validation=_PERCENT_RANGE,
            hints=("Provider Specific Co-insurance", "Al Ahli Hospital", "Al-Ahli Hospital"),
            examples=("20%", "10%", "0%"),
        ),
        FieldSpec(
            name="Co-insurance on all inpatient treatment",
            kind=FieldKind.PERCENTAGE,
            description="Patient's share of costs for all inpatient treatments",
            validation=_PERCENT_RANGE,
            examples=("20%", "15%", "10%"),
        ),
        FieldSpec(
            name="Deductible on consultation",
            kind=FieldKind.CURRENCY,
            description="Fixed amount paid per consultation visit",
            validation=_NON_NEGATIVE,
            hints=("Deductible on consultations", "Consultation Deductible", "OPD Deductible"),
            examples=("QAR 75", "75", "50"),
        ),
        FieldSpec(
            name="Vaccination & Immunization",
            description="Coverage for vaccination and immunization services",
            examples=("Covered", "Not Covered", "Partial Coverage", "Full Coverage"),
        ),
        FieldSpec(
            name="Psychiatric treatment & Psychotherapy",
            description="Mental health, psychiatric care and psychotherapy coverage",
            hints=("Psychiatric Treatment", "Psychotherapy", "Mental Health"),
            examples=("Covered", "Limited", "Not Covered", "Up to QAR 10000 annually"),
        ),
        FieldSpec(
            name="Pregnancy & Childbirth",
            description="Maternity, pregnancy and childbirth coverage",
            examples=("Covered", "Partial Coverage", "Not Covered", "After waiting period"),
        ),
        FieldSpec(
            name="Dental Benefit",
            description="Dental and oral health care coverage",
            examples=("Basic Coverage", "Comprehensive", "Emergency Only", "Not Covered"),
        ),
        FieldSpec(
            name="Optical Benefit",
            description="Vision care and optical services coverage",
            examples=("Annual Allowance", "Partial Coverage", "Not Covered", "QAR 500 annually"),
        ),
    ),
)


CUSTOM_SCHEMA = PlanSchema(plan=PayerPlan.CUSTOM.value)


_ALKOOT_SEARCH_ORDER = (
    "=== FALLBACK SEARCH ORDER ===\n"
    "For every field, stop at the first step that yields a value:\n"
    "1. The exact field name in a table cell; take the value in the adjacent cell.\n"
    "2. The exact field name in narrative text.\n"
    "3. The singular or plural form of the field name, in tables and then in text.\n"
    "4. Otherwise return null."
)

_ALKOOT_PROVIDER_TABLE = (
    "=== PROVIDER-SPECIFIC CO-INSURANCE ===\n"
    "Provider-specific co-insurance at Al Ahli Hospital is usually in a table titled "
    '"Provider Specific Co-insurance/deductible". Take the value in the row naming '
    "Al Ahli Hospital. Do not copy the general inpatient co-insurance into this field."
)

_QLM_PROVIDER_BENEFIT = (
    "=== AL AHLI HOSPITAL BENEFIT ===\n"
    "For Eligible Medical Expenses at Al Ahli Hospital is the share of eligible "
    "expenses the policy pays at Al Ahli Hospital. Return the percentage exactly as written."
)


QLM_RULES = PlanRules(
    prompt_blocks=(_QLM_PROVIDER_BENEFIT,),
    post_rules=(
        PeriodRule(field="Period of Insurance"),
        CoveragePercentRule(field="For Eligible Medical Expenses at Al Ahli Hospital"),
        CurrencyRule(field="Inpatient Deductible"),
        CurrencyRule(field="Deductible per each outpatient consultation"),
        CoverageRule(field="Vaccination of children"),
        CoverageRule(field="Psychiatric Treatment"),
        CurrencyRule(field="Dental Copayment", percent_first=True),
        CurrencyRule(field="Maternity Copayment", percent_first=True),
        CurrencyRule(field="Optical Copayment", percent_first=True),
    ),
)

ALKOOT_RULES = PlanRules(
    suppress_hints=True,
    prompt_blocks=(_ALKOOT_SEARCH_ORDER, _ALKOOT_PROVIDER_TABLE),
    post_rules=(
        ProviderSpecificRule(
            field="Provider-specific co-insurance at Al Ahli Hospital",
            provider_terms=("al ahli", "al-ahli", "ahli hospital"),
            sibling_fields=("Co-insurance on all inpatient treatment",),
        ),
        SpacingRule(field="Co-insurance on all inpatient treatment"),
        CurrencyRule(field="Deductible on consultation"),
        CoverageRule(field="Vaccination & Immunization"),
        CoverageRule(field="Psychiatric treatment & Psychotherapy"),
        SpacingRule(field="Dental Benefit"),
        SpacingRule(field="Optical Benefit"),
    ),
)

CUSTOM_RULES = PlanRules()


PLAN_SCHEMAS: dict[PayerPlan, PlanSchema] = {
    PayerPlan.QLM: QLM_SCHEMA,
    PayerPlan.ALKOOT: ALKOOT_SCHEMA,
    PayerPlan.CUSTOM: CUSTOM_SCHEMA,
}

PLAN_RULES: dict[PayerPlan, PlanRules] = {
    PayerPlan.QLM: QLM_RULES,
    PayerPlan.ALKOOT: ALKOOT_RULES,
    PayerPlan.CUSTOM: CUSTOM_RULES,
}


def as_plan(plan: PayerPlan | str) -> PayerPlan | None:
    """Map a plan name to its enum member, case-insensitively."""
    if isinstance(plan, PayerPlan):
        return plan
    try:
        return PayerPlan(plan.strip().upper())
    except ValueError:
        return None


def plan_key(plan: PayerPlan | str) -> str:
    """Canonical name of a plan: the enum value for built-in plans, else stripped."""
    member = as_plan(plan)
    return member.value if member is not None else str(plan).strip()


def get_plan_schema(plan: PayerPlan | str) -> PlanSchema:
    """Return the static schema for a plan."""
    member = as_plan(plan)
    if member is None:
        msg = f"Unknown plan: {plan}"
        raise ConfigurationError(msg)
    return PLAN_SCHEMAS[member]


def get_plan_rules(plan: PayerPlan | str) -> PlanRules:
    """Return the rule set for a plan; plans outside the table get no rules."""
    member = as_plan(plan)
    if member is None:
        return CUSTOM_RULES
    return PLAN_RULES[member]


def list_plans() -> list[PayerPlan]:
    return list(PayerPlan)
