"""
Eligibility Rules

Compiles a program's structured eligibility criteria into a flat list of
declarative rules. Each rule is a predicate over the company profile that
returns True (pass), False (fail) or None (cannot be decided from the profile).
"""

from typing import Callable, List, Optional, Sequence
from pydantic import BaseModel

from .contracts import CompanyProfile, PolicyFundProgram, CheckResult
from .constants import (
    RuleKind,
    CheckStatus,
    ExcludedReason,
    TaxDelinquencyStatus,
    CreditIssueStatus,
    FundingPurposeRequest,
    Qualification,
    VALID_RESTART_REASONS,
    QUALIFICATION_LABELS,
)

Predicate = Callable[[CompanyProfile], Optional[bool]]


class Rule(BaseModel):
    """
    Single eligibility rule.

    Preference rules never exclude a program; a miss only lowers the fit score.
    """
    name: str
    kind: RuleKind
    predicate: Predicate
    description: str                  # shown when the rule passes
    failure: str                      # shown when it fails or is missed
    variable: Optional[str] = None    # what is missing when unresolved
    how_to_confirm: Optional[str] = None
    reason: ExcludedReason = ExcludedReason.REQUIREMENT_UNMET

    class Config:
        use_enum_values = True
        frozen = True

    def evaluate(self, profile: CompanyProfile) -> CheckResult:
        outcome = self.predicate(profile)

        if outcome is True:
            status, description = CheckStatus.PASS, self.description
        elif self.kind == RuleKind.PREFERENCE:
            status, description = CheckStatus.WARNING, self.failure
        elif outcome is False:
            status, description = CheckStatus.FAIL, self.failure
        else:
            status, description = CheckStatus.UNRESOLVED, self.failure

        return CheckResult(
            rule=self.name,
            kind=self.kind,
            status=status,
            description=description,
            variable=self.variable if status == CheckStatus.UNRESOLVED else None,
            how_to_confirm=self.how_to_confirm if status == CheckStatus.UNRESOLVED else None,
            reason=self.reason,
        )


# =============================================================================
# PREDICATE HELPERS
# =============================================================================

def any_evidence(values: Sequence[Optional[bool]]) -> Optional[bool]:
    """True if any value is True, False if all are False, None otherwise."""
    if any(v is True for v in values):
        return True
    if values and all(v is False for v in values):
        return False
    return None


def _within(value: Optional[float], low: Optional[float], high: Optional[float]) -> Optional[bool]:
    if value is None:
        return None
    if low is not None and value < low:
        return False
    if high is not None and value > high:
        return False
    return True


def _format_krw(amount: Optional[float]) -> str:
    if amount is None:
        return "-"
    if amount >= 100_000_000:
        return f"KRW {amount / 1_000_000:,.0f}M"
    return f"KRW {amount:,.0f}"


def _bound_text(low: Optional[float], high: Optional[float], unit: str = "") -> str:
    if low is not None and high is not None:
        return f"{low:g}-{high:g}{unit}"
    if low is not None:
        return f"at least {low:g}{unit}"
    if high is not None:
        return f"at most {high:g}{unit}"
    return "unrestricted"


# =============================================================================
# GLOBAL RULES
# =============================================================================

def _tax_standing(profile: CompanyProfile) -> Optional[bool]:
    status = profile.tax_delinquency_status
    if status == TaxDelinquencyStatus.ACTIVE:
        return False
    if status in (TaxDelinquencyStatus.RESOLVING, TaxDelinquencyStatus.INSTALLMENT):
        return True if profile.tax_resolution_date else None
    return True


def _credit_standing(profile: CompanyProfile) -> Optional[bool]:
    status = profile.credit_issue_status
    if status == CreditIssueStatus.CURRENT:
        return False
    if status == CreditIssueStatus.PAST_RESOLVED:
        return True if profile.credit_resolution_date else None
    return True


GLOBAL_RULES: List[Rule] = [
    Rule(
        name="business status",
        kind=RuleKind.HARD,
        predicate=lambda p: not p.is_inactive,
        description="Business is operating",
        failure="Suspended or closed businesses cannot apply for policy funds",
    ),
    Rule(
        name="tax standing",
        kind=RuleKind.DECISION,
        predicate=_tax_standing,
        description="No unresolved national or local tax delinquency",
        failure="Tax delinquency must be cleared before applying",
        variable="tax-delinquency resolution date",
        how_to_confirm=(
            "Confirm the date the delinquent taxes are settled "
            "(an approved installment plan letter is accepted)"
        ),
        reason=ExcludedReason.TAX_DELINQUENCY,
    ),
    Rule(
        name="credit standing",
        kind=RuleKind.DECISION,
        predicate=_credit_standing,
        description="No current loan delinquency or default record",
        failure="Companies with a current delinquency or default record are restricted",
        variable="credit-resolution date",
        how_to_confirm="Provide the date the past delinquency was resolved (credit bureau report)",
        reason=ExcludedReason.CREDIT_ISSUE,
    ),
]


# =============================================================================
# PROGRAM RULES
# =============================================================================

def _business_age_rules(program: PolicyFundProgram) -> List[Rule]:
    criterion = program.eligibility.business_age
    if criterion is None:
        return []

    upper = criterion.max_with_exception or criterion.max
    rules = [
        Rule(
            name="business age",
            kind=RuleKind.DECISION,
            predicate=lambda p: _within(p.business_age, criterion.min, upper),
            description=f"Business age condition met ({criterion.description})",
            failure=f"Business age must be {_bound_text(criterion.min, upper, ' years')}",
            variable="business age",
            how_to_confirm="Check the opening date on the business registration certificate",
        )
    ]

    if criterion.max_with_exception and criterion.max is not None:
        def exception_applies(p: CompanyProfile) -> Optional[bool]:
            if p.business_age is None or p.business_age <= criterion.max:
                return True
            if p.business_age_exceptions is None:
                return None
            return any(ex in criterion.exceptions for ex in p.business_age_exceptions)

        rules.append(Rule(
            name="business-age exception",
            kind=RuleKind.DECISION,
            predicate=exception_applies,
            description="Business-age limit satisfied",
            failure=(
                f"Over {criterion.max:g} years requires an accepted exception "
                f"(up to {criterion.max_with_exception:g} years)"
            ),
            variable="business-age exception",
            how_to_confirm="Check graduation from a startup academy, TIPS selection or similar programs",
        ))
    return rules


def _range_rule(name: str, attribute: str, criterion, unit_formatter, how_to_confirm: str) -> Rule:
    return Rule(
        name=name,
        kind=RuleKind.DECISION,
        predicate=lambda p: _within(getattr(p, attribute), criterion.min, criterion.max),
        description=f"{name.capitalize()} condition met ({criterion.description})",
        failure=f"{name.capitalize()} must be {unit_formatter(criterion.min, criterion.max)}",
        variable=name,
        how_to_confirm=how_to_confirm,
    )


def _industry_rules(program: PolicyFundProgram) -> List[Rule]:
    criteria = program.eligibility
    rules: List[Rule] = []

    if criteria.excluded_industries:
        excluded = list(criteria.excluded_industries)

        def not_excluded(p: CompanyProfile) -> bool:
            detail = (p.industry_detail or "").lower()
            return not any(item.lower() in detail for item in excluded)

        rules.append(Rule(
            name="excluded industry",
            kind=RuleKind.HARD,
            predicate=not_excluded,
            description="Not an excluded industry",
            failure=f"Excluded industry ({', '.join(excluded)})",
        ))

    if criteria.allowed_industries:
        allowed = list(criteria.allowed_industries)
        rules.append(Rule(
            name="industry alignment",
            kind=RuleKind.PREFERENCE,
            predicate=lambda p: "all" in allowed or p.industry in allowed,
            description="Industry is a main target of this fund",
            failure="Industry is not a main target of this fund (check with the agency)",
        ))
    return rules


def _region_rule(program: PolicyFundProgram) -> List[Rule]:
    regions = list(program.eligibility.allowed_regions)
    if not regions:
        return []

    def in_region(p: CompanyProfile) -> Optional[bool]:
        if not p.region:
            return None
        return any(region in p.region for region in regions)

    return [Rule(
        name="business region",
        kind=RuleKind.DECISION,
        predicate=in_region,
        description=f"Located in the supported region ({', '.join(regions)})",
        failure=f"Only companies located in {', '.join(regions)} are supported",
        variable="business region",
        how_to_confirm="Confirm the business address on the registration certificate",
    )]


def _qualification_rules(program: PolicyFundProgram) -> List[Rule]:
    criteria = program.eligibility
    rules: List[Rule] = []

    if criteria.required_certifications:
        required = list(criteria.required_certifications)
        rules.append(Rule(
            name="required certification",
            kind=RuleKind.HARD,
            predicate=lambda p: any(c in p.certifications() for c in required),
            description="Holds a required certification",
            failure=f"Required certification missing ({', '.join(required)})",
        ))

    if criteria.required_qualifications:
        required = list(criteria.required_qualifications)
        labels = ", ".join(QUALIFICATION_LABELS.get(q, q) for q in required)
        rules.append(Rule(
            name="required qualification",
            kind=RuleKind.HARD,
            predicate=lambda p: any(q in p.qualifications() for q in required),
            description=f"Holds the required qualification ({labels})",
            failure=f"Reserved for {labels}",
        ))

        if Qualification.RESTART in required:
            def restart_reason_valid(p: CompanyProfile) -> Optional[bool]:
                if not p.is_restart:
                    return True
                if p.restart_reason is None or p.restart_reason == "unknown":
                    return None
                return p.restart_reason in VALID_RESTART_REASONS

            rules.append(Rule(
                name="restart reason",
                kind=RuleKind.DECISION,
                predicate=restart_reason_valid,
                description="Prior business failure has an accepted reason",
                failure="Restart funds need a good-faith reason for the prior failure",
                variable="restart reason",
                how_to_confirm="Document why the previous business closed (COVID, recession, partner default, etc.)",
                reason=ExcludedReason.PURPOSE_MISMATCH,
            ))

    if criteria.preferred_qualifications:
        preferred = list(criteria.preferred_qualifications)
        labels = ", ".join(QUALIFICATION_LABELS.get(q, q) for q in preferred)
        rules.append(Rule(
            name="preferred qualification",
            kind=RuleKind.PREFERENCE,
            predicate=lambda p: any(q in p.qualifications() for q in preferred),
            description=f"Preferential treatment applies ({labels})",
            failure="No preferential qualification",
        ))
    return rules


def _evidence_rules(program: PolicyFundProgram) -> List[Rule]:
    criteria = program.eligibility
    rules: List[Rule] = []

    # (flag on criteria, rule name, profile fields, pass text, fail text, how to confirm)
    evidence = [
        (criteria.requires_export, "export record", ("has_export_revenue",),
         "Has an export record or plan",
         "Needs an export record or a concrete export plan",
         "Confirm export revenue or an overseas expansion plan"),
        (criteria.requires_technology, "technology evidence", ("has_rnd_activity", "has_patent"),
         "Has technology assets (patent or R&D)",
         "Needs a patent, R&D activity or a technology appraisal",
         "Check patents, a corporate research lab or ongoing R&D activity"),
        (criteria.requires_investment_intent, "investment intent",
         ("has_investment_plan", "accepts_equity_dilution"),
         "Has an investment plan or accepts equity dilution",
         "Needs an investment plan or acceptance of equity dilution",
         "Confirm plans to raise investment or accept convertible terms"),
        (criteria.requires_smart_factory_plan, "smart factory plan", ("has_smart_factory_plan",),
         "Has a smart-factory plan",
         "Needs a plan to build or upgrade a smart factory",
         "Confirm the smart-factory build or upgrade plan"),
        (criteria.requires_environment_investment, "environment investment",
         ("has_environment_investment",),
         "Has an environmental investment plan",
         "Needs an environmental facility investment plan",
         "Confirm planned environmental or carbon-reduction investments"),
        (criteria.requires_emergency_situation, "emergency situation", ("is_emergency_situation",),
         "Qualifies as an emergency management situation",
         "Needs a disaster, a sharp sales drop or a restructuring crisis",
         "Confirm the sales drop (20% or more year on year) or the disaster damage"),
    ]

    for required, name, fields, passed, failed, confirm in evidence:
        if not required:
            continue
        rules.append(Rule(
            name=name,
            kind=RuleKind.DECISION,
            predicate=lambda p, fields=fields: any_evidence([getattr(p, f) for f in fields]),
            description=passed,
            failure=failed,
            variable=name,
            how_to_confirm=confirm,
            reason=ExcludedReason.INSUFFICIENT_EVIDENCE,
        ))
    return rules


def _funding_purpose_rule(program: PolicyFundProgram) -> Rule:
    supported = program.funding_purpose

    def purpose_supported(p: CompanyProfile) -> bool:
        requested = p.requested_funding_purpose
        if requested == FundingPurposeRequest.WORKING:
            return supported.working
        if requested == FundingPurposeRequest.FACILITY:
            return supported.facility
        return True

    return Rule(
        name="funding purpose",
        kind=RuleKind.HARD,
        predicate=purpose_supported,
        description="Requested funding purpose is supported",
        failure="Requested funding purpose (working/facility) is not supported",
        reason=ExcludedReason.PURPOSE_MISMATCH,
    )


def build_rules(program: PolicyFundProgram) -> List[Rule]:
    """
    Compile the global rules plus the program's own criteria, in evaluation order.
    """
    criteria = program.eligibility
    rules: List[Rule] = list(GLOBAL_RULES)

    rules.extend(_business_age_rules(program))
    if criteria.revenue is not None:
        rules.append(_range_rule(
            "annual revenue", "annual_revenue", criteria.revenue,
            lambda lo, hi: f"{_format_krw(lo)} to {_format_krw(hi)}",
            "Check revenue in the latest financial statements",
        ))
    if criteria.employee_count is not None:
        rules.append(_range_rule(
            "employee count", "employee_count", criteria.employee_count,
            lambda lo, hi: _bound_text(lo, hi, " employees"),
            "Count employees enrolled in the four major social insurances",
        ))
    rules.extend(_industry_rules(program))
    rules.extend(_region_rule(program))
    rules.extend(_qualification_rules(program))

    if criteria.max_credit_rating is not None:
        max_rating = criteria.max_credit_rating
        rules.append(Rule(
            name="credit rating",
            kind=RuleKind.DECISION,
            predicate=lambda p: None if p.credit_rating is None else p.credit_rating <= max_rating,
            description=f"Credit rating within grade {max_rating}",
            failure=f"Credit rating must be grade {max_rating} or better",
            variable="credit rating",
            how_to_confirm="Check the corporate credit rating (NICE, KED)",
            reason=ExcludedReason.CREDIT_ISSUE,
        ))

    rules.extend(_evidence_rules(program))
    rules.append(_funding_purpose_rule(program))
    return rules
