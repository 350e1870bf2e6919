"""
Data Contracts for the Policy-Fund Matching Engine

Defines Pydantic models for CompanyProfile (input), the knowledge-base program
definitions, the per-program eligibility result and MatchOutput (output).
These contracts are the API boundary for the matching engine.
"""

from datetime import date
from typing import List, Optional, Dict, Any, Tuple
from pydantic import BaseModel, Field

from .constants import (
    CompanySize,
    Track,
    FundType,
    IndustryCategory,
    Qualification,
    Certification,
    BusinessAgeException,
    FundingPurposeRequest,
    TaxDelinquencyStatus,
    CreditIssueStatus,
    RestartReason,
    RuleKind,
    CheckStatus,
    ExcludedReason,
    MatchLabel,
    Confidence,
    EXCLUSIVE_QUALIFICATIONS,
    ENGINE_VERSION,
)


# =============================================================================
# INPUT CONTRACTS
# =============================================================================

class CompanyProfile(BaseModel):
    """
    Input contract for the matching engine.
    Describes the applicant company. Optional fields left as None are treated
    as unknown, never as False.
    """
    # Identity (optional, for tracking)
    company_name: Optional[str] = None

    # Business basics
    industry: IndustryCategory = IndustryCategory.OTHER_SERVICE
    industry_detail: Optional[str] = None  # free text, e.g. "metal processing"
    region: Optional[str] = None            # e.g. "서울 금천구"
    company_size: CompanySize = CompanySize.SMALL
    business_age: Optional[float] = Field(default=None, ge=0)   # years
    annual_revenue: Optional[int] = Field(default=None, ge=0)   # KRW
    employee_count: Optional[int] = Field(default=None, ge=0)
    credit_rating: Optional[int] = Field(default=None, ge=1, le=10)  # 1 is best

    # Special qualifications
    is_disabled: bool = False
    is_disabled_standard: bool = False
    is_social_enterprise: bool = False
    is_restart: bool = False
    is_female: bool = False
    is_youth: bool = False

    # Certifications
    is_venture: bool = False
    is_innobiz: bool = False
    is_mainbiz: bool = False

    # Evidence (None = not provided)
    has_export_revenue: Optional[bool] = None
    has_rnd_activity: Optional[bool] = None
    has_patent: Optional[bool] = None
    has_investment_plan: Optional[bool] = None
    accepts_equity_dilution: Optional[bool] = None
    has_smart_factory_plan: Optional[bool] = None
    has_environment_investment: Optional[bool] = None
    is_emergency_situation: Optional[bool] = None

    # Funding request
    requested_funding_purpose: Optional[FundingPurposeRequest] = None
    business_age_exceptions: Optional[List[BusinessAgeException]] = None

    # Credit / tax standing
    is_inactive: bool = False
    tax_delinquency_status: TaxDelinquencyStatus = TaxDelinquencyStatus.NONE
    tax_resolution_date: Optional[date] = None
    credit_issue_status: CreditIssueStatus = CreditIssueStatus.NONE
    credit_resolution_date: Optional[date] = None
    restart_reason: Optional[RestartReason] = None

    class Config:
        use_enum_values = True
        frozen = True

    def qualifications(self) -> List[str]:
        """Special qualifications held by the company, as plain values."""
        flags = {
            Qualification.DISABLED: self.is_disabled,
            Qualification.DISABLED_STANDARD: self.is_disabled_standard,
            Qualification.SOCIAL_ENTERPRISE: self.is_social_enterprise,
            Qualification.RESTART: self.is_restart,
            Qualification.FEMALE: self.is_female,
            Qualification.YOUTH: self.is_youth,
        }
        return [q.value for q, held in flags.items() if held]

    def certifications(self) -> List[str]:
        flags = {
            Certification.VENTURE: self.is_venture,
            Certification.INNOBIZ: self.is_innobiz,
            Certification.MAINBIZ: self.is_mainbiz,
        }
        return [c.value for c, held in flags.items() if held]

    def exclusive_qualifications(self) -> List[str]:
        held = self.qualifications()
        return [q.value for q in EXCLUSIVE_QUALIFICATIONS if q.value in held]


# =============================================================================
# KNOWLEDGE BASE CONTRACTS
# =============================================================================

class RangeCriterion(BaseModel):
    """Inclusive numeric bound on a profile attribute."""
    min: Optional[float] = None
    max: Optional[float] = None
    description: str = ""

    class Config:
        frozen = True


class BusinessAgeCriterion(RangeCriterion):
    """Business-age bound, optionally extended for listed exceptions."""
    max_with_exception: Optional[float] = None
    exceptions: Tuple[BusinessAgeException, ...] = ()

    class Config:
        use_enum_values = True
        frozen = True


class EligibilityCriteria(BaseModel):
    """Structured eligibility predicates of one program."""
    business_age: Optional[BusinessAgeCriterion] = None
    revenue: Optional[RangeCriterion] = None
    employee_count: Optional[RangeCriterion] = None

    allowed_industries: Tuple[IndustryCategory, ...] = ()
    excluded_industries: Tuple[str, ...] = ()
    allowed_regions: Tuple[str, ...] = ()

    required_certifications: Tuple[Certification, ...] = ()
    required_qualifications: Tuple[Qualification, ...] = ()
    preferred_qualifications: Tuple[Qualification, ...] = ()

    max_credit_rating: Optional[int] = Field(default=None, ge=1, le=10)

    # Evidence requirements
    requires_export: bool = False
    requires_technology: bool = False
    requires_investment_intent: bool = False
    requires_smart_factory_plan: bool = False
    requires_environment_investment: bool = False
    requires_emergency_situation: bool = False

    # Informational only, never evaluated
    additional_requirements: Tuple[str, ...] = ()

    class Config:
        use_enum_values = True
        frozen = True

    def is_empty(self) -> bool:
        """True when no evaluable criterion is declared."""
        return not any([
            self.business_age,
            self.revenue,
            self.employee_count,
            self.allowed_industries,
            self.excluded_industries,
            self.allowed_regions,
            self.required_certifications,
            self.required_qualifications,
            self.preferred_qualifications,
            self.max_credit_rating,
            self.requires_export,
            self.requires_technology,
            self.requires_investment_intent,
            self.requires_smart_factory_plan,
            self.requires_environment_investment,
            self.requires_emergency_situation,
        ])


class FundingPurpose(BaseModel):
    working: bool = True
    facility: bool = True

    class Config:
        frozen = True


class SupportTerms(BaseModel):
    amount: str
    interest_rate: Optional[str] = None
    loan_period: Optional[str] = None
    guarantee_ratio: Optional[str] = None

    class Config:
        frozen = True


class Institution(BaseModel):
    id: str
    name: str
    full_name: str
    website: Optional[str] = None
    contact_number: Optional[str] = None

    class Config:
        frozen = True


class PolicyFundProgram(BaseModel):
    """
    Knowledge-base entry. Static, loaded at startup, never mutated.
    """
    id: str
    institution_id: str
    name: str
    short_name: str = ""
    track: Track = Track.GENERAL
    fund_type: FundType = FundType.LOAN
    description: str = ""
    funding_purpose: FundingPurpose = Field(default_factory=FundingPurpose)
    eligibility: EligibilityCriteria = Field(default_factory=EligibilityCriteria)
    target_scale: Optional[Tuple[CompanySize, ...]] = None  # None = unrestricted
    terms: SupportTerms
    preferential_conditions: Tuple[str, ...] = ()
    official_url: Optional[str] = None

    class Config:
        use_enum_values = True
        frozen = True


# =============================================================================
# EVALUATION CONTRACTS
# =============================================================================

class CheckResult(BaseModel):
    """Outcome of one rule against one profile."""
    rule: str
    kind: RuleKind
    status: CheckStatus
    description: str
    variable: Optional[str] = None  # decision variable name, when unresolved
    how_to_confirm: Optional[str] = None
    reason: ExcludedReason = ExcludedReason.REQUIREMENT_UNMET

    class Config:
        use_enum_values = True


class EligibilityResult(BaseModel):
    """
    Result of evaluating one program's rules for one profile.
    """
    program_id: str
    program_name: str
    is_eligible: bool
    undetermined: bool = False
    passed: List[CheckResult] = Field(default_factory=list)
    failed: List[CheckResult] = Field(default_factory=list)
    warnings: List[CheckResult] = Field(default_factory=list)
    unresolved: List[CheckResult] = Field(default_factory=list)

    @property
    def passed_descriptions(self) -> List[str]:
        return [c.description for c in self.passed]

    @property
    def failed_descriptions(self) -> List[str]:
        return [c.description for c in self.failed]

    @property
    def missing_variables(self) -> List[str]:
        return [c.variable or c.rule for c in self.unresolved]

    @property
    def how_to_confirm(self) -> List[str]:
        return [c.how_to_confirm or c.description for c in self.unresolved]


class ScoringTable(BaseModel):
    """
    Pluggable fit-score weighting.

    fit = base_score
          + sum(rule weight for each passed rule)
          + sum(miss penalty for each preference warning)
          + track bonus + program offset,
    clamped to 0..100.
    """
    base_score: float = 50.0
    default_rule_weight: float = 3.0
    rule_weights: Dict[str, float] = Field(default_factory=lambda: {
        "required qualification": 20.0,
        "required certification": 10.0,
        "preferred qualification": 10.0,
        "industry alignment": 5.0,
        "business status": 0.0,
        "tax standing": 0.0,
        "credit standing": 0.0,
    })
    miss_penalties: Dict[str, float] = Field(default_factory=lambda: {
        "industry alignment": -5.0,
    })
    track_bonus: Dict[str, float] = Field(default_factory=lambda: {
        "exclusive": 10.0,
        "policy_linked": 5.0,
        "general": 0.0,
        "guarantee": 0.0,
    })
    program_offsets: Dict[str, float] = Field(default_factory=dict)

    def weight_for(self, rule: str) -> float:
        return self.rule_weights.get(rule, self.default_rule_weight)

    def penalty_for(self, rule: str) -> float:
        return self.miss_penalties.get(rule, 0.0)


class ScoredProgram(BaseModel):
    """
    A matched program with computed scores.
    Used between classification and ranking stages.
    """
    program: PolicyFundProgram
    eligibility: EligibilityResult
    agency: str
    fit_score: float = 0.0
    size_match_score: int = 50
    confidence: Optional[Confidence] = None

    class Config:
        use_enum_values = True

    @property
    def track(self) -> str:
        return self.program.track


# =============================================================================
# OUTPUT CONTRACTS
# =============================================================================

class MatchedFund(BaseModel):
    """Hard rules pass and every decision variable is resolved."""
    program_id: str
    program_name: str
    agency: str
    track: Track
    fit_score: float = Field(ge=0.0, le=100.0)
    size_match_score: int
    confidence: Optional[Confidence] = None
    rank: int = 0
    label: MatchLabel = MatchLabel.PLAN_B
    why: str = ""
    score_explanation: str = ""
    hard_rules_passed: List[str] = Field(default_factory=list)
    support_amount: Optional[str] = None
    interest_rate: Optional[str] = None
    official_url: Optional[str] = None

    class Config:
        use_enum_values = True


class ConditionalFund(BaseModel):
    """Hard rules pass but one or more decision variables are unresolved."""
    program_id: str
    program_name: str
    agency: str
    track: Track
    what_is_missing: List[str] = Field(default_factory=list)
    how_to_confirm: List[str] = Field(default_factory=list)

    class Config:
        use_enum_values = True


class ExcludedFund(BaseModel):
    """A hard rule failed or a structural hard-cut applied."""
    program_id: str
    program_name: str
    agency: str
    track: Track
    excluded_reason: ExcludedReason
    rule_triggered: str
    note: str = ""

    class Config:
        use_enum_values = True


class TrackDecision(BaseModel):
    allowed_tracks: List[Track] = Field(default_factory=list)
    blocked_tracks: List[Track] = Field(default_factory=list)
    why: str = ""

    class Config:
        use_enum_values = True


class MatchOutput(BaseModel):
    """
    Output contract for the matching engine.
    """
    # Request tracking
    request_id: Optional[str] = None
    company_name: Optional[str] = None

    track_decision: TrackDecision = Field(default_factory=TrackDecision)

    # Buckets
    matched: List[MatchedFund] = Field(default_factory=list)
    conditional: List[ConditionalFund] = Field(default_factory=list)
    excluded: List[ExcludedFund] = Field(default_factory=list)

    # Matched before truncation but not ranked
    unranked_program_ids: List[str] = Field(default_factory=list)

    # Summary Statistics
    total_programs_evaluated: int = 0
    total_eligible: int = 0
    total_matched: int = 0

    # Processing metadata
    processing_time_ms: Optional[float] = None
    engine_version: str = ENGINE_VERSION

    warnings: List[str] = Field(default_factory=list)
    ai_briefing: Optional[Dict[str, Any]] = None
