"""
Matching Engine Constants

Defines the enums, compatibility groups, thresholds and label texts used by
the policy-fund matching engine. All values are deterministic.
"""

from enum import Enum
from typing import Dict, List, Tuple

# =============================================================================
# ENUMS
# =============================================================================

class CompanySize(str, Enum):
    """Company scale class."""
    MICRO = "micro"          # micro-manufacturer, fewer than 10 staff
    SMALL = "small"
    MEDIUM = "medium"
    VENTURE = "venture"
    INNOBIZ = "innobiz"
    MAINBIZ = "mainbiz"


class Track(str, Enum):
    """Distribution channel of a fund program."""
    EXCLUSIVE = "exclusive"          # set-aside for a qualification
    POLICY_LINKED = "policy_linked"  # employment / policy-purpose funds
    GENERAL = "general"
    GUARANTEE = "guarantee"          # guarantee-backed, indirect


class FundType(str, Enum):
    LOAN = "loan"
    GUARANTEE = "guarantee"
    GRANT = "grant"


class IndustryCategory(str, Enum):
    MANUFACTURING = "manufacturing"
    IT_SERVICE = "it_service"
    WHOLESALE_RETAIL = "wholesale_retail"
    FOOD_SERVICE = "food_service"
    CONSTRUCTION = "construction"
    LOGISTICS = "logistics"
    OTHER_SERVICE = "other_service"
    ALL = "all"


class Qualification(str, Enum):
    """Special qualifications of the owner or the company."""
    DISABLED = "disabled"
    DISABLED_STANDARD = "disabled_standard"
    SOCIAL_ENTERPRISE = "social_enterprise"
    RESTART = "restart"
    FEMALE = "female"
    YOUTH = "youth"


class Certification(str, Enum):
    VENTURE = "venture"
    INNOBIZ = "innobiz"
    MAINBIZ = "mainbiz"


class BusinessAgeException(str, Enum):
    YOUTH_STARTUP_ACADEMY = "youth_startup_academy"
    GLOBAL_STARTUP_ACADEMY = "global_startup_academy"
    STARTUP_SUCCESS_PACKAGE = "startup_success_package"
    TIPS_PROGRAM = "tips_program"


class FundingPurposeRequest(str, Enum):
    WORKING = "working"
    FACILITY = "facility"
    BOTH = "both"


class TaxDelinquencyStatus(str, Enum):
    NONE = "none"
    ACTIVE = "active"
    RESOLVING = "resolving"
    INSTALLMENT = "installment"


class CreditIssueStatus(str, Enum):
    NONE = "none"
    CURRENT = "current"
    PAST_RESOLVED = "past_resolved"


class RestartReason(str, Enum):
    COVID = "covid"
    RECESSION = "recession"
    PARTNER_DEFAULT = "partner_default"
    DISASTER = "disaster"
    ILLNESS = "illness"
    POLICY = "policy"
    OTHER = "other"
    UNKNOWN = "unknown"


class RuleKind(str, Enum):
    HARD = "hard"              # decidable from the profile; failure excludes
    DECISION = "decision"      # may need information the profile lacks
    PREFERENCE = "preference"  # never excludes, only moves the fit score


class CheckStatus(str, Enum):
    PASS = "pass"
    FAIL = "fail"
    WARNING = "warning"
    UNRESOLVED = "unresolved"


class ExcludedReason(str, Enum):
    TRACK_BLOCKED = "track blocked"
    REQUIREMENT_UNMET = "requirement unmet"
    PURPOSE_MISMATCH = "purpose mismatch"
    INSUFFICIENT_EVIDENCE = "insufficient evidence"
    COMPANY_SIZE_MISMATCH = "company-size mismatch"
    TAX_DELINQUENCY = "tax delinquency"
    CREDIT_ISSUE = "credit issue"


class MatchLabel(str, Enum):
    EXCLUSIVE_PRIORITY = "exclusive-priority"
    STRONG_CANDIDATE = "strong-candidate"
    ALTERNATIVE = "alternative"
    PLAN_B = "plan-B"


class Confidence(str, Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"


# =============================================================================
# SIZE MATCHING
# =============================================================================

SIZE_MATCH_EXACT = 100
SIZE_MATCH_COMPATIBLE = 80
SIZE_MATCH_DEFAULT = 50

# Size classes a given class can reasonably be served by.
# Keyed by plain value: models store enum values, not members.
SIZE_COMPATIBILITY: Dict[str, List[str]] = {
    "micro": ["micro", "small"],
    "small": ["small", "micro", "medium"],
    "medium": ["medium", "small"],
    "venture": ["venture", "small", "medium"],
    "innobiz": ["innobiz", "small", "medium"],
    "mainbiz": ["mainbiz", "small", "medium"],
}

SIZE_LABELS: Dict[str, str] = {
    "micro": "micro-manufacturers",
    "small": "small enterprises",
    "medium": "medium enterprises",
    "venture": "venture companies",
    "innobiz": "Inno-Biz companies",
    "mainbiz": "Main-Biz companies",
}

# =============================================================================
# TRACKS
# =============================================================================

TRACK_LABELS: Dict[str, str] = {
    "exclusive": "Exclusive",
    "policy_linked": "Policy-linked",
    "general": "General",
    "guarantee": "Guarantee",
}

# Qualifications that unlock the exclusive track
EXCLUSIVE_QUALIFICATIONS: Tuple[Qualification, ...] = (
    Qualification.DISABLED_STANDARD,
    Qualification.DISABLED,
    Qualification.SOCIAL_ENTERPRISE,
    Qualification.RESTART,
    Qualification.FEMALE,
)

QUALIFICATION_LABELS: Dict[str, str] = {
    "disabled": "disabled-owned business",
    "disabled_standard": "disabled-standard workplace",
    "social_enterprise": "social enterprise",
    "restart": "restart business",
    "female": "female-owned business",
    "youth": "youth-owned business",
}

# Restart reasons accepted as a good-faith failure
VALID_RESTART_REASONS = [
    "covid",
    "recession",
    "partner_default",
    "disaster",
    "illness",
    "policy",
    "other",
]

# =============================================================================
# CONFIDENCE THRESHOLDS
# =============================================================================

EXCLUSIVE_HIGH_CONFIDENCE_SCORE = 50
POLICY_LINKED_HIGH_CONFIDENCE_SCORE = 70

# =============================================================================
# RANKING CONFIGURATION
# =============================================================================

MAX_MATCHED = 5
LOW_MATCH_WARNING_COUNT = 2

# =============================================================================
# KEYWORD EXCLUSIONS
# =============================================================================

# (keywords in program name, evidence fields on the profile, rule, note)
# A program is excluded only when every listed evidence field is explicitly False.
KEYWORD_EXCLUSIONS: List[Tuple[Tuple[str, ...], Tuple[str, ...], str, str]] = [
    (
        ("technology", "innovation", "r&d", "tech"),
        ("has_rnd_activity", "has_patent"),
        "no-technology-evidence",
        "Technology/innovation funds need a patent, R&D activity or a technology appraisal.",
    ),
    (
        ("export", "new market", "overseas"),
        ("has_export_revenue",),
        "no-export-record",
        "Export funds need an export record or a concrete overseas plan.",
    ),
    (
        ("investment", "scale-up"),
        ("has_investment_plan", "accepts_equity_dilution"),
        "no-investment-intent",
        "Investment-linked funds need an investment plan or acceptance of equity dilution.",
    ),
    (
        ("smart factory",),
        ("has_smart_factory_plan",),
        "no-smart-factory-plan",
        "Smart-factory funds need a plan to build or upgrade a smart factory.",
    ),
    (
        ("carbon", "green", "eco-friendly"),
        ("has_environment_investment",),
        "no-environment-investment",
        "Carbon-neutral funds need an environmental facility investment plan.",
    ),
    (
        ("emergency",),
        ("is_emergency_situation",),
        "no-emergency-situation",
        "Emergency funds need a disaster, a sharp sales drop or a restructuring crisis.",
    ),
]

ENGINE_VERSION = "1.0.0"
