"""
Policy-Fund Matching Logic Module

Provides the deterministic matching engine that sorts policy-fund programs
into matched, conditional and excluded buckets for a company profile.
"""

from .contracts import (
    CompanyProfile,
    PolicyFundProgram,
    Institution,
    EligibilityCriteria,
    EligibilityResult,
    ScoringTable,
    MatchedFund,
    ConditionalFund,
    ExcludedFund,
    TrackDecision,
    MatchOutput,
)
from .engine import MatchingEngine, get_matches
from .eligibility import check_eligibility
from .knowledge_base import (
    KnowledgeBase,
    KnowledgeBaseError,
    load_knowledge_base,
    load_default_knowledge_base,
)
from .scorers import calculate_size_match_score, load_scoring_table
from .explanations import generate_rank_reason
from .constants import Track, CompanySize, ExcludedReason, MatchLabel, Confidence

__all__ = [
    # Main engine
    "MatchingEngine",
    "get_matches",
    "check_eligibility",
    "calculate_size_match_score",
    "generate_rank_reason",

    # Knowledge base
    "KnowledgeBase",
    "KnowledgeBaseError",
    "load_knowledge_base",
    "load_default_knowledge_base",
    "load_scoring_table",

    # Contracts
    "CompanyProfile",
    "PolicyFundProgram",
    "Institution",
    "EligibilityCriteria",
    "EligibilityResult",
    "ScoringTable",
    "MatchedFund",
    "ConditionalFund",
    "ExcludedFund",
    "TrackDecision",
    "MatchOutput",

    # Enums
    "Track",
    "CompanySize",
    "ExcludedReason",
    "MatchLabel",
    "Confidence",
]
