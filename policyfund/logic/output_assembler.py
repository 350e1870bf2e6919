"""
Output Assembler

Transforms ranked, conditional and excluded programs into the final
MatchOutput contract. Rank, label and reason are assigned here, after
truncation.
"""

import logging
import uuid
from typing import List, Optional

from .contracts import (
    CompanyProfile,
    ScoredProgram,
    MatchedFund,
    ConditionalFund,
    ExcludedFund,
    TrackDecision,
    MatchOutput,
)
from .constants import Track, LOW_MATCH_WARNING_COUNT, ENGINE_VERSION
from .ranker import assign_label
from .explanations import explain_match, generate_score_explanation

logger = logging.getLogger(__name__)


def assemble_matched(scored: ScoredProgram, rank: int) -> MatchedFund:
    """
    Convert a ScoredProgram into a ranked MatchedFund.

    Args:
        scored: Matched program with scores
        rank: Final rank position (1-based)

    Returns:
        MatchedFund with label and reason
    """
    program = scored.program
    track = program.track

    return MatchedFund(
        program_id=program.id,
        program_name=program.name,
        agency=scored.agency,
        track=track,
        fit_score=scored.fit_score,
        size_match_score=scored.size_match_score,
        # exclusive entries carry the label instead of a confidence
        confidence=None if track == Track.EXCLUSIVE else scored.confidence,
        rank=rank,
        label=assign_label(rank, track),
        why=explain_match(rank, track, program.name),
        score_explanation=generate_score_explanation(scored.fit_score, track, rank),
        hard_rules_passed=scored.eligibility.passed_descriptions,
        support_amount=program.terms.amount,
        interest_rate=program.terms.interest_rate,
        official_url=program.official_url,
    )


def assemble_output(
    profile: CompanyProfile,
    track_decision: TrackDecision,
    ranked: List[ScoredProgram],
    unranked: List[ScoredProgram],
    conditional: List[ConditionalFund],
    excluded: List[ExcludedFund],
    total_evaluated: int,
    processing_time_ms: Optional[float] = None
) -> MatchOutput:
    """
    Assemble the final MatchOutput.

    Args:
        profile: Original company profile
        track_decision: Allowed and blocked tracks
        ranked: Matched programs kept after truncation, in rank order
        unranked: Matched programs dropped by truncation
        conditional: Conditional programs
        excluded: Excluded programs
        total_evaluated: Number of programs evaluated
        processing_time_ms: Processing time in milliseconds

    Returns:
        Complete MatchOutput
    """
    matched = [assemble_matched(scored, rank) for rank, scored in enumerate(ranked, 1)]
    warnings = _generate_warnings(profile, matched, conditional)

    return MatchOutput(
        request_id=str(uuid.uuid4()),
        company_name=profile.company_name,
        track_decision=track_decision,

        matched=matched,
        conditional=conditional,
        excluded=excluded,
        unranked_program_ids=[scored.program.id for scored in unranked],

        total_programs_evaluated=total_evaluated,
        total_eligible=len(ranked) + len(unranked),
        total_matched=len(matched),

        processing_time_ms=processing_time_ms,
        engine_version=ENGINE_VERSION,

        warnings=warnings,
    )


def _generate_warnings(
    profile: CompanyProfile,
    matched: List[MatchedFund],
    conditional: List[ConditionalFund]
) -> List[str]:
    """Generate any warnings for the output."""
    warnings = []

    if len(matched) < LOW_MATCH_WARNING_COUNT:
        warning_msg = (
            f"Low match count: {len(matched)} programs matched. "
            "Resolving the conditional items may open more funds."
        )
        logger.warning(warning_msg)
        warnings.append(warning_msg)

    if conditional:
        warnings.append(
            f"{len(conditional)} programs need more information before they can be matched."
        )

    if profile.business_age is None:
        warnings.append("Business age not provided. Age-limited funds stay conditional.")

    if profile.credit_rating is None:
        warnings.append("Credit rating not provided. Rating-limited funds stay conditional.")

    return warnings
