"""
Classifier

Sorts every program into exactly one bucket:
- Matched (hard rules pass, every decision variable resolved)
- Conditional (hard rules pass, decision variables unresolved)
- Excluded (a hard rule failed or a structural hard-cut applied)

Hard-cuts run in order: track decision, keyword exclusion, target scale,
then the program's compiled eligibility rules.
"""

import logging
from typing import Callable, List, Optional, Tuple, Union

from .contracts import (
    CompanyProfile,
    PolicyFundProgram,
    ScoringTable,
    ScoredProgram,
    ConditionalFund,
    ExcludedFund,
    TrackDecision,
)
from .constants import (
    Track,
    ExcludedReason,
    KEYWORD_EXCLUSIONS,
    QUALIFICATION_LABELS,
    SIZE_LABELS,
)
from .eligibility import check_eligibility
from .scorers import calculate_fit_score, calculate_size_match_score, determine_confidence

logger = logging.getLogger(__name__)

Classification = Union[ScoredProgram, ConditionalFund, ExcludedFund]


# =============================================================================
# TRACK DECISION
# =============================================================================

def decide_track(profile: CompanyProfile) -> TrackDecision:
    """
    Decide which distribution tracks are open to the company.

    The exclusive track needs at least one exclusive qualification
    (disabled, disabled-standard workplace, social enterprise, restart, female).
    """
    held = profile.exclusive_qualifications()
    general_tracks = [Track.POLICY_LINKED, Track.GENERAL, Track.GUARANTEE]

    if held:
        labels = ", ".join(QUALIFICATION_LABELS[q] for q in held)
        return TrackDecision(
            allowed_tracks=[Track.EXCLUSIVE] + general_tracks,
            blocked_tracks=[],
            why=f"Exclusive funds open through qualification: {labels}",
        )

    return TrackDecision(
        allowed_tracks=general_tracks,
        blocked_tracks=[Track.EXCLUSIVE],
        why="No exclusive qualification held, so exclusive funds are closed",
    )


# =============================================================================
# HARD-CUTS
# =============================================================================

def check_keyword_exclusion(
    profile: CompanyProfile,
    program: PolicyFundProgram
) -> Optional[Tuple[str, str]]:
    """
    Exclude programs whose name demands evidence the company explicitly lacks.

    Evidence left unanswered (None) never excludes here; the program's own
    decision rules report it instead.

    Returns:
        (rule_triggered, note) when excluded, otherwise None
    """
    name = program.name.lower()
    for keywords, fields, rule, note in KEYWORD_EXCLUSIONS:
        if not any(keyword in name for keyword in keywords):
            continue
        if all(getattr(profile, field) is False for field in fields):
            return rule, note
    return None


def _excluded(
    program: PolicyFundProgram,
    agency: str,
    reason: ExcludedReason,
    rule_triggered: str,
    note: str = ""
) -> ExcludedFund:
    return ExcludedFund(
        program_id=program.id,
        program_name=program.name,
        agency=agency,
        track=program.track,
        excluded_reason=reason,
        rule_triggered=rule_triggered,
        note=note,
    )


def _scale_text(sizes: List[str]) -> str:
    return ", ".join(SIZE_LABELS.get(size, size) for size in sizes)


# =============================================================================
# CLASSIFICATION
# =============================================================================

def classify_program(
    profile: CompanyProfile,
    program: PolicyFundProgram,
    agency: str,
    track_decision: TrackDecision,
    table: Optional[ScoringTable] = None
) -> Classification:
    """
    Classify a single program for a profile.

    Args:
        profile: Company profile
        program: Knowledge-base program
        agency: Display name of the program's institution
        track_decision: Result of decide_track for this profile
        table: Scoring table for the fit score

    Returns:
        ScoredProgram (matched), ConditionalFund or ExcludedFund
    """
    if program.track in track_decision.blocked_tracks:
        return _excluded(
            program, agency, ExcludedReason.TRACK_BLOCKED,
            "exclusive track blocked",
            track_decision.why,
        )

    keyword_hit = check_keyword_exclusion(profile, program)
    if keyword_hit:
        rule, note = keyword_hit
        return _excluded(program, agency, ExcludedReason.INSUFFICIENT_EVIDENCE, rule, note)

    if program.target_scale and profile.company_size not in program.target_scale:
        return _excluded(
            program, agency, ExcludedReason.COMPANY_SIZE_MISMATCH,
            f"target: {_scale_text(program.target_scale)} / "
            f"company: {_scale_text([profile.company_size])}",
            f"Reserved for {_scale_text(program.target_scale)}",
        )

    eligibility = check_eligibility(profile, program)

    if not eligibility.is_eligible:
        first = eligibility.failed[0]
        return _excluded(
            program, agency, first.reason, first.rule,
            "; ".join(eligibility.failed_descriptions),
        )

    if eligibility.undetermined:
        return ConditionalFund(
            program_id=program.id,
            program_name=program.name,
            agency=agency,
            track=program.track,
            what_is_missing=eligibility.missing_variables,
            how_to_confirm=eligibility.how_to_confirm,
        )

    fit_score = calculate_fit_score(eligibility, program, table)
    return ScoredProgram(
        program=program,
        eligibility=eligibility,
        agency=agency,
        fit_score=fit_score,
        size_match_score=calculate_size_match_score(program, profile.company_size),
        confidence=determine_confidence(program.track, fit_score),
    )


def classify_all(
    profile: CompanyProfile,
    programs: List[PolicyFundProgram],
    agency_for: Callable[[PolicyFundProgram], str],
    table: Optional[ScoringTable] = None
) -> Tuple[TrackDecision, List[ScoredProgram], List[ConditionalFund], List[ExcludedFund]]:
    """
    Classify every program into matched, conditional and excluded.

    Args:
        profile: Company profile
        programs: Programs to evaluate, in catalog order
        agency_for: Resolves a program to its institution's display name
        table: Scoring table for the fit score

    Returns:
        Tuple of (track decision, matched, conditional, excluded)
    """
    track_decision = decide_track(profile)
    matched: List[ScoredProgram] = []
    conditional: List[ConditionalFund] = []
    excluded: List[ExcludedFund] = []

    for program in programs:
        result = classify_program(profile, program, agency_for(program), track_decision, table)
        if isinstance(result, ScoredProgram):
            matched.append(result)
        elif isinstance(result, ConditionalFund):
            conditional.append(result)
        else:
            excluded.append(result)

    logger.debug(
        "Classified %d programs: %d matched, %d conditional, %d excluded",
        len(programs), len(matched), len(conditional), len(excluded),
    )
    return track_decision, matched, conditional, excluded
