"""
Scorers

Fit score, size-match score and confidence for matched programs.
All scores are deterministic functions of the profile, the program and the
scoring table.
"""

import json
from pathlib import Path
from typing import Optional, Union

from .contracts import PolicyFundProgram, EligibilityResult, ScoringTable
from .constants import (
    Track,
    Confidence,
    SIZE_COMPATIBILITY,
    SIZE_MATCH_EXACT,
    SIZE_MATCH_COMPATIBLE,
    SIZE_MATCH_DEFAULT,
    EXCLUSIVE_HIGH_CONFIDENCE_SCORE,
    POLICY_LINKED_HIGH_CONFIDENCE_SCORE,
)


DEFAULT_SCORING_TABLE = ScoringTable()


def calculate_size_match_score(program: PolicyFundProgram, company_size: str) -> int:
    """
    Score how well a program's target scale fits the company's size class.

    Args:
        program: Knowledge-base program
        company_size: Company size class value

    Returns:
        100 for an exact match, 80 for a compatible class, 50 otherwise.
        Programs without a target scale are unrestricted and score 50.

    Note:
        The classifier excludes companies outside a program's target scale
        before scoring, so engine output only carries 100 or 50. The 80 tier
        is reachable only when this function is called directly.
    """
    targets = program.target_scale
    if not targets:
        return SIZE_MATCH_DEFAULT

    if company_size in targets:
        return SIZE_MATCH_EXACT

    compatible = SIZE_COMPATIBILITY.get(company_size, [])
    if any(size in compatible for size in targets):
        return SIZE_MATCH_COMPATIBLE

    return SIZE_MATCH_DEFAULT


def calculate_fit_score(
    eligibility: EligibilityResult,
    program: PolicyFundProgram,
    table: Optional[ScoringTable] = None
) -> float:
    """
    Compute the 0-100 fit score from passed rules and preference misses.

    Args:
        eligibility: Eligibility result of the program
        program: The program being scored
        table: Scoring table, defaults to DEFAULT_SCORING_TABLE

    Returns:
        Fit score clamped to 0..100, rounded to one decimal
    """
    table = table or DEFAULT_SCORING_TABLE

    score = table.base_score
    score += sum(table.weight_for(check.rule) for check in eligibility.passed)
    score += sum(table.penalty_for(check.rule) for check in eligibility.warnings)
    score += table.track_bonus.get(program.track, 0.0)
    score += table.program_offsets.get(program.id, 0.0)

    return round(max(0.0, min(100.0, score)), 1)


def determine_confidence(track: str, fit_score: float) -> Confidence:
    if track == Track.EXCLUSIVE and fit_score >= EXCLUSIVE_HIGH_CONFIDENCE_SCORE:
        return Confidence.HIGH
    if track == Track.POLICY_LINKED and fit_score >= POLICY_LINKED_HIGH_CONFIDENCE_SCORE:
        return Confidence.HIGH
    return Confidence.MEDIUM


def load_scoring_table(path: Union[str, Path]) -> ScoringTable:
    """
    Load a scoring table from a JSON file. Missing keys keep their defaults.
    """
    with Path(path).open(encoding="utf-8") as f:
        return ScoringTable(**json.load(f))
