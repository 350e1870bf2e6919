"""
Ranker

Orders matched programs by the four-tier priority policy, truncates to the
top N and assigns labels. Truncation happens before ranks are assigned.
"""

from typing import List, Tuple

from .contracts import ScoredProgram
from .constants import Track, MatchLabel, MAX_MATCHED


def rank_programs(matched: List[ScoredProgram]) -> List[ScoredProgram]:
    """
    Sort matched programs.

    Tiers, in order:
    1. Exclusive track first
    2. Higher size-match score
    3. Non-guarantee before guarantee
    4. Higher fit score

    The sort is stable, so ties keep catalog order.

    Args:
        matched: Matched programs with scores

    Returns:
        New sorted list
    """
    return sorted(
        matched,
        key=lambda x: (
            0 if x.track == Track.EXCLUSIVE else 1,
            -x.size_match_score,
            1 if x.track == Track.GUARANTEE else 0,
            -x.fit_score,
        )
    )


def truncate(
    ranked: List[ScoredProgram],
    max_matched: int = MAX_MATCHED
) -> Tuple[List[ScoredProgram], List[ScoredProgram]]:
    """Split a ranked list into (kept top N, dropped remainder)."""
    return ranked[:max_matched], ranked[max_matched:]


def assign_label(rank: int, track: str) -> MatchLabel:
    """
    Label a ranked program.

    Guarantee programs are always the fallback, whatever their rank.
    Any other top-three entry is an alternative.
    """
    if track == Track.EXCLUSIVE:
        return MatchLabel.EXCLUSIVE_PRIORITY
    if track == Track.GUARANTEE:
        return MatchLabel.PLAN_B
    if rank <= 2 and track == Track.POLICY_LINKED:
        return MatchLabel.STRONG_CANDIDATE
    if rank <= 3:
        return MatchLabel.ALTERNATIVE
    return MatchLabel.PLAN_B
