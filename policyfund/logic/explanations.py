"""
Rank Explanations

Pure text generators for matched programs: the one-sentence rank reason
and the score explanation.
"""

from .constants import Track, TRACK_LABELS


EXCLUSIVE_REASON = (
    "{name} gives you priority access because of your exclusive qualification."
)


def generate_rank_reason(rank: int, track: str, name: str) -> str:
    """
    Rank-based justification sentence.

    Args:
        rank: Final rank position (1-based)
        track: Program track value
        name: Program name

    Returns:
        One sentence explaining the position
    """
    if rank == 1:
        return f"{name} has the best policy and purpose alignment with your company."
    if rank == 2 and track == Track.EXCLUSIVE:
        return f"{name} is an exclusive fund that can be pursued alongside rank 1."
    if rank == 2:
        return f"{name} has the next-best alignment after rank 1."
    if rank == 3:
        return (
            f"{name} is the policy-purpose-similar alternative "
            f"if ranks 1-2 cannot be executed."
        )
    if rank == 4 and track == Track.GUARANTEE:
        return (
            f"{name} is an indirect, guarantee-based fallback "
            f"if direct lending is unavailable."
        )
    if rank == 4:
        return f"{name} is a fallback option if the higher-ranked funds do not work out."
    return f"{name} is for reference only, used only if every other option fails."


def explain_match(rank: int, track: str, name: str) -> str:
    """Reason shown on a matched entry. Exclusive funds always get the fixed sentence."""
    if track == Track.EXCLUSIVE:
        return EXCLUSIVE_REASON.format(name=name)
    return generate_rank_reason(rank, track, name)


def _rank_role(rank: int, track: str) -> str:
    if rank <= 2 and track == Track.EXCLUSIVE:
        return "[Top priority] "
    if rank == 3:
        return "[Alternative] "
    if rank == 4:
        return "[Second-best] "
    if rank >= 5:
        return "[Reference] "
    return ""


def generate_score_explanation(fit_score: float, track: str, rank: int) -> str:
    """
    Describe what a fit score means for a program on the given track.
    """
    role = _rank_role(rank, track)
    label = TRACK_LABELS.get(track, track).lower()

    if track == Track.EXCLUSIVE:
        if fit_score >= 90:
            return f"{role}Your qualifications and the policy purpose match this {label} fund exactly."
        if fit_score >= 80:
            return f"{role}A suitable {label} fund that should be reviewed first."
        return f"{role}A {label} fund, but some conditions need to be confirmed."

    if track == Track.POLICY_LINKED:
        if fit_score >= 80:
            return f"{role}A {label} fund that fits your business direction and its policy purpose well."
        if fit_score >= 70:
            return f"{role}A {label} fund that is a realistic alternative."
        return f"{role}A {label} fund, but the fit needs to be checked."

    if track == Track.GENERAL:
        if fit_score >= 70:
            return f"{role}A {label} fund whose standard support conditions you meet."
        if fit_score >= 60:
            return f"{role}Basic conditions are met, but the policy alignment is average."
        return f"{role}Conditions are met, but this {label} fund has low priority."

    if fit_score >= 70:
        return f"{role}A {label} product that helps make up for limited collateral."
    return f"{role}A {label} product to consider as plan B."
