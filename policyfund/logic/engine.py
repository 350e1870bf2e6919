"""
Matching Engine

Main orchestrator that runs a company profile through the matching pipeline.
This is the primary entry point for matching policy funds.
"""

import logging
import time
from typing import Optional

from .contracts import CompanyProfile, MatchOutput, ScoringTable, ConditionalFund, ExcludedFund
from .knowledge_base import KnowledgeBase, load_default_knowledge_base
from .classifier import classify_all, classify_program, decide_track
from .eligibility import check_eligibility
from .ranker import rank_programs, truncate
from .output_assembler import assemble_output
from .scorers import DEFAULT_SCORING_TABLE
from .constants import MAX_MATCHED

logger = logging.getLogger(__name__)


class MatchingEngine:
    """
    Matching engine that orchestrates the classification pipeline.

    Pipeline flow:
    1. Track Decision - Open or block the exclusive track
    2. Classification - Hard-cuts, eligibility rules, fit and size-match scores
    3. Ranking - Four-tier sort of the matched bucket
    4. Truncation - Keep the top N
    5. Output Assembly - Rank, label and reason per matched entry

    The engine holds no per-request state; one instance can serve
    concurrent calls.
    """

    def __init__(
        self,
        knowledge_base: Optional[KnowledgeBase] = None,
        scoring_table: Optional[ScoringTable] = None,
        max_matched: Optional[int] = None
    ):
        """
        Initialize the matching engine.

        Args:
            knowledge_base: Program catalog. If None, uses the built-in catalog.
            scoring_table: Fit-score weighting. If None, uses the defaults.
            max_matched: Matched entries kept after ranking (default 5)
        """
        self.knowledge_base = knowledge_base if knowledge_base is not None else load_default_knowledge_base()
        self.scoring_table = scoring_table or DEFAULT_SCORING_TABLE
        self.max_matched = _check_limit(max_matched if max_matched is not None else MAX_MATCHED)

    def match(
        self,
        profile: CompanyProfile,
        max_matched: Optional[int] = None
    ) -> MatchOutput:
        """
        Match a company profile against every program in the knowledge base.

        Args:
            profile: Company profile
            max_matched: Overrides the engine's top-N for this call

        Returns:
            MatchOutput with matched, conditional and excluded buckets
        """
        start_time = time.perf_counter()
        limit = _check_limit(max_matched) if max_matched is not None else self.max_matched
        programs = self.knowledge_base.programs

        # Step 1 & 2: Track decision and classification
        track_decision, matched, conditional, excluded = classify_all(
            profile,
            programs,
            self.knowledge_base.agency_name,
            self.scoring_table,
        )

        # Step 3 & 4: Rank, then truncate
        ranked = rank_programs(matched)
        kept, dropped = truncate(ranked, limit)

        # Step 5: Assemble output
        processing_time = (time.perf_counter() - start_time) * 1000

        output = assemble_output(
            profile=profile,
            track_decision=track_decision,
            ranked=kept,
            unranked=dropped,
            conditional=conditional,
            excluded=excluded,
            total_evaluated=len(programs),
            processing_time_ms=round(processing_time, 2),
        )

        logger.info(
            "Matched %s: %d matched, %d unranked, %d conditional, %d excluded (%.2f ms)",
            profile.company_name or "company",
            len(kept), len(dropped), len(conditional), len(excluded),
            processing_time,
        )
        return output

    def match_from_dict(
        self,
        profile_data: dict,
        **kwargs
    ) -> MatchOutput:
        """
        Match from a dictionary profile.

        Convenience method for API integration.

        Args:
            profile_data: Dictionary matching CompanyProfile fields
            **kwargs: Additional arguments passed to match()

        Returns:
            MatchOutput
        """
        profile = CompanyProfile(**profile_data)
        return self.match(profile, **kwargs)

    def check_program(
        self,
        profile: CompanyProfile,
        program_id: str
    ) -> Optional[dict]:
        """
        Detailed evaluation of a single program for a company.

        Args:
            profile: Company profile
            program_id: Knowledge-base program id

        Returns:
            Dict with the bucket and every rule outcome, or None for an unknown id
        """
        program = self.knowledge_base.get(program_id)
        if program is None:
            return None

        result = classify_program(
            profile,
            program,
            self.knowledge_base.agency_name(program),
            decide_track(profile),
            self.scoring_table,
        )
        eligibility = check_eligibility(profile, program)

        if isinstance(result, ExcludedFund):
            bucket = "excluded"
        elif isinstance(result, ConditionalFund):
            bucket = "conditional"
        else:
            bucket = "matched"

        return {
            "program_id": program.id,
            "bucket": bucket,
            "result": result.dict(exclude={"program", "eligibility"}),
            "checks": {
                "passed": [c.dict() for c in eligibility.passed],
                "failed": [c.dict() for c in eligibility.failed],
                "warnings": [c.dict() for c in eligibility.warnings],
                "unresolved": [c.dict() for c in eligibility.unresolved],
            },
        }


def _check_limit(max_matched: int) -> int:
    if max_matched < 1:
        raise ValueError(f"max_matched must be at least 1, got {max_matched}")
    return max_matched


# Convenience function for simple usage
def get_matches(
    profile: CompanyProfile,
    knowledge_base: Optional[KnowledgeBase] = None,
    max_matched: Optional[int] = None
) -> MatchOutput:
    """
    Convenience function to match a profile.

    Args:
        profile: Company profile
        knowledge_base: Optional program catalog
        max_matched: Matched entries to keep

    Returns:
        MatchOutput
    """
    engine = MatchingEngine(knowledge_base, max_matched=max_matched)
    return engine.match(profile)
