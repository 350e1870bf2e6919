"""
Policy-Fund API Routes

Exposes the matching engine via REST API.
Main endpoint: POST /policy-fund/match
"""

import logging
from functools import lru_cache
from typing import Optional, Dict, Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, ValidationError

from . import config
from .ai.explainer import explainer
from .logic.contracts import CompanyProfile
from .logic.engine import MatchingEngine
from .logic.knowledge_base import load_knowledge_base, load_default_knowledge_base
from .logic.scorers import load_scoring_table
from .logic.constants import ENGINE_VERSION

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/policy-fund", tags=["policy-fund"])


@lru_cache(maxsize=1)
def get_engine() -> MatchingEngine:
    """Engine shared by every request, built from configuration at startup."""
    if config.CATALOG_PATH:
        knowledge_base = load_knowledge_base(config.CATALOG_PATH)
    else:
        knowledge_base = load_default_knowledge_base()

    scoring_table = load_scoring_table(config.SCORING_TABLE_PATH) if config.SCORING_TABLE_PATH else None
    return MatchingEngine(knowledge_base, scoring_table, max_matched=config.MAX_MATCHED)


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class MatchRequest(BaseModel):
    """Request body for the match endpoint."""
    company_profile: Dict[str, Any] = Field(
        ...,
        description="Company profile",
        json_schema_extra={
            "example": {
                "company_name": "Hanbit Precision",
                "industry": "manufacturing",
                "industry_detail": "metal processing",
                "region": "서울 금천구",
                "company_size": "micro",
                "business_age": 4,
                "employee_count": 6,
                "credit_rating": 5,
                "is_female": True,
            }
        },
    )
    max_matched: Optional[int] = Field(
        default=None,
        ge=1,
        le=20,
        description="Matched funds to return (default from configuration)"
    )
    explain: bool = Field(
        default=False,
        description="Include AI-generated briefing"
    )


# =============================================================================
# ENDPOINTS
# =============================================================================

@router.post("/match", summary="Match policy funds for a company")
def match_funds(
    request: MatchRequest,
    engine: MatchingEngine = Depends(get_engine)
):
    """
    Classify every policy fund into matched, conditional and excluded.

    **Request Body:**
    - `company_profile`: Company attributes, qualifications and credit standing
    - `max_matched`: Number of ranked funds to return
    - `explain`: Include AI-generated briefing (default: False)

    **Response:**
    - Track decision, ranked matched funds with label and reason
    - Conditional funds with the missing information
    - Excluded funds with the triggering rule
    """
    try:
        profile = CompanyProfile(**request.company_profile)
    except ValidationError as e:
        logger.info("Rejected company profile: %d validation errors", e.error_count())
        raise HTTPException(
            status_code=400,
            detail=f"Invalid company profile: {str(e)}"
        )

    output = engine.match(profile, max_matched=request.max_matched)
    response_data = output.dict()

    # AI Briefing Layer
    if request.explain:
        briefing = explainer.get_briefing(
            company_profile=profile.dict(),
            engine_output=response_data,
        )
        response_data["ai_briefing"] = briefing

    return response_data


@router.get("/programs", summary="List policy-fund programs")
def list_programs(
    track: Optional[str] = None,
    institution: Optional[str] = None,
    engine: MatchingEngine = Depends(get_engine)
):
    """List catalog programs, optionally filtered by track or institution id."""
    kb = engine.knowledge_base
    programs = kb.by_institution(institution) if institution else kb.programs
    if track:
        track_ids = {p.id for p in kb.by_track(track)}
        programs = [p for p in programs if p.id in track_ids]

    return {
        "programs": [_serialize_program(p, kb.agency_name(p)) for p in programs],
        "count": len(programs),
    }


@router.get("/programs/{program_id}", summary="Get a policy-fund program")
def get_program(
    program_id: str,
    engine: MatchingEngine = Depends(get_engine)
):
    kb = engine.knowledge_base
    program = kb.get(program_id)
    if program is None:
        raise HTTPException(status_code=404, detail=f"Program not found: {program_id}")

    data = program.dict()
    institution = kb.get_institution(program.institution_id)
    data["institution"] = institution.dict() if institution else None
    return data


def _serialize_program(program, agency: str) -> Dict[str, Any]:
    """Summary view of a program for listings."""
    return {
        "program_id": program.id,
        "program_name": program.name,
        "agency": agency,
        "track": program.track,
        "fund_type": program.fund_type,
        "target_scale": program.target_scale,
        "support_amount": program.terms.amount,
        "interest_rate": program.terms.interest_rate,
        "official_url": program.official_url,
    }


# =============================================================================
# HEALTH CHECK
# =============================================================================

@router.get("/health", summary="Matching engine health check")
def health_check(engine: MatchingEngine = Depends(get_engine)):
    """Check if the matching engine is operational."""
    return {
        "status": "ok",
        "engine": "policy-fund",
        "version": ENGINE_VERSION,
        "programs": len(engine.knowledge_base),
    }
