"""
Shared fixtures: small hand-built catalogs so expectations do not depend
on the shipped catalog.
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import pytest

from policyfund.logic.contracts import (
    CompanyProfile,
    EligibilityCriteria,
    EligibilityResult,
    Institution,
    PolicyFundProgram,
    ScoredProgram,
    SupportTerms,
)
from policyfund.logic.knowledge_base import KnowledgeBase

TEST_INSTITUTION = Institution(id="agency", name="Agency", full_name="Test Agency")


def make_program(program_id="prog", track="general", name=None, **fields):
    """Build a program with a minimal non-empty criteria set."""
    fields.setdefault("eligibility", EligibilityCriteria(excluded_industries=["gambling"]))
    return PolicyFundProgram(
        id=program_id,
        institution_id="agency",
        name=name or f"Program {program_id}",
        track=track,
        terms=SupportTerms(amount="up to KRW 100M", interest_rate="2.0%"),
        **fields,
    )


def make_kb(*programs):
    return KnowledgeBase(programs, [TEST_INSTITUTION])


def make_scored(program_id, track="general", size_match=50, fit=60.0):
    program = make_program(program_id, track)
    return ScoredProgram(
        program=program,
        eligibility=EligibilityResult(program_id=program_id, program_name=program.name, is_eligible=True),
        agency="Agency",
        fit_score=fit,
        size_match_score=size_match,
    )


@pytest.fixture
def profile():
    """Micro manufacturer in Seoul with every field filled in."""
    return CompanyProfile(
        company_name="Hanbit Precision",
        industry="manufacturing",
        industry_detail="metal processing",
        region="서울 금천구",
        company_size="micro",
        business_age=4,
        annual_revenue=800_000_000,
        employee_count=6,
        credit_rating=5,
        has_export_revenue=False,
        has_rnd_activity=False,
        has_patent=False,
        has_investment_plan=False,
        accepts_equity_dilution=False,
        has_smart_factory_plan=False,
        has_environment_investment=False,
        is_emergency_situation=False,
    )


@pytest.fixture
def female_profile(profile):
    return profile.copy(update={"is_female": True})
