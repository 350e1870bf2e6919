"""
Tests for rule compilation and the eligibility checker.
"""

from datetime import date

from policyfund.logic.contracts import (
    BusinessAgeCriterion,
    EligibilityCriteria,
    FundingPurpose,
)
from policyfund.logic.eligibility import check_eligibility
from policyfund.logic.rules import any_evidence, build_rules

from conftest import make_program


def startup_program():
    return make_program(
        "startup",
        eligibility=EligibilityCriteria(
            business_age=BusinessAgeCriterion(
                max=7,
                max_with_exception=10,
                exceptions=["tips_program", "youth_startup_academy"],
            ),
        ),
    )


def test_global_rules_come_first():
    names = [rule.name for rule in build_rules(make_program())]
    assert names[:3] == ["business status", "tax standing", "credit standing"]
    assert names[-1] == "funding purpose"


def test_fully_specified_profile_is_eligible(profile):
    result = check_eligibility(profile, make_program())

    assert result.is_eligible
    assert not result.undetermined
    assert not result.failed
    assert "Not an excluded industry" in result.passed_descriptions


def test_inactive_business_fails(profile):
    result = check_eligibility(profile.copy(update={"is_inactive": True}), make_program())

    assert not result.is_eligible
    assert result.failed[0].rule == "business status"


def test_active_tax_delinquency_fails(profile):
    result = check_eligibility(
        profile.copy(update={"tax_delinquency_status": "active"}), make_program()
    )

    assert not result.is_eligible
    assert result.failed[0].reason == "tax delinquency"


def test_resolving_tax_needs_resolution_date(profile):
    resolving = profile.copy(update={"tax_delinquency_status": "resolving"})
    result = check_eligibility(resolving, make_program())

    assert result.is_eligible
    assert result.undetermined
    assert result.missing_variables == ["tax-delinquency resolution date"]
    assert len(result.how_to_confirm) == 1

    dated = resolving.copy(update={"tax_resolution_date": date(2026, 3, 31)})
    assert not check_eligibility(dated, make_program()).undetermined


def test_credit_issue_status(profile):
    current = check_eligibility(profile.copy(update={"credit_issue_status": "current"}), make_program())
    assert not current.is_eligible
    assert current.failed[0].reason == "credit issue"

    past = check_eligibility(profile.copy(update={"credit_issue_status": "past_resolved"}), make_program())
    assert past.undetermined
    assert past.missing_variables == ["credit-resolution date"]


def test_business_age_unknown_is_unresolved(profile):
    result = check_eligibility(profile.copy(update={"business_age": None}), startup_program())

    assert result.undetermined
    assert "business age" in result.missing_variables


def test_business_age_exception_window(profile):
    program = startup_program()

    # inside the exception window, no exception information given
    unknown = check_eligibility(profile.copy(update={"business_age": 8}), program)
    assert unknown.undetermined
    assert unknown.missing_variables == ["business-age exception"]

    # explicitly no exception
    none_held = check_eligibility(
        profile.copy(update={"business_age": 8, "business_age_exceptions": []}), program
    )
    assert not none_held.is_eligible

    accepted = check_eligibility(
        profile.copy(update={"business_age": 8, "business_age_exceptions": ["tips_program"]}), program
    )
    assert accepted.is_eligible and not accepted.undetermined

    too_old = check_eligibility(
        profile.copy(update={"business_age": 11, "business_age_exceptions": ["tips_program"]}), program
    )
    assert not too_old.is_eligible
    assert too_old.failed[0].rule == "business age"


def test_excluded_industry_matches_detail_text(profile):
    result = check_eligibility(profile.copy(update={"industry_detail": "Gambling arcade"}), make_program())

    assert not result.is_eligible
    assert result.failed[0].rule == "excluded industry"


def test_industry_alignment_is_a_warning_only(profile):
    program = make_program(eligibility=EligibilityCriteria(allowed_industries=["manufacturing"]))
    result = check_eligibility(profile.copy(update={"industry": "food_service"}), program)

    assert result.is_eligible
    assert [c.rule for c in result.warnings] == ["industry alignment"]


def test_region_rule(profile):
    program = make_program(eligibility=EligibilityCriteria(allowed_regions=["서울"]))

    assert check_eligibility(profile, program).is_eligible
    assert not check_eligibility(profile.copy(update={"region": "부산 해운대구"}), program).is_eligible
    assert check_eligibility(profile.copy(update={"region": None}), program).undetermined


def test_required_qualification_and_restart_reason(profile):
    program = make_program("restart", "exclusive", eligibility=EligibilityCriteria(
        required_qualifications=["restart"],
    ))

    assert not check_eligibility(profile, program).is_eligible

    unknown = check_eligibility(
        profile.copy(update={"is_restart": True, "restart_reason": "unknown"}), program
    )
    assert unknown.undetermined
    assert unknown.missing_variables == ["restart reason"]

    covid = check_eligibility(profile.copy(update={"is_restart": True, "restart_reason": "covid"}), program)
    assert covid.is_eligible and not covid.undetermined


def test_technology_evidence_is_tri_state(profile):
    program = make_program(eligibility=EligibilityCriteria(requires_technology=True))

    none_given = profile.copy(update={"has_rnd_activity": None, "has_patent": False})
    assert check_eligibility(none_given, program).undetermined

    patent = profile.copy(update={"has_patent": True})
    assert check_eligibility(patent, program).is_eligible

    neither = check_eligibility(profile, program)
    assert not neither.is_eligible
    assert neither.failed[0].reason == "insufficient evidence"


def test_funding_purpose_mismatch(profile):
    program = make_program(funding_purpose=FundingPurpose(working=False, facility=True))

    assert check_eligibility(profile, program).is_eligible

    result = check_eligibility(profile.copy(update={"requested_funding_purpose": "working"}), program)
    assert not result.is_eligible
    assert result.failed[0].reason == "purpose mismatch"


def test_credit_rating_limit(profile):
    program = make_program(eligibility=EligibilityCriteria(max_credit_rating=6))

    assert check_eligibility(profile, program).is_eligible
    assert not check_eligibility(profile.copy(update={"credit_rating": 8}), program).is_eligible
    assert check_eligibility(profile.copy(update={"credit_rating": None}), program).undetermined


def test_any_evidence():
    assert any_evidence([None, True]) is True
    assert any_evidence([False, False]) is False
    assert any_evidence([False, None]) is None
    assert any_evidence([]) is None
