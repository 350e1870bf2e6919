"""
End-to-end tests of the matching engine: bucket partition, ordering
guarantees and reference scenarios.
"""

import pytest

from policyfund.logic import MatchingEngine, get_matches, load_default_knowledge_base
from policyfund.logic.constants import CompanySize
from policyfund.logic.contracts import EligibilityCriteria, ScoringTable

from conftest import make_kb, make_program


def all_ids(output):
    return (
        [m.program_id for m in output.matched]
        + output.unranked_program_ids
        + [c.program_id for c in output.conditional]
        + [e.program_id for e in output.excluded]
    )


# =============================================================================
# PROPERTIES
# =============================================================================

def test_every_program_lands_in_exactly_one_bucket(profile, female_profile):
    kb = load_default_knowledge_base()
    engine = MatchingEngine(kb)

    for company in (
        profile,
        female_profile,
        profile.copy(update={"business_age": None, "credit_rating": None, "region": None}),
        profile.copy(update={"tax_delinquency_status": "installment", "company_size": "medium"}),
    ):
        output = engine.match(company)
        seen = all_ids(output)
        assert len(seen) == len(set(seen)) == len(kb)
        assert set(seen) == {p.id for p in kb}


def test_matching_is_idempotent(female_profile):
    engine = MatchingEngine()
    first = engine.match(female_profile)
    second = engine.match(female_profile)

    volatile = {"request_id", "processing_time_ms"}
    assert first.dict(exclude=volatile) == second.dict(exclude=volatile)


@pytest.mark.parametrize("size", [s.value for s in CompanySize])
def test_matched_size_scores_are_exact_or_unrestricted(female_profile, size):
    output = MatchingEngine(max_matched=20).match(female_profile.copy(update={"company_size": size}))

    assert {m.size_match_score for m in output.matched} <= {100, 50}


def test_exclusive_entries_come_first(female_profile):
    output = MatchingEngine(max_matched=20).match(female_profile)
    tracks = [m.track for m in output.matched]

    assert "exclusive" in tracks
    first_other = next(i for i, t in enumerate(tracks) if t != "exclusive")
    assert all(t != "exclusive" for t in tracks[first_other:])


def test_guarantee_never_precedes_loan_of_equal_size_match(female_profile):
    output = MatchingEngine(max_matched=20).match(female_profile)

    for earlier, later in zip(output.matched, output.matched[1:]):
        if (earlier.track == "exclusive") != (later.track == "exclusive"):
            continue
        if earlier.size_match_score == later.size_match_score:
            assert not (earlier.track == "guarantee" and later.track != "guarantee")


def test_ranks_are_consecutive_and_exclusive_has_no_confidence(female_profile):
    output = MatchingEngine().match(female_profile)

    assert [m.rank for m in output.matched] == list(range(1, len(output.matched) + 1))
    for fund in output.matched:
        assert fund.why
        if fund.track == "exclusive":
            assert fund.confidence is None
            assert fund.label == "exclusive-priority"
        else:
            assert fund.confidence in ("HIGH", "MEDIUM")


# =============================================================================
# SCENARIOS
# =============================================================================

def test_target_scale_program_ranks_first(profile):
    flat = ScoringTable(
        base_score=70,
        default_rule_weight=0,
        rule_weights={},
        track_bonus={},
    )
    kb = make_kb(
        make_program("unrestricted"),
        make_program("micro-only", target_scale=["micro"]),
    )

    output = MatchingEngine(kb, flat).match(profile)

    assert [m.program_id for m in output.matched] == ["micro-only", "unrestricted"]
    assert [m.fit_score for m in output.matched] == [70.0, 70.0]
    assert output.matched[0].size_match_score == 100
    assert output.matched[1].size_match_score == 50


def test_missing_tax_resolution_date_is_conditional(profile):
    kb = make_kb(make_program("general"))
    resolving = profile.copy(update={"tax_delinquency_status": "resolving"})

    output = MatchingEngine(kb).match(resolving)

    assert output.matched == []
    assert len(output.conditional) == 1
    assert output.conditional[0].what_is_missing == ["tax-delinquency resolution date"]


def test_medium_only_program_excludes_micro_company(profile):
    kb = make_kb(make_program("mid", target_scale=["medium"]))

    output = MatchingEngine(kb).match(profile)

    assert len(output.excluded) == 1
    assert output.excluded[0].excluded_reason == "company-size mismatch"


def test_six_programs_truncate_to_five(profile):
    kb = make_kb(*[make_program(f"p{i}") for i in range(6)])

    output = get_matches(profile, kb)

    assert output.total_matched == 5
    assert output.total_eligible == 6
    assert [m.rank for m in output.matched] == [1, 2, 3, 4, 5]
    assert output.unranked_program_ids == ["p5"]


def test_max_matched_below_one_is_rejected(profile):
    kb = make_kb(make_program("a"))

    with pytest.raises(ValueError):
        MatchingEngine(kb, max_matched=0)

    engine = MatchingEngine(kb)
    with pytest.raises(ValueError):
        engine.match(profile, max_matched=-1)
    with pytest.raises(ValueError):
        engine.match(profile, max_matched=0)

    assert engine.match(profile, max_matched=1).total_matched == 1


def test_low_match_count_warns(profile, caplog):
    kb = make_kb(make_program("only"))

    output = MatchingEngine(kb).match(profile)

    assert any("Low match count" in w for w in output.warnings)
    assert "Low match count" in caplog.text


def test_built_in_catalog_for_female_micro_manufacturer(female_profile):
    output = MatchingEngine().match(female_profile)

    assert [m.program_id for m in output.matched] == [
        "semas-women-owned",
        "semas-micro-manufacturer",
        "seoul-small-business-guarantee",
        "kosmes-youth-employment",
        "mss-job-creation",
    ]
    assert [m.label for m in output.matched] == [
        "exclusive-priority", "alternative", "plan-B", "plan-B", "plan-B",
    ]
    assert set(output.unranked_program_ids) == {
        "kosmes-startup-base", "kodit-general-guarantee", "kodit-startup-guarantee",
    }
    assert output.conditional == []

    excluded = {e.program_id: e.excluded_reason for e in output.excluded}
    assert excluded["kosmes-restart"] == "requirement unmet"
    assert excluded["kosmes-new-market"] == "insufficient evidence"
    assert excluded["motie-midsize-ladder"] == "company-size mismatch"
    assert excluded["gyeonggi-small-business-guarantee"] == "requirement unmet"


def test_check_program_details(profile):
    engine = MatchingEngine(make_kb(make_program("a", eligibility=EligibilityCriteria(max_credit_rating=3))))

    detail = engine.check_program(profile, "a")
    assert detail["bucket"] == "excluded"
    assert detail["checks"]["failed"][0]["rule"] == "credit rating"

    assert engine.check_program(profile, "missing") is None


def test_match_from_dict():
    output = MatchingEngine().match_from_dict({"company_size": "small", "industry": "it_service"})
    assert output.total_programs_evaluated == len(load_default_knowledge_base())
