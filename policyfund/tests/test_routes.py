"""
Tests for the policy-fund API routes.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from policyfund import routes
from policyfund.logic import MatchingEngine, load_default_knowledge_base

from conftest import make_kb, make_program


@pytest.fixture
def client():
    app = FastAPI()
    app.include_router(routes.router)
    kb = make_kb(
        make_program("loan-a"),
        make_program("guarantee-b", "guarantee", target_scale=["small"]),
    )
    app.dependency_overrides[routes.get_engine] = lambda: MatchingEngine(kb)
    return TestClient(app)


class FakeExplainer:
    def __init__(self):
        self.calls = []

    def get_briefing(self, company_profile, engine_output):
        self.calls.append(engine_output["request_id"])
        return {"summary": "ok"}


def test_match(client):
    response = client.post("/policy-fund/match", json={
        "company_profile": {"company_size": "small", "industry": "it_service"},
    })

    assert response.status_code == 200
    data = response.json()
    assert [m["program_id"] for m in data["matched"]] == ["guarantee-b", "loan-a"]
    assert data["matched"][0]["label"] == "plan-B"
    assert data["track_decision"]["blocked_tracks"] == ["exclusive"]
    assert data["ai_briefing"] is None


def test_match_respects_max_matched(client):
    response = client.post("/policy-fund/match", json={
        "company_profile": {"company_size": "small"},
        "max_matched": 1,
    })

    data = response.json()
    assert len(data["matched"]) == 1
    assert data["unranked_program_ids"] == ["loan-a"]


def test_invalid_profile_returns_400(client):
    response = client.post("/policy-fund/match", json={
        "company_profile": {"company_size": "huge"},
    })

    assert response.status_code == 400
    assert "Invalid company profile" in response.json()["detail"]


def test_match_with_briefing(client, monkeypatch):
    fake = FakeExplainer()
    monkeypatch.setattr(routes, "explainer", fake)

    response = client.post("/policy-fund/match", json={
        "company_profile": {"company_size": "small"},
        "explain": True,
    })

    data = response.json()
    assert data["ai_briefing"] == {"summary": "ok"}
    assert fake.calls == [data["request_id"]]


def test_list_programs(client):
    data = client.get("/policy-fund/programs").json()
    assert data["count"] == 2

    guarantees = client.get("/policy-fund/programs", params={"track": "guarantee"}).json()
    assert [p["program_id"] for p in guarantees["programs"]] == ["guarantee-b"]
    assert guarantees["programs"][0]["agency"] == "Agency"


def test_list_programs_by_institution_and_track(client):
    both = client.get("/policy-fund/programs", params={"institution": "agency", "track": "guarantee"}).json()
    assert [p["program_id"] for p in both["programs"]] == ["guarantee-b"]

    by_institution = client.get("/policy-fund/programs", params={"institution": "agency"}).json()
    assert [p["program_id"] for p in by_institution["programs"]] == ["loan-a", "guarantee-b"]

    unknown = client.get("/policy-fund/programs", params={"institution": "nobody"}).json()
    assert unknown == {"programs": [], "count": 0}


def test_get_program(client):
    response = client.get("/policy-fund/programs/loan-a")
    assert response.status_code == 200
    assert response.json()["institution"]["name"] == "Agency"

    assert client.get("/policy-fund/programs/unknown").status_code == 404


def test_health(client):
    data = client.get("/policy-fund/health").json()
    assert data["status"] == "ok"
    assert data["programs"] == 2


def test_default_engine_uses_built_in_catalog(monkeypatch):
    monkeypatch.setattr(routes.config, "CATALOG_PATH", None)
    monkeypatch.setattr(routes.config, "SCORING_TABLE_PATH", None)
    routes.get_engine.cache_clear()
    try:
        engine = routes.get_engine()
        assert engine.knowledge_base is load_default_knowledge_base()
    finally:
        routes.get_engine.cache_clear()
