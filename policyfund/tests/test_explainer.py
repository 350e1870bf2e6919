"""
Tests for the AI briefing layer with a stubbed OpenAI client.
"""

import json
from types import SimpleNamespace

from policyfund.ai.explainer import AIExplainer
from policyfund.ai.prompt_builder import build_system_prompt, build_user_prompt
from policyfund.ai.safety_rules import SAFETY_RULES
from policyfund.logic import MatchingEngine


class StubCompletions:
    def __init__(self, content):
        self.content = content
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def stub_client(content):
    completions = StubCompletions(content)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


def test_briefing_is_parsed_and_cached():
    client, completions = stub_client(json.dumps({"summary": "Two funds fit."}))
    explainer = AIExplainer(api_key="test", client=client)

    first = explainer.get_briefing({}, {"matched": []})
    second = explainer.get_briefing({}, {"matched": []})

    assert first == {"summary": "Two funds fit."}
    assert second is first
    assert len(completions.calls) == 1
    assert completions.calls[0]["response_format"] == {"type": "json_object"}


def test_identical_requests_share_one_completion(female_profile):
    client, completions = stub_client(json.dumps({"summary": "ok"}))
    explainer = AIExplainer(api_key="test", client=client)
    engine = MatchingEngine()

    first_output = engine.match(female_profile).dict()
    second_output = engine.match(female_profile).dict()
    assert first_output["request_id"] != second_output["request_id"]

    explainer.get_briefing(female_profile.dict(), first_output)
    explainer.get_briefing(female_profile.dict(), second_output)

    assert len(completions.calls) == 1
    assert len(explainer.cache) == 1


def test_different_profiles_are_cached_separately(profile, female_profile):
    client, completions = stub_client(json.dumps({"summary": "ok"}))
    explainer = AIExplainer(api_key="test", client=client)
    engine = MatchingEngine()

    explainer.get_briefing(profile.dict(), engine.match(profile).dict())
    explainer.get_briefing(female_profile.dict(), engine.match(female_profile).dict())

    assert len(completions.calls) == 2


def test_cache_evicts_least_recently_used():
    client, completions = stub_client(json.dumps({"summary": "ok"}))
    explainer = AIExplainer(api_key="test", client=client)
    explainer.max_cache_entries = 2

    explainer.get_briefing({"industry": "A"}, {})
    explainer.get_briefing({"industry": "B"}, {})
    explainer.get_briefing({"industry": "A"}, {})
    explainer.get_briefing({"industry": "C"}, {})
    assert len(explainer.cache) == 2
    assert len(completions.calls) == 3

    # A was used more recently than B, so B was dropped
    explainer.get_briefing({"industry": "A"}, {})
    assert len(completions.calls) == 3
    explainer.get_briefing({"industry": "B"}, {})
    assert len(completions.calls) == 4
    assert len(explainer.cache) == 2


def test_invalid_json_yields_no_briefing():
    client, _ = stub_client("not json")
    explainer = AIExplainer(api_key="test", client=client)

    assert explainer.get_briefing({}, {}) is None
    assert not explainer.cache


def test_missing_client_yields_no_briefing():
    explainer = AIExplainer(api_key="test", client=SimpleNamespace())
    explainer.client = None

    assert explainer.get_briefing({}, {}) is None


def test_prompts_carry_rules_and_engine_output(female_profile):
    output = MatchingEngine().match(female_profile)

    system_prompt = build_system_prompt()
    assert all(rule in system_prompt for rule in SAFETY_RULES)

    user_prompt = build_user_prompt(female_profile.dict(), output.dict())
    assert "Women-Owned Business Fund" in user_prompt
    assert "requirement unmet" in user_prompt
    assert "female" in user_prompt
    # funds dropped by truncation are not sent
    assert "kosmes-startup-base" not in user_prompt
