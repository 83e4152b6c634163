from unittest import mock

import pytest

from idea_hub.formtemplates.dimensions import DEFAULT_RATING_DIMENSIONS
from idea_hub.ideas import assistant
from idea_hub.ideas.models import Idea

CLIENT_FACTORY = "idea_hub.ideas.assistant.get_llm_client_from_settings"


class FakeClient:
    def __init__(self, json_data=None, text=None):
        self.json_data = json_data
        self.text = text
        self.prompts: list[str] = []

    def generate_json(self, prompt, system=None):
        self.prompts.append(prompt)
        return self.json_data

    def generate_text(self, prompt, system=None):
        self.prompts.append(prompt)
        return self.text


@pytest.fixture
def idea():
    return Idea(title="Solar roof", description="Panels on the warehouse")


def test_disabled_assistant_gives_no_suggestion(idea):
    with mock.patch(CLIENT_FACTORY, return_value=None):
        assert assistant.suggest_evaluation(idea, DEFAULT_RATING_DIMENSIONS) is None
        assert assistant.analyze_for_manager(idea) is None
        assert assistant.enhance_text("draft text") == "draft text"
        assert assistant.find_duplicate(idea, [Idea(title="x")]) is None


def test_suggestion_scores_are_clamped_and_filtered(idea):
    client = FakeClient(
        {
            "scores": {"impact": 9, "feasibility": 0, "roi": "3", "bogus": 5},
            "comment": "Promising",
        }
    )
    with mock.patch(CLIENT_FACTORY, return_value=client):
        result = assistant.suggest_evaluation(idea, DEFAULT_RATING_DIMENSIONS)
    assert result == {
        "scores": {"impact": 5, "feasibility": 1, "roi": 3},
        "comment": "Promising",
    }
    assert "Solar roof" in client.prompts[0]


def test_flat_suggestion_shape_is_accepted(idea):
    client = FakeClient({"impact": 4, "risk": 2})
    with mock.patch(CLIENT_FACTORY, return_value=client):
        result = assistant.suggest_evaluation(idea, DEFAULT_RATING_DIMENSIONS)
    assert result["scores"] == {"impact": 4, "risk": 2}


def test_unusable_suggestion_is_dropped(idea):
    with mock.patch(CLIENT_FACTORY, return_value=FakeClient(["not", "a", "dict"])):
        assert assistant.suggest_evaluation(idea, DEFAULT_RATING_DIMENSIONS) is None


def test_enhance_text_falls_back_on_failure():
    with mock.patch(CLIENT_FACTORY, return_value=FakeClient(text=None)):
        assert assistant.enhance_text("keep me") == "keep me"
    with mock.patch(CLIENT_FACTORY, return_value=FakeClient(text="Better")):
        assert assistant.enhance_text("keep me") == "Better"


def test_manager_analysis(idea):
    client = FakeClient({"summary": "Good", "pros": ["cheap"], "cons": []})
    with mock.patch(CLIENT_FACTORY, return_value=client):
        assert assistant.analyze_for_manager(idea) == {
            "summary": "Good",
            "pros": ["cheap"],
            "cons": [],
        }


def test_find_duplicate_only_returns_known_candidates(idea):
    other = Idea(title="Roof panels")
    client = FakeClient(
        {"duplicate": True, "match_id": str(other.pk), "reason": "Same goal"}
    )
    with mock.patch(CLIENT_FACTORY, return_value=client):
        flag = assistant.find_duplicate(idea, [idea, other])
    assert flag == {
        "match_id": str(other.pk),
        "match_title": "Roof panels",
        "reason": "Same goal",
    }

    client = FakeClient({"duplicate": True, "match_id": "nope"})
    with mock.patch(CLIENT_FACTORY, return_value=client):
        assert assistant.find_duplicate(idea, [other]) is None
