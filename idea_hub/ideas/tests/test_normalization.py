from idea_hub.ideas.models import Idea
from idea_hub.ideas.normalization import normalize_payload
from idea_hub.ideas.normalization import normalize_status
from idea_hub.ideas.normalization import split_tags


def test_legacy_statuses_map_onto_workflow_states():
    assert normalize_status("pending") == Idea.Status.SUBMITTED
    assert normalize_status("approved") == Idea.Status.APPROVED
    assert normalize_status("REJECTED") == Idea.Status.REJECTED
    assert normalize_status("needs_revision") == Idea.Status.NEEDS_REVISION
    assert normalize_status("Published") == Idea.Status.PUBLISHED
    assert normalize_status("archived") == "archived"


def test_legacy_top_level_answers_move_into_dynamic_data():
    payload = {
        "title": "Old idea",
        "estimatedCost": "5000",
        "timeline": "Short-term",
        "collaborationNeeded": "true",
        "status": "pending",
        "tags": "ops, cost , ",
    }
    data = normalize_payload(payload)

    assert data["dynamic_data"] == {
        "cost": "5000",
        "timeline": "Short-term",
        "collab": True,
    }
    assert "estimatedCost" not in data
    assert data["status"] == Idea.Status.SUBMITTED
    assert data["tags"] == ["ops", "cost"]
    # input left untouched
    assert payload["estimatedCost"] == "5000"


def test_existing_answers_win_over_legacy_fields():
    data = normalize_payload(
        {"estimatedCost": "1", "dynamicData": {"cost": "2"}, "templateId": "t1"}
    )
    assert data["dynamic_data"] == {"cost": "2"}
    assert data["template"] == "t1"


def test_current_payload_passes_through():
    payload = {"title": "New", "dynamic_data": {"benefits": "x"}, "tags": ["a"]}
    assert normalize_payload(payload) == payload


def test_split_tags():
    assert split_tags(None) == []
    assert split_tags(["a", " b ", ""]) == ["a", "b"]
