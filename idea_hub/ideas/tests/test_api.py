from unittest import mock

import pytest
from rest_framework import status
from rest_framework.test import APIClient

from idea_hub.formtemplates.services import ensure_default_template
from idea_hub.ideas import leaderboard
from idea_hub.ideas.actors import Actor
from idea_hub.ideas.models import Idea
from idea_hub.users.tests.factories import UserFactory

pytestmark = pytest.mark.django_db

Status = Idea.Status
ANSWERS = {"benefits": "Lower energy bills", "feasibility": "Easy"}
SCORES = {"impact": 4, "feasibility": 3, "roi": 4, "innovation": 4, "risk": 3}


@pytest.fixture
def template():
    return ensure_default_template()


@pytest.fixture
def author():
    return UserFactory(username="author", role="Employee")


@pytest.fixture
def manager():
    return UserFactory(username="manager", role="Manager")


def client_for(user=None):
    client = APIClient()
    if user is not None:
        client.force_authenticate(user=user)
    return client


def make_idea(author, template, **kwargs):
    kwargs.setdefault("title", "Solar roof")
    kwargs.setdefault("status", Status.DRAFT)
    kwargs.setdefault("dynamic_data", dict(ANSWERS))
    return Idea.objects.create(
        author=author,
        author_name=author.display_name,
        template=template,
        **kwargs,
    )


def test_create_and_submit_flow(author, manager, template):
    client = client_for(author)
    r = client.post(
        "/api/v1/ideas/",
        {"title": "Solar roof", "templateId": template.pk, "dynamicData": ANSWERS},
        format="json",
    )
    assert r.status_code == status.HTTP_201_CREATED, r.data
    assert r.data["status"] == Status.DRAFT
    assert r.data["allowed_transitions"] == [Status.SUBMITTED]
    idea_id = r.data["id"]

    r = client.post(
        f"/api/v1/ideas/{idea_id}/transition/", {"status": "Submitted"}, format="json"
    )
    assert r.status_code == status.HTTP_200_OK, r.data
    assert r.data["status"] == Status.SUBMITTED

    r = client.post(
        f"/api/v1/ideas/{idea_id}/transition/", {"status": "Approved"}, format="json"
    )
    assert r.status_code == status.HTTP_403_FORBIDDEN

    r = client_for(manager).post(
        f"/api/v1/ideas/{idea_id}/transition/", {"status": "approved"}, format="json"
    )
    assert r.status_code == status.HTTP_200_OK, r.data
    assert r.data["status"] == Status.APPROVED


def test_invalid_transition_is_400_naming_states(author, manager, template):
    idea = make_idea(author, template)
    r = client_for(manager).post(
        f"/api/v1/ideas/{idea.pk}/transition/", {"status": "Published"}, format="json"
    )
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    assert "Draft" in r.data["status"][0]
    assert "Published" in r.data["status"][0]


def test_missing_answers_are_reported_per_field(author, template):
    idea = make_idea(author, template, dynamic_data={})
    r = client_for(author).post(
        f"/api/v1/ideas/{idea.pk}/transition/", {"status": "Submitted"}, format="json"
    )
    assert r.status_code == status.HTTP_400_BAD_REQUEST
    assert set(r.data["dynamic_data"]) == {"benefits", "feasibility"}


def test_list_hides_other_peoples_drafts(author, manager, template):
    make_idea(author, template, title="secret draft")
    make_idea(author, template, title="public", status=Status.PUBLISHED)
    other = UserFactory(username="other", role="Employee")

    r = client_for(other).get("/api/v1/ideas/")
    assert r.status_code == status.HTTP_200_OK
    assert [i["title"] for i in r.data["results"]] == ["public"]

    r = client_for(manager).get("/api/v1/ideas/")
    assert {i["title"] for i in r.data["results"]} == {"secret draft", "public"}


def test_list_filters_by_status(author, template):
    make_idea(author, template, title="draft")
    make_idea(author, template, title="live", status=Status.PUBLISHED)
    r = client_for(author).get("/api/v1/ideas/", {"status": "Published"})
    assert [i["title"] for i in r.data["results"]] == ["live"]


def test_rating_and_summary(author, manager, template):
    idea = make_idea(author, template, status=Status.SUBMITTED)
    r = client_for(manager).post(
        f"/api/v1/ideas/{idea.pk}/ratings/",
        {"scores": SCORES, "comment": "Solid"},
        format="json",
    )
    assert r.status_code == status.HTTP_200_OK, r.data
    assert r.data["aggregate_percentage"] == 73
    assert r.data["grade"] == "B"

    r = client_for(author).get(f"/api/v1/ideas/{idea.pk}/rating-summary/")
    assert r.status_code == status.HTTP_200_OK
    assert r.data["percentage"] == 73
    assert r.data["count"] == 1

    r = client_for(author).post(
        f"/api/v1/ideas/{idea.pk}/ratings/", {"scores": SCORES}, format="json"
    )
    assert r.status_code == status.HTTP_403_FORBIDDEN


def test_dimensions_endpoint(author, template):
    idea = make_idea(author, template)
    r = client_for(author).get(f"/api/v1/ideas/{idea.pk}/dimensions/")
    assert r.status_code == status.HTTP_200_OK
    assert [d["id"] for d in r.data] == [
        "impact",
        "feasibility",
        "roi",
        "innovation",
        "risk",
    ]


def test_top_is_public_and_ranked(author, template):
    for title, pct in (("ninety", 90), ("fifty", 50), ("seventy", 70)):
        make_idea(
            author,
            template,
            title=title,
            status=Status.PUBLISHED,
            ratings=[{"manager_id": 1, "percentage": pct}],
        )
    make_idea(
        author,
        template,
        title="draft",
        ratings=[{"manager_id": 1, "percentage": 100}],
    )
    r = client_for().get("/api/v1/ideas/top/")
    assert r.status_code == status.HTTP_200_OK
    assert [i["title"] for i in r.data] == ["ninety", "seventy", "fifty"]


def test_search_respects_visibility(author, template):
    make_idea(author, template, title="Solar roof draft")
    make_idea(author, template, title="Solar carport", status=Status.PUBLISHED)
    other = UserFactory(username="other", role="Employee")

    r = client_for(other).get("/api/v1/ideas/search/", {"q": "solar"})
    assert r.status_code == status.HTTP_200_OK
    assert [i["title"] for i in r.data["results"]] == ["Solar carport"]

    r = client_for(author).get("/api/v1/ideas/search/", {"q": "SOLAR"})
    assert len(r.data["results"]) == 2


def test_collaboration_feed_and_join(author, template):
    idea = make_idea(
        author,
        template,
        status=Status.APPROVED,
        dynamic_data={**ANSWERS, "collab": True},
    )
    helper = UserFactory(username="helper", role="Employee")
    client = client_for(helper)

    r = client.get("/api/v1/ideas/collaboration/")
    assert [i["id"] for i in r.data["results"]] == [str(idea.pk)]

    r = client.post(f"/api/v1/ideas/{idea.pk}/join/")
    assert r.status_code == status.HTTP_200_OK, r.data
    assert r.data["collaborators"][0]["id"] == helper.pk


def test_comments(author, manager, template):
    idea = make_idea(author, template, status=Status.SUBMITTED)
    r = client_for(manager).post(
        f"/api/v1/ideas/{idea.pk}/comments/", {"text": "Nice"}, format="json"
    )
    assert r.status_code == status.HTTP_201_CREATED
    r = client_for(author).get(f"/api/v1/ideas/{idea.pk}/comments/")
    assert [c["text"] for c in r.data] == ["Nice"]


def test_guest_is_read_only(author, template):
    guest = UserFactory(username="guest", role="Guest")
    idea = make_idea(author, template)
    client = client_for(guest)

    assert client.get(f"/api/v1/ideas/{idea.pk}/").status_code == status.HTTP_200_OK
    r = client.post("/api/v1/ideas/", {"title": "x"}, format="json")
    assert r.status_code == status.HTTP_403_FORBIDDEN
    r = client.post(
        f"/api/v1/ideas/{idea.pk}/comments/", {"text": "hi"}, format="json"
    )
    assert r.status_code == status.HTTP_403_FORBIDDEN


def test_delete_own_draft(author, template):
    idea = make_idea(author, template)
    r = client_for(author).delete(f"/api/v1/ideas/{idea.pk}/")
    assert r.status_code == status.HTTP_204_NO_CONTENT
    assert not Idea.objects.exists()


def test_assistant_endpoints_degrade_when_disabled(author, manager, template):
    idea = make_idea(author, template, status=Status.SUBMITTED)
    r = client_for(manager).post(f"/api/v1/ideas/{idea.pk}/suggest-evaluation/")
    assert r.status_code == status.HTTP_200_OK
    assert r.data["suggestion"] is None
    assert len(r.data["dimensions"]) == 5

    r = client_for(author).post(
        "/api/v1/ideas/enhance-text/", {"text": "my idea"}, format="json"
    )
    assert r.data == {"text": "my idea", "enhanced": False}


def test_manager_analysis_is_stored(author, manager, template):
    idea = make_idea(author, template, status=Status.SUBMITTED)
    result = {"summary": "Worth it", "pros": [], "cons": []}
    with mock.patch(
        "idea_hub.ideas.assistant.analyze_for_manager", return_value=result
    ):
        r = client_for(manager).post(f"/api/v1/ideas/{idea.pk}/analysis/")
    assert r.status_code == status.HTTP_200_OK
    idea.refresh_from_db()
    assert idea.ai_summary == "Worth it"
    assert idea.status == Status.SUBMITTED


def test_list_filter_matches_visibility_rule(author, template):
    make_idea(author, template, title="own draft")
    other = UserFactory(username="other", role="Employee")
    make_idea(other, template, title="their draft")
    make_idea(other, template, title="published", status=Status.PUBLISHED)
    make_idea(other, template, title="submitted", status=Status.SUBMITTED)
    collab_values = [True, False, "Yes", " no ", "off", "maybe", 1, 0, None, ""]
    for value in collab_values:
        make_idea(
            other,
            template,
            title=f"approved {value!r}",
            status=Status.APPROVED,
            dynamic_data={**ANSWERS, "collab": value},
        )
    make_idea(other, template, title="approved unset", status=Status.APPROVED)

    everything = list(Idea.objects.all())
    for user in (author, other, UserFactory(username="guest", role="Guest")):
        actor = Actor.from_user(user)
        expected = {i.title for i in leaderboard.visible_ideas(everything, actor)}
        found = leaderboard.filter_visible(Idea.objects.all(), actor)
        assert {i.title for i in found} == expected, user.username

    r = client_for(author).get("/api/v1/ideas/")
    titles = {i["title"] for i in r.data["results"]}
    assert "own draft" in titles
    assert "their draft" not in titles
    assert {"approved True", "approved 'Yes'", "approved 'maybe'"} <= titles
    assert "approved ' no '" not in titles
