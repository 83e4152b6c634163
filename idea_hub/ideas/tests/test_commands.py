import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from idea_hub.ideas.models import Idea
from idea_hub.org.tests.factories import DepartmentFactory

pytestmark = pytest.mark.django_db


@pytest.fixture
def legacy_file(tmp_path, user):
    docs = [
        {
            "title": "Old cost saver",
            "description": "From the previous system",
            "authorEmail": user.email,
            "status": "approved",
            "estimatedCost": "1200",
            "tags": "ops,cost",
            "ratings": {
                "9": {
                    "managerName": "Dana",
                    "percentage": 80,
                    "grade": "B",
                    "details": [
                        {"label": "Impact on Business Goals", "score": 5},
                        {"label": "Feasibility", "score": 5},
                        {"label": "Cost vs. Benefit", "score": 5},
                        {"label": "Innovation Level", "score": 5},
                        {"label": "Risk Level", "score": 5},
                    ],
                }
            },
            "createdAt": "2023-01-02T03:04:05+00:00",
        },
        {"title": "Unknown status", "status": "archived"},
        {"description": "no title"},
    ]
    path = tmp_path / "ideas.json"
    path.write_text(json.dumps(docs), encoding="utf-8")
    return path


def test_import_normalizes_legacy_documents(legacy_file, user):
    out = StringIO()
    call_command("import_ideas", str(legacy_file), stdout=out, stderr=StringIO())

    assert "Imported 1 idea(s)" in out.getvalue()
    idea = Idea.objects.get()
    assert idea.author == user
    assert idea.status == Idea.Status.APPROVED
    assert idea.dynamic_data == {"cost": "1200"}
    assert idea.tags == ["ops", "cost"]
    [rating] = idea.ratings
    assert rating["manager_id"] == "9"
    assert rating["manager_name"] == "Dana"
    assert (rating["percentage"], rating["grade"]) == (100, "A")
    assert idea.created_at.year == 2023


def test_dry_run_writes_nothing(legacy_file):
    out = StringIO()
    call_command(
        "import_ideas", str(legacy_file), "--dry-run", stdout=out, stderr=StringIO()
    )
    assert "Validated 1 idea(s)" in out.getvalue()
    assert not Idea.objects.exists()


def test_unknown_fallback_author(legacy_file):
    with pytest.raises(CommandError):
        call_command("import_ideas", str(legacy_file), "--author", "ghost")


def test_unreadable_file(tmp_path):
    with pytest.raises(CommandError):
        call_command("import_ideas", str(tmp_path / "missing.json"))


def test_imported_ratings_are_regraded_once_per_manager(tmp_path, user):
    docs = [
        {
            "title": "Duplicate reviews",
            "authorEmail": user.email,
            "status": "Approved",
            "ratings": [
                {"manager_id": "m1", "scores": {"impact": 2}, "percentage": 90},
                {"manager_id": "m2", "scores": {"impact": 3}},
                {
                    "manager_id": "m1",
                    "percentage": 10,
                    "grade": "A",
                    "details": [{"dimension_id": "impact", "score": 5}],
                },
                {"percentage": 50},
            ],
        }
    ]
    path = tmp_path / "ideas.json"
    path.write_text(json.dumps(docs), encoding="utf-8")

    call_command("import_ideas", str(path), stdout=StringIO(), stderr=StringIO())

    ratings = Idea.objects.get().ratings
    assert [r["manager_id"] for r in ratings] == ["m2", "m1"]
    latest = ratings[-1]
    # impact 5 (weight 30), every other dimension defaults to 1
    assert latest["percentage"] == 44
    assert latest["grade"] == "C"
    assert {"dimension_id": "impact", "score": 5} in latest["details"]


def test_import_resolves_departments(tmp_path, user):
    DepartmentFactory(name="Logistics")
    docs = [
        {
            "title": "Known",
            "authorEmail": user.email,
            "status": "Submitted",
            "department": "logistics",
        },
        {
            "title": "Stale",
            "authorEmail": user.email,
            "status": "Submitted",
            "department": "Dissolved",
        },
    ]
    path = tmp_path / "ideas.json"
    path.write_text(json.dumps(docs), encoding="utf-8")
    err = StringIO()

    call_command("import_ideas", str(path), stdout=StringIO(), stderr=err)

    assert Idea.objects.get(title="Known").department == "Logistics"
    assert Idea.objects.get(title="Stale").department == user.department
    assert "Unknown department: Dissolved" in err.getvalue()
