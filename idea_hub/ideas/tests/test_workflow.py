import pytest

from idea_hub.ideas import workflow
from idea_hub.ideas.actors import Actor
from idea_hub.ideas.models import Idea
from idea_hub.users.roles import ROLE_ADMIN
from idea_hub.users.roles import ROLE_EMPLOYEE
from idea_hub.users.roles import ROLE_GUEST
from idea_hub.users.roles import ROLE_MANAGER

Status = Idea.Status

AUTHOR = Actor(user_id=1, role=ROLE_EMPLOYEE, name="Author")
OTHER = Actor(user_id=2, role=ROLE_EMPLOYEE, name="Other")
MANAGER = Actor(user_id=3, role=ROLE_MANAGER, name="Manager")
ADMIN = Actor(user_id=4, role=ROLE_ADMIN, name="Admin")
GUEST = Actor(user_id=5, role=ROLE_GUEST, name="Guest")


def make_idea(status):
    return Idea(title="Idea", status=status, author_id=1)


def test_review_path_to_published():
    idea = make_idea(Status.SUBMITTED)
    workflow.transition(idea, Status.APPROVED, MANAGER)
    assert idea.status == Status.APPROVED
    workflow.transition(idea, Status.PUBLISHED, MANAGER)
    assert idea.status == Status.PUBLISHED
    assert idea.updated_at is not None


def test_admin_counts_as_manager():
    idea = make_idea(Status.SUBMITTED)
    workflow.transition(idea, Status.REJECTED, ADMIN)
    assert idea.status == Status.REJECTED


def test_draft_cannot_jump_to_published():
    idea = make_idea(Status.DRAFT)
    with pytest.raises(workflow.TransitionNotAllowed) as excinfo:
        workflow.transition(idea, Status.PUBLISHED, MANAGER)
    assert "Draft" in str(excinfo.value)
    assert "Published" in str(excinfo.value)
    assert idea.status == Status.DRAFT


def test_author_cannot_approve_own_idea():
    idea = make_idea(Status.SUBMITTED)
    with pytest.raises(workflow.ActorNotAuthorized):
        workflow.transition(idea, Status.APPROVED, AUTHOR)
    assert idea.status == Status.SUBMITTED


def test_author_submits_draft_and_revision():
    idea = make_idea(Status.DRAFT)
    workflow.transition(idea, Status.SUBMITTED, AUTHOR)
    assert idea.status == Status.SUBMITTED

    idea = make_idea(Status.NEEDS_REVISION)
    workflow.transition(idea, Status.SUBMITTED, AUTHOR)
    assert idea.status == Status.SUBMITTED


def test_only_author_may_submit():
    idea = make_idea(Status.DRAFT)
    with pytest.raises(workflow.ActorNotAuthorized):
        workflow.transition(idea, Status.SUBMITTED, OTHER)
    with pytest.raises(workflow.ActorNotAuthorized):
        workflow.transition(idea, Status.SUBMITTED, MANAGER)


def test_rejected_idea_can_be_reconsidered():
    idea = make_idea(Status.REJECTED)
    assert workflow.allowed_transitions(idea, MANAGER) == {
        Status.APPROVED,
        Status.NEEDS_REVISION,
    }
    workflow.transition(idea, Status.APPROVED, MANAGER)
    assert idea.status == Status.APPROVED


def test_rejected_cannot_jump_to_published_or_be_reopened_by_author():
    idea = make_idea(Status.REJECTED)
    with pytest.raises(workflow.TransitionNotAllowed):
        workflow.transition(idea, Status.PUBLISHED, MANAGER)
    with pytest.raises(workflow.ActorNotAuthorized):
        workflow.transition(idea, Status.APPROVED, AUTHOR)


def test_unknown_target_rejected():
    idea = make_idea(Status.SUBMITTED)
    with pytest.raises(workflow.TransitionNotAllowed):
        workflow.transition(idea, "Archived", MANAGER)


def test_published_can_be_pulled_back():
    idea = make_idea(Status.PUBLISHED)
    assert workflow.allowed_transitions(idea, MANAGER) == {
        Status.APPROVED,
        Status.REJECTED,
        Status.NEEDS_REVISION,
    }


def test_allowed_transitions_per_actor():
    draft = make_idea(Status.DRAFT)
    assert workflow.allowed_transitions(draft, AUTHOR) == {Status.SUBMITTED}
    assert workflow.allowed_transitions(draft, MANAGER) == set()
    assert workflow.allowed_transitions(draft, GUEST) == set()


def test_check_edit():
    workflow.check_edit(make_idea(Status.DRAFT), AUTHOR)
    workflow.check_edit(make_idea(Status.NEEDS_REVISION), AUTHOR)
    with pytest.raises(workflow.ActorNotAuthorized):
        workflow.check_edit(make_idea(Status.APPROVED), AUTHOR)
    with pytest.raises(workflow.ActorNotAuthorized):
        workflow.check_edit(make_idea(Status.DRAFT), OTHER)


def test_initial_status():
    assert workflow.initial_status(None) == Status.DRAFT
    assert workflow.initial_status(Status.SUBMITTED) == Status.SUBMITTED
    with pytest.raises(workflow.TransitionNotAllowed):
        workflow.initial_status(Status.PUBLISHED)
