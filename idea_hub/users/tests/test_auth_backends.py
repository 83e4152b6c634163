import pytest

from idea_hub.users.auth_backends import UsernameOrEmailBackend
from idea_hub.users.models import User
from idea_hub.users.tests.factories import UserFactory

pytestmark = pytest.mark.django_db

PASSWORD = "Reviewer-2024"  # noqa: S105


@pytest.fixture
def backend():
    return UsernameOrEmailBackend()


@pytest.fixture
def reviewer():
    return UserFactory(
        username="reviewer", email="reviewer@ideas.example", password=PASSWORD
    )


@pytest.mark.parametrize("login", ["reviewer", "REVIEWER", "Reviewer@Ideas.example"])
def test_accepts_username_or_email(backend, reviewer, login):
    assert backend.authenticate(None, username=login, password=PASSWORD) == reviewer


def test_accepts_email_keyword(backend, reviewer):
    user = backend.authenticate(
        None, email="reviewer@ideas.example", password=PASSWORD
    )
    assert user == reviewer


@pytest.mark.parametrize(
    ("login", "password"),
    [("nobody", PASSWORD), ("reviewer", "not-it"), ("", PASSWORD)],
)
def test_rejects_bad_credentials(backend, reviewer, login, password):
    assert backend.authenticate(None, username=login, password=password) is None


def test_email_match_beats_lookalike_username(backend, reviewer):
    UserFactory(username="reviewer@ideas.example", email="x@ideas.example")
    user = backend.authenticate(
        None, username="reviewer@ideas.example", password=PASSWORD
    )
    assert user == reviewer


@pytest.mark.parametrize("status", [User.Status.PENDING, User.Status.REJECTED])
def test_unapproved_accounts_are_refused(backend, reviewer, status):
    reviewer.status = status
    reviewer.save(update_fields=["status"])
    assert backend.authenticate(None, username="reviewer", password=PASSWORD) is None
