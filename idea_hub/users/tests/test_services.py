import pytest

from idea_hub.users.models import User
from idea_hub.users.roles import ROLE_ADMIN
from idea_hub.users.roles import ROLE_EMPLOYEE
from idea_hub.users.roles import ROLE_GUEST
from idea_hub.users.roles import ROLE_MANAGER
from idea_hub.users.roles import is_elevated
from idea_hub.users.roles import role_of
from idea_hub.users.services import UsernameTakenError
from idea_hub.users.services import register_user
from idea_hub.users.services import update_user_status
from idea_hub.users.tests.factories import UserFactory

pytestmark = pytest.mark.django_db


def test_registration_starts_pending_as_employee():
    user = register_user(
        username="newbie", email="newbie@example.com", password="Str0ng!Pass"
    )
    assert user.status == User.Status.PENDING
    assert role_of(user) == ROLE_EMPLOYEE
    assert user.check_password("Str0ng!Pass")


def test_bootstrap_admin_is_active(settings):
    settings.BOOTSTRAP_ADMIN_EMAIL = "root@example.com"
    user = register_user(
        username="root", email="ROOT@example.com", password="Str0ng!Pass"
    )
    assert user.status == User.Status.ACTIVE
    assert role_of(user) == ROLE_ADMIN


def test_username_taken_is_case_insensitive():
    UserFactory(username="Taken")
    with pytest.raises(UsernameTakenError):
        register_user(username="taken", email="t@example.com", password="x")


def test_update_status_replaces_role():
    user = UserFactory(role=ROLE_MANAGER)
    update_user_status(user, User.Status.ACTIVE, ROLE_GUEST)
    assert set(user.groups.values_list("name", flat=True)) == {ROLE_GUEST}
    assert role_of(user) == ROLE_GUEST


def test_update_status_rejects_unknown_values():
    user = UserFactory()
    with pytest.raises(ValueError, match="status"):
        update_user_status(user, "frozen")
    with pytest.raises(ValueError, match="role"):
        update_user_status(user, User.Status.ACTIVE, "Overlord")


def test_role_precedence():
    user = UserFactory(role=ROLE_MANAGER)
    assert role_of(user) == ROLE_MANAGER
    assert is_elevated(user)
    staff = UserFactory(is_staff=True)
    assert role_of(staff) == ROLE_ADMIN
    assert role_of(None) is None
