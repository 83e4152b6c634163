import pytest

from idea_hub.users.models import User
from idea_hub.users.tests.factories import UserFactory


@pytest.fixture
def user(db) -> User:
    return UserFactory()
