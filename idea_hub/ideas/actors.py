from __future__ import annotations

from dataclasses import dataclass

from idea_hub.users.roles import ROLE_ADMIN
from idea_hub.users.roles import ROLE_EMPLOYEE
from idea_hub.users.roles import ROLE_MANAGER
from idea_hub.users.roles import role_of


@dataclass(frozen=True)
class Actor:
    """Who is asking: the user id and the effective role name."""

    user_id: object | None
    role: str | None = ROLE_EMPLOYEE
    name: str = ""

    @classmethod
    def from_user(cls, user) -> Actor:
        if not (user and getattr(user, "is_authenticated", False)):
            return cls(user_id=None, role=None)
        return cls(
            user_id=user.pk,
            role=role_of(user),
            name=getattr(user, "display_name", "") or user.get_username(),
        )

    @property
    def is_manager(self) -> bool:
        return self.role in (ROLE_ADMIN, ROLE_MANAGER)

    def is_author_of(self, idea) -> bool:
        author_id = getattr(idea, "author_id", None)
        return (
            self.user_id is not None
            and author_id is not None
            and str(author_id) == str(self.user_id)
        )
