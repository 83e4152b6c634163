"""User store operations: registration and account status management."""

from __future__ import annotations

import logging

from django.conf import settings
from django.contrib.auth.models import Group
from django.db import transaction

from idea_hub.users.models import User
from idea_hub.users.roles import ALL_ROLES
from idea_hub.users.roles import ROLE_ADMIN

logger = logging.getLogger(__name__)


class UsernameTakenError(Exception):
    """Raised when a registration reuses an existing username."""


def _set_role(user: User, role: str) -> None:
    if role not in ALL_ROLES:
        msg = f"Unknown role: {role}"
        raise ValueError(msg)
    group, _ = Group.objects.get_or_create(name=role)
    user.groups.remove(*user.groups.filter(name__in=ALL_ROLES))
    user.groups.add(group)


@transaction.atomic
def register_user(  # noqa: PLR0913
    *,
    username: str,
    email: str,
    password: str,
    first_name: str = "",
    last_name: str = "",
    department: str = "",
) -> User:
    """Create an account awaiting Admin approval.

    The address configured in ``BOOTSTRAP_ADMIN_EMAIL`` is activated at once
    and placed in the Admin group so a fresh install has someone to approve
    everybody else.
    """
    if User.objects.filter(username__iexact=username).exists():
        msg = "Username is already taken."
        raise UsernameTakenError(msg)

    bootstrap_email = (getattr(settings, "BOOTSTRAP_ADMIN_EMAIL", "") or "").lower()
    is_bootstrap_admin = bool(bootstrap_email) and email.lower() == bootstrap_email

    user = User.objects.create_user(
        username=username,
        email=email,
        password=password,
        first_name=first_name,
        last_name=last_name,
        department=department,
        status=User.Status.ACTIVE if is_bootstrap_admin else User.Status.PENDING,
    )
    if is_bootstrap_admin:
        _set_role(user, ROLE_ADMIN)
        logger.info("Bootstrap admin registered: %s", username)
    return user


@transaction.atomic
def update_user_status(
    user: User, status: str, role: str | None = None, department: str | None = None
) -> User:
    """Set the account status and, optionally, the role group and department."""
    if status not in User.Status.values:
        msg = f"Unknown status: {status}"
        raise ValueError(msg)
    user.status = status
    fields = ["status", "updated_at"]
    if department is not None:
        user.department = department
        fields.append("department")
    user.save(update_fields=fields)
    if role:
        _set_role(user, role)
    return user
