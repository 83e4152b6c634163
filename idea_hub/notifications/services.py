"""Helpers for fanning a notification out to a set of users."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.contrib.auth import get_user_model
from django.db.models import Q

from idea_hub.notifications.models import Notification
from idea_hub.users.roles import ROLE_ADMIN
from idea_hub.users.roles import ROLE_MANAGER

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)
User = get_user_model()


def reviewers():
    """Active accounts that can act on submitted ideas."""
    elevated = (
        Q(groups__name__in=[ROLE_ADMIN, ROLE_MANAGER])
        | Q(is_staff=True)
        | Q(is_superuser=True)
    )
    return (
        User.objects.filter(is_active=True, status=User.Status.ACTIVE)
        .filter(elevated)
        .distinct()
    )


def notify(  # noqa: PLR0913
    recipients: Iterable,
    *,
    title: str,
    message: str,
    notification_type: str = Notification.Type.OTHER,
    related_link: str = "",
    exclude=None,
) -> list[Notification]:
    """Create one notification per distinct recipient, skipping ``exclude``."""
    seen: set[int] = set()
    excluded_id = getattr(exclude, "pk", None)
    created: list[Notification] = []
    for user in recipients:
        if user is None or user.pk in seen or user.pk == excluded_id:
            continue
        seen.add(user.pk)
        created.append(
            Notification.objects.create(
                recipient=user,
                title=title,
                message=message,
                notification_type=notification_type,
                related_link=related_link,
            )
        )
    logger.debug("Created %d %s notification(s)", len(created), notification_type)
    return created
