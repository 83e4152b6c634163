"""Idea status state machine and who may drive it.

Managers (Admins included) move submitted work along; authors may only
submit their own drafts or revisions and edit content while the idea is
still theirs to change.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.utils import timezone

from idea_hub.ideas.models import Idea

if TYPE_CHECKING:
    from datetime import datetime

    from idea_hub.ideas.actors import Actor

logger = logging.getLogger(__name__)

Status = Idea.Status

MANAGER_TRANSITIONS: dict[str, frozenset[str]] = {
    Status.SUBMITTED: frozenset(
        {Status.APPROVED, Status.REJECTED, Status.NEEDS_REVISION}
    ),
    Status.APPROVED: frozenset(
        {Status.PUBLISHED, Status.REJECTED, Status.NEEDS_REVISION}
    ),
    Status.PUBLISHED: frozenset(
        {Status.APPROVED, Status.REJECTED, Status.NEEDS_REVISION}
    ),
    # reconsideration; publishing still goes through Approved
    Status.REJECTED: frozenset({Status.APPROVED, Status.NEEDS_REVISION}),
}

AUTHOR_TRANSITIONS: dict[str, frozenset[str]] = {
    Status.DRAFT: frozenset({Status.SUBMITTED}),
    Status.NEEDS_REVISION: frozenset({Status.SUBMITTED}),
}

AUTHOR_EDITABLE = frozenset({Status.DRAFT, Status.NEEDS_REVISION, Status.SUBMITTED})
CREATION_STATUSES = frozenset({Status.DRAFT, Status.SUBMITTED})


class WorkflowError(Exception):
    """Base class for rejected workflow operations."""


class TransitionNotAllowed(WorkflowError):  # noqa: N818
    def __init__(self, current: str, target: str, actor: Actor | None = None):
        self.current = current
        self.target = target
        self.actor = actor
        role = getattr(actor, "role", None) or "anonymous"
        super().__init__(
            f"Transition {current} -> {target} is not allowed (requested by {role})."
        )


class ActorNotAuthorized(WorkflowError):  # noqa: N818
    def __init__(self, message: str, actor: Actor | None = None):
        self.actor = actor
        super().__init__(message)


def allowed_transitions(idea, actor: Actor) -> set[str]:
    """Target statuses ``actor`` may move ``idea`` to right now."""
    targets: set[str] = set()
    if actor.is_manager:
        targets |= MANAGER_TRANSITIONS.get(idea.status, frozenset())
    if actor.is_author_of(idea):
        targets |= AUTHOR_TRANSITIONS.get(idea.status, frozenset())
    return targets


def check_transition(idea, target: str, actor: Actor) -> None:
    current = idea.status
    if target in MANAGER_TRANSITIONS.get(current, frozenset()):
        if not actor.is_manager:
            logger.info("Denied %s -> %s for role %s", current, target, actor.role)
            msg = (
                f"Only a Manager or Admin can move an idea from {current} "
                f"to {target}."
            )
            raise ActorNotAuthorized(msg, actor)
        return
    if target in AUTHOR_TRANSITIONS.get(current, frozenset()):
        if not actor.is_author_of(idea):
            logger.info("Denied %s -> %s for non-author", current, target)
            msg = f"Only the author can move an idea from {current} to {target}."
            raise ActorNotAuthorized(msg, actor)
        return
    logger.info("Rejected transition %s -> %s", current, target)
    raise TransitionNotAllowed(current, target, actor)


def transition(idea, target: str, actor: Actor, now: datetime | None = None):
    """Validate and apply a status change in memory.

    Only ``status`` and ``updated_at`` change; the caller persists.
    """
    if target not in Status.values:
        raise TransitionNotAllowed(idea.status, str(target), actor)
    check_transition(idea, target, actor)
    idea.status = target
    idea.updated_at = now or timezone.now()
    return idea


def check_edit(idea, actor: Actor) -> None:
    """Content edits are reserved to the author while the idea is open."""
    if not actor.is_author_of(idea):
        msg = "Only the author can edit this idea."
        raise ActorNotAuthorized(msg, actor)
    if idea.status not in AUTHOR_EDITABLE:
        msg = f"An idea in {idea.status} can no longer be edited by its author."
        raise ActorNotAuthorized(msg, actor)


def initial_status(requested: str | None) -> str:
    """Status a new idea starts in: Draft unless the author submits at once."""
    if not requested:
        return Status.DRAFT
    if requested not in CREATION_STATUSES:
        raise TransitionNotAllowed("(new)", requested)
    return requested
