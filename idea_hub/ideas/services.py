"""Idea store operations.

Each mutation reloads the idea under a row lock, applies the pure core
(workflow, ledger, leaderboard rules), saves and writes an audit entry. A
rejected operation raises before anything is saved.
"""

from __future__ import annotations

import logging
import uuid
from contextlib import suppress
from typing import TYPE_CHECKING
from typing import Any

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from idea_hub.audit.utils import log_action
from idea_hub.formtemplates.models import FormTemplate
from idea_hub.formtemplates.schema import validate_dynamic_data
from idea_hub.formtemplates.services import list_templates
from idea_hub.ideas import ledger
from idea_hub.ideas import leaderboard
from idea_hub.ideas import workflow
from idea_hub.ideas.actors import Actor
from idea_hub.ideas.models import Idea
from idea_hub.ideas.normalization import normalize_payload
from idea_hub.notifications.models import Notification
from idea_hub.notifications.services import notify
from idea_hub.users.roles import ROLE_GUEST

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

Status = Idea.Status

CONTENT_FIELDS = ("title", "description", "category", "cover_image", "tags")


class IdeaActionError(Exception):
    """Raised when a non-workflow action (comment, join) cannot be applied."""


def _audit(action: str, user, idea: Idea, **kwargs: Any) -> None:
    with suppress(Exception):
        log_action(
            action,
            actor=user,
            model_name="Idea",
            record_id=idea.pk,
            **kwargs,
        )


def _related_link(idea: Idea) -> str:
    return f"/ideas/{idea.pk}/"


def _locked(idea: Idea) -> Idea:
    return Idea.objects.select_for_update().get(pk=idea.pk)


def _ensure_can_contribute(actor: Actor) -> None:
    if actor.user_id is None or actor.role == ROLE_GUEST:
        msg = "Guest accounts have read-only access."
        raise workflow.ActorNotAuthorized(msg, actor)


def _resolve_template(value: Any) -> FormTemplate | None:
    if value in (None, ""):
        return None
    if isinstance(value, FormTemplate):
        return value
    return FormTemplate.objects.filter(pk=str(value)).first()


def _resolve_parent(value: Any) -> Idea | None:
    if value in (None, ""):
        return None
    if isinstance(value, Idea):
        return value
    try:
        return Idea.objects.filter(pk=uuid.UUID(str(value))).first()
    except ValueError:
        return Idea.objects.filter(public_id=str(value).upper()).first()


def _validated_answers(idea: Idea, data: Any) -> dict[str, Any]:
    return validate_dynamic_data(
        idea.template, data, partial=idea.status == Status.DRAFT
    )


@transaction.atomic
def create_idea(user, data: Mapping[str, Any]) -> Idea:
    actor = Actor.from_user(user)
    _ensure_can_contribute(actor)
    data = normalize_payload(data)

    template = _resolve_template(data.get("template"))
    idea = Idea(
        author=user,
        author_name=getattr(user, "display_name", "") or user.get_username(),
        department=getattr(user, "department", "") or "",
        title=data.get("title", ""),
        description=data.get("description", ""),
        category=data.get("category", ""),
        cover_image=data.get("cover_image", ""),
        tags=data.get("tags") or [],
        status=workflow.initial_status(data.get("status")),
        template=template,
        template_name=template.name if template else data.get("template_name", ""),
        parent_idea=_resolve_parent(data.get("parent_idea")),
    )
    idea.dynamic_data = _validated_answers(idea, data.get("dynamic_data"))
    idea.save()
    logger.info(
        "Idea %s created by %s in %s", idea.public_id, actor.user_id, idea.status
    )
    _audit(
        "idea.create",
        user,
        idea,
        after={"status": idea.status, "title": idea.title},
    )
    return idea


@transaction.atomic
def update_idea(idea: Idea, user, data: Mapping[str, Any]) -> Idea:
    """Author content edit. Status only changes when the payload asks for it."""
    actor = Actor.from_user(user)
    idea = _locked(idea)
    workflow.check_edit(idea, actor)
    data = normalize_payload(data)
    before = {"status": idea.status, "title": idea.title}

    target = data.get("status")
    if target and target != idea.status:
        workflow.transition(idea, target, actor)

    for name in CONTENT_FIELDS:
        if name in data:
            setattr(idea, name, data[name] if data[name] is not None else "")
    if "template" in data:
        idea.template = _resolve_template(data["template"])
        idea.template_name = idea.template.name if idea.template else ""
    if "parent_idea" in data:
        parent = _resolve_parent(data["parent_idea"])
        if parent is not None and parent.pk == idea.pk:
            msg = "An idea cannot contribute to itself."
            raise IdeaActionError(msg)
        idea.parent_idea = parent
    answers = data.get("dynamic_data", idea.dynamic_data)
    idea.dynamic_data = _validated_answers(idea, answers)

    idea.save()
    _audit(
        "idea.update",
        user,
        idea,
        before=before,
        after={"status": idea.status, "title": idea.title},
    )
    return idea


@transaction.atomic
def delete_idea(idea: Idea, user) -> None:
    actor = Actor.from_user(user)
    own_draft = actor.is_author_of(idea) and idea.status == Status.DRAFT
    if not (actor.is_manager or own_draft):
        msg = "Only managers, or the author of a draft, can delete an idea."
        raise workflow.ActorNotAuthorized(msg, actor)
    _audit(
        "idea.delete",
        user,
        idea,
        before={"status": idea.status, "title": idea.title},
    )
    logger.info("Idea %s deleted by %s", idea.public_id, actor.user_id)
    idea.delete()


@transaction.atomic
def change_status(idea: Idea, user, target: str) -> Idea:
    actor = Actor.from_user(user)
    idea = _locked(idea)
    previous = idea.status
    workflow.transition(idea, target, actor)
    if target == Status.SUBMITTED:
        idea.dynamic_data = validate_dynamic_data(idea.template, idea.dynamic_data)
    idea.save(update_fields=["status", "dynamic_data", "updated_at"])
    logger.info("Idea %s moved %s -> %s", idea.public_id, previous, target)
    _audit(
        "idea.transition",
        user,
        idea,
        message=f"{previous} -> {target}",
        before={"status": previous},
        after={"status": target},
    )
    return idea


@transaction.atomic
def rate_idea(
    idea: Idea, user, scores: Mapping[str, Any] | None, comment: str = ""
) -> Idea:
    actor = Actor.from_user(user)
    if not actor.is_manager:
        msg = "Only a Manager or Admin can rate ideas."
        raise workflow.ActorNotAuthorized(msg, actor)
    idea = _locked(idea)
    previous = ledger.rating_by(idea, actor.user_id)
    rating = ledger.submit(
        idea,
        actor.user_id,
        actor.name,
        scores,
        comment,
        list_templates(),
        now=timezone.now(),
    )
    idea.save(update_fields=["ratings", "updated_at"])
    _audit(
        "idea.rate",
        user,
        idea,
        before={"percentage": previous["percentage"]} if previous else None,
        after={"percentage": rating["percentage"], "grade": rating["grade"]},
    )
    notify(
        [idea.author],
        title="Your idea was rated",
        message=(
            f'{actor.name} rated "{idea.title}": '
            f"{rating['percentage']}% ({rating['grade']})."
        ),
        notification_type=Notification.Type.RATING,
        related_link=_related_link(idea),
        exclude=user,
    )
    return idea


@transaction.atomic
def add_comment(idea: Idea, user, text: str) -> dict[str, Any]:
    actor = Actor.from_user(user)
    _ensure_can_contribute(actor)
    if not leaderboard.is_visible(idea, actor):
        msg = "You cannot comment on this idea."
        raise workflow.ActorNotAuthorized(msg, actor)
    text = (text or "").strip()
    if not text:
        msg = "Comment text is required."
        raise IdeaActionError(msg)

    idea = _locked(idea)
    comment = {
        "id": uuid.uuid4().hex,
        "author_id": actor.user_id,
        "author_name": actor.name,
        "text": text,
        "created_at": timezone.now().isoformat(),
    }
    idea.comments = [*(idea.comments or []), comment]
    idea.save(update_fields=["comments", "updated_at"])
    notify(
        [idea.author],
        title="New comment on your idea",
        message=f'{actor.name} commented on "{idea.title}".',
        notification_type=Notification.Type.COMMENT,
        related_link=_related_link(idea),
        exclude=user,
    )
    return comment


@transaction.atomic
def join_idea(idea: Idea, user) -> Idea:
    """Add ``user`` to the collaborators of a collaboration-open idea."""
    actor = Actor.from_user(user)
    _ensure_can_contribute(actor)
    idea = _locked(idea)
    if not leaderboard.is_collaboration_open(idea):
        msg = "This idea is not open for collaboration."
        raise IdeaActionError(msg)
    if actor.is_author_of(idea):
        msg = "Authors are already part of their own idea."
        raise IdeaActionError(msg)
    if not leaderboard.is_visible(idea, actor):
        msg = "You cannot join this idea."
        raise workflow.ActorNotAuthorized(msg, actor)

    joined = {str(c.get("id")) for c in idea.collaborators or []}
    if str(actor.user_id) in joined:
        return idea
    idea.collaborators = [
        *(idea.collaborators or []),
        {
            "id": actor.user_id,
            "name": actor.name,
            "joined_at": timezone.now().isoformat(),
        },
    ]
    idea.save(update_fields=["collaborators", "updated_at"])
    _audit("idea.join", user, idea)
    notify(
        [idea.author],
        title="New collaborator",
        message=f'{actor.name} joined "{idea.title}".',
        notification_type=Notification.Type.OTHER,
        related_link=_related_link(idea),
        exclude=user,
    )
    return idea


def top_ideas(limit: int | None = None) -> list[Idea]:
    limit = limit or getattr(settings, "IDEA_TOP_N", leaderboard.DEFAULT_TOP_N)
    published = Idea.objects.filter(status=Status.PUBLISHED).order_by("created_at")
    return leaderboard.top_ideas(published, limit=limit)
