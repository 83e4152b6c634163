"""Read-only views over an idea collection: visibility, top N, search."""

from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any

from django.db.models import Q
from django.db.models.fields.json import KT
from django.db.models.functions import Lower
from django.db.models.functions import Trim

from idea_hub.ideas.ledger import aggregate_percentage
from idea_hub.ideas.models import Idea
from idea_hub.users.roles import ROLE_ADMIN
from idea_hub.users.roles import ROLE_GUEST
from idea_hub.users.roles import ROLE_MANAGER

if TYPE_CHECKING:
    from collections.abc import Iterable

    from idea_hub.ideas.actors import Actor

Status = Idea.Status

DEFAULT_TOP_N = 10
# Roles that may browse every idea regardless of status
BROWSE_ALL_ROLES = frozenset({ROLE_ADMIN, ROLE_MANAGER, ROLE_GUEST})
COLLABORATION_STATUSES = frozenset(
    {Status.APPROVED, Status.PUBLISHED, Status.SUBMITTED}
)

_FALSE_STRINGS = {"", "0", "false", "no", "off"}
# collab values that read as falsy once rendered as text by the database
_FALSE_TEXTS = _FALSE_STRINGS | {"0.0", "[]", "{}"}


def _truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_STRINGS
    return bool(value)


def is_collaboration_open(idea) -> bool:
    return _truthy((idea.dynamic_data or {}).get("collab"))


def is_visible(idea, requester: Actor) -> bool:
    return (
        requester.is_author_of(idea)
        or idea.status == Status.PUBLISHED
        or (idea.status == Status.APPROVED and is_collaboration_open(idea))
        or requester.role in BROWSE_ALL_ROLES
    )


def visible_ideas(ideas: Iterable, requester: Actor) -> list:
    return [idea for idea in ideas if is_visible(idea, requester)]


def filter_visible(queryset, requester: Actor):
    """Queryset counterpart of ``is_visible``, evaluated in the database."""
    if requester.role in BROWSE_ALL_ROLES:
        return queryset
    open_collab = Q(status=Status.APPROVED, collab_text__isnull=False) & ~Q(
        collab_text__in=_FALSE_TEXTS
    )
    rule = Q(status=Status.PUBLISHED) | open_collab
    if requester.user_id is not None:
        rule |= Q(author_id=requester.user_id)
    return queryset.annotate(
        collab_text=Lower(Trim(KT("dynamic_data__collab")))
    ).filter(rule)


def top_ideas(ideas: Iterable, limit: int = DEFAULT_TOP_N) -> list:
    """Published ideas ranked by mean rating, best first.

    ``sorted`` is stable, so equal means keep collection order.
    """
    published = [idea for idea in ideas if idea.status == Status.PUBLISHED]
    ranked = sorted(published, key=aggregate_percentage, reverse=True)
    return ranked[: max(limit, 0)]


def _haystack(idea) -> list[str]:
    tags = idea.tags if isinstance(idea.tags, list) else []
    return [
        idea.title or "",
        idea.description or "",
        idea.category or "",
        idea.author_name or "",
        *(str(t) for t in tags),
    ]


def matches(idea, query: str) -> bool:
    needle = (query or "").strip().casefold()
    if not needle:
        return True
    return any(needle in text.casefold() for text in _haystack(idea))


def search(ideas: Iterable, query: str, requester: Actor) -> list:
    """Visible ideas whose text contains ``query``, in collection order."""
    return [
        idea
        for idea in ideas
        if is_visible(idea, requester) and matches(idea, query)
    ]


def collaboration_feed(ideas: Iterable) -> list:
    """Top-level ideas that asked for collaborators and are still live."""
    return [
        idea
        for idea in ideas
        if is_collaboration_open(idea)
        and idea.parent_idea_id is None
        and idea.status in COLLABORATION_STATUSES
    ]
