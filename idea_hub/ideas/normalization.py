"""Bring legacy or camelCase idea payloads into the current shape.

Older records kept answers such as the estimated cost at the top level and
used lowercase review statuses; they are moved into ``dynamic_data`` and
mapped onto the workflow states once, when the data enters the system.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any

from idea_hub.ideas.models import Idea

if TYPE_CHECKING:
    from collections.abc import Mapping

Status = Idea.Status

# legacy top-level key -> template field id
LEGACY_DYNAMIC_FIELDS = {
    "estimatedCost": "cost",
    "feasibility": "feasibility",
    "timeline": "timeline",
    "collaborationNeeded": "collab",
}

FIELD_ALIASES = {
    "authorName": "author_name",
    "templateId": "template",
    "templateName": "template_name",
    "parentIdeaId": "parent_idea",
    "coverImage": "cover_image",
    "dynamicData": "dynamic_data",
}

LEGACY_STATUSES = {
    "pending": Status.SUBMITTED,
    "approved": Status.APPROVED,
    "rejected": Status.REJECTED,
}

_STATUS_LOOKUP = {
    **{value.lower(): value for value in Status.values},
    "needs_revision": Status.NEEDS_REVISION,
    "needs revision": Status.NEEDS_REVISION,
    **LEGACY_STATUSES,
}

_TRUE_STRINGS = {"true", "yes", "1", "on"}


def normalize_status(value: Any) -> Any:
    """Map a known spelling onto a workflow state; unknown values pass through."""
    if not isinstance(value, str):
        return value
    return _STATUS_LOOKUP.get(value.strip().lower(), value)


def split_tags(value: Any) -> list[str]:
    if value is None:
        return []
    items = value.split(",") if isinstance(value, str) else list(value)
    return [str(t).strip() for t in items if str(t).strip()]


def _legacy_value(key: str, value: Any) -> Any:
    if key == "collaborationNeeded" and isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return value


def normalize_payload(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Return a normalized copy of ``payload``; the input is left untouched.

    Existing ``dynamic_data`` answers win over legacy top-level fields.
    """
    data = {FIELD_ALIASES.get(k, k): v for k, v in payload.items()}

    dynamic = data.get("dynamic_data")
    dynamic = dict(dynamic) if isinstance(dynamic, dict) else {}
    moved = False
    for legacy_key, field_id in LEGACY_DYNAMIC_FIELDS.items():
        if legacy_key not in data:
            continue
        value = data.pop(legacy_key)
        moved = True
        if field_id not in dynamic and value not in (None, ""):
            dynamic[field_id] = _legacy_value(legacy_key, value)
    if moved or "dynamic_data" in data:
        data["dynamic_data"] = dynamic

    if "tags" in data:
        data["tags"] = split_tags(data["tags"])
    if "status" in data:
        data["status"] = normalize_status(data["status"])
    return data
