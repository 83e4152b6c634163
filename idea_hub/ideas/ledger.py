"""Per-idea manager ratings: at most one entry per manager."""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from decimal import ROUND_HALF_UP
from decimal import Decimal
from typing import TYPE_CHECKING
from typing import Any

from django.utils import timezone
from django.utils.dateparse import parse_datetime

from idea_hub.formtemplates.dimensions import resolve_dimensions
from idea_hub.ideas import grading

if TYPE_CHECKING:
    from collections.abc import Iterable
    from collections.abc import Mapping
    from datetime import datetime


@dataclass
class RatingSummary:
    percentage: int
    grade: str
    count: int
    details: list[dict[str, Any]] = field(default_factory=list)


def _manager_key(manager_id: Any) -> str:
    return str(manager_id)


def build_rating(  # noqa: PLR0913
    dimensions,
    manager_id: Any,
    manager_name: str,
    scores: Mapping[str, Any] | None,
    comment: str = "",
    now: datetime | None = None,
) -> dict[str, Any]:
    result = grading.grade(dimensions, scores)
    normalized = grading.normalize_scores(dimensions, scores)
    created_at = now or timezone.now()
    return {
        "manager_id": manager_id,
        "manager_name": manager_name,
        "details": [
            {"dimension_id": dim_id, "score": score}
            for dim_id, score in normalized.items()
        ],
        "total_score": result.total_score,
        "percentage": result.percentage,
        "grade": result.grade,
        "comment": comment or "",
        "created_at": created_at.isoformat(),
    }


def submit(  # noqa: PLR0913
    idea,
    manager_id: Any,
    manager_name: str,
    scores: Mapping[str, Any] | None,
    comment: str,
    templates: Iterable,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Grade ``scores`` and record them as ``manager_id``'s rating.

    Any earlier rating by the same manager is dropped and the new one is
    appended last; other managers' ratings keep their order. Only the
    in-memory ``idea.ratings`` list changes.
    """
    dimensions = resolve_dimensions(idea, templates)
    rating = build_rating(dimensions, manager_id, manager_name, scores, comment, now)
    key = _manager_key(manager_id)
    kept = [
        r
        for r in (idea.ratings or [])
        if _manager_key(r.get("manager_id")) != key
    ]
    kept.append(rating)
    idea.ratings = kept
    return rating


def _scores_from_details(entry: Mapping[str, Any], dimensions) -> dict[str, Any]:
    """Map stored detail rows onto dimension ids, by id or by display name."""
    if isinstance(entry.get("scores"), dict):
        return dict(entry["scores"])
    ids = {d.id for d in dimensions}
    by_name = {d.name.strip().lower(): d.id for d in dimensions}
    scores: dict[str, Any] = {}
    for detail in entry.get("details") or []:
        if not isinstance(detail, dict):
            continue
        key = str(
            detail.get("dimension_id")
            or detail.get("dimensionId")
            or detail.get("label")
            or ""
        )
        dim_id = key if key in ids else by_name.get(key.strip().lower())
        if dim_id:
            scores[dim_id] = detail.get("score")
    return scores


def _parse_when(value: Any) -> datetime | None:
    if not isinstance(value, str):
        return None
    try:
        return parse_datetime(value)
    except ValueError:
        return None


def restore(idea, entries: Any, templates: Iterable) -> list[dict[str, Any]]:
    """Re-grade previously stored ratings onto ``idea.ratings``.

    ``entries`` is a list of ratings or a mapping keyed by manager id. Each
    entry goes through :func:`submit`, so stored percentages and grades are
    recomputed from the scores and a later entry by the same manager
    replaces an earlier one. Entries naming no manager are dropped.
    """
    if isinstance(entries, dict):
        entries = [
            {"manager_id": key, **value} if isinstance(value, dict) else value
            for key, value in entries.items()
        ]
    if not isinstance(entries, list):
        entries = []
    templates = list(templates)
    dimensions = resolve_dimensions(idea, templates)
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        manager_id = entry.get("manager_id", entry.get("managerId"))
        if manager_id in (None, ""):
            continue
        submit(
            idea,
            manager_id,
            entry.get("manager_name") or entry.get("managerName") or "",
            _scores_from_details(entry, dimensions),
            entry.get("comment") or "",
            templates,
            now=_parse_when(entry.get("created_at") or entry.get("date")),
        )
    return idea.ratings or []


def rating_by(idea, manager_id: Any) -> dict[str, Any] | None:
    key = _manager_key(manager_id)
    for rating in idea.ratings or []:
        if _manager_key(rating.get("manager_id")) == key:
            return rating
    return None


def aggregate_percentage(idea) -> float:
    """Mean rating percentage across managers; 0 when nobody has rated."""
    ratings = idea.ratings or []
    if not ratings:
        return 0.0
    return sum(float(r.get("percentage") or 0) for r in ratings) / len(ratings)


def summary(idea, templates: Iterable = ()) -> RatingSummary:
    """Aggregate view over all ratings with per-dimension average scores."""
    ratings = idea.ratings or []
    mean = Decimal(str(aggregate_percentage(idea)))
    percentage = int(mean.quantize(Decimal(1), rounding=ROUND_HALF_UP))

    totals: dict[str, list[int]] = {}
    for rating in ratings:
        for detail in rating.get("details") or []:
            totals.setdefault(str(detail.get("dimension_id")), []).append(
                grading.clamp_score(detail.get("score"))
            )

    details = []
    for dim in resolve_dimensions(idea, templates):
        values = totals.get(dim.id, [])
        details.append(
            {
                "dimension_id": dim.id,
                "name": dim.name,
                "weight": dim.weight,
                "average": round(sum(values) / len(values), 2) if values else 0,
                "count": len(values),
            }
        )
    return RatingSummary(
        percentage=percentage,
        grade=grading.grade_for_percentage(percentage) if ratings else "",
        count=len(ratings),
        details=details,
    )
