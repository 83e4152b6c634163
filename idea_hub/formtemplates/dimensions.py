"""Rating dimensions: the weighted criteria an idea is scored against."""

from __future__ import annotations

import logging
from dataclasses import asdict
from dataclasses import dataclass
from typing import TYPE_CHECKING
from typing import Any

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RatingDimension:
    id: str
    name: str
    weight: float
    description: str = ""

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw: Any) -> RatingDimension | None:
        """Coerce one ``rating_config`` entry; None when it is unusable."""
        if not isinstance(raw, dict):
            return None
        dim_id = str(raw.get("id") or "").strip()
        try:
            weight = float(raw.get("weight"))
        except (TypeError, ValueError):
            return None
        if not dim_id or weight <= 0:
            return None
        return cls(
            id=dim_id,
            name=str(raw.get("name") or dim_id),
            weight=weight,
            description=str(raw.get("description") or ""),
        )


DEFAULT_RATING_DIMENSIONS: tuple[RatingDimension, ...] = (
    RatingDimension(
        "impact",
        "Impact on Business Goals",
        30,
        "Reduces cost, increases revenue, improves safety.",
    ),
    RatingDimension(
        "feasibility",
        "Feasibility",
        20,
        "Ease of implementation (resources, time).",
    ),
    RatingDimension(
        "roi",
        "Cost vs. Benefit",
        20,
        "Estimated cost compared to expected benefits.",
    ),
    RatingDimension(
        "innovation",
        "Innovation Level",
        15,
        "New approach vs incremental improvement.",
    ),
    RatingDimension(
        "risk",
        "Risk Level",
        15,
        "Operational, financial, or safety risks (High Score = Low Risk).",
    ),
)


def coerce_dimensions(rating_config: Any) -> list[RatingDimension]:
    if not isinstance(rating_config, list):
        return []
    dims = [RatingDimension.from_dict(raw) for raw in rating_config]
    return [d for d in dims if d is not None]


def resolve_dimensions(idea, templates: Iterable) -> list[RatingDimension]:
    """Return the ordered criteria ``idea`` is graded against.

    The idea's own template wins when it is active and carries a usable
    ``rating_config``; anything else (no template, deleted, inactive, empty)
    falls back to the default rubric. Never raises, never returns an empty
    list.
    """
    template_id = getattr(idea, "template_id", None)
    if template_id:
        for template in templates:
            if str(template.id) != str(template_id):
                continue
            if not template.is_active:
                break
            dims = coerce_dimensions(template.rating_config)
            if dims:
                return dims
            break
        logger.debug(
            "Idea %s falls back to the default rubric", getattr(idea, "pk", None)
        )
    return list(DEFAULT_RATING_DIMENSIONS)
