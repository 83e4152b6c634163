"""Weighted grading of per-dimension scores.

Scores run from 1 (poor) to 5 (excellent). The weighted sum is expressed as
a whole-number percentage of the best possible sum and mapped onto a letter
band.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP
from decimal import Decimal
from decimal import InvalidOperation
from typing import TYPE_CHECKING
from typing import Any

if TYPE_CHECKING:
    from collections.abc import Mapping
    from collections.abc import Sequence

    from idea_hub.formtemplates.dimensions import RatingDimension

MIN_SCORE = 1
MAX_SCORE = 5

# Inclusive lower bounds, best band first
GRADE_BANDS: tuple[tuple[int, str], ...] = ((80, "A"), (60, "B"), (40, "C"))
FALLBACK_GRADE = "D"


@dataclass(frozen=True)
class GradeResult:
    percentage: int
    grade: str

    @property
    def total_score(self) -> float:
        return total_score(self.percentage)


def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def clamp_score(raw: Any) -> int:
    """Coerce one raw score into the 1..5 range; unusable input counts as 1."""
    if raw is None or isinstance(raw, bool):
        return MIN_SCORE
    try:
        value = _round_half_up(Decimal(str(raw)))
    except (InvalidOperation, ValueError):
        return MIN_SCORE
    return max(MIN_SCORE, min(MAX_SCORE, value))


def normalize_scores(
    dimensions: Sequence[RatingDimension], scores: Mapping[str, Any] | None
) -> dict[str, int]:
    """One clamped score per dimension id, in dimension order."""
    scores = scores or {}
    return {d.id: clamp_score(scores.get(d.id)) for d in dimensions}


def grade_for_percentage(percentage: float) -> str:
    for lower_bound, letter in GRADE_BANDS:
        if percentage >= lower_bound:
            return letter
    return FALLBACK_GRADE


def total_score(percentage: float) -> float:
    """The percentage re-expressed on the 0..5 scale."""
    return MAX_SCORE * percentage / 100


def grade(
    dimensions: Sequence[RatingDimension], scores: Mapping[str, Any] | None
) -> GradeResult:
    if not dimensions:
        msg = "Cannot grade against an empty set of dimensions"
        raise ValueError(msg)

    normalized = normalize_scores(dimensions, scores)
    weighted_sum = sum(
        Decimal(normalized[d.id]) * Decimal(str(d.weight)) for d in dimensions
    )
    max_possible = sum(MAX_SCORE * Decimal(str(d.weight)) for d in dimensions)
    if max_possible <= 0:
        msg = "Dimension weights must add up to a positive number"
        raise ValueError(msg)

    percentage = _round_half_up(Decimal(100) * weighted_sum / max_possible)
    return GradeResult(percentage=percentage, grade=grade_for_percentage(percentage))
