"""LLM-backed helpers for reviewers and authors.

Every helper is advisory: when the model is disabled, unreachable or returns
something unusable the caller gets ``None`` (or the untouched input text for
:func:`enhance_text`) and carries on.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from typing import Any

from idea_hub.ideas.grading import clamp_score
from idea_hub.integrations.llm.client import get_llm_client_from_settings
from idea_hub.integrations.llm.prompts import build_duplicate_prompt
from idea_hub.integrations.llm.prompts import build_enhance_prompt
from idea_hub.integrations.llm.prompts import build_evaluation_prompt
from idea_hub.integrations.llm.prompts import build_manager_analysis_prompt

if TYPE_CHECKING:
    from collections.abc import Iterable
    from collections.abc import Sequence

    from idea_hub.formtemplates.dimensions import RatingDimension

logger = logging.getLogger(__name__)

MAX_DUPLICATE_CANDIDATES = 50


def suggest_evaluation(
    idea, dimensions: Sequence[RatingDimension]
) -> dict[str, Any] | None:
    """Suggested ``{scores, comment}`` for a manager to accept or override.

    Scores are clamped into 1..5 and limited to the given dimension ids.
    Nothing is stored here.
    """
    client = get_llm_client_from_settings()
    if client is None:
        return None
    data = client.generate_json(
        build_evaluation_prompt(idea.title, idea.description, dimensions)
    )
    if not isinstance(data, dict):
        logger.warning("Evaluation assistant returned no usable data")
        return None
    # Accept both {"scores": {...}} and a flat {dimension_id: score} shape
    raw_scores = data.get("scores") if isinstance(data.get("scores"), dict) else data
    scores = {
        d.id: clamp_score(raw_scores[d.id]) for d in dimensions if d.id in raw_scores
    }
    if not scores:
        return None
    return {"scores": scores, "comment": str(data.get("comment") or "")}


def analyze_for_manager(idea) -> dict[str, Any] | None:
    client = get_llm_client_from_settings()
    if client is None:
        return None
    data = client.generate_json(
        build_manager_analysis_prompt(idea.title, idea.description)
    )
    if not isinstance(data, dict) or not data.get("summary"):
        logger.warning("Manager analysis returned no usable data")
        return None
    return {
        "summary": str(data["summary"]),
        "pros": [str(p) for p in data.get("pros") or []],
        "cons": [str(c) for c in data.get("cons") or []],
    }


def enhance_text(text: str) -> str:
    """Polished rewrite of ``text``; the original on any failure."""
    if not (text or "").strip():
        return text
    client = get_llm_client_from_settings()
    if client is None:
        return text
    enhanced = client.generate_text(build_enhance_prompt(text))
    return enhanced or text


def find_duplicate(idea, candidates: Iterable) -> dict[str, Any] | None:
    """Flag ``idea`` when the model finds an existing idea with the same goal."""
    others = [c for c in candidates if c.pk != idea.pk]
    pool = {str(c.pk): c for c in others[:MAX_DUPLICATE_CANDIDATES]}
    if not pool:
        return None
    client = get_llm_client_from_settings()
    if client is None:
        return None
    listing = [
        {"id": pk, "title": c.title, "description": (c.description or "")[:500]}
        for pk, c in pool.items()
    ]
    data = client.generate_json(
        build_duplicate_prompt(idea.title, idea.description, listing)
    )
    if not isinstance(data, dict) or not data.get("duplicate"):
        return None
    match = pool.get(str(data.get("match_id")))
    if match is None:
        logger.warning("Duplicate check named an unknown idea: %s", data)
        return None
    return {
        "match_id": str(match.pk),
        "match_title": match.title,
        "reason": str(data.get("reason") or ""),
    }
