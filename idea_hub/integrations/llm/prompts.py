from __future__ import annotations

import json
from typing import TYPE_CHECKING
from typing import Any

if TYPE_CHECKING:
    from collections.abc import Iterable


def build_evaluation_prompt(title: str, description: str, dimensions) -> str:
    """Ask for an integer 1-5 score per dimension id plus a justification.

    The model is told the exact ids to use so the response can be matched
    back onto the rubric without guessing.
    """
    rubric = "\n".join(
        f"- {d.name} (ID: {d.id}): {d.description}" for d in dimensions
    )
    schema = {
        "type": "object",
        "properties": {
            "comment": {"type": "string"},
            "scores": {
                "type": "object",
                "properties": {d.id: {"type": "integer"} for d in dimensions},
            },
        },
        "required": ["comment", "scores"],
    }
    return (
        "You are a strict technical innovation manager evaluating a proposal.\n\n"
        f'Proposal Title: "{title}"\n'
        f'Proposal Description: "{description}"\n\n'
        "Evaluate this proposal on the following dimensions "
        "(1 = Poor, 5 = Excellent):\n"
        f"{rubric}\n\n"
        "Provide an integer score (1-5) for each dimension ID and a "
        "constructive summary comment justifying the scores.\n"
        f"Return ONLY JSON matching this schema: {json.dumps(schema)}"
    )


def build_manager_analysis_prompt(title: str, description: str) -> str:
    schema = {
        "type": "object",
        "properties": {
            "summary": {"type": "string"},
            "pros": {"type": "array", "items": {"type": "string"}},
            "cons": {"type": "array", "items": {"type": "string"}},
        },
        "required": ["summary", "pros", "cons"],
    }
    return (
        "Analyze this innovation idea for a manager.\n"
        f"Title: {title}\n"
        f"Description: {description}\n\n"
        "Provide:\n"
        "1. A concise executive summary (max 2 sentences).\n"
        "2. 3 Key Pros (Benefits).\n"
        "3. 3 Key Cons (Risks or Challenges).\n"
        f"Return ONLY JSON matching this schema: {json.dumps(schema)}"
    )


def build_enhance_prompt(text: str) -> str:
    return (
        "Rewrite the following innovation description to be more professional, "
        "persuasive, and concise for a corporate environment. Keep the technical "
        "details accurate but improve the flow and impact. Return only the "
        f"rewritten text.\n\n{text}"
    )


def build_duplicate_prompt(
    title: str, description: str, candidates: Iterable[dict[str, Any]]
) -> str:
    listing = json.dumps(list(candidates), ensure_ascii=False)
    return (
        "You review an internal idea box for duplicate submissions.\n"
        f'New idea title: "{title}"\n'
        f'New idea description: "{description}"\n\n'
        f"Existing ideas (JSON list of id/title/description): {listing}\n\n"
        "If one existing idea proposes substantially the same thing, return "
        '{"duplicate": true, "match_id": <id>, "reason": <one sentence>}. '
        'Otherwise return {"duplicate": false}. Return ONLY JSON.'
    )
