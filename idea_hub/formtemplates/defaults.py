"""The template every fresh install starts with."""

from idea_hub.formtemplates.dimensions import DEFAULT_RATING_DIMENSIONS

DEFAULT_TEMPLATE_ID = "default-1"

DEFAULT_TEMPLATE = {
    "id": DEFAULT_TEMPLATE_ID,
    "name": "Standard Operational Improvement",
    "description": (
        "Standard form for submitting operational efficiency and cost "
        "reduction ideas."
    ),
    "is_active": True,
    "rating_config": [d.as_dict() for d in DEFAULT_RATING_DIMENSIONS],
    "fields": [
        {
            "id": "benefits",
            "label": "Benefits / Value Proposition",
            "type": "textarea",
            "required": True,
        },
        {"id": "cost", "label": "Estimated Cost", "type": "text", "required": False},
        {
            "id": "feasibility",
            "label": "Implementation Feasibility",
            "type": "select",
            "options": ["Easy", "Moderate", "Complex"],
            "required": True,
        },
        {
            "id": "priority",
            "label": "Priority Level",
            "type": "select",
            "options": ["Low", "Medium", "High"],
            "required": False,
        },
        {
            "id": "timeline",
            "label": "Expected Timeline",
            "type": "select",
            "options": ["Short-term", "Long-term"],
            "required": False,
        },
        {
            "id": "collab",
            "label": "Collaboration Needed?",
            "type": "checkbox",
            "required": False,
        },
        {"id": "tags", "label": "Tags/Keywords", "type": "text", "required": False},
    ],
}
