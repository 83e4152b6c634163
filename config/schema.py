"""drf-spectacular post-processing: one Swagger section per API area."""

from __future__ import annotations

from typing import Any

_OPERATIONS = {"get", "post", "put", "patch", "delete"}

# Most specific prefix first
SECTIONS: list[tuple[str, str, str]] = [
    ("/api/v1/ideas", "Ideas", "Submission, review workflow, ratings, discovery"),
    ("/api/v1/templates", "Templates", "Form builder schemas and rating rubrics"),
    ("/api/v1/notifications", "Notifications", "Inbox and reviewer broadcasts"),
    ("/api/v1/audit", "Audit", "Recent activity for reviewers"),
    ("/api/v1/departments", "Departments", "Departments users and ideas belong to"),
    ("/api/v1/auth/jwt", "JWT Authentication", "Bearer token endpoints"),
    ("/api/v1/auth/", "Authentication", "Cookie based session login"),
    ("/api/v1/users", "Users", "Accounts, registration and approval"),
]

ALL_TAGS = [tag for _, tag, _ in SECTIONS]


def assign_group_tag(path: str) -> str | None:
    return next((tag for prefix, tag, _ in SECTIONS if path.startswith(prefix)), None)


def group_tags(result: dict[str, Any], **kwargs: Any) -> dict[str, Any]:
    """Give every operation exactly one tag derived from its path."""
    for path, item in result.get("paths", {}).items():
        tag = assign_group_tag(path)
        if tag is None:
            continue
        for method, operation in item.items():
            if method in _OPERATIONS and isinstance(operation, dict):
                operation["tags"] = [tag]

    declared = {t.get("name") for t in result.get("tags", [])}
    tags = result.setdefault("tags", [])
    tags.extend(
        {"name": tag, "description": description}
        for _, tag, description in SECTIONS
        if tag not in declared
    )
    return result
