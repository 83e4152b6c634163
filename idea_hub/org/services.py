from __future__ import annotations

from idea_hub.org.models import Department


class UnknownDepartmentError(ValueError):
    pass


def canonical_department(value: str | None) -> str:
    """Return the stored spelling of an active department.

    Blank means "no department" and is always accepted.
    """
    name = (value or "").strip()
    if not name:
        return ""
    dept = Department.objects.filter(name__iexact=name, is_active=True).first()
    if dept is None:
        msg = f"Unknown department: {name}"
        raise UnknownDepartmentError(msg)
    return dept.name
