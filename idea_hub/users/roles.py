"""Role names and helpers shared by permissions and the idea workflow."""

from collections.abc import Iterable

ROLE_ADMIN = "Admin"
ROLE_MANAGER = "Manager"
ROLE_EMPLOYEE = "Employee"
ROLE_GUEST = "Guest"

ALL_ROLES = (ROLE_ADMIN, ROLE_MANAGER, ROLE_EMPLOYEE, ROLE_GUEST)

# Highest privilege first; a user in several groups gets the first match.
_ROLE_PRECEDENCE = (ROLE_ADMIN, ROLE_MANAGER, ROLE_GUEST, ROLE_EMPLOYEE)


def user_in_groups(user, names: Iterable[str]) -> bool:
    groups = getattr(user, "groups", None)
    names_list = list(names)
    if not groups or not names_list:
        return False
    return groups.filter(name__in=names_list).exists()


def role_of(user) -> str | None:
    """Return the effective role name for ``user`` (None when anonymous)."""
    if not (user and getattr(user, "is_authenticated", False)):
        return None
    if getattr(user, "is_superuser", False) or getattr(user, "is_staff", False):
        return ROLE_ADMIN
    names = set(user.groups.values_list("name", flat=True))
    for role in _ROLE_PRECEDENCE:
        if role in names:
            return role
    return ROLE_EMPLOYEE


def is_elevated(user) -> bool:
    return role_of(user) in (ROLE_ADMIN, ROLE_MANAGER)
