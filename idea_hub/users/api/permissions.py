"""Permission classes shared across the API."""

from rest_framework.permissions import SAFE_METHODS
from rest_framework.permissions import BasePermission

from idea_hub.users.roles import ROLE_ADMIN
from idea_hub.users.roles import ROLE_GUEST
from idea_hub.users.roles import ROLE_MANAGER
from idea_hub.users.roles import user_in_groups
from idea_hub.users.roles import role_of


def _is_staff_or_role(user, roles) -> bool:
    return bool(getattr(user, "is_staff", False)) or user_in_groups(user, roles)


class _RolePermission(BasePermission):
    """Base helper to gate access by role names."""

    allowed_roles: tuple[str, ...] = ()
    allow_staff: bool = True

    def has_permission(self, request, view) -> bool:
        user = getattr(request, "user", None)
        if not (user and getattr(user, "is_authenticated", False)):
            return False
        if self.allow_staff and getattr(user, "is_staff", False):
            return True
        return user_in_groups(user, self.allowed_roles)


class IsAdminOrManagerOnly(_RolePermission):
    """Allow access only to Admin/Manager/Staff users."""

    allowed_roles = (ROLE_ADMIN, ROLE_MANAGER)


class IsAdminOnly(_RolePermission):
    """Allow access only to Admin/Staff users."""

    allowed_roles = (ROLE_ADMIN,)


class IsAdminCanWrite(BasePermission):
    """Read for any authenticated user; writes for Admin/Staff only."""

    def has_permission(self, request, view):
        u = request.user
        if not (u and getattr(u, "is_authenticated", False)):
            return False
        if request.method in SAFE_METHODS:
            return True
        return _is_staff_or_role(u, [ROLE_ADMIN])


class IsNotGuest(BasePermission):
    """Guests are read-only across the idea API."""

    message = "Guest accounts have read-only access."

    def has_permission(self, request, view) -> bool:
        if request.method in SAFE_METHODS:
            return True
        return role_of(request.user) != ROLE_GUEST


class IsAdminOrManagerCanWrite(BasePermission):
    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return request.user and request.user.is_authenticated
        u = request.user
        if not (u and getattr(u, "is_authenticated", False)):
            return False
        return _is_staff_or_role(u, [ROLE_ADMIN, ROLE_MANAGER])
