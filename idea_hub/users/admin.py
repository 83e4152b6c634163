from django.contrib import admin
from django.contrib.auth import admin as auth_admin
from django.utils.translation import gettext_lazy as _

from .models import User


@admin.register(User)
class UserAdmin(auth_admin.UserAdmin):
    fieldsets = (
        (None, {"fields": ("username", "password")}),
        (
            _("Personal info"),
            {"fields": ("first_name", "last_name", "name", "email", "department")},
        ),
        (
            _("Permissions"),
            {
                "fields": (
                    "status",
                    "is_active",
                    "is_staff",
                    "is_superuser",
                    "groups",
                    "user_permissions",
                ),
            },
        ),
        (_("Important dates"), {"fields": ("last_login", "date_joined")}),
    )
    list_display = ["username", "name", "email", "department", "status", "is_superuser"]
    list_filter = ["status", "is_staff", "groups"]
    search_fields = ["username", "name", "email"]
    actions = ["activate_users"]

    @admin.action(description=_("Activate selected accounts"))
    def activate_users(self, request, queryset):
        updated = queryset.update(status=User.Status.ACTIVE)
        self.message_user(request, _("%d account(s) activated.") % updated)
