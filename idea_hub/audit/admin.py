from django.contrib import admin

from idea_hub.audit import models


@admin.register(models.AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ["created_at", "action", "actor", "model_name", "record_id"]
    search_fields = ["action", "message", "record_id", "actor__username"]
    list_filter = ["action", "model_name"]
    date_hierarchy = "created_at"
    readonly_fields = [f.name for f in models.AuditLog._meta.fields]  # noqa: SLF001

    def has_add_permission(self, request):
        return False
