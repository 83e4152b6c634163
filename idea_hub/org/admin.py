from django.contrib import admin

from idea_hub.org import models


@admin.register(models.Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "is_active", "updated_at"]
    search_fields = ["name", "description"]
    list_filter = ["is_active"]
