from django.contrib import admin

from idea_hub.formtemplates import models


@admin.register(models.FormTemplate)
class FormTemplateAdmin(admin.ModelAdmin):
    list_display = ["id", "name", "is_active", "updated_at"]
    search_fields = ["id", "name", "description"]
    list_filter = ["is_active"]
