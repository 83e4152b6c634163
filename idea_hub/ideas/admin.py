from django.contrib import admin

from idea_hub.ideas import models


@admin.register(models.Idea)
class IdeaAdmin(admin.ModelAdmin):
    list_display = ["public_id", "title", "author_name", "status", "updated_at"]
    search_fields = ["public_id", "title", "description", "author_name", "category"]
    list_filter = ["status", "category", "template"]
    readonly_fields = ["public_id", "ratings", "comments", "collaborators"]
    raw_id_fields = ["author", "parent_idea"]
