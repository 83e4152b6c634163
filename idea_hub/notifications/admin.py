from django.contrib import admin

from idea_hub.notifications import models


@admin.register(models.Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ["created_at", "recipient", "notification_type", "title", "is_read"]
    list_filter = ["notification_type", "is_read"]
    search_fields = ["title", "recipient__username", "related_link"]
    raw_id_fields = ["recipient"]
