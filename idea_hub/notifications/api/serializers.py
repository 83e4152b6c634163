from __future__ import annotations

from typing import Any

from rest_framework import serializers

from idea_hub.notifications.models import Notification

TARGETS = ("recipient_id", "receiver_group", "receivers")


def _blank(value: Any) -> bool:
    if isinstance(value, str):
        return not value.strip()
    return value is None or value == []


class NotificationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Notification
        fields = (
            "id",
            "recipient",
            "title",
            "message",
            "notification_type",
            "is_read",
            "related_link",
            "created_at",
        )
        read_only_fields = fields


class NotificationCreateSerializer(serializers.Serializer):
    """Manual notification. Exactly one target form:

    - ``recipient_id``: one user
    - ``receiver_group``: every member of a role group, e.g. "Manager"
    - ``receivers``: user ids and group names, or "ALL" for every active user
    """

    title = serializers.CharField(max_length=255)
    message = serializers.CharField()
    notification_type = serializers.ChoiceField(
        choices=Notification.Type.choices, default=Notification.Type.BROADCAST
    )
    related_link = serializers.CharField(
        max_length=500, required=False, allow_blank=True, default=""
    )
    recipient_id = serializers.IntegerField(required=False, min_value=1)
    receiver_group = serializers.CharField(required=False)
    receivers = serializers.ListField(child=serializers.JSONField(), required=False)

    def to_internal_value(self, data):
        # Forms post every key; blank targets count as absent
        data = data.copy()
        for key in TARGETS:
            if key in data and _blank(data.get(key)):
                data.pop(key)
        return super().to_internal_value(data)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        if sum(key in attrs for key in TARGETS) != 1:
            msg = "Provide exactly one of recipient_id, receiver_group, receivers."
            raise serializers.ValidationError(msg)
        return attrs
