from __future__ import annotations

from typing import TYPE_CHECKING
from typing import Any

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.db import transaction
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import mixins
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from idea_hub.notifications.models import Notification
from idea_hub.notifications.services import notify
from idea_hub.users.api.permissions import IsAdminOrManagerCanWrite

from .serializers import NotificationCreateSerializer
from .serializers import NotificationSerializer

if TYPE_CHECKING:
    from collections.abc import Iterable

User = get_user_model()


def _coerce_receivers_to_user_ids(receivers: Iterable[Any]) -> set[int]:
    user_ids: set[int] = set()
    for r in receivers:
        if isinstance(r, bool) or r is None:
            continue
        if isinstance(r, int):
            user_ids.add(int(r))
        elif isinstance(r, str) and r.strip().isdigit():
            user_ids.add(int(r.strip()))
    return user_ids


def _resolve_recipient_ids(data: dict[str, Any]) -> set[int] | None:
    """Return target user ids, or None when a named group does not exist."""
    if "recipient_id" in data:
        return {int(data["recipient_id"])}
    if "receiver_group" in data:
        group = Group.objects.filter(name=data["receiver_group"]).first()
        if not group:
            return None
        return set(group.user_set.values_list("id", flat=True))

    receivers = data.get("receivers") or []
    recipient_ids: set[int] = set()
    if any(isinstance(r, str) and r.strip().upper() == "ALL" for r in receivers):
        recipient_ids.update(
            User.objects.filter(status=User.Status.ACTIVE).values_list(
                "id", flat=True
            )
        )
    group_names = [
        r.strip()
        for r in receivers
        if isinstance(r, str) and r.strip() and r.strip().upper() != "ALL"
    ]
    if group_names:
        recipient_ids.update(
            User.objects.filter(groups__name__in=group_names).values_list(
                "id", flat=True
            )
        )
    recipient_ids.update(_coerce_receivers_to_user_ids(receivers))
    return recipient_ids


@extend_schema_view(
    list=extend_schema(tags=["Notifications"]),
    destroy=extend_schema(tags=["Notifications"]),
    create=extend_schema(
        tags=["Notifications"],
        request=NotificationCreateSerializer,
        responses=NotificationSerializer(many=True),
    ),
)
class NotificationViewSet(
    mixins.ListModelMixin,
    mixins.DestroyModelMixin,
    GenericViewSet,
):
    """Notifications for the authenticated user.

    - list: request.user's notifications, optionally ``?unread=true``
    - create: fan out to recipients (Admin/Manager only)
    - destroy: delete one of your notifications
    - mark_read / mark_all_read / unread_count
    """

    permission_classes = [IsAuthenticated]
    serializer_class = NotificationSerializer

    def get_queryset(self):
        qs = Notification.objects.filter(recipient=self.request.user)
        unread = (self.request.query_params.get("unread") or "").lower()
        if unread in {"1", "true", "yes"}:
            qs = qs.filter(is_read=False)
        return qs

    def get_permissions(self):
        if self.action == "create":
            return [IsAuthenticated(), IsAdminOrManagerCanWrite()]
        return [p() for p in self.permission_classes]

    def create(self, request, *args, **kwargs):
        serializer = NotificationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        recipient_ids = _resolve_recipient_ids(data)
        if recipient_ids is None:
            return Response(
                {"detail": "Unknown receiver_group."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        if not recipient_ids:
            return Response(
                {"detail": "No recipients resolved from payload."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        with transaction.atomic():
            created = notify(
                User.objects.filter(pk__in=recipient_ids).order_by("pk"),
                title=data["title"],
                message=data["message"],
                notification_type=data["notification_type"],
                related_link=data.get("related_link", ""),
            )

        out = NotificationSerializer(created, many=True, context={"request": request})
        return Response(out.data, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Notifications"], request=None, responses={204: None})
    @action(detail=True, methods=["post"], url_path="mark-read")
    def mark_read(self, request, pk=None):
        notification = self.get_object()
        if not notification.is_read:
            notification.is_read = True
            notification.save(update_fields=["is_read"])
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(tags=["Notifications"], request=None, responses={204: None})
    @action(detail=False, methods=["post"], url_path="mark-all-read")
    def mark_all_read(self, request):
        self.get_queryset().filter(is_read=False).update(is_read=True)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(tags=["Notifications"])
    @action(detail=False, methods=["get"], url_path="unread-count")
    def unread_count(self, request):
        count = Notification.objects.filter(
            recipient=request.user, is_read=False
        ).count()
        return Response({"unread": count})

