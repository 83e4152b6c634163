from __future__ import annotations

import logging
from contextlib import suppress

from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from idea_hub.audit.utils import log_action
from idea_hub.org.api.serializers import DepartmentSerializer
from idea_hub.org.models import Department
from idea_hub.users.api.permissions import IsAdminCanWrite
from idea_hub.users.roles import ROLE_ADMIN
from idea_hub.users.roles import role_of

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(summary="List departments", tags=["Departments"]),
    retrieve=extend_schema(summary="Get a department", tags=["Departments"]),
    create=extend_schema(summary="Create a department", tags=["Departments"]),
    update=extend_schema(summary="Replace a department", tags=["Departments"]),
    partial_update=extend_schema(summary="Update a department", tags=["Departments"]),
    destroy=extend_schema(summary="Deactivate a department", tags=["Departments"]),
)
class DepartmentViewSet(viewsets.ModelViewSet):
    """Departments: readable by everyone signed in, managed by Admins.

    Deleting only deactivates, so existing users and ideas keep their label.
    """

    serializer_class = DepartmentSerializer
    permission_classes = [IsAuthenticated, IsAdminCanWrite]
    pagination_class = None
    queryset = Department.objects.all()

    def get_queryset(self):
        qs = Department.objects.all()
        if role_of(self.request.user) != ROLE_ADMIN:
            qs = qs.filter(is_active=True)
        return qs

    def perform_create(self, serializer):
        obj = serializer.save()
        logger.info("Department %s created by %s", obj.name, self.request.user)
        with suppress(Exception):
            log_action(
                "department.create",
                actor=self.request.user,
                model_name="Department",
                record_id=obj.pk,
                after={"name": obj.name},
            )

    def perform_update(self, serializer):
        before = {
            "name": serializer.instance.name,
            "is_active": serializer.instance.is_active,
        }
        obj = serializer.save()
        with suppress(Exception):
            log_action(
                "department.update",
                actor=self.request.user,
                model_name="Department",
                record_id=obj.pk,
                before=before,
                after={"name": obj.name, "is_active": obj.is_active},
            )

    def perform_destroy(self, instance):
        instance.is_active = False
        instance.save(update_fields=["is_active", "updated_at"])
        with suppress(Exception):
            log_action(
                "department.deactivate",
                actor=self.request.user,
                model_name="Department",
                record_id=instance.pk,
                before={"name": instance.name},
            )
