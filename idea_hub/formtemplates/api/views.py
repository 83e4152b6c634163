from __future__ import annotations

import logging
from contextlib import suppress

from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated

from idea_hub.audit.utils import log_action
from idea_hub.formtemplates.api.serializers import FormTemplateSerializer
from idea_hub.formtemplates.models import FormTemplate
from idea_hub.formtemplates.services import ensure_default_template
from idea_hub.users.api.permissions import IsAdminCanWrite
from idea_hub.users.roles import ROLE_ADMIN
from idea_hub.users.roles import role_of

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(summary="List form templates", tags=["Templates"]),
    retrieve=extend_schema(summary="Get a template", tags=["Templates"]),
    create=extend_schema(summary="Create a template", tags=["Templates"]),
    update=extend_schema(summary="Replace a template", tags=["Templates"]),
    partial_update=extend_schema(summary="Update a template", tags=["Templates"]),
    destroy=extend_schema(summary="Delete a template", tags=["Templates"]),
)
class FormTemplateViewSet(viewsets.ModelViewSet):
    """Form templates: readable by everyone signed in, editable by Admins.

    Inactive templates are only listed for Admins.
    """

    serializer_class = FormTemplateSerializer
    permission_classes = [IsAuthenticated, IsAdminCanWrite]
    pagination_class = None
    queryset = FormTemplate.objects.all()

    def get_queryset(self):
        if not FormTemplate.objects.exists():
            ensure_default_template()
        qs = FormTemplate.objects.all()
        if role_of(self.request.user) != ROLE_ADMIN:
            qs = qs.filter(is_active=True)
        return qs

    def perform_create(self, serializer):
        obj = serializer.save()
        logger.info("Template %s created by %s", obj.id, self.request.user)
        with suppress(Exception):
            log_action(
                "template.create",
                actor=self.request.user,
                model_name="FormTemplate",
                record_id=obj.id,
                after={"name": obj.name, "rating_config": obj.rating_config},
            )

    def perform_update(self, serializer):
        before = {
            "name": serializer.instance.name,
            "rating_config": serializer.instance.rating_config,
            "is_active": serializer.instance.is_active,
        }
        obj = serializer.save()
        with suppress(Exception):
            log_action(
                "template.update",
                actor=self.request.user,
                model_name="FormTemplate",
                record_id=obj.id,
                before=before,
                after={
                    "name": obj.name,
                    "rating_config": obj.rating_config,
                    "is_active": obj.is_active,
                },
            )

    def perform_destroy(self, instance):
        with suppress(Exception):
            log_action(
                "template.delete",
                actor=self.request.user,
                model_name="FormTemplate",
                record_id=instance.id,
                before={"name": instance.name},
            )
        return super().perform_destroy(instance)
