from __future__ import annotations

from typing import TYPE_CHECKING

from drf_spectacular.utils import OpenApiParameter
from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from idea_hub.audit.api.serializers import AuditLogSerializer
from idea_hub.audit.models import AuditLog
from idea_hub.users.api.permissions import IsAdminOrManagerOnly

if TYPE_CHECKING:
    from django.db.models import QuerySet

DEFAULT_LIMIT = 5
MAX_LIMIT = 50
EXACT_FILTERS = ("record_id", "action", "model_name")


def _parse_limit(raw) -> int:
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_LIMIT
    return max(1, min(limit, MAX_LIMIT))


class RecentAuditView(APIView):
    """Latest audit entries, newest first, for reviewers and admins."""

    permission_classes = [IsAuthenticated, IsAdminOrManagerOnly]

    @extend_schema(
        tags=["Audit"],
        parameters=[
            OpenApiParameter("limit", int, description=f"1..{MAX_LIMIT}"),
            *(OpenApiParameter(name, str) for name in EXACT_FILTERS),
        ],
        responses=AuditLogSerializer(many=True),
    )
    def get(self, request):
        limit = _parse_limit(request.query_params.get("limit", DEFAULT_LIMIT))
        qs: QuerySet[AuditLog] = AuditLog.objects.select_related("actor")
        for name in EXACT_FILTERS:
            value = request.query_params.get(name)
            if value:
                qs = qs.filter(**{name: value})
        data = AuditLogSerializer(qs[:limit], many=True).data
        return Response({"results": data, "limit": limit})
