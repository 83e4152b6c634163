"""Ideas API: CRUD plus workflow, rating and discovery endpoints."""

from __future__ import annotations

import contextlib
import logging

from django.conf import settings
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import mixins
from rest_framework import permissions
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import PermissionDenied
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from idea_hub.formtemplates.dimensions import resolve_dimensions
from idea_hub.formtemplates.schema import DynamicDataError
from idea_hub.formtemplates.services import list_templates
from idea_hub.ideas import assistant
from idea_hub.ideas import leaderboard
from idea_hub.ideas import ledger
from idea_hub.ideas import services
from idea_hub.ideas import workflow
from idea_hub.ideas.actors import Actor
from idea_hub.ideas.api.serializers import CommentInputSerializer
from idea_hub.ideas.api.serializers import EnhanceTextSerializer
from idea_hub.ideas.api.serializers import IdeaSerializer
from idea_hub.ideas.api.serializers import IdeaWriteSerializer
from idea_hub.ideas.api.serializers import RatingDimensionSerializer
from idea_hub.ideas.api.serializers import RatingInputSerializer
from idea_hub.ideas.api.serializers import RatingSummarySerializer
from idea_hub.ideas.api.serializers import TransitionSerializer
from idea_hub.ideas.filters import IdeaFilter
from idea_hub.ideas.models import Idea
from idea_hub.users.api.permissions import IsAdminOrManagerOnly
from idea_hub.users.api.permissions import IsNotGuest

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def domain_errors():
    """Translate core exceptions into DRF responses."""
    try:
        yield
    except workflow.ActorNotAuthorized as exc:
        raise PermissionDenied(str(exc)) from exc
    except workflow.TransitionNotAllowed as exc:
        raise ValidationError({"status": [str(exc)]}) from exc
    except DynamicDataError as exc:
        raise ValidationError({"dynamic_data": exc.errors}) from exc
    except services.IdeaActionError as exc:
        raise ValidationError({"detail": str(exc)}) from exc


def _in_collection_order(qs):
    return qs.order_by("created_at", "pk")


@extend_schema_view(
    list=extend_schema(tags=["Ideas"], summary="List visible ideas"),
    retrieve=extend_schema(tags=["Ideas"], summary="Get an idea"),
    create=extend_schema(
        tags=["Ideas"], request=IdeaWriteSerializer, responses=IdeaSerializer
    ),
    partial_update=extend_schema(
        tags=["Ideas"], request=IdeaWriteSerializer, responses=IdeaSerializer
    ),
    update=extend_schema(
        tags=["Ideas"], request=IdeaWriteSerializer, responses=IdeaSerializer
    ),
    destroy=extend_schema(tags=["Ideas"], summary="Delete an idea"),
)
class IdeaViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    GenericViewSet,
):
    """Ideas visible to the requester.

    Everyone sees their own ideas, published ones and approved ideas that are
    open for collaboration; Admins, Managers and Guests see everything.
    Guests cannot change anything.
    """

    serializer_class = IdeaSerializer
    permission_classes = [permissions.IsAuthenticated, IsNotGuest]
    filterset_class = IdeaFilter
    queryset = Idea.objects.all()

    def get_permissions(self):
        if self.action == "top":
            return [permissions.AllowAny()]
        if self.action == "enhance_text":
            return [permissions.IsAuthenticated()]
        if self.action in {"suggest_evaluation", "analysis", "ratings"}:
            return [permissions.IsAuthenticated(), IsAdminOrManagerOnly()]
        return super().get_permissions()

    def get_queryset(self):
        qs = Idea.objects.select_related("template", "author")
        actor = Actor.from_user(self.request.user)
        return leaderboard.filter_visible(qs, actor)

    def _respond(self, idea: Idea, code: int = status.HTTP_200_OK) -> Response:
        data = IdeaSerializer(idea, context=self.get_serializer_context()).data
        return Response(data, status=code)

    def create(self, request, *args, **kwargs):
        serializer = IdeaWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with domain_errors():
            idea = services.create_idea(request.user, serializer.validated_data)
        return self._respond(idea, status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop("partial", False)
        idea = self.get_object()
        serializer = IdeaWriteSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        with domain_errors():
            idea = services.update_idea(idea, request.user, serializer.validated_data)
        return self._respond(idea)

    def partial_update(self, request, *args, **kwargs):
        kwargs["partial"] = True
        return self.update(request, *args, **kwargs)

    def destroy(self, request, *args, **kwargs):
        idea = self.get_object()
        with domain_errors():
            services.delete_idea(idea, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        tags=["Ideas"], request=TransitionSerializer, responses=IdeaSerializer
    )
    @action(detail=True, methods=["post"])
    def transition(self, request, pk=None):
        idea = self.get_object()
        serializer = TransitionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with domain_errors():
            idea = services.change_status(
                idea, request.user, serializer.validated_data["status"]
            )
        return self._respond(idea)

    @extend_schema(
        tags=["Ideas"], request=RatingInputSerializer, responses=IdeaSerializer
    )
    @action(detail=True, methods=["post"])
    def ratings(self, request, pk=None):
        idea = self.get_object()
        serializer = RatingInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with domain_errors():
            idea = services.rate_idea(
                idea,
                request.user,
                serializer.validated_data["scores"],
                serializer.validated_data["comment"],
            )
        return self._respond(idea)

    @extend_schema(tags=["Ideas"], responses=RatingSummarySerializer)
    @action(detail=True, methods=["get"], url_path="rating-summary")
    def rating_summary(self, request, pk=None):
        idea = self.get_object()
        result = ledger.summary(idea, list_templates())
        return Response(RatingSummarySerializer(result).data)

    @extend_schema(tags=["Ideas"], responses=RatingDimensionSerializer(many=True))
    @action(detail=True, methods=["get"])
    def dimensions(self, request, pk=None):
        idea = self.get_object()
        dims = resolve_dimensions(idea, list_templates())
        return Response(RatingDimensionSerializer(dims, many=True).data)

    @extend_schema(tags=["Ideas"], request=CommentInputSerializer)
    @action(detail=True, methods=["get", "post"])
    def comments(self, request, pk=None):
        idea = self.get_object()
        if request.method == "GET":
            return Response(idea.comments or [])
        serializer = CommentInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        with domain_errors():
            comment = services.add_comment(
                idea, request.user, serializer.validated_data["text"]
            )
        return Response(comment, status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Ideas"], request=None, responses=IdeaSerializer)
    @action(detail=True, methods=["post"])
    def join(self, request, pk=None):
        idea = self.get_object()
        with domain_errors():
            idea = services.join_idea(idea, request.user)
        return self._respond(idea)

    @extend_schema(tags=["Ideas"], request=None)
    @action(detail=True, methods=["post"], url_path="suggest-evaluation")
    def suggest_evaluation(self, request, pk=None):
        idea = self.get_object()
        dims = resolve_dimensions(idea, list_templates())
        suggestion = assistant.suggest_evaluation(idea, dims)
        return Response(
            {
                "suggestion": suggestion,
                "dimensions": RatingDimensionSerializer(dims, many=True).data,
            }
        )

    @extend_schema(tags=["Ideas"], request=None)
    @action(detail=True, methods=["post"])
    def analysis(self, request, pk=None):
        idea = self.get_object()
        result = assistant.analyze_for_manager(idea)
        if result:
            # update() leaves status and updated_at alone
            Idea.objects.filter(pk=idea.pk).update(ai_summary=result["summary"])
        return Response({"analysis": result})

    @extend_schema(tags=["Ideas"], request=EnhanceTextSerializer)
    @action(detail=False, methods=["post"], url_path="enhance-text")
    def enhance_text(self, request):
        serializer = EnhanceTextSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        original = serializer.validated_data["text"]
        enhanced = assistant.enhance_text(original)
        return Response({"text": enhanced, "enhanced": enhanced != original})

    @extend_schema(tags=["Ideas"], responses=IdeaSerializer(many=True))
    @action(detail=False, methods=["get"])
    def top(self, request):
        try:
            limit = int(request.query_params.get("limit", settings.IDEA_TOP_N))
        except (TypeError, ValueError):
            limit = settings.IDEA_TOP_N
        limit = max(1, min(limit, 50))
        ideas = services.top_ideas(limit)
        serializer = self.get_serializer(ideas, many=True)
        return Response(serializer.data)

    @extend_schema(tags=["Ideas"], responses=IdeaSerializer(many=True))
    @action(detail=False, methods=["get"])
    def search(self, request):
        query = request.query_params.get("q", "")
        actor = Actor.from_user(request.user)
        base = _in_collection_order(Idea.objects.select_related("template"))
        results = leaderboard.search(base, query, actor)
        page = self.paginate_queryset(results)
        if page is not None:
            serializer = self.get_serializer(page, many=True)
            return self.get_paginated_response(serializer.data)
        return Response(self.get_serializer(results, many=True).data)

    @extend_schema(tags=["Ideas"], responses=IdeaSerializer(many=True))
    @action(detail=False, methods=["get"])
    def collaboration(self, request):
        base = _in_collection_order(
            Idea.objects.filter(status__in=leaderboard.COLLABORATION_STATUSES)
        )
        results = leaderboard.collaboration_feed(base)
        page = self.paginate_queryset(results)
        if page is not None:
            serializer = self.get_serializer(page, many=True)
            return self.get_paginated_response(serializer.data)
        return Response(self.get_serializer(results, many=True).data)
