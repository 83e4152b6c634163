from __future__ import annotations

from rest_framework import serializers

from idea_hub.ideas import ledger
from idea_hub.ideas import leaderboard
from idea_hub.ideas import workflow
from idea_hub.ideas.actors import Actor
from idea_hub.ideas.models import Idea
from idea_hub.ideas.normalization import normalize_payload
from idea_hub.ideas.normalization import normalize_status


class IdeaSerializer(serializers.ModelSerializer):
    """Read representation of an idea with its derived scores."""

    author = serializers.IntegerField(source="author_id", read_only=True)
    template = serializers.CharField(source="template_id", read_only=True)
    parent_idea = serializers.UUIDField(source="parent_idea_id", read_only=True)
    aggregate_percentage = serializers.SerializerMethodField()
    grade = serializers.SerializerMethodField()
    collaboration_open = serializers.SerializerMethodField()
    allowed_transitions = serializers.SerializerMethodField()

    class Meta:
        model = Idea
        fields = [
            "id",
            "public_id",
            "author",
            "author_name",
            "department",
            "title",
            "description",
            "category",
            "cover_image",
            "tags",
            "status",
            "template",
            "template_name",
            "dynamic_data",
            "parent_idea",
            "ratings",
            "comments",
            "collaborators",
            "aggregate_percentage",
            "grade",
            "collaboration_open",
            "allowed_transitions",
            "duplicate_flag",
            "ai_summary",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_aggregate_percentage(self, obj: Idea) -> float:
        return round(ledger.aggregate_percentage(obj), 2)

    def get_grade(self, obj: Idea) -> str:
        return ledger.summary(obj).grade

    def get_collaboration_open(self, obj: Idea) -> bool:
        return leaderboard.is_collaboration_open(obj)

    def get_allowed_transitions(self, obj: Idea) -> list[str]:
        request = self.context.get("request")
        actor = Actor.from_user(getattr(request, "user", None))
        return sorted(workflow.allowed_transitions(obj, actor))


class IdeaWriteSerializer(serializers.Serializer):
    """Accepts current, camelCase and legacy idea payloads."""

    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True)
    category = serializers.CharField(max_length=150, required=False, allow_blank=True)
    cover_image = serializers.URLField(
        max_length=500, required=False, allow_blank=True
    )
    tags = serializers.ListField(
        child=serializers.CharField(max_length=100), required=False
    )
    status = serializers.ChoiceField(choices=Idea.Status.choices, required=False)
    template = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    parent_idea = serializers.CharField(
        required=False, allow_null=True, allow_blank=True
    )
    dynamic_data = serializers.DictField(required=False)

    def to_internal_value(self, data):
        if hasattr(data, "dict"):
            data = data.dict()
        return super().to_internal_value(normalize_payload(data))


class TransitionSerializer(serializers.Serializer):
    status = serializers.CharField()

    def validate_status(self, value: str) -> str:
        return normalize_status(value)


class RatingInputSerializer(serializers.Serializer):
    scores = serializers.DictField(child=serializers.FloatField(), default=dict)
    comment = serializers.CharField(required=False, allow_blank=True, default="")


class CommentInputSerializer(serializers.Serializer):
    text = serializers.CharField()


class EnhanceTextSerializer(serializers.Serializer):
    text = serializers.CharField(allow_blank=True)


class RatingDimensionSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField(allow_blank=True)
    weight = serializers.FloatField()


class RatingSummarySerializer(serializers.Serializer):
    percentage = serializers.IntegerField()
    grade = serializers.CharField(allow_blank=True)
    count = serializers.IntegerField()
    details = serializers.ListField(child=serializers.DictField())
