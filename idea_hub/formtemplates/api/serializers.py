from __future__ import annotations

from rest_framework import serializers

from idea_hub.formtemplates.models import FormTemplate
from idea_hub.formtemplates.schema import TemplateSchemaError
from idea_hub.formtemplates.schema import validate_fields
from idea_hub.formtemplates.schema import validate_rating_config

_ALIASES = {"ratingConfig": "rating_config", "isActive": "is_active"}


class FormTemplateSerializer(serializers.ModelSerializer):
    class Meta:
        model = FormTemplate
        fields = [
            "id",
            "name",
            "description",
            "fields",
            "rating_config",
            "is_active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ("id", "created_at", "updated_at")

    def validate_fields(self, value):
        try:
            return validate_fields(value)
        except TemplateSchemaError as exc:
            raise serializers.ValidationError(str(exc)) from exc

    def validate_rating_config(self, value):
        try:
            return validate_rating_config(value)
        except TemplateSchemaError as exc:
            raise serializers.ValidationError(str(exc)) from exc

    def to_internal_value(self, data):
        # Accept the camelCase keys used by the form builder
        if hasattr(data, "keys") and any(k in data for k in _ALIASES):
            data = {_ALIASES.get(k, k): v for k, v in data.items()}
        return super().to_internal_value(data)
