from __future__ import annotations

from rest_framework import serializers

from idea_hub.org.models import Department
from idea_hub.org.services import UnknownDepartmentError
from idea_hub.org.services import canonical_department


class DepartmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Department
        fields = ["id", "name", "description", "is_active", "created_at", "updated_at"]
        read_only_fields = ("id", "created_at", "updated_at")

    def validate_name(self, value):
        name = value.strip()
        if not name:
            raise serializers.ValidationError("Department name is required.")
        clash = Department.objects.filter(name__iexact=name)
        if self.instance is not None:
            clash = clash.exclude(pk=self.instance.pk)
        if clash.exists():
            raise serializers.ValidationError("Department already exists.")
        return name


def validate_department_name(value):
    """Serializer-level check shared by the user endpoints."""
    try:
        return canonical_department(value)
    except UnknownDepartmentError as exc:
        raise serializers.ValidationError(str(exc)) from exc
