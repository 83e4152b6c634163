from django.contrib.auth.password_validation import validate_password
from django.urls import NoReverseMatch
from django.urls import reverse
from rest_framework import serializers

from idea_hub.org.api.serializers import validate_department_name
from idea_hub.users.models import User
from idea_hub.users.roles import ALL_ROLES
from idea_hub.users.roles import role_of


class UserSerializer(serializers.ModelSerializer[User]):
    full_name = serializers.CharField(source="name", read_only=True)
    groups = serializers.SlugRelatedField(
        many=True,
        read_only=True,
        slug_field="name",
    )
    id = serializers.IntegerField(read_only=True)
    role = serializers.SerializerMethodField()

    # Identity and approval state are managed through dedicated endpoints
    username = serializers.CharField(read_only=True)
    email = serializers.EmailField(read_only=True)
    status = serializers.CharField(read_only=True)

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "first_name",
            "last_name",
            "full_name",
            "email",
            "department",
            "status",
            "role",
            "groups",
            "url",
        ]

    url = serializers.SerializerMethodField()

    def get_role(self, obj: User) -> str | None:
        return role_of(obj)

    def get_url(self, obj: User) -> str:
        request = self.context.get("request")
        namespace = getattr(
            getattr(request, "resolver_match", None),
            "namespace",
            None,
        )
        candidates = []
        if namespace:
            candidates.append(f"{namespace}:user-detail")
        candidates.extend(["api_v1:user-detail", "user-detail"])

        for view_name in candidates:
            try:
                url = reverse(view_name, kwargs={"username": obj.username})
            except NoReverseMatch:
                continue
            return request.build_absolute_uri(url) if request is not None else url
        return ""

    def validate_department(self, value):
        return validate_department_name(value)

    def update(self, instance, validated_data):
        forbidden = {
            k for k in ("username", "email", "status") if k in self.initial_data
        }
        if forbidden:
            errors = {}
            for f in forbidden:
                errors[f] = "This field is read-only."
            raise serializers.ValidationError(errors)
        instance.first_name = validated_data.get("first_name", instance.first_name)
        instance.last_name = validated_data.get("last_name", instance.last_name)
        instance.department = validated_data.get("department", instance.department)
        instance.save()
        return instance


class UserRegistrationSerializer(serializers.Serializer):
    username = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})
    first_name = serializers.CharField(max_length=150, required=False, default="")
    last_name = serializers.CharField(max_length=150, required=False, default="")
    department = serializers.CharField(max_length=150, required=False, default="")

    def validate_department(self, value: str) -> str:
        return validate_department_name(value)

    def validate_email(self, value: str) -> str:
        if User.objects.filter(email__iexact=value).exists():
            msg = "A user with this email already exists."
            raise serializers.ValidationError(msg)
        return value

    def validate(self, attrs):
        validate_password(attrs["password"])
        return attrs


class UserStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=User.Status.choices)
    role = serializers.ChoiceField(
        choices=[(r, r) for r in ALL_ROLES], required=False, allow_null=True
    )
    department = serializers.CharField(max_length=150, required=False, allow_blank=True)

    def validate_department(self, value):
        return validate_department_name(value)
