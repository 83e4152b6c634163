from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.mixins import DestroyModelMixin
from rest_framework.mixins import ListModelMixin
from rest_framework.mixins import RetrieveModelMixin
from rest_framework.mixins import UpdateModelMixin
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from idea_hub.audit.utils import log_action
from idea_hub.users.api.permissions import IsAdminOnly
from idea_hub.users.models import User
from idea_hub.users.roles import is_elevated
from idea_hub.users.roles import role_of
from idea_hub.users.services import UsernameTakenError
from idea_hub.users.services import register_user
from idea_hub.users.services import update_user_status

from .serializers import UserRegistrationSerializer
from .serializers import UserSerializer
from .serializers import UserStatusSerializer


@extend_schema_view(
    list=extend_schema(tags=["Users"]),
    retrieve=extend_schema(tags=["Users"]),
    partial_update=extend_schema(tags=["Users"]),
    update=extend_schema(tags=["Users"]),
    destroy=extend_schema(summary="Delete a user", tags=["Users"]),
)
class UserViewSet(
    RetrieveModelMixin,
    ListModelMixin,
    UpdateModelMixin,
    DestroyModelMixin,
    GenericViewSet,
):
    serializer_class = UserSerializer
    queryset = User.objects.all()
    lookup_field = "username"
    pagination_class = None

    def get_queryset(self, *args, **kwargs):  # type: ignore[override]
        user = self.request.user
        if not getattr(user, "is_authenticated", False):  # pragma: no cover - safety
            return User.objects.none()
        # Managers/Admins may list all users; others only themselves
        qs = User.objects.all()
        if not is_elevated(user):
            qs = qs.filter(pk=user.pk)
        status_filter = self.request.query_params.get("status")
        if status_filter:
            qs = qs.filter(status=status_filter)
        return qs.order_by("username")

    def get_permissions(self):
        if self.action == "register":
            return [AllowAny()]
        if self.action in ("set_status", "destroy"):
            return [IsAdminOnly()]
        return super().get_permissions()

    @action(detail=False)
    def me(self, request):
        serializer = UserSerializer(request.user, context={"request": request})
        return Response(status=status.HTTP_200_OK, data=serializer.data)

    @extend_schema(request=UserRegistrationSerializer, responses=UserSerializer)
    @action(detail=False, methods=["post"], url_path="register")
    def register(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            user = register_user(**serializer.validated_data)
        except UsernameTakenError as exc:
            return Response(
                {"username": [str(exc)]}, status=status.HTTP_400_BAD_REQUEST
            )
        log_action(
            "user_registered",
            actor=user,
            message=f"username={user.username} status={user.status}",
            model_name="User",
            record_id=user.pk,
        )
        data = UserSerializer(user, context={"request": request}).data
        return Response(data, status=status.HTTP_201_CREATED)

    @extend_schema(request=UserStatusSerializer, responses=UserSerializer)
    @action(detail=True, methods=["post"], url_path="status")
    def set_status(self, request, username=None):
        target = User.objects.filter(username=username).first()
        if target is None:
            return Response({"detail": "Not found."}, status=status.HTTP_404_NOT_FOUND)
        serializer = UserStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        before = {"status": target.status}
        update_user_status(
            target,
            serializer.validated_data["status"],
            serializer.validated_data.get("role"),
            serializer.validated_data.get("department"),
        )
        log_action(
            "user_status_changed",
            actor=request.user,
            message=f"username={target.username}",
            model_name="User",
            record_id=target.pk,
            before=before,
            after={
                "status": target.status,
                "role": serializer.validated_data.get("role"),
            },
        )
        return Response(UserSerializer(target, context={"request": request}).data)

    def perform_update(self, serializer):  # type: ignore[override]
        instance = serializer.save()
        log_action(
            "user_updated",
            actor=self.request.user,
            message=f"username={instance.username}",
        )

    def destroy(self, request, *args, **kwargs):
        if self.get_object().pk == request.user.pk:
            return Response(
                {"detail": "You cannot delete your own account."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return super().destroy(request, *args, **kwargs)

    def perform_destroy(self, instance):
        before = {"username": instance.username, "role": role_of(instance)}
        pk = instance.pk
        instance.delete()
        log_action(
            "user_deleted",
            actor=self.request.user,
            message=f"username={before['username']}",
            model_name="User",
            record_id=pk,
            before=before,
        )
