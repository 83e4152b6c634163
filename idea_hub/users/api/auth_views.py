from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from datetime import timedelta

from dj_rest_auth.views import LoginView
from django.conf import settings
from drf_spectacular.utils import extend_schema
from drf_spectacular.utils import extend_schema_view
from rest_framework.response import Response
from rest_framework_simplejwt.views import TokenObtainPairView
from rest_framework_simplejwt.views import TokenRefreshView
from rest_framework_simplejwt.views import TokenVerifyView


def _set_cookie(
    response: Response,
    name: str,
    value: str,
    max_age: int | None,
) -> None:
    if not value:
        return
    cookie_kwargs = {
        "httponly": True,
        "secure": getattr(settings, "JWT_AUTH_COOKIE_SECURE", not settings.DEBUG),
        "samesite": getattr(settings, "JWT_AUTH_COOKIE_SAMESITE", "Lax"),
        "path": "/",
    }
    if max_age is not None:
        cookie_kwargs["max_age"] = max_age
    response.set_cookie(name, value, **cookie_kwargs)


def set_jwt_cookies(
    response: Response, access: str | None, refresh: str | None
) -> None:
    access_lifetime: timedelta = settings.SIMPLE_JWT["ACCESS_TOKEN_LIFETIME"]
    refresh_lifetime: timedelta = settings.SIMPLE_JWT["REFRESH_TOKEN_LIFETIME"]

    if access:
        _set_cookie(
            response,
            getattr(settings, "JWT_AUTH_COOKIE", "access_token"),
            access,
            int(access_lifetime.total_seconds()),
        )
    if refresh:
        _set_cookie(
            response,
            getattr(settings, "JWT_AUTH_REFRESH_COOKIE", "refresh_token"),
            refresh,
            int(refresh_lifetime.total_seconds()),
        )


def _move_tokens_to_cookies(response: Response, detail: str) -> Response:
    if isinstance(response.data, dict):
        access = response.data.get("access")
        refresh = response.data.get("refresh")
        if access or refresh:
            set_jwt_cookies(response, access, refresh)
            response.data = {"detail": detail}
    return response


@extend_schema_view(post=extend_schema(tags=["Authentication"]))
class CookieOnlyLoginView(LoginView):
    """Login that sets HttpOnly JWT cookies and scrubs tokens from JSON body.

    Pending and rejected accounts never reach this point: the status-aware
    authentication backend refuses them.
    """

    def post(self, request, *args, **kwargs):  # type: ignore[override]
        response: Response = super().post(request, *args, **kwargs)
        return _move_tokens_to_cookies(response, "login successful")


@extend_schema_view(post=extend_schema(tags=["Authentication"]))
class CookieOnlyJWTRefreshView(TokenRefreshView):
    """Refresh that sets HttpOnly JWT cookies and scrubs tokens from JSON body."""

    def post(self, request, *args, **kwargs):  # type: ignore[override]
        response: Response = super().post(request, *args, **kwargs)
        return _move_tokens_to_cookies(response, "refresh successful")


@extend_schema_view(post=extend_schema(tags=["JWT Authentication"]))
class JWTCreateView(TokenObtainPairView):
    """Bearer tokens in the body, for API clients that cannot keep cookies."""


@extend_schema_view(post=extend_schema(tags=["JWT Authentication"]))
class JWTVerifyView(TokenVerifyView):
    pass
