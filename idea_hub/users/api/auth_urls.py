from dj_rest_auth.views import LogoutView
from dj_rest_auth.views import PasswordChangeView
from dj_rest_auth.views import UserDetailsView
from django.urls import path

from .auth_views import CookieOnlyJWTRefreshView
from .auth_views import CookieOnlyLoginView
from .auth_views import JWTCreateView
from .auth_views import JWTVerifyView

# Browser logins get HttpOnly cookies; jwt/create still returns bearer tokens
urlpatterns = [
    path("login/", CookieOnlyLoginView.as_view(), name="dj-rest-auth_login"),
    path("logout/", LogoutView.as_view(), name="dj-rest-auth_logout"),
    path("password/change/", PasswordChangeView.as_view(), name="rest_password_change"),
    path("user/", UserDetailsView.as_view(), name="rest_user_details"),
    path("jwt/create/", JWTCreateView.as_view(), name="jwt-create"),
    path("jwt/refresh/", CookieOnlyJWTRefreshView.as_view(), name="jwt-refresh"),
    path("jwt/verify/", JWTVerifyView.as_view(), name="jwt-verify"),
]
