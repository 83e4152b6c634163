from django.conf import settings
from django.urls import include
from django.urls import path
from rest_framework.routers import DefaultRouter
from rest_framework.routers import SimpleRouter

from idea_hub.formtemplates.api.views import FormTemplateViewSet
from idea_hub.ideas.api.views import IdeaViewSet
from idea_hub.notifications.api.views import NotificationViewSet
from idea_hub.org.api.views import DepartmentViewSet
from idea_hub.users.api.views import UserViewSet

router = DefaultRouter() if settings.DEBUG else SimpleRouter()

router.register("users", UserViewSet)
router.register("ideas", IdeaViewSet, basename="ideas")
router.register("templates", FormTemplateViewSet, basename="templates")
router.register("notifications", NotificationViewSet, basename="notifications")
router.register("departments", DepartmentViewSet, basename="departments")


app_name = "api"
urlpatterns = [
    path(
        "audit/",
        include(("idea_hub.audit.api.urls", "audit"), namespace="audit"),
    ),
    *router.urls,
]
