from __future__ import annotations

from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from idea_hub.formtemplates.services import ensure_default_template
from idea_hub.ideas.models import Idea
from idea_hub.users.roles import ALL_ROLES
from idea_hub.users.roles import ROLE_ADMIN
from idea_hub.users.roles import ROLE_EMPLOYEE
from idea_hub.users.roles import ROLE_GUEST
from idea_hub.users.roles import ROLE_MANAGER
from tests.permissions.factories import create_user_with_role
from tests.permissions.factories import ensure_groups

User = get_user_model()

__all__ = [
    "ROLE_ADMIN",
    "ROLE_EMPLOYEE",
    "ROLE_GUEST",
    "ROLE_MANAGER",
    "RoleAPITestCase",
]


class RoleAPITestCase(APITestCase):
    """Base test case to streamline RBAC fixtures and helpers."""

    def setUp(self):
        super().setUp()
        ensure_groups(ALL_ROLES)
        self.template = ensure_default_template()
        self.roles: dict[str, User] = {
            ROLE_ADMIN: create_user_with_role(
                "admin", groups=[ROLE_ADMIN], is_staff=True, department="HQ"
            ),
            ROLE_MANAGER: create_user_with_role(
                "manager", groups=[ROLE_MANAGER], department="HQ"
            ),
            ROLE_EMPLOYEE: create_user_with_role(
                "employee", groups=[ROLE_EMPLOYEE], department="Engineering"
            ),
            ROLE_GUEST: create_user_with_role("guest", groups=[ROLE_GUEST]),
        }
        self.others = {
            "employee": create_user_with_role(
                "other", groups=[ROLE_EMPLOYEE], department="Sales"
            )
        }

    # Utilities -------------------------------------------------------------
    def create_idea(self, *, author=None, status=Idea.Status.DRAFT, **fields):
        author = author or self.roles[ROLE_EMPLOYEE]
        fields.setdefault("title", "Solar roof")
        fields.setdefault("description", "Panels on the warehouse roof")
        fields.setdefault("category", "Sustainability")
        return Idea.objects.create(
            author=author,
            author_name=author.display_name,
            department=author.department,
            status=status,
            template=self.template,
            template_name=self.template.name,
            **fields,
        )

    def authenticate(self, role: str):
        self.client.force_authenticate(user=self.roles[role])

    def assert_http_status(self, response, expected_status: int):
        msg = getattr(response, "data", response)
        assert response.status_code == expected_status, msg

    def get(self, url_name: str, *, role: str, reverse_kwargs=None, **kwargs):
        self.authenticate(role)
        url = reverse(url_name, kwargs=reverse_kwargs)
        return self.client.get(url, **kwargs)

    def post(
        self, url_name: str, *, role: str, payload=None, reverse_kwargs=None, **kwargs
    ):
        self.authenticate(role)
        url = reverse(url_name, kwargs=reverse_kwargs)
        return self.client.post(url, data=payload or {}, format="json", **kwargs)

    def patch(
        self, url_name: str, *, role: str, payload=None, reverse_kwargs=None, **kwargs
    ):
        self.authenticate(role)
        url = reverse(url_name, kwargs=reverse_kwargs)
        return self.client.patch(url, data=payload or {}, format="json", **kwargs)

    def delete(self, url_name: str, *, role: str, reverse_kwargs=None, **kwargs):
        self.authenticate(role)
        url = reverse(url_name, kwargs=reverse_kwargs)
        return self.client.delete(url, **kwargs)

    def assert_allowed(self, response):
        assert response.status_code in (
            status.HTTP_200_OK,
            status.HTTP_201_CREATED,
            status.HTTP_204_NO_CONTENT,
        ), response.data

    def assert_denied(self, response, code=status.HTTP_403_FORBIDDEN):
        assert response.status_code == code, response.data

    def extract_results(self, response):
        data = response.data
        if isinstance(data, dict) and "results" in data:
            return data["results"]
        return data if isinstance(data, list) else []
