from __future__ import annotations

from django.utils import timezone

from idea_hub.audit.models import AuditLog
from tests.permissions.mixins import ROLE_ADMIN
from tests.permissions.mixins import ROLE_EMPLOYEE
from tests.permissions.mixins import ROLE_GUEST
from tests.permissions.mixins import ROLE_MANAGER
from tests.permissions.mixins import RoleAPITestCase


class TestRecentAuditEndpoint(RoleAPITestCase):
    def test_recent_audit_requires_elevated_role(self):
        for role in (ROLE_EMPLOYEE, ROLE_GUEST):
            denied = self.get("api_v1:audit:recent", role=role)
            self.assert_http_status(denied, 403)

        for role in (ROLE_MANAGER, ROLE_ADMIN):
            allowed = self.get("api_v1:audit:recent", role=role)
            self.assert_http_status(allowed, 200)

    def test_recent_audit_returns_latest_5(self):
        # Create 6 logs with deterministic timestamps so ordering is stable.
        base = timezone.now()
        created = []
        for i in range(6):
            row = AuditLog.objects.create(action=f"test_action_{i}", message=str(i))
            created.append(row)
        for i, row in enumerate(created):
            AuditLog.objects.filter(pk=row.pk).update(
                created_at=base + timezone.timedelta(seconds=i)
            )

        res = self.get("api_v1:audit:recent", role=ROLE_MANAGER)
        self.assert_http_status(res, 200)
        assert res.data["limit"] == 5
        actions = [r["action"] for r in res.data["results"]]
        assert actions == [
            "test_action_5",
            "test_action_4",
            "test_action_3",
            "test_action_2",
            "test_action_1",
        ]

    def test_transition_history_for_one_idea(self):
        idea = self.create_idea(
            status="Submitted",
            dynamic_data={"benefits": "b", "feasibility": "Easy"},
        )
        self.post(
            "api_v1:ideas-transition",
            role=ROLE_MANAGER,
            payload={"status": "Approved"},
            reverse_kwargs={"pk": idea.pk},
        )
        AuditLog.objects.create(action="noise", record_id="other")

        res = self.get(
            "api_v1:audit:recent",
            role=ROLE_ADMIN,
            data={"record_id": str(idea.pk)},
        )
        self.assert_http_status(res, 200)
        assert [r["action"] for r in res.data["results"]] == ["idea.transition"]
        assert res.data["results"][0]["after"] == {"status": "Approved"}

    def test_filters_by_action_and_clamps_limit(self):
        for i in range(3):
            AuditLog.objects.create(action="idea.rate", record_id=str(i))
        AuditLog.objects.create(action="template.update")

        res = self.get(
            "api_v1:audit:recent",
            role=ROLE_MANAGER,
            data={"action": "idea.rate", "limit": "500"},
        )
        self.assert_http_status(res, 200)
        assert res.data["limit"] == 50
        assert {r["action"] for r in res.data["results"]} == {"idea.rate"}
        assert len(res.data["results"]) == 3
