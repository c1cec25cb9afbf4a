from datetime import timedelta
from http import HTTPStatus

import pytest
from django.test import RequestFactory
from django.utils import timezone

from neighborhub.audit.models import AuditLog
from neighborhub.audit.utils import client_ip
from neighborhub.audit.utils import log_action
from neighborhub.users.models import User

pytestmark = pytest.mark.django_db

RECENT_URL = "/api/v1/audit/recent/"


def test_log_action_defaults_neighborhood_to_actor(user):
    row = log_action("role_changed", actor=user, target=user, message="to moderator")

    assert row.neighborhood_id == user.neighborhood_id
    assert row.target_type == "users.user"
    assert row.target_id == user.pk


def test_log_action_without_actor():
    row = log_action("system_cleanup")
    assert row.actor is None
    assert row.neighborhood is None


def test_client_ip_prefers_forwarded_header():
    request = RequestFactory().get("/", HTTP_X_FORWARDED_FOR="10.0.0.9, 172.16.0.1")
    assert client_ip(request) == "10.0.0.9"
    assert client_ip(None) == ""


class TestRecentAudit:
    def test_requires_moderator(self, auth_client):
        assert auth_client.get(RECENT_URL).status_code == HTTPStatus.FORBIDDEN

    def test_newest_first_with_limit(self, api_client, make_user):
        base = timezone.now()
        for i in range(6):
            row = AuditLog.objects.create(action=f"action_{i}")
            AuditLog.objects.filter(pk=row.pk).update(
                created_at=base + timedelta(seconds=i),
            )
        api_client.force_authenticate(user=make_user(role=User.Role.ADMIN))

        resp = api_client.get(RECENT_URL, {"limit": 3})

        assert resp.status_code == HTTPStatus.OK
        assert [r["action"] for r in resp.data["results"]] == [
            "action_5",
            "action_4",
            "action_3",
        ]

    def test_moderator_sees_own_neighborhood_only(
        self,
        api_client,
        make_user,
        neighborhood,
        other_neighborhood,
    ):
        log_action("local", neighborhood=neighborhood)
        log_action("elsewhere", neighborhood=other_neighborhood)
        api_client.force_authenticate(user=make_user(role=User.Role.MODERATOR))

        resp = api_client.get(RECENT_URL)

        assert [r["action"] for r in resp.data["results"]] == ["local"]
