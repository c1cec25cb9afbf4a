from datetime import timedelta
from http import HTTPStatus
from unittest import mock

import pytest
from django.utils import timezone

from neighborhub.audit.models import AuditLog
from neighborhub.safety.models import ReportComment
from neighborhub.safety.models import SafetyReport
from neighborhub.users.models import User

pytestmark = pytest.mark.django_db

REPORTS_URL = "/api/v1/safety/reports/"


@pytest.fixture
def make_report(user):
    def _make(**kwargs):
        kwargs.setdefault("reporter", user)
        kwargs.setdefault("neighborhood", kwargs["reporter"].neighborhood)
        kwargs.setdefault("title", "Car break-in")
        kwargs.setdefault("description", "Window smashed overnight")
        kwargs.setdefault("report_type", SafetyReport.ReportType.CRIME)
        kwargs.setdefault("address", "12 Elm St")
        kwargs.setdefault("latitude", 40.0)
        kwargs.setdefault("longitude", -75.0)
        return SafetyReport.objects.create(**kwargs)

    return _make


@pytest.fixture
def moderator(make_user):
    return make_user(role=User.Role.MODERATOR)


def _ids(resp):
    return [row["id"] for row in resp.json()["results"]]


class TestCreate:
    def test_files_report_and_alerts_neighborhood(
        self,
        auth_client,
        user,
        django_capture_on_commit_callbacks,
    ):
        payload = {
            "title": "Downed power line",
            "description": "Across Oak Ave",
            "report_type": "utility-outage",
            "severity": "high",
            "address": "Oak Ave",
            "latitude": 40.01,
            "longitude": -75.01,
        }
        with (
            mock.patch(
                "neighborhub.safety.signals.publish_safety_alert",
            ) as publish,
            django_capture_on_commit_callbacks(execute=True),
        ):
            resp = auth_client.post(REPORTS_URL, payload, format="json")

        assert resp.status_code == HTTPStatus.CREATED
        body = resp.json()
        assert body["status"] == "active"
        assert body["reporter"]["id"] == user.pk
        assert body["is_verified"] is False
        publish.assert_called_once_with(SafetyReport.objects.get())

    def test_location_is_required(self, auth_client):
        resp = auth_client.post(
            REPORTS_URL,
            {"title": "x", "description": "y", "report_type": "other"},
            format="json",
        )
        assert resp.status_code == HTTPStatus.BAD_REQUEST
        assert {"address", "latitude", "longitude"} <= set(resp.json())

    def test_police_number_needs_police_report(self, auth_client):
        payload = {
            "title": "Stolen bike",
            "description": "From the porch",
            "report_type": "crime",
            "address": "3 Birch Rd",
            "latitude": 40.0,
            "longitude": -75.0,
            "police_report_number": "PR-1234",
        }
        resp = auth_client.post(REPORTS_URL, payload, format="json")
        assert resp.status_code == HTTPStatus.BAD_REQUEST
        assert "police_report_number" in resp.json()

        payload["police_reported"] = True
        resp = auth_client.post(REPORTS_URL, payload, format="json")
        assert resp.status_code == HTTPStatus.CREATED


class TestList:
    def test_defaults_to_active_in_own_neighborhood(
        self,
        auth_client,
        make_report,
        make_user,
        other_neighborhood,
    ):
        active = make_report()
        make_report(status=SafetyReport.Status.RESOLVED)
        make_report(reporter=make_user(neighborhood=other_neighborhood))

        assert _ids(auth_client.get(REPORTS_URL)) == [active.pk]
        everything = auth_client.get(REPORTS_URL, {"status": "all"})
        assert len(_ids(everything)) == 2  # noqa: PLR2004

    def test_type_and_severity_filters(self, auth_client, make_report):
        pet = make_report(
            report_type=SafetyReport.ReportType.LOST_PET,
            severity=SafetyReport.Severity.LOW,
        )
        make_report()

        assert _ids(auth_client.get(REPORTS_URL, {"type": "lost-pet"})) == [pet.pk]
        assert _ids(auth_client.get(REPORTS_URL, {"severity": "low"})) == [pet.pk]

    def test_radius_search(self, auth_client, make_report):
        near = make_report(latitude=40.01, longitude=-75.0)
        make_report(latitude=40.5, longitude=-75.0)

        resp = auth_client.get(REPORTS_URL, {"lat": 40.0, "lng": -75.0, "radius": 5})

        assert _ids(resp) == [near.pk]

    def test_radius_needs_both_coordinates(self, auth_client, make_report):
        make_report(latitude=40.01)
        make_report(latitude=40.5)
        resp = auth_client.get(REPORTS_URL, {"lat": 40.0, "radius": 1})
        assert resp.json()["count"] == 2  # noqa: PLR2004

    def test_sort_by_severity(self, auth_client, make_report):
        low = make_report(severity=SafetyReport.Severity.LOW)
        critical = make_report(severity=SafetyReport.Severity.CRITICAL)
        medium = make_report()

        resp = auth_client.get(REPORTS_URL, {"sort_by": "severity"})

        assert _ids(resp) == [critical.pk, medium.pk, low.pk]


class TestAnonymity:
    def test_reporter_hidden_from_neighbors(
        self,
        api_client,
        make_report,
        make_user,
        user,
    ):
        report = make_report(is_anonymous=True)

        api_client.force_authenticate(user=make_user())
        assert api_client.get(REPORTS_URL).json()["results"][0]["reporter"] is None

        api_client.force_authenticate(user=user)
        detail = api_client.get(f"{REPORTS_URL}{report.pk}/").json()
        assert detail["report"]["reporter"]["id"] == user.pk

    def test_anonymous_comment_author_hidden(
        self,
        api_client,
        make_report,
        make_user,
    ):
        report = make_report()
        commenter = make_user()
        ReportComment.objects.create(
            report=report,
            author=commenter,
            content="I saw it too",
            is_anonymous=True,
        )

        api_client.force_authenticate(user=make_user())
        comments = api_client.get(f"{REPORTS_URL}{report.pk}/").json()["comments"]

        assert comments[0]["author"] is None
        assert comments[0]["content"] == "I saw it too"


class TestActions:
    def test_acknowledge_toggles(self, auth_client, make_report, make_user):
        report = make_report(reporter=make_user())

        first = auth_client.post(f"{REPORTS_URL}{report.pk}/acknowledge/").json()
        second = auth_client.post(f"{REPORTS_URL}{report.pk}/acknowledge/").json()

        assert (first["is_acknowledged"], first["acknowledgements_count"]) == (True, 1)
        assert (second["is_acknowledged"], second["acknowledgements_count"]) == (
            False,
            0,
        )

    def test_comment(self, auth_client, make_report, user):
        report = make_report()
        resp = auth_client.post(
            f"{REPORTS_URL}{report.pk}/comments/",
            {"content": "  Stay safe  "},
            format="json",
        )
        assert resp.status_code == HTTPStatus.CREATED
        assert resp.json()["content"] == "Stay safe"
        assert resp.json()["author"]["id"] == user.pk

    def test_blank_comment_rejected(self, auth_client, make_report):
        report = make_report()
        resp = auth_client.post(
            f"{REPORTS_URL}{report.pk}/comments/",
            {"content": "   "},
            format="json",
        )
        assert resp.status_code == HTTPStatus.BAD_REQUEST

    def test_verify_is_moderator_only_and_audited(
        self,
        api_client,
        make_report,
        moderator,
        user,
    ):
        report = make_report()

        api_client.force_authenticate(user=user)
        denied = api_client.post(f"{REPORTS_URL}{report.pk}/verify/")
        assert denied.status_code == HTTPStatus.FORBIDDEN

        api_client.force_authenticate(user=moderator)
        verified = api_client.post(f"{REPORTS_URL}{report.pk}/verify/").json()
        assert verified["is_verified"] is True
        assert verified["verified_by"]["id"] == moderator.pk

        undone = api_client.post(f"{REPORTS_URL}{report.pk}/verify/").json()
        assert undone["is_verified"] is False
        assert undone["verified_by"] is None

        actions = list(
            AuditLog.objects.order_by("pk").values_list("action", flat=True),
        )
        assert actions == ["safety_report_verified", "safety_report_unverified"]

    def test_moderator_can_resolve_but_not_delete(
        self,
        api_client,
        make_report,
        moderator,
    ):
        report = make_report()
        api_client.force_authenticate(user=moderator)

        resp = api_client.patch(
            f"{REPORTS_URL}{report.pk}/",
            {"status": "resolved"},
            format="json",
        )
        assert resp.json()["status"] == "resolved"

        resp = api_client.delete(f"{REPORTS_URL}{report.pk}/")
        assert resp.status_code == HTTPStatus.FORBIDDEN

    def test_admin_removal_is_audited(self, api_client, make_report, make_user):
        report = make_report()
        admin = make_user(role=User.Role.ADMIN)
        api_client.force_authenticate(user=admin)

        resp = api_client.delete(f"{REPORTS_URL}{report.pk}/")

        assert resp.status_code == HTTPStatus.NO_CONTENT
        log = AuditLog.objects.get(action="safety_report_removed")
        assert log.actor == admin
        assert log.target_id == report.pk


class TestStats:
    def test_breakdown_over_timeframe(self, auth_client, make_report):
        make_report()
        make_report(severity=SafetyReport.Severity.HIGH)
        make_report(
            report_type=SafetyReport.ReportType.LOST_PET,
            status=SafetyReport.Status.RESOLVED,
        )
        old = make_report()
        SafetyReport.objects.filter(pk=old.pk).update(
            created_at=timezone.now() - timedelta(days=10),
        )

        resp = auth_client.get(f"{REPORTS_URL}stats/", {"timeframe": 7})

        assert resp.status_code == HTTPStatus.OK
        body = resp.json()
        assert body["timeframe_days"] == 7  # noqa: PLR2004
        assert body["total"] == 3  # noqa: PLR2004
        assert body["by_type"] == {"crime": 2, "lost-pet": 1}
        assert body["by_severity"] == {"medium": 2, "high": 1}
        assert body["by_status"] == {"active": 2, "resolved": 1}

    def test_timeframe_is_bounded(self, auth_client):
        resp = auth_client.get(f"{REPORTS_URL}stats/", {"timeframe": 1000})
        assert resp.status_code == HTTPStatus.BAD_REQUEST
