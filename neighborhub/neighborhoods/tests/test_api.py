from http import HTTPStatus

import pytest

from neighborhub.realtime.presence import get_presence_store

pytestmark = pytest.mark.django_db

LOCATE_URL = "/api/v1/neighborhoods/locate/"


def test_lookup_by_zip_is_public(api_client, neighborhood):
    resp = api_client.get("/api/v1/neighborhoods/lookup/", {"zip_code": "19001"})
    assert resp.status_code == HTTPStatus.OK
    assert resp.json() == {
        "id": neighborhood.pk,
        "name": "Maple Grove",
        "description": "Tree lined streets",
    }


def test_lookup_unknown_zip_is_404(api_client, neighborhood):
    resp = api_client.get("/api/v1/neighborhoods/lookup/", {"zip_code": "10001"})
    assert resp.status_code == HTTPStatus.NOT_FOUND


def test_lookup_rejects_malformed_zip(api_client):
    resp = api_client.get("/api/v1/neighborhoods/lookup/", {"zip_code": "abc"})
    assert resp.status_code == HTTPStatus.BAD_REQUEST


def test_locate_uses_boundaries(api_client, neighborhood, other_neighborhood):
    inside = api_client.get(LOCATE_URL, {"lat": 40.0, "lng": -75.0})
    assert inside.status_code == HTTPStatus.OK
    assert inside.json()["id"] == neighborhood.pk

    outside = api_client.get(LOCATE_URL, {"lat": 41.0, "lng": -75.0})
    assert outside.status_code == HTTPStatus.NOT_FOUND


def test_detail_requires_authentication(api_client, neighborhood):
    resp = api_client.get(f"/api/v1/neighborhoods/{neighborhood.pk}/")
    assert resp.status_code == HTTPStatus.UNAUTHORIZED


def test_detail_lists_zip_codes(auth_client, neighborhood):
    resp = auth_client.get(f"/api/v1/neighborhoods/{neighborhood.pk}/")
    assert resp.status_code == HTTPStatus.OK
    assert resp.json()["zip_codes"] == ["19001"]


def test_stats_counts_online_members(auth_client, user, make_user, neighborhood):
    make_user()
    get_presence_store().register(user.pk, "sid-1")

    resp = auth_client.get(f"/api/v1/neighborhoods/{neighborhood.pk}/stats/")

    assert resp.status_code == HTTPStatus.OK
    body = resp.json()
    assert body["total_members"] == 2  # noqa: PLR2004
    assert body["online_members"] == 1
    assert body["forum_posts"] == 0
