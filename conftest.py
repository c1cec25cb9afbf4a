import pytest
from rest_framework.test import APIClient

from neighborhub.neighborhoods.models import Neighborhood
from neighborhub.neighborhoods.models import NeighborhoodZipCode
from neighborhub.realtime.presence import get_presence_store
from neighborhub.users.models import User

TEST_PASSWORD = "Str0ngPass!x"  # noqa: S105

# Square around (40.0, -75.0), rings are [lng, lat]
SQUARE = [[[-75.1, 39.9], [-74.9, 39.9], [-74.9, 40.1], [-75.1, 40.1], [-75.1, 39.9]]]


@pytest.fixture(autouse=True)
def _reset_presence():
    store = get_presence_store()
    store.clear()
    yield
    store.clear()


@pytest.fixture
def neighborhood(db):
    hood = Neighborhood.objects.create(
        name="Maple Grove",
        description="Tree lined streets",
        boundaries=SQUARE,
    )
    NeighborhoodZipCode.objects.create(code="19001", neighborhood=hood)
    return hood


@pytest.fixture
def other_neighborhood(db):
    hood = Neighborhood.objects.create(name="Riverside")
    NeighborhoodZipCode.objects.create(code="19002", neighborhood=hood)
    return hood


@pytest.fixture
def make_user(db, neighborhood):
    counter = {"n": 0}

    def _make(**kwargs):
        counter["n"] += 1
        n = counter["n"]
        kwargs.setdefault("username", f"neighbor{n}@example.com")
        kwargs.setdefault("email", kwargs["username"])
        kwargs.setdefault("first_name", f"Pat{n}")
        kwargs.setdefault("last_name", "Lee")
        kwargs.setdefault("neighborhood", neighborhood)
        kwargs.setdefault("is_verified", True)
        kwargs.setdefault("password", TEST_PASSWORD)
        return User.objects.create_user(**kwargs)

    return _make


@pytest.fixture
def user(make_user):
    return make_user(username="alex@example.com", first_name="Alex", last_name="Kim")


@pytest.fixture
def password():
    return TEST_PASSWORD


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def auth_client(api_client, user):
    api_client.force_authenticate(user=user)
    return api_client
