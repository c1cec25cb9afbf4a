import pytest

from neighborhub.utils.geo import bounding_box
from neighborhub.utils.geo import haversine_miles
from neighborhub.utils.geo import point_in_polygon

SQUARE = [[0, 0], [10, 0], [10, 10], [0, 10], [0, 0]]


def test_haversine_zero_distance():
    assert haversine_miles(40.0, -75.0, 40.0, -75.0) == 0


def test_haversine_one_degree_of_latitude():
    assert haversine_miles(40.0, -75.0, 41.0, -75.0) == pytest.approx(69.1, abs=0.2)


def test_bounding_box_contains_radius():
    min_lat, max_lat, min_lng, max_lng = bounding_box(40.0, -75.0, 5)
    assert min_lat < 40.0 < max_lat
    assert min_lng < -75.0 < max_lng
    assert haversine_miles(40.0, -75.0, max_lat, -75.0) >= 5 - 0.01


@pytest.mark.parametrize(
    ("lng", "lat", "expected"),
    [
        (5, 5, True),
        (11, 5, False),
        (5, -1, False),
        (0.5, 9.5, True),
    ],
)
def test_point_in_polygon(lng, lat, expected):
    assert point_in_polygon(lng, lat, SQUARE) is expected


def test_degenerate_ring_contains_nothing():
    assert point_in_polygon(0, 0, [[0, 0], [1, 1]]) is False
