"""Small geographic helpers.

Coordinates are plain floats; polygons are rings of ``[lng, lat]`` pairs as in
GeoJSON.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

EARTH_RADIUS_MILES = 3958.8
MILES_PER_DEGREE_LAT = 69.0


def haversine_miles(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in miles between two points."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)
    a = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    return 2 * EARTH_RADIUS_MILES * math.asin(math.sqrt(a))


def bounding_box(
    lat: float,
    lng: float,
    radius_miles: float,
) -> tuple[float, float, float, float]:
    """Return ``(min_lat, max_lat, min_lng, max_lng)`` enclosing the radius.

    Used as a cheap database prefilter before the exact distance check.
    """
    d_lat = radius_miles / MILES_PER_DEGREE_LAT
    cos_lat = max(math.cos(math.radians(lat)), 1e-6)
    d_lng = radius_miles / (MILES_PER_DEGREE_LAT * cos_lat)
    return lat - d_lat, lat + d_lat, lng - d_lng, lng + d_lng


def point_in_polygon(lng: float, lat: float, ring: Sequence[Sequence[float]]) -> bool:
    """Ray casting test of ``(lng, lat)`` against a polygon ring."""
    inside = False
    n = len(ring)
    if n < 3:  # noqa: PLR2004
        return False
    j = n - 1
    for i in range(n):
        xi, yi = float(ring[i][0]), float(ring[i][1])
        xj, yj = float(ring[j][0]), float(ring[j][1])
        if (yi > lat) != (yj > lat):
            x_cross = (xj - xi) * (lat - yi) / (yj - yi) + xi
            if lng < x_cross:
                inside = not inside
        j = i
    return inside
