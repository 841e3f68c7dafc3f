"""Geofence geometry.

Pure functions, no I/O. Distances use the haversine great-circle formula on a
spherical Earth, which is well within a meter at campus scale (10-1000 m).
"""

from __future__ import annotations

import math
from typing import List

from ..core.constants import DEFAULT_POLYGON_SEGMENTS, EARTH_RADIUS_METERS
from ..core.exceptions import InvalidParameter
from .model import GeoPoint


def distance(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points, in meters."""

    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_METERS * c


def within_radius(point: GeoPoint, center: GeoPoint, radius_meters: float) -> bool:
    """Inclusive boundary: a point exactly on the circle is inside."""
    return distance(point, center) <= radius_meters


def destination(origin: GeoPoint, bearing_degrees: float, distance_meters: float) -> GeoPoint:
    """Point reached from ``origin`` travelling ``distance_meters`` along an initial bearing."""

    delta = distance_meters / EARTH_RADIUS_METERS
    theta = math.radians(bearing_degrees)
    phi1 = math.radians(origin.latitude)
    lambda1 = math.radians(origin.longitude)

    sin_phi2 = math.sin(phi1) * math.cos(delta) + math.cos(phi1) * math.sin(delta) * math.cos(theta)
    phi2 = math.asin(max(-1.0, min(1.0, sin_phi2)))
    lambda2 = lambda1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(phi1),
        math.cos(delta) - math.sin(phi1) * sin_phi2,
    )

    longitude = (math.degrees(lambda2) + 540.0) % 360.0 - 180.0
    return GeoPoint(latitude=math.degrees(phi2), longitude=longitude)


def circle_polygon(center: GeoPoint, radius_meters: float, segments: int = DEFAULT_POLYGON_SEGMENTS) -> List[GeoPoint]:
    """Closed ring approximating the geofence, for map display only.

    Returns ``segments + 1`` points; the last point repeats the first.
    """

    if isinstance(segments, bool) or not isinstance(segments, int) or segments < 3:
        raise InvalidParameter("segments must be an integer >= 3")
    if radius_meters <= 0:
        raise InvalidParameter("radius_meters must be > 0")

    ring = [destination(center, 360.0 * i / segments, radius_meters) for i in range(segments)]
    ring.append(ring[0])
    return ring
