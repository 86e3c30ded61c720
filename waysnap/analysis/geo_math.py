"""
Spherical geometry on a mean-radius Earth

Distances in meters, angles in degrees. Trigonometry runs in radians.
"""

import math

from ..collectors.osm.models import Coordinate

EARTH_RADIUS_M = 6371000.0


def _clamp_unit(value: float) -> float:
    """Clamp to [-1, 1] so asin/acos never see floating drift. NaN passes through."""
    if value > 1.0:
        return 1.0
    if value < -1.0:
        return -1.0
    return value


def distance(a: Coordinate, b: Coordinate) -> float:
    """Great circle (haversine) distance between two coordinates in meters"""
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    delta_phi = phi2 - phi1
    delta_lambda = math.radians(b.lon - a.lon)

    h = (math.sin(delta_phi / 2) ** 2
         + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2)
    if h > 1.0:
        h = 1.0
    elif h < 0.0:
        h = 0.0

    return 2.0 * EARTH_RADIUS_M * math.asin(math.sqrt(h))


def bearing(a: Coordinate, b: Coordinate) -> float:
    """Initial bearing from a to b in degrees [0, 360). 0 when a == b."""
    if a == b:
        return 0.0

    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    delta_lambda = math.radians(b.lon - a.lon)

    x = math.sin(delta_lambda) * math.cos(phi2)
    y = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(delta_lambda)

    result = math.degrees(math.atan2(x, y)) % 360.0
    # -1e-15 % 360 rounds up to 360.0
    if result >= 360.0:
        result = 0.0
    return result


def destination(origin: Coordinate, bearing_deg: float, distance_m: float) -> Coordinate:
    """
    Point reached from origin travelling a bearing and distance along a great circle

    Args:
        origin: Start coordinate
        bearing_deg: Initial bearing in degrees
        distance_m: Distance to travel in meters

    Returns:
        Destination coordinate, longitude normalised to [-180, 180)
    """
    delta = distance_m / EARTH_RADIUS_M
    theta = math.radians(bearing_deg)
    phi1 = math.radians(origin.lat)
    lambda1 = math.radians(origin.lon)

    phi2 = math.asin(_clamp_unit(
        math.sin(phi1) * math.cos(delta)
        + math.cos(phi1) * math.sin(delta) * math.cos(theta)
    ))
    lambda2 = lambda1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(phi1),
        math.cos(delta) - math.sin(phi1) * math.sin(phi2)
    )

    lon = (math.degrees(lambda2) + 540.0) % 360.0 - 180.0
    return Coordinate(lat=math.degrees(phi2), lon=lon)


def _track_angles(line_start: Coordinate, line_end: Coordinate, point: Coordinate):
    """Angular distance start->point and the bearing difference to the track, radians"""
    delta13 = distance(line_start, point) / EARTH_RADIUS_M
    theta13 = math.radians(bearing(line_start, point))
    theta12 = math.radians(bearing(line_start, line_end))
    return delta13, theta13 - theta12


def cross_track_distance(line_start: Coordinate, line_end: Coordinate, point: Coordinate) -> float:
    """Signed distance in meters from point to the great circle through start/end (positive to the right)"""
    delta13, dtheta = _track_angles(line_start, line_end, point)
    delta_xt = math.asin(_clamp_unit(math.sin(delta13) * math.sin(dtheta)))
    return delta_xt * EARTH_RADIUS_M


def along_track_distance(line_start: Coordinate, line_end: Coordinate, point: Coordinate) -> float:
    """
    Signed distance from line_start to the projection of point onto the line

    Negative when the projection falls behind line_start, larger than the
    segment length when it falls beyond line_end.

    Args:
        line_start: First point of the great circle path
        line_end: Second point of the great circle path
        point: Point to project

    Returns:
        Along-track distance in meters
    """
    delta13, dtheta = _track_angles(line_start, line_end, point)
    delta_xt = math.asin(_clamp_unit(math.sin(delta13) * math.sin(dtheta)))

    cos_xt = math.cos(delta_xt)
    if cos_xt == 0.0:
        # Point sits on the pole of the track; every projection is equally far
        return 0.0

    delta_at = math.acos(_clamp_unit(math.cos(delta13) / cos_xt))
    sign = 1.0 if math.cos(dtheta) >= 0.0 else -1.0

    return sign * delta_at * EARTH_RADIUS_M
