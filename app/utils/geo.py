"""
Great-circle distance (haversine, spherical earth).
"""
import math

EARTH_RADIUS_M = 6371e3


def distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Distance in meters between two WGS84 points.

    Args:
        lat1, lon1: First point in degrees
        lat2, lon2: Second point in degrees

    Returns:
        Haversine distance using EARTH_RADIUS_M.
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    delta_phi = math.radians(lat2 - lat1)
    delta_lambda = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_phi / 2) * math.sin(delta_phi / 2)
        + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) * math.sin(delta_lambda / 2)
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def is_within_radius(distance: float, radius: float) -> bool:
    """Inclusive: a point exactly on the boundary is inside."""
    return distance <= radius
