"""
Great-circle distance between stops.
"""

import math
from typing import Callable, Sequence

from .data_models import Stop

EARTH_RADIUS_KM = 6371.0


def haversine_distance(a: Stop, b: Stop) -> float:
    """
    Great-circle distance between two stops using the haversine formula.

    Args:
        a: First stop
        b: Second stop

    Returns:
        Distance in kilometres (exactly 0.0 for identical coordinates)
    """
    if a.latitude == b.latitude and a.longitude == b.longitude:
        return 0.0

    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    d_lat = abs(lat2 - lat1)
    d_lon = abs(math.radians(b.longitude - a.longitude))

    h = (math.sin(d_lat / 2) ** 2
         + math.cos(lat1) * math.cos(lat2) * math.sin(d_lon / 2) ** 2)
    # Rounding can push h a hair outside [0, 1] near the antipode
    h = min(1.0, max(0.0, h))

    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def leg_distances(stops: Sequence[Stop],
                  distance_fn: Callable[[Stop, Stop], float] = haversine_distance) -> list[float]:
    """
    Distances of consecutive legs along an ordered stop sequence.

    Args:
        stops: Stops in visiting order
        distance_fn: Distance model (haversine by default)

    Returns:
        List of len(stops) - 1 distances in km (empty for fewer than 2 stops)
    """
    return [distance_fn(stops[i], stops[i + 1]) for i in range(len(stops) - 1)]


def route_distance(stops: Sequence[Stop],
                   distance_fn: Callable[[Stop, Stop], float] = haversine_distance) -> float:
    """Total open-path length in km (no return leg to the first stop)."""
    return sum(leg_distances(stops, distance_fn), 0.0)
