"""
Geographic helpers for the mechanics map: great-circle distance and
decoding of encoded polylines returned by the routing service.
"""

import math
from typing import List

from icar.models.route import Coordinate

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Straight-line distance in kilometres between two WGS84 points."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_between(a: Coordinate, b: Coordinate) -> float:
    return haversine_km(a.latitude, a.longitude, b.latitude, b.longitude)


def _decode_value(encoded: str, index: int) -> tuple[int, int]:
    result = 0
    shift = 0
    while True:
        if index >= len(encoded):
            raise ValueError("Truncated polyline")
        b = ord(encoded[index]) - 63
        index += 1
        result |= (b & 0x1F) << shift
        shift += 5
        if b < 0x20:
            break
    value = ~(result >> 1) if result & 1 else result >> 1
    return value, index


def decode_polyline(encoded: str, precision: int = 5) -> List[Coordinate]:
    """
    Decode a Google/OpenRouteService encoded polyline.

    Each point is a pair of zig-zag encoded deltas in 5-bit chunks;
    ``precision`` is the number of decimal places (5 for ORS geometries).
    """
    factor = 10 ** precision
    points: List[Coordinate] = []
    index = 0
    lat = 0
    lng = 0
    while index < len(encoded):
        d_lat, index = _decode_value(encoded, index)
        d_lng, index = _decode_value(encoded, index)
        lat += d_lat
        lng += d_lng
        points.append(Coordinate(latitude=lat / factor, longitude=lng / factor))
    return points


def format_distance(km: float) -> str:
    return f"{km:.1f} km"


def map_delta(a: Coordinate, b: Coordinate, padding: float = 2.2, minimum: float = 0.05) -> tuple[float, float]:
    """Latitude/longitude span that frames both points, used to zoom onto a mechanic."""
    lat_delta = abs(a.latitude - b.latitude) * padding or minimum
    lng_delta = abs(a.longitude - b.longitude) * padding or minimum
    return lat_delta, lng_delta
