from math import acos, cos, isfinite, radians, sin
from typing import Any, Iterable, List, Optional, Tuple

from app.services.repository import SchoolRecord


"""Distance utilities.

Provides coordinate parsing/validation shared by registration and listing,
the great-circle distance used to rank schools, and the ranking itself.
Exported helpers:
- parse_coordinate: total parse of a query value, None on failure
- is_valid_coordinates: bounds check for a (lat, lng) pair
- haversine_distance: kilometers between two WGS84 points
- rank_by_distance: schools ordered by distance from a point

- distance
"""

EARTH_RADIUS_KM = 6371.0

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)


def parse_coordinate(raw: Any) -> Optional[float]:
    """Parse a coordinate value into a finite float, or None if it is not one. - parse_coordinate

    Accepts ints, floats and numeric strings (surrounding whitespace ignored).
    Booleans, blank strings, partial numbers such as "12abc", nan and
    infinities all yield None.
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return None

    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        return None

    return value if isfinite(value) else None


def is_valid_coordinates(lat: Optional[float], lng: Optional[float]) -> bool:
    """True iff both values are finite and inside the latitude/longitude bounds. - is_valid_coordinates"""
    if lat is None or lng is None:
        return False
    if not (isfinite(lat) and isfinite(lng)):
        return False
    return LATITUDE_RANGE[0] <= lat <= LATITUDE_RANGE[1] and LONGITUDE_RANGE[0] <= lng <= LONGITUDE_RANGE[1]


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> Optional[float]:
    """Compute great-circle distance (in kilometers) between two WGS84 coordinates. - haversine

    All inputs are decimal degrees; (lat1, lon1) is the query point.
    Returns None when the distance is not computable.
    """
    if not all(isfinite(v) for v in (lat1, lon1, lat2, lon2)):
        return None

    # convert decimal degrees to radians
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])

    x = cos(lat1) * cos(lat2) * cos(lon2 - lon1) + sin(lat1) * sin(lat2)
    # rounding can push identical points just past 1.0
    x = max(-1.0, min(1.0, x))
    return EARTH_RADIUS_KM * acos(x)


def rank_by_distance(
    schools: Iterable[SchoolRecord],
    lat: float,
    lng: float,
) -> List[Tuple[SchoolRecord, float]]:
    """Pair every school with its distance from (lat, lng) and sort ascending. - rank_by_distance

    Schools whose distance is undefined are left out. Equal distances keep
    id order so repeated calls return the same sequence.
    """
    ranked = []
    for school in schools:
        distance = haversine_distance(lat, lng, school.latitude, school.longitude)
        if distance is None:
            continue
        ranked.append((school, distance))

    ranked.sort(key=lambda pair: (pair[1], pair[0].id))
    return ranked
