from __future__ import annotations

import math
from typing import Optional


EARTH_RADIUS_KM = 6371.0


def distance_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres using the haversine formula.

    Coordinates are not validated; callers pass degrees already checked upstream.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push near-antipodal pairs just past 1.
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def format_distance(value_km: Optional[float]) -> str:
    if value_km is None:
        return "N/A"
    if value_km < 1:
        return f"{round(value_km * 1000)} m"
    kilometres = f"{round(value_km, 2):.2f}".rstrip("0").rstrip(".")
    return f"{kilometres} km"
