# backend/app/utils/clustering.py

import math
from typing import List, Dict, Any, Tuple


EARTH_RADIUS_KM = 6371.0

# Seoul City Hall, used whenever there is no better starting point
SEOUL_CENTER = {"lat": 37.5665, "lng": 126.978}


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in km."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def nearest_neighbor_order(
    points: List[Dict[str, Any]],
    start: Tuple[float, float],
) -> List[Dict[str, Any]]:
    """
    Greedy nearest-neighbour tour.

    Starting at ``start`` (lat, lng), repeatedly take the closest unvisited
    point. Ties go to the earliest point in input order, so the result is
    deterministic. Every point must carry "lat" and "lng".
    """
    remaining = list(points)
    ordered: List[Dict[str, Any]] = []
    cur_lat, cur_lng = start

    while remaining:
        best_idx = 0
        best_dist = math.inf
        for idx, p in enumerate(remaining):
            dist = haversine_km(cur_lat, cur_lng, p["lat"], p["lng"])
            if dist < best_dist:
                best_dist = dist
                best_idx = idx

        nxt = remaining.pop(best_idx)
        ordered.append(nxt)
        cur_lat, cur_lng = nxt["lat"], nxt["lng"]

    return ordered
