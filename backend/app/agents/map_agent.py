# backend/app/agents/map_agent.py

import asyncio
from typing import Any, Callable, Dict, List, Optional

from app.core.errors import KogoError
from app.core.logger import logger
from app.models.map_models import DirectionsResult, LatLng, LocalSearchItem
from app.services.naver_map_service import NaverMapService
from app.utils.debounce import DebouncedSearch


class MapAgent:
    """Local search and driving directions on top of the Naver map service."""

    def __init__(self, maps: Optional[NaverMapService] = None):
        self.maps = maps or NaverMapService()

    def search(self, query: str) -> List[LocalSearchItem]:
        return self.maps.search_local(query)

    def directions(self, start: LatLng, end: LatLng) -> DirectionsResult:
        return self.maps.get_directions(start, end)

    async def search_async(self, query: str) -> List[LocalSearchItem]:
        return await asyncio.to_thread(self.maps.search_local, query)

    def live_search(self, on_results: Callable[[List[LocalSearchItem]], None]) -> DebouncedSearch:
        return DebouncedSearch(self.search_async, on_results)

    def route_legs(self, places: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Directions for every adjacent pair of places.

        A leg whose ends lack coordinates, or whose lookup fails, is
        returned with ``directions`` None and an ``error`` message; the
        other legs are still resolved.
        """
        legs = []
        for origin, dest in zip(places, places[1:]):
            leg: Dict[str, Any] = {"from": origin["name"], "to": dest["name"], "directions": None}

            if None in (origin.get("lat"), origin.get("lng"), dest.get("lat"), dest.get("lng")):
                leg["error"] = "Missing coordinates"
                legs.append(leg)
                continue

            try:
                result = self.directions(
                    LatLng(lat=origin["lat"], lng=origin["lng"]),
                    LatLng(lat=dest["lat"], lng=dest["lng"]),
                )
                leg["directions"] = result.model_dump(by_alias=True, exclude_none=True)
            except KogoError as e:
                logger.warning(f"Directions {origin['name']} -> {dest['name']} failed: {e}")
                leg["error"] = str(e)
            legs.append(leg)

        return legs
