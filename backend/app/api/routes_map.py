# backend/app/api/routes_map.py

import math
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.agents.map_agent import MapAgent
from app.api.deps import get_map_agent
from app.core.errors import KogoError
from app.core.logger import logger
from app.models.map_models import LatLng

router = APIRouter(prefix="/api", tags=["map"])


def _parse_coord(value: str) -> Optional[float]:
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


# --------------------------
# GET /api/directions
# --------------------------
@router.get("/directions")
def directions(
    startLat: Optional[str] = Query(None),
    startLng: Optional[str] = Query(None),
    endLat: Optional[str] = Query(None),
    endLng: Optional[str] = Query(None),
    agent: MapAgent = Depends(get_map_agent),
):
    """Driving route between two points: duration, distance, walk time, English guide."""
    raw = (startLat, startLng, endLat, endLng)
    if any(v is None for v in raw):
        return JSONResponse({"error": "Missing startLat, startLng, endLat, endLng"}, status_code=400)

    coords = [_parse_coord(v) for v in raw]
    if any(c is None for c in coords):
        return JSONResponse({"error": "Invalid coordinates"}, status_code=400)

    lat1, lng1, lat2, lng2 = coords
    try:
        result = agent.directions(LatLng(lat=lat1, lng=lng1), LatLng(lat=lat2, lng=lng2))
    except KogoError as e:
        logger.error(f"[directions] {e}")
        return JSONResponse({"error": str(e)}, status_code=502)

    return result.model_dump(by_alias=True, exclude_none=True)


# --------------------------
# GET /api/search/local
# --------------------------
@router.get("/search/local")
def search_local(
    query: Optional[str] = Query(None),
    agent: MapAgent = Depends(get_map_agent),
):
    """Naver local search with coordinates converted to WGS84."""
    if not query or not query.strip():
        return {"items": []}

    try:
        items = agent.search(query)
    except KogoError as e:
        logger.error(f"[search/local] {e}")
        return JSONResponse({"error": str(e)}, status_code=500)

    return {"items": [item.model_dump(by_alias=True, exclude_none=True) for item in items]}
