# backend/app/services/naver_map_service.py

import re
from typing import Any, Dict, List, Optional

import requests

from app.core.config_loader import settings
from app.core.errors import ConfigurationError, UpstreamError
from app.core.logger import logger
from app.models.map_models import DirectionsResult, LatLng, LocalSearchItem
from app.services.directions_normalizer import normalize
from app.utils.geo_transform import tm128_to_wgs84


DIRECTIONS_URL = "https://naveropenapi.apigw.ntruss.com/map-direction/v1/driving"
SEARCH_LOCAL_URL = "https://openapi.naver.com/v1/search/local.json"

SEARCH_DISPLAY = 5

_HTML_TAG = re.compile(r"<[^>]*>")


def strip_html(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    return _HTML_TAG.sub("", text).strip()


class NaverMapService:
    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.client_id = settings.NAVER_MAP_CLIENT_ID if client_id is None else client_id
        self.client_secret = settings.NAVER_MAP_CLIENT_SECRET if client_secret is None else client_secret
        self.timeout = settings.HTTP_TIMEOUT_SECONDS if timeout is None else timeout
        self.http = session or requests.Session()

    # -------------------------------------------------------
    # AUTH
    # -------------------------------------------------------
    def _headers(self) -> Dict[str, str]:
        if not self.client_id or not self.client_secret:
            raise ConfigurationError(
                "Missing NAVER credentials. Set NAVER_MAP_CLIENT_ID and NAVER_MAP_CLIENT_SECRET in .env"
            )
        return {
            "X-Naver-Client-Id": self.client_id,
            "X-Naver-Client-Secret": self.client_secret,
            "Accept": "application/json",
        }

    def _get(self, provider: str, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        headers = self._headers()
        logger.debug(f"{provider} request: {url} params={params}")
        try:
            resp = self.http.get(url, params=params, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"{provider} request failed: {e}")
            raise UpstreamError(provider, None, str(e)) from e
        if not resp.ok:
            logger.error(f"{provider} API error {resp.status_code}: {resp.text}")
            raise UpstreamError(provider, resp.status_code, resp.text)

        try:
            data = resp.json()
        except ValueError:
            # gateway error pages come back as HTML with a 200
            logger.error(f"{provider} returned a non-JSON body: {resp.text[:200]}")
            raise UpstreamError(provider, resp.status_code, resp.text)
        if not isinstance(data, dict):
            logger.error(f"{provider} returned {type(data).__name__} instead of an object")
            raise UpstreamError(provider, resp.status_code, resp.text)
        return data

    # -------------------------------------------------------
    # LOCAL SEARCH (TM128 -> WGS84)
    # -------------------------------------------------------
    def search_local(self, query: str) -> List[LocalSearchItem]:
        """
        Naver Local Search, up to 5 places.

        Blank queries return [] without calling the API. Items with no
        mapx/mapy are skipped; titles and addresses come back with <b>
        markup which is stripped.
        """
        q = (query or "").strip()
        if not q:
            return []

        data = self._get(
            "Naver Local Search",
            SEARCH_LOCAL_URL,
            {"query": q, "display": SEARCH_DISPLAY, "start": 1, "sort": "random"},
        )

        results = []
        for item in data.get("items") or []:
            if item.get("mapx") is None or item.get("mapy") is None:
                continue
            try:
                mapx = float(item["mapx"])
                mapy = float(item["mapy"])
            except (TypeError, ValueError):
                logger.warning(f"Skipping search item with bad coordinates: {item.get('title')}")
                continue

            pos = tm128_to_wgs84(mapx, mapy)
            results.append(LocalSearchItem(
                title=strip_html(item.get("title")) or "",
                mapx=mapx,
                mapy=mapy,
                lat=pos["lat"],
                lng=pos["lng"],
                address=strip_html(item.get("address")),
                road_address=strip_html(item.get("roadAddress")),
            ))

        logger.info(f"Found {len(results)} places for query: {q}")
        return results

    # -------------------------------------------------------
    # DIRECTIONS (driving)
    # -------------------------------------------------------
    def get_directions(self, start: LatLng, end: LatLng) -> DirectionsResult:
        params = {
            "start": f"{start.lng},{start.lat}",
            "goal": f"{end.lng},{end.lat}",
        }
        data = self._get("Directions", DIRECTIONS_URL, params)
        result = normalize(data)
        logger.info(
            f"Directions {params['start']} -> {params['goal']}: "
            f"{result.duration}s, {result.distance}m, {len(result.guide or [])} steps"
        )
        return result
