# backend/app/utils/map_widget.py

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from app.models.map_models import MapBounds, MapMarker


class MapWidget(ABC):
    """The only map operations the planner needs from a map provider widget."""

    @abstractmethod
    def init(self, center: Dict[str, float], zoom: int) -> None:
        ...

    @abstractmethod
    def add_marker(self, lat: float, lng: float, title: str, label: str) -> None:
        ...

    @abstractmethod
    def set_bounds(self, south: float, west: float, north: float, east: float) -> None:
        ...

    @abstractmethod
    def destroy(self) -> None:
        ...


class MarkerPayloadWidget(MapWidget):
    """
    Records widget calls as the JSON payload the web client replays on
    the Naver Maps script.
    """

    def __init__(self, client_id: str = ""):
        self.client_id = client_id
        self.center: Optional[Dict[str, float]] = None
        self.zoom: Optional[int] = None
        self.markers: List[MapMarker] = []
        self.bounds: Optional[MapBounds] = None

    def init(self, center: Dict[str, float], zoom: int) -> None:
        self.center = dict(center)
        self.zoom = zoom

    def add_marker(self, lat: float, lng: float, title: str, label: str) -> None:
        self.markers.append(MapMarker(label=label, title=title, lat=lat, lng=lng))

    def set_bounds(self, south: float, west: float, north: float, east: float) -> None:
        self.bounds = MapBounds(south=south, west=west, north=north, east=east)

    def destroy(self) -> None:
        self.markers = []
        self.bounds = None
        self.center = None
        self.zoom = None

    def to_payload(self) -> Dict[str, Any]:
        return {
            "clientId": self.client_id,
            "center": self.center,
            "zoom": self.zoom,
            "markers": [m.model_dump() for m in self.markers],
            "bounds": self.bounds.model_dump() if self.bounds else None,
        }


def render_places(widget: MapWidget, places: List[Dict[str, Any]], default_center: Dict[str, float], zoom: int = 12) -> None:
    """
    Numbered markers for every place that has coordinates, framed by
    their bounding box. Places without coordinates keep their number but
    get no marker.
    """
    located = [
        (idx, p) for idx, p in enumerate(places, 1)
        if p.get("lat") is not None and p.get("lng") is not None
    ]

    if not located:
        widget.init(default_center, zoom)
        return

    lats = [p["lat"] for _, p in located]
    lngs = [p["lng"] for _, p in located]
    widget.init({"lat": sum(lats) / len(lats), "lng": sum(lngs) / len(lngs)}, zoom)
    for idx, p in located:
        widget.add_marker(p["lat"], p["lng"], p["name"], str(idx))
    if len(located) > 1:
        widget.set_bounds(min(lats), min(lngs), max(lats), max(lngs))
