# backend/app/models/map_models.py

from typing import List, Literal, Optional, Union

from pydantic import BaseModel

from app.models.plan_models import CamelModel


class LatLng(BaseModel):
    lat: float
    lng: float


class LocalSearchItem(CamelModel):
    title: str
    mapx: float
    mapy: float
    lat: float
    lng: float
    address: Optional[str] = None
    road_address: Optional[str] = None


class GuideSegment(BaseModel):
    text: str
    highlight: bool


class GuideStep(CamelModel):
    instruction_en: str
    segments: List[GuideSegment]
    move_type: Literal["driving", "walking"] = "driving"


class DirectionsResult(CamelModel):
    duration: int                       # seconds
    distance: Union[int, float]         # meters
    duration_text: str
    distance_text: str
    walk_time_text: Optional[str] = None
    guide: Optional[List[GuideStep]] = None


class MapMarker(BaseModel):
    label: str
    title: str
    lat: float
    lng: float


class MapBounds(BaseModel):
    south: float
    west: float
    north: float
    east: float
