# backend/app/models/plan_models.py

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Annotated, List, Literal, Optional, Union


class CamelModel(BaseModel):
    """Stored and served with the camelCase keys the web client uses."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# -------------------------
# Destination (manual search pick or AI suggestion)
# -------------------------
class Destination(CamelModel):
    id: str
    name: str
    lat: Optional[float] = None
    lng: Optional[float] = None
    source: Literal["manual", "ai"] = "manual"


# -------------------------
# Course items: place | transit placeholder
# -------------------------
class PlaceItem(CamelModel):
    type: Literal["place"] = "place"
    name: str
    lat: Optional[float] = None
    lng: Optional[float] = None


class TransitItem(CamelModel):
    type: Literal["transit"] = "transit"
    from_: str = Field(alias="from")
    to: str


CourseItem = Annotated[Union[PlaceItem, TransitItem], Field(discriminator="type")]


class DayDate(CamelModel):
    day_label: str          # "Day 1"
    date: str               # ISO date
    date_label: str         # "Mar 5, 2026"


class DayCourse(DayDate):
    items: List[CourseItem] = Field(default_factory=list)

    def place_names(self) -> List[str]:
        names = []
        for item in self.items:
            if isinstance(item, PlaceItem):
                names.append(item.name)
            elif isinstance(item, TransitItem):
                continue
            else:
                raise TypeError(f"Unknown course item: {item!r}")
        return names


# -------------------------
# Plan form (create / edit / preview input)
# -------------------------
TravelPace = Literal["slow", "normal", "busy"]
Accommodation = Literal["booked", "need"]


class PlanFormData(CamelModel):
    flight_number: str = ""
    travel_start: str = ""
    travel_end: str = ""
    travel_pace: TravelPace = "normal"
    must_go: str = ""
    must_eat: str = ""
    accommodation: Accommodation = "need"
    arrival_time: Optional[str] = None
    final_destinations: Optional[List[Destination]] = None
    generated_course: Optional[List[DayCourse]] = None


# -------------------------
# Persisted plan
# -------------------------
class TravelPlan(CamelModel):
    id: str
    flight_number: str
    travel_start: str
    travel_end: str
    travel_pace: TravelPace
    must_go: str = ""
    must_eat: str = ""
    accommodation: Accommodation = "need"
    created_at: str

    arrival_time: Optional[str] = None
    final_destinations: Optional[List[Destination]] = None
    generated_course: Optional[List[DayCourse]] = None
    # user drag-drop order; overrides the generated course when set
    place_order: Optional[List[str]] = None

    def to_record(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class PlaceOrderIn(CamelModel):
    place_order: List[str]


class CoursePreviewOut(CamelModel):
    arrival_time: Optional[str] = None
    days: List[DayDate] = Field(default_factory=list)
    generated_course: List[DayCourse] = Field(default_factory=list)
