# backend/app/services/course_generator.py

"""
Day-by-day course generation.

Day 1 takes the first destinations as given (the caller orders them by
priority). Everything else is ordered by greedy nearest neighbour from
the last Day 1 stop and cut into pace-sized chunks, one chunk per
following day. Transit placeholders separate consecutive stops of the
same day. Pure and deterministic.
"""

from typing import Any, Dict, List, Optional, Sequence

from app.models.plan_models import DayCourse, DayDate, Destination, PlaceItem, TransitItem
from app.utils.clustering import SEOUL_CENTER, nearest_neighbor_order
from app.utils.time_utils import get_day_dates


PLACES_PER_DAY: Dict[str, int] = {
    "slow": 2,
    "normal": 3,
    "busy": 4,
}
DEFAULT_PLACES_PER_DAY = 3

# arrival day is an evening-only day
ARRIVAL_DAY_MAX_PLACES = 2


def places_per_day(pace: Optional[str]) -> int:
    return PLACES_PER_DAY.get((pace or "").strip().lower(), DEFAULT_PLACES_PER_DAY)


def _stand_in_position(name: str) -> Dict[str, float]:
    # Informational offset around Seoul City Hall for destinations that
    # have no coordinates. Not geocoding: it only lets them take part in
    # distance ordering.
    offset = (len(name) % 10) * 0.01
    return {
        "lat": SEOUL_CENTER["lat"] + offset,
        "lng": SEOUL_CENTER["lng"] + offset,
    }


def _to_stop(dest: Destination) -> Dict[str, Any]:
    fallback = _stand_in_position(dest.name)
    return {
        "name": dest.name,
        "lat": dest.lat if dest.lat is not None else fallback["lat"],
        "lng": dest.lng if dest.lng is not None else fallback["lng"],
    }


def build_day_items(stops: Sequence[Dict[str, Any]]) -> List[Any]:
    """Place (Transit Place)* for one day."""
    items: List[Any] = []
    for idx, stop in enumerate(stops):
        if idx > 0:
            items.append(TransitItem(from_=stops[idx - 1]["name"], to=stop["name"]))
        items.append(PlaceItem(name=stop["name"], lat=stop["lat"], lng=stop["lng"]))
    return items


def _day_course(day: DayDate, stops: Sequence[Dict[str, Any]]) -> DayCourse:
    return DayCourse(
        day_label=day.day_label,
        date=day.date,
        date_label=day.date_label,
        items=build_day_items(stops),
    )


def generate_course(
    destinations: Sequence[Destination],
    travel_start: Optional[str],
    travel_end: Optional[str],
    travel_pace: Optional[str],
    arrival_time: Optional[str] = None,
) -> List[DayCourse]:
    day_dates = get_day_dates(travel_start, travel_end)
    if not day_dates or not destinations:
        return []

    stops = [_to_stop(d) for d in destinations]
    per_day = places_per_day(travel_pace)

    day1_max = ARRIVAL_DAY_MAX_PLACES if arrival_time else per_day
    day1_stops = stops[:day1_max]
    rest = stops[day1_max:]

    if day1_stops:
        start = (day1_stops[-1]["lat"], day1_stops[-1]["lng"])
    else:
        start = (SEOUL_CENTER["lat"], SEOUL_CENTER["lng"])
    ordered = nearest_neighbor_order(rest, start)

    days = [_day_course(day_dates[0], day1_stops)]

    for chunk_start in range(0, len(ordered), per_day):
        day_index = 1 + chunk_start // per_day
        if day_index >= len(day_dates):
            # more destinations than days: the excess is not scheduled
            break
        chunk = ordered[chunk_start:chunk_start + per_day]
        days.append(_day_course(day_dates[day_index], chunk))

    return days


def flatten_place_names(course: Optional[Sequence[DayCourse]]) -> List[str]:
    names: List[str] = []
    for day in course or []:
        names.extend(day.place_names())
    return names
