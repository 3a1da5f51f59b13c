# backend/app/services/directions_normalizer.py

"""
Naver Directions 5 (driving) response -> DirectionsResult.

Pulls duration / distance out of whichever route shape the API sent,
builds the display strings, and turns each Korean guide instruction into
English with the exit / bus stop / bus numbers split out for
highlighting.
"""

import math
import re
from typing import Any, Dict, List, Optional, Tuple, Union

from app.models.map_models import DirectionsResult, GuideSegment, GuideStep


Number = Union[int, float]

WALKING_SPEED_KMH = 5.0
MAX_WALK_KM = 5.0

_HANGUL = re.compile(r"[가-힣]")

# Applied in order; longer phrases must come before their parts.
GUIDE_PHRASES: List[Tuple[str, str]] = [
    ("출발", "Depart"),
    ("도착", "Arrive"),
    ("직진", "Go straight"),
    ("우회전", "Turn right"),
    ("좌회전", "Turn left"),
    ("유턴", "Make a U-turn"),
    ("진입", "Enter"),
    ("종료", "End"),
    ("오른쪽", "right"),
    ("왼쪽", "left"),
    ("정류장", "Bus Stop"),
    ("정류소", "Bus Stop"),
    ("출구", "Exit"),
    ("역", "Station"),
    ("지하철", "Subway"),
    ("버스", "Bus"),
    ("도보", "Walk"),
    ("이동", "Go"),
    ("약 ", "About "),
    ("미터", "m"),
    ("킬로", "km"),
]

_EXIT_NUMBER = re.compile(r"(?:출구|Exit)\s*(\d+)", re.IGNORECASE | re.ASCII)
_STOP_NUMBER = re.compile(r"(?:정류장|Bus Stop)\s*#?(\d+)", re.IGNORECASE | re.ASCII)
_BUS_NUMBER = re.compile(r"(?:버스|Bus)\s*(\d+)", re.IGNORECASE | re.ASCII)

# ASCII: a Hangul syllable right before "Station" (강남Station) must still
# count as a word boundary.
HIGHLIGHT_PATTERN = re.compile(
    r"\b(Exit\s*\d+|Bus\s*Stop\s*#?\d+|Bus\s*#?\d+|Station\s*\d*|#\d+)",
    re.IGNORECASE | re.ASCII,
)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _format_number(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ---------------------------------------------------------------------------
# DISPLAY STRINGS
# ---------------------------------------------------------------------------
def format_duration(seconds: Number) -> str:
    if seconds < 60:
        return "Under 1 min"
    minutes = round_half_up(seconds / 60)
    if minutes < 60:
        return f"About {minutes} min"
    hours, mins = divmod(minutes, 60)
    return f"About {hours}h {mins}min" if mins else f"About {hours}h"


def format_distance(meters: Number) -> str:
    if meters < 1000:
        return f"{_format_number(meters)} m"
    return f"{meters / 1000:.1f} km"


def get_walk_time_text(meters: Number) -> str:
    """~15 min walk at 5 km/h; "" when there is no distance or it is over 5 km."""
    if meters <= 0:
        return ""
    km = meters / 1000
    if km > MAX_WALK_KM:
        return ""
    walk_min = round_half_up(km / WALKING_SPEED_KMH * 60)
    if walk_min < 1:
        return "~1 min walk"
    return f"~{walk_min} min walk"


# ---------------------------------------------------------------------------
# GUIDE STEPS
# ---------------------------------------------------------------------------
def translate_guide_to_english(text: str) -> str:
    if not text:
        return "Continue."
    if not _HANGUL.search(text):
        return text

    out = text
    for korean, english in GUIDE_PHRASES:
        out = out.replace(korean, english)

    # 출구 8 -> Exit 8, 정류장 02123 -> Bus Stop #02123, 버스 7016 -> Bus #7016
    out = _EXIT_NUMBER.sub(r"Exit \1", out)
    out = _STOP_NUMBER.sub(r"Bus Stop #\1", out)
    out = _BUS_NUMBER.sub(r"Bus #\1", out)

    return out.strip() or text


def highlight_keywords(text: str) -> List[GuideSegment]:
    parts: List[GuideSegment] = []
    last = 0
    for match in HIGHLIGHT_PATTERN.finditer(text):
        if match.start() > last:
            parts.append(GuideSegment(text=text[last:match.start()], highlight=False))
        parts.append(GuideSegment(text=match.group(0), highlight=True))
        last = match.end()
    if last < len(text):
        parts.append(GuideSegment(text=text[last:], highlight=False))
    return parts or [GuideSegment(text=text, highlight=False)]


def get_move_type(step: Dict[str, Any]) -> str:
    """type / pathType 1 is a walking leg; anything else (or nothing) is driving."""
    kind = step.get("type")
    if kind is None:
        kind = step.get("pathType")
    return "walking" if kind == 1 else "driving"


def build_guide_step(step: Dict[str, Any]) -> GuideStep:
    raw = (step.get("instructions") or step.get("instruction") or "").strip() or "Continue."
    english = translate_guide_to_english(raw)
    return GuideStep(
        instruction_en=english,
        segments=highlight_keywords(english),
        move_type=get_move_type(step),
    )


# ---------------------------------------------------------------------------
# RESPONSE PARSING
# ---------------------------------------------------------------------------
def _first(candidates: Any) -> Optional[Dict[str, Any]]:
    if isinstance(candidates, list) and candidates and isinstance(candidates[0], dict):
        return candidates[0]
    return None


def pick_route(data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    route = data.get("route") or {}
    result_route = (data.get("result") or {}).get("route") or {}
    return (
        _first(route.get("traoptimal"))
        or _first(route.get("optimal"))
        or _first(result_route.get("traoptimal"))
    )


def extract_raw_guide(route: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    if not route:
        return []

    guide = [g for g in route.get("guide") or [] if isinstance(g, dict)]
    if guide:
        return guide

    steps = []
    for section in route.get("section") or []:
        if not isinstance(section, dict):
            continue
        for g in section.get("guide") or []:
            if isinstance(g, dict):
                # section guides carry no pathType
                steps.append({k: v for k, v in g.items() if k != "pathType"})
    return steps


def normalize(data: Dict[str, Any]) -> DirectionsResult:
    route = pick_route(data)

    duration_ms: Number = 0
    distance_m: Number = 0
    summary = (route or {}).get("summary")
    if isinstance(summary, dict):
        duration_ms = summary.get("duration") or 0
        distance_m = summary.get("distance") or 0

    if (duration_ms == 0 or distance_m == 0) and _is_number(data.get("duration")) and _is_number(data.get("distance")):
        duration_ms = data["duration"]
        distance_m = data["distance"]

    raw_guide = extract_raw_guide(route)
    duration_sec = round_half_up(duration_ms / 1000)

    return DirectionsResult(
        duration=duration_sec,
        distance=distance_m,
        duration_text=format_duration(duration_sec),
        distance_text=format_distance(distance_m),
        walk_time_text=get_walk_time_text(distance_m) or None,
        guide=[build_guide_step(g) for g in raw_guide] or None,
    )
