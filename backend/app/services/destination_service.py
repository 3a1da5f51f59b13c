# backend/app/services/destination_service.py

"""
Final destination list editing: AI suggestions, search picks, reorder.

All helpers return a new list and leave the input untouched.
"""

import time
from typing import List, Optional

from app.models.map_models import LocalSearchItem
from app.models.plan_models import Destination


# Curated picks shown as "AI recommendations" until a model backs them.
AI_RECOMMENDATIONS: List[Destination] = [
    Destination(id="ai_1", name="Gyeongbokgung Palace", lat=37.5796, lng=126.977, source="ai"),
    Destination(id="ai_2", name="N Seoul Tower", lat=37.5512, lng=126.9882, source="ai"),
    Destination(id="ai_3", name="Hongdae", lat=37.5563, lng=126.9245, source="ai"),
    Destination(id="ai_4", name="Bukchon Hanok Village", lat=37.5823, lng=126.9853, source="ai"),
    Destination(id="ai_5", name="Myeongdong", lat=37.5605, lng=126.9853, source="ai"),
    Destination(id="ai_6", name="Insadong", lat=37.5737, lng=126.9862, source="ai"),
    Destination(id="ai_7", name="Dongdaemun Design Plaza", lat=37.5666, lng=127.0094, source="ai"),
    Destination(id="ai_8", name="Gwangjang Market", lat=37.5702, lng=127.0019, source="ai"),
]


def get_ai_recommendations() -> List[Destination]:
    return [d.model_copy() for d in AI_RECOMMENDATIONS]


def toggle_ai_destination(destinations: List[Destination], ai_id: str) -> List[Destination]:
    """Add the suggestion if it is not selected, remove it if it is. Unknown ids are ignored."""
    rec = next((r for r in AI_RECOMMENDATIONS if r.id == ai_id), None)
    if rec is None:
        return list(destinations)

    if any(d.id == ai_id and d.source == "ai" for d in destinations):
        return [d for d in destinations if d.id != ai_id]
    return list(destinations) + [rec.model_copy()]


def add_search_result(
    destinations: List[Destination],
    item: LocalSearchItem,
    now_ms: Optional[int] = None,
) -> List[Destination]:
    now_ms = int(time.time() * 1000) if now_ms is None else now_ms
    return list(destinations) + [
        Destination(
            id=f"manual_{now_ms}_{item.title}",
            name=item.title,
            lat=item.lat,
            lng=item.lng,
            source="manual",
        )
    ]


def remove_destination(destinations: List[Destination], dest_id: str) -> List[Destination]:
    return [d for d in destinations if d.id != dest_id]


def move_destination(destinations: List[Destination], old_index: int, new_index: int) -> List[Destination]:
    """Drag-and-drop move; out-of-range indexes leave the list as it was."""
    items = list(destinations)
    if not (0 <= old_index < len(items)) or not (0 <= new_index < len(items)):
        return items
    item = items.pop(old_index)
    items.insert(new_index, item)
    return items
