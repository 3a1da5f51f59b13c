# backend/app/api/routes_destination.py

from fastapi import APIRouter

from app.core.logger import logger
from app.models.destination_models import (
    AddSearchResultIn,
    DestinationListOut,
    MoveDestinationIn,
    RemoveDestinationIn,
    ToggleAiIn,
)
from app.services.destination_service import (
    add_search_result,
    move_destination,
    remove_destination,
    toggle_ai_destination,
)

router = APIRouter(prefix="/api/destinations", tags=["destinations"])


# --------------------------
# Final destination list edits (nothing is stored here)
# --------------------------
@router.post("/toggle-ai", response_model=DestinationListOut, response_model_exclude_none=True)
def toggle_ai(body: ToggleAiIn):
    return DestinationListOut(destinations=toggle_ai_destination(body.destinations, body.ai_id))


@router.post("/add", response_model=DestinationListOut, response_model_exclude_none=True)
def add(body: AddSearchResultIn):
    logger.debug(f"Adding search result to destinations: {body.item.title}")
    return DestinationListOut(destinations=add_search_result(body.destinations, body.item))


@router.post("/remove", response_model=DestinationListOut, response_model_exclude_none=True)
def remove(body: RemoveDestinationIn):
    return DestinationListOut(destinations=remove_destination(body.destinations, body.id))


@router.post("/move", response_model=DestinationListOut, response_model_exclude_none=True)
def move(body: MoveDestinationIn):
    """Drag-and-drop move; out-of-range indexes return the list unchanged."""
    return DestinationListOut(destinations=move_destination(body.destinations, body.old_index, body.new_index))
