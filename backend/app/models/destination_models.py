# backend/app/models/destination_models.py

from typing import List

from pydantic import Field

from app.models.map_models import LocalSearchItem
from app.models.plan_models import CamelModel, Destination


# -------------------------
# Final destination list edits: the client sends its current list
# and gets the edited one back
# -------------------------
class DestinationListIn(CamelModel):
    destinations: List[Destination] = Field(default_factory=list)


class ToggleAiIn(DestinationListIn):
    ai_id: str


class AddSearchResultIn(DestinationListIn):
    item: LocalSearchItem


class RemoveDestinationIn(DestinationListIn):
    id: str


class MoveDestinationIn(DestinationListIn):
    old_index: int
    new_index: int


class DestinationListOut(CamelModel):
    destinations: List[Destination]
