# backend/app/db/plan_store.py

"""
Travel plan collection kept as one JSON record in a key-value store.

Every operation reads the whole collection, changes it, and writes it
back. A per-store lock keeps one process to a single writer at a time;
separate processes sharing a database file are not coordinated.
"""

import json
import re
import threading
import time
from typing import Any, List, Optional, Tuple
from uuid import uuid4

from pydantic import ValidationError

from app.core.logger import logger
from app.db.kv_store import KeyValueStore
from app.models.plan_models import PlanFormData, TravelPlan
from app.services.course_generator import flatten_place_names, generate_course
from app.services.flight_service import get_mock_arrival_time
from app.utils.time_utils import parse_iso_date, utc_now_iso


STORAGE_KEY = "kogo_plans"
DEFAULT_PLACES = ["Seoul"]

_MUST_GO_SEPARATORS = re.compile(r"[,;\n]+")


def validate_form(form: PlanFormData) -> Tuple[bool, Optional[str]]:
    """First missing required field wins, then the date order."""
    if not (form.flight_number or "").strip():
        return False, "Please fill in the details (Flight Number)."
    if not (form.travel_start or "").strip():
        return False, "Please fill in the details (Travel start date)."
    if not (form.travel_end or "").strip():
        return False, "Please fill in the details (Travel end date)."
    start = parse_iso_date(form.travel_start)
    end = parse_iso_date(form.travel_end)
    if start and end and end < start:
        return False, "Please check the travel dates (end date is before start date)."
    return True, None


def new_plan_id() -> str:
    # plan_<epoch ms>_<6 hex>: two requests in the same millisecond must not collide
    return f"plan_{int(time.time() * 1000)}_{uuid4().hex[:6]}"


def build_plan(
    form: PlanFormData,
    plan_id: Optional[str] = None,
    created_at: Optional[str] = None,
) -> TravelPlan:
    arrival_time = form.arrival_time if form.arrival_time is not None else get_mock_arrival_time(form.flight_number)
    final_destinations = form.final_destinations or []

    generated_course = form.generated_course
    if generated_course is None and final_destinations and form.travel_start and form.travel_end:
        generated_course = generate_course(
            final_destinations,
            form.travel_start,
            form.travel_end,
            form.travel_pace,
            arrival_time,
        )

    must_go = (form.must_go or "").strip() or ", ".join(d.name for d in final_destinations)

    return TravelPlan(
        id=plan_id or new_plan_id(),
        flight_number=form.flight_number.strip(),
        travel_start=form.travel_start,
        travel_end=form.travel_end,
        travel_pace=form.travel_pace,
        must_go=must_go,
        must_eat=(form.must_eat or "").strip(),
        accommodation=form.accommodation,
        created_at=created_at or utc_now_iso(),
        arrival_time=arrival_time,
        final_destinations=final_destinations or None,
        generated_course=generated_course or None,
    )


def get_ordered_places(plan: TravelPlan) -> List[str]:
    """
    Place names in display order:
    user place order > generated course > mustGo text > ["Seoul"].
    """
    if plan.place_order:
        return list(plan.place_order)
    if plan.generated_course:
        return flatten_place_names(plan.generated_course)
    if not (plan.must_go or "").strip():
        return list(DEFAULT_PLACES)
    return [s.strip() for s in _MUST_GO_SEPARATORS.split(plan.must_go) if s.strip()]


def get_places_for_map(plan: TravelPlan) -> List[dict]:
    """
    Ordered places with coordinates taken from the destination list.
    Course positions are not used: they can be stand-in offsets.
    """
    coords = {d.name: (d.lat, d.lng) for d in plan.final_destinations or []}

    places = []
    for name in get_ordered_places(plan):
        lat, lng = coords.get(name, (None, None))
        places.append({"name": name, "lat": lat, "lng": lng})
    return places


def _entry_id(entry: Any) -> Optional[str]:
    return entry.get("id") if isinstance(entry, dict) else None


class PlanStore:
    """
    Plan collection over a ``KeyValueStore``.

    Mutations hold a lock from read to write so overlapping requests on
    one store cannot drop each other's changes. Entries that no longer
    validate are kept in the record untouched.
    """

    def __init__(self, backend: KeyValueStore, key: str = STORAGE_KEY):
        self.backend = backend
        self.key = key
        # re-entrant: set_place_order reads and then updates
        self._lock = threading.RLock()

    # ----------------------------------------------------------------------
    # RAW COLLECTION
    # ----------------------------------------------------------------------
    def _load(self) -> Tuple[List[TravelPlan], List[Any]]:
        """Readable plans, plus the raw entries that failed validation."""
        raw = self.backend.get(self.key)
        if not raw:
            return [], []
        try:
            parsed = json.loads(raw)
        except (TypeError, ValueError):
            logger.warning(f"Stored plan collection '{self.key}' is not valid JSON; treating as empty")
            return [], []
        if not isinstance(parsed, list):
            logger.warning(f"Stored plan collection '{self.key}' is not a list; treating as empty")
            return [], []

        plans, unreadable = [], []
        for entry in parsed:
            try:
                plans.append(TravelPlan.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Keeping unreadable stored plan as is: {e.error_count()} errors")
                unreadable.append(entry)
        return plans, unreadable

    def _read(self) -> List[TravelPlan]:
        return self._load()[0]

    def _write(self, plans: List[TravelPlan], unreadable: List[Any]) -> None:
        ids = {p.id for p in plans}
        kept = [e for e in unreadable if _entry_id(e) not in ids]
        records = [p.to_record() for p in plans] + kept
        self.backend.set(self.key, json.dumps(records, ensure_ascii=False))

    # ----------------------------------------------------------------------
    # BUILD / VALIDATE
    # ----------------------------------------------------------------------
    def build(self, form: PlanFormData, plan_id: Optional[str] = None, created_at: Optional[str] = None) -> TravelPlan:
        return build_plan(form, plan_id=plan_id, created_at=created_at)

    def validate_form(self, form: PlanFormData) -> Tuple[bool, Optional[str]]:
        return validate_form(form)

    # ----------------------------------------------------------------------
    # CRUD
    # ----------------------------------------------------------------------
    def list_plans(self) -> List[TravelPlan]:
        return self._read()

    def save(self, plan: TravelPlan) -> None:
        with self._lock:
            plans, unreadable = self._load()
            plans.insert(0, plan)
            self._write(plans, unreadable)
        logger.info(f"Saved plan {plan.id} ({len(plans)} plans)")

    def update(self, plan: TravelPlan) -> None:
        with self._lock:
            plans, unreadable = self._load()
            for idx, existing in enumerate(plans):
                if existing.id == plan.id:
                    plans[idx] = plan
                    break
            else:
                plans.insert(0, plan)
            self._write(plans, unreadable)
        logger.info(f"Updated plan {plan.id}")

    def delete(self, plan_id: str) -> None:
        with self._lock:
            plans, unreadable = self._load()
            self._write(
                [p for p in plans if p.id != plan_id],
                [e for e in unreadable if _entry_id(e) != plan_id],
            )
        logger.info(f"Deleted plan {plan_id}")

    def get_by_id(self, plan_id: str) -> Optional[TravelPlan]:
        return next((p for p in self._read() if p.id == plan_id), None)

    # ----------------------------------------------------------------------
    # PLACE ORDER
    # ----------------------------------------------------------------------
    def get_ordered_places(self, plan: TravelPlan) -> List[str]:
        return get_ordered_places(plan)

    def set_place_order(self, plan_id: str, place_order: List[str]) -> Optional[TravelPlan]:
        with self._lock:
            plan = self.get_by_id(plan_id)
            if plan is None:
                return None
            updated = plan.model_copy(update={"place_order": list(place_order)})
            self.update(updated)
        return updated

    def get_places_for_map(self, plan: TravelPlan) -> List[dict]:
        return get_places_for_map(plan)
