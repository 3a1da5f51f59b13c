# backend/app/api/routes_plan.py

from fastapi import APIRouter, Depends, HTTPException, Response

from app.agents.map_agent import MapAgent
from app.api.deps import get_map_agent, get_plan_store
from app.core.config_loader import settings
from app.core.logger import logger
from app.db.plan_store import PlanStore
from app.models.plan_models import CoursePreviewOut, PlaceOrderIn, PlanFormData, TravelPlan
from app.services.course_generator import generate_course
from app.services.flight_service import get_mock_arrival_time
from app.utils.clustering import SEOUL_CENTER
from app.utils.map_widget import MarkerPayloadWidget, render_places
from app.utils.time_utils import get_day_dates

router = APIRouter(prefix="/api/plans", tags=["plans"])


def _get_plan_or_404(store: PlanStore, plan_id: str) -> TravelPlan:
    plan = store.get_by_id(plan_id)
    if plan is None:
        raise HTTPException(404, "Plan not found")
    return plan


def _validate_or_400(store: PlanStore, form: PlanFormData) -> None:
    valid, message = store.validate_form(form)
    if not valid:
        raise HTTPException(400, message)


# --------------------------
# Collection
# --------------------------
@router.get("")
def list_plans(store: PlanStore = Depends(get_plan_store)):
    return {"items": [p.to_record() for p in store.list_plans()]}


@router.post("", status_code=201, response_model=TravelPlan, response_model_exclude_none=True)
def create_plan(form: PlanFormData, store: PlanStore = Depends(get_plan_store)):
    _validate_or_400(store, form)
    plan = store.build(form)
    store.save(plan)
    return plan


@router.post("/preview", response_model=CoursePreviewOut, response_model_exclude_none=True)
def preview_course(form: PlanFormData):
    """Itinerary the form would produce, without saving anything."""
    arrival_time = form.arrival_time if form.arrival_time is not None else get_mock_arrival_time(form.flight_number)
    course = []
    if form.travel_start and form.travel_end:
        course = generate_course(
            form.final_destinations or [],
            form.travel_start,
            form.travel_end,
            form.travel_pace,
            arrival_time,
        )
    return CoursePreviewOut(
        arrival_time=arrival_time,
        days=get_day_dates(form.travel_start, form.travel_end),
        generated_course=course,
    )


# --------------------------
# Single plan
# --------------------------
@router.get("/{plan_id}", response_model=TravelPlan, response_model_exclude_none=True)
def get_plan(plan_id: str, store: PlanStore = Depends(get_plan_store)):
    return _get_plan_or_404(store, plan_id)


@router.put("/{plan_id}", response_model=TravelPlan, response_model_exclude_none=True)
def edit_plan(plan_id: str, form: PlanFormData, store: PlanStore = Depends(get_plan_store)):
    """Rebuild the plan from the form; id and createdAt are kept."""
    existing = _get_plan_or_404(store, plan_id)
    _validate_or_400(store, form)
    updated = store.build(form, plan_id=existing.id, created_at=existing.created_at)
    store.update(updated)
    return updated


@router.delete("/{plan_id}", status_code=204)
def delete_plan(plan_id: str, store: PlanStore = Depends(get_plan_store)):
    store.delete(plan_id)
    return Response(status_code=204)


# --------------------------
# Ordered places (drag-drop)
# --------------------------
@router.get("/{plan_id}/places")
def get_places(plan_id: str, store: PlanStore = Depends(get_plan_store)):
    plan = _get_plan_or_404(store, plan_id)
    return {"places": store.get_ordered_places(plan)}


@router.put("/{plan_id}/place-order", response_model=TravelPlan, response_model_exclude_none=True)
def set_place_order(plan_id: str, data: PlaceOrderIn, store: PlanStore = Depends(get_plan_store)):
    updated = store.set_place_order(plan_id, data.place_order)
    if updated is None:
        raise HTTPException(404, "Plan not found")
    logger.info(f"Plan {plan_id}: place order set to {len(data.place_order)} places")
    return updated


# --------------------------
# Map + route legs for the detail view
# --------------------------
@router.get("/{plan_id}/map")
def get_plan_map(plan_id: str, store: PlanStore = Depends(get_plan_store)):
    plan = _get_plan_or_404(store, plan_id)
    widget = MarkerPayloadWidget(client_id=settings.NAVER_MAP_CLIENT_ID)
    render_places(widget, store.get_places_for_map(plan), SEOUL_CENTER)
    return widget.to_payload()


@router.get("/{plan_id}/directions")
def get_plan_directions(
    plan_id: str,
    store: PlanStore = Depends(get_plan_store),
    agent: MapAgent = Depends(get_map_agent),
):
    """Driving directions for every adjacent pair of the plan's ordered places."""
    plan = _get_plan_or_404(store, plan_id)
    return {"legs": agent.route_legs(store.get_places_for_map(plan))}
