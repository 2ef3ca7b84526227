from __future__ import annotations

from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from ..errors import ItineraryError
from ..logs import LogContext
from ..services import plan_svc, day_svc, itinerary_svc
from .base import to_http, not_found

router = APIRouter()


class PlanIn(BaseModel):
    plan_name: str
    destination: str
    start_date: str  # YYYY-MM-DD
    end_date: str  # YYYY-MM-DD


class DayIn(BaseModel):
    day_number: Optional[int] = None


@router.get("/api/plans")
def api_plan_list():
    try:
        return {"items": plan_svc.get_travel_plans()}
    except ItineraryError as e:
        raise to_http(e)


@router.post("/api/plans", status_code=201)
def api_plan_create(body: PlanIn):
    log = LogContext("CREATE_PLAN")
    log.set_payload(body.model_dump())
    try:
        plan_id = plan_svc.add_travel_plan(body.plan_name, body.destination, body.start_date, body.end_date)
    except ItineraryError as e:
        raise to_http(e, log)
    log.set_entity("PLAN", plan_id)
    log.write()
    return {"plan_id": plan_id}


@router.get("/api/plans/{plan_id}")
def api_plan_get(plan_id: int):
    try:
        plan = plan_svc.get_travel_plan(plan_id)
    except ItineraryError as e:
        raise to_http(e)
    if plan is None:
        raise not_found("plan", plan_id)
    return plan


@router.put("/api/plans/{plan_id}")
def api_plan_update(plan_id: int, body: PlanIn):
    log = LogContext("UPDATE_PLAN")
    log.set_entity("PLAN", plan_id)
    log.set_payload(body.model_dump())
    try:
        log.set_before(plan_svc.get_travel_plan(plan_id))
        changes = plan_svc.update_travel_plan(plan_id, body.plan_name, body.destination, body.start_date, body.end_date)
    except ItineraryError as e:
        raise to_http(e, log)
    if not changes:
        raise not_found("plan", plan_id)
    log.set_after(body.model_dump())
    log.write()
    return {"changes": changes}


@router.delete("/api/plans/{plan_id}")
def api_plan_delete(plan_id: int):
    log = LogContext("DELETE_PLAN")
    log.set_entity("PLAN", plan_id)
    try:
        changes = plan_svc.delete_travel_plan(plan_id)
    except ItineraryError as e:
        raise to_http(e, log)
    log.write()
    return {"changes": changes}


@router.get("/api/plans/{plan_id}/details")
def api_plan_details(plan_id: int):
    try:
        plan = itinerary_svc.get_travel_plan_with_details(plan_id)
    except ItineraryError as e:
        raise to_http(e)
    if plan is None:
        raise not_found("plan", plan_id)
    return plan


@router.get("/api/plans/{plan_id}/days")
def api_plan_days(plan_id: int):
    try:
        return {"items": day_svc.get_days_for_plan(plan_id)}
    except ItineraryError as e:
        raise to_http(e)


@router.post("/api/plans/{plan_id}/days", status_code=201)
def api_day_create(plan_id: int, body: DayIn):
    log = LogContext("CREATE_DAY")
    log.set_payload({"plan_id": plan_id, **body.model_dump()})
    try:
        day_id = day_svc.add_day(plan_id, body.day_number)
    except ItineraryError as e:
        raise to_http(e, log)
    log.set_entity("DAY", day_id)
    log.write()
    return {"day_id": day_id}
