from __future__ import annotations

from typing import List, Optional, Union

from fastapi import APIRouter
from pydantic import BaseModel

from ..errors import ItineraryError
from ..logs import LogContext
from ..services import day_svc, stop_svc, ordering_svc, itinerary_svc
from .base import to_http, not_found

router = APIRouter()


class DayUpdate(BaseModel):
    day_number: int


class StopIn(BaseModel):
    location_name: str
    address: Optional[str] = None
    # unparseable text is stored as 0 (unknown)
    latitude: Optional[Union[float, str]] = None
    longitude: Optional[Union[float, str]] = None
    arrival_time: Optional[str] = None  # HH:MM
    departure_time: Optional[str] = None  # HH:MM
    notes: Optional[str] = None
    order_index: Optional[int] = None
    media_urls: Union[List[str], str] = "[]"


class ReorderIn(BaseModel):
    stop_ids: List[int]


@router.get("/api/days/{day_id}")
def api_day_get(day_id: int):
    try:
        day = day_svc.get_day(day_id)
    except ItineraryError as e:
        raise to_http(e)
    if day is None:
        raise not_found("day", day_id)
    return day


@router.put("/api/days/{day_id}")
def api_day_update(day_id: int, body: DayUpdate):
    log = LogContext("UPDATE_DAY")
    log.set_entity("DAY", day_id)
    log.set_payload(body.model_dump())
    try:
        changes = day_svc.update_day(day_id, body.day_number)
    except ItineraryError as e:
        raise to_http(e, log)
    if not changes:
        raise not_found("day", day_id)
    log.write()
    return {"changes": changes}


@router.delete("/api/days/{day_id}")
def api_day_delete(day_id: int):
    log = LogContext("DELETE_DAY")
    log.set_entity("DAY", day_id)
    try:
        changes = day_svc.delete_day(day_id)
    except ItineraryError as e:
        raise to_http(e, log)
    log.write()
    return {"changes": changes}


@router.get("/api/days/{day_id}/stops")
def api_day_stops(day_id: int):
    try:
        return {"items": stop_svc.get_stops_for_day(day_id)}
    except ItineraryError as e:
        raise to_http(e)


@router.post("/api/days/{day_id}/stops", status_code=201)
def api_stop_create(day_id: int, body: StopIn):
    log = LogContext("CREATE_STOP")
    log.set_payload({"day_id": day_id, **body.model_dump()})
    try:
        stop_id = stop_svc.add_stop(
            day_id,
            body.location_name,
            address=body.address,
            latitude=body.latitude,
            longitude=body.longitude,
            arrival_time=body.arrival_time,
            departure_time=body.departure_time,
            notes=body.notes,
            order_index=body.order_index,
            media_urls=body.media_urls,
        )
    except ItineraryError as e:
        raise to_http(e, log)
    log.set_entity("STOP", stop_id)
    log.write()
    return {"stop_id": stop_id}


@router.post("/api/days/{day_id}/reorder")
def api_day_reorder(day_id: int, body: ReorderIn):
    log = LogContext("REORDER_STOPS")
    log.set_entity("DAY", day_id)
    log.set_payload(body.model_dump())
    try:
        log.set_before([s["stop_id"] for s in stop_svc.get_stops_for_day(day_id)])
        count = ordering_svc.reorder_stops(day_id, body.stop_ids)
    except ItineraryError as e:
        raise to_http(e, log)
    log.set_after(body.stop_ids)
    log.write()
    return {"reordered": count}


@router.get("/api/days/{day_id}/route")
def api_day_route(day_id: int):
    try:
        return {"items": itinerary_svc.get_route_points(day_id)}
    except ItineraryError as e:
        raise to_http(e)
