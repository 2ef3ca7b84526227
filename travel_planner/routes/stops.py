from __future__ import annotations

from typing import List, Optional, Union

from fastapi import APIRouter
from pydantic import BaseModel

from ..errors import ItineraryError
from ..logs import LogContext
from ..services import stop_svc, ordering_svc, review_svc
from .base import to_http, not_found

router = APIRouter()


class StopUpdate(BaseModel):
    location_name: str
    address: Optional[str] = None
    latitude: Optional[Union[float, str]] = None
    longitude: Optional[Union[float, str]] = None
    arrival_time: Optional[str] = None
    departure_time: Optional[str] = None
    notes: Optional[str] = None
    order_index: int
    media_urls: Union[List[str], str]


class StopOrderIn(BaseModel):
    order_index: int


class ReviewIn(BaseModel):
    rating: int
    comment: Optional[str] = None
    timestamp: str  # ISO-8601 instant


@router.get("/api/stops/{stop_id}")
def api_stop_get(stop_id: int):
    try:
        stop = stop_svc.get_stop(stop_id)
    except ItineraryError as e:
        raise to_http(e)
    if stop is None:
        raise not_found("stop", stop_id)
    return stop


@router.put("/api/stops/{stop_id}")
def api_stop_update(stop_id: int, body: StopUpdate):
    log = LogContext("UPDATE_STOP")
    log.set_entity("STOP", stop_id)
    log.set_payload(body.model_dump())
    try:
        log.set_before(stop_svc.get_stop(stop_id))
        changes = stop_svc.update_stop(
            stop_id,
            body.location_name,
            body.address,
            body.latitude,
            body.longitude,
            body.arrival_time,
            body.departure_time,
            body.notes,
            body.order_index,
            body.media_urls,
        )
    except ItineraryError as e:
        raise to_http(e, log)
    if not changes:
        raise not_found("stop", stop_id)
    log.write()
    return {"changes": changes}


@router.put("/api/stops/{stop_id}/order")
def api_stop_order(stop_id: int, body: StopOrderIn):
    log = LogContext("UPDATE_STOP_ORDER")
    log.set_entity("STOP", stop_id)
    log.set_payload(body.model_dump())
    try:
        changes = ordering_svc.update_stop_order(stop_id, body.order_index)
    except ItineraryError as e:
        raise to_http(e, log)
    if not changes:
        raise not_found("stop", stop_id)
    log.write()
    return {"changes": changes}


@router.delete("/api/stops/{stop_id}")
def api_stop_delete(stop_id: int):
    log = LogContext("DELETE_STOP")
    log.set_entity("STOP", stop_id)
    try:
        changes = stop_svc.delete_stop(stop_id)
    except ItineraryError as e:
        raise to_http(e, log)
    log.write()
    return {"changes": changes}


@router.get("/api/stops/{stop_id}/reviews")
def api_stop_reviews(stop_id: int):
    try:
        return {"items": review_svc.get_reviews_for_stop(stop_id)}
    except ItineraryError as e:
        raise to_http(e)


@router.post("/api/stops/{stop_id}/reviews", status_code=201)
def api_review_create(stop_id: int, body: ReviewIn):
    log = LogContext("CREATE_REVIEW")
    log.set_payload({"stop_id": stop_id, **body.model_dump()})
    try:
        review_id = review_svc.add_review(stop_id, body.rating, body.comment, body.timestamp)
    except ItineraryError as e:
        raise to_http(e, log)
    log.set_entity("REVIEW", review_id)
    log.write()
    return {"review_id": review_id}
