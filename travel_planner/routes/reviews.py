from __future__ import annotations

from fastapi import APIRouter

from ..errors import ItineraryError
from ..logs import LogContext
from ..services import review_svc
from .base import to_http, not_found
from .stops import ReviewIn

router = APIRouter()


@router.get("/api/reviews/{review_id}")
def api_review_get(review_id: int):
    try:
        review = review_svc.get_review(review_id)
    except ItineraryError as e:
        raise to_http(e)
    if review is None:
        raise not_found("review", review_id)
    return review


@router.put("/api/reviews/{review_id}")
def api_review_update(review_id: int, body: ReviewIn):
    log = LogContext("UPDATE_REVIEW")
    log.set_entity("REVIEW", review_id)
    log.set_payload(body.model_dump())
    try:
        changes = review_svc.update_review(review_id, body.rating, body.comment, body.timestamp)
    except ItineraryError as e:
        raise to_http(e, log)
    if not changes:
        raise not_found("review", review_id)
    log.write()
    return {"changes": changes}


@router.delete("/api/reviews/{review_id}")
def api_review_delete(review_id: int):
    log = LogContext("DELETE_REVIEW")
    log.set_entity("REVIEW", review_id)
    try:
        changes = review_svc.delete_review(review_id)
    except ItineraryError as e:
        raise to_http(e, log)
    log.write()
    return {"changes": changes}
