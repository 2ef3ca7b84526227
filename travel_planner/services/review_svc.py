from __future__ import annotations

import logging

from ..db import get_conn, transaction
from ..errors import NotFoundError, translate_errors
from ..repository import review_repo, stop_repo
from .utils import optional_text, require_int, require_timestamp

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def _validate(rating, comment, timestamp) -> None:
    require_int(rating, "rating", minimum=MIN_RATING, maximum=MAX_RATING)
    optional_text(comment, "comment")
    require_timestamp(timestamp, "timestamp")


@translate_errors
def add_review(stop_id: int, rating: int, comment: str | None, timestamp: str) -> int:
    _validate(rating, comment, timestamp)
    with get_conn() as conn, transaction(conn):
        if not stop_repo.exists(conn, stop_id):
            raise NotFoundError(f"stop {stop_id} not found")
        return review_repo.insert_review(conn, stop_id, rating, comment, timestamp)


@translate_errors
def get_reviews_for_stop(stop_id: int) -> list[dict]:
    """Newest first."""
    with get_conn() as conn:
        return review_repo.list_reviews_for_stop(conn, stop_id)


@translate_errors
def get_review(review_id: int) -> dict | None:
    with get_conn() as conn:
        return review_repo.get_review(conn, review_id)


@translate_errors
def update_review(review_id: int, rating: int, comment: str | None, timestamp: str) -> int:
    _validate(rating, comment, timestamp)
    with get_conn() as conn:
        return review_repo.update_review(conn, review_id, rating, comment, timestamp)


@translate_errors
def delete_review(review_id: int) -> int:
    with get_conn() as conn:
        changes = review_repo.delete_review(conn, review_id)
    if changes:
        logger.info(f"review {review_id} deleted")
    return changes
