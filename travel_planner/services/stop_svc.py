from __future__ import annotations

import logging

from ..db import get_conn, transaction
from ..errors import NotFoundError, translate_errors
from ..repository import day_repo, stop_repo
from .utils import (
    decode_media_urls,
    encode_media_urls,
    optional_text,
    require_int,
    require_text,
    to_coordinate,
)

logger = logging.getLogger(__name__)


def _clean_fields(location_name, address, latitude, longitude, arrival_time, departure_time, notes, media_urls):
    require_text(location_name, "location_name")
    return (
        location_name,
        optional_text(address, "address"),
        to_coordinate(latitude),
        to_coordinate(longitude),
        optional_text(arrival_time, "arrival_time"),
        optional_text(departure_time, "departure_time"),
        optional_text(notes, "notes"),
        encode_media_urls(media_urls),
    )


@translate_errors
def add_stop(
    day_id: int,
    location_name: str,
    address: str | None = None,
    latitude=None,
    longitude=None,
    arrival_time: str | None = None,
    departure_time: str | None = None,
    notes: str | None = None,
    order_index: int | None = None,
    media_urls="[]",
) -> int:
    """
    Add a stop to a day. Unparseable coordinates are stored as 0 (unknown).
    Without an explicit order_index the stop goes last: max(order_index) + 1,
    or 0 for an empty day.
    """
    name, address, lat, lon, arrival, departure, notes, media = _clean_fields(
        location_name, address, latitude, longitude, arrival_time, departure_time, notes, media_urls
    )
    if order_index is not None:
        require_int(order_index, "order_index", minimum=0)

    with get_conn() as conn, transaction(conn):
        if not day_repo.exists(conn, day_id):
            raise NotFoundError(f"day {day_id} not found")
        if order_index is None:
            m = stop_repo.max_order_index(conn, day_id)
            order_index = 0 if m is None else m + 1
        new_id = stop_repo.insert_stop(
            conn, day_id, name, address, lat, lon, arrival, departure, notes, order_index, media
        )
    logger.debug(f"stop {new_id} added to day {day_id} at {order_index}")
    return new_id


@translate_errors
def get_stops_for_day(day_id: int) -> list[dict]:
    with get_conn() as conn:
        return stop_repo.list_stops_for_day(conn, day_id)


@translate_errors
def get_stop(stop_id: int) -> dict | None:
    with get_conn() as conn:
        return stop_repo.get_stop(conn, stop_id)


@translate_errors
def update_stop(
    stop_id: int,
    location_name: str,
    address: str | None,
    latitude,
    longitude,
    arrival_time: str | None,
    departure_time: str | None,
    notes: str | None,
    order_index: int,
    media_urls,
) -> int:
    """Replace every mutable field of a stop. Returns the number of rows changed."""
    name, address, lat, lon, arrival, departure, notes, media = _clean_fields(
        location_name, address, latitude, longitude, arrival_time, departure_time, notes, media_urls
    )
    require_int(order_index, "order_index", minimum=0)
    with get_conn() as conn:
        return stop_repo.update_stop(
            conn, stop_id, name, address, lat, lon, arrival, departure, notes, order_index, media
        )


@translate_errors
def delete_stop(stop_id: int) -> int:
    with get_conn() as conn:
        changes = stop_repo.delete_stop(conn, stop_id)
    if changes:
        logger.info(f"stop {stop_id} deleted")
    return changes


@translate_errors
def parse_media_urls(stop: dict) -> list[str]:
    """Decode the media list of a stop row."""
    return decode_media_urls(stop.get("media_urls"))
