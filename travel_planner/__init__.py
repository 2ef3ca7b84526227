"""Persistent itinerary store: plans -> days -> stops -> reviews (SQLite)."""
from __future__ import annotations

from .db import open_db, close_db, get_conn, get_db_path
from .schema import ensure_schema
from .errors import ItineraryError, NotFoundError, ValidationError, ConflictError, StorageError
from .services.plan_svc import (
    add_travel_plan,
    get_travel_plans,
    get_travel_plan,
    update_travel_plan,
    delete_travel_plan,
)
from .services.day_svc import add_day, get_days_for_plan, get_day, update_day, delete_day, next_day_number
from .services.stop_svc import add_stop, get_stops_for_day, get_stop, update_stop, delete_stop, parse_media_urls
from .services.review_svc import add_review, get_reviews_for_stop, get_review, update_review, delete_review
from .services.ordering_svc import next_order_index, update_stop_order, reorder_stops
from .services.itinerary_svc import get_travel_plan_with_details, get_route_points

__all__ = [
    "open_db", "close_db", "get_conn", "get_db_path", "ensure_schema",
    "ItineraryError", "NotFoundError", "ValidationError", "ConflictError", "StorageError",
    "add_travel_plan", "get_travel_plans", "get_travel_plan", "update_travel_plan", "delete_travel_plan",
    "add_day", "get_days_for_plan", "get_day", "update_day", "delete_day", "next_day_number",
    "add_stop", "get_stops_for_day", "get_stop", "update_stop", "update_stop_order", "delete_stop",
    "parse_media_urls", "next_order_index",
    "add_review", "get_reviews_for_stop", "get_review", "update_review", "delete_review",
    "get_travel_plan_with_details", "reorder_stops", "get_route_points",
]
