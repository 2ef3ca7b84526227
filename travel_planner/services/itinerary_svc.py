from __future__ import annotations

from ..db import get_conn, transaction
from ..errors import translate_errors
from ..repository import day_repo, plan_repo, stop_repo
from .utils import is_known_point


@translate_errors
def get_travel_plan_with_details(plan_id: int) -> dict | None:
    """
    The plan row plus `days` (ascending day_number), each day carrying its
    `stops` (ascending order_index). Reviews are not included.
    Read inside one transaction so the tree comes from a single snapshot.
    """
    with get_conn() as conn, transaction(conn):
        plan = plan_repo.get_plan(conn, plan_id)
        if plan is None:
            return None
        days = []
        for day in day_repo.list_days_for_plan(conn, plan_id):
            day["stops"] = stop_repo.list_stops_for_day(conn, day["day_id"])
            days.append(day)
    plan["days"] = days
    return plan


@translate_errors
def get_route_points(day_id: int) -> list[dict]:
    """Stops of a day in visiting order with unknown (0) coordinates dropped."""
    with get_conn() as conn:
        stops = stop_repo.list_stops_for_day(conn, day_id)
    return [
        {
            "stop_id": s["stop_id"],
            "location_name": s["location_name"],
            "latitude": s["latitude"],
            "longitude": s["longitude"],
        }
        for s in stops
        if is_known_point(s["latitude"], s["longitude"])
    ]
