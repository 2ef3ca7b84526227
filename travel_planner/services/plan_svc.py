from __future__ import annotations

import logging

from ..db import get_conn
from ..errors import translate_errors
from ..repository import plan_repo
from .utils import require_text, require_date

logger = logging.getLogger(__name__)


def _validate(plan_name, destination, start_date, end_date) -> None:
    # start_date <= end_date is left to the UI
    require_text(plan_name, "plan_name")
    require_text(destination, "destination")
    require_date(start_date, "start_date")
    require_date(end_date, "end_date")


@translate_errors
def add_travel_plan(plan_name: str, destination: str, start_date: str, end_date: str) -> int:
    _validate(plan_name, destination, start_date, end_date)
    with get_conn() as conn:
        new_id = plan_repo.insert_plan(conn, plan_name, destination, start_date, end_date)
    logger.debug(f"plan {new_id} created: {plan_name} -> {destination}")
    return new_id


@translate_errors
def get_travel_plans() -> list[dict]:
    """All plans, most recently created first."""
    with get_conn() as conn:
        return plan_repo.list_plans(conn)


@translate_errors
def get_travel_plan(plan_id: int) -> dict | None:
    with get_conn() as conn:
        return plan_repo.get_plan(conn, plan_id)


@translate_errors
def update_travel_plan(plan_id: int, plan_name: str, destination: str, start_date: str, end_date: str) -> int:
    _validate(plan_name, destination, start_date, end_date)
    with get_conn() as conn:
        return plan_repo.update_plan(conn, plan_id, plan_name, destination, start_date, end_date)


@translate_errors
def delete_travel_plan(plan_id: int) -> int:
    """Delete a plan with all of its days, stops and reviews. Absent id -> 0."""
    with get_conn() as conn:
        changes = plan_repo.delete_plan(conn, plan_id)
    if changes:
        logger.info(f"plan {plan_id} deleted")
    return changes
