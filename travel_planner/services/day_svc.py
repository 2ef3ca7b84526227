from __future__ import annotations

import logging

from ..db import get_conn, transaction
from ..errors import NotFoundError, translate_errors
from ..repository import day_repo, plan_repo
from .utils import require_int

logger = logging.getLogger(__name__)


@translate_errors
def next_day_number(plan_id: int) -> int:
    """max(day_number) + 1 inside the plan, or 1 for an empty plan."""
    with get_conn() as conn:
        m = day_repo.max_day_number(conn, plan_id)
    return 1 if m is None else m + 1


@translate_errors
def add_day(plan_id: int, day_number: int | None = None) -> int:
    if day_number is not None:
        require_int(day_number, "day_number", minimum=1)
    with get_conn() as conn, transaction(conn):
        if not plan_repo.exists(conn, plan_id):
            raise NotFoundError(f"plan {plan_id} not found")
        if day_number is None:
            m = day_repo.max_day_number(conn, plan_id)
            day_number = 1 if m is None else m + 1
        return day_repo.insert_day(conn, plan_id, day_number)


@translate_errors
def get_days_for_plan(plan_id: int) -> list[dict]:
    with get_conn() as conn:
        return day_repo.list_days_for_plan(conn, plan_id)


@translate_errors
def get_day(day_id: int) -> dict | None:
    with get_conn() as conn:
        return day_repo.get_day(conn, day_id)


@translate_errors
def update_day(day_id: int, day_number: int) -> int:
    require_int(day_number, "day_number", minimum=1)
    with get_conn() as conn:
        return day_repo.update_day(conn, day_id, day_number)


@translate_errors
def delete_day(day_id: int) -> int:
    # siblings keep their numbers; gaps are visible to the UI
    with get_conn() as conn:
        changes = day_repo.delete_day(conn, day_id)
    if changes:
        logger.info(f"day {day_id} deleted")
    return changes
