"""
Stop ordering within a day.

order_index values of a day's stops form the dense sequence 0..N-1 after every
reorder. New stops are appended at max(order_index) + 1.
"""
from __future__ import annotations

import logging
from typing import Sequence

from ..db import get_conn, transaction
from ..errors import ConflictError, NotFoundError, ValidationError, translate_errors
from ..repository import day_repo, stop_repo
from .utils import is_permutation, require_int

logger = logging.getLogger(__name__)


@translate_errors
def next_order_index(day_id: int) -> int:
    with get_conn() as conn:
        m = stop_repo.max_order_index(conn, day_id)
    return 0 if m is None else m + 1


@translate_errors
def update_stop_order(stop_id: int, new_order_index: int) -> int:
    """
    Set one stop's order_index. Does not touch siblings, so a single call can
    leave gaps or duplicates; use reorder_stops for a full drag-and-drop result.
    """
    require_int(new_order_index, "new_order_index", minimum=0)
    with get_conn() as conn:
        return stop_repo.set_order_index(conn, stop_id, new_order_index)


@translate_errors
def reorder_stops(day_id: int, stop_ids: Sequence[int]) -> int:
    """
    Rewrite order_index of every stop of `day_id` so that each stop sits at its
    0-based position in `stop_ids`.

    `stop_ids` must be a permutation of the day's current stop ids, otherwise
    ConflictError is raised and nothing is written. All updates happen in one
    transaction. Returns the number of stops rewritten.
    """
    if isinstance(stop_ids, (str, bytes)) or not isinstance(stop_ids, Sequence):
        raise ValidationError("stop_ids must be a sequence of stop ids")
    for sid in stop_ids:
        require_int(sid, "stop_id")
    wanted = list(stop_ids)

    with get_conn() as conn, transaction(conn):
        if not day_repo.exists(conn, day_id):
            raise NotFoundError(f"day {day_id} not found")
        current = stop_repo.list_stop_ids_for_day(conn, day_id)
        if not is_permutation(wanted, current):
            missing = sorted(set(current) - set(wanted))
            extra = sorted(set(wanted) - set(current))
            raise ConflictError(
                f"stop order for day {day_id} is not a permutation of its stops "
                f"(missing={missing}, unexpected={extra}, given={len(wanted)}, current={len(current)})"
            )
        for index, sid in enumerate(wanted):
            stop_repo.set_order_index(conn, sid, index)

    logger.debug(f"day {day_id} reordered: {wanted}")
    return len(wanted)
