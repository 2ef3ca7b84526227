from __future__ import annotations

from sqlite3 import Connection

from ..db import run, query_all, query_one


def insert_day(conn: Connection, plan_id: int, day_number: int) -> int:
    return run(conn, "INSERT INTO Day(plan_id, day_number) VALUES(?,?)", (plan_id, day_number)).last_insert_rowid


def list_days_for_plan(conn: Connection, plan_id: int) -> list[dict]:
    return query_all(
        conn,
        "SELECT day_id, plan_id, day_number FROM Day WHERE plan_id=? ORDER BY day_number ASC, day_id ASC",
        (plan_id,),
    )


def get_day(conn: Connection, day_id: int) -> dict | None:
    return query_one(conn, "SELECT day_id, plan_id, day_number FROM Day WHERE day_id=?", (day_id,))


def exists(conn: Connection, day_id: int) -> bool:
    return query_one(conn, "SELECT 1 AS x FROM Day WHERE day_id=?", (day_id,)) is not None


def max_day_number(conn: Connection, plan_id: int) -> int | None:
    row = query_one(conn, "SELECT MAX(day_number) AS m FROM Day WHERE plan_id=?", (plan_id,))
    return None if row is None or row["m"] is None else int(row["m"])


def update_day(conn: Connection, day_id: int, day_number: int) -> int:
    return run(conn, "UPDATE Day SET day_number=? WHERE day_id=?", (day_number, day_id)).changes


def delete_day(conn: Connection, day_id: int) -> int:
    return run(conn, "DELETE FROM Day WHERE day_id=?", (day_id,)).changes
