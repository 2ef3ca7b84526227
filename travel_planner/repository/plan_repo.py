from __future__ import annotations

from sqlite3 import Connection

from ..db import run, query_all, query_one

PLAN_COLUMNS = "plan_id, plan_name, destination, start_date, end_date"


def insert_plan(conn: Connection, plan_name: str, destination: str, start_date: str, end_date: str) -> int:
    res = run(
        conn,
        "INSERT INTO TravelPlan(plan_name, destination, start_date, end_date) VALUES(?,?,?,?)",
        (plan_name, destination, start_date, end_date),
    )
    return res.last_insert_rowid


def list_plans(conn: Connection) -> list[dict]:
    return query_all(conn, f"SELECT {PLAN_COLUMNS} FROM TravelPlan ORDER BY plan_id DESC")


def get_plan(conn: Connection, plan_id: int) -> dict | None:
    return query_one(conn, f"SELECT {PLAN_COLUMNS} FROM TravelPlan WHERE plan_id=?", (plan_id,))


def exists(conn: Connection, plan_id: int) -> bool:
    return query_one(conn, "SELECT 1 AS x FROM TravelPlan WHERE plan_id=?", (plan_id,)) is not None


def update_plan(conn: Connection, plan_id: int, plan_name: str, destination: str, start_date: str, end_date: str) -> int:
    res = run(
        conn,
        "UPDATE TravelPlan SET plan_name=?, destination=?, start_date=?, end_date=? WHERE plan_id=?",
        (plan_name, destination, start_date, end_date, plan_id),
    )
    return res.changes


def delete_plan(conn: Connection, plan_id: int) -> int:
    return run(conn, "DELETE FROM TravelPlan WHERE plan_id=?", (plan_id,)).changes
