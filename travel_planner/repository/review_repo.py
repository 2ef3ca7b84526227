from __future__ import annotations

from sqlite3 import Connection

from ..db import run, query_all, query_one

REVIEW_COLUMNS = "review_id, stop_id, rating, comment, timestamp"


def insert_review(conn: Connection, stop_id: int, rating: int, comment: str, timestamp: str) -> int:
    res = run(
        conn,
        "INSERT INTO Review(stop_id, rating, comment, timestamp) VALUES(?,?,?,?)",
        (stop_id, rating, comment, timestamp),
    )
    return res.last_insert_rowid


def list_reviews_for_stop(conn: Connection, stop_id: int) -> list[dict]:
    # ISO-8601 timestamps sort correctly as text
    return query_all(
        conn,
        f"SELECT {REVIEW_COLUMNS} FROM Review WHERE stop_id=? ORDER BY timestamp DESC, review_id DESC",
        (stop_id,),
    )


def get_review(conn: Connection, review_id: int) -> dict | None:
    return query_one(conn, f"SELECT {REVIEW_COLUMNS} FROM Review WHERE review_id=?", (review_id,))


def update_review(conn: Connection, review_id: int, rating: int, comment: str, timestamp: str) -> int:
    res = run(
        conn,
        "UPDATE Review SET rating=?, comment=?, timestamp=? WHERE review_id=?",
        (rating, comment, timestamp, review_id),
    )
    return res.changes


def delete_review(conn: Connection, review_id: int) -> int:
    return run(conn, "DELETE FROM Review WHERE review_id=?", (review_id,)).changes
