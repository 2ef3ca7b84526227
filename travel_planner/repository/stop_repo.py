from __future__ import annotations

from sqlite3 import Connection

from ..db import run, query_all, query_one

# NULL order_index / media_urls (legacy rows) read back as 0 / '[]'
STOP_SELECT = (
    "SELECT stop_id, day_id, location_name, address, latitude, longitude, "
    "arrival_time, departure_time, notes, "
    "COALESCE(order_index, 0) AS order_index, "
    "COALESCE(NULLIF(media_urls, ''), '[]') AS media_urls "
    "FROM Stop"
)


def insert_stop(
    conn: Connection,
    day_id: int,
    location_name: str,
    address: str,
    latitude: float,
    longitude: float,
    arrival_time: str,
    departure_time: str,
    notes: str,
    order_index: int,
    media_urls: str,
) -> int:
    res = run(
        conn,
        "INSERT INTO Stop(day_id, location_name, address, latitude, longitude, arrival_time, "
        "departure_time, notes, order_index, media_urls) VALUES(?,?,?,?,?,?,?,?,?,?)",
        (day_id, location_name, address, latitude, longitude, arrival_time, departure_time, notes, order_index, media_urls),
    )
    return res.last_insert_rowid


def list_stops_for_day(conn: Connection, day_id: int) -> list[dict]:
    return query_all(conn, f"{STOP_SELECT} WHERE day_id=? ORDER BY order_index ASC, stop_id ASC", (day_id,))


def list_stop_ids_for_day(conn: Connection, day_id: int) -> list[int]:
    rows = query_all(conn, "SELECT stop_id FROM Stop WHERE day_id=? ORDER BY order_index ASC, stop_id ASC", (day_id,))
    return [r["stop_id"] for r in rows]


def get_stop(conn: Connection, stop_id: int) -> dict | None:
    return query_one(conn, f"{STOP_SELECT} WHERE stop_id=?", (stop_id,))


def exists(conn: Connection, stop_id: int) -> bool:
    return query_one(conn, "SELECT 1 AS x FROM Stop WHERE stop_id=?", (stop_id,)) is not None


def max_order_index(conn: Connection, day_id: int) -> int | None:
    row = query_one(conn, "SELECT MAX(order_index) AS m FROM Stop WHERE day_id=?", (day_id,))
    return None if row is None or row["m"] is None else int(row["m"])


def update_stop(
    conn: Connection,
    stop_id: int,
    location_name: str,
    address: str,
    latitude: float,
    longitude: float,
    arrival_time: str,
    departure_time: str,
    notes: str,
    order_index: int,
    media_urls: str,
) -> int:
    res = run(
        conn,
        "UPDATE Stop SET location_name=?, address=?, latitude=?, longitude=?, arrival_time=?, "
        "departure_time=?, notes=?, order_index=?, media_urls=? WHERE stop_id=?",
        (location_name, address, latitude, longitude, arrival_time, departure_time, notes, order_index, media_urls, stop_id),
    )
    return res.changes


def set_order_index(conn: Connection, stop_id: int, order_index: int) -> int:
    return run(conn, "UPDATE Stop SET order_index=? WHERE stop_id=?", (order_index, stop_id)).changes


def delete_stop(conn: Connection, stop_id: int) -> int:
    return run(conn, "DELETE FROM Stop WHERE stop_id=?", (stop_id,)).changes
