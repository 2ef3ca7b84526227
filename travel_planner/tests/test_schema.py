"""
Schema creation and the legacy Stop foreign-key migration.
"""
from __future__ import annotations

import sqlite3

from travel_planner import db
from travel_planner.db import get_conn
from travel_planner.schema import TABLES, ensure_schema
from travel_planner.migrations.harden_stop_fk import migrate, needs_migration

LEGACY_DDL = """
CREATE TABLE TravelPlan (
  plan_id INTEGER PRIMARY KEY AUTOINCREMENT,
  plan_name TEXT NOT NULL, destination TEXT NOT NULL,
  start_date TEXT NOT NULL, end_date TEXT NOT NULL
);
CREATE TABLE Day (
  day_id INTEGER PRIMARY KEY AUTOINCREMENT,
  plan_id INTEGER NOT NULL, day_number INTEGER NOT NULL,
  FOREIGN KEY (plan_id) REFERENCES TravelPlan(plan_id) ON DELETE CASCADE
);
CREATE TABLE Stop (
  stop_id INTEGER PRIMARY KEY AUTOINCREMENT,
  day_id INTEGER NOT NULL, location_name TEXT NOT NULL, address TEXT,
  latitude REAL, longitude REAL, arrival_time TEXT, departure_time TEXT,
  notes TEXT, order_index INTEGER NOT NULL, media_urls TEXT
);
CREATE TABLE Review (
  review_id INTEGER PRIMARY KEY AUTOINCREMENT,
  stop_id INTEGER NOT NULL, rating INTEGER NOT NULL, comment TEXT, timestamp TEXT NOT NULL,
  FOREIGN KEY (stop_id) REFERENCES Stop(stop_id) ON DELETE CASCADE
);
INSERT INTO TravelPlan(plan_name, destination, start_date, end_date) VALUES('Old', 'Lisbon', '2024-05-01', '2024-05-03');
INSERT INTO Day(plan_id, day_number) VALUES(1, 1);
INSERT INTO Stop(day_id, location_name, order_index, media_urls) VALUES(1, 'Belem', 0, NULL);
INSERT INTO Stop(day_id, location_name, order_index, media_urls) VALUES(99, 'Ghost', 0, '[]');
INSERT INTO Stop(day_id, location_name, order_index, media_urls) VALUES(1, 'Gone', 1, '[]');
DELETE FROM Stop WHERE location_name = 'Gone';
INSERT INTO Review(stop_id, rating, comment, timestamp) VALUES(1, 5, 'great', '2024-05-01T10:00:00Z');
INSERT INTO Review(stop_id, rating, comment, timestamp) VALUES(2, 1, 'orphan', '2024-05-01T11:00:00Z');
"""


def _legacy_db(path) -> sqlite3.Connection:
    conn = sqlite3.connect(str(path), isolation_level=None)
    conn.executescript(LEGACY_DDL)
    return conn


def _fk_targets(conn, table):
    return {(r[2], r[6]) for r in conn.execute(f"PRAGMA foreign_key_list({table})").fetchall()}


def test_tables_and_cascades_declared():
    with get_conn() as conn:
        names = {r["name"] for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")}
        assert set(TABLES) <= names
        assert _fk_targets(conn, "Day") == {("TravelPlan", "CASCADE")}
        assert _fk_targets(conn, "Stop") == {("Day", "CASCADE")}
        assert _fk_targets(conn, "Review") == {("Stop", "CASCADE")}
        assert not needs_migration(conn)


def test_ensure_schema_is_repeatable():
    ensure_schema()
    ensure_schema()
    with get_conn() as conn:
        assert not needs_migration(conn)


def test_migrate_rebuilds_legacy_stop(tmp_path):
    conn = _legacy_db(tmp_path / "legacy.db")
    try:
        assert needs_migration(conn)
        assert migrate(conn) is True
        assert _fk_targets(conn, "Stop") == {("Day", "CASCADE")}

        rows = conn.execute("SELECT stop_id, location_name, media_urls FROM Stop ORDER BY stop_id").fetchall()
        assert rows == [(1, "Belem", "[]")]
        reviews = conn.execute("SELECT comment FROM Review").fetchall()
        assert reviews == [("great",)]

        # ids of removed stops are not handed out again
        cur = conn.execute("INSERT INTO Stop(day_id, location_name) VALUES(1, 'New')")
        assert cur.lastrowid == 4

        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1
        assert migrate(conn) is False
    finally:
        conn.close()


def test_ensure_schema_upgrades_legacy_file(tmp_path, monkeypatch):
    path = tmp_path / "legacy.db"
    _legacy_db(path).close()

    db.close_db()
    monkeypatch.setenv("TRAVEL_PLANNER_DB_PATH", str(path))
    ensure_schema()

    from travel_planner import delete_day, get_stop, get_review

    with get_conn() as conn:
        assert _fk_targets(conn, "Stop") == {("Day", "CASCADE")}
    assert get_stop(1)["location_name"] == "Belem"
    assert delete_day(1) == 1
    assert get_stop(1) is None
    assert get_review(1) is None
