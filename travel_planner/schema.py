"""Table definitions for the itinerary store.

TravelPlan -> Day -> Stop -> Review, every child row cascades on delete of
its parent.
"""
from __future__ import annotations

import logging
from sqlite3 import Connection

from .db import execute_script, get_conn

logger = logging.getLogger(__name__)

DDL = """
CREATE TABLE IF NOT EXISTS TravelPlan (
  plan_id INTEGER PRIMARY KEY AUTOINCREMENT,
  plan_name TEXT NOT NULL,
  destination TEXT NOT NULL,
  start_date TEXT NOT NULL,
  end_date TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS Day (
  day_id INTEGER PRIMARY KEY AUTOINCREMENT,
  plan_id INTEGER NOT NULL,
  day_number INTEGER NOT NULL,
  FOREIGN KEY (plan_id) REFERENCES TravelPlan(plan_id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS Stop (
  stop_id INTEGER PRIMARY KEY AUTOINCREMENT,
  day_id INTEGER NOT NULL,
  location_name TEXT NOT NULL,
  address TEXT,
  latitude REAL,
  longitude REAL,
  arrival_time TEXT,
  departure_time TEXT,
  notes TEXT,
  order_index INTEGER NOT NULL DEFAULT 0,
  media_urls TEXT NOT NULL DEFAULT '[]',
  FOREIGN KEY (day_id) REFERENCES Day(day_id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS Review (
  review_id INTEGER PRIMARY KEY AUTOINCREMENT,
  stop_id INTEGER NOT NULL,
  rating INTEGER NOT NULL,
  comment TEXT,
  timestamp TEXT NOT NULL,
  FOREIGN KEY (stop_id) REFERENCES Stop(stop_id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_day_plan ON Day(plan_id);
CREATE INDEX IF NOT EXISTS idx_stop_day ON Stop(day_id, order_index);
CREATE INDEX IF NOT EXISTS idx_review_stop ON Review(stop_id);
"""

TABLES = ("TravelPlan", "Day", "Stop", "Review")


def create_tables(conn: Connection) -> None:
    execute_script(conn, DDL)


def prepare_schema(conn: Connection) -> None:
    """Create missing tables and upgrade a legacy Stop table in place."""
    from .migrations.harden_stop_fk import migrate

    create_tables(conn)
    if migrate(conn):
        logger.info("Stop table upgraded with day_id foreign key")


def ensure_schema() -> None:
    with get_conn() as conn:
        prepare_schema(conn)
