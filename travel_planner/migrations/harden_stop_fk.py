#!/usr/bin/env python3
"""
Migration: rebuild the Stop table with a cascading foreign key on day_id.

Databases created by earlier builds declared Stop without the Day reference,
so deleting a Day left its Stops (and their Reviews) behind. This rebuilds the
table in place, dropping orphaned rows and backfilling NULL order_index and
media_urls values.
"""
from __future__ import annotations

import logging
import sqlite3

from ..db import transaction

logger = logging.getLogger(__name__)

STOP_COLUMNS = (
    "stop_id, day_id, location_name, address, latitude, longitude, "
    "arrival_time, departure_time, notes, order_index, media_urls"
)

CREATE_STOP_NEW = """
CREATE TABLE Stop_new (
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
)
"""


def needs_migration(conn: sqlite3.Connection) -> bool:
    fks = conn.execute("PRAGMA foreign_key_list(Stop)").fetchall()
    return not any(fk[2] == "Day" for fk in fks)


def migrate(conn: sqlite3.Connection) -> bool:
    """Rebuild Stop if it lacks the Day foreign key. Returns True if it ran."""
    if not needs_migration(conn):
        return False

    # foreign_keys can only be toggled outside a transaction
    conn.execute("PRAGMA foreign_keys = OFF")
    try:
        with transaction(conn):
            seq_row = conn.execute("SELECT seq FROM sqlite_sequence WHERE name='Stop'").fetchone()
            old_seq = int(seq_row[0]) if seq_row else 0

            orphan_reviews = conn.execute(
                "DELETE FROM Review WHERE stop_id IN "
                "(SELECT stop_id FROM Stop WHERE day_id NOT IN (SELECT day_id FROM Day))"
            ).rowcount
            orphan_stops = conn.execute(
                "DELETE FROM Stop WHERE day_id NOT IN (SELECT day_id FROM Day)"
            ).rowcount

            conn.execute(CREATE_STOP_NEW)
            conn.execute(
                f"INSERT INTO Stop_new ({STOP_COLUMNS}) "
                "SELECT stop_id, day_id, location_name, address, latitude, longitude, "
                "arrival_time, departure_time, notes, COALESCE(order_index, 0), "
                "COALESCE(NULLIF(media_urls, ''), '[]') FROM Stop"
            )
            conn.execute("DROP TABLE Stop")
            conn.execute("ALTER TABLE Stop_new RENAME TO Stop")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_stop_day ON Stop(day_id, order_index)")
            updated = conn.execute(
                "UPDATE sqlite_sequence SET seq = MAX(seq, ?) WHERE name='Stop'",
                (old_seq,),
            ).rowcount
            if not updated and old_seq:
                conn.execute("INSERT INTO sqlite_sequence(name, seq) VALUES('Stop', ?)", (old_seq,))

            bad = conn.execute("PRAGMA foreign_key_check(Stop)").fetchall()
            if bad:
                raise sqlite3.IntegrityError(f"foreign key check failed after Stop rebuild: {len(bad)} rows")
    finally:
        conn.execute("PRAGMA foreign_keys = ON")

    logger.info(f"Stop rebuilt: removed {orphan_stops} orphan stops, {orphan_reviews} orphan reviews")
    return True


if __name__ == "__main__":
    import sys

    from ..db import get_db_path

    path = sys.argv[1] if len(sys.argv) > 1 else get_db_path()
    logging.basicConfig(level=logging.INFO)
    conn = sqlite3.connect(path, isolation_level=None)
    try:
        ran = migrate(conn)
        print(f"Stop foreign key migration on {path}: {'applied' if ran else 'not needed'}")
    finally:
        conn.close()
