from __future__ import annotations

# travel_planner/db.py
import sqlite3
import threading
from contextlib import contextmanager
from typing import Any, Iterator, NamedTuple, Sequence
import os
import yaml

# DB path resolution order:
# 1) TRAVEL_PLANNER_DB_PATH env var (highest priority)
# 2) config.yaml test_db_path (when running under tests)
# 3) config.yaml db_path
# 4) fallback: travel_planner.db at the project root
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DB_FILE_NAME = "travel_planner.db"

_lock = threading.RLock()
_conn: sqlite3.Connection | None = None
_conn_path: str | None = None


class RunResult(NamedTuple):
    last_insert_rowid: int
    changes: int


def _read_config_yaml() -> dict:
    cfg_path = os.path.join(_PROJECT_ROOT, "config.yaml")
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
        out = {}
        for k in ("db_path", "test_db_path"):
            v = cfg.get(k)
            if isinstance(v, str) and v.strip():
                out[k] = v.strip()
        return out
    except (OSError, yaml.YAMLError, AttributeError):
        return {}


def get_db_path() -> str:
    env_path = os.environ.get("TRAVEL_PLANNER_DB_PATH")
    cfg = _read_config_yaml()
    cfg_db = cfg.get("db_path")
    cfg_test = cfg.get("test_db_path")
    is_test = (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)

    if env_path:
        path = env_path
    elif is_test and cfg_test:
        path = cfg_test
    elif cfg_db:
        path = cfg_db
    else:
        path = os.path.join(_PROJECT_ROOT, DB_FILE_NAME)

    dirn = os.path.dirname(path) or "."
    os.makedirs(dirn, exist_ok=True)
    return path


def open_db(db_path: str | None = None) -> sqlite3.Connection:
    """
    Open the process-wide SQLite handle if it is not open yet.
    Enables foreign_keys, uses Row as row_factory and autocommit mode
    (transactions are started explicitly via `transaction`), then creates
    missing tables and upgrades a legacy Stop table.
    """
    global _conn, _conn_path
    with _lock:
        if _conn is not None:
            return _conn
        path = db_path or get_db_path()
        conn = sqlite3.connect(
            path,
            check_same_thread=False,
            isolation_level=None,
        )
        from .schema import prepare_schema

        try:
            conn.execute("PRAGMA foreign_keys = ON;")
            conn.row_factory = sqlite3.Row
            # tables are created on first open if absent
            prepare_schema(conn)
        except sqlite3.Error:
            conn.close()
            raise
        _conn, _conn_path = conn, path
        return conn


def close_db() -> None:
    global _conn, _conn_path
    with _lock:
        if _conn is not None:
            _conn.close()
        _conn, _conn_path = None, None


def current_db_path() -> str | None:
    return _conn_path


@contextmanager
def get_conn() -> Iterator[sqlite3.Connection]:
    """Yield the shared handle. Access is serialised by a re-entrant lock."""
    with _lock:
        yield open_db()


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """
    Run the enclosed statements in one transaction: commit on success,
    roll back on any exception. Nested use joins the outer transaction.
    """
    if conn.in_transaction:
        yield conn
        return
    conn.execute("BEGIN")
    try:
        yield conn
    except BaseException:
        conn.execute("ROLLBACK")
        raise
    else:
        conn.execute("COMMIT")


def execute_script(conn: sqlite3.Connection, ddl: str) -> None:
    conn.executescript(ddl)


def run(conn: sqlite3.Connection, sql: str, params: Sequence[Any] = ()) -> RunResult:
    cur = conn.execute(sql, tuple(params))
    return RunResult(int(cur.lastrowid or 0), int(cur.rowcount))


def query_all(conn: sqlite3.Connection, sql: str, params: Sequence[Any] = ()) -> list[dict]:
    return [dict(r) for r in conn.execute(sql, tuple(params)).fetchall()]


def query_one(conn: sqlite3.Connection, sql: str, params: Sequence[Any] = ()) -> dict | None:
    row = conn.execute(sql, tuple(params)).fetchone()
    return dict(row) if row is not None else None
