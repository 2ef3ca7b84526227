from __future__ import annotations

import pytest

from travel_planner import db
from travel_planner.db import get_conn, transaction, run, query_all, query_one


def test_env_path_wins(tmp_db_path):
    assert db.get_db_path() == tmp_db_path
    with get_conn():
        assert db.current_db_path() == tmp_db_path


def test_config_yaml_paths(tmp_path, monkeypatch):
    monkeypatch.delenv("TRAVEL_PLANNER_DB_PATH", raising=False)
    monkeypatch.setattr(db, "_PROJECT_ROOT", str(tmp_path))
    (tmp_path / "config.yaml").write_text(
        f"db_path: {tmp_path / 'prod' / 'a.db'}\ntest_db_path: {tmp_path / 'test' / 'b.db'}\n",
        encoding="utf-8",
    )
    # PYTEST_CURRENT_TEST is set while a test runs
    assert db.get_db_path() == str(tmp_path / "test" / "b.db")
    assert (tmp_path / "test").is_dir()

    monkeypatch.delenv("PYTEST_CURRENT_TEST", raising=False)
    monkeypatch.delenv("APP_ENV", raising=False)
    assert db.get_db_path() == str(tmp_path / "prod" / "a.db")


def test_default_path_is_fixed_file_name(tmp_path, monkeypatch):
    monkeypatch.delenv("TRAVEL_PLANNER_DB_PATH", raising=False)
    monkeypatch.setattr(db, "_PROJECT_ROOT", str(tmp_path))
    assert db.get_db_path() == str(tmp_path / "travel_planner.db")


def test_unreadable_config_is_ignored(tmp_path, monkeypatch):
    monkeypatch.delenv("TRAVEL_PLANNER_DB_PATH", raising=False)
    monkeypatch.setattr(db, "_PROJECT_ROOT", str(tmp_path))
    (tmp_path / "config.yaml").write_text("db_path: [unclosed\n", encoding="utf-8")
    assert db.get_db_path() == str(tmp_path / "travel_planner.db")


def test_single_shared_handle():
    with get_conn() as a:
        with get_conn() as b:
            assert a is b
            assert a.execute("PRAGMA foreign_keys").fetchone()[0] == 1


def test_run_and_query_primitives():
    with get_conn() as conn:
        res = run(conn, "INSERT INTO TravelPlan(plan_name, destination, start_date, end_date) VALUES(?,?,?,?)",
                  ("Trip", "Rome", "2025-01-01", "2025-01-02"))
        assert res.last_insert_rowid == 1
        assert res.changes == 1
        assert query_one(conn, "SELECT plan_name FROM TravelPlan WHERE plan_id=?", (1,)) == {"plan_name": "Trip"}
        assert query_one(conn, "SELECT plan_name FROM TravelPlan WHERE plan_id=?", (2,)) is None
        assert query_all(conn, "SELECT plan_id FROM TravelPlan") == [{"plan_id": 1}]
        assert run(conn, "DELETE FROM TravelPlan WHERE plan_id=?", (42,)).changes == 0


def test_transaction_rolls_back_on_error():
    with get_conn() as conn:
        with pytest.raises(RuntimeError):
            with transaction(conn):
                conn.execute("INSERT INTO TravelPlan(plan_name, destination, start_date, end_date) "
                             "VALUES('x','y','2025-01-01','2025-01-01')")
                raise RuntimeError("boom")
        assert query_all(conn, "SELECT * FROM TravelPlan") == []
        assert not conn.in_transaction


def test_nested_transaction_joins_outer():
    with get_conn() as conn:
        with pytest.raises(RuntimeError):
            with transaction(conn):
                with transaction(conn):
                    conn.execute("INSERT INTO TravelPlan(plan_name, destination, start_date, end_date) "
                                 "VALUES('x','y','2025-01-01','2025-01-01')")
                raise RuntimeError("outer fails")
        assert query_all(conn, "SELECT * FROM TravelPlan") == []
