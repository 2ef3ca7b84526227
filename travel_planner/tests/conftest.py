import sys
import pytest
from pathlib import Path

# Ensure project root on sys.path
_THIS_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _THIS_DIR.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@pytest.fixture(autouse=True)
def tmp_db_path(tmp_path, monkeypatch):
    # Fresh database file per test so ids start at 1
    from travel_planner import db
    from travel_planner.schema import ensure_schema

    path = tmp_path / "travel_planner_test.db"
    db.close_db()
    monkeypatch.setenv("TRAVEL_PLANNER_DB_PATH", str(path))
    ensure_schema()
    yield str(path)
    db.close_db()


@pytest.fixture()
def client(tmp_db_path):
    # Schema already exists, so startup hooks are not needed
    from travel_planner.api import app
    from fastapi.testclient import TestClient
    return TestClient(app)


@pytest.fixture()
def paris_day():
    """Plan 'Eurotrip' with a single empty day; returns (plan_id, day_id)."""
    from travel_planner import add_travel_plan, add_day

    plan_id = add_travel_plan("Eurotrip", "Paris", "2025-07-15", "2025-07-30")
    day_id = add_day(plan_id, 1)
    return plan_id, day_id
