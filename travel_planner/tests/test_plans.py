from __future__ import annotations

import pytest

from travel_planner import (
    ValidationError,
    add_travel_plan,
    delete_travel_plan,
    get_travel_plan,
    get_travel_plans,
    update_travel_plan,
)


def test_plan_round_trip():
    plan_id = add_travel_plan("Eurotrip", "Paris", "2025-07-15", "2025-07-30")
    assert get_travel_plan(plan_id) == {
        "plan_id": plan_id,
        "plan_name": "Eurotrip",
        "destination": "Paris",
        "start_date": "2025-07-15",
        "end_date": "2025-07-30",
    }

    assert update_travel_plan(plan_id, "Italy loop", "Rome", "2025-09-01", "2025-09-10") == 1
    got = get_travel_plan(plan_id)
    assert (got["plan_name"], got["destination"], got["start_date"], got["end_date"]) == (
        "Italy loop", "Rome", "2025-09-01", "2025-09-10",
    )


def test_plans_listed_newest_first():
    ids = [add_travel_plan(f"Trip {i}", "Oslo", "2025-01-01", "2025-01-02") for i in range(3)]
    assert [p["plan_id"] for p in get_travel_plans()] == list(reversed(ids))


def test_missing_plan():
    assert get_travel_plan(404) is None
    assert update_travel_plan(404, "x", "y", "2025-01-01", "2025-01-01") == 0


def test_delete_is_idempotent():
    plan_id = add_travel_plan("Eurotrip", "Paris", "2025-07-15", "2025-07-30")
    assert delete_travel_plan(plan_id) == 1
    assert delete_travel_plan(plan_id) == 0
    assert get_travel_plan(plan_id) is None


def test_end_before_start_is_accepted():
    plan_id = add_travel_plan("Backwards", "Paris", "2025-07-30", "2025-07-15")
    assert get_travel_plan(plan_id)["start_date"] == "2025-07-30"


@pytest.mark.parametrize(
    "args",
    [
        ("", "Paris", "2025-07-15", "2025-07-30"),
        ("   ", "Paris", "2025-07-15", "2025-07-30"),
        ("Eurotrip", "", "2025-07-15", "2025-07-30"),
        ("Eurotrip", None, "2025-07-15", "2025-07-30"),
        ("Eurotrip", "Paris", "15/07/2025", "2025-07-30"),
        ("Eurotrip", "Paris", "2025-07-15", ""),
    ],
)
def test_invalid_plan_rejected(args):
    with pytest.raises(ValidationError):
        add_travel_plan(*args)
    assert get_travel_plans() == []


def test_invalid_update_leaves_row_untouched():
    plan_id = add_travel_plan("Eurotrip", "Paris", "2025-07-15", "2025-07-30")
    with pytest.raises(ValidationError):
        update_travel_plan(plan_id, "", "Paris", "2025-07-15", "2025-07-30")
    assert get_travel_plan(plan_id)["plan_name"] == "Eurotrip"


def test_keys_not_reused_after_delete():
    first = add_travel_plan("A", "Paris", "2025-07-15", "2025-07-30")
    delete_travel_plan(first)
    second = add_travel_plan("B", "Paris", "2025-07-15", "2025-07-30")
    assert second > first
