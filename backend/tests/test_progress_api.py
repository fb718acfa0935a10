from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from gymtracker.main import app
from gymtracker.services.stats import compute_progress_stats
from helpers import auth_headers, make_day, make_exercise

client = TestClient(app)
T0 = datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)

def seeded_exercise(weights):
    h = auth_headers()
    ex = make_exercise(h, make_day(h)["id"])
    for i, w in enumerate(weights):
        r = client.post(
            f"/exercises/{ex['id']}/progress",
            headers=h,
            json={"weight": w, "notes": f"set {i}", "created_at": (T0 + timedelta(days=i)).isoformat()},
        )
        assert r.status_code == 201, r.text
    return h, ex

def test_append_and_list_in_time_order():
    h, ex = seeded_exercise([])
    # logged out of order on purpose
    client.post(f"/exercises/{ex['id']}/progress", headers=h, json={"weight": 70, "created_at": (T0 + timedelta(days=3)).isoformat()})
    client.post(f"/exercises/{ex['id']}/progress", headers=h, json={"weight": 60, "created_at": T0.isoformat()})
    r = client.post(f"/exercises/{ex['id']}/progress", headers=h, json={"weight": 62.5})
    assert r.status_code == 201
    assert r.json()["weight"] == 62.5

    rows = client.get(f"/exercises/{ex['id']}/progress", headers=h).json()
    assert [row["weight"] for row in rows] == [60, 70, 62.5]

@pytest.mark.parametrize("weight", [-1, 1000.5])
def test_weight_out_of_range_rejected(weight):
    h, ex = seeded_exercise([])
    r = client.post(f"/exercises/{ex['id']}/progress", headers=h, json={"weight": weight})
    assert r.status_code == 422
    assert client.get(f"/exercises/{ex['id']}/progress", headers=h).json() == []

def test_stats_endpoint():
    h, ex = seeded_exercise([60, 65, 70])
    body = client.get(f"/exercises/{ex['id']}/stats", headers=h).json()
    assert body["total_entries"] == 3
    assert (body["max_weight"], body["min_weight"], body["latest_weight"]) == (70, 60, 70)
    assert body["avg_weight"] == pytest.approx(65)
    assert body["progression"] == pytest.approx(16.6667, rel=1e-4)

def test_stats_endpoint_matches_pure_calculator():
    h, ex = seeded_exercise([80, 72.5, 90, 85, 88])
    start, end = (T0 + timedelta(days=1)).date(), (T0 + timedelta(days=3)).date()
    api = client.get(f"/exercises/{ex['id']}/stats", headers=h, params={"start": str(start), "end": str(end)}).json()

    rows = client.get(f"/exercises/{ex['id']}/progress", headers=h).json()
    pure = compute_progress_stats(
        [(r["weight"], datetime.fromisoformat(r["created_at"])) for r in rows], start=start, end=end
    )
    assert api["total_entries"] == pure.total_entries == 3
    assert api["latest_weight"] == pure.latest_weight == 85
    assert api["avg_weight"] == pytest.approx(pure.avg_weight)
    assert api["progression"] == pytest.approx(pure.progression)

def test_stats_empty_and_single():
    h, ex = seeded_exercise([])
    body = client.get(f"/exercises/{ex['id']}/stats", headers=h).json()
    assert body["total_entries"] == 0
    assert body["max_weight"] is None
    assert body["progression"] == 0

    client.post(f"/exercises/{ex['id']}/progress", headers=h, json={"weight": 40})
    body = client.get(f"/exercises/{ex['id']}/stats", headers=h).json()
    assert body["total_entries"] == 1
    assert body["progression"] == 0

def test_stats_with_zero_minimum_reports_no_progression():
    h, ex = seeded_exercise([0, 10])
    body = client.get(f"/exercises/{ex['id']}/stats", headers=h).json()
    assert body["total_entries"] == 2
    assert (body["min_weight"], body["latest_weight"]) == (0, 10)
    assert body["progression"] is None

def test_range_filter_is_inclusive():
    h, ex = seeded_exercise([40, 45, 50, 55])
    params = {"start": str((T0 + timedelta(days=1)).date()), "end": str((T0 + timedelta(days=2)).date())}
    rows = client.get(f"/exercises/{ex['id']}/progress", headers=h, params=params).json()
    assert [r["weight"] for r in rows] == [45, 50]

def test_reversed_range_400():
    h, ex = seeded_exercise([40])
    r = client.get(f"/exercises/{ex['id']}/stats", headers=h, params={"start": "2026-03-05", "end": "2026-03-01"})
    assert r.status_code == 400

def test_chart_series_with_trend():
    h, ex = seeded_exercise([10, 20, 30])
    body = client.get(f"/exercises/{ex['id']}/chart", headers=h).json()
    assert body["exercise_name"] == ex["name"]
    assert body["weights"] == [10, 20, 30]
    assert body["trend"] == pytest.approx([10, 20, 30])
    assert len(body["labels"]) == 3

def test_delete_entry_and_foreign_entry_404():
    h, ex = seeded_exercise([50, 55])
    rows = client.get(f"/exercises/{ex['id']}/progress", headers=h).json()

    stranger = auth_headers()
    assert client.delete(f"/progress/{rows[0]['id']}", headers=stranger).status_code == 404
    assert client.delete(f"/progress/{rows[0]['id']}", headers=h).status_code == 204
    assert len(client.get(f"/exercises/{ex['id']}/progress", headers=h).json()) == 1
