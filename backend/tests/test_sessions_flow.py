from fastapi.testclient import TestClient
from gymtracker.main import app
from helpers import auth_headers, make_day, make_exercise

client = TestClient(app)

def test_start_complete_and_save_exercises():
    h = auth_headers()
    day = make_day(h)
    ex = make_exercise(h, day["id"])

    r = client.post("/sessions", headers=h, json={"day_id": day["id"]})
    assert r.status_code == 201
    sess = r.json()
    assert sess["is_open"] is True and sess["completed_at"] is None

    r = client.post(f"/sessions/{sess['id']}/exercises", headers=h, json=[
        {"exercise_id": ex["id"], "weight": 60, "sets_completed": 3, "reps_performed": "10/8/8"},
    ])
    assert r.status_code == 201
    assert r.json()[0]["reps_performed"] == "10/8/8"

    r = client.post(f"/sessions/{sess['id']}/complete", headers=h)
    assert r.status_code == 200
    assert r.json()["is_open"] is False

    saved = client.get(f"/sessions/{sess['id']}/exercises", headers=h).json()
    assert [(s["exercise_id"], s["weight"], s["sets_completed"]) for s in saved] == [(ex["id"], 60, 3)]

def test_one_open_session_per_day():
    h = auth_headers()
    day = make_day(h)
    other_day = make_day(h, "Otro")

    first = client.post("/sessions", headers=h, json={"day_id": day["id"]}).json()
    r = client.post("/sessions", headers=h, json={"day_id": day["id"]})
    assert r.status_code == 409

    # a different day is independent
    assert client.post("/sessions", headers=h, json={"day_id": other_day["id"]}).status_code == 201

    open_ = client.get("/sessions/open", headers=h, params={"day_id": day["id"]}).json()
    assert open_["id"] == first["id"]

    client.post(f"/sessions/{first['id']}/complete", headers=h)
    assert client.get("/sessions/open", headers=h, params={"day_id": day["id"]}).json() is None
    assert client.post("/sessions", headers=h, json={"day_id": day["id"]}).status_code == 201

def test_complete_twice_keeps_first_timestamp():
    h = auth_headers()
    day = make_day(h)
    sess = client.post("/sessions", headers=h, json={"day_id": day["id"]}).json()
    first = client.post(f"/sessions/{sess['id']}/complete", headers=h).json()
    again = client.post(f"/sessions/{sess['id']}/complete", headers=h).json()
    assert first["completed_at"] == again["completed_at"]

def test_list_my_sessions():
    h = auth_headers()
    day = make_day(h)
    s = client.post("/sessions", headers=h, json={"day_id": day["id"]}).json()
    listed = client.get("/sessions", headers=h).json()
    assert [x["id"] for x in listed] == [s["id"]]

def test_missing_or_foreign_rows_404():
    h = auth_headers()
    stranger = auth_headers()
    day = make_day(h)
    ex = make_exercise(h, day["id"])

    assert client.post("/sessions", headers=h, json={"day_id": 999999}).status_code == 404
    assert client.post("/sessions", headers=stranger, json={"day_id": day["id"]}).status_code == 404

    sess = client.post("/sessions", headers=h, json={"day_id": day["id"]}).json()
    assert client.post(f"/sessions/{sess['id']}/complete", headers=stranger).status_code == 404
    assert client.get("/sessions/999999", headers=h).status_code == 404

    # exercise belonging to someone else cannot be attached
    foreign_day = make_day(stranger)
    foreign_ex = make_exercise(stranger, foreign_day["id"])
    r = client.post(f"/sessions/{sess['id']}/exercises", headers=h, json=[
        {"exercise_id": ex["id"], "weight": 10},
        {"exercise_id": foreign_ex["id"], "weight": 10},
    ])
    assert r.status_code == 404
    assert client.get(f"/sessions/{sess['id']}/exercises", headers=h).json() == []

def test_empty_bulk_insert_rejected():
    h = auth_headers()
    day = make_day(h)
    sess = client.post("/sessions", headers=h, json={"day_id": day["id"]}).json()
    assert client.post(f"/sessions/{sess['id']}/exercises", headers=h, json=[]).status_code == 400
