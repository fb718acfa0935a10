import uuid
from fastapi.testclient import TestClient
from gymtracker.main import app

client = TestClient(app)
PWD = "StrongPassw0rd!"

def uniq_email(prefix="u"):
    return f"{prefix}-{uuid.uuid4().hex[:8]}@ex.com"

def make_user(email=None, password=PWD):
    email = email or uniq_email()
    r = client.post("/auth/register", json={"email": email, "username": "Tester", "password": password})
    # 201 first time, 400 if a re-run already created it
    assert r.status_code in (201, 400), r.text
    return email, password

def auth_headers(email=None):
    email, pw = make_user(email)
    r = client.post("/auth/login", json={"email": email, "password": pw})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}

def make_day(h, name="Pecho y Tríceps"):
    r = client.post("/training-days", headers=h, json={"day_name": name})
    assert r.status_code == 201, r.text
    return r.json()

def make_exercise(h, day_id, name="Press banca", sets=3, reps="8-10"):
    r = client.post(f"/training-days/{day_id}/exercises", headers=h, json={"name": name, "sets": sets, "reps": reps})
    assert r.status_code == 201, r.text
    return r.json()
