import pytest
from fastapi.testclient import TestClient
from gymtracker.main import app
from gymtracker.db import SessionLocal
from gymtracker.repositories.profile_repo import ProfileRepository
from gymtracker.security import hash_password
from helpers import auth_headers, uniq_email

client = TestClient(app)

def test_profile_read_and_rename():
    h = auth_headers()
    r = client.get("/profile", headers=h)
    assert r.status_code == 200
    assert r.json()["username"] == "Tester"

    r = client.patch("/profile", headers=h, json={"username": "  Ana  "})
    assert r.status_code == 200
    assert r.json()["username"] == "Ana"

def test_profile_repo_create_and_lookup_case_insensitive():
    db = SessionLocal()
    repo = ProfileRepository(db)
    email = uniq_email("repo")
    p = repo.create(email=email, username=None, password_hash=hash_password("StrongPassw0rd!"))
    assert p.id and p.email == email
    assert repo.get_by_email(email.upper()).id == p.id
    db.close()

def test_profile_repo_unique_email_violation():
    db = SessionLocal()
    repo = ProfileRepository(db)
    email = uniq_email("dupe")
    repo.create(email=email, username="A", password_hash="x")
    with pytest.raises(ValueError):
        repo.create(email=email, username="B", password_hash="x")
    db.close()
