from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from gymtracker.db import get_db
from gymtracker.models import Profile
from gymtracker.schemas.profile import ProfileRegister, ProfileLogin, ProfileRead
from gymtracker.security import hash_password, verify_password, create_profile_token
from gymtracker.deps.auth import get_current_profile
from gymtracker.repositories.profile_repo import ProfileRepository

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/register", response_model=ProfileRead, status_code=status.HTTP_201_CREATED)
def register(payload: ProfileRegister, db: Session = Depends(get_db)):
    repo = ProfileRepository(db)
    if repo.get_by_email(payload.email):
        raise HTTPException(status_code=400, detail="email already registered")
    try:
        profile = repo.create(
            email=payload.email,
            username=payload.username,
            password_hash=hash_password(payload.password),
        )
    except ValueError as e:
        if str(e) == "email_already_exists":
            raise HTTPException(status_code=400, detail="email already registered")
        raise
    return profile

@router.post("/login")
def login(payload: ProfileLogin, db: Session = Depends(get_db)):
    profile = ProfileRepository(db).get_by_email(payload.email)
    if not profile or not verify_password(payload.password, profile.password_hash):
        raise HTTPException(status_code=401, detail="invalid credentials")
    token = create_profile_token(profile.id)
    return {"access_token": token, "token_type": "bearer"}

@router.get("/me", response_model=ProfileRead)
def me(current: Profile = Depends(get_current_profile)):
    return current
