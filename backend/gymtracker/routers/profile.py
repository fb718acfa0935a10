from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from gymtracker.db import get_db
from gymtracker.models import Profile
from gymtracker.schemas.profile import ProfileRead, ProfileUpdate
from gymtracker.repositories.profile_repo import ProfileRepository
from gymtracker.deps.auth import get_current_profile

router = APIRouter(prefix="/profile", tags=["profile"])

@router.get("", response_model=ProfileRead)
def read_profile(current: Profile = Depends(get_current_profile)):
    return current

@router.patch("", response_model=ProfileRead)
def update_profile(
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    current: Profile = Depends(get_current_profile),
):
    return ProfileRepository(db).update_username(current.id, username=payload.username)
