# gymtracker/repositories/profile_repo.py
from __future__ import annotations
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError

from gymtracker.models import Profile
from gymtracker.repositories.base import BaseRepository

class ProfileRepository(BaseRepository[Profile]):
    model = Profile

    # READS
    def get_by_email(self, email: str) -> Optional[Profile]:
        stmt = select(Profile).where(func.lower(Profile.email) == email.lower())
        return self.db.execute(stmt).scalar_one_or_none()

    # WRITES
    def create(self, *, email: str, username: str | None, password_hash: str) -> Profile:
        profile = Profile(email=email, username=username, password_hash=password_hash)
        try:
            return self.add_and_refresh(profile)
        except IntegrityError:
            self.db.rollback()
            # Re-raise a clean marker the router maps to 400
            raise ValueError("email_already_exists")

    def update_username(self, profile_id: int, *, username: str | None) -> Optional[Profile]:
        profile = self.get(profile_id)
        if not profile:
            return None
        profile.username = username
        return self.save(profile)
