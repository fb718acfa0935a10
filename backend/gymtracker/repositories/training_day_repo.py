from __future__ import annotations
from typing import Optional
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload
from gymtracker.models import TrainingDay
from gymtracker.repositories.base import BaseRepository

class TrainingDayRepository(BaseRepository[TrainingDay]):
    model = TrainingDay

    def get_owned(self, day_id: int, user_id: int) -> Optional[TrainingDay]:
        day = self.get(day_id)
        if day is None or day.user_id != user_id:
            return None
        return day

    def list_by_user(self, user_id: int) -> list[TrainingDay]:
        stmt = (
            select(TrainingDay)
            .where(TrainingDay.user_id == user_id)
            .options(selectinload(TrainingDay.exercises))
            .order_by(TrainingDay.day_order.asc(), TrainingDay.id.asc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def count_by_user(self, user_id: int) -> int:
        stmt = select(func.count()).select_from(TrainingDay).where(TrainingDay.user_id == user_id)
        return self.db.execute(stmt).scalar_one()

    def create(self, user_id: int, *, day_name: str, day_order: int | None) -> TrainingDay:
        if day_order is None:
            # new days go to the end of the routine
            day_order = self.count_by_user(user_id)
        return self.add_and_refresh(TrainingDay(user_id=user_id, day_name=day_name, day_order=day_order))

    def update(self, day: TrainingDay, *, day_name: str | None = None, day_order: int | None = None) -> TrainingDay:
        if day_name is not None:
            day.day_name = day_name
        if day_order is not None:
            day.day_order = day_order
        return self.save(day)
