from __future__ import annotations
from typing import Optional
from sqlalchemy import select, func
from gymtracker.models import Exercise, TrainingDay
from gymtracker.repositories.base import BaseRepository

class ExerciseRepository(BaseRepository[Exercise]):
    model = Exercise

    def get_owned(self, exercise_id: int, user_id: int) -> Optional[Exercise]:
        # Ownership is exercise -> day -> profile
        stmt = (
            select(Exercise)
            .join(TrainingDay, TrainingDay.id == Exercise.day_id)
            .where(Exercise.id == exercise_id, TrainingDay.user_id == user_id)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_owned(self, exercise_ids: list[int], user_id: int) -> list[Exercise]:
        stmt = (
            select(Exercise)
            .join(TrainingDay, TrainingDay.id == Exercise.day_id)
            .where(Exercise.id.in_(exercise_ids), TrainingDay.user_id == user_id)
        )
        found = {ex.id: ex for ex in self.db.execute(stmt).scalars().all()}
        # keep the caller's order
        return [found[i] for i in exercise_ids if i in found]

    def list_by_day(self, day_id: int) -> list[Exercise]:
        stmt = select(Exercise).where(Exercise.day_id == day_id).order_by(Exercise.order_index.asc(), Exercise.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def create(
        self, day_id: int, *, name: str, sets: int, reps: str, order_index: int | None
    ) -> Exercise:
        if order_index is None:
            order_index = self.db.execute(
                select(func.count()).select_from(Exercise).where(Exercise.day_id == day_id)
            ).scalar_one()
        ex = Exercise(day_id=day_id, name=name, sets=sets, reps=reps, order_index=order_index)
        return self.add_and_refresh(ex)

    def update(self, ex: Exercise, **fields) -> Exercise:
        for key, value in fields.items():
            if value is not None:
                setattr(ex, key, value)
        return self.save(ex)
