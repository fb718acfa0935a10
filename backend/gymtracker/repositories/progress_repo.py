from __future__ import annotations
from datetime import date, datetime
from typing import Optional
from sqlalchemy import select, func
from gymtracker.models import ProgressEntry, Exercise, TrainingDay
from gymtracker.repositories.base import BaseRepository, day_start, day_after
from gymtracker.services.stats import ProgressStats, EMPTY_STATS, progression_pct

class ProgressRepository(BaseRepository[ProgressEntry]):
    model = ProgressEntry

    def _range(self, stmt, start: date | None, end: date | None):
        if start is not None:
            stmt = stmt.where(ProgressEntry.created_at >= day_start(start))
        if end is not None:
            stmt = stmt.where(ProgressEntry.created_at < day_after(end))
        return stmt

    def get_owned(self, entry_id: int, user_id: int) -> Optional[ProgressEntry]:
        stmt = (
            select(ProgressEntry)
            .join(Exercise, Exercise.id == ProgressEntry.exercise_id)
            .join(TrainingDay, TrainingDay.id == Exercise.day_id)
            .where(ProgressEntry.id == entry_id, TrainingDay.user_id == user_id)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_for_exercise(
        self, exercise_id: int, *, start: date | None = None, end: date | None = None
    ) -> list[ProgressEntry]:
        stmt = select(ProgressEntry).where(ProgressEntry.exercise_id == exercise_id)
        stmt = self._range(stmt, start, end).order_by(ProgressEntry.created_at.asc(), ProgressEntry.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def create(
        self, exercise_id: int, *, weight: float, notes: str | None, created_at: datetime | None = None
    ) -> ProgressEntry:
        entry = ProgressEntry(exercise_id=exercise_id, weight=weight, notes=notes)
        if created_at is not None:
            entry.created_at = created_at
        return self.add_and_refresh(entry)

    def stats(self, exercise_id: int, *, start: date | None = None, end: date | None = None) -> ProgressStats:
        """Aggregate figures computed by the database for one exercise."""
        agg = select(
            func.count(ProgressEntry.id),
            func.max(ProgressEntry.weight),
            func.min(ProgressEntry.weight),
            func.avg(ProgressEntry.weight),
        ).where(ProgressEntry.exercise_id == exercise_id)
        count, max_w, min_w, avg_w = self.db.execute(self._range(agg, start, end)).one()
        if not count:
            return EMPTY_STATS

        latest_stmt = select(ProgressEntry.weight).where(ProgressEntry.exercise_id == exercise_id)
        latest_stmt = self._range(latest_stmt, start, end)\
            .order_by(ProgressEntry.created_at.desc(), ProgressEntry.id.desc())\
            .limit(1)
        latest = float(self.db.execute(latest_stmt).scalar_one())

        return ProgressStats(
            total_entries=count,
            max_weight=float(max_w),
            min_weight=float(min_w),
            avg_weight=float(avg_w),
            latest_weight=latest,
            progression=progression_pct(latest, float(min_w), count),
        )
