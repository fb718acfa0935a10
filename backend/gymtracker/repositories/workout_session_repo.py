from __future__ import annotations
from typing import Iterable, Optional
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from gymtracker.models import WorkoutSession, SessionExercise
from gymtracker.models._time import utcnow
from gymtracker.repositories.base import BaseRepository

class WorkoutSessionRepository(BaseRepository[WorkoutSession]):
    model = WorkoutSession

    def get_owned(self, session_id: int, user_id: int) -> Optional[WorkoutSession]:
        sess = self.get(session_id)
        if sess is None or sess.user_id != user_id:
            return None
        return sess

    def list_by_user(self, user_id: int, *, limit: int = 50, offset: int = 0) -> list[WorkoutSession]:
        stmt = select(WorkoutSession).where(WorkoutSession.user_id == user_id)\
                                     .order_by(WorkoutSession.started_at.desc(), WorkoutSession.id.desc())\
                                     .limit(limit).offset(offset)
        return list(self.db.execute(stmt).scalars().all())

    def get_open(self, user_id: int, day_id: int) -> Optional[WorkoutSession]:
        stmt = select(WorkoutSession).where(
            WorkoutSession.user_id == user_id,
            WorkoutSession.day_id == day_id,
            WorkoutSession.completed_at.is_(None),
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def start(self, user_id: int, day_id: int) -> WorkoutSession:
        if self.get_open(user_id, day_id) is not None:
            raise ValueError("session_already_open")
        try:
            return self.add_and_refresh(WorkoutSession(user_id=user_id, day_id=day_id))
        except IntegrityError:
            # lost the race against another tab; the partial unique index caught it
            self.db.rollback()
            raise ValueError("session_already_open")

    def complete(self, sess: WorkoutSession) -> WorkoutSession:
        if sess.completed_at is None:
            sess.completed_at = utcnow()
        return self.save(sess)

    def add_exercises(self, session_id: int, rows: Iterable[dict]) -> list[SessionExercise]:
        created = [SessionExercise(session_id=session_id, **row) for row in rows]
        self.db.add_all(created)
        self.db.commit()
        for item in created:
            self.db.refresh(item)
        return created

    def list_exercises(self, session_id: int) -> list[SessionExercise]:
        stmt = select(SessionExercise).where(SessionExercise.session_id == session_id)\
                                      .order_by(SessionExercise.id.asc())
        return list(self.db.execute(stmt).scalars().all())
