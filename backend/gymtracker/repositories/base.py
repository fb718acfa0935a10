# gymtracker/repositories/base.py
from __future__ import annotations
from datetime import date, datetime, time, timedelta, timezone
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

T = TypeVar("T")  # SQLAlchemy model type

def day_start(d: date) -> datetime:
    return datetime.combine(d, time.min, tzinfo=timezone.utc)

def day_after(d: date) -> datetime:
    """Exclusive upper bound that keeps ``d`` itself inside the range."""
    return day_start(d + timedelta(days=1))

class BaseRepository(Generic[T]):
    """Lightweight base for repositories using SQLAlchemy 2.0 style."""
    model: type[T]

    def __init__(self, db: Session):
        self.db = db

    def get(self, entity_id: int) -> T | None:
        return self.db.get(self.model, entity_id)

    def add_and_refresh(self, entity: T) -> T:
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def save(self, entity: T) -> T:
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete(self, entity: T) -> None:
        self.db.delete(entity)
        self.db.commit()
