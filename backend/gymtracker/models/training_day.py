from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, String, DateTime, func
from gymtracker.db import Base
from gymtracker.models._time import utcnow

class TrainingDay(Base):
    __tablename__ = "training_days"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("profiles.id", ondelete="CASCADE"), index=True)
    day_name: Mapped[str] = mapped_column(String(120), nullable=False)
    day_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, server_default=func.now()
    )

    profile = relationship("Profile", back_populates="training_days")
    exercises = relationship(
        "Exercise", back_populates="day", cascade="all, delete-orphan",
        order_by="Exercise.order_index",
    )
    sessions = relationship("WorkoutSession", back_populates="day", cascade="all, delete-orphan")
