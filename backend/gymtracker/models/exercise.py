from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import Integer, ForeignKey, String, DateTime, func
from gymtracker.db import Base
from gymtracker.models._time import utcnow

class Exercise(Base):
    __tablename__ = "exercises"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    day_id: Mapped[int] = mapped_column(ForeignKey("training_days.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    sets: Mapped[int] = mapped_column(Integer, nullable=False, default=3, server_default="3")
    # free text on purpose: "12", "8-10", "AMRAP"
    reps: Mapped[str] = mapped_column(String(20), nullable=False, default="12", server_default="12")
    order_index: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, server_default=func.now()
    )

    day = relationship("TrainingDay", back_populates="exercises")
    progress = relationship(
        "ProgressEntry", back_populates="exercise", cascade="all, delete-orphan",
        order_by="ProgressEntry.created_at",
    )
    session_exercises = relationship("SessionExercise", back_populates="exercise", cascade="all, delete-orphan")
