from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, StringConstraints
from gymtracker.schemas.progress import WeightFloat, NotesStr

class SessionStart(BaseModel):
    day_id: int

class SessionRead(BaseModel):
    id: int
    user_id: int
    day_id: int
    started_at: datetime
    completed_at: datetime | None = None
    is_open: bool

    model_config = {"from_attributes": True}

class SessionExerciseCreate(BaseModel):
    exercise_id: int
    weight: WeightFloat
    sets_completed: Annotated[int, Field(ge=0, le=50)] = 0
    reps_performed: Annotated[str, StringConstraints(strip_whitespace=True, max_length=120)] | None = None
    notes: NotesStr | None = None

class SessionExerciseRead(BaseModel):
    id: int
    session_id: int
    exercise_id: int
    weight: float
    sets_completed: int
    reps_performed: str | None = None
    notes: str | None = None

    model_config = {"from_attributes": True}
