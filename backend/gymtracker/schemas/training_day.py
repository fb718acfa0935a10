from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, StringConstraints
from gymtracker.schemas.exercise import ExerciseRead

DayNameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]

class TrainingDayCreate(BaseModel):
    day_name: DayNameStr
    day_order: Annotated[int, Field(ge=0)] | None = None

class TrainingDayUpdate(BaseModel):
    day_name: DayNameStr | None = None
    day_order: Annotated[int, Field(ge=0)] | None = None

class TrainingDayRead(BaseModel):
    id: int
    user_id: int
    day_name: str
    day_order: int
    created_at: datetime
    updated_at: datetime
    exercises: list[ExerciseRead] = []

    model_config = {"from_attributes": True}
