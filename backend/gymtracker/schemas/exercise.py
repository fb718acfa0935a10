from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, StringConstraints

NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
RepsStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=20)]
SetCount = Annotated[int, Field(ge=1, le=50)]
OrderInt = Annotated[int, Field(ge=0)]

class ExerciseCreate(BaseModel):
    name: NameStr
    sets: SetCount = 3
    reps: RepsStr = "12"
    # appended after the existing exercises when omitted
    order_index: OrderInt | None = None

class ExerciseUpdate(BaseModel):
    name: NameStr | None = None
    sets: SetCount | None = None
    reps: RepsStr | None = None
    order_index: OrderInt | None = None

class ExerciseRead(BaseModel):
    id: int
    day_id: int
    name: str
    sets: int
    reps: str
    order_index: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
