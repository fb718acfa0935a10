from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, StringConstraints

# Same bounds the client cache checks before calling out
WeightFloat = Annotated[float, Field(ge=0, le=1000)]
NotesStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]

class ProgressCreate(BaseModel):
    weight: WeightFloat
    notes: NotesStr | None = None
    # back-dated entries; server time when omitted
    created_at: datetime | None = None

class ProgressRead(BaseModel):
    id: int
    exercise_id: int
    weight: float
    notes: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}

class ProgressStatsRead(BaseModel):
    total_entries: int
    max_weight: float | None = None
    min_weight: float | None = None
    avg_weight: float | None = None
    latest_weight: float | None = None
    progression: float | None = 0.0

    model_config = {"from_attributes": True}

class ChartSeries(BaseModel):
    exercise_id: int
    exercise_name: str
    labels: list[datetime]
    weights: list[float]
    trend: list[float]
