from typing import Annotated
from datetime import date
from pydantic import BaseModel, Field, StringConstraints, model_validator

class ReportConfig(BaseModel):
    title: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)] = "Reporte de progreso"
    start_date: date
    end_date: date
    exercise_ids: Annotated[list[int], Field(min_length=1, max_length=50)]
    include_charts: bool = True
    include_stats: bool = True

    @model_validator(mode="after")
    def range_is_ordered(self) -> "ReportConfig":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    @property
    def filename(self) -> str:
        return f"reporte-progreso-{self.start_date.isoformat()}-{self.end_date.isoformat()}.pdf"
