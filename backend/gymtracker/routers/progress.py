from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from gymtracker.db import get_db
from gymtracker.models import Profile
from gymtracker.schemas.progress import ProgressCreate, ProgressRead, ProgressStatsRead, ChartSeries
from gymtracker.repositories.progress_repo import ProgressRepository
from gymtracker.routers.exercises import owned_exercise
from gymtracker.services.stats import trend_line
from gymtracker.deps.auth import get_current_profile

router = APIRouter(tags=["progress"])

def _check_range(start: date | None, end: date | None) -> None:
    if start and end and end < start:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="end must not be before start")

@router.get("/exercises/{exercise_id}/progress", response_model=list[ProgressRead])
def list_progress(
    exercise_id: int,
    start: date | None = Query(None),
    end: date | None = Query(None),
    db: Session = Depends(get_db),
    current: Profile = Depends(get_current_profile),
):
    _check_range(start, end)
    ex = owned_exercise(exercise_id, db, current)
    return ProgressRepository(db).list_for_exercise(ex.id, start=start, end=end)

@router.post("/exercises/{exercise_id}/progress", response_model=ProgressRead, status_code=status.HTTP_201_CREATED)
def add_progress(
    exercise_id: int,
    payload: ProgressCreate,
    db: Session = Depends(get_db),
    current: Profile = Depends(get_current_profile),
):
    ex = owned_exercise(exercise_id, db, current)
    return ProgressRepository(db).create(
        ex.id, weight=payload.weight, notes=payload.notes, created_at=payload.created_at
    )

@router.delete("/progress/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_progress(entry_id: int, db: Session = Depends(get_db), current: Profile = Depends(get_current_profile)):
    repo = ProgressRepository(db)
    entry = repo.get_owned(entry_id, current.id)
    if not entry:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Progress entry not found")
    repo.delete(entry)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/exercises/{exercise_id}/stats", response_model=ProgressStatsRead)
def progress_stats(
    exercise_id: int,
    start: date | None = Query(None),
    end: date | None = Query(None),
    db: Session = Depends(get_db),
    current: Profile = Depends(get_current_profile),
):
    _check_range(start, end)
    ex = owned_exercise(exercise_id, db, current)
    return ProgressRepository(db).stats(ex.id, start=start, end=end).as_dict()

@router.get("/exercises/{exercise_id}/chart", response_model=ChartSeries)
def progress_chart(
    exercise_id: int,
    start: date | None = Query(None),
    end: date | None = Query(None),
    db: Session = Depends(get_db),
    current: Profile = Depends(get_current_profile),
):
    _check_range(start, end)
    ex = owned_exercise(exercise_id, db, current)
    entries = ProgressRepository(db).list_for_exercise(ex.id, start=start, end=end)
    weights = [float(e.weight) for e in entries]
    return ChartSeries(
        exercise_id=ex.id,
        exercise_name=ex.name,
        labels=[e.created_at for e in entries],
        weights=weights,
        trend=trend_line(weights),
    )
