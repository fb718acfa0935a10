from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from gymtracker.db import get_db
from gymtracker.models import Profile
from gymtracker.schemas.training_day import TrainingDayCreate, TrainingDayUpdate, TrainingDayRead
from gymtracker.schemas.exercise import ExerciseCreate, ExerciseRead
from gymtracker.repositories.training_day_repo import TrainingDayRepository
from gymtracker.repositories.exercise_repo import ExerciseRepository
from gymtracker.deps.auth import get_current_profile

router = APIRouter(prefix="/training-days", tags=["training-days"])

def _owned_day(repo: TrainingDayRepository, day_id: int, current: Profile):
    day = repo.get_owned(day_id, current.id)
    if not day:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Training day not found")
    return day

@router.get("", response_model=list[TrainingDayRead])
def list_days(db: Session = Depends(get_db), current: Profile = Depends(get_current_profile)):
    return TrainingDayRepository(db).list_by_user(current.id)

@router.post("", response_model=TrainingDayRead, status_code=status.HTTP_201_CREATED)
def create_day(payload: TrainingDayCreate, db: Session = Depends(get_db), current: Profile = Depends(get_current_profile)):
    return TrainingDayRepository(db).create(current.id, day_name=payload.day_name, day_order=payload.day_order)

@router.get("/{day_id}", response_model=TrainingDayRead)
def get_day(day_id: int, db: Session = Depends(get_db), current: Profile = Depends(get_current_profile)):
    return _owned_day(TrainingDayRepository(db), day_id, current)

@router.patch("/{day_id}", response_model=TrainingDayRead)
def update_day(
    day_id: int,
    payload: TrainingDayUpdate,
    db: Session = Depends(get_db),
    current: Profile = Depends(get_current_profile),
):
    repo = TrainingDayRepository(db)
    day = _owned_day(repo, day_id, current)
    return repo.update(day, day_name=payload.day_name, day_order=payload.day_order)

@router.delete("/{day_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_day(day_id: int, db: Session = Depends(get_db), current: Profile = Depends(get_current_profile)):
    repo = TrainingDayRepository(db)
    # exercises, their history and sessions go with it
    repo.delete(_owned_day(repo, day_id, current))
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{day_id}/exercises", response_model=ExerciseRead, status_code=status.HTTP_201_CREATED)
def add_exercise(
    day_id: int,
    payload: ExerciseCreate,
    db: Session = Depends(get_db),
    current: Profile = Depends(get_current_profile),
):
    day = _owned_day(TrainingDayRepository(db), day_id, current)
    return ExerciseRepository(db).create(
        day.id,
        name=payload.name,
        sets=payload.sets,
        reps=payload.reps,
        order_index=payload.order_index,
    )
