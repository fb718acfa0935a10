from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from gymtracker.db import get_db
from gymtracker.models import Profile
from gymtracker.schemas.exercise import ExerciseUpdate, ExerciseRead
from gymtracker.repositories.exercise_repo import ExerciseRepository
from gymtracker.deps.auth import get_current_profile

router = APIRouter(prefix="/exercises", tags=["exercises"])

def owned_exercise(exercise_id: int, db: Session, current: Profile):
    ex = ExerciseRepository(db).get_owned(exercise_id, current.id)
    if not ex:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")
    return ex

@router.get("/{exercise_id}", response_model=ExerciseRead)
def get_exercise(exercise_id: int, db: Session = Depends(get_db), current: Profile = Depends(get_current_profile)):
    return owned_exercise(exercise_id, db, current)

@router.patch("/{exercise_id}", response_model=ExerciseRead)
def update_exercise(
    exercise_id: int,
    payload: ExerciseUpdate,
    db: Session = Depends(get_db),
    current: Profile = Depends(get_current_profile),
):
    ex = owned_exercise(exercise_id, db, current)
    return ExerciseRepository(db).update(ex, **payload.model_dump(exclude_unset=True))

@router.delete("/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_exercise(exercise_id: int, db: Session = Depends(get_db), current: Profile = Depends(get_current_profile)):
    ExerciseRepository(db).delete(owned_exercise(exercise_id, db, current))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
