from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session
from gymtracker.db import get_db
from gymtracker.models import Profile
from gymtracker.schemas.workout_session import SessionStart, SessionRead, SessionExerciseCreate, SessionExerciseRead
from gymtracker.repositories.workout_session_repo import WorkoutSessionRepository
from gymtracker.repositories.training_day_repo import TrainingDayRepository
from gymtracker.repositories.exercise_repo import ExerciseRepository
from gymtracker.deps.auth import get_current_profile

router = APIRouter(prefix="/sessions", tags=["sessions"])

def _owned_session(repo: WorkoutSessionRepository, session_id: int, current: Profile):
    sess = repo.get_owned(session_id, current.id)
    if not sess:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
    return sess

@router.post("", response_model=SessionRead, status_code=status.HTTP_201_CREATED)
def start_session(payload: SessionStart, db: Session = Depends(get_db), current: Profile = Depends(get_current_profile)):
    if not TrainingDayRepository(db).get_owned(payload.day_id, current.id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Training day not found")
    try:
        return WorkoutSessionRepository(db).start(current.id, payload.day_id)
    except ValueError as e:
        if str(e) == "session_already_open":
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="A session is already open for this day")
        raise

@router.get("", response_model=list[SessionRead])
def list_my_sessions(
    db: Session = Depends(get_db),
    current: Profile = Depends(get_current_profile),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
):
    return WorkoutSessionRepository(db).list_by_user(current.id, limit=limit, offset=offset)

@router.get("/open", response_model=SessionRead | None)
def open_session(
    day_id: int = Query(...),
    db: Session = Depends(get_db),
    current: Profile = Depends(get_current_profile),
):
    # null body when nothing is open: the "start" state
    return WorkoutSessionRepository(db).get_open(current.id, day_id)

@router.get("/{session_id}", response_model=SessionRead)
def get_session(session_id: int, db: Session = Depends(get_db), current: Profile = Depends(get_current_profile)):
    return _owned_session(WorkoutSessionRepository(db), session_id, current)

@router.post("/{session_id}/complete", response_model=SessionRead)
def complete_session(session_id: int, db: Session = Depends(get_db), current: Profile = Depends(get_current_profile)):
    repo = WorkoutSessionRepository(db)
    return repo.complete(_owned_session(repo, session_id, current))

@router.post("/{session_id}/exercises", response_model=list[SessionExerciseRead], status_code=status.HTTP_201_CREATED)
def add_session_exercises(
    session_id: int,
    payload: list[SessionExerciseCreate],
    db: Session = Depends(get_db),
    current: Profile = Depends(get_current_profile),
):
    repo = WorkoutSessionRepository(db)
    sess = _owned_session(repo, session_id, current)
    if not payload:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No exercises to save")

    wanted = list(dict.fromkeys(item.exercise_id for item in payload))
    owned = {ex.id for ex in ExerciseRepository(db).list_owned(wanted, current.id)}
    if owned != set(wanted):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exercise not found")

    return repo.add_exercises(sess.id, (item.model_dump() for item in payload))

@router.get("/{session_id}/exercises", response_model=list[SessionExerciseRead])
def list_session_exercises(session_id: int, db: Session = Depends(get_db), current: Profile = Depends(get_current_profile)):
    repo = WorkoutSessionRepository(db)
    return repo.list_exercises(_owned_session(repo, session_id, current).id)
