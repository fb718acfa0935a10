from gymtracker.models.profile import Profile
from gymtracker.models.training_day import TrainingDay
from gymtracker.models.exercise import Exercise
from gymtracker.models.progress import ProgressEntry
from gymtracker.models.workout_session import WorkoutSession
from gymtracker.models.session_exercise import SessionExercise

__all__ = [
    "Profile",
    "TrainingDay",
    "Exercise",
    "ProgressEntry",
    "WorkoutSession",
    "SessionExercise",
]
