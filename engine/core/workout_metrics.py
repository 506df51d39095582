"""
Workout metrics.

Pure helpers computing volume, duration and records from exercises and
supersets, plus small formatting/id helpers shared by the engine.
"""
import time
import uuid
from typing import Optional

from domain.models import Exercise, ExerciseType, Superset

# Seconds per rep used to estimate rep-based work
SECONDS_PER_REP = 2.5


def calculate_exercise_volume(exercise: Exercise) -> float:
    """
    Total volume (reps x weight) over completed sets.

    Sets without reps or weight contribute 0.

    Args:
        exercise: Exercise to measure

    Returns:
        Volume in weight units x reps.
    """
    return exercise.volume


def calculate_exercise_duration(exercise: Exercise) -> int:
    """
    Total seconds spent on a timed exercise.

    Uses the measured duration when the exercise timer recorded one, the
    configured duration otherwise. Non-timed exercises return 0.
    """
    return exercise.total_duration


def get_exercise_max_weight(exercise: Exercise) -> float:
    """Heaviest weight used in a completed set (0 if none)."""
    return exercise.max_weight


def calculate_superset_duration(superset: Superset) -> float:
    """
    Estimate the total duration of a superset in seconds.

    - timed exercises: configured duration per round
    - rep exercises: SECONDS_PER_REP per configured rep per round
    - rest between exercises: (exercises - 1) per round, when configured
    - rest between rounds: (rounds - 1), when there is more than one round

    Args:
        superset: Superset to estimate

    Returns:
        Estimated seconds.
    """
    rounds = superset.total_rounds
    total = 0.0

    for exercise in superset.exercises:
        template = exercise.sets[0] if exercise.sets else None
        if template is None:
            continue
        if exercise.exercise_type == ExerciseType.TIME:
            total += (template.duration_value or 0) * rounds
        else:
            total += (template.reps_value or 0) * SECONDS_PER_REP * rounds

    exercise_rest = superset.exercise_rest_seconds
    if exercise_rest > 0:
        total += (len(superset.exercises) - 1) * exercise_rest * rounds

    if rounds > 1:
        total += (rounds - 1) * superset.round_rest_seconds

    return total


def format_time(seconds: int) -> str:
    """
    Format seconds as M:SS.

    Examples:
        >>> format_time(75)
        '1:15'
        >>> format_time(5)
        '0:05'
    """
    seconds = max(int(seconds), 0)
    return f"{seconds // 60}:{seconds % 60:02d}"


def generate_id(prefix: str = "id", now: Optional[float] = None) -> str:
    """
    Generate a unique id such as 'gym_ex_1760600000000_3f9a2c1b7'.

    Args:
        prefix: Id prefix
        now: Timestamp in seconds (defaults to the current time)
    """
    millis = int((now if now is not None else time.time()) * 1000)
    return f"{prefix}_{millis}_{uuid.uuid4().hex[:9]}"
