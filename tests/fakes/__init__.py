"""
Fake Implementations for Testing.

This package provides in-memory fake implementations of every port for fast,
isolated testing. No database, event loop or device required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Factory functions for common test scenarios

Usage:
    from tests.fakes import FakeWorkoutRepository, make_exercise, make_workout_row

    repo = FakeWorkoutRepository()
    repo.seed([make_workout_row("w1", exercises=[make_exercise("ex1", sets=3)])])
"""
from typing import Any, Dict, List, Optional

from domain.models import Exercise, ExerciseType, Superset, SupersetType, WorkoutSet
from tests.fakes.runtime import (
    FakeClock,
    ImmediateScheduler,
    ManualScheduler,
    RecordingHaptics,
    StubConfirmationPrompt,
)
from tests.fakes.session_listener import RecordingSessionListener
from tests.fakes.workout_repository import FakeWorkoutRepository


# =============================================================================
# Factory Functions
# =============================================================================


def make_exercise(
    exercise_id: str,
    *,
    sets: int = 1,
    reps: Optional[str] = "10",
    duration: Optional[str] = None,
    weight: Optional[str] = "20",
    rest_time: str = "60",
    exercise_type: ExerciseType = ExerciseType.REPETITIONS,
    name: Optional[str] = None,
) -> Exercise:
    """
    Create an Exercise with `sets` identical sets.

    Timed exercises get `duration` (default "30") instead of reps.
    """
    if exercise_type == ExerciseType.TIME:
        template = WorkoutSet(duration=duration or "30", weight=weight)
    else:
        template = WorkoutSet(reps=reps, weight=weight)
    return Exercise(
        id=exercise_id,
        exercise_id=f"catalog-{exercise_id}",
        name=name or exercise_id.replace("_", " ").title(),
        sets=[template] * sets,
        rest_time=rest_time,
        exercise_type=exercise_type,
    )


def make_superset(
    superset_id: str,
    exercises: List[Exercise],
    *,
    superset_type: SupersetType = SupersetType.SUPERSET,
    rounds: int = 3,
    round_rest: str = "90",
    exercise_rest: Optional[str] = None,
    round_completed: Optional[List[bool]] = None,
) -> Superset:
    """Create a Superset whose exercises carry one representative set each."""
    return Superset(
        id=superset_id,
        name=superset_id.replace("_", " ").title(),
        type=superset_type,
        exercises=[ex.with_sets(ex.sets[:1]) for ex in exercises],
        total_rounds=rounds,
        round_completed=round_completed or [],
        rest_time_between_rounds=round_rest,
        rest_time_between_exercises=exercise_rest,
    )


def make_workout_row(
    workout_id: str,
    *,
    exercises: Optional[List[Exercise]] = None,
    supersets: Optional[List[Superset]] = None,
    date: str = "2026-10-16",
    completed: bool = False,
) -> Dict[str, Any]:
    """Create a workouts-table row holding a gym session payload."""
    return {
        "id": workout_id,
        "date": date,
        "sport": "gym",
        "name": f"Workout {workout_id}",
        "session": {
            "sport": "gym",
            "data": {
                "exercises": [
                    ex.model_dump(mode="json", by_alias=True) for ex in exercises or []
                ],
                "supersets": [
                    ss.model_dump(mode="json", by_alias=True) for ss in supersets or []
                ],
            },
        },
        "completed": completed,
        "created_at": "2026-10-16T08:00:00+00:00",
        "updated_at": "2026-10-16T08:00:00+00:00",
    }


def create_workout_repo(rows: Optional[List[Dict[str, Any]]] = None) -> FakeWorkoutRepository:
    """Create a FakeWorkoutRepository seeded with `rows`."""
    repo = FakeWorkoutRepository()
    if rows:
        repo.seed(rows)
    return repo


__all__ = [
    # Fakes
    "FakeWorkoutRepository",
    "RecordingSessionListener",
    "FakeClock",
    "ImmediateScheduler",
    "ManualScheduler",
    "RecordingHaptics",
    "StubConfirmationPrompt",
    # Factories
    "make_exercise",
    "make_superset",
    "make_workout_row",
    "create_workout_repo",
]
