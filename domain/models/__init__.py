"""
Domain models for the workout progression engine.

These models are pure value objects and entities, independent of storage
and presentation:
- WorkoutSet: one unit of work (reps, duration or distance)
- Exercise: an exercise instance with its ordered sets
- Superset: a group of exercises repeated for rounds
- Station: one step of the workout traversal (exercise or superset)
- ProgressionState: where the user is inside the traversal
- Workout: the record persisted by the external store

Usage:
    >>> from domain.models import Exercise, WorkoutSet

    >>> exercise = Exercise(
    ...     id="gym_ex_1",
    ...     name="Squat",
    ...     sets=[WorkoutSet(reps="5", weight="100")],
    ... )

    >>> # Serialize with the mobile app's camelCase keys
    >>> exercise.model_dump(by_alias=True)
"""

from domain.models.exercise import DEFAULT_REST_SECONDS, CatalogExercise, Exercise
from domain.models.progression import ProgressionState, RestContext, RestEvent
from domain.models.station import ExerciseStation, Station, SupersetStation
from domain.models.superset import (
    DEFAULT_ROUND_REST_SECONDS,
    SUPERSET_TYPE_CONFIG,
    Superset,
    SupersetType,
    SupersetTypeConfig,
)
from domain.models.workout import (
    RPE_LABELS,
    Feeling,
    GymSessionData,
    GymSportSession,
    OtherSportSession,
    PostWorkoutData,
    Sport,
    SportSession,
    Workout,
)
from domain.models.workout_set import (
    ExerciseType,
    WorkoutSet,
    create_empty_set,
    is_set_complete,
)

__all__ = [
    # Main entities
    "Workout",
    "Exercise",
    "CatalogExercise",
    "Superset",
    "WorkoutSet",
    "PostWorkoutData",
    # Session payload
    "SportSession",
    "GymSportSession",
    "OtherSportSession",
    "GymSessionData",
    # Traversal
    "Station",
    "ExerciseStation",
    "SupersetStation",
    "ProgressionState",
    "RestEvent",
    # Enums and config
    "ExerciseType",
    "SupersetType",
    "SupersetTypeConfig",
    "SUPERSET_TYPE_CONFIG",
    "RestContext",
    "Sport",
    "Feeling",
    "RPE_LABELS",
    "DEFAULT_REST_SECONDS",
    "DEFAULT_ROUND_REST_SECONDS",
    # Helpers
    "create_empty_set",
    "is_set_complete",
]
