"""
Domain layer for the workout progression engine.

This package contains pure domain models and converters that are
independent of infrastructure concerns (storage, UI, timers).
"""

from domain.models import (
    CatalogExercise,
    Exercise,
    ExerciseType,
    ProgressionState,
    Station,
    Superset,
    SupersetType,
    Workout,
    WorkoutSet,
)

__all__ = [
    "CatalogExercise",
    "Exercise",
    "ExerciseType",
    "ProgressionState",
    "Station",
    "Superset",
    "SupersetType",
    "Workout",
    "WorkoutSet",
]
