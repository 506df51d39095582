"""
Application Use Cases for the workout progression engine.

Use cases orchestrate domain models, the engine and repository ports:
- Dependencies are injected via constructors for testability
- Results are returned as dataclasses with success/error fields

Usage:
    from application.use_cases import LoadSessionUseCase, CompleteWorkoutUseCase

    loaded = LoadSessionUseCase(workout_repo=repo).execute("workout-123")
    if loaded.success:
        controller = loaded.session.start_active_workout()
        ...
        CompleteWorkoutUseCase(workout_repo=repo).execute(
            loaded.workout, loaded.session
        )
"""

from application.use_cases.complete_workout import (
    CompleteWorkoutResult,
    CompleteWorkoutUseCase,
)
from application.use_cases.load_session import LoadSessionResult, LoadSessionUseCase

__all__ = [
    "LoadSessionUseCase",
    "LoadSessionResult",
    "CompleteWorkoutUseCase",
    "CompleteWorkoutResult",
]
