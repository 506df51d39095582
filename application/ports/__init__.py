"""
Interfaces (Ports) for the workout progression engine.

This package defines abstract interfaces that decouple the engine from its
host: the UI observing the session, the event loop driving time, and the
external workout store. Implementations are provided by the host, by
`engine.core.runtime` (defaults) and by `infrastructure/` (storage).

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the engine needs)
- Adapters: Concrete implementations elsewhere (how it's provided)

Usage:
    from application.ports import SessionListener, WorkoutRepository

    class CompleteWorkoutUseCase:
        def __init__(self, workout_repo: WorkoutRepository):
            self._workout_repo = workout_repo
"""

# Session observation
from application.ports.session_listener import SessionListener

# Runtime services
from application.ports.runtime import (
    Clock,
    ConfirmationPrompt,
    Haptics,
    Scheduler,
    VibrationPattern,
)

# Workout persistence
from application.ports.workout_repository import WorkoutRepository

__all__ = [
    # Session
    "SessionListener",
    # Runtime
    "Clock",
    "Scheduler",
    "Haptics",
    "ConfirmationPrompt",
    "VibrationPattern",
    # Persistence
    "WorkoutRepository",
]
