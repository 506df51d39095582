"""
Infrastructure Layer of the workout progression engine.

This package contains concrete implementations of the ports:
- db/: Supabase workout store
"""

from infrastructure.db import SupabaseWorkoutRepository, get_workout_repository

__all__ = [
    "SupabaseWorkoutRepository",
    "get_workout_repository",
]
