"""
Infrastructure Database Layer.

Supabase-backed implementation of the WorkoutRepository port defined in
application.ports.

Usage:
    from supabase import create_client
    from infrastructure.db import SupabaseWorkoutRepository

    client = create_client(SUPABASE_URL, SUPABASE_KEY)
    workout_repo = SupabaseWorkoutRepository(client)

    # Or from engine settings (None when credentials are missing)
    from infrastructure.db import get_workout_repository
    workout_repo = get_workout_repository()
"""

from infrastructure.db.client import get_supabase_client, get_workout_repository
from infrastructure.db.workout_repository import SupabaseWorkoutRepository

__all__ = [
    "SupabaseWorkoutRepository",
    "get_supabase_client",
    "get_workout_repository",
]
