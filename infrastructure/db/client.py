"""
Supabase client and repository wiring from engine settings.
"""
import logging
from typing import Optional

from supabase import Client, create_client

from engine.settings import Settings, get_settings
from infrastructure.db.workout_repository import SupabaseWorkoutRepository

logger = logging.getLogger(__name__)


def get_supabase_client(settings: Optional[Settings] = None) -> Optional[Client]:
    """
    Create a Supabase client from settings.

    Returns:
        Client instance, or None if credentials are not configured
    """
    settings = settings or get_settings()
    if not settings.supabase_url or not settings.supabase_key:
        logger.debug("Supabase credentials not configured")
        return None
    return create_client(settings.supabase_url, settings.supabase_key)


def get_workout_repository(settings: Optional[Settings] = None) -> Optional[SupabaseWorkoutRepository]:
    """Workout repository bound to the configured table, or None without credentials."""
    settings = settings or get_settings()
    client = get_supabase_client(settings)
    if client is None:
        return None
    return SupabaseWorkoutRepository(client, table=settings.workouts_table)
