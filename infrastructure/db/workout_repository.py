"""
Supabase implementation of WorkoutRepository.

Stores Workout records (with their gym session payload) in a Supabase table.
The client is injected via constructor for testability.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from supabase import Client

logger = logging.getLogger(__name__)


class SupabaseWorkoutRepository:
    """
    Supabase implementation of WorkoutRepository protocol.

    All Supabase query logic for workout records is encapsulated here.
    Failures are logged and reported as None/False/[] to the caller.
    """

    def __init__(self, client: Client, table: str = "workouts"):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
            table: Name of the workouts table
        """
        self._client = client
        self._table = table

    def save(self, row: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Upsert a workout row by id."""
        try:
            data = dict(row)
            data.setdefault("updated_at", datetime.now(timezone.utc).isoformat())
            result = self._client.table(self._table).upsert(data, on_conflict="id").execute()

            if result.data and len(result.data) > 0:
                logger.info(f"Workout saved: {data.get('id')}")
                return result.data[0]
            return None
        except Exception as e:
            error_msg = str(e)
            logger.error(f"Failed to save workout {row.get('id')}: {e}")
            if "PGRST" in error_msg or "permission" in error_msg.lower() or "row-level security" in error_msg.lower():
                logger.error("RLS/Permissions error: Consider using SUPABASE_SERVICE_ROLE_KEY instead of SUPABASE_ANON_KEY")
            return None

    def get(self, workout_id: str) -> Optional[Dict[str, Any]]:
        """Get a single workout by ID."""
        try:
            result = self._client.table(self._table).select("*").eq("id", workout_id).single().execute()
            return result.data if result.data else None
        except Exception as e:
            logger.error(f"Failed to get workout {workout_id}: {e}")
            return None

    def list_by_date(self, date: str) -> List[Dict[str, Any]]:
        """Get the workouts of one day, oldest first."""
        try:
            result = (
                self._client.table(self._table)
                .select("*")
                .eq("date", date)
                .order("created_at")
                .execute()
            )
            return result.data if result.data else []
        except Exception as e:
            logger.error(f"Failed to list workouts for {date}: {e}")
            return []

    def delete(self, workout_id: str) -> bool:
        """Delete a workout by ID."""
        try:
            result = self._client.table(self._table).delete().eq("id", workout_id).execute()
            deleted = bool(result.data)
            if deleted:
                logger.info(f"Workout deleted: {workout_id}")
            return deleted
        except Exception as e:
            logger.error(f"Failed to delete workout {workout_id}: {e}")
            return False
