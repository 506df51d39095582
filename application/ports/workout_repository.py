"""
Workout Repository Interface (Port).

This module defines the abstract interface of the external workout store.
The engine itself owns no storage; use cases load and save Workout records
through this protocol. Implementations may use Supabase, in-memory storage,
or other backends.
"""
from typing import Any, Dict, List, Optional, Protocol


class WorkoutRepository(Protocol):
    """
    Abstract interface for workout record persistence.

    Rows are plain dicts shaped like `domain.converters.workout_to_db_row`
    output, keyed by workout id.
    """

    def save(self, row: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Insert or update a workout record (upsert by id).

        Args:
            row: Workout row with at least id, date, sport and session

        Returns:
            The stored row, or None on failure
        """
        ...

    def get(self, workout_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a workout record by id.

        Args:
            workout_id: Workout id

        Returns:
            The row if found, None otherwise
        """
        ...

    def list_by_date(self, date: str) -> List[Dict[str, Any]]:
        """
        List workouts planned or logged for a day.

        Args:
            date: Day in YYYY-MM-DD format

        Returns:
            Rows for that day, ordered by creation time
        """
        ...

    def delete(self, workout_id: str) -> bool:
        """
        Delete a workout record.

        Args:
            workout_id: Workout id

        Returns:
            True if a row was deleted, False otherwise
        """
        ...
