"""
Converters: Database row format <-> domain Workout.

Database schema (workouts table):
- id: Text primary key
- date: Workout day (YYYY-MM-DD)
- sport: Sport identifier ("gym", "running", ...)
- name: Workout name
- session: JSONB (serialized session payload, camelCase keys)
- completed: Boolean
- created_at, updated_at, completed_at: Timestamps
- notes: Free text
- duration: Total minutes
- post_workout_data: JSONB {rpe, feeling, notes, timestamp}
"""

from datetime import datetime
from typing import Any, Dict, Optional

from domain.models import Workout


def _parse_datetime(value: Any) -> Optional[datetime]:
    """Parse datetime from various formats."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            if value.endswith("Z"):
                value = value[:-1] + "+00:00"
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def db_row_to_workout(row: Dict[str, Any]) -> Workout:
    """
    Convert a database row to a domain Workout.

    Args:
        row: Dictionary representing a row from the workouts table.

    Returns:
        Workout domain model.

    Raises:
        ValueError: If the row has no id or session.
        pydantic.ValidationError: If the session payload is malformed.

    Examples:
        >>> row = {
        ...     "id": "w1",
        ...     "date": "2026-10-16",
        ...     "sport": "gym",
        ...     "session": {"sport": "gym", "data": {"exercises": [], "supersets": []}},
        ... }
        >>> db_row_to_workout(row).id
        'w1'
    """
    if not row.get("id"):
        raise ValueError("Database row missing id")
    if row.get("session") is None:
        raise ValueError("Database row missing session")

    data: Dict[str, Any] = {
        "id": row["id"],
        "date": row.get("date"),
        "sport": row.get("sport") or "gym",
        "name": row.get("name"),
        "session": row["session"],
        "completed": bool(row.get("completed", False)),
        "notes": row.get("notes"),
        "duration": row.get("duration"),
        "post_workout_data": row.get("post_workout_data"),
        "completed_at": _parse_datetime(row.get("completed_at")),
    }
    # Let the model defaults fill in timestamps the store did not return
    for key in ("created_at", "updated_at"):
        parsed = _parse_datetime(row.get(key))
        if parsed is not None:
            data[key] = parsed

    return Workout.model_validate(data)


def workout_to_db_row(workout: Workout) -> Dict[str, Any]:
    """
    Convert a domain Workout to a database row.

    Args:
        workout: Workout to persist.

    Returns:
        JSON-ready dictionary matching the workouts table.
    """
    return {
        "id": workout.id,
        "date": workout.date,
        "sport": workout.sport.value,
        "name": workout.name,
        "session": workout.session.model_dump(mode="json", by_alias=True),
        "completed": workout.completed,
        "created_at": workout.created_at.isoformat(),
        "updated_at": workout.updated_at.isoformat(),
        "completed_at": workout.completed_at.isoformat() if workout.completed_at else None,
        "notes": workout.notes,
        "duration": workout.duration,
        "post_workout_data": (
            workout.post_workout_data.model_dump(mode="json")
            if workout.post_workout_data
            else None
        ),
    }
