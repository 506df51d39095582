"""
Domain converters between external formats and the engine's models.

- session_to_lists / lists_to_session: Workout session payload <-> engine lists
- session_to_payload: engine lists -> JSON-ready payload
- db_row_to_workout / workout_to_db_row: database row <-> Workout record

All converters are pure functions with no side effects.

Examples:
    >>> from domain.converters import session_to_lists, session_to_payload

    >>> exercises, supersets = session_to_lists(workout.session)
    >>> payload = session_to_payload(exercises, supersets)
"""

from domain.converters.db_converters import db_row_to_workout, workout_to_db_row
from domain.converters.session_payload import (
    lists_to_session,
    session_to_lists,
    session_to_payload,
    workout_session_lists,
)

__all__ = [
    "session_to_lists",
    "lists_to_session",
    "session_to_payload",
    "workout_session_lists",
    "db_row_to_workout",
    "workout_to_db_row",
]
