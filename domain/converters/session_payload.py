"""
Converters: Workout `session` payload <-> engine exercise/superset lists.

The payload keeps the mobile app's camelCase keys:

    {
        "sport": "gym",
        "data": {
            "exercises": [{"id": ..., "exerciseId": ..., "sets": [...], ...}],
            "supersets": [{"id": ..., "totalRounds": 3, "roundCompleted": [...], ...}]
        }
    }

Older records stored the exercise list directly under "data"; those are read
with an empty superset list.
"""

import logging
from typing import Any, Dict, List, Tuple, Union

from domain.models import Exercise, GymSportSession, Superset, Workout

logger = logging.getLogger(__name__)


def session_to_lists(
    session: Union[GymSportSession, Dict[str, Any]],
) -> Tuple[List[Exercise], List[Superset]]:
    """
    Extract the standalone exercises and supersets from a gym session payload.

    Args:
        session: Parsed GymSportSession or raw payload dict.

    Returns:
        Tuple of (exercises, supersets) in stored order.

    Raises:
        ValueError: If the payload is not a gym session.
        pydantic.ValidationError: If the payload is malformed.
    """
    if isinstance(session, dict):
        sport = session.get("sport", "gym")
        if sport != "gym":
            raise ValueError(f"Expected a gym session payload, got sport={sport!r}")
        session = GymSportSession.model_validate(session)

    exercises = list(session.data.exercises)
    supersets = list(session.data.supersets)

    # A superset member must not also be listed as standalone
    grouped = {ex_id for ss in supersets for ex_id in ss.exercise_ids}
    duplicated = [ex.id for ex in exercises if ex.id in grouped]
    if duplicated:
        logger.warning(
            f"Dropping {len(duplicated)} standalone exercise(s) already grouped in a superset: {duplicated}"
        )
        exercises = [ex for ex in exercises if ex.id not in grouped]

    return exercises, supersets


def lists_to_session(
    exercises: List[Exercise],
    supersets: List[Superset],
) -> GymSportSession:
    """
    Build a gym session payload from the engine's lists.

    Args:
        exercises: Standalone exercises
        supersets: Supersets in creation order

    Returns:
        GymSportSession ready to be attached to a Workout.
    """
    return GymSportSession.model_validate(
        {"sport": "gym", "data": {"exercises": list(exercises), "supersets": list(supersets)}}
    )


def session_to_payload(exercises: List[Exercise], supersets: List[Superset]) -> Dict[str, Any]:
    """
    Serialize the engine's lists into the JSON-ready session payload.

    Returns:
        Dict with camelCase keys, suitable for the external store.
    """
    return lists_to_session(exercises, supersets).model_dump(mode="json", by_alias=True)


def workout_session_lists(workout: Workout) -> Tuple[List[Exercise], List[Superset]]:
    """
    Extract exercise/superset lists from a Workout record.

    Raises:
        ValueError: If the workout is not a gym workout.
    """
    if not isinstance(workout.session, GymSportSession):
        raise ValueError(f"Workout {workout.id} is not a gym workout")
    return session_to_lists(workout.session)
