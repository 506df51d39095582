"""
Station sequencer: flatten a workout into its ordered traversal.

Traversal order is every standalone exercise (list order) followed by every
superset (creation order). Exercises grouped in a superset never appear as
standalone stations.
"""
from typing import List, Optional, Sequence

from domain.models import Exercise, ExerciseStation, Station, Superset, SupersetStation


def grouped_exercise_ids(supersets: Sequence[Superset]) -> set:
    """Instance ids of every exercise that belongs to a superset."""
    return {ex.id for superset in supersets for ex in superset.exercises}


def standalone_exercises(
    exercises: Sequence[Exercise],
    supersets: Sequence[Superset],
) -> List[Exercise]:
    """
    Filter out exercises that are members of a superset.

    Args:
        exercises: Session exercise list
        supersets: Session superset list

    Returns:
        Exercises not referenced by any superset, in their original order.
    """
    grouped = grouped_exercise_ids(supersets)
    return [ex for ex in exercises if ex.id not in grouped]


def build_stations(
    exercises: Sequence[Exercise],
    supersets: Sequence[Superset],
) -> List[Station]:
    """
    Build the ordered station list of a workout.

    Pure function; call it again after every mutation instead of caching
    the result.

    Args:
        exercises: Session exercise list
        supersets: Session superset list, in creation order

    Returns:
        Standalone exercise stations followed by superset stations.
    """
    stations: List[Station] = [
        ExerciseStation(data=ex) for ex in standalone_exercises(exercises, supersets)
    ]
    stations.extend(SupersetStation(data=ss) for ss in supersets)
    return stations


def find_station_index(stations: Sequence[Station], key: str) -> Optional[int]:
    """
    Locate a station by exercise or superset id.

    Returns:
        Index of the station, or None if no station has that id.
    """
    for idx, station in enumerate(stations):
        if station.key == key:
            return idx
    return None
