"""
Progress calculator.

Derives completion predicates and percentages from the current model state.
Everything here is a pure function of its arguments.

Session progress counts a superset round as one set per member exercise:

    total     = sum(len(ex.sets) for standalone)
              + sum(ss.total_rounds * len(ss.exercises) for supersets)
    completed = sum(completed sets of standalone)
              + sum(completed_rounds * len(ss.exercises) for supersets)

The same weighting is used for the session summary (WorkoutStats) so the
header and the active session always agree.
"""
import logging
from dataclasses import dataclass
from typing import Sequence

from domain.models import Exercise, Superset, is_set_complete
from engine.core.station_sequencer import standalone_exercises

logger = logging.getLogger(__name__)

__all__ = [
    "is_set_complete",
    "is_superset_complete",
    "get_superset_progress",
    "calculate_progress",
    "calculate_workout_stats",
    "WorkoutStats",
]


def is_superset_complete(superset: Superset) -> bool:
    """
    Check whether a superset is fully done.

    Both conditions are required:
    - every exercise has sets and every set has a valid value for its type
    - every round is flagged as completed

    Args:
        superset: Superset to check

    Returns:
        True only if configuration and rounds are both complete.
    """
    all_configured = all(
        len(ex.sets) > 0
        and all(is_set_complete(s, ex.exercise_type) for s in ex.sets)
        for ex in superset.exercises
    )
    all_rounds_done = all(superset.round_completed)
    return all_configured and all_rounds_done


def get_superset_progress(superset: Superset) -> float:
    """
    Percentage of completed rounds.

    Example:
        5 rounds with [True, True, False, False, False] -> 40.0

    Returns:
        0-100; 0 when the superset has no rounds.
    """
    if superset.total_rounds <= 0:
        return 0.0
    return superset.completed_rounds / superset.total_rounds * 100


def _counts(exercises: Sequence[Exercise], supersets: Sequence[Superset]) -> tuple:
    total = 0
    completed = 0
    for ex in standalone_exercises(exercises, supersets):
        total += len(ex.sets)
        completed += ex.completed_sets
    for ss in supersets:
        total += ss.total_rounds * len(ss.exercises)
        completed += ss.completed_rounds * len(ss.exercises)
    return total, completed


def calculate_progress(exercises: Sequence[Exercise], supersets: Sequence[Superset]) -> float:
    """
    Whole-session completion percentage.

    Args:
        exercises: Session exercise list (superset members are ignored)
        supersets: Session superset list

    Returns:
        0-100; 0 when the session has no sets.
    """
    total, completed = _counts(exercises, supersets)
    return completed / total * 100 if total > 0 else 0.0


@dataclass
class WorkoutStats:
    """Summary shown above the workout."""

    total_exercises: int
    total_supersets: int
    total_sets: int
    completed_sets: int
    progress_percentage: float


def calculate_workout_stats(
    exercises: Sequence[Exercise],
    supersets: Sequence[Superset],
) -> WorkoutStats:
    """Summarize a workout for its header."""
    total, completed = _counts(exercises, supersets)
    return WorkoutStats(
        total_exercises=len(standalone_exercises(exercises, supersets)),
        total_supersets=len(supersets),
        total_sets=total,
        completed_sets=completed,
        progress_percentage=completed / total * 100 if total > 0 else 0.0,
    )
