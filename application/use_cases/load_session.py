"""
LoadSession Use Case.

Fetches a stored Workout record and opens its gym payload as an editable
GymSession.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from application.ports import (
    Clock,
    ConfirmationPrompt,
    Haptics,
    Scheduler,
    SessionListener,
    WorkoutRepository,
)
from domain.converters import db_row_to_workout, workout_session_lists
from domain.models import Workout
from engine.core.gym_session import GymSession
from engine.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class LoadSessionResult:
    """Result of the LoadSession use case execution."""

    success: bool
    workout: Optional[Workout] = None
    session: Optional[GymSession] = None
    error: Optional[str] = None


class LoadSessionUseCase:
    """
    Use case for opening a stored gym workout.

    Orchestrates the following workflow:
    1. Fetch the workout row from the repository
    2. Convert the row to a Workout record
    3. Extract the exercise and superset lists from its session payload
    4. Build a GymSession (locked when the workout is already completed)

    Usage:
        >>> use_case = LoadSessionUseCase(workout_repo=repo)
        >>> result = use_case.execute("workout-123", listener=ui)
        >>> if result.success:
        ...     controller = result.session.start_active_workout()
    """

    def __init__(
        self,
        workout_repo: WorkoutRepository,
        *,
        settings: Optional[Settings] = None,
        clock: Optional[Clock] = None,
        scheduler: Optional[Scheduler] = None,
        haptics: Optional[Haptics] = None,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            workout_repo: Repository for workout records
            settings: Engine settings passed to the session
            clock: Timer clock passed to the session
            scheduler: Auto-advance scheduler passed to the session
            haptics: Vibration adapter passed to the session
        """
        self._workout_repo = workout_repo
        self._settings = settings
        self._clock = clock
        self._scheduler = scheduler
        self._haptics = haptics

    def execute(
        self,
        workout_id: str,
        *,
        listener: Optional[SessionListener] = None,
        confirm: Optional[ConfirmationPrompt] = None,
    ) -> LoadSessionResult:
        """
        Load a workout and open its session.

        Args:
            workout_id: Id of the stored workout
            listener: Observer attached to the new session
            confirm: Prompt for destructive actions

        Returns:
            LoadSessionResult with the workout and its session
        """
        row = self._workout_repo.get(workout_id)
        if row is None:
            logger.info(f"Workout not found: {workout_id}")
            return LoadSessionResult(success=False, error=f"Workout {workout_id} not found")

        try:
            workout = db_row_to_workout(row)
            exercises, supersets = workout_session_lists(workout)
        except (ValueError, ValidationError) as e:
            logger.warning(f"Cannot open workout {workout_id}: {e}")
            return LoadSessionResult(success=False, error=str(e))

        session = GymSession(
            exercises,
            supersets,
            listener=listener,
            confirm=confirm,
            clock=self._clock,
            scheduler=self._scheduler,
            haptics=self._haptics,
            settings=self._settings,
            completed=workout.completed,
        )
        logger.info(
            f"Opened workout {workout_id}: {len(exercises)} exercises, {len(supersets)} supersets"
        )
        return LoadSessionResult(success=True, workout=workout, session=session)
