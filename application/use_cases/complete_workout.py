"""
CompleteWorkout Use Case.

Finalizes a gym workout: writes the session state back into the Workout
record, marks it completed with optional post-workout intensity data, and
persists it.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from pydantic import ValidationError

from application.ports import WorkoutRepository
from domain.converters import db_row_to_workout, lists_to_session, workout_to_db_row
from domain.models import PostWorkoutData, Workout
from engine.core.gym_session import GymSession

logger = logging.getLogger(__name__)


@dataclass
class CompleteWorkoutResult:
    """Result of the CompleteWorkout use case execution."""

    success: bool
    workout: Optional[Workout] = None
    error: Optional[str] = None


class CompleteWorkoutUseCase:
    """
    Use case for completing a workout.

    Orchestrates the following workflow:
    1. Serialize the session's exercises and supersets into the record
    2. Set completed, completed_at, updated_at, duration and intensity data
    3. Persist the record
    4. Lock the session and notify its listener

    Skipping the intensity prompt completes the workout without
    post-workout data.

    Usage:
        >>> use_case = CompleteWorkoutUseCase(workout_repo=repo)
        >>> result = use_case.execute(
        ...     workout,
        ...     session,
        ...     post_workout=PostWorkoutData(rpe=7, feeling="good"),
        ... )
    """

    def __init__(self, workout_repo: WorkoutRepository) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            workout_repo: Repository for workout records
        """
        self._workout_repo = workout_repo

    def execute(
        self,
        workout: Workout,
        session: GymSession,
        post_workout: Optional[PostWorkoutData] = None,
        *,
        duration_minutes: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> CompleteWorkoutResult:
        """
        Complete and persist the workout.

        Args:
            workout: Stored workout record being completed
            session: Session holding the final exercise/superset state
            post_workout: Optional RPE/feeling data
            duration_minutes: Optional total duration
            now: Completion instant (defaults to the current UTC time)

        Returns:
            CompleteWorkoutResult with the persisted workout
        """
        if workout.completed:
            return CompleteWorkoutResult(
                success=False, workout=workout, error="Workout is already completed"
            )

        completed = workout.model_copy(
            update={"session": lists_to_session(session.exercises, session.supersets)}
        ).mark_completed(
            post_workout=post_workout,
            duration_minutes=duration_minutes,
            now=now,
        )

        saved = self._workout_repo.save(workout_to_db_row(completed))
        if saved is None:
            logger.error(f"Failed to persist completed workout {workout.id}")
            return CompleteWorkoutResult(success=False, error="Failed to save workout")

        try:
            stored = db_row_to_workout(saved)
        except (ValueError, ValidationError) as e:
            logger.warning(f"Store returned an unreadable row for {workout.id}: {e}")
            stored = completed

        session.complete_workout()
        logger.info(
            f"Completed workout {workout.id}"
            + (f" (RPE {post_workout.rpe})" if post_workout else " without intensity data")
        )
        return CompleteWorkoutResult(success=True, workout=stored)
