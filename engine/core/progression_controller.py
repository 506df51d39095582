"""
Progression controller.

Drives a workout session through its stations:

    (station_index, exercise_in_superset, set_index, round)

starting at (0, 0, 0, 1). Completing a set marks it, flags superset rounds,
and schedules an auto-advance through the Scheduler port after a short
delay. The next-state computation itself is synchronous and deterministic.

The controller owns copies of the exercise and superset lists. Every
mutation replaces the touched model (models are frozen) and is published to
the SessionListener. Stations are rebuilt from the lists on every access.
"""
import logging
from typing import Any, List, Optional, Sequence

from application.ports import Clock, Haptics, Scheduler, SessionListener
from domain.models import (
    Exercise,
    ExerciseStation,
    ProgressionState,
    RestContext,
    RestEvent,
    Station,
    Superset,
    SupersetStation,
    WorkoutSet,
    is_set_complete,
)
from engine.core import haptic_patterns
from engine.core.progress import calculate_progress
from engine.core.station_sequencer import build_stations
from engine.core.timers import ExerciseTimer, TimerCoordinator

logger = logging.getLogger(__name__)

DEFAULT_AUTO_ADVANCE_DELAY_SECONDS = 0.3

_SET_FIELDS = ("reps", "weight", "duration", "distance", "completed", "actual_duration", "notes")


class ProgressionController:
    """
    State machine of an active workout session.

    Invalid input (incomplete set, out-of-bounds navigation) is rejected by
    returning False; nothing in here raises on user input.

    Usage:
        >>> controller = ProgressionController(
        ...     exercises, supersets,
        ...     listener=listener, scheduler=scheduler,
        ...     clock=clock, haptics=haptics,
        ... )
        >>> controller.update_current_set("reps", "10")
        >>> controller.complete_current_set()
        True
    """

    def __init__(
        self,
        exercises: Sequence[Exercise],
        supersets: Sequence[Superset],
        *,
        listener: SessionListener,
        scheduler: Scheduler,
        clock: Clock,
        haptics: Haptics,
        timers: Optional[TimerCoordinator] = None,
        auto_advance_delay_seconds: float = DEFAULT_AUTO_ADVANCE_DELAY_SECONDS,
    ):
        self.exercises: List[Exercise] = list(exercises)
        self.supersets: List[Superset] = list(supersets)
        self._listener = listener
        self._scheduler = scheduler
        self._clock = clock
        self._haptics = haptics
        self.timers = timers or TimerCoordinator(clock, haptics)
        self.auto_advance_delay_seconds = auto_advance_delay_seconds

        self.state = ProgressionState.initial()
        self.finished = False
        self.rest_events: List[RestEvent] = []
        self._advance_pending = False
        self._advance_generation = 0

    # =========================================================================
    # Derived views
    # =========================================================================

    @property
    def stations(self) -> List[Station]:
        return build_stations(self.exercises, self.supersets)

    @property
    def current_station(self) -> Optional[Station]:
        stations = self.stations
        if 0 <= self.state.station_index < len(stations):
            return stations[self.state.station_index]
        return None

    @property
    def current_exercise(self) -> Optional[Exercise]:
        station = self.current_station
        if station is None:
            return None
        if isinstance(station, SupersetStation):
            exercises = station.data.exercises
            idx = self.state.exercise_in_superset
            return exercises[idx] if idx < len(exercises) else None
        return station.data

    @property
    def current_set(self) -> Optional[WorkoutSet]:
        """Active set; index 0 of the active exercise inside a superset."""
        exercise = self.current_exercise
        if exercise is None:
            return None
        set_index = 0 if self._on_superset() else self.state.set_index
        return exercise.sets[set_index] if set_index < len(exercise.sets) else None

    @property
    def progress(self) -> float:
        return calculate_progress(self.exercises, self.supersets)

    def _on_superset(self) -> bool:
        return isinstance(self.current_station, SupersetStation)

    def _superset_index(self, superset_id: str) -> int:
        return next(i for i, ss in enumerate(self.supersets) if ss.id == superset_id)

    # =========================================================================
    # Mutation
    # =========================================================================

    def _write_set(self, workout_set: WorkoutSet) -> None:
        """Replace the active set and publish the change."""
        station = self.current_station
        if isinstance(station, SupersetStation):
            ss_idx = self._superset_index(station.data.id)
            superset = self.supersets[ss_idx]
            ex_idx = self.state.exercise_in_superset
            exercise = superset.exercises[ex_idx].with_set(0, workout_set)
            self.supersets[ss_idx] = superset.with_exercise(ex_idx, exercise)
            self._listener.on_update_superset(ss_idx, self.supersets[ss_idx])
        else:
            exercise_id = station.data.id
            self.exercises = [
                ex.with_set(self.state.set_index, workout_set) if ex.id == exercise_id else ex
                for ex in self.exercises
            ]
            self._listener.on_update_exercises(list(self.exercises))

    def update_current_set(self, field_name: str, value: Any) -> bool:
        """
        Write a field of the active set.

        Args:
            field_name: One of reps, weight, duration, distance, completed,
                actual_duration, notes
            value: New value (validated by WorkoutSet)

        Returns:
            False when there is no active set or the field is unknown.
        """
        current = self.current_set
        if current is None or field_name not in _SET_FIELDS:
            return False
        data = current.model_dump()
        data[field_name] = value
        self._write_set(WorkoutSet.model_validate(data))
        return True

    def complete_current_set(self) -> bool:
        """
        Mark the active set as completed and schedule the auto-advance.

        Returns:
            False if the set was rejected (no active set, set without a
            valid value, session finished, or an advance already pending).
        """
        exercise = self.current_exercise
        current = self.current_set
        if self.finished or self._advance_pending or exercise is None or current is None:
            return False

        if not is_set_complete(current, exercise.exercise_type):
            logger.debug(f"Rejected incomplete set of '{exercise.name}'")
            self._haptics.vibrate(haptic_patterns.REJECTED)
            return False

        self._write_set(current.model_copy(update={"completed": True}))
        self._haptics.vibrate(haptic_patterns.TAP)

        station = self.current_station
        if isinstance(station, SupersetStation):
            superset = station.data
            if self.state.exercise_in_superset == len(superset.exercises) - 1:
                ss_idx = self._superset_index(superset.id)
                self.supersets[ss_idx] = superset.mark_round_completed(self.state.round)
                self._listener.on_update_superset(ss_idx, self.supersets[ss_idx])
                self._haptics.vibrate(haptic_patterns.ROUND_COMPLETED)
                logger.debug(f"'{superset.name}' round {self.state.round} completed")

        self._advance_pending = True
        generation = self._advance_generation

        def advance() -> None:
            if generation != self._advance_generation:
                logger.debug("Dropped stale auto-advance")
                return
            self.auto_navigate_after_complete()

        self._scheduler.call_later(self.auto_advance_delay_seconds, advance)
        return True

    def cancel_pending_advance(self) -> None:
        """Invalidate any auto-advance scheduled by complete_current_set()."""
        self._advance_generation += 1
        self._advance_pending = False

    # =========================================================================
    # Navigation
    # =========================================================================

    def auto_navigate_after_complete(self) -> None:
        """Compute the next state after a completed set."""
        self._advance_pending = False
        station = self.current_station
        if station is None:
            return

        state = self.state
        if isinstance(station, SupersetStation):
            superset = station.data
            if state.exercise_in_superset < len(superset.exercises) - 1:
                self.state = state.model_copy(
                    update={"exercise_in_superset": state.exercise_in_superset + 1}
                )
                if superset.config.has_exercise_rest and superset.exercise_rest_seconds > 0:
                    self._start_rest(superset.exercise_rest_seconds, RestContext.EXERCISE)
            elif state.round < superset.total_rounds:
                self.state = state.model_copy(
                    update={"round": state.round + 1, "exercise_in_superset": 0}
                )
                self._start_rest(superset.round_rest_seconds, RestContext.ROUND)
            else:
                self._advance_station()
        else:
            exercise = station.data
            if state.set_index < len(exercise.sets) - 1:
                self.state = state.model_copy(update={"set_index": state.set_index + 1})
                self._start_rest(exercise.rest_seconds, RestContext.SET)
            else:
                self._advance_station()

    def _advance_station(self) -> None:
        stations = self.stations
        if self.state.station_index < len(stations) - 1:
            self.state = self.state.at_station(self.state.station_index + 1)
            logger.info(f"Advanced to station {self.state.station_index + 1}/{len(stations)}")
        else:
            self._finish()

    def _finish(self) -> None:
        self.finished = True
        self._haptics.vibrate(haptic_patterns.WORKOUT_FINISHED)
        logger.info(f"Workout finished at {self.progress:.0f}%")

    def navigate_to_previous_station(self) -> bool:
        if self.state.station_index <= 0:
            return False
        self.cancel_pending_advance()
        self.state = self.state.at_station(self.state.station_index - 1)
        return True

    def navigate_to_next_station(self) -> bool:
        if self.state.station_index >= len(self.stations) - 1:
            return False
        self.cancel_pending_advance()
        self.state = self.state.at_station(self.state.station_index + 1)
        return True

    def reset(self) -> None:
        """
        Return to a valid state after the station list changed.

        Keeps the current station when it still exists, otherwise clamps to
        the last station. Position inside the station is reset.
        """
        count = len(self.stations)
        index = min(self.state.station_index, max(count - 1, 0))
        self.state = ProgressionState.initial().at_station(index)
        self.finished = False
        self.cancel_pending_advance()
        self.timers.cancel_rest()

    # =========================================================================
    # Rest and exercise timers
    # =========================================================================

    def _start_rest(self, duration_seconds: int, context: RestContext) -> None:
        event = RestEvent(duration_seconds=duration_seconds, context=context)
        self.rest_events.append(event)
        logger.debug(f"{context.label}: {duration_seconds}s")
        self.timers.start_rest(duration_seconds, context)
        self._listener.on_start_rest_timer(duration_seconds, context)

    def skip_rest(self) -> bool:
        return self.timers.cancel_rest()

    def start_exercise_timer(self) -> Optional[ExerciseTimer]:
        """
        Start the stopwatch for the active set of a timed exercise.

        Returns:
            The running timer, or None when the active exercise is not timed.
        """
        exercise = self.current_exercise
        current = self.current_set
        if exercise is None or current is None or not exercise.is_timed:
            return None
        return self.timers.start_exercise(
            target_seconds=current.duration_value,
            on_complete=self.complete_exercise_timer,
        )

    def complete_exercise_timer(self, actual_seconds: int) -> bool:
        """Record the measured duration, then complete the set."""
        if not self.update_current_set("actual_duration", actual_seconds):
            return False
        return self.complete_current_set()
