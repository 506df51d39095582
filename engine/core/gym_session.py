"""
Gym session container.

Hosts the standalone exercise list and the superset list of one workout,
applies user edits copy-on-write, and publishes every change to the
SessionListener. Once the workout is completed, every mutation is refused.

Exercises are addressed by their instance id, supersets by their position
in creation order.
"""
import logging
from typing import Any, List, Optional, Sequence

from application.ports import Clock, ConfirmationPrompt, Haptics, Scheduler, SessionListener
from domain.models import (
    CatalogExercise,
    Exercise,
    RestContext,
    Superset,
    WorkoutSet,
    create_empty_set,
)
from engine.core.progress import WorkoutStats, calculate_workout_stats
from engine.core.progression_controller import ProgressionController
from engine.core.runtime import AutoConfirm, ImmediateScheduler, LoggingHaptics, MonotonicClock
from engine.core.superset_builder import SupersetBuildResult, SupersetBuilder
from engine.core.workout_metrics import generate_id
from engine.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class _ControllerSync:
    """
    Listener handed to the progression controller.

    Writes controller mutations back into the session, then forwards them
    to the session's own listener.
    """

    def __init__(self, session: "GymSession"):
        self._session = session

    def on_update_exercises(self, exercises: List[Exercise]) -> None:
        self._session._exercises = list(exercises)
        self._session._notify_exercises()

    def on_update_superset(self, index: int, superset: Superset) -> None:
        self._session._supersets[index] = superset
        self._session._notify_superset(index)

    def on_start_rest_timer(self, duration_seconds: int, context: RestContext) -> None:
        if self._session.listener is not None:
            self._session.listener.on_start_rest_timer(duration_seconds, context)

    def on_complete_workout(self) -> None:
        self._session.complete_workout()

    def on_close(self) -> None:
        self._session.close()


class GymSession:
    """
    Editable gym workout: exercises, supersets and their sets.

    Usage:
        >>> session = GymSession(listener=ui, confirm=dialogs)
        >>> bench = session.add_exercise(catalog_bench_press)
        >>> session.update_set(bench.id, 0, "reps", "8")
        >>> controller = session.start_active_workout()
    """

    def __init__(
        self,
        exercises: Sequence[Exercise] = (),
        supersets: Sequence[Superset] = (),
        *,
        listener: Optional[SessionListener] = None,
        confirm: Optional[ConfirmationPrompt] = None,
        clock: Optional[Clock] = None,
        scheduler: Optional[Scheduler] = None,
        haptics: Optional[Haptics] = None,
        settings: Optional[Settings] = None,
        completed: bool = False,
    ):
        """
        Args:
            exercises: Initial standalone exercises
            supersets: Initial supersets, in creation order
            listener: Observer of session changes
            confirm: Prompt for destructive actions (declines when omitted)
            clock: Time source for timers
            scheduler: Deferred execution for the auto-advance
            haptics: Vibration feedback
            settings: Engine settings (defaults to get_settings())
            completed: Whether the workout is already completed
        """
        self._exercises: List[Exercise] = list(exercises)
        self._supersets: List[Superset] = list(supersets)
        self.listener = listener
        self._confirm = confirm or AutoConfirm(answer=False)
        self._clock = clock or MonotonicClock()
        self._scheduler = scheduler or ImmediateScheduler()
        self._haptics = haptics or LoggingHaptics()
        self._settings = settings or get_settings()
        self._completed = completed
        self.active: Optional[ProgressionController] = None

    # =========================================================================
    # State
    # =========================================================================

    @property
    def exercises(self) -> List[Exercise]:
        return list(self._exercises)

    @property
    def supersets(self) -> List[Superset]:
        return list(self._supersets)

    @property
    def is_completed(self) -> bool:
        return self._completed

    def get_exercise(self, exercise_id: str) -> Optional[Exercise]:
        return next((ex for ex in self._exercises if ex.id == exercise_id), None)

    def _index_of(self, exercise_id: str) -> Optional[int]:
        for idx, ex in enumerate(self._exercises):
            if ex.id == exercise_id:
                return idx
        return None

    def _locked(self, action: str) -> bool:
        if self._completed:
            logger.debug(f"Ignored {action}: workout already completed")
        return self._completed

    # =========================================================================
    # Notification
    # =========================================================================

    def _notify_exercises(self) -> None:
        if self.listener is not None:
            self.listener.on_update_exercises(list(self._exercises))

    def _notify_superset(self, index: int) -> None:
        if self.listener is not None:
            self.listener.on_update_superset(index, self._supersets[index])

    def _set_exercises(self, exercises: List[Exercise], *, structural: bool = False) -> None:
        self._exercises = exercises
        self._notify_exercises()
        self._sync_active(structural)

    def _sync_active(self, structural: bool) -> None:
        """Push session edits into a running controller."""
        if self.active is None:
            return
        self.active.exercises = list(self._exercises)
        self.active.supersets = list(self._supersets)
        if structural:
            self.active.reset()

    # =========================================================================
    # Exercises
    # =========================================================================

    def add_exercise(self, catalog_exercise: CatalogExercise) -> Optional[Exercise]:
        """
        Append a catalog exercise with one empty set and the default rest.

        Returns:
            The new Exercise, or None if the workout is completed.
        """
        if self._locked("add_exercise"):
            return None
        exercise = Exercise.from_catalog(
            catalog_exercise,
            instance_id=generate_id("gym_ex"),
            sets=[create_empty_set(catalog_exercise.exercise_type)],
            rest_time=str(self._settings.default_set_rest_seconds),
        )
        self._set_exercises(self._exercises + [exercise], structural=True)
        return exercise

    def remove_exercise(self, exercise_id: str) -> bool:
        """Delete an exercise after user confirmation."""
        if self._locked("remove_exercise"):
            return False
        exercise = self.get_exercise(exercise_id)
        if exercise is None:
            return False
        if not self._confirm.confirm(
            "Delete exercise",
            f'Are you sure you want to delete "{exercise.name}"?',
        ):
            return False
        self._set_exercises(
            [ex for ex in self._exercises if ex.id != exercise_id], structural=True
        )
        logger.info(f"Removed exercise '{exercise.name}'")
        return True

    def update_exercise(self, exercise_id: str, exercise: Exercise) -> bool:
        if self._locked("update_exercise"):
            return False
        idx = self._index_of(exercise_id)
        if idx is None:
            return False
        exercises = list(self._exercises)
        exercises[idx] = exercise
        self._set_exercises(exercises)
        return True

    # =========================================================================
    # Sets
    # =========================================================================

    def add_set(self, exercise_id: str) -> bool:
        """Append a set prefilled with the last set's reps, weight and duration."""
        exercise = self.get_exercise(exercise_id)
        if exercise is None or self._completed:
            return False
        new_set = create_empty_set(exercise.exercise_type)
        if exercise.sets:
            last = exercise.sets[-1]
            new_set = new_set.model_copy(
                update={"reps": last.reps, "weight": last.weight, "duration": last.duration}
            )
        return self.update_exercise(exercise_id, exercise.with_sets(exercise.sets + [new_set]))

    def update_set(self, exercise_id: str, set_index: int, field_name: str, value: Any) -> bool:
        exercise = self.get_exercise(exercise_id)
        if exercise is None or not 0 <= set_index < len(exercise.sets):
            return False
        data = exercise.sets[set_index].model_dump()
        if field_name not in data:
            return False
        data[field_name] = value
        return self.update_exercise(
            exercise_id, exercise.with_set(set_index, WorkoutSet.model_validate(data))
        )

    def remove_set(self, exercise_id: str, set_index: int) -> bool:
        """Delete a set; the only set of an exercise is never removed."""
        exercise = self.get_exercise(exercise_id)
        if exercise is None or len(exercise.sets) <= 1:
            return False
        if not 0 <= set_index < len(exercise.sets):
            return False
        sets = [s for j, s in enumerate(exercise.sets) if j != set_index]
        return self.update_exercise(exercise_id, exercise.with_sets(sets))

    def duplicate_set(self, exercise_id: str, set_index: int) -> bool:
        """Insert an uncompleted copy right after the given set."""
        exercise = self.get_exercise(exercise_id)
        if exercise is None or not 0 <= set_index < len(exercise.sets):
            return False
        copy = exercise.sets[set_index].model_copy(
            update={"completed": False, "actual_duration": None}
        )
        sets = list(exercise.sets)
        sets.insert(set_index + 1, copy)
        return self.update_exercise(exercise_id, exercise.with_sets(sets))

    # =========================================================================
    # Reordering
    # =========================================================================

    def move_exercise_to_position(self, exercise_id: str, position: int) -> bool:
        if self._locked("move_exercise"):
            return False
        idx = self._index_of(exercise_id)
        if idx is None or not 0 <= position < len(self._exercises) or idx == position:
            return False
        exercises = list(self._exercises)
        exercises.insert(position, exercises.pop(idx))
        self._set_exercises(exercises, structural=True)
        return True

    def move_exercise_up(self, exercise_id: str) -> bool:
        idx = self._index_of(exercise_id)
        return idx is not None and self.move_exercise_to_position(exercise_id, idx - 1)

    def move_exercise_down(self, exercise_id: str) -> bool:
        idx = self._index_of(exercise_id)
        return idx is not None and self.move_exercise_to_position(exercise_id, idx + 1)

    def reorder_exercises(self, ordered_ids: Sequence[str]) -> bool:
        """
        Replace the exercise order.

        Args:
            ordered_ids: Every current exercise id, in the new order
        """
        if self._locked("reorder_exercises"):
            return False
        by_id = {ex.id: ex for ex in self._exercises}
        if len(ordered_ids) != len(by_id) or set(ordered_ids) != set(by_id):
            logger.warning("Ignored reorder that does not match the exercise list")
            return False
        self._set_exercises([by_id[i] for i in ordered_ids], structural=True)
        return True

    # =========================================================================
    # Supersets
    # =========================================================================

    def superset_builder(self) -> SupersetBuilder:
        """Builder over the current standalone exercises."""
        return SupersetBuilder(self._exercises, settings=self._settings)

    def create_superset(self, result: SupersetBuildResult) -> bool:
        """
        Add a built superset and drop its members from the standalone list.

        Both lists change in one step; listeners see the new superset and
        the reduced exercise list.
        """
        if self._locked("create_superset"):
            return False
        if not result.success or result.superset is None:
            return False
        superset = result.superset
        member_ids = set(superset.exercise_ids)
        standalone_ids = {ex.id for ex in self._exercises}
        if not member_ids <= standalone_ids:
            logger.warning(f"Superset '{superset.name}' references exercises not in this session")
            return False

        self._supersets = self._supersets + [superset]
        self._exercises = [ex for ex in self._exercises if ex.id not in member_ids]
        self._notify_exercises()
        self._notify_superset(len(self._supersets) - 1)
        self._sync_active(structural=True)
        logger.info(f"Created {superset.config.name} '{superset.name}'")
        return True

    def update_superset(self, index: int, superset: Superset) -> bool:
        if self._locked("update_superset") or not 0 <= index < len(self._supersets):
            return False
        self._supersets[index] = superset.with_rounds(superset.total_rounds)
        self._notify_superset(index)
        self._sync_active(structural=False)
        return True

    def delete_superset(self, index: int) -> Optional[List[Exercise]]:
        """
        Delete a superset after confirmation; its exercises become standalone.

        Returns:
            The exercises returned to the standalone list, or None if nothing
            was deleted.
        """
        if self._locked("delete_superset") or not 0 <= index < len(self._supersets):
            return None
        superset = self._supersets[index]
        if not self._confirm.confirm(
            "Delete superset",
            f'Are you sure you want to delete "{superset.name}"? '
            "Its exercises will go back to the exercise list.",
        ):
            return None
        self._supersets = [ss for i, ss in enumerate(self._supersets) if i != index]
        returned = list(superset.exercises)
        self._set_exercises(self._exercises + returned, structural=True)
        logger.info(f"Deleted superset '{superset.name}'")
        return returned

    # =========================================================================
    # Active workout
    # =========================================================================

    def has_exercises_ready(self) -> bool:
        """At least one exercise with sets, or a superset whose exercises all have sets."""
        return any(ex.sets for ex in self._exercises) or any(
            all(ex.sets for ex in ss.exercises) for ss in self._supersets
        )

    def start_active_workout(self) -> Optional[ProgressionController]:
        """
        Open the traversal session from its first station.

        Returns:
            A controller in state (0, 0, 0, 1), or None when the workout is
            completed or has nothing to perform.
        """
        if self._locked("start_active_workout"):
            return None
        if not self.has_exercises_ready():
            logger.info("Empty workout: add exercises and at least one set before starting")
            return None
        self.active = ProgressionController(
            self._exercises,
            self._supersets,
            listener=_ControllerSync(self),
            scheduler=self._scheduler,
            clock=self._clock,
            haptics=self._haptics,
            auto_advance_delay_seconds=self._settings.auto_advance_delay_seconds,
        )
        return self.active

    def workout_stats(self) -> WorkoutStats:
        return calculate_workout_stats(self._exercises, self._supersets)

    def complete_workout(self) -> bool:
        """Lock the workout and notify the listener."""
        if self._completed:
            return False
        self._completed = True
        if self.active is not None:
            self.active.cancel_pending_advance()
            self.active.timers.cancel_rest()
        logger.info("Workout completed")
        if self.listener is not None:
            self.listener.on_complete_workout()
        return True

    def close(self) -> None:
        """Dismiss the active traversal session."""
        if self.active is not None:
            self.active.cancel_pending_advance()
            self.active.timers.cancel_rest()
            self.active = None
        if self.listener is not None:
            self.listener.on_close()
