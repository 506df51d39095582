"""
Superset / circuit builder.

Step machine that turns a selection of session exercises into a configured
Superset:

    TYPE -> EXERCISES -> SETS -> CONFIG -> build()

The builder never touches the session. `build()` returns a
SupersetBuildResult; the session applies it atomically with
`GymSession.create_superset()`.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional, Sequence

from domain.models import (
    SUPERSET_TYPE_CONFIG,
    Exercise,
    ExerciseType,
    Superset,
    SupersetType,
    SupersetTypeConfig,
    WorkoutSet,
    create_empty_set,
    is_set_complete,
)
from engine.core.workout_metrics import generate_id
from engine.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class BuilderStep(str, Enum):
    """Wizard steps, in order."""

    TYPE = "type"
    EXERCISES = "exercises"
    SETS = "sets"
    CONFIG = "config"


_STEP_ORDER = [BuilderStep.TYPE, BuilderStep.EXERCISES, BuilderStep.SETS, BuilderStep.CONFIG]


@dataclass(frozen=True)
class TypeDefaults:
    """Values applied when a type is confirmed."""

    rounds: int
    rest_time: str
    rest_time_between_exercises: str
    use_time_for_all: bool
    default_time: Optional[str] = None


TYPE_DEFAULTS = {
    SupersetType.SUPERSET: TypeDefaults(3, "90", "0", False),
    SupersetType.TRISET: TypeDefaults(3, "90", "0", False),
    SupersetType.CIRCUIT: TypeDefaults(3, "120", "20", True, "45"),
    SupersetType.MEGACIRCUIT: TypeDefaults(2, "180", "15", True, "30"),
}


@dataclass
class SupersetExerciseConfig:
    """Per-exercise configuration: one representative set, reps or time."""

    exercise: Exercise
    workout_set: WorkoutSet
    use_time: bool = False
    time: Optional[str] = None

    def is_valid(self) -> bool:
        if self.use_time:
            return _positive_int(self.time)
        return is_set_complete(self.workout_set, self.exercise.exercise_type)


@dataclass
class SupersetBuildResult:
    """Result of SupersetBuilder.build()."""

    success: bool
    superset: Optional[Superset] = None
    error: Optional[str] = None
    validation_errors: List[str] = field(default_factory=list)


def _positive_int(value: Optional[str]) -> bool:
    try:
        return value is not None and int(float(value)) > 0
    except ValueError:
        return False


def _non_negative_int(value: Optional[str]) -> bool:
    try:
        return value is not None and int(float(value)) >= 0
    except ValueError:
        return False


class SupersetBuilder:
    """
    Four-step wizard for supersets, trisets, circuits and megacircuits.

    Selection order is execution order. Per-type defaults are applied when
    the type is confirmed (leaving the TYPE step) and override anything set
    earlier.

    Usage:
        >>> builder = SupersetBuilder(session.exercises)
        >>> builder.select_type(SupersetType.SUPERSET)
        >>> builder.next_step()
        >>> builder.toggle_exercise(curl.id)
        >>> builder.toggle_exercise(pushdown.id)
        >>> builder.next_step()
        >>> builder.update_exercise_set(0, "reps", "12")
        >>> builder.update_exercise_set(1, "reps", "12")
        >>> builder.next_step()
        >>> result = builder.build()
    """

    def __init__(
        self,
        available_exercises: Sequence[Exercise],
        now: Callable[[], datetime] = datetime.now,
        settings: Optional[Settings] = None,
    ):
        """
        Args:
            available_exercises: Standalone exercises that can be grouped
            now: Wall-clock source for the default name
            settings: Engine settings (initial rest values)
        """
        self._available = {ex.id: ex for ex in available_exercises}
        self._now = now
        self._settings = settings or get_settings()
        self.reset()

    def reset(self) -> None:
        """Restore the initial state."""
        self.step = BuilderStep.TYPE
        self.selected_type = SupersetType.SUPERSET
        self.selected_ids: List[str] = []
        self.configs: List[SupersetExerciseConfig] = []
        self.name = ""
        self.rounds = 3
        self.rest_time = str(self._settings.default_round_rest_seconds)
        self.rest_time_between_exercises = str(self._settings.default_exercise_rest_seconds)
        self.use_time_for_all = False
        self.default_time = "45"

    @property
    def type_config(self) -> SupersetTypeConfig:
        return SUPERSET_TYPE_CONFIG[self.selected_type]

    # -------------------------------------------------------------------------
    # Step machine
    # -------------------------------------------------------------------------

    def can_proceed(self) -> bool:
        """Check whether the current step's input is complete."""
        if self.step == BuilderStep.TYPE:
            return True
        if self.step == BuilderStep.EXERCISES:
            return self.type_config.accepts_count(len(self.selected_ids))
        if self.step == BuilderStep.SETS:
            return bool(self.configs) and all(c.is_valid() for c in self.configs)
        return (
            self.name.strip() != ""
            and self.rounds > 0
            and (self.rest_time or "").strip() != ""
        )

    def next_step(self) -> bool:
        """
        Advance to the next step.

        Returns:
            False when the current step is incomplete or already the last one.
        """
        if self.step == BuilderStep.CONFIG or not self.can_proceed():
            logger.debug(f"builder cannot leave step {self.step.value}")
            return False

        if self.step == BuilderStep.TYPE:
            self._apply_type_defaults()
        elif self.step == BuilderStep.EXERCISES:
            self._create_configs()

        self.step = _STEP_ORDER[_STEP_ORDER.index(self.step) + 1]
        return True

    def prev_step(self) -> BuilderStep:
        """Go back one step; from TYPE the builder is reset."""
        if self.step == BuilderStep.TYPE:
            self.reset()
        else:
            self.step = _STEP_ORDER[_STEP_ORDER.index(self.step) - 1]
        return self.step

    def _apply_type_defaults(self) -> None:
        now = self._now()
        self.name = f"{self.type_config.name} {now.hour}:{now.minute:02d}"
        defaults = TYPE_DEFAULTS[self.selected_type]
        self.rounds = defaults.rounds
        self.rest_time = defaults.rest_time
        self.rest_time_between_exercises = defaults.rest_time_between_exercises
        self.use_time_for_all = defaults.use_time_for_all
        if defaults.default_time is not None:
            self.default_time = defaults.default_time

    def _create_configs(self) -> None:
        timed = self.use_time_for_all and self.type_config.allow_timed_sets
        self.configs = []
        for exercise_id in self.selected_ids:
            exercise = self._available[exercise_id]
            set_type = ExerciseType.TIME if timed else exercise.exercise_type
            self.configs.append(
                SupersetExerciseConfig(
                    exercise=exercise.with_sets([]),
                    workout_set=create_empty_set(set_type),
                    use_time=timed,
                    time=self.default_time if timed else None,
                )
            )

    # -------------------------------------------------------------------------
    # Type and exercise selection
    # -------------------------------------------------------------------------

    def select_type(self, superset_type: SupersetType) -> bool:
        if self.step != BuilderStep.TYPE:
            return False
        self.selected_type = SupersetType(superset_type)
        return True

    def toggle_exercise(self, exercise_id: str) -> bool:
        """
        Select or deselect an exercise.

        Returns:
            False if the exercise is unknown or the type's maximum is reached.
        """
        if exercise_id in self.selected_ids:
            self.selected_ids.remove(exercise_id)
            return True
        if exercise_id not in self._available:
            return False
        if len(self.selected_ids) >= self.type_config.max_exercises:
            logger.debug(
                f"{self.type_config.name} accepts at most "
                f"{self.type_config.max_exercises} exercises"
            )
            return False
        self.selected_ids.append(exercise_id)
        return True

    def reorder_exercise(self, from_index: int, to_index: int) -> bool:
        """Move a selected exercise, keeping any existing configs aligned."""
        count = len(self.selected_ids)
        if not (0 <= from_index < count and 0 <= to_index < count):
            return False
        moved = self.selected_ids.pop(from_index)
        self.selected_ids.insert(to_index, moved)
        if self.configs:
            config = self.configs.pop(from_index)
            self.configs.insert(to_index, config)
        return True

    # -------------------------------------------------------------------------
    # Per-exercise configuration
    # -------------------------------------------------------------------------

    def set_exercise_use_time(self, index: int, use_time: bool) -> bool:
        """Switch one exercise between reps and time; resets its set."""
        if not 0 <= index < len(self.configs):
            return False
        if use_time and not self.type_config.allow_timed_sets:
            return False
        config = self.configs[index]
        set_type = ExerciseType.TIME if use_time else config.exercise.exercise_type
        self.configs[index] = SupersetExerciseConfig(
            exercise=config.exercise,
            workout_set=create_empty_set(set_type),
            use_time=use_time,
            time=self.default_time if use_time else None,
        )
        return True

    def set_use_time_for_all(self, use_time: bool) -> bool:
        """Force timed mode on every exercise (or release it)."""
        if use_time and not self.type_config.allow_timed_sets:
            return False
        self.use_time_for_all = use_time
        for idx in range(len(self.configs)):
            self.set_exercise_use_time(idx, use_time)
        return True

    def set_default_time(self, seconds: str) -> None:
        """Set the shared time, mirrored into every timed exercise when "time for all" is on."""
        self.default_time = seconds
        if self.use_time_for_all:
            for config in self.configs:
                if config.use_time:
                    config.time = seconds

    def update_exercise_set(self, index: int, field_name: str, value: str) -> bool:
        """
        Edit the representative set of one exercise.

        Timed exercises only accept "duration", which sets their time.
        """
        if not 0 <= index < len(self.configs):
            return False
        config = self.configs[index]
        if config.use_time:
            if field_name != "duration":
                return False
            config.time = value
            return True
        if field_name not in ("reps", "weight", "duration", "distance", "notes"):
            return False
        config.workout_set = config.workout_set.model_copy(update={field_name: value})
        return True

    def configure(
        self,
        *,
        name: Optional[str] = None,
        rounds: Optional[int] = None,
        rest_time: Optional[str] = None,
        rest_time_between_exercises: Optional[str] = None,
    ) -> None:
        """Set the final configuration values that are provided."""
        if name is not None:
            self.name = name
        if rounds is not None:
            self.rounds = rounds
        if rest_time is not None:
            self.rest_time = rest_time
        if rest_time_between_exercises is not None:
            self.rest_time_between_exercises = rest_time_between_exercises

    # -------------------------------------------------------------------------
    # Validation and creation
    # -------------------------------------------------------------------------

    def validate(self) -> List[str]:
        """
        Collect every reason the superset cannot be created.

        Returns:
            List of validation error messages (empty if valid).
        """
        errors: List[str] = []
        config = self.type_config

        if not self.name.strip():
            errors.append("Name is required")
        if self.rounds <= 0:
            errors.append("Rounds must be greater than 0")
        if not (self.rest_time or "").strip():
            errors.append("Rest between rounds is required")
        elif not _non_negative_int(self.rest_time):
            errors.append(f"Invalid rest between rounds: {self.rest_time!r}")
        if config.has_exercise_rest and not _non_negative_int(self.rest_time_between_exercises or "0"):
            errors.append(f"Invalid rest between exercises: {self.rest_time_between_exercises!r}")

        count = len(self.configs)
        if not config.accepts_count(count):
            errors.append(
                f"{config.name} needs {config.min_exercises}-{config.max_exercises} exercises, got {count}"
            )
        for ex_config in self.configs:
            if not ex_config.is_valid():
                errors.append(f"Exercise '{ex_config.exercise.name}' needs a value greater than 0")

        return errors

    def build(self, superset_id: Optional[str] = None) -> SupersetBuildResult:
        """
        Validate and create the superset, then reset the builder.

        Args:
            superset_id: Id of the new superset (generated if omitted)

        Returns:
            SupersetBuildResult with the superset, or the validation errors.
        """
        errors = self.validate()
        if errors:
            logger.debug(f"Superset validation failed: {errors}")
            return SupersetBuildResult(
                success=False,
                error="Superset validation failed",
                validation_errors=errors,
            )

        config = self.type_config
        timed_all = self.use_time_for_all and config.allow_timed_sets
        exercises = []
        for ex_config in self.configs:
            if ex_config.use_time:
                exercises.append(
                    ex_config.exercise.model_copy(
                        update={
                            "exercise_type": ExerciseType.TIME,
                            "sets": [WorkoutSet(duration=ex_config.time, weight="")],
                        }
                    )
                )
            else:
                exercises.append(ex_config.exercise.with_sets([ex_config.workout_set]))

        superset = Superset(
            id=superset_id or generate_id("superset"),
            name=self.name.strip(),
            type=self.selected_type,
            exercises=exercises,
            total_rounds=self.rounds,
            rest_time_between_rounds=self.rest_time,
            rest_time_between_exercises=(
                self.rest_time_between_exercises if config.has_exercise_rest else None
            ),
            use_time_for_all=timed_all,
            default_time=self.default_time if timed_all else None,
        )
        logger.info(f"Built {config.name} '{superset.name}' with {len(exercises)} exercises")
        self.reset()
        return SupersetBuildResult(success=True, superset=superset)
