"""
Exercise value objects.

- CatalogExercise: identity and display metadata supplied by the exercise
  catalog/selector (opaque to the engine)
- Exercise: an exercise instance inside a workout, with its ordered sets
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.models.workout_set import ExerciseType, WorkoutSet, is_set_complete

DEFAULT_REST_SECONDS = 60


class CatalogExercise(BaseModel):
    """Exercise identity and metadata as returned by the exercise catalog."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1, description="Catalog exercise id")
    name: str = Field(..., min_length=1)
    muscle_group: Optional[str] = Field(default=None, alias="muscleGroup")
    specific_muscle: Optional[str] = Field(default=None, alias="specificMuscle")
    equipment: Optional[str] = None
    difficulty: Optional[str] = None
    exercise_type: ExerciseType = Field(default=ExerciseType.REPETITIONS, alias="exerciseType")
    description: Optional[str] = None


class Exercise(BaseModel):
    """
    Value object representing an exercise within a workout session.

    `id` identifies this instance in the session, `exercise_id` points back to
    the catalog entry. The same catalog exercise can appear twice with
    different instance ids.

    Examples:
        >>> exercise = Exercise(
        ...     id="gym_ex_1",
        ...     exercise_id="bench-press",
        ...     name="Bench Press",
        ...     sets=[WorkoutSet(reps="8", weight="80")],
        ...     rest_time="90",
        ... )
        >>> exercise.rest_seconds
        90
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # Identity
    id: str = Field(..., min_length=1, description="Instance id within the session")
    exercise_id: str = Field(default="", alias="exerciseId", description="Catalog exercise id")
    name: str = Field(..., min_length=1, description="Display name")

    # Work prescription
    sets: List[WorkoutSet] = Field(default_factory=list, description="Ordered sets")
    rest_time: Optional[str] = Field(
        default=str(DEFAULT_REST_SECONDS),
        alias="restTime",
        description="Rest after each set, in seconds",
    )
    exercise_type: ExerciseType = Field(default=ExerciseType.REPETITIONS, alias="exerciseType")

    # Display metadata
    notes: Optional[str] = None
    muscle_group: Optional[str] = Field(default=None, alias="muscleGroup")
    specific_muscle: Optional[str] = Field(default=None, alias="specificMuscle")
    equipment: Optional[str] = None
    difficulty: Optional[str] = None
    description: Optional[str] = None

    @field_validator("rest_time", mode="before")
    @classmethod
    def coerce_rest_time(cls, v):
        """Accept numeric rest times from JSON."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(int(v))
        return v

    @field_validator("exercise_type", mode="before")
    @classmethod
    def default_exercise_type(cls, v):
        """A missing type means a repetition exercise."""
        return ExerciseType.REPETITIONS if v in (None, "") else v

    @property
    def rest_seconds(self) -> int:
        """
        Rest between sets in whole seconds.

        Falls back to the default rest when the stored value is empty or
        not a number.
        """
        try:
            return int(float(self.rest_time)) if self.rest_time else DEFAULT_REST_SECONDS
        except ValueError:
            return DEFAULT_REST_SECONDS

    @property
    def completed_sets(self) -> int:
        """Number of sets marked as completed."""
        return sum(1 for s in self.sets if s.completed)

    @property
    def is_timed(self) -> bool:
        """Check if the exercise is measured in time."""
        return self.exercise_type == ExerciseType.TIME

    @property
    def volume(self) -> float:
        """Total reps x weight over completed sets."""
        return sum(
            (s.reps_value or 0) * (s.weight_value or 0.0)
            for s in self.sets
            if s.completed
        )

    @property
    def total_duration(self) -> int:
        """
        Seconds worked over completed sets of a timed exercise.

        Prefers the measured duration over the target. Always 0 for
        non-timed exercises.
        """
        if not self.is_timed:
            return 0
        return sum(
            s.actual_duration or s.duration_value or 0
            for s in self.sets
            if s.completed
        )

    @property
    def max_weight(self) -> float:
        """Heaviest weight across completed sets (0 if none)."""
        weights = [s.weight_value for s in self.sets if s.completed and s.weight_value is not None]
        return max(weights, default=0.0)

    @property
    def all_sets_valid(self) -> bool:
        """True when the exercise has sets and each one has a usable value."""
        return bool(self.sets) and all(
            is_set_complete(s, self.exercise_type) for s in self.sets
        )

    def with_set(self, index: int, workout_set: WorkoutSet) -> "Exercise":
        """
        Return a new Exercise with the set at `index` replaced.

        Args:
            index: Position of the set to replace
            workout_set: Replacement set

        Returns:
            New Exercise instance.
        """
        sets = list(self.sets)
        sets[index] = workout_set
        return self.model_copy(update={"sets": sets})

    def with_sets(self, sets: List[WorkoutSet]) -> "Exercise":
        """Return a new Exercise with its sets replaced."""
        return self.model_copy(update={"sets": list(sets)})

    def __str__(self) -> str:
        return f"{self.name} ({len(self.sets)} sets, {self.exercise_type.value})"

    @classmethod
    def from_catalog(
        cls,
        catalog: CatalogExercise,
        *,
        instance_id: str,
        sets: List[WorkoutSet],
        rest_time: str = str(DEFAULT_REST_SECONDS),
    ) -> "Exercise":
        """
        Create a session exercise from a catalog entry.

        Args:
            catalog: Catalog identity and metadata
            instance_id: Id of the new instance in the session
            sets: Initial sets
            rest_time: Rest between sets in seconds

        Returns:
            New Exercise instance.
        """
        return cls(
            id=instance_id,
            exercise_id=catalog.id,
            name=catalog.name,
            sets=sets,
            rest_time=rest_time,
            notes="",
            exercise_type=catalog.exercise_type,
            muscle_group=catalog.muscle_group,
            specific_muscle=catalog.specific_muscle,
            equipment=catalog.equipment,
            difficulty=catalog.difficulty,
            description=catalog.description,
        )
