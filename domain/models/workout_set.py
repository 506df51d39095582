"""
WorkoutSet value object and exercise type tag.

A set is one unit of work. Which field carries the work depends on the
owning exercise's type: reps for repetition exercises, duration for timed
exercises, distance for distance exercises. Values are kept as the strings
the user typed, so a half-edited set ("", "1", "12") round-trips unchanged.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExerciseType(str, Enum):
    """
    How the work of an exercise is measured.

    - REPETITIONS: a rep count per set
    - TIME: a duration in seconds per set
    - DISTANCE: a distance per set (duration optional)
    """

    REPETITIONS = "Repetitions"
    TIME = "Time"
    DISTANCE = "Distance"

    @classmethod
    def _missing_(cls, value: object) -> Optional["ExerciseType"]:
        # Payloads written by the first mobile release used Spanish tags
        if isinstance(value, str):
            legacy = {
                "repeticiones": cls.REPETITIONS,
                "tiempo": cls.TIME,
                "distancia": cls.DISTANCE,
                "repetitions": cls.REPETITIONS,
                "time": cls.TIME,
                "distance": cls.DISTANCE,
            }
            return legacy.get(value.strip().lower())
        return None


def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return None


def _parse_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(str(value).strip())
    except ValueError:
        return None


class WorkoutSet(BaseModel):
    """
    Value object representing a single set of an exercise.

    Examples:
        >>> WorkoutSet(reps="10", weight="60")
        >>> WorkoutSet(duration="45")
        >>> WorkoutSet(distance="1.5", duration="420")
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    reps: Optional[str] = Field(default=None, description="Rep count (repetition exercises)")
    weight: Optional[str] = Field(default=None, description="Weight used, optional for every type")
    duration: Optional[str] = Field(default=None, description="Target duration in seconds")
    distance: Optional[str] = Field(default=None, description="Distance covered")
    completed: bool = Field(default=False, description="Whether the set was performed")
    actual_duration: Optional[int] = Field(
        default=None,
        alias="actualDuration",
        ge=0,
        description="Measured duration in seconds (exercise timer)",
    )
    notes: Optional[str] = Field(default=None, description="Free-text note")

    @field_validator("reps", "weight", "duration", "distance", mode="before")
    @classmethod
    def coerce_to_string(cls, v):
        """Numbers coming from JSON are stored the same way as typed input."""
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, bool):
            raise ValueError("Boolean is not a valid set value")
        if isinstance(v, (int, float)):
            return str(v)
        raise ValueError(f"Unsupported set value: {v!r}")

    @property
    def reps_value(self) -> Optional[int]:
        """Reps parsed as an integer, None when absent or unparseable."""
        return _parse_int(self.reps)

    @property
    def duration_value(self) -> Optional[int]:
        """Duration parsed as whole seconds."""
        return _parse_int(self.duration)

    @property
    def distance_value(self) -> Optional[float]:
        """Distance parsed as a float."""
        return _parse_float(self.distance)

    @property
    def weight_value(self) -> Optional[float]:
        """Weight parsed as a float."""
        return _parse_float(self.weight)

    def __str__(self) -> str:
        if self.duration and not self.reps:
            text = f"{self.duration}s"
        elif self.distance:
            text = f"{self.distance} dist"
        else:
            text = f"{self.reps or 0} reps"
        if self.weight:
            text += f" @ {self.weight}"
        return text


def is_set_complete(workout_set: WorkoutSet, exercise_type: ExerciseType) -> bool:
    """
    Check whether a set has a usable value for its exercise type.

    The field matching the type must be present and strictly positive.
    Other fields (weight included) are ignored.

    Args:
        workout_set: The set to check
        exercise_type: Type of the exercise owning the set

    Returns:
        True when the set can be marked as completed.
    """
    if exercise_type == ExerciseType.TIME:
        value = workout_set.duration_value
        return value is not None and value > 0
    if exercise_type == ExerciseType.DISTANCE:
        value = workout_set.distance_value
        return value is not None and value > 0
    value = workout_set.reps_value
    return value is not None and value > 0


def create_empty_set(exercise_type: ExerciseType) -> WorkoutSet:
    """
    Create a blank set shaped for the given exercise type.

    Args:
        exercise_type: Type of the exercise the set belongs to

    Returns:
        A set with the type's work field(s) empty and weight/notes blank.
    """
    if exercise_type == ExerciseType.TIME:
        return WorkoutSet(duration="", weight="", notes="")
    if exercise_type == ExerciseType.DISTANCE:
        return WorkoutSet(distance="", duration="", weight="", notes="")
    return WorkoutSet(reps="", weight="", notes="")
