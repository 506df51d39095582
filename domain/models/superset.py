"""
Superset value object and the fixed configuration of each superset type.

A superset groups exercises performed back-to-back and repeated for a number
of rounds. Each member exercise carries exactly one representative set that
is the template for every round.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from domain.models.exercise import Exercise

DEFAULT_ROUND_REST_SECONDS = 90


class SupersetType(str, Enum):
    """
    Kinds of exercise groups.

    - SUPERSET: 2 exercises back-to-back, no rest between them
    - TRISET: 3 exercises back-to-back, no rest between them
    - CIRCUIT: 3-8 exercises, optional rest between exercises, timed sets allowed
    - MEGACIRCUIT: 9-12 exercises, optional rest between exercises, timed sets allowed
    """

    SUPERSET = "superset"
    TRISET = "triset"
    CIRCUIT = "circuit"
    MEGACIRCUIT = "megacircuit"

    @property
    def config(self) -> "SupersetTypeConfig":
        return SUPERSET_TYPE_CONFIG[self]


@dataclass(frozen=True)
class SupersetTypeConfig:
    """Fixed rules for a superset type."""

    name: str
    min_exercises: int
    max_exercises: int
    has_exercise_rest: bool
    allow_timed_sets: bool
    description: str = ""

    def accepts_count(self, count: int) -> bool:
        """Check that an exercise count fits this type."""
        return self.min_exercises <= count <= self.max_exercises


SUPERSET_TYPE_CONFIG: Dict[SupersetType, SupersetTypeConfig] = {
    SupersetType.SUPERSET: SupersetTypeConfig(
        name="Superset",
        min_exercises=2,
        max_exercises=2,
        has_exercise_rest=False,
        allow_timed_sets=False,
        description="2 exercises back-to-back with no rest between them",
    ),
    SupersetType.TRISET: SupersetTypeConfig(
        name="Triset",
        min_exercises=3,
        max_exercises=3,
        has_exercise_rest=False,
        allow_timed_sets=False,
        description="3 exercises back-to-back with no rest between them",
    ),
    SupersetType.CIRCUIT: SupersetTypeConfig(
        name="Circuit",
        min_exercises=3,
        max_exercises=8,
        has_exercise_rest=True,
        allow_timed_sets=True,
        description="3-8 exercises by time or reps, optional rest between exercises",
    ),
    SupersetType.MEGACIRCUIT: SupersetTypeConfig(
        name="Mega Circuit",
        min_exercises=9,
        max_exercises=12,
        has_exercise_rest=True,
        allow_timed_sets=True,
        description="9-12 exercises by time or reps, optional rest between exercises",
    ),
}


def _parse_seconds(value: Optional[str]) -> Optional[int]:
    if value is None or str(value).strip() == "":
        return None
    try:
        return int(float(value))
    except ValueError:
        return None


class Superset(BaseModel):
    """
    Value object representing a superset, triset, circuit or megacircuit.

    `round_completed` always has exactly `total_rounds` entries. Shorter
    payloads are padded with False; longer ones are rejected.

    Examples:
        >>> superset = Superset(
        ...     id="superset_1",
        ...     name="Arms",
        ...     type=SupersetType.SUPERSET,
        ...     exercises=[curl, pushdown],
        ...     total_rounds=3,
        ...     rest_time_between_rounds="90",
        ... )
        >>> superset.round_completed
        [False, False, False]
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    type: SupersetType = Field(default=SupersetType.SUPERSET)
    exercises: List[Exercise] = Field(..., min_length=1)
    current_round: int = Field(default=1, ge=1, alias="currentRound")
    total_rounds: int = Field(..., ge=1, alias="totalRounds")
    round_completed: List[bool] = Field(
        default_factory=list, alias="roundCompleted", validate_default=True
    )
    rest_time_between_rounds: str = Field(
        default=str(DEFAULT_ROUND_REST_SECONDS), alias="restTimeBetweenRounds"
    )
    rest_time_between_exercises: Optional[str] = Field(
        default=None, alias="restTimeBetweenExercises"
    )
    current_exercise_index: int = Field(default=0, ge=0, alias="currentExerciseIndex")
    use_time_for_all: bool = Field(default=False, alias="useTimeForAll")
    default_time: Optional[str] = Field(default=None, alias="defaultTime")

    @field_validator("rest_time_between_rounds", "rest_time_between_exercises", "default_time", mode="before")
    @classmethod
    def coerce_seconds(cls, v):
        """Accept numeric second values from JSON."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(int(v))
        return v

    @field_validator("round_completed")
    @classmethod
    def align_round_completed(cls, v: List[bool], info: ValidationInfo) -> List[bool]:
        """Keep exactly one completion flag per round."""
        total = info.data.get("total_rounds")
        if total is None:
            return v
        if len(v) > total:
            raise ValueError(f"round_completed has {len(v)} entries for {total} rounds")
        return list(v) + [False] * (total - len(v))

    @model_validator(mode="after")
    def validate_current_round(self) -> "Superset":
        """Ensure the current round is one of the configured rounds."""
        if self.current_round > self.total_rounds:
            raise ValueError("current_round cannot exceed total_rounds")
        return self

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def config(self) -> SupersetTypeConfig:
        """Fixed configuration of this superset's type."""
        return SUPERSET_TYPE_CONFIG[self.type]

    @property
    def exercise_ids(self) -> List[str]:
        """Instance ids of the member exercises, in execution order."""
        return [ex.id for ex in self.exercises]

    @property
    def round_rest_seconds(self) -> int:
        """Rest between rounds in seconds (defaults to 90)."""
        value = _parse_seconds(self.rest_time_between_rounds)
        return DEFAULT_ROUND_REST_SECONDS if value is None else value

    @property
    def exercise_rest_seconds(self) -> int:
        """
        Rest between exercises of a round in seconds.

        Always 0 for types without exercise rest.
        """
        if not self.config.has_exercise_rest:
            return 0
        return _parse_seconds(self.rest_time_between_exercises) or 0

    @property
    def completed_rounds(self) -> int:
        """Number of rounds flagged as completed."""
        return sum(1 for done in self.round_completed if done)

    # -------------------------------------------------------------------------
    # Domain Methods (return new instances)
    # -------------------------------------------------------------------------

    def with_exercise(self, index: int, exercise: Exercise) -> "Superset":
        """Return a new Superset with the exercise at `index` replaced."""
        exercises = list(self.exercises)
        exercises[index] = exercise
        return self.model_copy(update={"exercises": exercises})

    def with_rounds(self, total_rounds: int) -> "Superset":
        """
        Return a new Superset with `total_rounds` rounds.

        Completion flags are truncated or padded with False, and the current
        round is clamped to the new total.
        """
        if total_rounds < 1:
            raise ValueError("total_rounds must be at least 1")
        flags = (list(self.round_completed) + [False] * total_rounds)[:total_rounds]
        return self.model_copy(
            update={
                "total_rounds": total_rounds,
                "round_completed": flags,
                "current_round": min(self.current_round, total_rounds),
            }
        )

    def mark_round_completed(self, round_number: int) -> "Superset":
        """
        Return a new Superset with a round flagged as completed.

        Args:
            round_number: 1-indexed round number

        Returns:
            New Superset; unchanged copy when the round is out of range.
        """
        if not 1 <= round_number <= self.total_rounds:
            return self
        flags = [
            True if idx == round_number - 1 else done
            for idx, done in enumerate(self.round_completed)
        ]
        return self.model_copy(update={"round_completed": flags})

    def __str__(self) -> str:
        names = ", ".join(ex.name for ex in self.exercises[:3])
        if len(self.exercises) > 3:
            names += f" (+{len(self.exercises) - 3} more)"
        return f"{self.name} ({self.type.value}) x{self.total_rounds} rounds [{names}]"
