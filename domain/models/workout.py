"""
Workout record - the entity persisted by the external workout store.

The engine owns no storage. This module only fixes the shape of the record
so the session payload produced by the engine stays compatible with it.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator

from domain.models.exercise import Exercise
from domain.models.superset import Superset


class Sport(str, Enum):
    """Sports a workout can be logged for."""

    GYM = "gym"
    RUNNING = "running"
    CYCLING = "cycling"
    SWIMMING = "swimming"
    YOGA = "yoga"
    FOOTBALL = "football"
    BASKETBALL = "basketball"


class Feeling(str, Enum):
    """How the user felt after the workout."""

    GREAT = "great"
    GOOD = "good"
    OK = "ok"
    TIRED = "tired"
    EXHAUSTED = "exhausted"


RPE_LABELS: Dict[int, str] = {
    1: "Very easy",
    2: "Easy",
    3: "Moderate",
    4: "Somewhat hard",
    5: "Hard",
    6: "Very hard",
    7: "Extreme",
    8: "Exhausting",
    9: "Maximal",
    10: "Unsustainable",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PostWorkoutData(BaseModel):
    """
    Subjective intensity captured after a workout.

    RPE is the Rate of Perceived Exertion on a 1-10 scale.
    """

    rpe: int = Field(default=5, ge=1, le=10, description="Rate of Perceived Exertion (1-10)")
    feeling: Feeling = Field(default=Feeling.GOOD)
    notes: Optional[str] = None
    timestamp: datetime = Field(default_factory=_utcnow)

    @field_validator("notes")
    @classmethod
    def strip_notes(cls, v: Optional[str]) -> Optional[str]:
        """Blank notes are stored as missing."""
        if v is None:
            return None
        v = v.strip()
        return v or None

    @property
    def rpe_label(self) -> str:
        return RPE_LABELS[self.rpe]


class GymSessionData(BaseModel):
    """Exercises and supersets of a gym session."""

    model_config = ConfigDict(populate_by_name=True)

    exercises: List[Exercise] = Field(default_factory=list)
    supersets: List[Superset] = Field(default_factory=list)


class GymSportSession(BaseModel):
    """Session payload of a gym workout."""

    sport: Literal["gym"] = "gym"
    data: GymSessionData = Field(default_factory=GymSessionData)

    @field_validator("data", mode="before")
    @classmethod
    def accept_bare_exercise_list(cls, v: Any) -> Any:
        """Older records stored the exercise list directly under `data`."""
        if isinstance(v, list):
            return {"exercises": v, "supersets": []}
        return v


class OtherSportSession(BaseModel):
    """Session payload of a non-gym workout, kept opaque."""

    sport: Sport
    data: Dict[str, Any] = Field(default_factory=dict)


def _session_kind(value: Any) -> str:
    if isinstance(value, dict):
        sport = value.get("sport")
    else:
        sport = getattr(value, "sport", None)
    return "gym" if sport in ("gym", Sport.GYM) else "other"


SportSession = Annotated[
    Union[
        Annotated[GymSportSession, Tag("gym")],
        Annotated[OtherSportSession, Tag("other")],
    ],
    Discriminator(_session_kind),
]


class Workout(BaseModel):
    """
    Aggregate root representing a logged workout.

    Examples:
        >>> workout = Workout(
        ...     id="w1",
        ...     date="2026-10-16",
        ...     sport=Sport.GYM,
        ...     name="Push day",
        ...     session=GymSportSession(),
        ... )
        >>> workout.completed
        False
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1, description="Day the workout belongs to (YYYY-MM-DD)")
    sport: Sport = Field(default=Sport.GYM)
    name: Optional[str] = None
    session: SportSession = Field(default_factory=GymSportSession)
    completed: bool = False
    created_at: datetime = Field(default_factory=_utcnow, alias="createdAt")
    updated_at: datetime = Field(default_factory=_utcnow, alias="updatedAt")
    completed_at: Optional[datetime] = Field(default=None, alias="completedAt")
    notes: Optional[str] = None
    duration: Optional[int] = Field(default=None, ge=0, description="Total duration in minutes")
    post_workout_data: Optional[PostWorkoutData] = Field(default=None, alias="postWorkoutData")

    @property
    def is_gym(self) -> bool:
        return isinstance(self.session, GymSportSession)

    def mark_completed(
        self,
        *,
        post_workout: Optional[PostWorkoutData] = None,
        duration_minutes: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> "Workout":
        """
        Return a new Workout marked as completed.

        Args:
            post_workout: Optional subjective intensity data
            duration_minutes: Optional total duration
            now: Completion instant (defaults to the current UTC time)

        Returns:
            New Workout with completion fields set.
        """
        now = now or _utcnow()
        update: Dict[str, Any] = {
            "completed": True,
            "completed_at": now,
            "updated_at": now,
            "post_workout_data": post_workout,
        }
        if duration_minutes is not None:
            update["duration"] = duration_minutes
        return self.model_copy(update=update)

    def __str__(self) -> str:
        status = "completed" if self.completed else "planned"
        return f"Workout({self.name or self.id!r}, {self.sport.value}, {self.date}, {status})"
