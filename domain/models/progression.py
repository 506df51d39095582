"""
Transient progression state of an active workout session.

Nothing here is persisted: the state is rebuilt as (0, 0, 0, 1) every time a
traversal session opens.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class RestContext(str, Enum):
    """What a rest interval separates."""

    SET = "set"
    EXERCISE = "exercise"
    ROUND = "round"

    @property
    def label(self) -> str:
        return {
            RestContext.SET: "Rest between sets",
            RestContext.EXERCISE: "Rest between exercises",
            RestContext.ROUND: "Rest between rounds",
        }[self]


class ProgressionState(BaseModel):
    """
    Position of the user inside the workout plan.

    - station_index: index into the station list
    - exercise_in_superset: active exercise of a superset station (0 otherwise)
    - set_index: active set of a plain exercise (always 0 inside a superset)
    - round: 1-indexed round of a superset station
    """

    model_config = ConfigDict(frozen=True)

    station_index: int = Field(default=0, ge=0)
    exercise_in_superset: int = Field(default=0, ge=0)
    set_index: int = Field(default=0, ge=0)
    round: int = Field(default=1, ge=1)

    @classmethod
    def initial(cls) -> "ProgressionState":
        return cls()

    def at_station(self, station_index: int) -> "ProgressionState":
        """State positioned at the start of another station."""
        return ProgressionState(station_index=station_index)

    def as_tuple(self) -> tuple:
        return (self.station_index, self.exercise_in_superset, self.set_index, self.round)


class RestEvent(BaseModel):
    """A rest interval that begins after a completed set."""

    model_config = ConfigDict(frozen=True)

    duration_seconds: int = Field(..., ge=0)
    context: RestContext
