"""
Station: one unit of the ordered workout traversal.

A station is either a standalone exercise or a whole superset. Stations are
derived from the session's exercise and superset lists and never stored.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from domain.models.exercise import Exercise
from domain.models.superset import Superset


class ExerciseStation(BaseModel):
    """A standalone exercise that belongs to no superset."""

    model_config = ConfigDict(frozen=True)

    type: Literal["exercise"] = "exercise"
    data: Exercise

    @property
    def key(self) -> str:
        return self.data.id

    @property
    def label(self) -> str:
        return self.data.name


class SupersetStation(BaseModel):
    """A superset/circuit traversed round by round."""

    model_config = ConfigDict(frozen=True)

    type: Literal["superset"] = "superset"
    data: Superset

    @property
    def key(self) -> str:
        return self.data.id

    @property
    def label(self) -> str:
        return self.data.name


Station = Annotated[Union[ExerciseStation, SupersetStation], Field(discriminator="type")]
