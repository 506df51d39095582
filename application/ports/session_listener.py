"""
Session Listener Interface (Port).

Outbound callback contract of the engine. The UI, persistence and navigation
collaborators observe the session through these callbacks; the engine never
reaches out to them any other way.
"""
from typing import List, Protocol

from domain.models import Exercise, RestContext, Superset


class SessionListener(Protocol):
    """
    Observer of a workout session.

    Implementations must tolerate being called synchronously from inside
    engine operations.
    """

    def on_update_exercises(self, exercises: List[Exercise]) -> None:
        """
        Called after any mutation of the standalone exercise list.

        Args:
            exercises: The full, updated standalone exercise list
        """
        ...

    def on_update_superset(self, index: int, superset: Superset) -> None:
        """
        Called after any mutation of a specific superset.

        Args:
            index: Position of the superset in the session's superset list
            superset: The updated superset
        """
        ...

    def on_start_rest_timer(self, duration_seconds: int, context: RestContext) -> None:
        """
        Called whenever a rest interval begins.

        Args:
            duration_seconds: Rest length in seconds
            context: What the rest separates (set, exercise or round)
        """
        ...

    def on_complete_workout(self) -> None:
        """Called when the user finalizes the session."""
        ...

    def on_close(self) -> None:
        """Called when the session view is dismissed."""
        ...
