"""
Runtime Interfaces (Ports): time, deferred execution, haptics, confirmation.

The engine is single-threaded and cooperative. Everything it needs from the
host event loop goes through these protocols so tests can drive time and
deferred callbacks explicitly.
"""
from typing import Callable, Protocol, Sequence, Union

# A single vibration length in ms, or an on/off pattern in ms
VibrationPattern = Union[int, Sequence[int]]


class Clock(Protocol):
    """Source of wall-clock time used by timers."""

    def now(self) -> float:
        """
        Current time in seconds.

        Must be monotonic for the duration of a session.
        """
        ...


class Scheduler(Protocol):
    """Deferred execution on the session's event loop."""

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        """
        Run `callback` once after `delay_seconds` on the same logical thread.

        Args:
            delay_seconds: Delay before running the callback (0 allowed)
            callback: Zero-argument callable
        """
        ...


class Haptics(Protocol):
    """Vibration feedback for accepted and rejected actions."""

    def vibrate(self, pattern: VibrationPattern) -> None:
        """
        Vibrate once (int, ms) or following an on/off pattern.

        Args:
            pattern: Duration in ms or a sequence of alternating pause/vibrate lengths
        """
        ...


class ConfirmationPrompt(Protocol):
    """User confirmation required before destructive actions."""

    def confirm(self, title: str, message: str) -> bool:
        """
        Ask the user to confirm a destructive action.

        Returns:
            True if the user confirmed, False if cancelled
        """
        ...
