"""
Rest and exercise timers.

Both timers use timestamp arithmetic against an injected Clock: the host
only has to call `tick()` periodically, and a timer that was not ticked for a
while (app in background, process suspended) still reports the right value
on the next tick.
"""
import logging
from typing import Callable, Optional

from application.ports import Clock, Haptics
from domain.models import RestContext
from engine.core import haptic_patterns

logger = logging.getLogger(__name__)


# =============================================================================
# Rest Timer
# =============================================================================


class RestTimer:
    """
    Countdown for a rest interval.

    `on_complete` fires exactly once, from the first `tick()` that observes
    the countdown at zero. `cancel()` skips the rest and fires `on_cancel`.
    """

    def __init__(
        self,
        duration_seconds: int,
        context: RestContext,
        clock: Clock,
        haptics: Optional[Haptics] = None,
        on_complete: Optional[Callable[[], None]] = None,
        on_cancel: Optional[Callable[[], None]] = None,
    ):
        self.duration_seconds = max(int(duration_seconds), 0)
        self.context = context
        self._clock = clock
        self._haptics = haptics
        self._on_complete = on_complete
        self._on_cancel = on_cancel
        self._started_at = clock.now()
        self._done = False
        self._cancelled = False

    @property
    def is_active(self) -> bool:
        return not self._done and not self._cancelled

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def remaining(self) -> float:
        """Seconds left, never negative."""
        if not self.is_active:
            return 0.0
        elapsed = self._clock.now() - self._started_at
        return max(self.duration_seconds - elapsed, 0.0)

    def progress(self) -> float:
        """Elapsed share of the rest as a percentage (0-100)."""
        if self.duration_seconds == 0 or not self.is_active:
            return 100.0
        return (1 - self.remaining() / self.duration_seconds) * 100

    def tick(self) -> bool:
        """
        Check the countdown and complete it when it reaches zero.

        Returns:
            True if this tick completed the rest.
        """
        if not self.is_active or self.remaining() > 0:
            return False
        self._done = True
        logger.debug(f"{self.context.value} rest finished ({self.duration_seconds}s)")
        if self._haptics is not None:
            self._haptics.vibrate(haptic_patterns.REST_FINISHED)
        if self._on_complete is not None:
            self._on_complete()
        return True

    def cancel(self) -> None:
        """Skip the remaining rest."""
        if not self.is_active:
            return
        self._cancelled = True
        logger.debug(f"{self.context.value} rest skipped with {self.remaining():.0f}s left")
        if self._on_cancel is not None:
            self._on_cancel()


# =============================================================================
# Exercise Timer
# =============================================================================


class ExerciseTimer:
    """
    Stopwatch for a timed set, with optional target duration.

    Elapsed time is `now - started_at + accumulated`, where `accumulated`
    holds the time measured before the last pause.
    """

    # Haptic tap every N seconds while a target is set
    TAP_INTERVAL_SECONDS = 10

    def __init__(
        self,
        clock: Clock,
        target_seconds: Optional[int] = None,
        haptics: Optional[Haptics] = None,
        on_complete: Optional[Callable[[int], None]] = None,
        on_cancel: Optional[Callable[[], None]] = None,
    ):
        self.target_seconds = target_seconds if target_seconds and target_seconds > 0 else None
        self._clock = clock
        self._haptics = haptics
        self._on_complete = on_complete
        self._on_cancel = on_cancel
        self._started_at: Optional[float] = None
        self._accumulated = 0.0
        self._running = False
        self._paused = False
        self._last_tapped_second = 0
        self._target_signalled = False

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_paused(self) -> bool:
        return self._paused

    def _vibrate(self, pattern) -> None:
        if self._haptics is not None:
            self._haptics.vibrate(pattern)

    def start(self) -> bool:
        """Start measuring from zero. No-op if already running."""
        if self._running:
            return False
        self._started_at = self._clock.now()
        self._accumulated = 0.0
        self._running = True
        self._paused = False
        self._last_tapped_second = 0
        self._target_signalled = False
        self._vibrate(haptic_patterns.TAP)
        return True

    def pause(self) -> bool:
        if not self._running or self._paused:
            return False
        self._accumulated += self._clock.now() - self._started_at
        self._started_at = None
        self._paused = True
        self._vibrate(haptic_patterns.TIMER_PAUSED)
        return True

    def resume(self) -> bool:
        if not self._running or not self._paused:
            return False
        self._started_at = self._clock.now()
        self._paused = False
        self._vibrate(haptic_patterns.TAP)
        return True

    def toggle_pause(self) -> bool:
        """Pause a running timer or resume a paused one."""
        return self.resume() if self._paused else self.pause()

    def elapsed(self) -> float:
        """Measured seconds, excluding paused intervals."""
        if self._started_at is None:
            return self._accumulated
        return self._clock.now() - self._started_at + self._accumulated

    def elapsed_seconds(self) -> int:
        return int(self.elapsed())

    @property
    def target_reached(self) -> bool:
        return self.target_seconds is not None and self.elapsed() >= self.target_seconds

    @property
    def progress(self) -> float:
        """Share of the target done, capped at 100. 0 without a target."""
        if self.target_seconds is None:
            return 0.0
        return min(self.elapsed() / self.target_seconds * 100, 100.0)

    def tick(self) -> None:
        """Emit periodic taps and the one-off target signal."""
        if not self._running or self._paused or self.target_seconds is None:
            return
        seconds = self.elapsed_seconds()
        if (
            seconds > 0
            and seconds % self.TAP_INTERVAL_SECONDS == 0
            and seconds != self._last_tapped_second
        ):
            self._last_tapped_second = seconds
            self._vibrate(haptic_patterns.TAP)
        if not self._target_signalled and seconds >= self.target_seconds:
            self._target_signalled = True
            logger.debug(f"target of {self.target_seconds}s reached")
            self._vibrate(haptic_patterns.TARGET_REACHED)

    def complete(self) -> Optional[int]:
        """
        Stop the timer and report the measured whole seconds.

        A paused timer reports the time measured before the pause.

        Returns:
            Measured seconds, or None if the timer could not complete.
        """
        if not self._running:
            return None
        seconds = self.elapsed_seconds()
        self._accumulated = float(seconds)
        self._started_at = None
        self._running = False
        self._paused = False
        self._vibrate(haptic_patterns.ROUND_COMPLETED)
        if self._on_complete is not None:
            self._on_complete(seconds)
        return seconds

    def cancel(self) -> None:
        """Stop the timer and discard the measurement."""
        self._started_at = None
        self._accumulated = 0.0
        self._running = False
        self._paused = False
        if self._on_cancel is not None:
            self._on_cancel()


# =============================================================================
# Coordinator
# =============================================================================


class TimerCoordinator:
    """
    Owns the active rest timer and the active exercise timer of a session.

    At most one of each exists at a time. Starting a new rest replaces the
    previous one without firing its callbacks.
    """

    def __init__(self, clock: Clock, haptics: Optional[Haptics] = None):
        self._clock = clock
        self._haptics = haptics
        self.rest: Optional[RestTimer] = None
        self.exercise: Optional[ExerciseTimer] = None

    @property
    def is_resting(self) -> bool:
        return self.rest is not None and self.rest.is_active

    def start_rest(
        self,
        duration_seconds: int,
        context: RestContext,
        on_complete: Optional[Callable[[], None]] = None,
        on_cancel: Optional[Callable[[], None]] = None,
    ) -> RestTimer:
        if self.is_resting:
            logger.debug(f"replacing {self.rest.context.value} rest")
        self.rest = RestTimer(
            duration_seconds,
            context,
            self._clock,
            haptics=self._haptics,
            on_complete=on_complete,
            on_cancel=on_cancel,
        )
        return self.rest

    def cancel_rest(self) -> bool:
        if not self.is_resting:
            return False
        self.rest.cancel()
        self.rest = None
        return True

    def start_exercise(
        self,
        target_seconds: Optional[int] = None,
        on_complete: Optional[Callable[[int], None]] = None,
        on_cancel: Optional[Callable[[], None]] = None,
    ) -> ExerciseTimer:
        if self.exercise is not None and self.exercise.is_running:
            self.exercise.cancel()
        self.exercise = ExerciseTimer(
            self._clock,
            target_seconds=target_seconds,
            haptics=self._haptics,
            on_complete=on_complete,
            on_cancel=on_cancel,
        )
        self.exercise.start()
        return self.exercise

    def pause_exercise(self) -> bool:
        return self.exercise is not None and self.exercise.pause()

    def resume_exercise(self) -> bool:
        return self.exercise is not None and self.exercise.resume()

    def complete_exercise(self) -> Optional[int]:
        if self.exercise is None:
            return None
        seconds = self.exercise.complete()
        if seconds is not None:
            self.exercise = None
        return seconds

    def cancel_exercise(self) -> bool:
        if self.exercise is None:
            return False
        self.exercise.cancel()
        self.exercise = None
        return True

    def tick(self) -> None:
        """Advance both timers; call every `timer_tick_ms`."""
        if self.rest is not None and self.rest.tick():
            self.rest = None
        if self.exercise is not None:
            self.exercise.tick()
