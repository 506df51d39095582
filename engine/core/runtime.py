"""
Default runtime adapters for the engine's ports.

Hosts with a real UI loop provide their own Clock/Scheduler/Haptics. These
defaults cover headless use (CLI, scripts) and asyncio-based hosts.
"""
import asyncio
import logging
import time
from typing import Callable, List, Optional, Tuple

from application.ports import VibrationPattern

logger = logging.getLogger(__name__)


class MonotonicClock:
    """Clock backed by time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()


class ImmediateScheduler:
    """Runs deferred callbacks synchronously, ignoring the delay."""

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        callback()


class AsyncioScheduler:
    """
    Scheduler backed by an asyncio event loop.

    Host adapter: the engine never picks it on its own. Hosts running an
    asyncio loop pass it to GymSession or ProgressionController.
    Callbacks run on the loop thread, keeping mutation single-threaded.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        loop = self._loop or asyncio.get_running_loop()
        loop.call_later(max(delay_seconds, 0.0), callback)


class QueuedScheduler:
    """
    Collects deferred callbacks until `run_pending()` is called.

    Host adapter for hosts that pump their own loop; pass it to GymSession
    or ProgressionController and call `run_pending()` from the host loop.
    """

    def __init__(self):
        self._pending: List[Tuple[float, Callable[[], None]]] = []

    @property
    def pending(self) -> int:
        return len(self._pending)

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> None:
        self._pending.append((delay_seconds, callback))

    def run_pending(self) -> int:
        """
        Run every queued callback in scheduling order.

        Callbacks scheduled while running are queued for the next call.

        Returns:
            Number of callbacks executed.
        """
        batch, self._pending = self._pending, []
        for _, callback in batch:
            callback()
        return len(batch)


class LoggingHaptics:
    """Haptics adapter that only logs the requested pattern."""

    def vibrate(self, pattern: VibrationPattern) -> None:
        logger.debug(f"vibrate {pattern}")


class AutoConfirm:
    """Confirmation prompt that answers every question with a fixed value."""

    def __init__(self, answer: bool = True):
        self._answer = answer

    def confirm(self, title: str, message: str) -> bool:
        logger.debug(f"auto-{'confirmed' if self._answer else 'declined'}: {title}")
        return self._answer
