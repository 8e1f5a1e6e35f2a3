"""Timer policy — stateless rules about when a timer may change state."""

from __future__ import annotations

import logging
from typing import Optional

from singletimer.core.duration import Duration
from singletimer.core.errors import MissingIdentifierError, NullTimerError
from singletimer.core.timer import Timer, TimerStatus

logger = logging.getLogger(__name__)

# Longest duration a timer may be started with (24 hours).
MAX_DURATION = Duration.of_hours(24)


class TimerPolicy:
    """Domain rules applied to a timer owned by the caller.

    Holds no state of its own; every method takes the timer to inspect.
    """

    def can_start(self, timer: Timer, duration: Optional[Duration]) -> bool:
        if timer.status == TimerStatus.RUNNING:
            return False
        if duration is None or duration.is_zero():
            return False
        if duration > MAX_DURATION:
            return False
        return True

    def can_pause(self, timer: Timer) -> bool:
        return timer.status == TimerStatus.RUNNING

    def can_resume(self, timer: Timer) -> bool:
        return timer.status == TimerStatus.PAUSED and timer.remaining_at_pause.is_positive()

    def complete_if_finished(self, timer: Timer) -> bool:
        """Reset a running timer whose time is up.

        Returns:
            True if the timer had finished and was reset, False otherwise.
        """
        if not timer.is_completed():
            return False
        logger.info(
            f"Timer {timer.id} completed after {timer.configured_duration.format()}, resetting"
        )
        timer.reset()
        return True

    def validate(self, timer: Optional[Timer]) -> None:
        """Check the timer is usable and self-heal a finished one.

        Raises:
            NullTimerError: If *timer* is None.
            MissingIdentifierError: If the timer has no id.
        """
        if timer is None:
            raise NullTimerError("Timer cannot be null")
        if timer.id is None:
            raise MissingIdentifierError("Timer ID cannot be null")
        self.complete_if_finished(timer)
