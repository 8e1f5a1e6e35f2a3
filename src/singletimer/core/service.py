"""Timer service — orchestrates the single timer and its persistence."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from singletimer.core.duration import Duration
from singletimer.core.errors import (
    AlreadyRunningError,
    CannotResumeError,
    ErrorCode,
    InvalidDurationError,
    NotRunningError,
)
from singletimer.core.policy import MAX_DURATION, TimerPolicy
from singletimer.core.repository import TimerRepository
from singletimer.core.timer import Clock, Timer, TimerId, TimerStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimerSnapshot:
    """Point-in-time view of the timer handed to the presentation layer."""

    running: bool
    status: TimerStatus
    started_at_epoch_seconds: int
    configured_duration_seconds: int
    remaining_at_transition_seconds: int
    current_remaining_seconds: int

    @classmethod
    def from_timer(cls, timer: Timer) -> TimerSnapshot:
        started_at = timer.started_at
        return cls(
            running=timer.status == TimerStatus.RUNNING,
            status=timer.effective_status(),
            started_at_epoch_seconds=started_at if started_at is not None else 0,
            configured_duration_seconds=timer.configured_duration.seconds,
            remaining_at_transition_seconds=timer.remaining_at_pause.seconds,
            current_remaining_seconds=timer.current_remaining().seconds,
        )


class TimerService:
    """Runs the timer use cases against exactly one timer.

    Every operation loads the timer under the repository lock, applies one
    transition, saves it back, and returns a :class:`TimerSnapshot`.  Failed
    transitions raise and leave the stored timer untouched.
    """

    def __init__(
        self,
        repository: TimerRepository,
        timer_id: TimerId,
        policy: Optional[TimerPolicy] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self._repository = repository
        self._timer_id = timer_id
        self._policy = policy if policy is not None else TimerPolicy()
        self._clock = clock

    @property
    def timer_id(self) -> TimerId:
        return self._timer_id

    # -- public API ----------------------------------------------------------

    def current_state(self) -> TimerSnapshot:
        """Return the timer's state, resetting it first if its time is up."""
        with self._repository.locked():
            timer = self._get_or_create()
            finished = timer.is_completed()
            self._policy.validate(timer)
            if finished:
                self._repository.save(timer)
            return TimerSnapshot.from_timer(timer)

    def start(self, duration_seconds: int) -> TimerSnapshot:
        """Start the timer for *duration_seconds* (1 to 86400).

        Raises:
            InvalidDurationError: If the duration is out of range.
            AlreadyRunningError: If the timer is already running.
        """
        duration = _requested_duration(duration_seconds)
        with self._repository.locked():
            timer = self._get_or_create()
            if not self._policy.can_start(timer, duration):
                raise AlreadyRunningError("Cannot start timer in current state")
            timer.start(duration)
            self._repository.save(timer)
            logger.info(f"Timer {timer.id} started for {duration.format()}")
            return TimerSnapshot.from_timer(timer)

    def pause(self) -> TimerSnapshot:
        with self._repository.locked():
            timer = self._get_or_create()
            if not self._policy.can_pause(timer):
                raise NotRunningError("Cannot pause timer in current state")
            timer.pause()
            self._repository.save(timer)
            logger.info(
                f"Timer {timer.id} paused with {timer.remaining_at_pause.format()} remaining"
            )
            return TimerSnapshot.from_timer(timer)

    def resume(self) -> TimerSnapshot:
        with self._repository.locked():
            timer = self._get_or_create()
            if not self._policy.can_resume(timer):
                raise CannotResumeError("Cannot resume timer in current state")
            timer.resume()
            self._repository.save(timer)
            logger.info(
                f"Timer {timer.id} resumed with {timer.configured_duration.format()} remaining"
            )
            return TimerSnapshot.from_timer(timer)

    def reset(self) -> TimerSnapshot:
        """Stop and clear the timer.  Never fails."""
        with self._repository.locked():
            timer = self._get_or_create()
            timer.reset()
            self._repository.save(timer)
            logger.info(f"Timer {timer.id} reset")
            return TimerSnapshot.from_timer(timer)

    # -- private helpers -----------------------------------------------------

    def _get_or_create(self) -> Timer:
        """Load the managed timer, creating and saving it on first access."""
        timer = self._repository.get(self._timer_id)
        if timer is None:
            timer = Timer(self._timer_id, clock=self._clock)
            self._repository.save(timer)
            logger.info(f"Created timer {self._timer_id}")
        return timer


def _requested_duration(duration_seconds: int) -> Duration:
    """Turn a requested second count into a Duration, enforcing 1..86400."""
    if isinstance(duration_seconds, bool) or not isinstance(duration_seconds, int):
        raise TypeError(
            f"duration_seconds must be an integer, got {type(duration_seconds).__name__}"
        )
    if duration_seconds <= 0:
        raise InvalidDurationError(
            f"Duration must be positive, got {duration_seconds}",
            code=ErrorCode.DURATION_TOO_SHORT,
        )
    if duration_seconds > MAX_DURATION.seconds:
        raise InvalidDurationError(
            f"Duration cannot exceed 24 hours, got {duration_seconds}",
            code=ErrorCode.DURATION_TOO_LONG,
        )
    return Duration(duration_seconds)
