"""Timer core — a pure state-machine countdown timer."""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from singletimer.core.duration import Duration
from singletimer.core.errors import (
    AlreadyRunningError,
    CannotResumeError,
    MissingIdentifierError,
    NotRunningError,
)

# Returns the current wall-clock time in (possibly fractional) epoch seconds.
Clock = Callable[[], float]


class TimerStatus(Enum):
    """Possible states of the timer.

    ``COMPLETED`` is never stored: it is derived for a running timer whose
    time has elapsed, until the policy service resets it.
    """

    STOPPED = "STOPPED"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"


@dataclass(frozen=True)
class TimerId:
    """Opaque, non-empty timer identifier."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise MissingIdentifierError("TimerId cannot be null or empty")

    @classmethod
    def generate(cls) -> TimerId:
        return cls(str(uuid.uuid4()))

    def __str__(self) -> str:
        return self.value


class Timer:
    """A countdown timer whose remaining time is computed on every read.

    Elapsed time is measured in whole wall-clock seconds taken from the
    injected *clock*; fractions are truncated so a running timer's remaining
    time never goes up between reads.  No locking happens here: callers must
    hold the repository's lock while mutating.
    """

    def __init__(self, timer_id: TimerId, clock: Optional[Clock] = None) -> None:
        self._id = timer_id
        self._clock: Clock = clock if clock is not None else time.time
        self._status = TimerStatus.STOPPED
        self._configured_duration = Duration.ZERO
        self._started_at: Optional[int] = None
        self._remaining_at_pause = Duration.ZERO

    # -- attributes ----------------------------------------------------------

    @property
    def id(self) -> TimerId:
        return self._id

    @property
    def status(self) -> TimerStatus:
        return self._status

    @property
    def configured_duration(self) -> Duration:
        return self._configured_duration

    @property
    def started_at(self) -> Optional[int]:
        """Epoch second of the last start/resume; stale while paused."""
        return self._started_at

    @property
    def remaining_at_pause(self) -> Duration:
        """Only meaningful while PAUSED; reset to the full duration on resume."""
        return self._remaining_at_pause

    # -- transitions ---------------------------------------------------------

    def start(self, duration: Duration) -> None:
        """Start counting down *duration*.  Valid from any state but RUNNING."""
        if self._status == TimerStatus.RUNNING:
            raise AlreadyRunningError("Timer is already running")

        self._configured_duration = duration
        self._remaining_at_pause = duration
        self._begin_running()

    def pause(self) -> None:
        """Freeze the remaining time.  Valid only from RUNNING."""
        if self._status != TimerStatus.RUNNING:
            raise NotRunningError("Timer is not running")

        self._remaining_at_pause = self._configured_duration - self._elapsed()
        self._status = TimerStatus.PAUSED

    def resume(self) -> None:
        """Continue from the paused remaining time.

        Valid only from PAUSED with time left on the clock.
        """
        if self._status != TimerStatus.PAUSED or self._remaining_at_pause.is_zero():
            raise CannotResumeError("Cannot resume timer in current state")

        # The frozen remaining time becomes the new baseline.
        self._configured_duration = self._remaining_at_pause
        self._begin_running()
        self._remaining_at_pause = self._configured_duration

    def reset(self) -> None:
        """Return to STOPPED with everything cleared.  Always succeeds."""
        self._status = TimerStatus.STOPPED
        self._configured_duration = Duration.ZERO
        self._remaining_at_pause = Duration.ZERO
        self._started_at = None

    # -- queries -------------------------------------------------------------

    def current_remaining(self) -> Duration:
        if self._status == TimerStatus.RUNNING and self._started_at is not None:
            return self._configured_duration - self._elapsed()
        if self._status == TimerStatus.PAUSED:
            return self._remaining_at_pause
        return Duration.ZERO

    def is_completed(self) -> bool:
        """True for a RUNNING timer with no time left.  Does not transition."""
        return self._status == TimerStatus.RUNNING and self.current_remaining().is_zero()

    def effective_status(self) -> TimerStatus:
        """Stored status, reporting COMPLETED for an elapsed running timer."""
        if self.is_completed():
            return TimerStatus.COMPLETED
        return self._status

    def __repr__(self) -> str:
        return (
            f"Timer(id={self._id.value!r}, status={self._status.value}, "
            f"configured={self._configured_duration.seconds}s, "
            f"remaining_at_pause={self._remaining_at_pause.seconds}s)"
        )

    # -- private helpers -----------------------------------------------------

    def _now(self) -> int:
        return int(self._clock())

    def _elapsed(self) -> Duration:
        if self._started_at is None:
            return Duration.ZERO
        # A clock that stepped backwards counts as no time elapsed.
        return Duration(max(0, self._now() - self._started_at))

    def _begin_running(self) -> None:
        """Record the start instant and enter the RUNNING state."""
        self._started_at = self._now()
        self._status = TimerStatus.RUNNING
