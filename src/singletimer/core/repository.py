"""Timer storage contract and its in-memory implementation."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import ContextManager, Dict, Iterator, Optional, Protocol

from singletimer.core.errors import MissingIdentifierError, NullTimerError
from singletimer.core.timer import Timer, TimerId

logger = logging.getLogger(__name__)


class TimerRepository(Protocol):
    """Storage for timers, keyed by :class:`TimerId`.

    Implementations are the only serialization point of the service:
    ``locked()`` must grant exclusive access for a whole read-modify-write,
    and ``get``/``save`` must be linearizable with respect to each other.
    """

    def get(self, timer_id: TimerId) -> Optional[Timer]:
        ...

    def save(self, timer: Timer) -> None:
        ...

    def delete(self, timer_id: TimerId) -> None:
        ...

    def delete_all(self) -> None:
        ...

    def locked(self) -> ContextManager[None]:
        ...


class InMemoryTimerRepository:
    """Process-local timer store guarded by a single re-entrant lock."""

    def __init__(self) -> None:
        self._timers: Dict[str, Timer] = {}
        self._lock = threading.RLock()

    @contextmanager
    def locked(self) -> Iterator[None]:
        with self._lock:
            yield

    def get(self, timer_id: TimerId) -> Optional[Timer]:
        if timer_id is None:
            raise MissingIdentifierError("TimerId cannot be null")
        with self._lock:
            return self._timers.get(timer_id.value)

    def save(self, timer: Timer) -> None:
        if timer is None:
            raise NullTimerError("Timer cannot be null")
        if timer.id is None:
            raise MissingIdentifierError("TimerId cannot be null")
        with self._lock:
            self._timers[timer.id.value] = timer

    def delete(self, timer_id: TimerId) -> None:
        if timer_id is None:
            raise MissingIdentifierError("TimerId cannot be null")
        with self._lock:
            removed = self._timers.pop(timer_id.value, None)
        if removed is not None:
            logger.info(f"Deleted timer {timer_id}")

    def delete_all(self) -> None:
        with self._lock:
            count = len(self._timers)
            self._timers.clear()
        logger.info(f"Deleted all timers ({count})")

    def __len__(self) -> int:
        with self._lock:
            return len(self._timers)
