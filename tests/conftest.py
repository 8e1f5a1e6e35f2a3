"""Shared fixtures: a controllable wall clock."""

from __future__ import annotations

import pytest

_EPOCH_START = 1_700_000_000.0


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: float = _EPOCH_START) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    """Return a fake clock starting at a fixed epoch instant."""
    return FakeClock()
