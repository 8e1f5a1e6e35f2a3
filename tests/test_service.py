"""Comprehensive tests for the TimerService application layer."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from singletimer.core.errors import (
    AlreadyRunningError,
    CannotResumeError,
    ErrorCode,
    InvalidDurationError,
    NotRunningError,
)
from singletimer.core.repository import InMemoryTimerRepository
from singletimer.core.service import TimerService, TimerSnapshot
from singletimer.core.timer import TimerId, TimerStatus

TIMER_ID = TimerId("service-timer")


@pytest.fixture()
def repository() -> InMemoryTimerRepository:
    return InMemoryTimerRepository()


@pytest.fixture()
def service(repository: InMemoryTimerRepository, clock) -> TimerService:
    return TimerService(repository, TIMER_ID, clock=clock)


# ---------------------------------------------------------------------------
# Lazy creation
# ---------------------------------------------------------------------------


class TestTimerCreation:
    """The managed timer is created and saved on first access."""

    def test_first_read_creates_timer(self, service: TimerService, repository) -> None:
        assert repository.get(TIMER_ID) is None
        service.current_state()
        assert repository.get(TIMER_ID) is not None

    def test_timer_is_created_only_once(self, service: TimerService, repository) -> None:
        service.current_state()
        created = repository.get(TIMER_ID)
        service.start(60)
        assert repository.get(TIMER_ID) is created
        assert len(repository) == 1

    def test_initial_snapshot(self, service: TimerService) -> None:
        assert service.current_state() == TimerSnapshot(
            running=False,
            status=TimerStatus.STOPPED,
            started_at_epoch_seconds=0,
            configured_duration_seconds=0,
            remaining_at_transition_seconds=0,
            current_remaining_seconds=0,
        )


# ---------------------------------------------------------------------------
# start()
# ---------------------------------------------------------------------------


class TestServiceStart:
    def test_start_returns_running_snapshot(self, service: TimerService, clock) -> None:
        snapshot = service.start(300)
        assert snapshot.running
        assert snapshot.status == TimerStatus.RUNNING
        assert snapshot.started_at_epoch_seconds == int(clock.now)
        assert snapshot.configured_duration_seconds == 300
        assert snapshot.remaining_at_transition_seconds == 300
        assert snapshot.current_remaining_seconds == 300

    def test_start_persists(self, service: TimerService, repository) -> None:
        service.start(300)
        assert repository.get(TIMER_ID).status == TimerStatus.RUNNING

    def test_start_when_running_raises_and_keeps_duration(self, service: TimerService) -> None:
        service.start(300)
        with pytest.raises(AlreadyRunningError) as excinfo:
            service.start(600)
        assert excinfo.value.code is ErrorCode.TIMER_ALREADY_RUNNING
        assert service.current_state().configured_duration_seconds == 300

    def test_start_accepts_24_hours(self, service: TimerService) -> None:
        assert service.start(86400).configured_duration_seconds == 86400

    @pytest.mark.parametrize(
        ("seconds", "code"),
        [
            (0, ErrorCode.DURATION_TOO_SHORT),
            (-5, ErrorCode.DURATION_TOO_SHORT),
            (86401, ErrorCode.DURATION_TOO_LONG),
        ],
    )
    def test_out_of_range_duration_raises(self, service: TimerService, seconds: int, code: ErrorCode) -> None:
        with pytest.raises(InvalidDurationError) as excinfo:
            service.start(seconds)
        assert excinfo.value.code is code

    def test_invalid_duration_does_not_touch_state(self, service: TimerService) -> None:
        service.start(300)
        service.pause()
        with pytest.raises(InvalidDurationError):
            service.start(0)
        assert service.current_state().status == TimerStatus.PAUSED

    def test_non_integer_duration_raises_type_error(self, service: TimerService) -> None:
        with pytest.raises(TypeError):
            service.start(1.5)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# pause() / resume()
# ---------------------------------------------------------------------------


class TestServicePauseResume:
    def test_pause_captures_remaining(self, service: TimerService, clock) -> None:
        service.start(300)
        clock.advance(20)
        snapshot = service.pause()
        assert not snapshot.running
        assert snapshot.status == TimerStatus.PAUSED
        assert snapshot.remaining_at_transition_seconds == 280
        assert snapshot.current_remaining_seconds == 280

    def test_pause_when_stopped_raises(self, service: TimerService) -> None:
        with pytest.raises(NotRunningError):
            service.pause()

    def test_pause_resume_round_trip(self, service: TimerService, clock) -> None:
        service.start(300)
        clock.advance(100)
        service.pause()
        clock.advance(500)
        snapshot = service.resume()
        assert snapshot.running
        assert snapshot.configured_duration_seconds == 200
        assert snapshot.current_remaining_seconds == 200

    def test_resume_when_not_paused_raises(self, service: TimerService) -> None:
        with pytest.raises(CannotResumeError):
            service.resume()
        service.start(60)
        with pytest.raises(CannotResumeError):
            service.resume()

    def test_resume_blocked_at_zero(self, service: TimerService, clock) -> None:
        service.start(1)
        clock.advance(2)
        assert service.pause().remaining_at_transition_seconds == 0
        with pytest.raises(CannotResumeError):
            service.resume()

    def test_repeated_rejection_is_deterministic(self, service: TimerService) -> None:
        for _ in range(3):
            with pytest.raises(NotRunningError):
                service.pause()


# ---------------------------------------------------------------------------
# reset() / current_state()
# ---------------------------------------------------------------------------


class TestServiceResetAndState:
    @pytest.mark.parametrize("setup", ["stopped", "running", "paused"])
    def test_reset_from_any_state(self, service: TimerService, setup: str) -> None:
        if setup != "stopped":
            service.start(300)
        if setup == "paused":
            service.pause()
        first = service.reset()
        second = service.reset()
        assert first == second
        assert first.status == TimerStatus.STOPPED
        assert first.started_at_epoch_seconds == 0
        assert first.configured_duration_seconds == 0
        assert first.remaining_at_transition_seconds == 0

    def test_current_state_tracks_clock(self, service: TimerService, clock) -> None:
        service.start(60)
        clock.advance(15)
        assert service.current_state().current_remaining_seconds == 45

    def test_current_state_auto_completes(self, service: TimerService, repository, clock) -> None:
        service.start(1)
        clock.advance(1.5)
        snapshot = service.current_state()
        assert snapshot.status == TimerStatus.STOPPED
        assert not snapshot.running
        assert snapshot.current_remaining_seconds == 0
        assert repository.get(TIMER_ID).status == TimerStatus.STOPPED

    def test_timer_can_start_again_after_completion(self, service: TimerService, clock) -> None:
        service.start(5)
        clock.advance(10)
        service.current_state()
        assert service.start(30).configured_duration_seconds == 30

    def test_paused_state_is_stable(self, service: TimerService, clock) -> None:
        service.start(60)
        clock.advance(10)
        service.pause()
        clock.advance(1000)
        snapshot = service.current_state()
        assert snapshot.status == TimerStatus.PAUSED
        assert snapshot.current_remaining_seconds == 50


# ---------------------------------------------------------------------------
# Concurrency
# ---------------------------------------------------------------------------


class TestServiceConcurrency:
    def test_concurrent_starts_admit_exactly_one(self, service: TimerService) -> None:
        def attempt(seconds: int) -> bool:
            try:
                service.start(seconds)
            except AlreadyRunningError:
                return False
            return True

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(attempt, range(100, 132)))

        assert results.count(True) == 1
        winner = results.index(True) + 100
        assert service.current_state().configured_duration_seconds == winner
