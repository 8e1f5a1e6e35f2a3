"""Error codes and the typed failures raised by the timer core."""

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    """Fixed catalogue of failure kinds, each with a stable code and message."""

    TIMER_ALREADY_RUNNING = ("TIMER_001", "Timer is already running", 409)
    TIMER_NOT_RUNNING = ("TIMER_002", "Timer is not running", 409)
    TIMER_CANNOT_RESUME = ("TIMER_004", "Timer cannot be resumed in its current state", 409)

    INVALID_DURATION = ("VALIDATION_001", "Invalid duration", 400)
    DURATION_TOO_SHORT = ("VALIDATION_002", "Timer duration is too short", 400)
    DURATION_TOO_LONG = ("VALIDATION_003", "Timer duration is too long (max 24 hours)", 400)
    INVALID_PARAMETER = ("VALIDATION_004", "Invalid parameter", 400)

    INTERNAL_SERVER_ERROR = ("SYSTEM_001", "Internal server error", 500)
    DATA_ACCESS_ERROR = ("SYSTEM_002", "Error while accessing timer data", 500)

    def __init__(self, code: str, message: str, http_status: int) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status


class TimerError(Exception):
    """Base class for every failure raised by the timer core."""

    default_code: ErrorCode = ErrorCode.INTERNAL_SERVER_ERROR

    def __init__(self, message: str | None = None, code: ErrorCode | None = None) -> None:
        self.code: ErrorCode = code if code is not None else self.default_code
        super().__init__(message if message is not None else self.code.message)


class InvalidDurationError(TimerError, ValueError):
    """Raised for negative, zero, or over-ceiling durations."""

    default_code = ErrorCode.INVALID_DURATION


class InvalidStateError(TimerError):
    """Raised when a transition is not valid from the timer's current state."""


class AlreadyRunningError(InvalidStateError):
    default_code = ErrorCode.TIMER_ALREADY_RUNNING


class NotRunningError(InvalidStateError):
    default_code = ErrorCode.TIMER_NOT_RUNNING


class CannotResumeError(InvalidStateError):
    default_code = ErrorCode.TIMER_CANNOT_RESUME


class TimerIntegrityError(TimerError):
    """The repository handed back something that is not a usable timer."""

    default_code = ErrorCode.DATA_ACCESS_ERROR


class NullTimerError(TimerIntegrityError):
    pass


class MissingIdentifierError(TimerIntegrityError):
    pass
