"""Duration — an immutable, non-negative whole number of seconds."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from singletimer.core.errors import InvalidDurationError

_SECONDS_PER_MINUTE = 60
_SECONDS_PER_HOUR = 3600


@dataclass(frozen=True, order=True)
class Duration:
    """A count of whole seconds that can never be negative.

    Subtraction truncates at zero instead of failing, so time arithmetic on
    a countdown can never produce a negative remaining value.
    """

    seconds: int

    ZERO: ClassVar[Duration]

    def __post_init__(self) -> None:
        if isinstance(self.seconds, bool) or not isinstance(self.seconds, int):
            raise TypeError(
                f"seconds must be an integer, got {type(self.seconds).__name__}"
            )
        if self.seconds < 0:
            raise InvalidDurationError(f"Duration cannot be negative, got {self.seconds}")

    # -- constructors --------------------------------------------------------

    @classmethod
    def of(cls, seconds: int) -> Duration:
        return cls(seconds)

    @classmethod
    def of_minutes(cls, minutes: int) -> Duration:
        return cls(minutes * _SECONDS_PER_MINUTE)

    @classmethod
    def of_hours(cls, hours: int) -> Duration:
        return cls(hours * _SECONDS_PER_HOUR)

    # -- arithmetic ----------------------------------------------------------

    def __add__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.seconds + other.seconds)

    def __sub__(self, other: Duration) -> Duration:
        """Subtract *other*, flooring the result at zero."""
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(max(0, self.seconds - other.seconds))

    # -- queries -------------------------------------------------------------

    @property
    def hours(self) -> int:
        return self.seconds // _SECONDS_PER_HOUR

    @property
    def minutes(self) -> int:
        """Total whole minutes (not the minutes component)."""
        return self.seconds // _SECONDS_PER_MINUTE

    def is_zero(self) -> bool:
        return self.seconds == 0

    def is_positive(self) -> bool:
        return self.seconds > 0

    def parts(self) -> tuple[int, int, int]:
        """Return ``(hours, minutes, seconds)`` for display."""
        hours, rest = divmod(self.seconds, _SECONDS_PER_HOUR)
        minutes, secs = divmod(rest, _SECONDS_PER_MINUTE)
        return hours, minutes, secs

    def format(self) -> str:
        """Format as ``HH:MM:SS``; hours are not wrapped at 24."""
        hours, minutes, secs = self.parts()
        return f"{hours:02d}:{minutes:02d}:{secs:02d}"

    def __str__(self) -> str:
        return self.format()


Duration.ZERO = Duration(0)
