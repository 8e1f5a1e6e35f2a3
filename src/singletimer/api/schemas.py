"""Request and response schemas for the timer API"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from singletimer.core.service import TimerSnapshot
from singletimer.core.timer import TimerStatus


class TimerStateResponse(BaseModel):
    """Timer state as returned by every /api/timer endpoint"""
    model_config = ConfigDict(populate_by_name=True)

    running: bool
    status: TimerStatus
    start_time: int = Field(alias="startTime")  # epoch seconds, 0 if never started
    duration_seconds: int = Field(alias="durationSeconds")
    remaining_seconds: int = Field(alias="remainingSeconds")  # remaining at last transition
    current_remaining_seconds: int = Field(alias="currentRemainingSeconds")

    @classmethod
    def from_snapshot(cls, snapshot: TimerSnapshot) -> "TimerStateResponse":
        return cls(
            running=snapshot.running,
            status=snapshot.status,
            start_time=snapshot.started_at_epoch_seconds,
            duration_seconds=snapshot.configured_duration_seconds,
            remaining_seconds=snapshot.remaining_at_transition_seconds,
            current_remaining_seconds=snapshot.current_remaining_seconds,
        )


class ErrorResponse(BaseModel):
    """Common body for every error response"""
    code: str
    message: str
    details: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.now)
    path: str
