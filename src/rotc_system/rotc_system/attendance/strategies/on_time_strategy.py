from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...sessions.model import AttendanceSession
from .base import AttendanceStrategy, StatusDecision


class OnTimeStrategy(AttendanceStrategy):
    """Check-in inside the on-time portion of the window."""

    def decide(self, *, submitted_time: Optional[datetime], session: AttendanceSession) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
