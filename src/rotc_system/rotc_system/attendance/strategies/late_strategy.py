from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...sessions.model import AttendanceSession
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in: inside the geofence, after the on-time cutoff."""

    def decide(self, *, submitted_time: Optional[datetime], session: AttendanceSession) -> StatusDecision:
        minutes = 0
        if submitted_time is not None:
            minutes = int((submitted_time - session.start_time).total_seconds() // 60)
        return StatusDecision(status=AttendanceStatus.LATE, note=f"Checked in {minutes} min after start")
