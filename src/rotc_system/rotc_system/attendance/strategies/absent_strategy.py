from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...sessions.model import AttendanceSession
from .base import AttendanceStrategy, StatusDecision


class AbsentStrategy(AttendanceStrategy):
    """No check-in by the time the session completed."""

    def decide(self, *, submitted_time: Optional[datetime], session: AttendanceSession) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.ABSENT, note="No check-in before session closed")
