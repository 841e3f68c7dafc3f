from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..sessions.model import AttendanceSession
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    ``on_time_ratio`` is the share of the window (from start_time) during which
    a check-in counts as present; the remainder counts as late.
    """

    on_time_ratio: float = 0.5

    def on_time_cutoff(self, session: AttendanceSession) -> datetime:
        return session.start_time + session.window * self.on_time_ratio

    def for_checkin(self, *, submitted_time: datetime, session: AttendanceSession) -> AttendanceStrategy:
        if submitted_time <= self.on_time_cutoff(session):
            return OnTimeStrategy()
        return LateStrategy()

    def for_missing(self) -> AttendanceStrategy:
        return AbsentStrategy()
