from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Optional

from ..core.enums import SessionStatus
from ..geo.model import GeoPoint


@dataclass(frozen=True)
class AttendanceSession:
    """One supervised attendance window bounded by a geofence."""

    session_id: int
    center: GeoPoint
    radius_meters: float
    start_time: datetime
    end_time: datetime
    time_limit_minutes: float
    status: SessionStatus
    created_by: int
    battalion_id: Optional[int] = None
    completed_at: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.ACTIVE

    @property
    def window(self) -> timedelta:
        return self.end_time - self.start_time

    def is_expired(self, now: datetime) -> bool:
        return now > self.end_time

    def remaining(self, now: datetime) -> timedelta:
        """Countdown until the window closes; zero once it has passed."""
        if not self.is_active or now >= self.end_time:
            return timedelta(0)
        return self.end_time - max(now, self.start_time)

    def overlaps(self, start_time: datetime, end_time: datetime) -> bool:
        return self.start_time < end_time and start_time < self.end_time

    def shares_scope(self, battalion_id: Optional[int]) -> bool:
        # Corps-wide sessions (no battalion) conflict with every scope.
        return self.battalion_id is None or battalion_id is None or self.battalion_id == battalion_id

    def completed(self, at: datetime) -> "AttendanceSession":
        return replace(self, status=SessionStatus.COMPLETED, completed_at=at)

    def to_dict(self, now: Optional[datetime] = None) -> dict:
        data = {
            "session_id": self.session_id,
            "center": self.center.to_dict(),
            "radius_meters": self.radius_meters,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "time_limit_minutes": self.time_limit_minutes,
            "status": self.status.value,
            "created_by": self.created_by,
            "battalion_id": self.battalion_id,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }
        if now is not None:
            data["remaining_seconds"] = int(self.remaining(now).total_seconds())
        return data
