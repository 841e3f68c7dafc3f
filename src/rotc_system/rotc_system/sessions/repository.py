from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..geo.model import GeoPoint
from .model import AttendanceSession


class SessionRepository(Protocol):
    """Store boundary for attendance sessions.

    Services depend on this interface, never on a concrete database.
    """

    def create(
        self,
        *,
        center: GeoPoint,
        radius_meters: float,
        start_time: datetime,
        end_time: datetime,
        time_limit_minutes: float,
        created_by: int,
        battalion_id: Optional[int] = None,
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, session_id: int) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceSession]:
        """Newest first (by start_time)."""

        raise NotImplementedError

    def list_active(self) -> Sequence[AttendanceSession]:
        raise NotImplementedError

    def mark_completed(self, *, session_id: int, completed_at: datetime) -> bool:
        """Flip an active session to completed.

        Returns False when the row was already completed (or missing), which
        lets concurrent completions converge without double work.
        """

        raise NotImplementedError

    def delete(self, session_id: int) -> bool:
        """Remove the session and its attendance records in one transaction."""

        raise NotImplementedError
