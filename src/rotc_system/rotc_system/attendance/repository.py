from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from ..geo.model import GeoPoint
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def create(
        self,
        *,
        session_id: int,
        cadet_id: int,
        timestamp: datetime,
        location: Optional[GeoPoint],
        distance_meters: Optional[float],
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> int:
        """Insert one record.

        Must raise ``DuplicateCheckIn`` when (session_id, cadet_id) already
        exists; implementations back this with a uniqueness constraint.
        """

        raise NotImplementedError

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_session_and_cadet(self, session_id: int, cadet_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_by_session(self, session_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_for_cadet_between(self, *, cadet_id: int, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        """Records of a cadet whose session started within [start_date, end_date]."""

        raise NotImplementedError
