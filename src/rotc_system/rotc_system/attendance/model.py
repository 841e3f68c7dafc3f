from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus
from ..geo.model import GeoPoint


@dataclass(frozen=True)
class AttendanceRecord:
    """Outcome of one cadet for one session.

    ``location`` and ``distance_meters`` are None only for absent rows filled
    in when a session completes without a check-in from the cadet.
    """

    record_id: int
    session_id: int
    cadet_id: int
    timestamp: datetime
    location: Optional[GeoPoint]
    distance_meters: Optional[float]
    status: AttendanceStatus
    note: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "record_id": self.record_id,
            "session_id": self.session_id,
            "cadet_id": self.cadet_id,
            "timestamp": self.timestamp.isoformat(),
            "location": self.location.to_dict() if self.location else None,
            "distance_meters": round(self.distance_meters, 2) if self.distance_meters is not None else None,
            "status": self.status.value,
            "note": self.note,
        }


@dataclass(frozen=True)
class SessionSummary:
    session_id: int
    present: int
    late: int
    absent: int

    @property
    def total(self) -> int:
        return self.present + self.late + self.absent
