from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import SessionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_int
from ..geo.model import GeoPoint
from .model import AttendanceSession
from .repository import SessionRepository

_COLUMNS = """
    session_id, center_lat, center_lng, radius_meters, start_time, end_time,
    time_limit_minutes, status, created_by, battalion_id, completed_at
"""


def _to_session(r: Dict[str, Any]) -> AttendanceSession:
    return AttendanceSession(
        session_id=int(r["session_id"]),
        center=GeoPoint(latitude=float(r["center_lat"]), longitude=float(r["center_lng"])),
        radius_meters=float(r["radius_meters"]),
        start_time=r["start_time"],
        end_time=r["end_time"],
        time_limit_minutes=float(r["time_limit_minutes"]),
        status=SessionStatus(r["status"]),
        created_by=int(r["created_by"]),
        battalion_id=optional_int(r.get("battalion_id")),
        completed_at=r.get("completed_at"),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_sessions(
                    center_lat, center_lng, radius_meters, start_time, end_time,
                    time_limit_minutes, status, created_by, battalion_id
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    center.latitude,
                    center.longitude,
                    float(radius_meters),
                    start_time,
                    end_time,
                    float(time_limit_minutes),
                    SessionStatus.ACTIVE.value,
                    int(created_by),
                    battalion_id,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, session_id: int) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_sessions WHERE session_id=%s", (int(session_id),))
            r = fetchone(cur)
            return _to_session(r) if r else None

    def list_all(self) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_sessions ORDER BY start_time DESC, session_id DESC")
            return [_to_session(r) for r in fetchall(cur)]

    def list_active(self) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_sessions WHERE status=%s ORDER BY start_time ASC",
                (SessionStatus.ACTIVE.value,),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def mark_completed(self, *, session_id: int, completed_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            # Conditional update: only one concurrent caller wins the transition.
            cur.execute(
                """
                UPDATE attendance_sessions
                SET status=%s, completed_at=%s
                WHERE session_id=%s AND status=%s
                """,
                (SessionStatus.COMPLETED.value, completed_at, int(session_id), SessionStatus.ACTIVE.value),
            )
            return cur.rowcount > 0

    def delete(self, session_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE session_id=%s", (int(session_id),))
            cur.execute("DELETE FROM attendance_sessions WHERE session_id=%s", (int(session_id),))
            return cur.rowcount > 0
