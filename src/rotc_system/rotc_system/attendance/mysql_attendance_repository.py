from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Dict, Optional, Sequence

import mysql.connector
from mysql.connector import errorcode

from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateCheckIn
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_float
from ..geo.model import GeoPoint
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    ar.record_id, ar.session_id, ar.cadet_id, ar.`timestamp`,
    ar.latitude, ar.longitude, ar.distance_meters, ar.status, ar.note
"""


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    location = None
    if r.get("latitude") is not None and r.get("longitude") is not None:
        location = GeoPoint(latitude=float(r["latitude"]), longitude=float(r["longitude"]))
    return AttendanceRecord(
        record_id=int(r["record_id"]),
        session_id=int(r["session_id"]),
        cadet_id=int(r["cadet_id"]),
        timestamp=r["timestamp"],
        location=location,
        distance_meters=optional_float(r.get("distance_meters")),
        status=AttendanceStatus(r["status"]),
        note=r.get("note"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        session_id, cadet_id, `timestamp`, latitude, longitude, distance_meters, status, note
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(session_id),
                        int(cadet_id),
                        timestamp,
                        location.latitude if location else None,
                        location.longitude if location else None,
                        distance_meters,
                        status.value,
                        note,
                    ),
                )
                return int(cur.lastrowid)
        except mysql.connector.IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise DuplicateCheckIn(f"Cadet {cadet_id} already has a record for session {session_id}") from e
            raise

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records ar WHERE ar.record_id=%s", (int(record_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_session_and_cadet(self, session_id: int, cadet_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records ar WHERE ar.session_id=%s AND ar.cadet_id=%s",
                (int(session_id), int(cadet_id)),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_by_session(self, session_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records ar
                WHERE ar.session_id=%s
                ORDER BY ar.`timestamp` DESC, ar.record_id DESC
                """,
                (int(session_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_for_cadet_between(self, *, cadet_id: int, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records ar
                JOIN attendance_sessions s ON s.session_id = ar.session_id
                WHERE ar.cadet_id=%s AND s.start_time >= %s AND s.start_time < %s
                ORDER BY s.start_time ASC
                """,
                (int(cadet_id), start_date, end_date + timedelta(days=1)),
            )
            return [_to_record(r) for r in fetchall(cur)]

