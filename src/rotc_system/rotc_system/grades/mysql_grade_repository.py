from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import GradeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import GradeInputs, GradeRecord, GradeResult
from .repository import GradeRepository

_COLUMNS = """
    cadet_id, term_id, attendance_days_present, merit, demerit, exam_score_raw,
    attendance_score, ttl, aptitude_score, final_grade, exam_grade, overall_grade,
    equivalent, status, instructor_notes, updated_at
"""


def _to_record(r: Dict[str, Any]) -> GradeRecord:
    return GradeRecord(
        cadet_id=int(r["cadet_id"]),
        term_id=int(r["term_id"]),
        inputs=GradeInputs(
            attendance_days_present=int(r["attendance_days_present"]),
            merit=float(r["merit"]),
            demerit=float(r["demerit"]),
            exam_score_raw=float(r["exam_score_raw"]),
        ),
        result=GradeResult(
            attendance_score=float(r["attendance_score"]),
            ttl=float(r["ttl"]),
            aptitude_score=float(r["aptitude_score"]),
            final_grade=float(r["final_grade"]),
            exam_grade=float(r["exam_grade"]),
            overall_grade=float(r["overall_grade"]),
            equivalent=float(r["equivalent"]),
            status=GradeStatus(r["status"]),
        ),
        notes=r.get("instructor_notes"),
        updated_at=r.get("updated_at"),
    )


class MySQLGradeRepository(GradeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(
        self,
        *,
        cadet_id: int,
        term_id: int,
        inputs: GradeInputs,
        result: GradeResult,
        notes: Optional[str],
        updated_at: datetime,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO rotc_grades(
                    cadet_id, term_id, attendance_days_present, merit, demerit, exam_score_raw,
                    attendance_score, ttl, aptitude_score, final_grade, exam_grade, overall_grade,
                    equivalent, status, instructor_notes, updated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    attendance_days_present=VALUES(attendance_days_present),
                    merit=VALUES(merit),
                    demerit=VALUES(demerit),
                    exam_score_raw=VALUES(exam_score_raw),
                    attendance_score=VALUES(attendance_score),
                    ttl=VALUES(ttl),
                    aptitude_score=VALUES(aptitude_score),
                    final_grade=VALUES(final_grade),
                    exam_grade=VALUES(exam_grade),
                    overall_grade=VALUES(overall_grade),
                    equivalent=VALUES(equivalent),
                    status=VALUES(status),
                    instructor_notes=VALUES(instructor_notes),
                    updated_at=VALUES(updated_at)
                """,
                (
                    int(cadet_id),
                    int(term_id),
                    int(inputs.attendance_days_present),
                    float(inputs.merit),
                    float(inputs.demerit),
                    float(inputs.exam_score_raw),
                    result.attendance_score,
                    result.ttl,
                    result.aptitude_score,
                    result.final_grade,
                    result.exam_grade,
                    result.overall_grade,
                    result.equivalent,
                    result.status.value,
                    notes,
                    updated_at,
                ),
            )

    def get(self, *, cadet_id: int, term_id: int) -> Optional[GradeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM rotc_grades WHERE cadet_id=%s AND term_id=%s",
                (int(cadet_id), int(term_id)),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_by_term(self, term_id: int) -> Sequence[GradeRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM rotc_grades WHERE term_id=%s ORDER BY overall_grade DESC, cadet_id ASC",
                (int(term_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]
