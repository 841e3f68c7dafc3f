from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceLedger
from .cadets.mysql_cadet_repository import MySQLCadetRepository
from .cadets.repository import CadetRepository
from .common.datetime_utils import Clock, SystemClock
from .core.constants import DEFAULT_ON_TIME_RATIO
from .database.connection import DatabaseConnection, DBConfig
from .grades.calculator.standard_calculator import StandardRotcCalculator
from .grades.mysql_grade_repository import MySQLGradeRepository
from .grades.repository import GradeRepository
from .grades.service import GradeService
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import AttendanceSessionService
from .terms.mysql_term_repository import MySQLTermRepository
from .terms.repository import TermRepository


@dataclass(frozen=True)
class Container:
    clock: Clock

    sessions_repo: SessionRepository
    attendance_repo: AttendanceRepository
    cadets_repo: CadetRepository
    terms_repo: TermRepository
    grades_repo: GradeRepository

    attendance_ledger: AttendanceLedger
    session_service: AttendanceSessionService
    grade_service: GradeService

    conn: Optional[DatabaseConnection] = None


def wire(
    *,
    sessions_repo: SessionRepository,
    attendance_repo: AttendanceRepository,
    cadets_repo: CadetRepository,
    terms_repo: TermRepository,
    grades_repo: GradeRepository,
    clock: Clock | None = None,
    on_time_ratio: float = DEFAULT_ON_TIME_RATIO,
    count_late_as_present: bool = True,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services over any set of repositories (MySQL in the app, in-memory in tests)."""

    clock = clock or SystemClock()
    factory = AttendanceStrategyFactory(on_time_ratio=float(on_time_ratio))

    attendance_ledger = AttendanceLedger(
        attendance_repo,
        sessions_repo,
        cadets_repo,
        terms_repo,
        strategy_factory=factory,
        count_late_as_present=count_late_as_present,
    )
    session_service = AttendanceSessionService(
        sessions_repo,
        attendance_ledger,
        cadets_repo,
        clock=clock,
        strategy_factory=factory,
    )
    grade_service = GradeService(
        grades_repo,
        cadets_repo,
        terms_repo,
        attendance_ledger,
        calculator=StandardRotcCalculator(),
        clock=clock,
    )

    return Container(
        clock=clock,
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        cadets_repo=cadets_repo,
        terms_repo=terms_repo,
        grades_repo=grades_repo,
        attendance_ledger=attendance_ledger,
        session_service=session_service,
        grade_service=grade_service,
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    clock: Clock | None = None,
    on_time_ratio: float = DEFAULT_ON_TIME_RATIO,
    count_late_as_present: bool = True,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return wire(
        sessions_repo=MySQLSessionRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        cadets_repo=MySQLCadetRepository(conn),
        terms_repo=MySQLTermRepository(conn),
        grades_repo=MySQLGradeRepository(conn),
        clock=clock,
        on_time_ratio=on_time_ratio,
        count_late_as_present=count_late_as_present,
        conn=conn,
    )
