from __future__ import annotations

import logging
from collections import Counter
from datetime import datetime
from typing import Optional, Sequence

from ..cadets.repository import CadetRepository
from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateCheckIn, NotFound
from ..geo.model import GeoPoint
from ..sessions.model import AttendanceSession
from ..sessions.repository import SessionRepository
from ..terms.repository import TermRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, SessionSummary
from .repository import AttendanceRepository
from .strategies.base import StatusDecision

logger = logging.getLogger(__name__)


class AttendanceLedger:
    """Append/query side of attendance outcomes.

    The per-term aggregate computed here is the only input the grading side
    takes from attendance.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        sessions: SessionRepository,
        cadets: CadetRepository,
        terms: TermRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        count_late_as_present: bool = True,
    ):
        self._attendance = attendance
        self._sessions = sessions
        self._cadets = cadets
        self._terms = terms
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._count_late = bool(count_late_as_present)

    def find(self, session_id: int, cadet_id: int) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_session_and_cadet(int(session_id), int(cadet_id))

    def record(
        self,
        *,
        session: AttendanceSession,
        cadet_id: int,
        timestamp: datetime,
        location: Optional[GeoPoint],
        distance_meters: Optional[float],
        decision: StatusDecision,
    ) -> AttendanceRecord:
        record_id = self._attendance.create(
            session_id=session.session_id,
            cadet_id=int(cadet_id),
            timestamp=timestamp,
            location=location,
            distance_meters=distance_meters,
            status=decision.status,
            note=decision.note,
        )
        rec = self._attendance.get_by_id(record_id)
        if rec is None:
            raise NotFound(f"Attendance record {record_id} vanished after insert")
        return rec

    def fill_absent(self, session: AttendanceSession, *, at: datetime) -> int:
        """Write an absent row for every enrolled cadet in scope with no record."""

        seen = {r.cadet_id for r in self._attendance.list_by_session(session.session_id)}
        decision = self._factory.for_missing().decide(submitted_time=None, session=session)

        created = 0
        for cadet in self._cadets.list_enrolled(battalion_id=session.battalion_id):
            if cadet.cadet_id in seen:
                continue
            try:
                self._attendance.create(
                    session_id=session.session_id,
                    cadet_id=cadet.cadet_id,
                    timestamp=at,
                    location=None,
                    distance_meters=None,
                    status=decision.status,
                    note=decision.note,
                )
            except DuplicateCheckIn:
                # A check-in landed between the read above and this insert; it wins.
                logger.debug("Cadet %s checked in during close of session %s", cadet.cadet_id, session.session_id)
                continue
            created += 1
        return created

    def list_for_session(self, session_id: int) -> Sequence[AttendanceRecord]:
        if self._sessions.get_by_id(int(session_id)) is None:
            raise NotFound(f"Session {session_id} not found")
        return self._attendance.list_by_session(int(session_id))

    def session_summary(self, session_id: int) -> SessionSummary:
        counts = Counter(r.status for r in self.list_for_session(session_id))
        return SessionSummary(
            session_id=int(session_id),
            present=counts[AttendanceStatus.PRESENT],
            late=counts[AttendanceStatus.LATE],
            absent=counts[AttendanceStatus.ABSENT],
        )

    def list_for_cadet_in_term(self, cadet_id: int, term_id: int) -> Sequence[AttendanceRecord]:
        if self._cadets.get_by_id(int(cadet_id)) is None:
            raise NotFound(f"Cadet {cadet_id} not found")
        term = self._terms.get_by_id(int(term_id))
        if term is None:
            raise NotFound(f"Term {term_id} not found")
        return self._attendance.list_for_cadet_between(
            cadet_id=int(cadet_id),
            start_date=term.start_date,
            end_date=term.end_date,
        )

    def attendance_days_present(self, cadet_id: int, term_id: int) -> int:
        """Number of sessions in the term the cadet attended.

        Late check-ins count as attended unless ``count_late_as_present`` is off.
        """

        counted = {AttendanceStatus.PRESENT}
        if self._count_late:
            counted.add(AttendanceStatus.LATE)

        records = self.list_for_cadet_in_term(cadet_id, term_id)
        # Counts sessions, not rows.
        return len({r.session_id for r in records if r.status in counted})
