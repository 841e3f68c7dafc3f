from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Optional

import pytest

from src.rotc_system.rotc_system.attendance.model import AttendanceRecord
from src.rotc_system.rotc_system.cadets.model import Cadet
from src.rotc_system.rotc_system.container import wire
from src.rotc_system.rotc_system.core.enums import SessionStatus
from src.rotc_system.rotc_system.core.exceptions import DuplicateCheckIn
from src.rotc_system.rotc_system.geo.model import GeoPoint
from src.rotc_system.rotc_system.grades.model import GradeRecord
from src.rotc_system.rotc_system.sessions.model import AttendanceSession
from src.rotc_system.rotc_system.terms.model import Term

SESSION_START = datetime(2025, 8, 16, 18, 30, 0)
CAMPUS = GeoPoint(latitude=13.6151, longitude=123.4835)


class FixedClock:
    def __init__(self, current: datetime):
        self.current = current

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs) -> None:
        self.current = self.current + timedelta(**kwargs)


class InMemorySessions:
    def __init__(self):
        self.by_id: dict[int, AttendanceSession] = {}
        self._id = 0
        self.on_delete: list = []

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
        self._id += 1
        self.by_id[self._id] = AttendanceSession(
            session_id=self._id,
            center=center,
            radius_meters=radius_meters,
            start_time=start_time,
            end_time=end_time,
            time_limit_minutes=time_limit_minutes,
            status=SessionStatus.ACTIVE,
            created_by=created_by,
            battalion_id=battalion_id,
        )
        return self._id

    def get_by_id(self, session_id: int) -> Optional[AttendanceSession]:
        return self.by_id.get(session_id)

    def list_all(self):
        return sorted(self.by_id.values(), key=lambda s: s.start_time, reverse=True)

    def list_active(self):
        return sorted((s for s in self.by_id.values() if s.is_active), key=lambda s: s.start_time)

    def mark_completed(self, *, session_id: int, completed_at: datetime) -> bool:
        session = self.by_id.get(session_id)
        if session is None or not session.is_active:
            return False
        self.by_id[session_id] = session.completed(completed_at)
        return True

    def delete(self, session_id: int) -> bool:
        if self.by_id.pop(session_id, None) is None:
            return False
        for cascade in self.on_delete:
            cascade(session_id)
        return True


class InMemoryAttendance:
    def __init__(self, sessions: InMemorySessions):
        self._sessions = sessions
        sessions.on_delete.append(self._drop_session)
        self.by_id: dict[int, AttendanceRecord] = {}
        self._id = 0

    def create(self, *, session_id, cadet_id, timestamp, location, distance_meters, status, note=None) -> int:
        if self.get_for_session_and_cadet(session_id, cadet_id) is not None:
            raise DuplicateCheckIn(f"Cadet {cadet_id} already has a record in session {session_id}")
        self._id += 1
        self.by_id[self._id] = AttendanceRecord(
            record_id=self._id,
            session_id=session_id,
            cadet_id=cadet_id,
            timestamp=timestamp,
            location=location,
            distance_meters=distance_meters,
            status=status,
            note=note,
        )
        return self._id

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        return self.by_id.get(record_id)

    def get_for_session_and_cadet(self, session_id: int, cadet_id: int) -> Optional[AttendanceRecord]:
        for r in self.by_id.values():
            if r.session_id == session_id and r.cadet_id == cadet_id:
                return r
        return None

    def list_by_session(self, session_id: int):
        return [r for r in self.by_id.values() if r.session_id == session_id]

    def list_for_cadet_between(self, *, cadet_id: int, start_date: date, end_date: date):
        out = []
        for r in self.by_id.values():
            session = self._sessions.get_by_id(r.session_id)
            if r.cadet_id == cadet_id and session and start_date <= session.start_time.date() <= end_date:
                out.append(r)
        return out

    def _drop_session(self, session_id: int) -> None:
        doomed = [rid for rid, r in self.by_id.items() if r.session_id == session_id]
        for rid in doomed:
            del self.by_id[rid]


@dataclass
class InMemoryCadets:
    cadets: dict[int, Cadet]

    def get_by_id(self, cadet_id: int) -> Optional[Cadet]:
        return self.cadets.get(cadet_id)

    def list_enrolled(self, *, battalion_id: Optional[int] = None):
        return [
            c
            for c in self.cadets.values()
            if c.is_enrolled and (battalion_id is None or c.battalion_id == battalion_id)
        ]


@dataclass
class InMemoryTerms:
    terms: dict[int, Term]

    def get_by_id(self, term_id: int) -> Optional[Term]:
        return self.terms.get(term_id)


@dataclass
class InMemoryGrades:
    rows: dict[tuple[int, int], GradeRecord] = field(default_factory=dict)

    def upsert(self, *, cadet_id, term_id, inputs, result, notes, updated_at) -> None:
        self.rows[(cadet_id, term_id)] = GradeRecord(
            cadet_id=cadet_id,
            term_id=term_id,
            inputs=inputs,
            result=result,
            notes=notes,
            updated_at=updated_at,
        )

    def get(self, *, cadet_id: int, term_id: int) -> Optional[GradeRecord]:
        return self.rows.get((cadet_id, term_id))

    def list_by_term(self, term_id: int):
        return [r for (_, t), r in self.rows.items() if t == term_id]


@pytest.fixture
def clock():
    return FixedClock(SESSION_START)


@pytest.fixture
def cadets():
    return InMemoryCadets(
        {
            1: Cadet(cadet_id=1, full_name="Juan Dela Cruz", student_no="2025-0001", battalion_id=1),
            2: Cadet(cadet_id=2, full_name="Maria Santos", student_no="2025-0002", battalion_id=1),
            3: Cadet(cadet_id=3, full_name="Jose Rizal", student_no="2025-0003", battalion_id=2),
            4: Cadet(cadet_id=4, full_name="Andres Bonifacio", student_no="2025-0004", battalion_id=1, is_enrolled=False),
        }
    )


@pytest.fixture
def terms():
    return InMemoryTerms(
        {
            1: Term(term_id=1, name="SY2025-2026 1st", start_date=date(2025, 8, 1), end_date=date(2025, 12, 20), is_current=True),
            2: Term(term_id=2, name="SY2025-2026 2nd", start_date=date(2026, 1, 5), end_date=date(2026, 5, 20)),
        }
    )


@pytest.fixture
def sessions_repo():
    return InMemorySessions()


@pytest.fixture
def attendance_repo(sessions_repo):
    return InMemoryAttendance(sessions_repo)


@pytest.fixture
def grades_repo():
    return InMemoryGrades()


@pytest.fixture
def container(clock, cadets, terms, sessions_repo, attendance_repo, grades_repo):
    return wire(
        sessions_repo=sessions_repo,
        attendance_repo=attendance_repo,
        cadets_repo=cadets,
        terms_repo=terms,
        grades_repo=grades_repo,
        clock=clock,
    )


@pytest.fixture
def make_session(sessions_repo):
    """Insert a session straight into the repository, skipping create_session checks."""

    def _make(*, start=SESSION_START, minutes=30, radius=50.0, battalion_id=None, completed=False):
        sid = sessions_repo.create(
            center=CAMPUS,
            radius_meters=radius,
            start_time=start,
            end_time=start + timedelta(minutes=minutes),
            time_limit_minutes=minutes,
            created_by=99,
            battalion_id=battalion_id,
        )
        if completed:
            sessions_repo.by_id[sid] = sessions_repo.by_id[sid].completed(start + timedelta(minutes=minutes))
        return sessions_repo.get_by_id(sid)

    return _make


@pytest.fixture
def client(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.rotc_system.rotc_system.main import create_app

    app = create_app(container)
    return app.test_client()
