from datetime import datetime, timedelta

import pytest

from src.rotc_system.rotc_system.attendance.factory import AttendanceStrategyFactory
from src.rotc_system.rotc_system.attendance.service import AttendanceLedger
from src.rotc_system.rotc_system.core.enums import AttendanceStatus
from src.rotc_system.rotc_system.core.exceptions import NotFound

PRESENT = AttendanceStatus.PRESENT
LATE = AttendanceStatus.LATE
ABSENT = AttendanceStatus.ABSENT


def _mark(repo, session, cadet_id, status):
    repo.create(
        session_id=session.session_id,
        cadet_id=cadet_id,
        timestamp=session.start_time,
        location=None,
        distance_meters=None,
        status=status,
    )


@pytest.fixture
def semester(make_session, attendance_repo):
    """Four drills in the first term and one in the second."""

    drills = [make_session(start=datetime(2025, 8, 2 + 7 * i, 8, 0), completed=True) for i in range(4)]
    next_term = make_session(start=datetime(2026, 1, 10, 8, 0), completed=True)

    _mark(attendance_repo, drills[0], 1, PRESENT)
    _mark(attendance_repo, drills[1], 1, LATE)
    _mark(attendance_repo, drills[2], 1, ABSENT)
    _mark(attendance_repo, drills[3], 1, PRESENT)
    _mark(attendance_repo, next_term, 1, PRESENT)
    _mark(attendance_repo, drills[0], 2, ABSENT)
    return drills


def test_attendance_days_counts_present_and_late_in_term(container, semester):
    ledger = container.attendance_ledger

    assert ledger.attendance_days_present(1, 1) == 3
    assert ledger.attendance_days_present(1, 2) == 1
    assert ledger.attendance_days_present(2, 1) == 0
    assert ledger.attendance_days_present(3, 1) == 0


def test_attendance_days_can_exclude_late(sessions_repo, attendance_repo, cadets, terms, semester):
    strict = AttendanceLedger(attendance_repo, sessions_repo, cadets, terms, count_late_as_present=False)

    assert strict.attendance_days_present(1, 1) == 2


def test_attendance_days_unknown_cadet_or_term(container):
    ledger = container.attendance_ledger

    with pytest.raises(NotFound):
        ledger.attendance_days_present(404, 1)
    with pytest.raises(NotFound):
        ledger.attendance_days_present(1, 404)


def test_fill_absent_skips_recorded_and_unenrolled(container, make_session, attendance_repo):
    ledger = container.attendance_ledger
    session = make_session(battalion_id=1)
    _mark(attendance_repo, session, 1, PRESENT)

    at = session.end_time
    assert ledger.fill_absent(session, at=at) == 1
    assert ledger.fill_absent(session, at=at) == 0

    by_cadet = {r.cadet_id: r for r in ledger.list_for_session(session.session_id)}
    assert set(by_cadet) == {1, 2}
    assert by_cadet[2].status == ABSENT
    assert by_cadet[2].location is None
    assert by_cadet[2].timestamp == at


def test_session_summary_counts_by_status(container, make_session, attendance_repo):
    session = make_session()
    _mark(attendance_repo, session, 1, PRESENT)
    _mark(attendance_repo, session, 2, LATE)
    _mark(attendance_repo, session, 3, ABSENT)

    summary = container.attendance_ledger.session_summary(session.session_id)

    assert (summary.present, summary.late, summary.absent, summary.total) == (1, 1, 1, 3)


def test_list_for_unknown_session(container):
    with pytest.raises(NotFound):
        container.attendance_ledger.list_for_session(404)


def test_record_to_dict_rounds_distance(container, make_session):
    session = make_session()
    strategy = AttendanceStrategyFactory().for_checkin(submitted_time=session.start_time, session=session)

    rec = container.attendance_ledger.record(
        session=session,
        cadet_id=1,
        timestamp=session.start_time + timedelta(minutes=1),
        location=session.center,
        distance_meters=12.3456,
        decision=strategy.decide(submitted_time=session.start_time, session=session),
    )

    data = rec.to_dict()
    assert data["distance_meters"] == 12.35
    assert data["status"] == "present"
    assert data["timestamp"] == "2025-08-16T18:31:00"


def test_list_for_cadet_in_term_uses_session_dates(container, semester):
    records = container.attendance_ledger.list_for_cadet_in_term(1, 1)

    assert {r.session_id for r in records} == {s.session_id for s in semester}
    assert len(container.attendance_ledger.list_for_cadet_in_term(1, 2)) == 1
