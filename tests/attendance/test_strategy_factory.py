from datetime import datetime, timedelta

from src.rotc_system.rotc_system.attendance.factory import AttendanceStrategyFactory
from src.rotc_system.rotc_system.attendance.strategies.absent_strategy import AbsentStrategy
from src.rotc_system.rotc_system.attendance.strategies.late_strategy import LateStrategy
from src.rotc_system.rotc_system.attendance.strategies.on_time_strategy import OnTimeStrategy
from src.rotc_system.rotc_system.core.enums import AttendanceStatus, SessionStatus
from src.rotc_system.rotc_system.geo.model import GeoPoint
from src.rotc_system.rotc_system.sessions.model import AttendanceSession


def _session(minutes=30):
    start = datetime(2025, 8, 16, 18, 30)
    return AttendanceSession(
        session_id=1,
        center=GeoPoint(latitude=13.6151, longitude=123.4835),
        radius_meters=50,
        start_time=start,
        end_time=start + timedelta(minutes=minutes),
        time_limit_minutes=minutes,
        status=SessionStatus.ACTIVE,
        created_by=99,
    )


def test_factory_checkin_on_time_up_to_cutoff():
    session = _session()
    factory = AttendanceStrategyFactory()

    strategy = factory.for_checkin(submitted_time=datetime(2025, 8, 16, 18, 45), session=session)

    assert isinstance(strategy, OnTimeStrategy)
    assert strategy.decide(submitted_time=datetime(2025, 8, 16, 18, 45), session=session).status == AttendanceStatus.PRESENT


def test_factory_checkin_late_after_cutoff():
    session = _session()
    factory = AttendanceStrategyFactory()

    strategy = factory.for_checkin(submitted_time=datetime(2025, 8, 16, 18, 45, 1), session=session)

    assert isinstance(strategy, LateStrategy)


def test_factory_cutoff_follows_ratio():
    session = _session(minutes=60)

    assert AttendanceStrategyFactory(on_time_ratio=0.25).on_time_cutoff(session) == datetime(2025, 8, 16, 18, 45)
    assert AttendanceStrategyFactory(on_time_ratio=1.0).on_time_cutoff(session) == session.end_time


def test_factory_missing_is_absent():
    decision = AttendanceStrategyFactory().for_missing().decide(submitted_time=None, session=_session())

    assert isinstance(AttendanceStrategyFactory().for_missing(), AbsentStrategy)
    assert decision.status == AttendanceStatus.ABSENT
