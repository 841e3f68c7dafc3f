from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from ..attendance.factory import AttendanceStrategyFactory
from ..attendance.model import AttendanceRecord
from ..attendance.service import AttendanceLedger
from ..cadets.repository import CadetRepository
from ..common.datetime_utils import Clock, SystemClock
from ..common.validators import require_in_range
from ..core.constants import DEFAULT_POLYGON_SEGMENTS, MAX_RADIUS_METERS, MAX_TIME_LIMIT_MINUTES
from ..core.exceptions import DuplicateCheckIn, InvalidParameter, NotFound, OutOfRange, SessionNotActive
from ..geo import geofence
from ..geo.model import GeoPoint
from .model import AttendanceSession
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class AttendanceSessionService:
    """Session lifecycle and check-in admission control.

    Expiry is lazy: every read or check-in compares the clock to end_time and
    completes overdue sessions on the spot, so no background timer is needed.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        ledger: AttendanceLedger,
        cadets: CadetRepository,
        *,
        clock: Clock | None = None,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._sessions = sessions
        self._ledger = ledger
        self._cadets = cadets
        self._clock = clock or SystemClock()
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def create_session(
        self,
        *,
        center: GeoPoint,
        radius_meters: float,
        start_time: datetime,
        time_limit_minutes: float,
        created_by: int,
        battalion_id: Optional[int] = None,
    ) -> AttendanceSession:
        if not isinstance(center, GeoPoint):
            raise InvalidParameter("center must be a GeoPoint")
        if not isinstance(start_time, datetime):
            raise InvalidParameter("start_time must be a datetime")
        radius = require_in_range(
            radius_meters, "radius_meters", low=0, high=MAX_RADIUS_METERS, low_inclusive=False, error=InvalidParameter
        )
        limit = require_in_range(
            time_limit_minutes,
            "time_limit_minutes",
            low=0,
            high=MAX_TIME_LIMIT_MINUTES,
            low_inclusive=False,
            error=InvalidParameter,
        )
        end_time = start_time + timedelta(minutes=limit)

        now = self._clock.now()
        for other in self._sessions.list_active():
            other = self._refresh(other, now)
            if other.is_active and other.shares_scope(battalion_id) and other.overlaps(start_time, end_time):
                raise InvalidParameter(
                    f"Session {other.session_id} is already active for this battalion in that time window"
                )

        session_id = self._sessions.create(
            center=center,
            radius_meters=radius,
            start_time=start_time,
            end_time=end_time,
            time_limit_minutes=limit,
            created_by=int(created_by),
            battalion_id=battalion_id,
        )
        logger.info(
            "Session %s opened by %s: %.0fm around (%.6f, %.6f), %s -> %s",
            session_id,
            created_by,
            radius,
            center.latitude,
            center.longitude,
            start_time.isoformat(),
            end_time.isoformat(),
        )
        return self._get_or_raise(session_id)

    def get_session(self, session_id: int) -> AttendanceSession:
        return self._refresh(self._get_or_raise(session_id), self._clock.now())

    def list_sessions(self) -> Sequence[AttendanceSession]:
        now = self._clock.now()
        return [self._refresh(s, now) for s in self._sessions.list_all()]

    def get_active_session(self) -> Optional[AttendanceSession]:
        now = self._clock.now()
        active = [s for s in (self._refresh(s, now) for s in self._sessions.list_active()) if s.is_active]
        active.sort(key=lambda s: s.start_time)
        return active[0] if active else None

    def check_in(
        self,
        *,
        session_id: int,
        cadet_id: int,
        submitted_location: GeoPoint,
        submitted_time: Optional[datetime] = None,
    ) -> AttendanceRecord:
        now = self._clock.now()
        submitted_time = submitted_time or now

        session = self._refresh(self._get_or_raise(session_id), now)
        if not session.is_active:
            raise SessionNotActive(f"Session {session.session_id} is not active")
        if submitted_time > session.end_time:
            raise SessionNotActive(f"Session {session.session_id} closed at {session.end_time.isoformat()}")
        if submitted_time < session.start_time:
            raise SessionNotActive(f"Session {session.session_id} opens at {session.start_time.isoformat()}")

        cadet = self._cadets.get_by_id(int(cadet_id))
        if cadet is None:
            raise NotFound(f"Cadet {cadet_id} not found")
        if not cadet.is_enrolled:
            raise InvalidParameter(f"Cadet {cadet_id} is not enrolled")
        if session.battalion_id is not None and cadet.battalion_id != session.battalion_id:
            raise InvalidParameter(
                f"Cadet {cadet_id} is not in battalion {session.battalion_id} of session {session.session_id}"
            )
        if not isinstance(submitted_location, GeoPoint):
            raise InvalidParameter("submitted_location must be a GeoPoint")

        meters = geofence.distance(submitted_location, session.center)
        if meters > session.radius_meters:
            logger.warning(
                "Check-in rejected: cadet %s is %.1fm from session %s (radius %.0fm)",
                cadet_id,
                meters,
                session.session_id,
                session.radius_meters,
            )
            raise OutOfRange(
                f"You are {meters:.1f}m away; check-in requires being within {session.radius_meters:g}m",
                distance_meters=meters,
                radius_meters=session.radius_meters,
            )

        if self._ledger.find(session.session_id, cadet_id) is not None:
            raise DuplicateCheckIn(f"Cadet {cadet_id} already checked in to session {session.session_id}")

        strategy = self._factory.for_checkin(submitted_time=submitted_time, session=session)
        decision = strategy.decide(submitted_time=submitted_time, session=session)

        rec = self._ledger.record(
            session=session,
            cadet_id=cadet_id,
            timestamp=submitted_time,
            location=submitted_location,
            distance_meters=meters,
            decision=decision,
        )
        logger.info(
            "Cadet %s checked in to session %s: %s at %.1fm",
            cadet_id,
            session.session_id,
            rec.status.value,
            meters,
        )
        return rec

    def end_session(self, session_id: int) -> AttendanceSession:
        """Force completion. Ending a completed session is a no-op."""

        session = self._get_or_raise(session_id)
        if not session.is_active:
            return session
        return self._complete(session, self._clock.now())

    def expire_overdue(self) -> int:
        """Sweep: complete every active session whose window has passed."""

        now = self._clock.now()
        expired = 0
        for session in self._sessions.list_active():
            if session.is_expired(now):
                self._complete(session, now)
                expired += 1
        return expired

    def delete_session(self, session_id: int) -> None:
        session = self._get_or_raise(session_id)
        removed = len(self._ledger.list_for_session(session.session_id))
        self._sessions.delete(session.session_id)
        logger.info("Session %s deleted with %s record(s)", session.session_id, removed)

    def session_polygon(self, session_id: int, *, segments: int = DEFAULT_POLYGON_SEGMENTS) -> List[GeoPoint]:
        session = self._get_or_raise(session_id)
        return geofence.circle_polygon(session.center, session.radius_meters, segments)

    def _get_or_raise(self, session_id: int) -> AttendanceSession:
        session = self._sessions.get_by_id(int(session_id))
        if session is None:
            raise NotFound(f"Session {session_id} not found")
        return session

    def _refresh(self, session: AttendanceSession, now: datetime) -> AttendanceSession:
        if session.is_active and session.is_expired(now):
            return self._complete(session, now)
        return session

    def _complete(self, session: AttendanceSession, now: datetime) -> AttendanceSession:
        # An overdue session closes at its end_time, an early end closes now.
        completed_at = min(now, session.end_time)
        if not self._sessions.mark_completed(session_id=session.session_id, completed_at=completed_at):
            return self._get_or_raise(session.session_id)

        absent = self._ledger.fill_absent(session, at=completed_at)
        logger.info("Session %s completed at %s (%s marked absent)", session.session_id, completed_at.isoformat(), absent)
        return session.completed(completed_at)
