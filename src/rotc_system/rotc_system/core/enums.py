from __future__ import annotations

from enum import Enum


class SessionStatus(str, Enum):
    """Lifecycle of an attendance session. COMPLETED is terminal."""

    ACTIVE = "active"
    COMPLETED = "completed"


class AttendanceStatus(str, Enum):
    """Outcome stored per (session, cadet)."""

    PRESENT = "present"
    LATE = "late"
    ABSENT = "absent"


class GradeStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
