from __future__ import annotations

from datetime import datetime
from typing import Protocol


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp (``2025-08-16T18:30`` or with seconds)."""
    return datetime.fromisoformat(value)


class Clock(Protocol):
    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    """Current local time.

    Note: Injected into services so tests can control time.
    """

    def now(self) -> datetime:
        return datetime.now()
