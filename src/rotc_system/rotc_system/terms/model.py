from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Term:
    """Academic grading period; scopes grades and attendance aggregation."""

    term_id: int
    name: str
    start_date: date
    end_date: date
    is_current: bool = False
