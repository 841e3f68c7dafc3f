from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Cadet:
    """Enrolled corps member tracked for attendance and grades."""

    cadet_id: int
    full_name: str
    student_no: str
    battalion_id: Optional[int] = None
    is_enrolled: bool = True
