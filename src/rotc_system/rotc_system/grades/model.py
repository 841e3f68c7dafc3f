from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..common.validators import require_in_range, require_int_in_range
from ..core.constants import DEFAULT_DEMERIT, DEFAULT_MERIT, TRAINING_DAYS
from ..core.enums import GradeStatus
from ..core.exceptions import InvalidGradeInput


@dataclass(frozen=True)
class GradeInputs:
    """Hand-entered and aggregated inputs for one (cadet, term).

    Values are not validated on construction; ``validate_inputs`` rejects
    out-of-domain data before any computation.
    """

    attendance_days_present: int
    exam_score_raw: float
    merit: float = DEFAULT_MERIT
    demerit: float = DEFAULT_DEMERIT

    def to_dict(self) -> dict:
        return {
            "attendance_days_present": self.attendance_days_present,
            "merit": self.merit,
            "demerit": self.demerit,
            "exam_score_raw": self.exam_score_raw,
        }


def validate_inputs(inputs: GradeInputs) -> GradeInputs:
    require_int_in_range(
        inputs.attendance_days_present, "attendance_days_present", low=0, high=TRAINING_DAYS, error=InvalidGradeInput
    )
    require_in_range(inputs.merit, "merit", low=0, high=100, error=InvalidGradeInput)
    require_in_range(inputs.demerit, "demerit", low=0, high=100, error=InvalidGradeInput)
    require_in_range(inputs.exam_score_raw, "exam_score_raw", low=0, high=100, error=InvalidGradeInput)
    return inputs


@dataclass(frozen=True)
class GradeResult:
    attendance_score: float
    ttl: float
    aptitude_score: float
    final_grade: float
    exam_grade: float
    overall_grade: float
    equivalent: float
    status: GradeStatus

    @property
    def passed(self) -> bool:
        return self.status == GradeStatus.PASSED

    def to_dict(self) -> dict:
        return {
            "attendance_score": self.attendance_score,
            "ttl": self.ttl,
            "aptitude_score": self.aptitude_score,
            "final_grade": self.final_grade,
            "exam_grade": self.exam_grade,
            "overall_grade": self.overall_grade,
            "equivalent": self.equivalent,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class GradeRecord:
    """Persisted grade row. Only ``inputs`` are ever edited; ``result`` is rederived."""

    cadet_id: int
    term_id: int
    inputs: GradeInputs
    result: GradeResult
    notes: Optional[str] = None
    updated_at: Optional[datetime] = field(default=None, compare=False)

    def to_dict(self) -> dict:
        return {
            "cadet_id": self.cadet_id,
            "term_id": self.term_id,
            "inputs": self.inputs.to_dict(),
            "result": self.result.to_dict(),
            "notes": self.notes,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
