from __future__ import annotations

from ...core.constants import (
    APTITUDE_WEIGHT,
    ATTENDANCE_WEIGHT,
    EXAM_WEIGHT,
    PASSING_EQUIVALENT,
    POINTS_PER_TRAINING_DAY,
    TTL_DEMERIT_FACTOR,
)
from ...core.enums import GradeStatus
from ..equivalence import lookup
from ..model import GradeInputs, GradeResult, validate_inputs
from .base import GradeCalculator


def attendance_score(days_present: int) -> float:
    """2 points per training day, capped at the 30% attendance weight."""
    return float(min(ATTENDANCE_WEIGHT, days_present * POINTS_PER_TRAINING_DAY))


def ttl(demerit: float) -> float:
    return demerit * TTL_DEMERIT_FACTOR


def aptitude_score(merit: float, demerit: float) -> float:
    return (merit - demerit) / 100 * APTITUDE_WEIGHT


def exam_grade(exam_score_raw: float) -> float:
    return exam_score_raw / 100 * EXAM_WEIGHT


class StandardRotcCalculator(GradeCalculator):
    """Standard rule.

    final   = attendance + aptitude
    overall = attendance + ttl + exam    (drives the equivalent)
    passed  = equivalent <= 3.0
    """

    def compute(self, inputs: GradeInputs) -> GradeResult:
        validate_inputs(inputs)

        attendance = attendance_score(inputs.attendance_days_present)
        subtotal = ttl(inputs.demerit)
        aptitude = aptitude_score(inputs.merit, inputs.demerit)
        exam = exam_grade(inputs.exam_score_raw)
        overall = attendance + subtotal + exam
        equivalent = lookup(overall)

        return GradeResult(
            attendance_score=attendance,
            ttl=subtotal,
            aptitude_score=aptitude,
            final_grade=attendance + aptitude,
            exam_grade=exam,
            overall_grade=overall,
            equivalent=equivalent,
            status=GradeStatus.PASSED if equivalent <= PASSING_EQUIVALENT else GradeStatus.FAILED,
        )
