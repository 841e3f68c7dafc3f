from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..attendance.service import AttendanceLedger
from ..cadets.repository import CadetRepository
from ..common.datetime_utils import Clock, SystemClock
from ..core.constants import DEFAULT_DEMERIT, DEFAULT_LEADERBOARD_SIZE, DEFAULT_MERIT, TRAINING_DAYS
from ..core.exceptions import NotFound
from ..terms.model import Term
from ..terms.repository import TermRepository
from .calculator.base import GradeCalculator
from .calculator.standard_calculator import StandardRotcCalculator
from .model import GradeInputs, GradeRecord, GradeResult
from .repository import GradeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: dict
    leaderboard: list[dict]


class GradeService:
    def __init__(
        self,
        grades: GradeRepository,
        cadets: CadetRepository,
        terms: TermRepository,
        ledger: AttendanceLedger,
        *,
        calculator: Optional[GradeCalculator] = None,
        clock: Clock | None = None,
    ):
        self._grades = grades
        self._cadets = cadets
        self._terms = terms
        self._ledger = ledger
        self._calculator = calculator or StandardRotcCalculator()
        self._clock = clock or SystemClock()

    def preview(self, inputs: GradeInputs) -> GradeResult:
        """Compute without persisting (used on every input edit)."""
        return self._calculator.compute(inputs)

    def compute_grade(
        self,
        *,
        cadet_id: int,
        term_id: int,
        inputs: GradeInputs,
        notes: Optional[str] = None,
    ) -> GradeResult:
        self._require_cadet(cadet_id)
        self._require_term(term_id)

        result = self._calculator.compute(inputs)
        self._grades.upsert(
            cadet_id=int(cadet_id),
            term_id=int(term_id),
            inputs=inputs,
            result=result,
            notes=(notes or "").strip() or None,
            updated_at=self._clock.now(),
        )
        logger.info(
            "Grade for cadet %s term %s: overall=%.2f equivalent=%.2f %s",
            cadet_id,
            term_id,
            result.overall_grade,
            result.equivalent,
            result.status.value,
        )
        return result

    def compute_grade_from_attendance(
        self,
        *,
        cadet_id: int,
        term_id: int,
        exam_score_raw: float,
        merit: float = DEFAULT_MERIT,
        demerit: float = DEFAULT_DEMERIT,
        notes: Optional[str] = None,
    ) -> GradeResult:
        # Drills past the 15th earn no extra attendance points.
        days = min(self._ledger.attendance_days_present(cadet_id, term_id), TRAINING_DAYS)
        inputs = GradeInputs(
            attendance_days_present=days,
            merit=merit,
            demerit=demerit,
            exam_score_raw=exam_score_raw,
        )
        return self.compute_grade(cadet_id=cadet_id, term_id=term_id, inputs=inputs, notes=notes)

    def get_grade(self, *, cadet_id: int, term_id: int) -> GradeRecord:
        record = self._grades.get(cadet_id=int(cadet_id), term_id=int(term_id))
        if record is None:
            raise NotFound(f"No grade for cadet {cadet_id} in term {term_id}")
        return record

    def build_term_report(self, term_id: int, *, top: int = DEFAULT_LEADERBOARD_SIZE) -> ReportData:
        term = self._require_term(term_id)
        records = self._grades.list_by_term(term.term_id)

        rows: list[dict] = []
        for rec in records:
            cadet = self._cadets.get_by_id(rec.cadet_id)
            rows.append(
                {
                    "cadet_id": rec.cadet_id,
                    "full_name": cadet.full_name if cadet else "-",
                    "student_no": cadet.student_no if cadet else "-",
                    **rec.inputs.to_dict(),
                    **rec.result.to_dict(),
                    "notes": rec.notes or "",
                }
            )

        passed = sum(1 for rec in records if rec.result.passed)
        average = sum(rec.result.overall_grade for rec in records) / len(records) if records else 0.0
        summary = {
            "term_id": term.term_id,
            "term_name": term.name,
            "graded": len(records),
            "passed": passed,
            "failed": len(records) - passed,
            "average_overall_grade": round(average, 2),
        }

        ranked = sorted(rows, key=lambda r: (-r["overall_grade"], r["equivalent"], r["cadet_id"]))
        leaderboard = [
            {"rank": i, "cadet_id": r["cadet_id"], "full_name": r["full_name"], "overall_grade": r["overall_grade"]}
            for i, r in enumerate(ranked[: max(int(top), 0)], start=1)
        ]
        rows.sort(key=lambda r: r["full_name"])
        return ReportData(rows=rows, summary=summary, leaderboard=leaderboard)

    def _require_cadet(self, cadet_id: int) -> None:
        if self._cadets.get_by_id(int(cadet_id)) is None:
            raise NotFound(f"Cadet {cadet_id} not found")

    def _require_term(self, term_id: int) -> Term:
        term = self._terms.get_by_id(int(term_id))
        if term is None:
            raise NotFound(f"Term {term_id} not found")
        return term
