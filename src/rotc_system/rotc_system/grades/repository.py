from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import GradeInputs, GradeRecord, GradeResult


class GradeRepository(Protocol):
    def upsert(
        self,
        *,
        cadet_id: int,
        term_id: int,
        inputs: GradeInputs,
        result: GradeResult,
        notes: Optional[str],
        updated_at: datetime,
    ) -> None:
        """Create or replace the row for (cadet_id, term_id). Last write wins."""

        raise NotImplementedError

    def get(self, *, cadet_id: int, term_id: int) -> Optional[GradeRecord]:
        raise NotImplementedError

    def list_by_term(self, term_id: int) -> Sequence[GradeRecord]:
        raise NotImplementedError
