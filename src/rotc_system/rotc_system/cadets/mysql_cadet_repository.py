from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, optional_int
from .model import Cadet
from .repository import CadetRepository


def _to_cadet(r: Dict[str, Any]) -> Cadet:
    return Cadet(
        cadet_id=int(r["cadet_id"]),
        full_name=r["full_name"],
        student_no=r["student_no"],
        battalion_id=optional_int(r.get("battalion_id")),
        is_enrolled=bool(r.get("is_enrolled", 1)),
    )


class MySQLCadetRepository(CadetRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, cadet_id: int) -> Optional[Cadet]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT cadet_id, full_name, student_no, battalion_id, is_enrolled
                FROM cadets
                WHERE cadet_id=%s
                """,
                (int(cadet_id),),
            )
            r = fetchone(cur)
            return _to_cadet(r) if r else None

    def list_enrolled(self, *, battalion_id: Optional[int] = None) -> Sequence[Cadet]:
        clauses = ["is_enrolled=1"]
        params: list[object] = []
        if battalion_id is not None:
            clauses.append("battalion_id=%s")
            params.append(int(battalion_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT cadet_id, full_name, student_no, battalion_id, is_enrolled
                FROM cadets
                WHERE {" AND ".join(clauses)}
                ORDER BY full_name
                """,
                tuple(params),
            )
            return [_to_cadet(r) for r in fetchall(cur)]
