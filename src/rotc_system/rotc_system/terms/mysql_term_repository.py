from __future__ import annotations

from typing import Any, Dict, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Term
from .repository import TermRepository


def _to_term(r: Dict[str, Any]) -> Term:
    return Term(
        term_id=int(r["term_id"]),
        name=r["name"],
        start_date=r["start_date"],
        end_date=r["end_date"],
        is_current=bool(r.get("is_current")),
    )


class MySQLTermRepository(TermRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, term_id: int) -> Optional[Term]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT term_id, name, start_date, end_date, is_current FROM terms WHERE term_id=%s",
                (int(term_id),),
            )
            r = fetchone(cur)
            return _to_term(r) if r else None
