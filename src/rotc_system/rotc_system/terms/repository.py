from __future__ import annotations

from typing import Optional, Protocol

from .model import Term


class TermRepository(Protocol):
    def get_by_id(self, term_id: int) -> Optional[Term]:
        raise NotImplementedError
