from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Cadet


class CadetRepository(Protocol):
    def get_by_id(self, cadet_id: int) -> Optional[Cadet]:
        raise NotImplementedError

    def list_enrolled(self, *, battalion_id: Optional[int] = None) -> Sequence[Cadet]:
        """Enrolled cadets; all battalions when ``battalion_id`` is None."""

        raise NotImplementedError
