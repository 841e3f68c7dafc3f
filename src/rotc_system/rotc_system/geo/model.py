from __future__ import annotations

from dataclasses import dataclass

from ..core.exceptions import InvalidParameter
from ..common.validators import require_in_range


@dataclass(frozen=True)
class GeoPoint:
    """WGS84 coordinate in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        require_in_range(self.latitude, "latitude", low=-90.0, high=90.0, error=InvalidParameter)
        require_in_range(self.longitude, "longitude", low=-180.0, high=180.0, error=InvalidParameter)

    def to_dict(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}
