from typing import List, Optional

from pydantic import Field

from icar.models.base import CamelModel


class Coordinate(CamelModel):
    latitude: float
    longitude: float

    def as_lon_lat(self) -> List[float]:
        return [self.longitude, self.latitude]


class RouteSummary(CamelModel):
    distance: float  # metres
    duration: float  # seconds

    @property
    def distance_km(self) -> float:
        return round(self.distance / 1000, 1)

    @property
    def duration_minutes(self) -> int:
        return round(self.duration / 60)


class Route(CamelModel):
    coordinates: List[Coordinate] = Field(default_factory=list)
    summary: Optional[RouteSummary] = None
