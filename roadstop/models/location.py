from typing import List

from pydantic import BaseModel, ConfigDict


class Point(BaseModel):
    """A longitude/latitude pair, taken as reported without range checks."""

    model_config = ConfigDict(frozen=True)

    longitude: float
    latitude: float

    @classmethod
    def from_lng_lat(cls, longitude: float, latitude: float) -> "Point":
        return cls(longitude=longitude, latitude=latitude)

    def coordinates(self) -> List[float]:
        """GeoJSON ordering: longitude first."""
        return [self.longitude, self.latitude]
