from typing import Optional, Tuple

from pydantic import Field

from roadstop.models.base import JsonObject
from roadstop.models.location import Point


class RouteEventLocation(JsonObject):
    """Where a route event sits along the route.

    ``type`` is either ``rest_area`` (parking only) or ``service_area``
    (amenities such as gas or restaurants). New values may be added by the
    API without notice.

    The raw ``coordinates`` pair is kept as sent, ``[longitude, latitude]``,
    and exposed as a :class:`Point` through :attr:`location`.
    """

    type: Optional[str] = None
    raw_location: Tuple[float, float] = Field(
        ..., alias="coordinates", description="[longitude, latitude]"
    )

    @property
    def location(self) -> Point:
        return Point.from_lng_lat(self.raw_location[0], self.raw_location[1])


class RouteEvent(JsonObject):
    """A point of interest, such as a rest stop, associated with a route."""

    id: Optional[str] = Field(None, alias="_id")
    address: Optional[str] = None
    type: Optional[int] = Field(None, description="Numeric event type code")
    event_location: Optional[RouteEventLocation] = Field(None, alias="location")
