from roadstop.models.base import JsonObject, ModelBuilder
from roadstop.models.location import Point
from roadstop.models.route_event import RouteEvent, RouteEventLocation

__all__ = ["JsonObject", "ModelBuilder", "Point", "RouteEvent", "RouteEventLocation"]
