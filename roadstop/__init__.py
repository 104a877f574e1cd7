from roadstop.core.http import Call, Callback, Response
from roadstop.core.logging import setup_logging
from roadstop.exceptions import (
    CallCanceledError,
    CallStateError,
    RoadstopError,
    ServiceConfigurationError,
    ServiceIOError,
)
from roadstop.models import Point, RouteEvent, RouteEventLocation
from roadstop.services.base import HttpService
from roadstop.services.route_events import RouteEventsService

__version__ = "0.1.0"

# Logging is opt-in: call setup_logging() from the application entry point.

__all__ = [
    "Call",
    "Callback",
    "CallCanceledError",
    "CallStateError",
    "HttpService",
    "Point",
    "Response",
    "RoadstopError",
    "RouteEvent",
    "RouteEventLocation",
    "RouteEventsService",
    "ServiceConfigurationError",
    "ServiceIOError",
    "setup_logging",
]
