import logging
from typing import List, Optional, Sequence

from roadstop.config import Settings, get_settings
from roadstop.core.http import Call, get, post
from roadstop.exceptions import ServiceConfigurationError
from roadstop.models.location import Point
from roadstop.models.route_event import RouteEvent
from roadstop.services.base import HttpService

logger = logging.getLogger(__name__)

PROFILE_DRIVING = "driving"
PROFILE_DRIVING_TRAFFIC = "driving-traffic"
PROFILE_WALKING = "walking"
PROFILE_CYCLING = "cycling"


class RouteEventsApi:
    @get("route-events/v1/{profile}/{coordinates}", response_model=List[RouteEvent])
    def get_route_events(self, profile: str, coordinates: str, access_token: str) -> Call[List[RouteEvent]]:
        raise NotImplementedError

    @post("route-events/v1/{profile}", response_model=List[RouteEvent])
    def post_route_events(self, profile: str, coordinates: str, access_token: str) -> Call[List[RouteEvent]]:
        raise NotImplementedError


def format_coordinate(value: float) -> str:
    """Six decimals at most, without trailing zeros."""
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def format_coordinates(points: Sequence[Point]) -> str:
    return ";".join(
        f"{format_coordinate(point.longitude)},{format_coordinate(point.latitude)}"
        for point in points
    )


class RouteEventsService(HttpService[List[RouteEvent], RouteEventsApi]):
    """Fetches the route events (rest stops, service areas) along a route."""

    def __init__(
        self,
        coordinates: Sequence[Point],
        access_token: str,
        profile: str = PROFILE_DRIVING,
        base_url: Optional[str] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(RouteEventsApi, settings)
        self.coordinates = list(coordinates)
        self.access_token = access_token
        self.profile = profile
        self._base_url = base_url or self._settings.BASE_URL

    @classmethod
    def builder(cls) -> "RouteEventsService.Builder":
        return cls.Builder()

    def base_url(self) -> str:
        return self._base_url

    def initialize_call(self) -> Call[List[RouteEvent]]:
        service = self.get_service()
        coordinates = format_coordinates(self.coordinates)
        call = service.get_route_events(
            profile=self.profile, coordinates=coordinates, access_token=self.access_token
        )
        url_size = len(str(call.request.url))
        if url_size <= self.MAX_URL_SIZE:
            return call

        logger.info(f"GET URL is {url_size} characters, switching route events request to POST")
        return service.post_route_events(
            profile=self.profile, coordinates=coordinates, access_token=self.access_token
        )

    class Builder:
        def __init__(self):
            self._coordinates: List[Point] = []
            self._profile = PROFILE_DRIVING
            self._access_token: Optional[str] = None
            self._base_url: Optional[str] = None
            self._settings: Optional[Settings] = None
            self._enable_debug: Optional[bool] = None

        def coordinates(self, coordinates: Sequence[Point]) -> "RouteEventsService.Builder":
            self._coordinates = list(coordinates)
            return self

        def add_coordinate(self, point: Point) -> "RouteEventsService.Builder":
            self._coordinates.append(point)
            return self

        def profile(self, profile: str) -> "RouteEventsService.Builder":
            self._profile = profile
            return self

        def access_token(self, access_token: str) -> "RouteEventsService.Builder":
            self._access_token = access_token
            return self

        def base_url(self, base_url: str) -> "RouteEventsService.Builder":
            self._base_url = base_url
            return self

        def settings(self, settings: Settings) -> "RouteEventsService.Builder":
            self._settings = settings
            return self

        def enable_debug(self, enable_debug: bool) -> "RouteEventsService.Builder":
            self._enable_debug = enable_debug
            return self

        def build(self) -> "RouteEventsService":
            settings = self._settings or get_settings()
            access_token = self._access_token or settings.ACCESS_TOKEN
            if not access_token:
                raise ServiceConfigurationError("An access token is required to request route events.")
            if len(self._coordinates) < 2:
                raise ServiceConfigurationError(
                    f"At least two coordinates are required, got {len(self._coordinates)}."
                )

            service = RouteEventsService(
                coordinates=self._coordinates,
                access_token=access_token,
                profile=self._profile,
                base_url=self._base_url,
                settings=settings,
            )
            if self._enable_debug is not None:
                service.enable_debug(self._enable_debug)
            return service
