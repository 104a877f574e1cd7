import json

import pytest
from pydantic import ValidationError

from roadstop.models import Point, RouteEventLocation


def test_location_exposes_longitude_and_latitude():
    location = RouteEventLocation.builder().raw_location([-122.4194, 37.7749]).build()

    assert location.location == Point(longitude=-122.4194, latitude=37.7749)
    assert location.location.coordinates() == [-122.4194, 37.7749]


def test_location_point_is_computed_on_every_access():
    location = RouteEventLocation.builder().raw_location([13.38886, 52.517037]).build()

    first = location.location
    second = location.location

    assert first == second
    assert first is not second


def test_build_without_coordinates_fails():
    with pytest.raises(ValidationError):
        RouteEventLocation.builder().type("service_area").build()


def test_from_json_without_coordinates_fails():
    with pytest.raises(ValidationError):
        RouteEventLocation.from_json('{"type": "service_area"}')


@pytest.mark.parametrize("coordinates", [[1.0], [1.0, 2.0, 3.0], []])
def test_coordinates_must_be_a_pair(coordinates):
    with pytest.raises(ValidationError):
        RouteEventLocation.builder().raw_location(coordinates).build()


def test_point_keeps_coordinates_outside_usual_ranges():
    location = RouteEventLocation.from_json('{"coordinates": [190.0, -95.0]}')

    assert location.location == Point(longitude=190.0, latitude=-95.0)


def test_raw_location_is_stored_immutably():
    raw = [-122.4194, 37.7749]
    location = RouteEventLocation.builder().raw_location(raw).build()

    raw[0] = 0.0

    assert location.raw_location == (-122.4194, 37.7749)


def test_json_round_trip():
    location = RouteEventLocation.builder().type("service_area").raw_location([2.3522, 48.8566]).build()

    payload = json.loads(location.to_json())

    assert payload == {"type": "service_area", "coordinates": [2.3522, 48.8566]}
    assert RouteEventLocation.from_json(location.to_json()) == location


def test_type_is_optional():
    location = RouteEventLocation.from_json('{"coordinates": [0, 0]}')

    assert location.type is None
    assert location.location == Point.from_lng_lat(0.0, 0.0)
