import json
from typing import Callable, List

import httpx
import pytest

from roadstop.config import Settings
from roadstop.core.http import Dispatcher

SAN_FRANCISCO = [-122.4194, 37.7749]

REST_AREA_EVENT = {
    "_id": "5f1a9c",
    "address": "I-80 Vista Point, San Francisco, CA",
    "type": 1,
    "location": {"type": "rest_area", "coordinates": SAN_FRANCISCO},
}


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, ACCESS_TOKEN="pk.test-token", BASE_URL="https://api.example.test")


@pytest.fixture
def dispatcher():
    dispatcher = Dispatcher(max_workers=4)
    yield dispatcher
    dispatcher.shutdown()


@pytest.fixture
def recorded_requests() -> List[httpx.Request]:
    return []


@pytest.fixture
def make_client(recorded_requests) -> Callable[..., httpx.Client]:
    """Build an httpx client whose transport answers with ``handler``."""
    clients = []

    def factory(handler=None, status_code=200, payload=None):
        def default_handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json=payload if payload is not None else [REST_AREA_EVENT])

        def recording_handler(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            return (handler or default_handler)(request)

        client = httpx.Client(transport=httpx.MockTransport(recording_handler))
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()


def event_json(**overrides) -> str:
    return json.dumps({**REST_AREA_EVENT, **overrides})
