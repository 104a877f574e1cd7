import logging
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Optional, Type, TypeVar

import httpx

from roadstop.config import Settings, get_settings
from roadstop.core.http import Call, Callback, Dispatcher, Response, RestAdapter, json_converter
from roadstop.core.logging import http_logging_hooks

logger = logging.getLogger(__name__)

T = TypeVar("T")
S = TypeVar("S")


class HttpService(ABC, Generic[T, S]):
    """Base class for one-call service wrappers.

    Subclasses pass their endpoint interface to the constructor and implement
    :meth:`base_url` and :meth:`initialize_call`. The HTTP client, the service
    proxy and the call are all created on first use and then reused for the
    life of the instance.
    """

    MAX_URL_SIZE = 1024 * 8

    def __init__(self, service_type: Type[S], settings: Optional[Settings] = None):
        self._service_type = service_type
        self._settings = settings or get_settings()
        self._enable_debug = self._settings.DEBUG
        self._call_factory: Optional[Any] = None
        self._http_client: Optional[httpx.Client] = None
        self._dispatcher: Optional[Dispatcher] = None
        self._rest_adapter: Optional[RestAdapter] = None
        self._service: Optional[S] = None
        self._call: Optional[Call[T]] = None
        self._lock = threading.Lock()

    @abstractmethod
    def base_url(self) -> str:
        """Base URL every endpoint path is resolved against."""
        pass

    @abstractmethod
    def initialize_call(self) -> Call[T]:
        """Build the call this service wraps, usually through :meth:`get_service`."""
        pass

    def get_call(self) -> Call[T]:
        if self._call is None:
            self._call = self.initialize_call()
        return self._call

    def execute_call(self) -> Response[T]:
        return self.get_call().execute()

    def enqueue_call(self, callback: Callback[T]):
        return self.get_call().enqueue(callback)

    def cancel_call(self):
        self.get_call().cancel()

    def clone_call(self) -> Call[T]:
        return self.get_call().clone()

    def get_service(self) -> S:
        """Build the rest adapter and the service proxy if they don't exist yet."""
        if self._service is not None:
            return self._service

        client = self._call_factory if self._call_factory is not None else self.get_http_client()
        self._rest_adapter = RestAdapter(
            self.base_url(), client, self._get_dispatcher(), converter_factory=self.converter_for
        )
        self._service = self._rest_adapter.create(self._service_type)
        return self._service

    def converter_for(self, response_model: Any) -> Callable[[bytes], Any]:
        """Body converter for an endpoint. Override to customise deserialization."""
        return json_converter(response_model)

    @property
    def rest_adapter(self) -> Optional[RestAdapter]:
        """The rest adapter, or None if the service hasn't been built yet."""
        return self._rest_adapter

    def is_enable_debug(self) -> bool:
        return self._enable_debug

    def enable_debug(self, enable_debug: bool):
        """Log every request and response made by the default client."""
        self._enable_debug = enable_debug

    @property
    def call_factory(self) -> Optional[Any]:
        return self._call_factory

    @call_factory.setter
    def call_factory(self, call_factory: Optional[Any]):
        """Use ``call_factory`` (anything with ``httpx.Client.send``) instead of the default client."""
        self._call_factory = call_factory

    def get_http_client(self) -> httpx.Client:
        with self._lock:
            if self._http_client is None:
                timeout = self._settings.TIMEOUT_SECONDS
                event_hooks = http_logging_hooks() if self._enable_debug else None
                logger.info(f"Creating HTTP client for {type(self).__name__} (debug={self._enable_debug})")
                self._http_client = httpx.Client(
                    timeout=httpx.Timeout(timeout, connect=timeout, read=timeout, write=timeout),
                    headers={"User-Agent": self._settings.USER_AGENT},
                    event_hooks=event_hooks,
                )
            return self._http_client

    def close(self):
        """Close the default client and stop the dispatcher. A custom call factory is left open."""
        with self._lock:
            client, self._http_client = self._http_client, None
            dispatcher, self._dispatcher = self._dispatcher, None
        if client is not None:
            client.close()
        if dispatcher is not None:
            dispatcher.shutdown(wait=False)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def _get_dispatcher(self) -> Dispatcher:
        with self._lock:
            if self._dispatcher is None:
                self._dispatcher = Dispatcher(max_workers=self._settings.MAX_WORKERS)
            return self._dispatcher
