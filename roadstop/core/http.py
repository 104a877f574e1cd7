import functools
import inspect
import logging
import string
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter

from roadstop.exceptions import (
    CallCanceledError,
    CallStateError,
    ServiceConfigurationError,
    ServiceIOError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
S = TypeVar("S")

# Status codes that carry no body to convert.
NO_CONTENT_CODES = (204, 205)


class Response(Generic[T]):
    """A completed HTTP exchange and, for 2xx responses, its converted body."""

    def __init__(
        self,
        raw: httpx.Response,
        body: Optional[T] = None,
        error_body: Optional[bytes] = None,
    ):
        self.raw = raw
        self.body = body
        self.error_body = error_body

    @property
    def code(self) -> int:
        return self.raw.status_code

    @property
    def message(self) -> str:
        return self.raw.reason_phrase

    @property
    def headers(self) -> httpx.Headers:
        return self.raw.headers

    def is_successful(self) -> bool:
        return self.raw.is_success

    def __repr__(self) -> str:
        return f"Response(code={self.code}, url={self.raw.request.url})"


class Callback(ABC, Generic[T]):
    """Receives the outcome of an enqueued call on a dispatcher thread."""

    @abstractmethod
    def on_response(self, call: "Call[T]", response: Response[T]) -> None:
        """Called with any HTTP response, successful or not."""
        pass

    @abstractmethod
    def on_failure(self, call: "Call[T]", error: Exception) -> None:
        """Called when the transport fails, the body cannot be converted or the call was cancelled."""
        pass


class Dispatcher:
    """Worker pool that runs enqueued calls."""

    def __init__(self, max_workers: int = 64):
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="roadstop-dispatcher"
        )

    def submit(self, fn: Callable[[], None]) -> Future:
        return self._executor.submit(fn)

    def shutdown(self, wait: bool = True):
        self._executor.shutdown(wait=wait)


class Call(Generic[T]):
    """One HTTP request that can be executed or enqueued exactly once.

    ``clone()`` is the only way to get a fresh handle for the same request,
    e.g. to retry after a failure or a cancellation.
    """

    def __init__(
        self,
        client: Any,
        request: httpx.Request,
        converter: Callable[[bytes], T],
        dispatcher: Dispatcher,
    ):
        self._client = client
        self._request = request
        self._converter = converter
        self._dispatcher = dispatcher
        self._lock = threading.Lock()
        self._executed = False
        self._canceled = False
        self._response: Optional[httpx.Response] = None

    @property
    def request(self) -> httpx.Request:
        return self._request

    def is_executed(self) -> bool:
        return self._executed

    def is_canceled(self) -> bool:
        return self._canceled

    def execute(self) -> Response[T]:
        """Perform the request on the calling thread."""
        self._mark_executed()
        return self._perform()

    def enqueue(self, callback: Callback[T]) -> Future:
        """Perform the request on the dispatcher and report to ``callback``.

        The returned future completes once the callback has returned.
        """
        self._mark_executed()

        def run():
            try:
                response = self._perform()
            except Exception as e:
                callback.on_failure(self, e)
                return
            callback.on_response(self, response)

        return self._dispatcher.submit(run)

    def cancel(self):
        """Best effort: an exchange that already finished keeps its result."""
        with self._lock:
            if self._canceled:
                return
            self._canceled = True
            response = self._response
        if response is not None:
            response.close()

    def clone(self) -> "Call[T]":
        request = httpx.Request(
            self._request.method,
            self._request.url,
            headers=self._request.headers,
            content=self._request.content,
        )
        return Call(self._client, request, self._converter, self._dispatcher)

    def _mark_executed(self):
        with self._lock:
            if self._executed:
                raise CallStateError("Already executed.")
            self._executed = True

    def _perform(self) -> Response[T]:
        if self._canceled:
            raise CallCanceledError("Canceled")

        description = f"{self._request.method} {self._request.url}"
        try:
            raw = self._client.send(self._request, stream=True)
        except (httpx.HTTPError, OSError) as e:
            if self._canceled:
                raise CallCanceledError("Canceled") from e
            logger.error(f"{description} failed: {e}", exc_info=True)
            raise ServiceIOError(f"{description} failed: {e}") from e

        with self._lock:
            self._response = raw
            canceled = self._canceled
        try:
            if canceled:
                raise CallCanceledError("Canceled")
            raw.read()
        except (httpx.HTTPError, httpx.StreamError) as e:
            if self._canceled:
                raise CallCanceledError("Canceled") from e
            logger.error(f"{description} failed while reading the body: {e}", exc_info=True)
            raise ServiceIOError(f"{description} failed while reading the body: {e}") from e
        finally:
            raw.close()

        return self._to_response(raw)

    def _to_response(self, raw: httpx.Response) -> Response[T]:
        if not raw.is_success:
            return Response(raw, error_body=raw.content)
        if raw.status_code in NO_CONTENT_CODES:
            return Response(raw)
        return Response(raw, body=self._converter(raw.content))


class Endpoint:
    def __init__(
        self,
        method: str,
        path: str,
        response_model: Any,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.method = method
        self.path = path
        self.response_model = response_model
        self.headers = dict(headers or {})
        self.path_params: List[str] = [
            name for _, name, _, _ in string.Formatter().parse(path) if name
        ]


def _endpoint(method: str, path: str, response_model: Any, headers: Optional[Dict[str, str]]):
    def decorator(func):
        func.__endpoint__ = Endpoint(method, path, response_model, headers)
        return func

    return decorator


def get(path: str, response_model: Any, headers: Optional[Dict[str, str]] = None):
    """Declare a GET endpoint. Arguments not bound to the path become query parameters."""
    return _endpoint("GET", path, response_model, headers)


def post(path: str, response_model: Any, headers: Optional[Dict[str, str]] = None):
    """Declare a form-encoded POST endpoint. Arguments not bound to the path become form fields."""
    return _endpoint("POST", path, response_model, headers)


def json_converter(response_model: Any) -> Callable[[bytes], Any]:
    """Validate a JSON body against ``response_model`` with pydantic."""
    return TypeAdapter(response_model).validate_json


class RestAdapter:
    """Turns a declared service interface into a proxy whose endpoint methods return calls."""

    def __init__(
        self,
        base_url: Optional[str],
        client: Any,
        dispatcher: Dispatcher,
        converter_factory: Optional[Callable[[Any], Callable[[bytes], Any]]] = None,
    ):
        if not base_url:
            raise ServiceConfigurationError("Base URL required.")
        try:
            url = httpx.URL(base_url)
        except httpx.InvalidURL as e:
            raise ServiceConfigurationError(f"Invalid base URL '{base_url}': {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ServiceConfigurationError(f"Expected an http(s) base URL, got '{base_url}'.")
        if not url.path.endswith("/"):
            url = url.copy_with(path=url.path + "/")

        self.base_url = url
        self.client = client
        self.dispatcher = dispatcher
        self.converter_factory = converter_factory or json_converter

    def create(self, service_type: Type[S]) -> S:
        attrs = {}
        for name, member in inspect.getmembers(service_type, inspect.isfunction):
            endpoint = getattr(member, "__endpoint__", None)
            if endpoint is not None:
                attrs[name] = self._bind(endpoint, member)
        proxy_type = type(f"{service_type.__name__}Proxy", (service_type,), attrs)
        return proxy_type()

    def build_request(self, endpoint: Endpoint, arguments: Dict[str, Any]) -> httpx.Request:
        arguments = dict(arguments)
        path_values = {}
        for name in endpoint.path_params:
            value = arguments.pop(name, None)
            if value is None:
                raise ValueError(
                    f"Path parameter '{name}' is required for {endpoint.method} {endpoint.path}."
                )
            path_values[name] = quote(str(value), safe=",;")

        url = self.base_url.join(endpoint.path.format(**path_values))
        fields = {name: value for name, value in arguments.items() if value is not None}
        if endpoint.method == "GET":
            return httpx.Request("GET", url, params=fields, headers=endpoint.headers)
        return httpx.Request(endpoint.method, url, data=fields, headers=endpoint.headers)

    def _bind(self, endpoint: Endpoint, func: Callable) -> Callable:
        signature = inspect.signature(func)
        receiver = next(iter(signature.parameters))
        converter = self.converter_factory(endpoint.response_model)

        def method(proxy, *args, **kwargs) -> Call:
            bound = signature.bind(proxy, *args, **kwargs)
            bound.apply_defaults()
            arguments = dict(bound.arguments)
            arguments.pop(receiver)
            request = self.build_request(endpoint, arguments)
            return Call(self.client, request, converter, self.dispatcher)

        return functools.update_wrapper(method, func)
