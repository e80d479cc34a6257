"""Single-shot HTTP invocation on top of a shared httpx connection pool."""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import httpx

from .config import ClientConfig
from .exceptions import ClientClosedError, DecodeError, EmailVerifyError, NetworkError, UnsupportedMethodError

logger = logging.getLogger(__name__)

API_KEY_HEADER = "EV-API-KEY"
USER_AGENT = "emailverify-python/1.0.0"
SUPPORTED_METHODS = frozenset({"GET", "POST", "DELETE"})


@dataclass(frozen=True)
class RequestIntent:
    """What to send: method, path relative to the base URL, optional JSON body and query."""

    method: str
    path: str
    json: Optional[Dict[str, Any]] = None
    params: Optional[Dict[str, Any]] = None

    def describe(self) -> str:
        return f"{self.method} {self.path}"


@dataclass
class TransportResult:
    """Raw outcome of one HTTP exchange."""

    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    reason_phrase: str = ""


def default_headers(api_key: str) -> Dict[str, str]:
    return {
        API_KEY_HEADER: api_key,
        "Content-Type": "application/json",
        "User-Agent": USER_AGENT,
    }


def build_request(client: Any, intent: RequestIntent) -> httpx.Request:
    """Translate a :class:`RequestIntent` into an ``httpx.Request``."""
    method = intent.method.upper()
    if method not in SUPPORTED_METHODS:
        raise UnsupportedMethodError(f"Unsupported HTTP method: {intent.method}")
    if method == "GET" and intent.json is not None:
        raise UnsupportedMethodError("GET requests cannot carry a body")

    if intent.json is not None:
        return client.build_request(method, intent.path, json=intent.json, params=intent.params)
    if method == "POST":
        return client.build_request(method, intent.path, content=b"", params=intent.params)
    return client.build_request(method, intent.path, params=intent.params)


def _to_result(response: httpx.Response) -> TransportResult:
    return TransportResult(
        status_code=response.status_code,
        headers=response.headers,
        body=response.content,
        reason_phrase=response.reason_phrase,
    )


def _request_error(intent: RequestIntent, exc: httpx.RequestError) -> EmailVerifyError:
    if isinstance(exc, httpx.DecodingError):
        return DecodeError(f"Could not decode response body: {intent.describe()}: {exc}")
    if isinstance(exc, httpx.TimeoutException):
        return NetworkError(f"Request timed out: {intent.describe()}: {exc}")
    return NetworkError(f"Network error: {intent.describe()}: {exc}")


class _ClosedFlag:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def check(self) -> None:
        if self._closed:
            raise ClientClosedError()

    def close(self) -> bool:
        """Mark closed; returns False if it already was."""
        with self._lock:
            if self._closed:
                return False
            self._closed = True
            return True


class Transport:
    """Blocking transport sharing one ``httpx.Client`` pool across threads."""

    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=config.base_url,
            timeout=config.timeout,
            headers=default_headers(config.api_key),
            transport=transport,
        )
        self._state = _ClosedFlag()

    def invoke(self, intent: RequestIntent) -> TransportResult:
        self._state.check()
        request = build_request(self._client, intent)
        try:
            response = self._client.send(request)
        except httpx.RequestError as e:
            raise _request_error(intent, e) from e
        except RuntimeError as e:
            # close() won the race against this send
            if self._state.closed:
                raise ClientClosedError() from e
            raise
        logger.debug("%s -> %s", intent.describe(), response.status_code)
        return _to_result(response)

    def close(self) -> None:
        if self._state.close():
            self._client.close()


class AsyncTransport:
    """Asyncio transport sharing one ``httpx.AsyncClient`` pool across tasks."""

    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=config.timeout,
            headers=default_headers(config.api_key),
            transport=transport,
        )
        self._state = _ClosedFlag()

    async def invoke(self, intent: RequestIntent) -> TransportResult:
        self._state.check()
        request = build_request(self._client, intent)
        try:
            response = await self._client.send(request)
        except httpx.RequestError as e:
            raise _request_error(intent, e) from e
        except RuntimeError as e:
            # close() won the race against this send
            if self._state.closed:
                raise ClientClosedError() from e
            raise
        logger.debug("%s -> %s", intent.describe(), response.status_code)
        return _to_result(response)

    async def close(self) -> None:
        if self._state.close():
            await self._client.aclose()
