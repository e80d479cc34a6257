"""
Shared fixtures for the EmailVerify SDK tests.

Key fixtures:
- server: scripted HTTP responses served through httpx.MockTransport
- clock: fake time source replacing sleeps in the retry and polling loops
- client / async_client: clients wired to ``server``
"""

import json
from collections import deque
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import httpx
import pytest

from emailverify import AsyncEmailVerify, EmailVerify
from emailverify import _polling, _retry

API_KEY = "test-api-key"
BASE_URL = "https://api.test/v1"


class MockServer:
    """Replays queued responses in order and records every request."""

    def __init__(self) -> None:
        self.responses: deque = deque()
        self.requests: List[httpx.Request] = []
        self.fallback: Optional[httpx.Response] = None

    def enqueue(
        self,
        status: int = 200,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
        content: bytes = b"",
    ) -> "MockServer":
        if json is not None:
            self.responses.append(httpx.Response(status, json=json, headers=headers))
        else:
            self.responses.append(httpx.Response(status, content=content, headers=headers))
        return self

    def always(self, status: int = 200, json: Any = None) -> "MockServer":
        """Answer every request not covered by the queue with this response."""
        self.fallback = httpx.Response(status, json=json)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responses:
            return self.responses.popleft()
        if self.fallback is not None:
            return httpx.Response(
                self.fallback.status_code,
                content=self.fallback.content,
                headers=self.fallback.headers,
            )
        raise AssertionError(f"unexpected request: {request.method} {request.url}")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last_request.content)


class FakeClock:
    """Stands in for the ``time`` module: sleeping advances ``monotonic``."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: List[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    async def async_sleep(self, seconds: float) -> None:
        self.sleep(seconds)


@pytest.fixture
def server() -> MockServer:
    return MockServer()


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> FakeClock:
    fake = FakeClock()
    fake_asyncio = SimpleNamespace(sleep=fake.async_sleep)
    for module in (_retry, _polling):
        monkeypatch.setattr(module, "time", fake)
        monkeypatch.setattr(module, "asyncio", fake_asyncio)
    return fake


@pytest.fixture
def client(server: MockServer, clock: FakeClock):
    c = EmailVerify(api_key=API_KEY, base_url=BASE_URL, retries=1, transport=server.transport)
    yield c
    c.close()


@pytest.fixture
async def async_client(server: MockServer, clock: FakeClock):
    c = AsyncEmailVerify(api_key=API_KEY, base_url=BASE_URL, retries=1, transport=server.transport)
    yield c
    await c.close()


@pytest.fixture
def verify_body() -> Dict[str, Any]:
    return {
        "email": "test@example.com",
        "status": "valid",
        "result": {
            "deliverable": True,
            "valid_format": True,
            "valid_domain": True,
            "valid_mx": True,
            "disposable": False,
            "role": False,
            "catchall": False,
            "free": False,
            "smtp_valid": True,
        },
        "score": 0.95,
        "reason": None,
        "credits_used": 1,
    }


def job_body(status: str = "processing", **overrides: Any) -> Dict[str, Any]:
    body = {
        "job_id": "job_123",
        "status": status,
        "total": 100,
        "processed": 50,
        "valid": 40,
        "invalid": 5,
        "unknown": 5,
        "credits_used": 100,
        "created_at": "2025-01-15T10:30:00Z",
        "progress_percent": 50,
    }
    body.update(overrides)
    return body
