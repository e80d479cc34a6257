"""Tests for single-shot request invocation."""

import json

import httpx
import pytest

from emailverify._transport import AsyncTransport, RequestIntent, Transport
from emailverify.config import ClientConfig
from emailverify.exceptions import ClientClosedError, DecodeError, NetworkError, UnsupportedMethodError

CONFIG = ClientConfig(api_key="k", base_url="https://api.test/v1/")


@pytest.fixture
def transport(server):
    t = Transport(CONFIG, transport=server.transport)
    yield t
    t.close()


def test_returns_raw_result(transport, server):
    server.enqueue(429, json={"error": {}}, headers={"Retry-After": "4"})

    result = transport.invoke(RequestIntent("GET", "/credits"))

    assert result.status_code == 429
    assert result.headers["retry-after"] == "4"
    assert json.loads(result.body) == {"error": {}}
    assert result.reason_phrase == "Too Many Requests"
    assert str(server.last_request.url) == "https://api.test/v1/credits"


def test_post_without_body_sends_empty_content(transport, server):
    server.enqueue(204)

    transport.invoke(RequestIntent("POST", "/webhooks/test"))

    assert server.last_request.content == b""


def test_delete_with_explicit_body(transport, server):
    server.enqueue(204)

    transport.invoke(RequestIntent("DELETE", "/webhooks", json={"ids": ["a", "b"]}))

    assert server.last_request.method == "DELETE"
    assert server.last_json() == {"ids": ["a", "b"]}


def test_method_is_case_insensitive(transport, server):
    server.enqueue(200, json={})
    transport.invoke(RequestIntent("get", "/credits"))
    assert server.last_request.method == "GET"


@pytest.mark.parametrize("method", ["PUT", "PATCH", "HEAD", ""])
def test_unsupported_method(transport, server, method):
    with pytest.raises(UnsupportedMethodError):
        transport.invoke(RequestIntent(method, "/credits"))
    assert server.requests == []


def test_get_cannot_carry_body(transport, server):
    with pytest.raises(UnsupportedMethodError):
        transport.invoke(RequestIntent("GET", "/credits", json={"a": 1}))
    assert server.requests == []


def test_connection_failure(server):
    def refuse(request):
        raise httpx.ConnectError("refused", request=request)

    t = Transport(CONFIG, transport=httpx.MockTransport(refuse))
    with pytest.raises(NetworkError, match="GET /credits"):
        t.invoke(RequestIntent("GET", "/credits"))
    t.close()


def test_closed_transport(server):
    t = Transport(CONFIG, transport=server.transport)
    t.close()
    with pytest.raises(ClientClosedError):
        t.invoke(RequestIntent("GET", "/credits"))


async def test_async_invoke(server):
    server.enqueue(200, json={"ok": True})
    t = AsyncTransport(CONFIG, transport=server.transport)

    result = await t.invoke(RequestIntent("POST", "/verify", json={"email": "a@b.com"}))

    assert result.status_code == 200
    assert server.last_json() == {"email": "a@b.com"}
    assert server.last_request.headers["EV-API-KEY"] == "k"
    await t.close()

    with pytest.raises(ClientClosedError):
        await t.invoke(RequestIntent("GET", "/credits"))


def corrupt_gzip(request):
    return httpx.Response(
        200,
        headers={"Content-Encoding": "gzip"},
        stream=httpx.ByteStream(b"not gzip at all"),
    )


def test_undecodable_content_encoding():
    t = Transport(CONFIG, transport=httpx.MockTransport(corrupt_gzip))
    with pytest.raises(DecodeError, match="GET /credits"):
        t.invoke(RequestIntent("GET", "/credits"))
    t.close()


def test_too_many_redirects_is_network_error():
    def loop(request):
        return httpx.Response(302, headers={"Location": "https://api.test/v1/credits"})

    t = Transport(CONFIG, transport=httpx.MockTransport(loop))
    t._client.follow_redirects = True
    with pytest.raises(NetworkError):
        t.invoke(RequestIntent("GET", "/credits"))
    t.close()


def test_close_racing_with_send(transport, server, monkeypatch):
    # the closed check has already passed when close() lands
    monkeypatch.setattr(transport._state, "check", lambda: None)
    transport.close()

    with pytest.raises(ClientClosedError):
        transport.invoke(RequestIntent("GET", "/credits"))
    assert server.requests == []


def test_unrelated_runtime_errors_propagate():
    def broken(request):
        raise RuntimeError("handler bug")

    t = Transport(CONFIG, transport=httpx.MockTransport(broken))
    with pytest.raises(RuntimeError, match="handler bug"):
        t.invoke(RequestIntent("GET", "/credits"))
    t.close()


async def test_async_close_racing_with_send(server, monkeypatch):
    t = AsyncTransport(CONFIG, transport=server.transport)
    monkeypatch.setattr(t._state, "check", lambda: None)
    await t.close()

    with pytest.raises(ClientClosedError):
        await t.invoke(RequestIntent("GET", "/credits"))
