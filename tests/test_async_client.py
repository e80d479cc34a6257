"""Tests for the asyncio EmailVerify client."""

import asyncio

import httpx
import pytest
from conftest import API_KEY, BASE_URL, job_body

from emailverify import (
    AsyncEmailVerify,
    AuthenticationError,
    ClientClosedError,
    DecodeError,
    EmailVerifyError,
    NetworkError,
    RateLimitError,
    TimeoutError,
    ValidationError,
)


def error(code, message):
    return {"error": {"code": code, "message": message}}


async def test_verify(async_client, server, verify_body):
    server.enqueue(json=verify_body)

    result = await async_client.verify("a@b.com")

    assert result.score == 0.95
    assert result.status == "valid"
    assert result.result.valid_mx is True
    assert server.last_request.url.path == "/v1/verify"
    assert server.last_json() == {"email": "a@b.com", "smtp_check": True}


async def test_authentication_error(async_client, server, clock):
    server.enqueue(401, json=error("INVALID_API_KEY", "Invalid API key"))

    with pytest.raises(AuthenticationError):
        await async_client.get_credits()

    assert clock.sleeps == []


async def test_retries_then_succeeds(server, clock):
    server.enqueue(502, json=error("BAD_GATEWAY", "Bad gateway"))
    server.enqueue(429, json=error("RATE_LIMITED", "slow"), headers={"Retry-After": "10"})
    server.enqueue(json=job_body("queued"))

    async with AsyncEmailVerify(api_key=API_KEY, base_url=BASE_URL, retries=3, transport=server.transport) as c:
        job = await c.get_bulk_job_status("job_123")

    assert job.status == "queued"
    assert clock.sleeps == [2, 10]


async def test_retry_budget_exhausted(server, clock):
    server.always(429, json=error("RATE_LIMITED", "Too many requests"))

    async with AsyncEmailVerify(api_key=API_KEY, base_url=BASE_URL, retries=2, transport=server.transport) as c:
        with pytest.raises(RateLimitError):
            await c.list_webhooks()

    assert len(server.requests) == 2
    assert clock.sleeps == [2]


async def test_server_error_keeps_code(async_client, server):
    server.enqueue(500, json=error("INTERNAL", "Internal error"))

    with pytest.raises(EmailVerifyError) as exc:
        await async_client.get_credits()

    assert (exc.value.code, exc.value.status_code) == ("INTERNAL", 500)


async def test_bulk_too_many_emails(async_client, server):
    with pytest.raises(ValidationError):
        await async_client.verify_bulk(["a@b.com"] * 10001)

    assert server.requests == []


async def test_bulk_results(async_client, server):
    server.enqueue(json={"job_id": "job_123", "total": 1, "limit": 10, "offset": 5, "results": []})

    page = await async_client.get_bulk_job_results("job_123", limit=10, offset=5)

    assert (page.limit, page.offset, page.results) == (10, 5, [])
    assert server.last_request.url.params["offset"] == "5"


async def test_wait_for_completion(async_client, server, clock):
    server.enqueue(json=job_body("processing"))
    server.enqueue(json=job_body("processing"))
    server.enqueue(json=job_body("completed"))

    job = await async_client.wait_for_bulk_job_completion("job_123", poll_interval=1)

    assert job.status == "completed"
    assert clock.sleeps == [1, 1]


async def test_wait_times_out(async_client, server, clock):
    server.always(json=job_body("processing"))

    with pytest.raises(TimeoutError):
        await async_client.wait_for_bulk_job_completion("job_123", poll_interval=5, max_wait=20)

    assert len(server.requests) == 4


async def test_webhook_roundtrip(async_client, server):
    server.enqueue(json={"id": "w1", "url": "https://x", "events": ["bulk.completed"], "created_at": "now"})
    server.enqueue(json=[{"id": "w1", "url": "https://x", "events": ["bulk.completed"], "created_at": "now"}])
    server.enqueue(204)

    created = await async_client.create_webhook("https://x", ["bulk.completed"])
    listed = await async_client.list_webhooks()
    await async_client.delete_webhook(created.id)

    assert listed == [created]
    assert [r.method for r in server.requests] == ["POST", "GET", "DELETE"]


async def test_network_error(clock):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with AsyncEmailVerify(api_key=API_KEY, base_url=BASE_URL, transport=httpx.MockTransport(refuse)) as c:
        with pytest.raises(NetworkError):
            await c.get_credits()


async def test_calls_after_close_fail(server):
    c = AsyncEmailVerify(api_key=API_KEY, base_url=BASE_URL, transport=server.transport)
    await c.close()
    await c.close()

    with pytest.raises(ClientClosedError):
        await c.get_credits()


async def test_cancellation_during_backoff(server):
    server.always(503, json=error("UNAVAILABLE", "down"))
    c = AsyncEmailVerify(api_key=API_KEY, base_url=BASE_URL, retries=3, transport=server.transport)

    task = asyncio.ensure_future(c.get_credits())
    while not server.requests:
        await asyncio.sleep(0)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert len(server.requests) == 1
    await c.close()


async def test_concurrent_calls(async_client, server):
    server.always(json=job_body("processing"))

    jobs = await asyncio.gather(*(async_client.get_bulk_job_status("job_123") for _ in range(5)))

    assert [j.job_id for j in jobs] == ["job_123"] * 5


async def test_empty_status_body_while_waiting(async_client, server, clock):
    server.enqueue(json=job_body("processing"))
    server.enqueue(200, content=b"")

    with pytest.raises(DecodeError):
        await async_client.wait_for_bulk_job_completion("job_123", poll_interval=1)

    assert clock.sleeps == [1]
