"""EmailVerify SDK Client."""

from typing import Any, Dict, List, Optional

import httpx

from ._classifier import Decoder
from ._polling import DEFAULT_MAX_WAIT, DEFAULT_POLL_INTERVAL, wait_for_completion, wait_for_completion_async
from ._retry import execute, execute_async
from ._transport import AsyncTransport, RequestIntent, Transport
from .config import DEFAULT_BASE_URL, DEFAULT_RETRIES, DEFAULT_TIMEOUT, ClientConfig
from .exceptions import DecodeError, ValidationError
from .types import (
    BulkJobResponse,
    BulkResultsResponse,
    CreditsResponse,
    VerifyResponse,
    Webhook,
    webhooks_from_list,
)
from .webhooks import Payload, verify_signature

MAX_BULK_EMAILS = 10000


def _resolve_config(
    config: Optional[ClientConfig],
    api_key: Optional[str],
    base_url: str,
    timeout: float,
    retries: int,
) -> ClientConfig:
    if config is not None:
        return config
    return ClientConfig(api_key=api_key or "", base_url=base_url, timeout=timeout, retries=retries)


def _verify_intent(email: str, smtp_check: bool, timeout: Optional[int]) -> RequestIntent:
    payload: Dict[str, Any] = {"email": email, "smtp_check": smtp_check}
    if timeout is not None:
        payload["timeout"] = timeout
    return RequestIntent("POST", "/verify", json=payload)


def _bulk_intent(emails: List[str], smtp_check: bool, webhook_url: Optional[str]) -> RequestIntent:
    if len(emails) > MAX_BULK_EMAILS:
        raise ValidationError("Maximum 10,000 emails per bulk job")
    payload: Dict[str, Any] = {"emails": list(emails), "smtp_check": smtp_check}
    if webhook_url is not None:
        payload["webhook_url"] = webhook_url
    return RequestIntent("POST", "/verify/bulk", json=payload)


def _results_intent(job_id: str, limit: int, offset: int, status: Optional[str]) -> RequestIntent:
    params: Dict[str, Any] = {"limit": limit, "offset": offset}
    if status:
        params["status"] = status
    return RequestIntent("GET", f"/verify/bulk/{job_id}/results", params=params)


def _webhook_intent(url: str, events: List[str], secret: Optional[str]) -> RequestIntent:
    payload: Dict[str, Any] = {"url": url, "events": list(events)}
    if secret is not None:
        payload["secret"] = secret
    return RequestIntent("POST", "/webhooks", json=payload)


def _require_body(value: Any, intent: RequestIntent, decode: Optional[Decoder], allow_empty: bool) -> Any:
    if value is None and decode is not None and not allow_empty:
        raise DecodeError(f"Empty response body: {intent.describe()}")
    return value


class EmailVerify:
    """EmailVerify API Client.

    Safe to share between threads; each call blocks only its own thread,
    including while it backs off between retries.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        retries: int = DEFAULT_RETRIES,
        *,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """Initialize the EmailVerify client.

        Args:
            api_key: Your EmailVerify API key.
            base_url: API base URL (default: https://api.emailverify.ai/v1).
            timeout: Request timeout in seconds (default: 30).
            retries: Maximum attempts per request, including the first (default: 3).
            config: A ready :class:`ClientConfig`; overrides the arguments above.
            transport: Custom httpx transport, mainly for tests.
        """
        self.config = _resolve_config(config, api_key, base_url, timeout, retries)
        self._transport = Transport(self.config, transport=transport)

    @classmethod
    def from_env(cls, **overrides: Any) -> "EmailVerify":
        """Create a client configured from ``EMAILVERIFY_*`` environment variables."""
        transport = overrides.pop("transport", None)
        return cls(config=ClientConfig.from_env(**overrides), transport=transport)

    def __enter__(self) -> "EmailVerify":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client. Later calls raise ClientClosedError."""
        self._transport.close()

    def _request(self, intent: RequestIntent, decode: Optional[Decoder] = None, allow_empty: bool = False) -> Any:
        value = execute(self._transport.invoke, intent, decode, max_attempts=self.config.retries)
        return _require_body(value, intent, decode, allow_empty)

    def verify(
        self,
        email: str,
        smtp_check: bool = True,
        timeout: Optional[int] = None,
    ) -> VerifyResponse:
        """Verify a single email address.

        Args:
            email: The email address to verify.
            smtp_check: Whether to perform SMTP verification (default: True).
            timeout: Server-side verification timeout in milliseconds.

        Returns:
            VerifyResponse with verification results.
        """
        return self._request(_verify_intent(email, smtp_check, timeout), VerifyResponse.from_dict)

    def verify_bulk(
        self,
        emails: List[str],
        smtp_check: bool = True,
        webhook_url: Optional[str] = None,
    ) -> BulkJobResponse:
        """Submit a bulk verification job.

        Args:
            emails: Email addresses to verify (max 10,000).
            smtp_check: Whether to perform SMTP verification (default: True).
            webhook_url: URL notified when the job finishes.

        Returns:
            BulkJobResponse describing the queued job.

        Raises:
            ValidationError: More than 10,000 emails; nothing is sent.
        """
        return self._request(_bulk_intent(emails, smtp_check, webhook_url), BulkJobResponse.from_dict)

    def get_bulk_job_status(self, job_id: str) -> BulkJobResponse:
        """Get the status of a bulk verification job."""
        return self._request(RequestIntent("GET", f"/verify/bulk/{job_id}"), BulkJobResponse.from_dict)

    def get_bulk_job_results(
        self,
        job_id: str,
        limit: int = 100,
        offset: int = 0,
        status: Optional[str] = None,
    ) -> BulkResultsResponse:
        """Get one page of results of a bulk verification job.

        Args:
            job_id: The bulk job ID.
            limit: Number of results per page (default: 100).
            offset: Starting position (default: 0).
            status: Only return results with this verification status.
        """
        return self._request(_results_intent(job_id, limit, offset, status), BulkResultsResponse.from_dict)

    def wait_for_bulk_job_completion(
        self,
        job_id: str,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        max_wait: float = DEFAULT_MAX_WAIT,
    ) -> BulkJobResponse:
        """Poll until a bulk job is completed or failed.

        Args:
            job_id: The bulk job ID.
            poll_interval: Time between polls in seconds (default: 5).
            max_wait: Maximum wait time in seconds (default: 600).

        Returns:
            The terminal BulkJobResponse.

        Raises:
            TimeoutError: If the job doesn't finish within max_wait.
        """
        return wait_for_completion(self.get_bulk_job_status, job_id, poll_interval, max_wait)

    def get_credits(self) -> CreditsResponse:
        """Get current credit balance."""
        return self._request(RequestIntent("GET", "/credits"), CreditsResponse.from_dict)

    def create_webhook(
        self,
        url: str,
        events: List[str],
        secret: Optional[str] = None,
    ) -> Webhook:
        """Create a new webhook.

        Args:
            url: The webhook URL.
            events: List of events to subscribe to.
            secret: Signing secret; generated by the API when omitted.
        """
        return self._request(_webhook_intent(url, events, secret), Webhook.from_dict)

    def list_webhooks(self) -> List[Webhook]:
        """List all webhooks."""
        return self._request(RequestIntent("GET", "/webhooks"), webhooks_from_list, allow_empty=True) or []

    def delete_webhook(self, webhook_id: str) -> None:
        """Delete a webhook."""
        self._request(RequestIntent("DELETE", f"/webhooks/{webhook_id}"))

    @staticmethod
    def verify_webhook_signature(payload: Payload, signature: Payload, secret: Payload) -> bool:
        """Verify a webhook signature; see :func:`emailverify.webhooks.verify_signature`."""
        return verify_signature(payload, signature, secret)


class AsyncEmailVerify:
    """Async EmailVerify API Client.

    Backoff and polling waits await ``asyncio.sleep``, so other tasks keep
    running; cancelling the task aborts the call.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        retries: int = DEFAULT_RETRIES,
        *,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the async EmailVerify client."""
        self.config = _resolve_config(config, api_key, base_url, timeout, retries)
        self._transport = AsyncTransport(self.config, transport=transport)

    @classmethod
    def from_env(cls, **overrides: Any) -> "AsyncEmailVerify":
        transport = overrides.pop("transport", None)
        return cls(config=ClientConfig.from_env(**overrides), transport=transport)

    async def __aenter__(self) -> "AsyncEmailVerify":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._transport.close()

    async def _request(
        self, intent: RequestIntent, decode: Optional[Decoder] = None, allow_empty: bool = False
    ) -> Any:
        value = await execute_async(self._transport.invoke, intent, decode, max_attempts=self.config.retries)
        return _require_body(value, intent, decode, allow_empty)

    async def verify(
        self,
        email: str,
        smtp_check: bool = True,
        timeout: Optional[int] = None,
    ) -> VerifyResponse:
        """Verify a single email address."""
        return await self._request(_verify_intent(email, smtp_check, timeout), VerifyResponse.from_dict)

    async def verify_bulk(
        self,
        emails: List[str],
        smtp_check: bool = True,
        webhook_url: Optional[str] = None,
    ) -> BulkJobResponse:
        """Submit a bulk verification job (max 10,000 emails)."""
        return await self._request(_bulk_intent(emails, smtp_check, webhook_url), BulkJobResponse.from_dict)

    async def get_bulk_job_status(self, job_id: str) -> BulkJobResponse:
        return await self._request(RequestIntent("GET", f"/verify/bulk/{job_id}"), BulkJobResponse.from_dict)

    async def get_bulk_job_results(
        self,
        job_id: str,
        limit: int = 100,
        offset: int = 0,
        status: Optional[str] = None,
    ) -> BulkResultsResponse:
        """Get one page of results of a bulk verification job."""
        return await self._request(
            _results_intent(job_id, limit, offset, status), BulkResultsResponse.from_dict
        )

    async def wait_for_bulk_job_completion(
        self,
        job_id: str,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        max_wait: float = DEFAULT_MAX_WAIT,
    ) -> BulkJobResponse:
        """Poll until a bulk job is completed or failed."""
        return await wait_for_completion_async(self.get_bulk_job_status, job_id, poll_interval, max_wait)

    async def get_credits(self) -> CreditsResponse:
        """Get current credit balance."""
        return await self._request(RequestIntent("GET", "/credits"), CreditsResponse.from_dict)

    async def create_webhook(
        self,
        url: str,
        events: List[str],
        secret: Optional[str] = None,
    ) -> Webhook:
        """Create a new webhook."""
        return await self._request(_webhook_intent(url, events, secret), Webhook.from_dict)

    async def list_webhooks(self) -> List[Webhook]:
        """List all webhooks."""
        return await self._request(RequestIntent("GET", "/webhooks"), webhooks_from_list, allow_empty=True) or []

    async def delete_webhook(self, webhook_id: str) -> None:
        """Delete a webhook."""
        await self._request(RequestIntent("DELETE", f"/webhooks/{webhook_id}"))

    @staticmethod
    def verify_webhook_signature(payload: Payload, signature: Payload, secret: Payload) -> bool:
        """Verify a webhook signature."""
        return verify_signature(payload, signature, secret)
