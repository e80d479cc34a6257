"""Bounded retry loop around transport invocation and response classification."""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional

from ._classifier import Decoder, Fatal, Outcome, Retryable, Success, classify
from ._transport import RequestIntent, TransportResult

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
BACKOFF_BASE = 2

Send = Callable[[RequestIntent], TransportResult]
AsyncSend = Callable[[RequestIntent], Awaitable[TransportResult]]


def backoff_delay(attempt: int, wait_hint: Optional[int] = None) -> float:
    """Seconds to wait after failed ``attempt`` (1-based): the server hint, else 2**attempt."""
    if wait_hint:
        return float(wait_hint)
    return float(BACKOFF_BASE ** attempt)


def _check_attempts(max_attempts: Optional[int]) -> int:
    if max_attempts is None:
        return DEFAULT_MAX_ATTEMPTS
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
    return max_attempts


def _outcome(result: TransportResult, decode: Optional[Decoder]) -> Outcome:
    return classify(
        result.status_code,
        result.body,
        result.headers,
        reason_phrase=result.reason_phrase,
        decode=decode,
    )


def _next_delay(intent: RequestIntent, outcome: Retryable, attempt: int, max_attempts: int) -> float:
    """Delay before the next attempt; raises the exhausted error when none is left."""
    if attempt >= max_attempts:
        logger.warning(
            "%s: giving up after %d attempt(s) (%s)",
            intent.describe(),
            attempt,
            outcome.reason.value,
        )
        raise outcome.exhausted.to_error()
    delay = backoff_delay(attempt, outcome.wait)
    logger.info(
        "%s: %s on attempt %d/%d, retrying in %.0fs",
        intent.describe(),
        outcome.reason.value,
        attempt,
        max_attempts,
        delay,
    )
    return delay


def execute(
    send: Send,
    intent: RequestIntent,
    decode: Optional[Decoder] = None,
    max_attempts: Optional[int] = DEFAULT_MAX_ATTEMPTS,
    sleep: Optional[Callable[[float], Any]] = None,
) -> Any:
    """Send ``intent`` until it succeeds, fails fatally, or runs out of attempts.

    Args:
        send: Performs one HTTP exchange.
        intent: The request to send.
        decode: Turns the JSON payload of a success into the result type.
        max_attempts: Attempt budget including the first one (default: 3).
        sleep: Blocking sleep used between attempts (default: ``time.sleep``).

    Returns:
        The decoded value, or None for an empty success.

    Raises:
        EmailVerifyError: The fatal error for the last response.
    """
    max_attempts = _check_attempts(max_attempts)
    if sleep is None:
        sleep = time.sleep

    attempt = 1
    while True:
        outcome = _outcome(send(intent), decode)
        if isinstance(outcome, Success):
            return outcome.value
        if isinstance(outcome, Fatal):
            raise outcome.to_error()
        sleep(_next_delay(intent, outcome, attempt, max_attempts))
        attempt += 1


async def execute_async(
    send: AsyncSend,
    intent: RequestIntent,
    decode: Optional[Decoder] = None,
    max_attempts: Optional[int] = DEFAULT_MAX_ATTEMPTS,
    sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
) -> Any:
    """Async counterpart of :func:`execute`; waits with ``asyncio.sleep``."""
    max_attempts = _check_attempts(max_attempts)
    if sleep is None:
        sleep = asyncio.sleep

    attempt = 1
    while True:
        outcome = _outcome(await send(intent), decode)
        if isinstance(outcome, Success):
            return outcome.value
        if isinstance(outcome, Fatal):
            raise outcome.to_error()
        await sleep(_next_delay(intent, outcome, attempt, max_attempts))
        attempt += 1
