"""Poll a bulk job until it reaches a terminal state or the deadline passes."""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, Optional

from .exceptions import DecodeError, TimeoutError, ValidationError
from .types import JOB_STATUS_ORDER, BulkJobResponse

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 5.0
DEFAULT_MAX_WAIT = 600.0

Clock = Callable[[], float]


def _check_intervals(poll_interval: float, max_wait: float) -> None:
    if poll_interval <= 0:
        raise ValidationError(f"poll_interval must be positive, got {poll_interval}")
    if max_wait < 0:
        raise ValidationError(f"max_wait must not be negative, got {max_wait}")


class _Progress:
    """Tracks the last seen lifecycle state of one job."""

    def __init__(self, job_id: str) -> None:
        self.job_id = job_id
        self.polls = 0
        self._rank = -1

    def observe(self, snapshot: Optional[BulkJobResponse]) -> bool:
        """Record a snapshot; returns True when it is terminal."""
        if snapshot is None:
            raise DecodeError(f"Bulk job {self.job_id}: status response had no body")
        self.polls += 1
        rank = JOB_STATUS_ORDER.get(snapshot.status, -1)
        if rank < self._rank:
            logger.warning(
                "Bulk job %s went back to %r after a later state",
                self.job_id,
                snapshot.status,
            )
        self._rank = max(self._rank, rank)
        logger.debug(
            "Bulk job %s poll %d: %s (%s/%s)",
            self.job_id,
            self.polls,
            snapshot.status,
            snapshot.processed,
            snapshot.total,
        )
        return snapshot.is_terminal

    def timeout(self, max_wait: float) -> TimeoutError:
        return TimeoutError(f"Bulk job {self.job_id} did not complete within {max_wait:g} seconds")


def wait_for_completion(
    fetch: Callable[[str], BulkJobResponse],
    job_id: str,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    max_wait: float = DEFAULT_MAX_WAIT,
    sleep: Optional[Callable[[float], Any]] = None,
    clock: Optional[Clock] = None,
) -> BulkJobResponse:
    """Fetch job status every ``poll_interval`` seconds until completed or failed.

    Raises:
        TimeoutError: No terminal status within ``max_wait`` seconds.
    """
    _check_intervals(poll_interval, max_wait)
    if sleep is None:
        sleep = time.sleep
    if clock is None:
        clock = time.monotonic

    progress = _Progress(job_id)
    start = clock()
    while clock() - start < max_wait:
        snapshot = fetch(job_id)
        if progress.observe(snapshot):
            return snapshot
        sleep(poll_interval)

    raise progress.timeout(max_wait)


async def wait_for_completion_async(
    fetch: Callable[[str], Awaitable[BulkJobResponse]],
    job_id: str,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    max_wait: float = DEFAULT_MAX_WAIT,
    sleep: Optional[Callable[[float], Awaitable[Any]]] = None,
    clock: Optional[Clock] = None,
) -> BulkJobResponse:
    """Async counterpart of :func:`wait_for_completion`."""
    _check_intervals(poll_interval, max_wait)
    if sleep is None:
        sleep = asyncio.sleep
    if clock is None:
        clock = time.monotonic

    progress = _Progress(job_id)
    start = clock()
    while clock() - start < max_wait:
        snapshot = await fetch(job_id)
        if progress.observe(snapshot):
            return snapshot
        await sleep(poll_interval)

    raise progress.timeout(max_wait)
