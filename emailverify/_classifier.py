"""Map an HTTP status and body onto a success value, a retry, or a fatal error."""

import enum
import json
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional, Tuple, Union

import httpx

from .exceptions import EmailVerifyError, ErrorKind, build_error

Decoder = Callable[[Any], Any]

RETRYABLE_SERVER_STATUSES = frozenset({500, 502, 503})
UNKNOWN_ERROR = "UNKNOWN_ERROR"


class RetryReason(str, enum.Enum):
    RATE_LIMIT = "rate_limit"
    SERVER_ERROR = "server_error"


@dataclass(frozen=True)
class Success:
    value: Any = None


@dataclass(frozen=True)
class Fatal:
    kind: ErrorKind
    message: str
    code: Optional[str] = None
    status_code: Optional[int] = None
    details: Any = None
    retry_after: int = 0

    def to_error(self) -> EmailVerifyError:
        return build_error(
            self.kind,
            self.message,
            code=self.code,
            status_code=self.status_code,
            details=self.details,
            retry_after=self.retry_after,
        )


@dataclass(frozen=True)
class Retryable:
    """A transient failure; ``exhausted`` is raised once the retry budget is spent."""

    wait: Optional[int]
    reason: RetryReason
    exhausted: Fatal


Outcome = Union[Success, Retryable, Fatal]


def parse_retry_after(headers: Mapping[str, str]) -> Optional[int]:
    """Return the ``Retry-After`` delay in whole seconds, or None if absent or unusable."""
    raw = httpx.Headers(headers).get("Retry-After")
    if raw is None:
        return None
    try:
        seconds = int(raw.strip())
    except ValueError:
        # HTTP-date form is not used by the API
        return None
    return seconds if seconds > 0 else None


def parse_error_envelope(body: bytes, reason_phrase: str) -> Tuple[str, str, Any]:
    """Extract ``(message, code, details)`` from ``{"error": {...}}``.

    A missing or malformed envelope falls back to the reason phrase and
    ``UNKNOWN_ERROR``.
    """
    try:
        data = json.loads(body)
    except ValueError:
        return reason_phrase, UNKNOWN_ERROR, None
    error = data.get("error") if isinstance(data, dict) else None
    if not isinstance(error, dict):
        return reason_phrase, UNKNOWN_ERROR, None
    message = error.get("message") or reason_phrase
    code = error.get("code") or UNKNOWN_ERROR
    return str(message), str(code), error.get("details")


def _decode_success(status: int, body: bytes, decode: Optional[Decoder]) -> Outcome:
    try:
        data = json.loads(body)
    except ValueError as e:
        return Fatal(ErrorKind.DECODE, f"Malformed response body: {e}", status_code=status)
    # API wrapper response {success, code, message, data}
    if isinstance(data, dict) and "data" in data:
        data = data["data"]
    if decode is None:
        return Success(data)
    try:
        return Success(decode(data))
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        return Fatal(
            ErrorKind.DECODE,
            f"Unexpected response shape: {type(e).__name__}: {e}",
            status_code=status,
        )


def classify(
    status: int,
    body: bytes,
    headers: Mapping[str, str],
    reason_phrase: Optional[str] = None,
    decode: Optional[Decoder] = None,
) -> Outcome:
    """Classify one response.

    Pure function of its inputs: the same response always yields an equal outcome.
    """
    if status == 204:
        return Success(None)

    if 200 <= status < 300:
        if not body or not body.strip():
            return Success(None)
        return _decode_success(status, body, decode)

    reason = reason_phrase or httpx.codes.get_reason_phrase(status) or "HTTP error"
    message, code, details = parse_error_envelope(body, reason)

    if status == 401:
        return Fatal(ErrorKind.AUTHENTICATION, message)

    if status == 403:
        if code == "INSUFFICIENT_CREDITS":
            return Fatal(ErrorKind.INSUFFICIENT_CREDITS, message)
        return Fatal(ErrorKind.API, message, code, 403)

    if status == 404:
        return Fatal(ErrorKind.NOT_FOUND, message)

    if status == 400:
        return Fatal(ErrorKind.VALIDATION, message, details=details)

    if status == 429:
        retry_after = parse_retry_after(headers)
        return Retryable(
            wait=retry_after,
            reason=RetryReason.RATE_LIMIT,
            exhausted=Fatal(ErrorKind.RATE_LIMIT, message, retry_after=retry_after or 0),
        )

    if status in RETRYABLE_SERVER_STATUSES:
        return Retryable(
            wait=None,
            reason=RetryReason.SERVER_ERROR,
            exhausted=Fatal(ErrorKind.API, message, code, status, details),
        )

    return Fatal(ErrorKind.API, message, code, status, details)
