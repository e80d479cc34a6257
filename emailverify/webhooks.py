"""Webhook signature helpers.

EmailVerify signs every webhook delivery with the secret of the webhook and
sends the result in the signature header as ``sha256=<hex digest>``::

    from emailverify.webhooks import verify_signature

    if not verify_signature(request.body, request.headers["X-EmailVerify-Signature"], secret):
        return 401
"""

import hashlib
import hmac
from typing import Union

SIGNATURE_PREFIX = "sha256="

Payload = Union[str, bytes]


def _as_bytes(value: Payload) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode("utf-8")


def compute_signature(payload: Payload, secret: Payload) -> str:
    """Return the signature header value for ``payload``."""
    digest = hmac.new(_as_bytes(secret), _as_bytes(payload), hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def verify_signature(payload: Payload, signature: Payload, secret: Payload) -> bool:
    """Check a webhook signature in constant time.

    Args:
        payload: The raw request body, exactly as received.
        signature: The signature from the request header.
        secret: Your webhook secret.

    Returns:
        True if the signature matches. Never raises; unusable input is False.
    """
    try:
        expected = compute_signature(payload, secret).encode("ascii")
        return hmac.compare_digest(_as_bytes(signature), expected)
    except (TypeError, ValueError, AttributeError):
        return False
