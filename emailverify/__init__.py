"""EmailVerify Python SDK for email verification."""

import logging

from .client import MAX_BULK_EMAILS, AsyncEmailVerify, EmailVerify
from .config import ClientConfig
from .exceptions import (
    AuthenticationError,
    ClientClosedError,
    DecodeError,
    EmailVerifyError,
    ErrorKind,
    InsufficientCreditsError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    TimeoutError,
    UnsupportedMethodError,
    ValidationError,
)
from .types import (
    BulkJobResponse,
    BulkResultItem,
    BulkResultsResponse,
    CreditsResponse,
    JobStatus,
    RateLimit,
    VerificationResult,
    VerificationStatus,
    VerifyResponse,
    Webhook,
    WebhookEvent,
)
from .webhooks import compute_signature, verify_signature

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Clients
    "EmailVerify",
    "AsyncEmailVerify",
    "ClientConfig",
    "MAX_BULK_EMAILS",
    # Types
    "VerifyResponse",
    "VerificationResult",
    "VerificationStatus",
    "BulkJobResponse",
    "BulkResultItem",
    "BulkResultsResponse",
    "CreditsResponse",
    "RateLimit",
    "JobStatus",
    "Webhook",
    "WebhookEvent",
    # Webhooks
    "compute_signature",
    "verify_signature",
    # Exceptions
    "ErrorKind",
    "EmailVerifyError",
    "NetworkError",
    "AuthenticationError",
    "RateLimitError",
    "ValidationError",
    "InsufficientCreditsError",
    "NotFoundError",
    "DecodeError",
    "TimeoutError",
    "UnsupportedMethodError",
    "ClientClosedError",
]
