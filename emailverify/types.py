"""EmailVerify SDK Types."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional


VerificationStatus = Literal["valid", "invalid", "unknown", "risky", "disposable", "catchall", "role"]
JobStatus = Literal["queued", "processing", "completed", "failed"]
WebhookEvent = Literal["verification.completed", "bulk.completed", "bulk.failed"]

TERMINAL_JOB_STATUSES = frozenset({"completed", "failed"})

# Position of each lifecycle state; a job only moves forward.
JOB_STATUS_ORDER: Dict[str, int] = {
    "queued": 0,
    "processing": 1,
    "completed": 2,
    "failed": 2,
}


@dataclass(frozen=True)
class VerificationResult:
    """Individual checks behind a verification verdict."""

    deliverable: bool = False
    valid_format: bool = False
    valid_domain: bool = False
    valid_mx: bool = False
    disposable: bool = False
    role: bool = False
    catchall: bool = False
    free: bool = False
    smtp_valid: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "VerificationResult":
        data = data or {}
        return cls(
            deliverable=bool(data.get("deliverable", False)),
            valid_format=bool(data.get("valid_format", False)),
            valid_domain=bool(data.get("valid_domain", False)),
            valid_mx=bool(data.get("valid_mx", False)),
            disposable=bool(data.get("disposable", False)),
            role=bool(data.get("role", False)),
            catchall=bool(data.get("catchall", False)),
            free=bool(data.get("free", False)),
            smtp_valid=bool(data.get("smtp_valid", False)),
        )


@dataclass(frozen=True)
class VerifyResponse:
    """Response from single email verification."""

    email: str
    status: VerificationStatus
    result: VerificationResult
    score: float = 0.0
    reason: Optional[str] = None
    credits_used: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VerifyResponse":
        return cls(
            email=data["email"],
            status=data["status"],
            result=VerificationResult.from_dict(data.get("result")),
            score=float(data.get("score") or 0.0),
            reason=data.get("reason"),
            credits_used=int(data.get("credits_used") or 0),
        )


@dataclass(frozen=True)
class BulkJobResponse:
    """Snapshot of a bulk verification job."""

    job_id: str
    status: JobStatus
    total: int = 0
    processed: int = 0
    valid: int = 0
    invalid: int = 0
    unknown: int = 0
    credits_used: int = 0
    created_at: Optional[str] = None
    completed_at: Optional[str] = None
    progress_percent: Optional[int] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_JOB_STATUSES

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BulkJobResponse":
        return cls(
            job_id=data["job_id"],
            status=data["status"],
            total=int(data.get("total") or 0),
            processed=int(data.get("processed") or 0),
            valid=int(data.get("valid") or 0),
            invalid=int(data.get("invalid") or 0),
            unknown=int(data.get("unknown") or 0),
            credits_used=int(data.get("credits_used") or 0),
            created_at=data.get("created_at"),
            completed_at=data.get("completed_at"),
            progress_percent=data.get("progress_percent"),
        )


@dataclass(frozen=True)
class BulkResultItem:
    """Single result item from a bulk job."""

    email: str
    status: VerificationStatus
    score: float = 0.0
    result: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BulkResultItem":
        return cls(
            email=data["email"],
            status=data["status"],
            score=float(data.get("score") or 0.0),
            result=dict(data.get("result") or {}),
        )


@dataclass(frozen=True)
class BulkResultsResponse:
    """One page of bulk job results."""

    job_id: str
    total: int = 0
    limit: int = 0
    offset: int = 0
    results: List[BulkResultItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BulkResultsResponse":
        return cls(
            job_id=data["job_id"],
            total=int(data.get("total") or 0),
            limit=int(data.get("limit") or 0),
            offset=int(data.get("offset") or 0),
            results=[BulkResultItem.from_dict(item) for item in data.get("results") or []],
        )


@dataclass(frozen=True)
class RateLimit:
    """Hourly request allowance."""

    requests_per_hour: int = 0
    remaining: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RateLimit":
        return cls(
            requests_per_hour=int(data.get("requests_per_hour") or 0),
            remaining=int(data.get("remaining") or 0),
        )


@dataclass(frozen=True)
class CreditsResponse:
    """Response from credits endpoint."""

    available: int = 0
    used: int = 0
    total: int = 0
    plan: Optional[str] = None
    resets_at: Optional[str] = None
    rate_limit: Optional[RateLimit] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CreditsResponse":
        rate_limit = data.get("rate_limit")
        return cls(
            available=int(data.get("available") or 0),
            used=int(data.get("used") or 0),
            total=int(data.get("total") or 0),
            plan=data.get("plan"),
            resets_at=data.get("resets_at"),
            rate_limit=RateLimit.from_dict(rate_limit) if rate_limit else None,
        )


@dataclass(frozen=True)
class Webhook:
    """Webhook configuration."""

    id: str
    url: str
    events: List[str] = field(default_factory=list)
    created_at: Optional[str] = None
    secret: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Webhook":
        return cls(
            id=data["id"],
            url=data["url"],
            events=list(data.get("events") or []),
            created_at=data.get("created_at"),
            secret=data.get("secret"),
        )


def webhooks_from_list(data: List[Dict[str, Any]]) -> List[Webhook]:
    """Decode the list returned by ``GET /webhooks``."""
    return [Webhook.from_dict(item) for item in data]
