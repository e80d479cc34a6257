"""EmailVerify client configuration."""

import os
from dataclasses import dataclass
from typing import Any, Optional

from .exceptions import AuthenticationError, ValidationError

DEFAULT_BASE_URL = "https://api.emailverify.ai/v1"
DEFAULT_TIMEOUT = 30.0
DEFAULT_RETRIES = 3

ENV_API_KEY = "EMAILVERIFY_API_KEY"
ENV_BASE_URL = "EMAILVERIFY_BASE_URL"
ENV_TIMEOUT = "EMAILVERIFY_TIMEOUT"
ENV_RETRIES = "EMAILVERIFY_RETRIES"


@dataclass(frozen=True)
class ClientConfig:
    """Validated settings shared by :class:`EmailVerify` and :class:`AsyncEmailVerify`.

    Attributes:
        api_key: Your EmailVerify API key.
        base_url: API base URL, without trailing slash.
        timeout: Request timeout in seconds.
        retries: Maximum attempts per call, including the first one.
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    retries: int = DEFAULT_RETRIES

    def __post_init__(self) -> None:
        if not self.api_key:
            raise AuthenticationError("API key is required")
        if not self.base_url:
            raise ValidationError("Base URL is required")
        if self.timeout <= 0:
            raise ValidationError(f"Timeout must be positive, got {self.timeout}")
        if self.retries < 1:
            raise ValidationError(f"Retries must be at least 1, got {self.retries}")
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))

    def __repr__(self) -> str:
        return (
            f"ClientConfig(api_key='***', base_url={self.base_url!r}, "
            f"timeout={self.timeout!r}, retries={self.retries!r})"
        )

    @classmethod
    def from_env(cls, **overrides: Any) -> "ClientConfig":
        """Build a configuration from ``EMAILVERIFY_*`` environment variables.

        Keyword arguments take precedence over the environment.
        """
        values = {
            "api_key": os.getenv(ENV_API_KEY, ""),
            "base_url": os.getenv(ENV_BASE_URL, DEFAULT_BASE_URL),
            "timeout": _env_number(ENV_TIMEOUT, float, DEFAULT_TIMEOUT),
            "retries": _env_number(ENV_RETRIES, int, DEFAULT_RETRIES),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def _env_number(name: str, kind: Any, default: Any) -> Any:
    raw: Optional[str] = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return kind(raw)
    except ValueError:
        raise ValidationError(f"{name} must be a number, got {raw!r}") from None
