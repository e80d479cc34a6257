"""EmailVerify SDK Exceptions."""

import enum
from typing import Any, Dict, Optional, Type


class ErrorKind(str, enum.Enum):
    """Closed set of failure kinds raised by the SDK."""

    NETWORK = "network"
    AUTHENTICATION = "authentication"
    INSUFFICIENT_CREDITS = "insufficient_credits"
    API = "api"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    RATE_LIMIT = "rate_limit"
    DECODE = "decode"
    TIMEOUT = "timeout"
    UNSUPPORTED_METHOD = "unsupported_method"
    CLIENT_CLOSED = "client_closed"


class EmailVerifyError(Exception):
    """Base exception for all EmailVerify errors.

    Every error carries its ``kind`` together with the API error ``code``,
    the HTTP ``status_code`` (0 when no response was received) and optional
    ``details`` from the error envelope.
    """

    kind: ErrorKind = ErrorKind.API
    default_code = "UNKNOWN_ERROR"
    default_status = 0

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if code is not None else self.default_code
        self.status_code = status_code if status_code is not None else self.default_status
        self.details = details

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, code={self.code!r}, "
            f"status_code={self.status_code!r})"
        )


class NetworkError(EmailVerifyError):
    """The request never produced a response (connect failure, timeout, reset)."""

    kind = ErrorKind.NETWORK
    default_code = "NETWORK_ERROR"


class AuthenticationError(EmailVerifyError):
    """Invalid or missing API key."""

    kind = ErrorKind.AUTHENTICATION
    default_code = "INVALID_API_KEY"
    default_status = 401

    def __init__(self, message: str = "Invalid or missing API key") -> None:
        super().__init__(message)


class InsufficientCreditsError(EmailVerifyError):
    """Not enough credits for the operation."""

    kind = ErrorKind.INSUFFICIENT_CREDITS
    default_code = "INSUFFICIENT_CREDITS"
    default_status = 403

    def __init__(self, message: str = "Insufficient credits") -> None:
        super().__init__(message)


class NotFoundError(EmailVerifyError):
    """Resource not found."""

    kind = ErrorKind.NOT_FOUND
    default_code = "NOT_FOUND"
    default_status = 404

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message)


class ValidationError(EmailVerifyError):
    """Invalid request, rejected by the API or before sending it."""

    kind = ErrorKind.VALIDATION
    default_code = "INVALID_REQUEST"
    default_status = 400

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message, details=details)


class RateLimitError(EmailVerifyError):
    """Rate limit exceeded and the retry budget is spent."""

    kind = ErrorKind.RATE_LIMIT
    default_code = "RATE_LIMIT_EXCEEDED"
    default_status = 429

    def __init__(self, message: str = "Rate limit exceeded", retry_after: int = 0) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class DecodeError(EmailVerifyError):
    """A successful response body could not be decoded."""

    kind = ErrorKind.DECODE
    default_code = "DECODE_ERROR"


class TimeoutError(EmailVerifyError):
    """Operation did not finish in time."""

    kind = ErrorKind.TIMEOUT
    default_code = "TIMEOUT"
    default_status = 504

    def __init__(self, message: str = "Request timed out") -> None:
        super().__init__(message)


class UnsupportedMethodError(EmailVerifyError, ValueError):
    """HTTP method (or method/body combination) the transport does not send."""

    kind = ErrorKind.UNSUPPORTED_METHOD
    default_code = "UNSUPPORTED_METHOD"


class ClientClosedError(EmailVerifyError):
    """The client was used after ``close()``."""

    kind = ErrorKind.CLIENT_CLOSED
    default_code = "CLIENT_CLOSED"

    def __init__(self, message: str = "Client has been closed") -> None:
        super().__init__(message)


ERROR_TYPES: Dict[ErrorKind, Type[EmailVerifyError]] = {
    ErrorKind.NETWORK: NetworkError,
    ErrorKind.AUTHENTICATION: AuthenticationError,
    ErrorKind.INSUFFICIENT_CREDITS: InsufficientCreditsError,
    ErrorKind.API: EmailVerifyError,
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.VALIDATION: ValidationError,
    ErrorKind.RATE_LIMIT: RateLimitError,
    ErrorKind.DECODE: DecodeError,
    ErrorKind.TIMEOUT: TimeoutError,
    ErrorKind.UNSUPPORTED_METHOD: UnsupportedMethodError,
    ErrorKind.CLIENT_CLOSED: ClientClosedError,
}


def build_error(
    kind: ErrorKind,
    message: str,
    code: Optional[str] = None,
    status_code: Optional[int] = None,
    details: Any = None,
    retry_after: int = 0,
) -> EmailVerifyError:
    """Create the exception for ``kind``, keeping code, status and details."""
    error_type = ERROR_TYPES[kind]
    if error_type is EmailVerifyError:
        return EmailVerifyError(message, code, status_code, details)
    if error_type is RateLimitError:
        error: EmailVerifyError = RateLimitError(message, retry_after)
    else:
        error = error_type(message)
    if code is not None:
        error.code = code
    if status_code is not None:
        error.status_code = status_code
    if details is not None:
        error.details = details
    return error
