"""Basic usage examples for EmailVerify SDK.

This example demonstrates:
- Single email verification using verify()
- Getting credits with get_credits()
- Handling the SDK errors
"""

import logging
import os

from emailverify import (
    AuthenticationError,
    EmailVerify,
    InsufficientCreditsError,
    NetworkError,
    RateLimitError,
    ValidationError,
)

# Get API key from environment variable
API_KEY = os.getenv("EMAILVERIFY_API_KEY", "your-api-key")


def single_email_verification():
    """Verify a single email address."""
    print("=" * 50)
    print("Single Email Verification")
    print("=" * 50)

    client = EmailVerify(api_key=API_KEY)

    try:
        result = client.verify(
            email="test@example.com",
            smtp_check=True,  # Optional: perform SMTP verification
            timeout=5000,  # Optional: server-side timeout in milliseconds
        )

        print(f"Email: {result.email}")
        print(f"Status: {result.status}")  # valid, invalid, unknown, risky, disposable, catchall, role
        print(f"Score: {result.score}")
        print(f"Deliverable: {result.result.deliverable}")
        print(f"Valid format: {result.result.valid_format}")
        print(f"Valid MX: {result.result.valid_mx}")
        print(f"Disposable: {result.result.disposable}")
        print(f"Role: {result.result.role}")
        print(f"Catchall: {result.result.catchall}")
        print(f"Free provider: {result.result.free}")
        print(f"SMTP valid: {result.result.smtp_valid}")
        print(f"Credits Used: {result.credits_used}")

        if result.reason:
            print(f"Reason: {result.reason}")

    except AuthenticationError:
        print("Error: Invalid API key")
    except ValidationError as e:
        print(f"Error: Invalid input - {e.message}")
    except InsufficientCreditsError:
        print("Error: Not enough credits")
    except RateLimitError as e:
        print(f"Error: Rate limited, retry after {e.retry_after}s")
    except NetworkError as e:
        print(f"Error: {e.message}")

    finally:
        client.close()


def check_credits():
    """Get current credit balance."""
    print("\n" + "=" * 50)
    print("Credits")
    print("=" * 50)

    # Using context manager for automatic cleanup
    with EmailVerify(api_key=API_KEY) as client:
        credits = client.get_credits()

        print(f"Plan: {credits.plan}")
        print(f"Available: {credits.available} of {credits.total}")
        print(f"Used: {credits.used}")
        if credits.resets_at:
            print(f"Resets at: {credits.resets_at}")
        if credits.rate_limit:
            print(
                f"Rate limit: {credits.rate_limit.remaining}/"
                f"{credits.rate_limit.requests_per_hour} requests left this hour"
            )


def configured_from_environment():
    """Build the client from EMAILVERIFY_* environment variables."""
    print("\n" + "=" * 50)
    print("Configuration from Environment")
    print("=" * 50)

    # Reads EMAILVERIFY_API_KEY, EMAILVERIFY_BASE_URL, EMAILVERIFY_TIMEOUT, EMAILVERIFY_RETRIES
    with EmailVerify.from_env(retries=5) as client:
        print(f"Base URL: {client.config.base_url}")
        print(f"Timeout: {client.config.timeout}s")
        print(f"Attempts per request: {client.config.retries}")


if __name__ == "__main__":
    # Show retries and backoff decisions
    logging.basicConfig(level=logging.INFO)

    single_email_verification()
    check_credits()
    configured_from_environment()
