"""Async example for EmailVerify SDK.

This example demonstrates async/await usage with the AsyncEmailVerify client:
- Async single email verification
- Concurrent verification of multiple emails
- Async bulk job submission and polling
- Async context manager usage
"""

import asyncio
import os
from typing import List

from emailverify import (
    AsyncEmailVerify,
    AuthenticationError,
    EmailVerifyError,
    TimeoutError,
    VerifyResponse,
)

# Get API key from environment variable
API_KEY = os.getenv("EMAILVERIFY_API_KEY", "your-api-key")


async def single_verification_example():
    """Async single email verification."""
    print("=" * 50)
    print("Async Single Email Verification")
    print("=" * 50)

    async with AsyncEmailVerify(api_key=API_KEY) as client:
        try:
            result = await client.verify("test@example.com", smtp_check=True)

            print(f"Email: {result.email}")
            print(f"Status: {result.status}")
            print(f"Score: {result.score}")
            print(f"Deliverable: {result.result.deliverable}")

        except AuthenticationError:
            print("Error: Invalid API key")


async def concurrent_verification_example(emails: List[str]):
    """Verify several emails at once over one connection pool."""
    print("\n" + "=" * 50)
    print("Concurrent Verification")
    print("=" * 50)

    async with AsyncEmailVerify(api_key=API_KEY) as client:
        outcomes = await asyncio.gather(
            *(client.verify(email) for email in emails),
            return_exceptions=True,
        )

    for email, outcome in zip(emails, outcomes):
        if isinstance(outcome, VerifyResponse):
            print(f"{email}: {outcome.status} ({outcome.score})")
        elif isinstance(outcome, EmailVerifyError):
            print(f"{email}: failed - {outcome}")
        else:
            raise outcome


async def bulk_job_example(emails: List[str]):
    """Submit a bulk job and wait for it without blocking the event loop."""
    print("\n" + "=" * 50)
    print("Async Bulk Job")
    print("=" * 50)

    async with AsyncEmailVerify(api_key=API_KEY) as client:
        job = await client.verify_bulk(emails)
        print(f"Submitted job {job.job_id} ({job.total} emails)")

        try:
            job = await client.wait_for_bulk_job_completion(job.job_id, poll_interval=2.0, max_wait=120.0)
        except TimeoutError:
            print("Job did not finish in time")
            return

        page = await client.get_bulk_job_results(job.job_id, limit=50)
        print(f"Job {job.status}: {len(page.results)} of {page.total} results fetched")


async def main():
    emails = ["john@example.com", "jane@company.org", "support@example.com"]

    await single_verification_example()
    await concurrent_verification_example(emails)
    await bulk_job_example(emails)


if __name__ == "__main__":
    asyncio.run(main())
